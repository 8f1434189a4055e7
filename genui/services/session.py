"""
StreamSession — one generation turn's worth of streaming state.

Owns the parser, the current tree, the runtime value store and the action
handler map, and closes the loop between them:

  model text → parser → (emoji strip) → apply_patch → tree
  user action → dispatch_action → result → patches applied back to the tree

The kernel modules stay pure; this is where state lives.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from genui.config import settings
from genui.kernel.actions import create_handler_map, dispatch_action, process_action_result
from genui.kernel.graders import GradeReport, grade_composition, grade_tree
from genui.kernel.jsx import tree_to_jsx
from genui.kernel.normalizer import normalize_tree
from genui.kernel.patches import apply_patch
from genui.kernel.text import sanitize_patch
from genui.kernel.types import (
    ActionEvent,
    ActionHandler,
    ActionResult,
    ActionResultCallbacks,
    PatchResult,
    empty_tree,
)
from genui.kernel.values import RuntimeValueStore
from genui.services.jsonl_parser import JSONLParser

logger = logging.getLogger(__name__)


class StreamSession:
    def __init__(
        self,
        handlers: Mapping[str, ActionHandler] | None = None,
        store: RuntimeValueStore | None = None,
        strip_emoji: bool | None = None,
    ) -> None:
        self.handlers = create_handler_map(handlers)
        self.store = store if store is not None else RuntimeValueStore()
        self.strip_emoji = settings.STRIP_LEADING_EMOJI if strip_emoji is None else strip_emoji
        self.parser = JSONLParser()
        self._tree: dict[str, Any] = empty_tree()
        self.applied = 0

    @property
    def tree(self) -> dict[str, Any]:
        return self._tree

    # -- Streaming --------------------------------------------------------

    def begin_turn(self) -> None:
        """Start a new generation: empty tree, empty buffer, cleared values."""
        self._tree = empty_tree()
        self.parser.reset()
        self.store.clear()
        self.applied = 0

    def push(self, chunk: str) -> list[dict]:
        """Feed a chunk; apply and return the ops from completed lines."""
        return self.apply(self.parser.push(chunk))

    def flush(self) -> list[dict]:
        """End of stream: apply and return the op from any trailing line."""
        return self.apply(self.parser.flush())

    def apply(self, ops: list[dict]) -> list[dict]:
        applied: list[dict] = []
        for op in ops:
            if self.strip_emoji:
                op = sanitize_patch(op)
            self._tree = apply_patch(self._tree, op)
            applied.append(op)
        self.applied += len(applied)
        return applied

    # -- Reading ----------------------------------------------------------

    def render_tree(self) -> dict[str, Any]:
        """The tree as the renderer should display it."""
        return normalize_tree(self._tree)

    def to_jsx(self, component_name: str | None = None) -> str:
        return tree_to_jsx(self._tree, component_name=component_name)

    def grade(self) -> tuple[GradeReport, GradeReport]:
        return grade_tree(self._tree), grade_composition(self._tree)

    # -- Actions ----------------------------------------------------------

    def dispatch(self, event: ActionEvent) -> ActionResult | None:
        return dispatch_action(self.handlers, event, self._tree, store=self.store)

    def handle_action(
        self, event: ActionEvent, callbacks: ActionResultCallbacks | None = None
    ) -> ActionResult | None:
        """
        Dispatch and process an action.

        Patch results are applied to this session's tree before any host
        apply_patches callback sees them. Without callbacks, message and
        external results are returned for the caller to handle.
        """
        result = self.dispatch(event)
        if result is None:
            logger.debug("handle_action: %r from %r produced no result", event.action_name, event.source_key)
            return None
        if isinstance(result, PatchResult):
            for op in result.patches:
                self._tree = apply_patch(self._tree, op)
        if callbacks is not None:
            process_action_result(result, callbacks)
        return result


def build_tree(jsonl: str) -> dict[str, Any]:
    """Build a tree from a complete JSONL string, as the stream would."""
    parser = JSONLParser()
    tree = empty_tree()
    for op in [*parser.push(jsonl), *parser.flush()]:
        tree = apply_patch(tree, op)
    return tree
