"""
genui Kernel — Patch Engine

Pure function: (tree, op) → tree

Applies the add / replace / remove subset of RFC 6902 to a UI tree.
Paths are JSON Pointers (RFC 6901). The engine never raises and never
mutates its input: containers along the patched path are copied, every
other subtree is shared with the input tree.

Return contract:
  - path segment __proto__ / constructor / prototype → the SAME tree object
  - op that cannot apply (missing target, bad index) → shallow copy, unchanged
  - otherwise → new tree with the op applied
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from genui.kernel.types import PATCH_OPS

logger = logging.getLogger(__name__)

# Segments rejected outright; hosts that map trees onto prototype-based
# objects would otherwise be open to pointer injection.
BLOCKED_SEGMENTS: frozenset[str] = frozenset({"__proto__", "constructor", "prototype"})

_NOOP = object()

# ASCII array index per RFC 6901; no leading zeros.
_INDEX_RE = re.compile(r"^(?:0|[1-9][0-9]*)\Z")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_path(path: str) -> list[str]:
    """
    Split a JSON Pointer into decoded segments.

    "" and "/" both address the document itself and yield [].
    """
    if path in ("", "/"):
        return []
    if path.startswith("/"):
        path = path[1:]
    return [seg.replace("~1", "/").replace("~0", "~") for seg in path.split("/")]


def parse_patch_line(line: str) -> dict[str, Any] | None:
    """
    Parse one JSONL line into a patch op, or None when it isn't one.

    Rejects malformed JSON, non-objects, missing or non-string op/path,
    ops outside add/replace/remove, and add/replace without a value.
    """
    try:
        parsed = json.loads(line)
    except (json.JSONDecodeError, TypeError, ValueError, RecursionError):
        return None
    if not isinstance(parsed, dict):
        return None
    op = parsed.get("op")
    path = parsed.get("path")
    if not isinstance(op, str) or not isinstance(path, str):
        return None
    if op not in PATCH_OPS:
        return None
    if op in ("add", "replace") and "value" not in parsed:
        return None
    return parsed


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------


def _list_index(segment: str) -> int | None:
    if not _INDEX_RE.match(segment):
        return None
    return int(segment)


def _write(container: Any, segments: list[str], op: str, value: Any) -> Any:
    head, rest = segments[0], segments[1:]

    if isinstance(container, dict):
        if not rest:
            if op == "remove":
                if head not in container:
                    return _NOOP
                updated = dict(container)
                del updated[head]
                return updated
            updated = dict(container)
            updated[head] = value
            return updated

        child = container.get(head)
        if child is None and op == "add" and rest == ["-"]:
            # Appending to a list that doesn't exist yet creates it.
            updated = dict(container)
            updated[head] = [value]
            return updated
        if not isinstance(child, (dict, list)):
            return _NOOP
        new_child = _write(child, rest, op, value)
        if new_child is _NOOP:
            return _NOOP
        updated = dict(container)
        updated[head] = new_child
        return updated

    if isinstance(container, list):
        if head == "-":
            if rest or op != "add":
                return _NOOP
            return [*container, value]

        index = _list_index(head)
        if index is None:
            return _NOOP

        if not rest:
            if op == "add":
                if index > len(container):
                    return _NOOP
                return [*container[:index], value, *container[index:]]
            if index >= len(container):
                return _NOOP
            if op == "replace":
                updated_list = list(container)
                updated_list[index] = value
                return updated_list
            return [*container[:index], *container[index + 1 :]]

        if index >= len(container) or not isinstance(container[index], (dict, list)):
            return _NOOP
        new_child = _write(container[index], rest, op, value)
        if new_child is _NOOP:
            return _NOOP
        updated_list = list(container)
        updated_list[index] = new_child
        return updated_list

    return _NOOP


def apply_patch(tree: dict[str, Any], op: dict[str, Any]) -> dict[str, Any]:
    """
    Apply one patch op to a tree. Never raises; never mutates `tree`.

    Args:
        tree: Current UI tree
        op:   {"op": "add"|"replace"|"remove", "path": str, "value"?: Any}

    Returns:
        The patched tree (see module docstring for the return contract)
    """
    if not isinstance(op, dict):
        return tree
    kind = op.get("op")
    path = op.get("path")
    if kind not in PATCH_OPS or not isinstance(path, str):
        return tree

    segments = parse_path(path)
    if any(seg in BLOCKED_SEGMENTS for seg in segments):
        logger.warning("apply_patch: rejected path with blocked segment: %r", path)
        return tree

    if not segments:
        return dict(tree)

    if kind == "remove" and segments == ["root"]:
        updated = dict(tree)
        updated["root"] = ""
        return updated

    result = _write(tree, segments, kind, op.get("value"))
    if result is _NOOP:
        logger.debug("apply_patch: %s %r did not apply", kind, path)
        return dict(tree)
    return result


def apply_patches(tree: dict[str, Any], ops: list[dict[str, Any]]) -> dict[str, Any]:
    """Apply ops in order."""
    for op in ops:
        tree = apply_patch(tree, op)
    return tree
