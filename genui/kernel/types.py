"""
genui Kernel — Shared Types

Data structures used across the patch engine, normalizer, action dispatcher
and graders. These are the contracts that bind the kernel together.

Tree = {
    "root":     key of the root element, "" while empty,
    "elements": {key: Element},
}

Element = {
    "key":       str,
    "type":      str,                  component type, e.g. "Stack"
    "props":     dict,
    "children":  [key, ...],           optional
    "parentKey": str | None,           optional
    "action":    {"name", "params"?},  optional
}

Trees and elements are plain dicts so that they serialize to the wire
format unchanged. Action events and results are dataclasses.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

# ---------------------------------------------------------------------------
# Tree
# ---------------------------------------------------------------------------

PATCH_OPS: frozenset[str] = frozenset({"add", "replace", "remove"})


def empty_tree() -> dict[str, Any]:
    """The initial tree: no root, no elements."""
    return {"root": "", "elements": {}}


def get_element(tree: dict[str, Any], key: str | None) -> dict[str, Any] | None:
    if not key:
        return None
    elements = tree.get("elements")
    if not isinstance(elements, dict):
        return None
    element = elements.get(key)
    return element if isinstance(element, dict) else None


def get_children(element: dict[str, Any] | None) -> list[str]:
    """Structural children of an element, filtered to string keys."""
    if not element:
        return []
    children = element.get("children")
    if not isinstance(children, list):
        return []
    return [c for c in children if isinstance(c, str)]


def get_props(element: dict[str, Any] | None) -> dict[str, Any]:
    if not element:
        return {}
    props = element.get("props")
    return props if isinstance(props, dict) else {}


def action_name(element: dict[str, Any] | None) -> str | None:
    if not element:
        return None
    action = element.get("action")
    if isinstance(action, dict) and isinstance(action.get("name"), str):
        return action["name"]
    return None


# ---------------------------------------------------------------------------
# Action events
# ---------------------------------------------------------------------------


@dataclass
class ActionEvent:
    """A user interaction routed to the action dispatcher."""

    action_name: str
    source_key: str
    params: dict[str, Any] | None = None
    context: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"actionName": self.action_name, "sourceKey": self.source_key}
        if self.params is not None:
            d["params"] = self.params
        if self.context is not None:
            d["context"] = self.context
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> ActionEvent:
        return cls(
            action_name=d["actionName"],
            source_key=d["sourceKey"],
            params=d.get("params"),
            context=d.get("context"),
        )


# ---------------------------------------------------------------------------
# Action results
# ---------------------------------------------------------------------------


@dataclass
class PatchResult:
    patches: list[dict[str, Any]] = field(default_factory=list)
    type: str = field(default="patch", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "patches": self.patches}


@dataclass
class MessageResult:
    content: str
    payload: dict[str, Any] | None = None
    type: str = field(default="message", init=False)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type, "content": self.content}
        if self.payload is not None:
            d["payload"] = self.payload
        return d


@dataclass
class ExternalResult:
    url: str
    target: str | None = None
    type: str = field(default="external", init=False)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"type": self.type, "url": self.url}
        if self.target is not None:
            d["target"] = self.target
        return d


@dataclass
class NoneResult:
    type: str = field(default="none", init=False)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type}


ActionResult = PatchResult | MessageResult | ExternalResult | NoneResult

ActionHandler = Callable[[ActionEvent, dict[str, Any]], "ActionResult | None"]


@dataclass
class ActionResultCallbacks:
    """
    Host effects for processed action results.

    apply_patches: receives the patch list of a PatchResult
    send_message:  receives (content, payload) of a MessageResult
    open_external: receives (url, target); None uses the default browser opener
    """

    apply_patches: Callable[[list[dict[str, Any]]], None]
    send_message: Callable[[str, dict[str, Any] | None], None]
    open_external: Callable[[str, str], None] | None = None
