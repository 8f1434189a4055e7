"""Tree builders shared by kernel tests."""

from __future__ import annotations


def el(key, type_, props=None, children=None, **extra):
    """Build an element dict; children and extra fields only when given."""
    element = {"key": key, "type": type_, "props": props or {}}
    if children is not None:
        element["children"] = children
    element.update(extra)
    return element


def tree_of(root, *elements):
    return {"root": root, "elements": {e["key"]: e for e in elements}}


def button(key, action, params=None, parent=None, **props):
    element = el(key, "Button", props, action={"name": action, **({"params": params} if params else {})})
    if parent:
        element["parentKey"] = parent
    return element
