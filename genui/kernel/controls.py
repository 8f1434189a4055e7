"""
genui Kernel — Stateful control models

Several components are controlled-only: they render whatever value they are
given and report changes, but keep no state. Model output can't wire host
state, so the renderer wraps them in these models, which hold the current
value, mirror it into the RuntimeValueStore, and build the action context
for onAction.

Lifecycle:
  mount(store)          mirror the initial value, untouched, unless the store
                        already has a value for the key or it was touched
  change(value, store)  user edit: update, mark dirty + touched, return the
                        action context ({"value"}, {"checked"} or {"open"})
"""

from __future__ import annotations

from typing import Any

from genui.kernel.types import get_props
from genui.kernel.values import RuntimeValueStore


class Control:
    """Base model: current value plus a dirty flag."""

    context_field = "value"

    def __init__(self, key: str, initial: Any) -> None:
        self.key = key
        self.value = initial
        self.dirty = False

    @classmethod
    def initial_value(cls, props: dict[str, Any]) -> Any:
        value = props.get("value")
        if value is None:
            value = props.get("defaultValue")
        return value

    @classmethod
    def from_element(cls, element: dict[str, Any]) -> Control:
        return cls(element["key"], cls.initial_value(get_props(element)))

    def mount(self, store: RuntimeValueStore | None) -> None:
        if store is None or not self.key:
            return
        if store.get_value(self.key) is not None or store.is_touched(self.key):
            return
        store.set_value(self.key, self.value, touched=False)

    def change(self, value: Any, store: RuntimeValueStore | None = None) -> dict[str, Any]:
        self.value = self._coerce(value)
        self.dirty = True
        if store is not None and self.key:
            store.set_value(self.key, self.value)
        return {self.context_field: self.value}

    def _coerce(self, value: Any) -> Any:
        return value


class TextControl(Control):
    """Input / Textarea: seeded from value or defaultValue."""

    def mount(self, store: RuntimeValueStore | None) -> None:
        if self.value is None:
            return
        super().mount(store)


class SelectControl(Control):
    pass


class CheckboxControl(Control):
    context_field = "checked"

    @classmethod
    def initial_value(cls, props: dict[str, Any]) -> Any:
        checked = props.get("checked")
        if checked is None:
            checked = props.get("defaultChecked")
        return bool(checked)

    def _coerce(self, value: Any) -> Any:
        return bool(value)


class SwitchControl(CheckboxControl):
    pass


class TabsControl(Control):
    @classmethod
    def initial_value(cls, props: dict[str, Any]) -> Any:
        for name in ("value", "selectedValue", "defaultValue"):
            if props.get(name) is not None:
                return props[name]
        tabs = props.get("tabs")
        if isinstance(tabs, list) and tabs and isinstance(tabs[0], dict) and tabs[0].get("value") is not None:
            return tabs[0]["value"]
        return ""


class CollapsibleControl(Control):
    context_field = "open"

    @classmethod
    def initial_value(cls, props: dict[str, Any]) -> Any:
        is_open = props.get("open")
        if is_open is None:
            is_open = props.get("defaultOpen")
        return bool(is_open)

    def _coerce(self, value: Any) -> Any:
        return bool(value)


CONTROL_TYPES: dict[str, type[Control]] = {
    "Input": TextControl,
    "Textarea": TextControl,
    "InputArea": TextControl,
    "Select": SelectControl,
    "Checkbox": CheckboxControl,
    "Switch": SwitchControl,
    "Tabs": TabsControl,
    "Collapsible": CollapsibleControl,
}


def control_for(element: dict[str, Any]) -> Control | None:
    """The control model for an element, or None for stateless types."""
    control_type = CONTROL_TYPES.get(element.get("type", ""))
    if control_type is None or not isinstance(element.get("key"), str):
        return None
    return control_type.from_element(element)
