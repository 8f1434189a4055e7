"""
genui Kernel — Tree Normalizer

Pure function: tree → tree

Model output is structurally valid but often visually awkward: doubled
Surface borders, option-less Selects, labels repeated above labeled inputs,
mixed column variants across form rows. The passes below reshape such trees
into the canonical layout.

Pipeline (fixed order, see PIPELINE):
  1. normalize_nested_surfaces        Surface > Surface → one Surface
  2. normalize_empty_selects          option-less Select → Input
  3. normalize_duplicate_field_labels Text "Name" + Input(label="Name") → Input
  4. normalize_checkbox_group_grids   Grid[label, checkbox group] → Stack
  5. normalize_sibling_form_row_grids mixed 2-col form rows → variant="2up"
  6. normalize_surface_orphans        Surface children → one synthetic Stack
  7. normalize_counter_stacks         counter Stack + buttons → centered
  8. normalize_form_action_bars       trailing form buttons → right-aligned bar

Contract for every pass:
  - returns the input object itself when nothing changes
  - idempotent: pass(pass(t)) == pass(t)
  - never leaves an orphan and never lists a key under two parents
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from genui.kernel.catalog import (
    CHOICE_TYPES,
    CONTAINER_TYPES,
    COUNTER_ACTIONS,
    FORM_CONTROL_TYPES,
    SUBMIT_ACTION,
)
from genui.kernel.types import action_name, get_children, get_props

Pass = Callable[[dict[str, Any]], dict[str, Any]]

TWO_COL_GRID_VARIANTS: frozenset[str] = frozenset({"2up", "side-by-side", "2-1", "1-2"})
FORM_ROW_CONTROL_TYPES: frozenset[str] = frozenset({"Input", "Select", "Textarea"})
LABEL_TEXT_TYPES: frozenset[str] = frozenset({"Text", "Label"})

_GRID_COLS_RE = re.compile(r"\bgrid-cols-")
_WS_RE = re.compile(r"\s+")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _elements(tree: dict[str, Any]) -> dict[str, Any]:
    elements = tree.get("elements")
    return elements if isinstance(elements, dict) else {}


def _reference_counts(elements: dict[str, Any]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for element in elements.values():
        if not isinstance(element, dict):
            continue
        for child in get_children(element):
            counts[child] = counts.get(child, 0) + 1
    return counts


def _typed(elements: dict[str, Any], key: str) -> str | None:
    element = elements.get(key)
    if isinstance(element, dict) and isinstance(element.get("type"), str):
        return element["type"]
    return None


def _with_props(element: dict[str, Any], **updates: Any) -> dict[str, Any]:
    return {**element, "props": {**get_props(element), **updates}}


def _add_classes(class_name: Any, tokens: list[str]) -> str:
    existing = class_name.split() if isinstance(class_name, str) else []
    for token in tokens:
        if token not in existing:
            existing.append(token)
    return " ".join(existing)


def _has_classes(class_name: Any, tokens: list[str]) -> bool:
    existing = class_name.split() if isinstance(class_name, str) else []
    return all(t in existing for t in tokens)


def _unique_key(elements: dict[str, Any], base: str) -> str:
    key = base
    n = 2
    while key in elements:
        key = f"{base}-{n}"
        n += 1
    return key


def _normalize_label(text: str) -> str:
    return _WS_RE.sub(" ", text).strip().lower()


def _finish(tree: dict[str, Any], elements: dict[str, Any] | None) -> dict[str, Any]:
    return tree if elements is None else {**tree, "elements": elements}


# ---------------------------------------------------------------------------
# 1. Nested surfaces
# ---------------------------------------------------------------------------


def normalize_nested_surfaces(tree: dict[str, Any]) -> dict[str, Any]:
    """
    Collapse Surface > Surface into the outer Surface.

    The outer Surface takes over the inner one's children (and any props it
    doesn't already set); the inner Surface is deleted. Only applies when the
    inner Surface is referenced by exactly one parent.
    """
    elements = _elements(tree)
    nxt: dict[str, Any] | None = None

    # Chains (Surface > Surface > Surface) collapse one level per iteration.
    for _ in range(len(elements)):
        current = nxt if nxt is not None else elements
        counts = _reference_counts(current)
        collapsed = False
        for key in list(current):
            outer = current.get(key)
            if not isinstance(outer, dict) or outer.get("type") != "Surface":
                continue
            children = get_children(outer)
            if len(children) != 1:
                continue
            inner_key = children[0]
            inner = current.get(inner_key)
            if inner_key == key or not isinstance(inner, dict) or inner.get("type") != "Surface":
                continue
            if counts.get(inner_key, 0) != 1 or tree.get("root") == inner_key:
                continue
            lifted = [c for c in get_children(inner) if c != key]

            if nxt is None:
                nxt = dict(elements)
            nxt[key] = {
                **outer,
                "props": {**get_props(inner), **get_props(outer)},
                "children": lifted,
            }
            for child_key in lifted:
                child = nxt.get(child_key)
                if isinstance(child, dict):
                    nxt[child_key] = {**child, "parentKey": key}
            del nxt[inner_key]
            collapsed = True
            break
        if not collapsed:
            break

    return _finish(tree, nxt)


# ---------------------------------------------------------------------------
# 2. Empty selects
# ---------------------------------------------------------------------------


def normalize_empty_selects(tree: dict[str, Any]) -> dict[str, Any]:
    """A Select with neither option children nor an options prop becomes an Input."""
    elements = _elements(tree)
    nxt: dict[str, Any] | None = None
    for key, element in elements.items():
        if not isinstance(element, dict) or element.get("type") != "Select":
            continue
        if get_children(element):
            continue
        options = get_props(element).get("options")
        if isinstance(options, list) and options:
            continue
        if nxt is None:
            nxt = dict(elements)
        props = {k: v for k, v in get_props(element).items() if k != "options"}
        replaced = {**element, "type": "Input", "props": props}
        replaced.pop("children", None)
        nxt[key] = replaced
    return _finish(tree, nxt)


# ---------------------------------------------------------------------------
# 3. Duplicate field labels
# ---------------------------------------------------------------------------


def _repeated_label(element: Any, label: str) -> bool:
    if not isinstance(element, dict):
        return False
    if element.get("type") not in LABEL_TEXT_TYPES or get_children(element):
        return False
    text_value = get_props(element).get("children")
    return isinstance(text_value, str) and _normalize_label(text_value) == label


def normalize_duplicate_field_labels(tree: dict[str, Any]) -> dict[str, Any]:
    """
    Drop the Texts that repeat the label of the form control right after them.

    A run of repeated label Texts before one control is dropped as a whole.
    Dropped Texts are removed from their parent and from the tree.
    """
    elements = _elements(tree)
    nxt: dict[str, Any] | None = None
    counts = _reference_counts(elements)

    for parent_key, parent in elements.items():
        if not isinstance(parent, dict):
            continue
        children = get_children(parent)
        if len(children) < 2:
            continue
        drop: set[str] = set()
        for i, control_key in enumerate(children):
            control = elements.get(control_key)
            if not isinstance(control, dict) or control.get("type") not in FORM_CONTROL_TYPES:
                continue
            label = get_props(control).get("label")
            if not isinstance(label, str) or not _normalize_label(label):
                continue
            wanted = _normalize_label(label)
            j = i - 1
            while j >= 0 and _repeated_label(elements.get(children[j]), wanted):
                drop.add(children[j])
                j -= 1
        if not drop:
            continue
        if nxt is None:
            nxt = dict(elements)
        nxt[parent_key] = {**parent, "children": [c for c in children if c not in drop]}
        for text_key in drop:
            if counts.get(text_key, 0) <= 1:
                nxt.pop(text_key, None)

    return _finish(tree, nxt)


# ---------------------------------------------------------------------------
# 4. Checkbox group grids
# ---------------------------------------------------------------------------


def _is_choice_group(elements: dict[str, Any], key: str) -> bool:
    element_type = _typed(elements, key)
    if element_type == "RadioGroup":
        return True
    if element_type not in CONTAINER_TYPES:
        return False
    children = get_children(elements[key])
    return bool(children) and all(_typed(elements, c) in CHOICE_TYPES for c in children)


def normalize_checkbox_group_grids(tree: dict[str, Any]) -> dict[str, Any]:
    """
    A Grid placing a label Text beside a group of checkboxes reads badly in
    two columns; turn it into a vertical Stack (label above choices).
    """
    elements = _elements(tree)
    nxt: dict[str, Any] | None = None
    for key, element in elements.items():
        if not isinstance(element, dict) or element.get("type") != "Grid":
            continue
        children = get_children(element)
        if len(children) != 2:
            continue
        if _typed(elements, children[0]) not in LABEL_TEXT_TYPES:
            continue
        if not _is_choice_group(elements, children[1]):
            continue
        if nxt is None:
            nxt = dict(elements)
        props = {k: v for k, v in get_props(element).items() if k not in ("variant", "columns")}
        nxt[key] = {**element, "type": "Stack", "props": props}
    return _finish(tree, nxt)


# ---------------------------------------------------------------------------
# 5. Sibling form row grids
# ---------------------------------------------------------------------------


def _is_two_col_form_row_grid(element: Any) -> bool:
    if not isinstance(element, dict) or element.get("type") != "Grid":
        return False
    if len(get_children(element)) != 2:
        return False
    props = get_props(element)
    variant = props.get("variant")
    if variant is not None and (not isinstance(variant, str) or variant not in TWO_COL_GRID_VARIANTS):
        return False
    # An explicit grid-cols-* class is the model's own call; leave it.
    class_name = props.get("className")
    if isinstance(class_name, str) and _GRID_COLS_RE.search(class_name):
        return False
    return True


def normalize_sibling_form_row_grids(tree: dict[str, Any]) -> dict[str, Any]:
    """
    Within one parent, 2+ two-column Grid rows of form controls with mixed
    variants all get variant="2up" so the columns line up row to row.
    """
    elements = _elements(tree)
    nxt: dict[str, Any] | None = None

    for parent in elements.values():
        if not isinstance(parent, dict):
            continue
        row_keys: list[str] = []
        for child_key in get_children(parent):
            child = elements.get(child_key)
            if not _is_two_col_form_row_grid(child):
                continue
            first, second = get_children(child)
            if _typed(elements, first) not in FORM_ROW_CONTROL_TYPES:
                continue
            if _typed(elements, second) not in FORM_ROW_CONTROL_TYPES:
                continue
            row_keys.append(child_key)

        if len(row_keys) < 2:
            continue
        variants = {
            get_props(elements[k]).get("variant")
            for k in row_keys
            if isinstance(get_props(elements[k]).get("variant"), str)
        }
        if len(variants) <= 1:
            continue

        for row_key in row_keys:
            row = elements[row_key]
            if get_props(row).get("variant") == "2up":
                continue
            if nxt is None:
                nxt = dict(elements)
            nxt[row_key] = _with_props(row, variant="2up")

    return _finish(tree, nxt)


# ---------------------------------------------------------------------------
# 6. Surface orphans
# ---------------------------------------------------------------------------


def normalize_surface_orphans(tree: dict[str, Any]) -> dict[str, Any]:
    """
    Wrap a Surface's children in a synthetic Stack (gap="lg") unless its only
    child already is a Stack. Children are re-parented onto the new Stack.
    """
    elements = _elements(tree)
    nxt: dict[str, Any] | None = None

    for key, element in elements.items():
        if not isinstance(element, dict) or element.get("type") != "Surface":
            continue
        children = get_children(element)
        if not children:
            continue
        if len(children) == 1 and _typed(elements, children[0]) == "Stack":
            continue

        if nxt is None:
            nxt = dict(elements)
        stack_key = _unique_key(nxt, f"auto-stack-{key}")
        nxt[stack_key] = {
            "key": stack_key,
            "type": "Stack",
            "props": {"gap": "lg"},
            "children": list(children),
            "parentKey": key,
        }
        for child_key in children:
            child = nxt.get(child_key)
            if isinstance(child, dict):
                nxt[child_key] = {**child, "parentKey": stack_key}
        nxt[key] = {**element, "children": [stack_key]}

    return _finish(tree, nxt)


# ---------------------------------------------------------------------------
# 7. Counter stacks
# ---------------------------------------------------------------------------


def _is_counter_button(elements: dict[str, Any], key: str) -> bool:
    element = elements.get(key)
    return _typed(elements, key) == "Button" and action_name(element) in COUNTER_ACTIONS


def normalize_counter_stacks(tree: dict[str, Any]) -> dict[str, Any]:
    """
    Center a Stack that holds increment/decrement buttons, and center the
    Cluster those buttons sit in.
    """
    elements = _elements(tree)
    nxt: dict[str, Any] | None = None

    def put(key: str, **updates: Any) -> None:
        nonlocal nxt
        source = (nxt if nxt is not None else elements)[key]
        if all(get_props(source).get(k) == v for k, v in updates.items()):
            return
        if nxt is None:
            nxt = dict(elements)
        nxt[key] = _with_props(source, **updates)

    for key, element in elements.items():
        if not isinstance(element, dict) or element.get("type") != "Stack":
            continue
        children = get_children(element)
        clusters = [
            c
            for c in children
            if _typed(elements, c) == "Cluster"
            and any(_is_counter_button(elements, b) for b in get_children(elements[c]))
        ]
        direct = any(_is_counter_button(elements, c) for c in children)
        if not clusters and not direct:
            continue
        put(key, align="center")
        for cluster_key in clusters:
            put(cluster_key, justify="center")

    return _finish(tree, nxt)


# ---------------------------------------------------------------------------
# 8. Form action bars
# ---------------------------------------------------------------------------

SUBMIT_BUTTON_CLASSES = ["w-full", "sm:w-auto", "sm:self-end"]
ACTION_BAR_CLASSES = ["w-full"]


def _contains_form_control(elements: dict[str, Any], key: str, depth: int = 2) -> bool:
    for child_key in get_children(elements.get(key)):
        child_type = _typed(elements, child_key)
        if child_type in FORM_CONTROL_TYPES:
            return True
        if depth > 1 and child_type in ("Grid", "Stack", "Div"):
            if _contains_form_control(elements, child_key, depth - 1):
                return True
    return False


def _is_submit_button(elements: dict[str, Any], key: str) -> bool:
    return _typed(elements, key) == "Button" and action_name(elements.get(key)) == SUBMIT_ACTION


def normalize_form_action_bars(tree: dict[str, Any]) -> dict[str, Any]:
    """
    Right-align the actions at the end of a form Stack.

      - 2+ trailing Buttons (no counter buttons) are grouped into a synthetic
        Cluster "auto-actions-{stack}" with justify="end"
      - a trailing Cluster holding a submit button gets justify="end" w-full
      - a lone trailing submit Button gets w-full sm:w-auto sm:self-end
    """
    elements = _elements(tree)
    nxt: dict[str, Any] | None = None

    for key in list(elements):
        current = nxt if nxt is not None else elements
        stack = current.get(key)
        if not isinstance(stack, dict) or stack.get("type") != "Stack":
            continue
        if not _contains_form_control(current, key):
            continue
        children = get_children(stack)
        if not children:
            continue

        trailing: list[str] = []
        for child_key in reversed(children):
            if _typed(current, child_key) != "Button" or _is_counter_button(current, child_key):
                break
            trailing.insert(0, child_key)

        if len(trailing) >= 2:
            if nxt is None:
                nxt = dict(elements)
            bar_key = _unique_key(nxt, f"auto-actions-{key}")
            nxt[bar_key] = {
                "key": bar_key,
                "type": "Cluster",
                "props": {"gap": "sm", "justify": "end", "className": " ".join(ACTION_BAR_CLASSES)},
                "children": trailing,
                "parentKey": key,
            }
            for button_key in trailing:
                nxt[button_key] = {**nxt[button_key], "parentKey": bar_key}
            nxt[key] = {**stack, "children": children[: len(children) - len(trailing)] + [bar_key]}
            continue

        last_key = children[-1]
        last = current.get(last_key)
        if _typed(current, last_key) == "Cluster" and any(
            _is_submit_button(current, b) for b in get_children(last)
        ):
            props = get_props(last)
            if props.get("justify") == "end" and _has_classes(props.get("className"), ACTION_BAR_CLASSES):
                continue
            if nxt is None:
                nxt = dict(elements)
            nxt[last_key] = _with_props(
                last, justify="end", className=_add_classes(props.get("className"), ACTION_BAR_CLASSES)
            )
        elif _is_submit_button(current, last_key):
            props = get_props(last)
            if _has_classes(props.get("className"), SUBMIT_BUTTON_CLASSES):
                continue
            if nxt is None:
                nxt = dict(elements)
            nxt[last_key] = _with_props(last, className=_add_classes(props.get("className"), SUBMIT_BUTTON_CLASSES))

    return _finish(tree, nxt)


# ---------------------------------------------------------------------------
# Pipeline
# ---------------------------------------------------------------------------

PIPELINE: tuple[Pass, ...] = (
    normalize_nested_surfaces,
    normalize_empty_selects,
    normalize_duplicate_field_labels,
    normalize_checkbox_group_grids,
    normalize_sibling_form_row_grids,
    normalize_surface_orphans,
    normalize_counter_stacks,
    normalize_form_action_bars,
)


def normalize_tree(tree: dict[str, Any]) -> dict[str, Any]:
    """Run every pass in PIPELINE order."""
    for normalize in PIPELINE:
        tree = normalize(tree)
    return tree


# ---------------------------------------------------------------------------
# Standalone repair
# ---------------------------------------------------------------------------


def normalize_props_children_to_structural(tree: dict[str, Any]) -> dict[str, Any]:
    """
    Move element keys a model put in props.children into structural children.

    Only arrays that name at least one existing element are moved; the
    array is dropped from props and the keys are merged (no duplicates)
    after any existing children. Not part of PIPELINE.
    """
    elements = _elements(tree)
    nxt: dict[str, Any] | None = None
    for key, element in elements.items():
        if not isinstance(element, dict):
            continue
        props = get_props(element)
        raw = props.get("children")
        if not isinstance(raw, list):
            continue
        keys = [c for c in raw if isinstance(c, str) and c in elements and c != key]
        if not keys:
            continue
        merged = list(get_children(element))
        for child_key in keys:
            if child_key not in merged:
                merged.append(child_key)
        if nxt is None:
            nxt = dict(elements)
        nxt[key] = {
            **element,
            "props": {k: v for k, v in props.items() if k != "children"},
            "children": merged,
        }
    return _finish(tree, nxt)
