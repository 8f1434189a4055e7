"""
genui Kernel — Structural & Composition Graders

Static, deterministic quality checks over a tree. Graders report failures
as data (GradeReport); they never raise and never modify the tree.

Structural rules (RULE_NAMES order):
  valid-component-types   every type is known (or a registered custom type)
  valid-prop-values       enum props pass the catalog schemas
  required-props          Text has children; form controls have a label
  canonical-layout        a root Surface wraps its children in one Stack
  no-orphan-nodes         every non-root element is some parent's child
  a11y-labels             form controls carry label or aria-label
  depth-limit             nesting depth stays within MAX_DEPTH
  no-redundant-children   props.children is never an array

Composition rules (COMPOSITION_RULE_NAMES order):
  has-visual-hierarchy, has-responsive-layout, surface-hierarchy-correct
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from genui.config import settings
from genui.kernel.catalog import KNOWN_TYPES
from genui.kernel.types import get_children, get_element, get_props
from genui.kernel.validator import validate_element

WalkVisitor = Callable[[dict[str, Any], int, "str | None"], None]

A11Y_LABEL_TYPES: frozenset[str] = frozenset(
    {"Input", "Textarea", "InputArea", "Select", "Checkbox", "Switch", "RadioGroup"}
)

RULE_NAMES: tuple[str, ...] = (
    "valid-component-types",
    "valid-prop-values",
    "required-props",
    "canonical-layout",
    "no-orphan-nodes",
    "a11y-labels",
    "depth-limit",
    "no-redundant-children",
)

COMPOSITION_RULE_NAMES: tuple[str, ...] = (
    "has-visual-hierarchy",
    "has-responsive-layout",
    "surface-hierarchy-correct",
)

HEADING_VARIANTS: frozenset[str] = frozenset({"heading1", "heading2", "heading3"})


# ---------------------------------------------------------------------------
# Report types
# ---------------------------------------------------------------------------


@dataclass
class GradeResult:
    rule: str
    passed: bool
    violations: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"rule": self.rule, "pass": self.passed, "violations": list(self.violations)}


@dataclass
class GradeReport:
    results: list[GradeResult]

    @property
    def all_pass(self) -> bool:
        return all(r.passed for r in self.results)

    def result(self, rule: str) -> GradeResult | None:
        for r in self.results:
            if r.rule == rule:
                return r
        return None

    def to_dict(self) -> dict[str, Any]:
        return {"results": [r.to_dict() for r in self.results], "allPass": self.all_pass}


def _report(names: Iterable[str], violations: dict[str, list[str]]) -> GradeReport:
    return GradeReport(results=[GradeResult(rule=n, passed=not violations[n], violations=violations[n]) for n in names])


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------


def walk_tree(tree: dict[str, Any], visitor: WalkVisitor) -> None:
    """
    Depth-first walk from the root. The visitor gets (element, depth,
    parent_key). Each key is visited at most once, so shared children and
    cycles can't loop; missing keys are skipped.
    """
    root = tree.get("root")
    if not root:
        return
    seen: set[str] = set()
    stack: list[tuple[str, int, str | None]] = [(root, 0, None)]
    while stack:
        key, depth, parent_key = stack.pop()
        if key in seen:
            continue
        element = get_element(tree, key)
        if element is None:
            continue
        seen.add(key)
        visitor(element, depth, parent_key)
        for child_key in reversed(get_children(element)):
            stack.append((child_key, depth + 1, key))


def get_unknown_types(tree: dict[str, Any], custom_types: Iterable[str] | None = None) -> list[str]:
    """Distinct unrecognized element types, in first-seen order."""
    known = KNOWN_TYPES | set(custom_types or ())
    unknown: list[str] = []
    for element in (tree.get("elements") or {}).values():
        element_type = element.get("type") if isinstance(element, dict) else None
        if element_type not in known and element_type not in unknown:
            unknown.append(element_type)
    return unknown


# ---------------------------------------------------------------------------
# Structural grading
# ---------------------------------------------------------------------------


def _has_label(props: dict[str, Any]) -> bool:
    return props.get("label") is not None or props.get("aria-label") is not None


def grade_tree(
    tree: dict[str, Any],
    custom_types: Iterable[str] | None = None,
    max_depth: int | None = None,
) -> GradeReport:
    """Grade a tree against the eight structural rules."""
    known = KNOWN_TYPES | set(custom_types or ())
    limit = settings.MAX_DEPTH if max_depth is None else max_depth
    v: dict[str, list[str]] = {name: [] for name in RULE_NAMES}
    elements = tree.get("elements") or {}

    def visit(element: dict[str, Any], depth: int, parent_key: str | None) -> None:
        key = element.get("key", "")
        element_type = element.get("type")
        props = get_props(element)

        if element_type not in known:
            v["valid-component-types"].append(f'{key}: unknown type "{element_type}"')

        validation = validate_element(element)
        if not validation.valid:
            v["valid-prop-values"].append(f"{key} ({element_type}): {validation.describe()}")

        if element_type == "Text" and props.get("children") is None:
            v["required-props"].append(f"{key}: Text missing children")
        if element_type in A11Y_LABEL_TYPES and not _has_label(props):
            v["required-props"].append(f"{key}: {element_type} missing label or aria-label")

        if depth == 0 and element_type == "Surface":
            children = get_children(element)
            if children:
                only = get_element(tree, children[0]) if len(children) == 1 else None
                if only is None or only.get("type") != "Stack":
                    v["canonical-layout"].append(f"{key}: root Surface should wrap children in a single Stack")

        if element_type in A11Y_LABEL_TYPES and not _has_label(props):
            v["a11y-labels"].append(f"{key}: {element_type} missing label/aria-label")

        if depth > limit:
            v["depth-limit"].append(f"{key}: depth {depth} exceeds max {limit}")

        if isinstance(props.get("children"), list):
            v["no-redundant-children"].append(
                f"{key}: props.children is an array (use element children for structural children)"
            )

    walk_tree(tree, visit)

    # Orphans are unreachable from root by definition, so check them outside the walk.
    referenced = {c for e in elements.values() if isinstance(e, dict) for c in get_children(e)}
    root = tree.get("root")
    for key in elements:
        if key != root and key not in referenced:
            v["no-orphan-nodes"].append(f"{key}: not referenced by any parent's children")

    return _report(RULE_NAMES, v)


# ---------------------------------------------------------------------------
# Composition grading
# ---------------------------------------------------------------------------

_GRID_NEEDS_VARIANT = "Grid element exists but has no variant prop — always specify variant (e.g. 2up, 3up, 4up)"


def grade_composition(tree: dict[str, Any], simple_layout_max: int | None = None) -> GradeReport:
    """Grade visual hierarchy, responsive layout and Surface nesting."""
    limit = settings.SIMPLE_LAYOUT_MAX_ELEMENTS if simple_layout_max is None else simple_layout_max
    v: dict[str, list[str]] = {name: [] for name in COMPOSITION_RULE_NAMES}
    seen = {"heading": False, "heading1": False, "heading2": False, "grid_variant": False, "grid_bare": False}
    count = 0

    def visit(element: dict[str, Any], depth: int, parent_key: str | None) -> None:
        nonlocal count
        count += 1
        element_type = element.get("type")
        variant = get_props(element).get("variant")

        if element_type == "Text" and variant in HEADING_VARIANTS:
            seen["heading"] = True
            if variant in ("heading1", "heading2"):
                seen[variant] = True

        if element_type == "Grid":
            if isinstance(variant, str) and variant:
                seen["grid_variant"] = True
            else:
                seen["grid_bare"] = True

        if element_type == "Surface" and parent_key is not None:
            parent = get_element(tree, parent_key)
            if parent is not None and parent.get("type") == "Surface":
                v["surface-hierarchy-correct"].append(
                    f'Surface "{element.get("key")}" is a direct child of Surface "{parent_key}" '
                    "— insert a layout element (Stack, Grid) between them"
                )

    walk_tree(tree, visit)

    if not seen["heading"]:
        v["has-visual-hierarchy"].append(
            "no Text element with a heading variant (heading1, heading2, heading3) found"
        )
    elif seen["heading1"] and not seen["heading2"]:
        v["has-visual-hierarchy"].append(
            "heading1 exists but no heading2 — flat hierarchy (consider adding sub-headings)"
        )

    if count > limit and not seen["grid_variant"]:
        if seen["grid_bare"]:
            v["has-responsive-layout"].append(_GRID_NEEDS_VARIANT)
        else:
            v["has-responsive-layout"].append(
                "no Grid element with variant prop found — complex layouts need responsive grid columns"
            )
    elif seen["grid_bare"]:
        v["has-responsive-layout"].append(_GRID_NEEDS_VARIANT)

    return _report(COMPOSITION_RULE_NAMES, v)
