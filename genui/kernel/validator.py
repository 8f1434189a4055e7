"""
genui Kernel — Element validator

Validates element props against the catalog's pydantic schemas.

Flow per element: coerce (map near-miss enum values) → validate →
repair (strip remaining invalid top-level props). Elements whose type has
no schema (sub-components, Div, unknown types) pass through unchecked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from pydantic import ValidationError

from genui.kernel.catalog import PROP_SCHEMAS, SUB_COMPONENT_ALIASES, SYNTHETIC_TYPES
from genui.kernel.types import get_props

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Enum coercion
# ---------------------------------------------------------------------------

# "Type.prop" → {hallucinated value → valid value}
ENUM_COERCION_MAP: dict[str, dict[str, str]] = {
    "Badge.variant": {
        "info": "primary",
        "success": "primary",
        "positive": "primary",
        "error": "destructive",
        "danger": "destructive",
        "negative": "destructive",
        "warning": "outline",
        "caution": "outline",
    },
    "Stack.gap": {"medium": "base", "large": "lg", "small": "sm", "extra": "xl"},
    "Grid.gap": {"medium": "base", "large": "lg", "small": "sm"},
    "Text.variant": {"title": "heading2", "subtitle": "heading3", "caption": "secondary"},
}

# Generative type → schema key. None means "no schema, skip".
TYPE_TO_SCHEMA_KEY: dict[str, str | None] = {
    "Textarea": "InputArea",
    "RadioGroup": "Radio",
    **{alias: None for alias in SUB_COMPONENT_ALIASES if alias != "RadioGroup"},
}


def coerce_element_props(element: dict[str, Any]) -> dict[str, Any]:
    """
    Replace recognized near-miss enum values with valid ones.

    Always returns a new element dict with a plain-dict props.
    """
    element_type = element.get("type")
    props = dict(get_props(element))
    for map_key, corrections in ENUM_COERCION_MAP.items():
        map_type, prop_name = map_key.split(".", 1)
        if map_type != element_type:
            continue
        current = props.get(prop_name)
        if isinstance(current, str) and current in corrections:
            props[prop_name] = corrections[current]
    return {**element, "props": props}


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


@dataclass
class ValidationIssue:
    path: str
    message: str


@dataclass
class ElementValidation:
    valid: bool
    element_key: str = ""
    element_type: str = ""
    issues: list[ValidationIssue] = field(default_factory=list)

    def describe(self) -> str:
        return "; ".join(f"{i.path}: {i.message}" for i in self.issues)


def _schema_key(element_type: str) -> str | None:
    if element_type in TYPE_TO_SCHEMA_KEY:
        return TYPE_TO_SCHEMA_KEY[element_type]
    return element_type if element_type in PROP_SCHEMAS else None


def validate_element(element: dict[str, Any]) -> ElementValidation:
    """
    Validate an element's props against its schema.

    Callers should run coerce_element_props first so near-miss enum values
    survive. An array props.children is ignored here; structural children
    live in element["children"] and the redundancy is graded separately.
    """
    element_type = element.get("type", "")
    if not isinstance(element_type, str) or element_type in SYNTHETIC_TYPES:
        return ElementValidation(valid=True)

    schema_key = _schema_key(element_type)
    if schema_key is None:
        return ElementValidation(valid=True)

    props = dict(get_props(element))
    if isinstance(props.get("children"), list):
        del props["children"]

    try:
        PROP_SCHEMAS[schema_key].model_validate(props)
    except ValidationError as exc:
        issues = [
            ValidationIssue(
                path=".".join(str(p) for p in err["loc"]) or "(root)",
                message=err["msg"],
            )
            for err in exc.errors()
        ]
        return ElementValidation(
            valid=False,
            element_key=str(element.get("key", "")),
            element_type=element_type,
            issues=issues,
        )
    return ElementValidation(valid=True)


# ---------------------------------------------------------------------------
# Repair
# ---------------------------------------------------------------------------


def repair_element(element: dict[str, Any], validation: ElementValidation) -> dict[str, Any] | None:
    """
    Strip the invalid top-level props named by a failed validation.

    Only single-segment issue paths are stripped; nested failures are left
    alone. Returns None when nothing can be stripped.
    """
    to_strip = {issue.path for issue in validation.issues if "." not in issue.path and issue.path != "(root)"}
    if not to_strip:
        return None
    props = {k: v for k, v in get_props(element).items() if k not in to_strip}
    return {**element, "props": props}


def repair_tree(tree: dict[str, Any]) -> dict[str, Any]:
    """
    Coerce, validate and repair every element. Returns a new tree.

    Elements that fail and can't be repaired are kept as coerced.
    """
    elements = tree.get("elements") or {}
    repaired: dict[str, Any] = {}
    for key, element in elements.items():
        if not isinstance(element, dict):
            repaired[key] = element
            continue
        coerced = coerce_element_props(element)
        result = validate_element(coerced)
        if result.valid:
            repaired[key] = coerced
            continue
        fixed = repair_element(coerced, result)
        if fixed is None:
            logger.warning(
                "Validation failed for element %r (%s): %s", result.element_key, result.element_type, result.describe()
            )
            repaired[key] = coerced
            continue
        stripped = sorted(set(get_props(coerced)) - set(get_props(fixed)))
        logger.info(
            "Repaired element %r (%s): stripped invalid props [%s]",
            result.element_key,
            result.element_type,
            ", ".join(stripped),
        )
        repaired[key] = fixed
    return {**tree, "elements": repaired}
