"""
genui Kernel — Component catalog

The set of element types the renderer understands, how generative type names
map onto component-library tags, and pydantic prop schemas for components
whose props carry enums.

Schemas only constrain the enum-valued props; everything else passes through
(extra="allow"), because models emit many presentational props we don't
model here.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

# ---------------------------------------------------------------------------
# Type registry
# ---------------------------------------------------------------------------

# Components rendered 1:1 from the component library.
DIRECT_COMPONENTS: tuple[str, ...] = (
    "Badge",
    "Banner",
    "Breadcrumbs",
    "Button",
    "Checkbox",
    "ClipboardText",
    "CloudflareLogo",
    "Cluster",
    "Code",
    "Collapsible",
    "Empty",
    "Grid",
    "Input",
    "InputArea",
    "Label",
    "LayerCard",
    "Link",
    "Loader",
    "Meter",
    "Pagination",
    "Radio",
    "Select",
    "Stack",
    "Surface",
    "Switch",
    "Table",
    "Tabs",
    "Text",
)

# Generative type names that render as a differently named component.
TYPE_ALIASES: dict[str, str] = {
    "Textarea": "InputArea",
}

# Flattened sub-components: generative type → (parent, sub) → <Parent.Sub>.
SUB_COMPONENT_ALIASES: dict[str, tuple[str, str]] = {
    "TableHeader": ("Table", "Header"),
    "TableHead": ("Table", "Head"),
    "TableBody": ("Table", "Body"),
    "TableRow": ("Table", "Row"),
    "TableCell": ("Table", "Cell"),
    "TableFooter": ("Table", "Footer"),
    "SelectOption": ("Select", "Option"),
    "RadioGroup": ("Radio", "Group"),
    "RadioItem": ("Radio", "Item"),
    "BreadcrumbsLink": ("Breadcrumbs", "Link"),
    "BreadcrumbsCurrent": ("Breadcrumbs", "Current"),
    "BreadcrumbsSeparator": ("Breadcrumbs", "Separator"),
}

# Rendered as a plain <div>; not part of the component library.
SYNTHETIC_TYPES: frozenset[str] = frozenset({"Div"})

KNOWN_TYPES: frozenset[str] = frozenset(
    set(DIRECT_COMPONENTS) | set(TYPE_ALIASES) | set(SUB_COMPONENT_ALIASES) | SYNTHETIC_TYPES
)

# ---------------------------------------------------------------------------
# Type families
# ---------------------------------------------------------------------------

FIELD_TYPES: frozenset[str] = frozenset({"Input", "Textarea", "InputArea", "Select"})
CHOICE_TYPES: frozenset[str] = frozenset({"Checkbox", "Switch", "RadioGroup", "RadioItem", "Radio"})
FORM_CONTROL_TYPES: frozenset[str] = FIELD_TYPES | CHOICE_TYPES
CONTAINER_TYPES: frozenset[str] = frozenset({"Surface", "Stack", "Grid", "Cluster", "Div", "LayerCard"})
COUNTER_ACTIONS: frozenset[str] = frozenset({"increment", "decrement"})
SUBMIT_ACTION = "submit_form"


# ---------------------------------------------------------------------------
# Prop schemas
# ---------------------------------------------------------------------------

Gap = Literal["none", "xs", "sm", "base", "lg", "xl"]


class _Props(BaseModel):
    model_config = ConfigDict(extra="allow")


class BadgeProps(_Props):
    variant: Literal["primary", "secondary", "destructive", "outline", "beta"] | None = None


class BannerProps(_Props):
    variant: Literal["default", "alert", "error"] | None = None


class ButtonProps(_Props):
    variant: Literal["primary", "secondary", "ghost", "destructive", "outline", "secondary-destructive"] | None = None
    size: Literal["xs", "sm", "base", "lg"] | None = None
    shape: Literal["base", "square", "circle"] | None = None


class StackProps(_Props):
    gap: Gap | None = None
    align: Literal["start", "center", "end", "stretch"] | None = None


class ClusterProps(_Props):
    gap: Gap | None = None
    justify: Literal["start", "center", "end", "between"] | None = None
    align: Literal["start", "center", "end", "baseline", "stretch"] | None = None
    wrap: Literal["wrap", "nowrap"] | None = None


class GridProps(_Props):
    gap: Literal["none", "sm", "base", "lg"] | None = None
    variant: Literal["2up", "side-by-side", "2-1", "1-2", "3up", "4up", "6up"] | None = None


class TextProps(_Props):
    variant: (
        Literal["heading1", "heading2", "heading3", "body", "secondary", "success", "error", "mono", "mono-secondary"]
        | None
    ) = None
    size: Literal["xs", "sm", "base", "lg"] | None = None


class InputProps(_Props):
    size: Literal["xs", "sm", "base", "lg"] | None = None
    variant: Literal["default", "error"] | None = None


class InputAreaProps(InputProps):
    rows: int | None = None


class RadioProps(_Props):
    orientation: Literal["vertical", "horizontal"] | None = None


class SurfaceProps(_Props):
    pass


class MeterProps(_Props):
    value: float | None = None
    max: float | None = None


PROP_SCHEMAS: dict[str, type[BaseModel]] = {
    "Badge": BadgeProps,
    "Banner": BannerProps,
    "Button": ButtonProps,
    "Stack": StackProps,
    "Cluster": ClusterProps,
    "Grid": GridProps,
    "Text": TextProps,
    "Input": InputProps,
    "InputArea": InputAreaProps,
    "Radio": RadioProps,
    "Surface": SurfaceProps,
    "Meter": MeterProps,
}


def resolve_component(element_type: str) -> tuple[str, str]:
    """
    Resolve a generative type to (jsx_tag, import_name).

    import_name is "" for synthetic types that need no import.
    """
    if element_type == "Div":
        return "div", ""
    aliased = TYPE_ALIASES.get(element_type, element_type)
    if aliased in SUB_COMPONENT_ALIASES:
        parent, sub = SUB_COMPONENT_ALIASES[aliased]
        return f"{parent}.{sub}", parent
    return aliased, aliased
