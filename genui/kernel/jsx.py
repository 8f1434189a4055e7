"""
genui Kernel — Tree → JSX source

Serializes a tree into a self-contained JSX module: one named import line
for every component used (sorted, deduplicated) and one exported function
component. The tree goes through the same normalize_tree pipeline as the
render path, so exported code matches what was rendered.
"""

from __future__ import annotations

import json
from typing import Any

from genui.config import settings
from genui.kernel.catalog import resolve_component
from genui.kernel.normalizer import normalize_tree
from genui.kernel.types import get_children, get_element, get_props

# Element-level fields that must never appear as JSX attributes.
INTERNAL_PROPS: frozenset[str] = frozenset({"action", "visible", "parentKey", "key"})

INLINE_TEXT_MAX = 60
INDENT = 2


def _null_component(name: str) -> str:
    return f"export function {name}() {{\n  return null;\n}}"


def tree_to_jsx(
    tree: dict[str, Any] | None,
    component_name: str | None = None,
    skip_normalization: bool = False,
    import_source: str | None = None,
) -> str:
    """
    Convert a tree into a JSX module string.

    Args:
        tree:               The tree to serialize (None or empty → null component)
        component_name:     Exported function name (settings.JSX_COMPONENT_NAME)
        skip_normalization: Serialize as-is, e.g. when already normalized
        import_source:      Module the components import from (settings.JSX_IMPORT_SOURCE)

    Returns:
        JSX source, without a trailing newline
    """
    name = component_name or settings.JSX_COMPONENT_NAME
    source = import_source or settings.JSX_IMPORT_SOURCE

    if not tree or not tree.get("root") or not tree.get("elements"):
        return _null_component(name)

    normalized = tree if skip_normalization else normalize_tree(tree)
    root = get_element(normalized, normalized.get("root"))
    if root is None:
        return _null_component(name)

    imports: set[str] = set()
    body = _serialize_element(normalized, root, imports, INDENT, set())

    header = ""
    if imports:
        header = f'import {{ {", ".join(sorted(imports))} }} from "{source}";\n\n'
    return f"{header}export function {name}() {{\n  return (\n{body}\n  );\n}}"


def _serialize_element(
    tree: dict[str, Any],
    element: dict[str, Any],
    imports: set[str],
    indent: int,
    ancestors: set[str],
) -> str:
    pad = " " * indent
    tag, import_name = resolve_component(str(element.get("type", "Div")))
    if import_name:
        imports.add(import_name)

    props = get_props(element)
    text = props.get("children") if isinstance(props.get("children"), str) else None
    attrs = [(k, v) for k, v in props.items() if k not in INTERNAL_PROPS and not (k == "children" and text is not None)]
    attr_str = serialize_props(attrs)
    open_tag = f"<{tag} {attr_str}" if attr_str else f"<{tag}"

    key = element.get("key")
    child_elements = []
    for child_key in get_children(element):
        child = get_element(tree, child_key)
        if child is None or child_key in ancestors or child_key == key:
            continue
        child_elements.append(child)

    if not child_elements and text is None:
        return f"{pad}{open_tag} />"

    if not child_elements:
        if len(text) <= INLINE_TEXT_MAX and "\n" not in text:
            return f"{pad}{open_tag}>{escape_jsx_text(text)}</{tag}>"
        return f"{pad}{open_tag}>\n{pad}  {escape_jsx_text(text)}\n{pad}</{tag}>"

    lines = [f"{pad}{open_tag}>"]
    if text is not None:
        lines.append(f"{pad}  {escape_jsx_text(text)}")
    inner_ancestors = ancestors | {key} if isinstance(key, str) else ancestors
    for child in child_elements:
        lines.append(_serialize_element(tree, child, imports, indent + INDENT, inner_ancestors))
    lines.append(f"{pad}</{tag}>")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Props
# ---------------------------------------------------------------------------


def serialize_props(entries: list[tuple[str, Any]]) -> str:
    parts = [s for s in (serialize_prop_value(k, v) for k, v in entries) if s is not None]
    return " ".join(parts)


def serialize_prop_value(key: str, value: Any) -> str | None:
    """
    One JSX attribute.

      str        key="value"  (or key={`...`} when it contains a double quote)
      True       key
      False      key={false}
      int/float  key={1}
      dict/list  key={<json>}
      None       omitted
    """
    if value is None:
        return None
    if isinstance(value, str):
        return f"{key}={quote_attr(value)}"
    if isinstance(value, bool):
        return key if value else f"{key}={{false}}"
    if isinstance(value, (int, float)):
        return f"{key}={{{_number(value)}}}"
    if isinstance(value, (dict, list)):
        return f"{key}={{{json.dumps(value, separators=(',', ':'), ensure_ascii=False)}}}"
    return None


def _number(value: int | float) -> str:
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return repr(value)


def quote_attr(value: str) -> str:
    if '"' in value:
        escaped = value.replace("\\", "\\\\").replace("`", "\\`").replace("${", "\\${")
        return "{`" + escaped + "`}"
    return f'"{value}"'


def escape_jsx_text(text: str) -> str:
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace("{", "&#123;")
        .replace("}", "&#125;")
    )
