"""
Tree -> JSX

Covers:
  - full module output for a canonical card
  - null component for empty trees
  - imports: sorted, deduplicated, sub-components, Div and aliases
  - attribute serialization and text escaping
  - internal props dropped, cycles don't recurse
"""

import pytest

from genui.kernel.jsx import escape_jsx_text, quote_attr, serialize_prop_value, tree_to_jsx
from genui.kernel.normalizer import normalize_tree
from genui.kernel.tests.helpers import el, tree_of

CARD_JSX = """import { Stack, Surface, Text } from "@cloudflare/kumo";

export function GeneratedUI() {
  return (
  <Surface>
    <Stack gap="lg">
      <Text variant="heading2">Counter</Text>
      <Text variant="heading1">0</Text>
    </Stack>
  </Surface>
  );
}"""


class TestTreeToJsx:
    def test_card(self, card_tree):
        assert tree_to_jsx(card_tree) == CARD_JSX

    def test_component_name_and_source(self, card_tree):
        out = tree_to_jsx(card_tree, component_name="Counter", import_source="@acme/ui")
        assert out.startswith('import { Stack, Surface, Text } from "@acme/ui";\n\nexport function Counter() {')

    @pytest.mark.parametrize("tree", [None, {}, {"root": "", "elements": {}}, {"root": "gone", "elements": {"a": {}}}])
    def test_null_component(self, tree):
        assert tree_to_jsx(tree) == "export function GeneratedUI() {\n  return null;\n}"

    def test_div_has_no_import(self):
        tree = tree_of("d", el("d", "Div", {"className": "p-4"}))
        out = tree_to_jsx(tree)
        assert not out.startswith("import")
        assert '<div className="p-4" />' in out

    def test_sub_components_and_aliases(self):
        tree = tree_of(
            "form",
            el("form", "Stack", {}, ["sel", "notes"]),
            el("sel", "Select", {"label": "Plan"}, ["opt"]),
            el("opt", "SelectOption", {"value": "pro", "children": "Pro"}),
            el("notes", "Textarea", {"label": "Notes"}),
        )
        out = tree_to_jsx(tree, skip_normalization=True)
        assert out.splitlines()[0] == 'import { InputArea, Select, Stack } from "@cloudflare/kumo";'
        assert '<Select.Option value="pro">Pro</Select.Option>' in out
        assert '<InputArea label="Notes" />' in out

    def test_internal_props_dropped(self):
        tree = tree_of("b", el("b", "Button", {"children": "Go", "action": "x", "visible": True}))
        assert '<Button>Go</Button>' in tree_to_jsx(tree)

    def test_long_text_on_own_line(self):
        text = "x" * 61
        out = tree_to_jsx(tree_of("t", el("t", "Text", {"children": text})))
        assert f"  <Text>\n    {text}\n  </Text>" in out

    def test_cycle_not_followed(self):
        tree = tree_of("a", el("a", "Stack", {}, ["b"]), el("b", "Stack", {}, ["a"]))
        out = tree_to_jsx(tree, skip_normalization=True)
        assert out.count("<Stack") == 2

    def test_matches_normalized_raw_export(self):
        tree = tree_of("sel", el("sel", "Select", {"label": "Plan"}))
        assert tree_to_jsx(tree) == tree_to_jsx(normalize_tree(tree), skip_normalization=True)

    def test_normalizes_by_default(self):
        tree = tree_of("sel", el("sel", "Select", {"label": "Plan"}))
        assert "<Input " in tree_to_jsx(tree)
        assert "<Select " in tree_to_jsx(tree, skip_normalization=True)


class TestSerializeProps:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("lg", 'gap="lg"'),
            (True, "gap"),
            (False, "gap={false}"),
            (3, "gap={3}"),
            (2.0, "gap={2}"),
            (1.5, "gap={1.5}"),
            ({"a": [1, 2]}, 'gap={{"a":[1,2]}}'),
            (None, None),
        ],
    )
    def test_values(self, value, expected):
        assert serialize_prop_value("gap", value) == expected

    def test_quote_with_double_quote(self):
        assert quote_attr('say "hi" ${x}') == '{`say "hi" \\${x}`}'

    def test_escape_text(self):
        assert escape_jsx_text("a < b & {c}") == "a &lt; b &amp; &#123;c&#125;"
