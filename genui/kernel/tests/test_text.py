"""
Text normalizer

Covers:
  - leading emoji tokens stripped, inner and unspaced emoji kept
  - variation selectors and ZWJ sequences
  - recursive sanitizing with identity on no-op
  - sanitize_patch on add / replace / remove
"""

import pytest

from genui.kernel.text import sanitize_patch, sanitize_unknown_text, strip_leading_emoji_tokens


class TestStripLeadingEmoji:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("⚡ Performance", "Performance"),
            ("\U0001f680 ✨ Launch", "Launch"),
            ("  \U0001f4e7 Email", "Email"),
            ("\u2764\ufe0f Favorites", "Favorites"),
            ("\U0001f468\u200d\U0001f4bb Developers", "Developers"),
        ],
    )
    def test_stripped(self, text, expected):
        assert strip_leading_emoji_tokens(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["Plain heading", "Fast ⚡ builds", "⚡Performance", "", "42 items"],
    )
    def test_unchanged(self, text):
        assert strip_leading_emoji_tokens(text) == text


class TestSanitizeUnknownText:
    def test_nested(self):
        value = {"props": {"children": "✅ Done", "items": ["\U0001f4a1 Tip", "plain"]}, "count": 3}
        assert sanitize_unknown_text(value) == {"props": {"children": "Done", "items": ["Tip", "plain"]}, "count": 3}

    def test_identity_when_clean(self):
        value = {"props": {"children": "Hello", "items": ["a", 1, None]}}
        assert sanitize_unknown_text(value) is value

    def test_input_not_mutated(self):
        value = {"props": {"children": "✅ Done"}}
        sanitize_unknown_text(value)
        assert value == {"props": {"children": "✅ Done"}}

    def test_non_strings_pass_through(self):
        for value in (1, 2.5, True, None):
            assert sanitize_unknown_text(value) is value


class TestSanitizePatch:
    def test_add(self):
        op = {"op": "add", "path": "/elements/t", "value": {"key": "t", "props": {"children": "⚡ Fast"}}}
        assert sanitize_patch(op)["value"]["props"]["children"] == "Fast"
        assert op["value"]["props"]["children"] == "⚡ Fast"

    def test_replace_scalar(self):
        op = {"op": "replace", "path": "/elements/t/props/children", "value": "\U0001f389 Party"}
        assert sanitize_patch(op) == {**op, "value": "Party"}

    def test_remove_untouched(self):
        op = {"op": "remove", "path": "/elements/t"}
        assert sanitize_patch(op) is op

    def test_clean_op_identity(self):
        op = {"op": "replace", "path": "/root", "value": "card"}
        assert sanitize_patch(op) is op
