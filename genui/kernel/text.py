"""
genui Kernel — text normalizer for model-written copy.

Models like to prefix headings and labels with emoji icons ("⚡ Performance").
The component library has no generic icon slot, so leading emoji tokens are
stripped from every string inside add/replace patch values.
"""

from __future__ import annotations

import re
from typing import Any

# Pictograph blocks: misc technical, misc symbols, dingbats, arrows/stars,
# and the supplementary symbol/emoji planes (skin-tone modifiers included).
_PICTOGRAPH = r"[\u2300-\u23ff\u2600-\u27bf\u2b00-\u2bff\U0001f000-\U0001faff]"
_VARIANT = r"[\ufe0e\ufe0f]?"
_EMOJI = rf"{_PICTOGRAPH}{_VARIANT}(?:\u200d{_PICTOGRAPH}{_VARIANT})*"

# One or more leading emoji clusters, each followed by whitespace.
_LEADING_EMOJI_TOKENS = re.compile(rf"^\s*(?:{_EMOJI}\s+)+")


def strip_leading_emoji_tokens(text: str) -> str:
    return _LEADING_EMOJI_TOKENS.sub("", text, count=1)


def sanitize_unknown_text(value: Any) -> Any:
    """
    Recursively strip leading emoji tokens from all string leaves.

    Returns the original object when nothing changed, so callers can use
    identity to detect a no-op.
    """
    if isinstance(value, str):
        stripped = strip_leading_emoji_tokens(value)
        return value if stripped == value else stripped

    if isinstance(value, list):
        out: list[Any] | None = None
        for i, item in enumerate(value):
            new_item = sanitize_unknown_text(item)
            if new_item is not item and out is None:
                out = list(value)
            if out is not None:
                out[i] = new_item
        return value if out is None else out

    if isinstance(value, dict):
        out_dict: dict[str, Any] | None = None
        for k, item in value.items():
            new_item = sanitize_unknown_text(item)
            if new_item is not item and out_dict is None:
                out_dict = dict(value)
            if out_dict is not None:
                out_dict[k] = new_item
        return value if out_dict is None else out_dict

    return value


def sanitize_patch(op: dict[str, Any]) -> dict[str, Any]:
    """Strip leading emoji tokens anywhere inside a patch value."""
    if op.get("op") == "remove" or "value" not in op:
        return op
    value = op["value"]
    new_value = sanitize_unknown_text(value)
    if new_value is value:
        return op
    return {**op, "value": new_value}
