"""
genui configuration — all environment variables in one place.

Read from environment at import time. Tests override attributes on the
`settings` instance directly (monkeypatch.setattr).
"""

from __future__ import annotations

import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name, "")
    try:
        return int(raw)
    except ValueError:
        return default


class Settings:
    """Kernel settings from environment variables."""

    # Logging (only the CLI installs handlers)
    LOG_LEVEL: str = os.environ.get("GENUI_LOG_LEVEL", "WARNING").upper()

    # Graders
    MAX_DEPTH: int = _env_int("GENUI_MAX_DEPTH", 8)
    SIMPLE_LAYOUT_MAX_ELEMENTS: int = _env_int("GENUI_SIMPLE_LAYOUT_MAX_ELEMENTS", 12)

    # Streaming
    STRIP_LEADING_EMOJI: bool = _env_bool("GENUI_STRIP_LEADING_EMOJI", True)

    # Actions
    COUNTER_KEY: str = os.environ.get("GENUI_COUNTER_KEY", "count-display")

    # JSX export
    JSX_COMPONENT_NAME: str = os.environ.get("GENUI_JSX_COMPONENT_NAME", "GeneratedUI")
    JSX_IMPORT_SOURCE: str = os.environ.get("GENUI_JSX_IMPORT_SOURCE", "@cloudflare/kumo")


settings = Settings()
