"""
genui Kernel — Runtime Value Store

Live user-entered values keyed by element key, with a "touched" flag that
separates values the user actually changed from values mirrored in from
element defaults on mount. Submit handlers read touched values only.

One store per rendered session. It is explicitly constructed and passed
around; there is no module-level instance.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class RuntimeValueStore:
    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._touched: set[str] = set()
        self._listeners: list[Listener] = []

    def set_value(self, key: str, value: Any, *, touched: bool = True) -> None:
        self._values[key] = value
        if touched:
            self._touched.add(key)
        self._notify()

    def get_value(self, key: str) -> Any:
        return self._values.get(key)

    def has_value(self, key: str) -> bool:
        return self._values.get(key) is not None

    def is_touched(self, key: str) -> bool:
        return key in self._touched

    def snapshot_touched(self) -> dict[str, Any]:
        """Touched entries with a non-None value."""
        return {k: v for k, v in self._values.items() if k in self._touched and v is not None}

    def snapshot_all(self) -> dict[str, Any]:
        """Every entry with a non-None value, touched or not."""
        return {k: v for k, v in self._values.items() if v is not None}

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def clear(self) -> None:
        self._values.clear()
        self._touched.clear()
        self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception:
                logger.exception("RuntimeValueStore: listener failed")
