"""Query cache shared between the voice pipeline and the host UI.

Entries are keyed by API path. The voice handlers only invalidate, and only
after a write has succeeded; views re-fetch through their listeners.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

TASKS_KEY = "/api/tasks"
FINANCIAL_RECORDS_KEY = "/api/financial/records"
FINANCIAL_SUMMARY_KEY = "/api/financial/summary"

InvalidationListener = Callable[[str], None]


class QueryCache:
    """In-memory cache of query results with invalidation listeners."""

    def __init__(self):
        self._entries: dict[str, Any] = {}
        self._listeners: list[InvalidationListener] = []

    def get(self, key: str, default: Any = None) -> Any:
        return self._entries.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._entries[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._entries

    def add_listener(self, listener: InvalidationListener) -> None:
        """Call ``listener(key)`` whenever a key is invalidated."""
        self._listeners.append(listener)

    def invalidate(self, *keys: str) -> None:
        """Drop cached entries and notify listeners, one call per key."""
        for key in keys:
            self._entries.pop(key, None)
            logger.debug("Invalidated query %s", key)
            for listener in self._listeners:
                try:
                    listener(key)
                except Exception as e:
                    logger.warning(f"Cache invalidation listener failed for {key}: {e}")
