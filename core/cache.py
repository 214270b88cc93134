# core/cache.py

"""
In-memory snapshot cache for spreadsheet reads.

Every dashboard page lists the same Complaints/Users sheets; reading them
once per TTL instead of once per page keeps the Apps Script quota sane.
Writes invalidate the matching snapshot.
"""

import time
from threading import Lock
from typing import Any, Callable, Dict, Optional, Tuple

from core.logging_config import logger


class SnapshotCache:
    """
    TTL cache keyed by spreadsheet action name.

    Thread-safe for concurrent access. `clock` is injectable for tests.
    """

    def __init__(self, ttl_seconds: float = 30, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: Dict[str, Tuple[float, Any]] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[Any]:
        """Cached value, or None when missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            expires_at, value = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None

            return value

    def set(self, key: str, value: Any):
        if self.ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[key] = (self._clock() + self.ttl_seconds, value)

    def get_or_load(self, key: str, loader: Callable[[], Any]) -> Any:
        """
        Return the cached snapshot or call `loader` and store its result.
        The loader runs outside the lock; a concurrent miss may load twice.
        """
        cached = self.get(key)
        if cached is not None:
            logger.debug(f"Snapshot hit: {key}")
            return cached

        value = loader()
        self.set(key, value)
        logger.debug(f"Snapshot miss, stored: {key}")
        return value

    def invalidate(self, *keys: str):
        with self._lock:
            for key in keys:
                self._entries.pop(key, None)

    def clear(self):
        with self._lock:
            self._entries.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._entries)
