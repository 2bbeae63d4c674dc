"""Small expiring cache for per-guild derived config."""

from __future__ import annotations

import time
from typing import Any, Callable, Hashable


class TTLCache:
    """Maps keys to values that expire ``ttl_seconds`` after being set.

    The clock is injectable so tests can advance time without sleeping.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, Any]] = {}

    def get(self, key: Hashable) -> Any | None:
        """Return cached value if not expired, else None."""
        if key in self._entries:
            expiry, value = self._entries[key]
            if self._clock() < expiry:
                return value
            del self._entries[key]
        return None

    def set(self, key: Hashable, value: Any) -> None:
        self._entries[key] = (self._clock() + self._ttl, value)

    def invalidate(self, key: Hashable) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: Hashable) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
