from __future__ import annotations

import time
from typing import Any, Dict, Tuple

RAIN_KEY = "rain"
FEED_KEY = "feed"

# Slots that only make sense for the location they were fetched for. The feed
# covers every station in the country and survives location changes.
LOCATION_KEYS = (RAIN_KEY,)


class RequestCache:
    """Short lived in-memory cache for Buienradar responses.

    Every slot holds a single value together with its expiry. Writing a slot
    replaces both, so a refreshed value can never be dropped by the expiry of
    the value it replaced.
    """

    def __init__(self, time_func=time.monotonic) -> None:
        self._time_func = time_func
        self._slots: Dict[str, Tuple[float, Any]] = {}

    def get(self, key: str) -> Any:
        slot = self._slots.get(key)
        if not slot:
            return None
        expires_at, value = slot
        if expires_at <= self._time_func():
            del self._slots[key]
            return None
        return value

    def set(self, key: str, value: Any, ttl: float) -> None:
        self._slots[key] = (self._time_func() + ttl, value)

    def invalidate(self, *keys: str) -> None:
        for key in keys:
            self._slots.pop(key, None)

    def invalidate_location(self) -> None:
        """Drop the slots tied to the previous location."""
        self.invalidate(*LOCATION_KEYS)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def clear(self) -> None:
        self._slots.clear()


__all__ = ["RequestCache", "RAIN_KEY", "FEED_KEY", "LOCATION_KEYS"]
