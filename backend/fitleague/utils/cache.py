import time
from collections.abc import Callable
from threading import Lock
from typing import Any


class TTLCache:
    """
    Small read-through cache with a per-entry time-to-live.

    Keys are plain strings so related entries can share a prefix
    (for example ``rejected_summary:{user_id}``) and be invalidated together.
    """

    def __init__(
        self,
        default_ttl_s: float = 120.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl_s = default_ttl_s
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}
        self._lock = Lock()

    def get(self, key: str) -> Any | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            expires_at, value = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            return value

    def set(self, key: str, value: Any, ttl_s: float | None = None) -> None:
        ttl = self._default_ttl_s if ttl_s is None else ttl_s
        with self._lock:
            self._entries[key] = (self._clock() + max(0.0, ttl), value)

    def invalidate(self, prefix: str | None = None) -> int:
        """Drop every key starting with ``prefix``, or everything when no prefix is given."""
        with self._lock:
            if not prefix:
                count = len(self._entries)
                self._entries.clear()
                return count

            stale_keys = [key for key in self._entries if key.startswith(prefix)]
            for key in stale_keys:
                del self._entries[key]
            return len(stale_keys)

    def clear(self) -> None:
        self.invalidate()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
