"""In-memory TTL cache and a minimum-interval rate limiter for LLM calls."""

import asyncio
import hashlib
import time
from collections.abc import Awaitable, Callable
from typing import Any

CACHE_KEY_CONTENT_CHARS = 5000


def cache_key(url: str, content: str) -> str:
    """Key from the URL and a hash of the leading content."""
    digest = hashlib.sha256(content[:CACHE_KEY_CONTENT_CHARS].encode("utf-8")).hexdigest()
    return f"{url}:{digest[:16]}"


class TTLCache:
    """
    Insertion-ordered cache whose entries expire after ``ttl_seconds``.

    Expired entries are dropped when read. When the cache grows past
    ``max_entries`` the oldest ``evict_fraction`` of entries is removed.
    """

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int = 100,
        evict_fraction: float = 0.2,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self.evict_fraction = evict_fraction
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        stored_at, value = entry
        if self._clock() - stored_at >= self.ttl_seconds:
            del self._entries[key]
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        self._entries.pop(key, None)
        self._entries[key] = (self._clock(), value)
        if len(self._entries) > self.max_entries:
            self._evict()

    def _evict(self) -> None:
        count = max(1, int(len(self._entries) * self.evict_fraction))
        for key in list(self._entries)[:count]:
            del self._entries[key]

    def clear(self) -> None:
        self._entries.clear()


class RateLimiter:
    """Spaces calls at least ``min_interval`` seconds apart."""

    def __init__(
        self,
        min_interval: float,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._last: float | None = None
        self._lock = asyncio.Lock()

    async def wait(self) -> float:
        """Block until the next call may proceed. Returns the seconds waited."""
        async with self._lock:
            waited = 0.0
            if self._last is not None:
                remaining = self.min_interval - (self._clock() - self._last)
                if remaining > 0:
                    await self._sleep(remaining)
                    waited = remaining
            self._last = self._clock()
            return waited
