import logging
import time
from typing import Any, Callable

logger = logging.getLogger(__name__)


class TTLCache:
    """
    In-process key -> value cache where every entry expires ttl_seconds after it was set.

    There is no locking: two requests missing the same key will both compute and set
    the value, and the last write wins.
    """

    def __init__(self, ttl_seconds: float, clock: Callable[[], float] = time.monotonic):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, tuple[float, Any]] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        expires_at, value = entry
        if self._clock() >= expires_at:
            logger.debug(f"cache entry expired: {key}")
            self._entries.pop(key, None)
            return None
        return value

    def set(self, key: str, value: Any) -> None:
        now = self._clock()
        self._purge_expired(now)
        self._entries[key] = (now + self.ttl_seconds, value)

    def _purge_expired(self, now: float) -> None:
        expired = [k for k, (expires_at, _) in self._entries.items() if now >= expires_at]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug(f"purged {len(expired)} expired cache entries")

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        now = self._clock()
        return sum(1 for expires_at, _ in self._entries.values() if now < expires_at)
