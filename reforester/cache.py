"""Time-expiring key/value cache shared by every data source.

A single instance is built per process and passed by reference to the
fetchers and the recommendation generator. Entries expire once
``now - created_at >= ttl``; there is no size bound. No locking: two
concurrent misses may both recompute and both write (last writer wins),
which is harmless because cached values are deterministic per key.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)

_KEY_PREVIEW_CHARS = 50


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    created_at: float
    ttl: float

    def is_fresh(self, now: float) -> bool:
        return now - self.created_at < self.ttl


class ExpiringCache:
    """Key/value store with per-entry time-to-live.

    Parameters
    ----------
    default_ttl : TTL in seconds used when ``set`` is called without one.
    clock : Zero-argument callable returning seconds; injectable for tests.
    """

    def __init__(
        self,
        default_ttl: float = 15 * 60,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` on a miss or stale entry."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_fresh(self._clock()):
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        self._entries[key] = CacheEntry(
            value=value,
            created_at=self._clock(),
            ttl=self.default_ttl if ttl is None else ttl,
        )

    def clear(self) -> int:
        """Remove every entry and return how many were removed."""
        removed = len(self._entries)
        self._entries.clear()
        logger.debug("Cleared %d cache entries", removed)
        return removed

    def stats(self) -> dict[str, Any]:
        """Report size and per-entry age / remaining TTL.

        Keys are truncated so coordinates and fingerprints are not echoed
        in full to operational surfaces.
        """
        now = self._clock()
        entries = []
        for key, entry in self._entries.items():
            age = now - entry.created_at
            preview = key if len(key) <= _KEY_PREVIEW_CHARS else key[:_KEY_PREVIEW_CHARS] + "..."
            entries.append({
                "key": preview,
                "age": round(age, 3),
                "ttlRemaining": round(max(0.0, entry.ttl - age), 3),
            })
        return {
            "size": len(self._entries),
            "ttl": self.default_ttl,
            "entries": entries,
        }
