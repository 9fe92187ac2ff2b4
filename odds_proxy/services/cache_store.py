from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Callable

from odds_proxy.domain.types import CacheEntry

logger = logging.getLogger(__name__)


class ResponseCache:
    """In-memory store of upstream responses keyed by derived cache key.

    Entries are never mutated; a refresh replaces the whole entry. With
    ``max_entries`` of 0 the store grows without bound for the lifetime of the
    process, otherwise the least recently used key is evicted on overflow.
    """

    def __init__(self, max_entries: int = 0, clock: Callable[[], float] = time.monotonic) -> None:
        if max_entries < 0:
            raise ValueError("max_entries must be >= 0")
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._lock = threading.Lock()
        self.evictions = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def now(self) -> float:
        return self._clock()

    def new_entry(self, status_code: int, body: str) -> CacheEntry:
        return CacheEntry(timestamp=self._clock(), status_code=status_code, body=body)

    def get(self, key: str) -> CacheEntry | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self.max_entries:
                self._entries.move_to_end(key)
            return entry

    def put(self, key: str, entry: CacheEntry) -> None:
        with self._lock:
            self._entries[key] = entry
            self._entries.move_to_end(key)
            if self.max_entries:
                while len(self._entries) > self.max_entries:
                    evicted, _ = self._entries.popitem(last=False)
                    self.evictions += 1
                    logger.debug("Evicted cache entry %s", evicted)

    def is_fresh(self, entry: CacheEntry, ttl_seconds: float) -> bool:
        return (self._clock() - entry.timestamp) < ttl_seconds

    def lookup_fresh(self, key: str, ttl_seconds: float) -> CacheEntry | None:
        entry = self.get(key)
        if entry is None or not self.is_fresh(entry, ttl_seconds):
            return None
        return entry

    def sweep(self, max_age_seconds: float) -> int:
        cutoff = self._clock() - max_age_seconds
        with self._lock:
            stale = [key for key, entry in self._entries.items() if entry.timestamp <= cutoff]
            for key in stale:
                del self._entries[key]
        if stale:
            logger.info("Swept %d cache entries older than %ss", len(stale), max_age_seconds)
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def stats(self) -> dict[str, int]:
        with self._lock:
            return {
                "entries": len(self._entries),
                "max_entries": self.max_entries,
                "evictions": self.evictions,
            }
