"""In-process document cache with LRU eviction and per-entry expiry."""

from __future__ import annotations

import logging
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass

from src.models.documents import Document

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 1000
DEFAULT_TTL_SECONDS = 60 * 60  # 1 hour


@dataclass
class CacheEntry:
    document: Document
    expires_at: float


class DocumentCache:
    """Bounded, time-expiring cache from document id to full document.

    Entries expire ``ttl_seconds`` after insertion. When the cache is full,
    expired entries are purged first; if that frees nothing the least
    recently used entry is evicted.

    Shared across concurrent requests without locking: the event loop never
    switches tasks inside ``get``/``put``, and a racing fill for the same id
    just overwrites an identical document.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: str) -> bool:
        entry = self._entries.get(key)
        return entry is not None and entry.expires_at > self._clock()

    def get(self, key: str) -> Document | None:
        """Return the cached document, or None on a miss or expired entry."""
        entry = self._entries.get(key)
        if entry is None:
            self._misses += 1
            return None
        if entry.expires_at <= self._clock():
            del self._entries[key]
            self._misses += 1
            return None
        self._entries.move_to_end(key)
        self._hits += 1
        return entry.document

    def put(self, key: str, document: Document) -> None:
        """Insert or replace a document; expiry restarts from now."""
        now = self._clock()
        if key in self._entries:
            del self._entries[key]
        elif len(self._entries) >= self.max_entries:
            self._evict(now)
        self._entries[key] = CacheEntry(document, now + self.ttl_seconds)

    def stats(self) -> dict[str, int]:
        return {
            "size": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "evictions": self._evictions,
        }

    def _evict(self, now: float) -> None:
        expired = [k for k, e in self._entries.items() if e.expires_at <= now]
        for key in expired:
            del self._entries[key]
        self._evictions += len(expired)
        if len(self._entries) >= self.max_entries:
            key, _ = self._entries.popitem(last=False)
            self._evictions += 1
            logger.debug("Evicted least recently used document %s", key)
        elif expired:
            logger.debug("Purged %d expired documents", len(expired))
