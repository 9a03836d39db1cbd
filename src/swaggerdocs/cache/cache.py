"""In-memory cache of fetched documents with time-based staleness.

Entries are keyed by the exact top-level URL string (no normalization) and
stored with the time they were fetched. A ``put`` always replaces the whole
entry; nothing is evicted, so the cache grows by one entry per distinct
top-level URL for the life of the process.

Staleness is checked by the caller through :meth:`DocumentCache.is_fresh`
with a TTL in milliseconds, so the same cache can serve different TTLs.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from swaggerdocs.models import ParsedDocument


@dataclass(frozen=True)
class CacheEntry:
    """A cached document and its fetch time (seconds since the epoch)."""

    document: ParsedDocument
    fetched_at: float


class DocumentCache:
    """URL-keyed document cache.

    Args:
        clock: Returns the current time in seconds. Tests inject a fake.

    Example::

        cache = DocumentCache()
        cache.put("https://api.example.com/docs", composite)
        entry = cache.get("https://api.example.com/docs")
        if entry is not None and cache.is_fresh(entry, 300_000):
            ...
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def get(self, url: str) -> Optional[CacheEntry]:
        """Return the entry for *url*, fresh or stale, or ``None``."""
        return self._entries.get(url)

    def put(self, url: str, document: ParsedDocument) -> CacheEntry:
        """Store *document* for *url* stamped with the current time.

        Any previous entry for *url* is replaced.
        """
        entry = CacheEntry(document=document, fetched_at=self._clock())
        self._entries[url] = entry
        return entry

    def is_fresh(self, entry: CacheEntry, ttl_ms: int) -> bool:
        """Return True while ``now - entry.fetched_at`` is under *ttl_ms*."""
        age_ms = (self._clock() - entry.fetched_at) * 1000
        return age_ms < ttl_ms

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries
