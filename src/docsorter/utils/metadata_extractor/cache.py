"""Cache capability for extracted metadata and its default TTL implementation."""

import hashlib
from typing import Any, Awaitable, Dict, Optional, Protocol, Union

from cachetools import TTLCache

from docsorter.utils.metadata_extractor.models import MetadataRecord


DEFAULT_MAX_ENTRIES = 1000
DEFAULT_TTL_SECONDS = 7 * 24 * 60 * 60


def generate_text_hash(text: str) -> str:
    """Return the SHA-256 hex digest of ``text``, used as the cache key."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


class MetadataCache(Protocol):
    """Key/value store for MetadataRecords keyed by content hash.

    Implementations may be synchronous or asynchronous; the extraction
    service awaits the result of either method when it is awaitable.
    """

    def get(
        self, key: str
    ) -> Union[Optional[MetadataRecord], Awaitable[Optional[MetadataRecord]]]: ...

    def set(self, key: str, value: MetadataRecord) -> Union[None, Awaitable[None]]: ...


class TTLMetadataCache:
    """In-memory MetadataCache with size and age limits.

    Wraps a ``cachetools.TTLCache``: the least recently used entry is evicted
    once ``max_entries`` is reached and entries expire after ``ttl`` seconds.
    Stored records are returned verbatim on a hit.
    """

    def __init__(
        self,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        ttl: float = DEFAULT_TTL_SECONDS,
    ) -> None:
        """Initialize the cache.

        Args:
            max_entries: Maximum number of records held at once.
            ttl: Seconds after which a stored record expires.
        """
        self._cache: TTLCache[str, MetadataRecord] = TTLCache(
            maxsize=max_entries, ttl=ttl
        )
        self._hits = 0
        self._misses = 0
        self._sets = 0

    async def get(self, key: str) -> Optional[MetadataRecord]:
        record = self._cache.get(key)
        if record is None:
            self._misses += 1
        else:
            self._hits += 1
        return record

    async def set(self, key: str, value: MetadataRecord) -> None:
        self._cache[key] = value
        self._sets += 1

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    def get_stats(self) -> Dict[str, Any]:
        """Return hit/miss counters and the current number of entries."""
        lookups = self._hits + self._misses
        return {
            "hits": self._hits,
            "misses": self._misses,
            "sets": self._sets,
            "size": len(self._cache),
            "hit_rate": self._hits / lookups if lookups else 0.0,
        }
