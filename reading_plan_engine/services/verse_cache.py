"""Two-tier chapter cache: process memory first, then the shared store.

Keys are ``(book key, chapter, normalized version)``. The memory tier lives as
long as the process and never evicts. Persistent writes are dispatched to the
background runner so a slow or failing store never delays a reader; a failed
write only means the next reader fetches from the providers again.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Dict, Optional

from reading_plan_engine.core.logging import get_logger
from reading_plan_engine.core.models import VerseCollection
from reading_plan_engine.core.ports import VerseStorePort

from .background import BackgroundTaskRunner

logger = get_logger(__name__)


def cache_key(book_key: str, chapter: int, version: str) -> str:
    return f"{book_key}:{chapter}:{version}"


@dataclass(slots=True)
class CacheStats:
    """Mutable counters for cache operations."""

    memory_hits: int = 0
    store_hits: int = 0
    misses: int = 0
    stores: int = 0
    store_errors: int = 0

    def as_dict(self) -> dict[str, int]:
        return {
            "memory_hits": self.memory_hits,
            "store_hits": self.store_hits,
            "misses": self.misses,
            "stores": self.stores,
            "store_errors": self.store_errors,
        }


@dataclass(frozen=True, slots=True)
class CachedChapter:
    """A cached verse collection and when it was written."""

    verses: VerseCollection
    written_at: float


class TieredVerseCache:
    """Memory + persistent cache for resolved chapters."""

    def __init__(
        self,
        store: Optional[VerseStorePort],
        background: BackgroundTaskRunner,
    ) -> None:
        self._store = store
        self._background = background
        self._memory: Dict[str, CachedChapter] = {}
        self.stats = CacheStats()

    async def get(self, book_key: str, chapter: int, version: str) -> Optional[VerseCollection]:
        key = cache_key(book_key, chapter, version)
        entry = self._memory.get(key)
        if entry is not None:
            self.stats.memory_hits += 1
            return entry.verses

        if self._store is not None:
            try:
                stored = await self._store.fetch_chapter(book_key, chapter, version)
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("[cache] store read failed for %s: %s", key, exc)
                stored = None
            if stored:
                self.stats.store_hits += 1
                self._memory[key] = CachedChapter(tuple(stored), time.time())
                return self._memory[key].verses

        self.stats.misses += 1
        return None

    def put(
        self,
        book_key: str,
        chapter: int,
        version: str,
        verses: VerseCollection,
        *,
        persist: bool = True,
    ) -> None:
        """Write-through to memory now; persist in the background."""
        key = cache_key(book_key, chapter, version)
        collection = tuple(verses)
        self._memory[key] = CachedChapter(collection, time.time())
        self.stats.stores += 1
        if not persist or self._store is None:
            return
        self._background.spawn(
            self._persist(book_key, chapter, version, collection),
            name=f"persist-chapter:{key}",
        )

    async def _persist(
        self, book_key: str, chapter: int, version: str, verses: VerseCollection
    ) -> None:
        assert self._store is not None
        try:
            await self._store.upsert_chapter(book_key, chapter, version, verses)
        except Exception as exc:  # pylint: disable=broad-except
            self.stats.store_errors += 1
            logger.warning(
                "[cache] persistent write dropped for %s: %s",
                cache_key(book_key, chapter, version),
                exc,
            )
            return
        logger.debug("[cache] persisted %s", cache_key(book_key, chapter, version))

    def clear_memory(self) -> int:
        removed = len(self._memory)
        self._memory.clear()
        return removed

    def memory_size(self) -> int:
        return len(self._memory)

    def snapshot(self) -> dict[str, object]:
        return {
            "memory_entries": self.memory_size(),
            "persistent_enabled": self._store is not None,
            "pending_writes": self._background.pending,
            "stats": self.stats.as_dict(),
        }


__all__ = ["CacheStats", "CachedChapter", "TieredVerseCache", "cache_key"]
