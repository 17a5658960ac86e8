"""Top-level chapter and passage resolution.

``resolve_chapter`` composes the version normalizer, the tiered cache and the
provider chain. It never raises: when every tier and provider comes up empty
the caller gets ``()`` and must render a "content unavailable" state.
"""

from __future__ import annotations

import asyncio
from typing import Optional

from reading_plan_engine.core.books import (
    canonical_book_key,
    chapter_count,
    is_known_book_key,
    lookup_book_code,
)
from reading_plan_engine.core.logging import get_logger
from reading_plan_engine.core.models import PassageReference, VerseCollection

from .passage_parser import parse_passage
from .provider_chain import ProviderChain
from .verse_cache import TieredVerseCache
from .versions import normalize_version

logger = get_logger(__name__)


def _is_persistable(book_key: str, book_name: Optional[str]) -> bool:
    """Only chapters of mapped books reach the shared store.

    Two-letter fallback codes for unmapped names can coincide with a real
    book's key; those results stay in process memory.
    """
    if not is_known_book_key(book_key):
        return False
    return book_name is None or lookup_book_code(book_name) is not None


class BibleService:
    """Resolve Bible text for reading-plan passages."""

    def __init__(self, cache: TieredVerseCache, chain: ProviderChain) -> None:
        self.cache = cache
        self.chain = chain

    @staticmethod
    def parse_passage(raw_passage: str) -> PassageReference:
        return parse_passage(raw_passage)

    async def resolve_chapter(
        self,
        book_code: str,
        chapter: int,
        version: Optional[str] = None,
        book_name: Optional[str] = None,
    ) -> VerseCollection:
        version_code = normalize_version(version)
        book_key = canonical_book_key(book_code, book_name)
        try:
            cached = await self.cache.get(book_key, chapter, version_code)
            if cached:
                return cached

            outcome = await self.chain.resolve(book_key, chapter, version_code)
            if not outcome.ok:
                return ()
            self.cache.put(
                book_key,
                chapter,
                version_code,
                outcome.verses,
                persist=_is_persistable(book_key, book_name),
            )
            return outcome.verses
        except Exception:  # pylint: disable=broad-except
            logger.exception(
                "[bible] unexpected error resolving %s %s/%s", version_code, book_key, chapter
            )
            return ()

    async def resolve_passage(
        self, raw_passage: str, version: Optional[str] = None
    ) -> VerseCollection:
        """Resolve every chapter of the passage concurrently, joined in chapter order.

        Ranges running past the book's last chapter are cut at that chapter.
        """
        reference = parse_passage(raw_passage)
        book_key = canonical_book_key(reference.book_code, reference.book_name)
        last_chapter = min(reference.end_chapter, chapter_count(book_key))
        if last_chapter < reference.end_chapter:
            logger.warning(
                "[bible] %r runs past chapter %s of %s; truncating",
                raw_passage,
                last_chapter,
                book_key,
            )
        chapters = await asyncio.gather(
            *(
                self.resolve_chapter(
                    reference.book_code, chapter, version, book_name=reference.book_name
                )
                for chapter in range(reference.start_chapter, last_chapter + 1)
            )
        )
        return tuple(verse for verses in chapters for verse in verses)


__all__ = ["BibleService"]
