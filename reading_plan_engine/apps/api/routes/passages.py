"""Chapter and passage text routes."""

from __future__ import annotations

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Path, Query

from reading_plan_engine.core.books import canonical_book_key
from reading_plan_engine.services.bible_service import BibleService
from reading_plan_engine.services.versions import normalize_version

from ..dependencies import get_bible_service

router = APIRouter(tags=["passages"])


@router.get("/chapters/{book_code}/{chapter}")
async def get_chapter(
    book_code: str,
    chapter: Annotated[int, Path(ge=1)],
    bible: Annotated[BibleService, Depends(get_bible_service)],
    version: Optional[str] = None,
    book_name: Optional[str] = None,
) -> dict[str, object]:
    """Return one chapter; ``available`` is false when no source had it."""
    verses = await bible.resolve_chapter(book_code, chapter, version, book_name=book_name)
    return {
        "book_code": book_code,
        "book_key": canonical_book_key(book_code, book_name),
        "chapter": chapter,
        "version": normalize_version(version),
        "verses": list(verses),
        "available": bool(verses),
    }


@router.get("/passages")
async def get_passage(
    q: Annotated[str, Query(min_length=1)],
    bible: Annotated[BibleService, Depends(get_bible_service)],
    version: Optional[str] = None,
) -> dict[str, object]:
    reference = bible.parse_passage(q)
    verses = await bible.resolve_passage(q, version)
    return {
        "passage": q,
        "reference": reference.to_dict(),
        "version": normalize_version(version),
        "verses": list(verses),
        "available": bool(verses),
    }


__all__ = ["router"]
