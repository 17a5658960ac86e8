"""Protocol definitions for infrastructure adapters."""

# pylint: disable=unnecessary-ellipsis

from __future__ import annotations

from typing import Optional, Protocol

from reading_plan_engine.core.models import ProviderResult, ResponseShape, VerseCollection


class VerseStorePort(Protocol):
    """Port exposing the shared persistent chapter cache."""

    async def fetch_chapter(
        self, book_code: str, chapter: int, version_code: str
    ) -> Optional[VerseCollection]:
        """Return stored verses for the exact key or ``None`` when absent."""
        ...

    async def upsert_chapter(
        self, book_code: str, chapter: int, version_code: str, verses: VerseCollection
    ) -> None:
        """Insert or replace the verses stored under the key."""
        ...

    async def count(self) -> int:
        """Return the number of stored chapters."""
        ...

    def close(self) -> None:
        """Release the underlying storage."""
        ...


class TextProviderPort(Protocol):
    """Port exposing one external source of chapter text."""

    name: str
    shape: ResponseShape

    async def fetch_chapter(self, book_key: str, chapter: int, version: str) -> ProviderResult:
        """Return the chapter's verses or a failure; never raises."""
        ...


__all__ = ["TextProviderPort", "VerseStorePort"]
