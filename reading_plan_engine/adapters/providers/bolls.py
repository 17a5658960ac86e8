"""bolls.life provider: numeric book ids, verse records with inline HTML."""

from __future__ import annotations

from reading_plan_engine.core.books import book_ordinal
from reading_plan_engine.core.models import FailureReason, ProviderResult, ResponseShape

from .base import HttpTextProvider


class BollsProvider(HttpTextProvider):
    """``/get-text/{translation}/{book number}/{chapter}/``."""

    name = "bolls"
    shape = ResponseShape.STRUCTURED
    version_ids = {
        "nvi": "NVIPT",
        "ara": "ARA",
        "acf": "ACF11",
        "arc": "ARC09",
        "naa": "NAA",
        "ntlh": "NTLH",
        "nvt": "NVT",
    }

    async def _fetch_chapter(self, book_key: str, chapter: int, version: str) -> ProviderResult:
        # Book numbers follow the canonical 66-book order (Gênesis = 1).
        book_id = book_ordinal(book_key)
        if book_id is None:
            return self.failed(FailureReason.UNSUPPORTED, f"unknown book {book_key}")
        translation = await self.resolve_version_id(book_key, version)
        payload = await self.get_json(f"/get-text/{translation}/{book_id}/{chapter}/")
        if not isinstance(payload, list):
            return self.failed(FailureReason.PARSE, "expected a list of verses")
        return self.extract(payload)


__all__ = ["BollsProvider"]
