"""API.Bible provider: api-key header, USFM book ids, configured Bible ids.

The chapter endpoint (one request, JSON content tree) is tried first. When it
fails or yields nothing plausible, the verse-list endpoint supplies the verse
ids and the passage is fetched again as plain text with inline verse numbers.
"""

from __future__ import annotations

from typing import Dict, Mapping, Optional, Set

import httpx

from reading_plan_engine.core.exceptions import ProviderError
from reading_plan_engine.core.logging import get_logger
from reading_plan_engine.core.models import FailureReason, ProviderResult, ResponseShape

from .base import HttpTextProvider

logger = get_logger(__name__)

# Canonical book key -> USFM book id.
BOOK_IDS: Dict[str, str] = {
    "gn": "GEN", "ex": "EXO", "lv": "LEV", "nm": "NUM", "dt": "DEU",
    "js": "JOS", "jz": "JDG", "rt": "RUT", "1sm": "1SA", "2sm": "2SA",
    "1rs": "1KI", "2rs": "2KI", "1cr": "1CH", "2cr": "2CH", "ed": "EZR",
    "ne": "NEH", "et": "EST", "job": "JOB", "sl": "PSA", "pv": "PRO",
    "ec": "ECC", "ct": "SNG", "is": "ISA", "jr": "JER", "lm": "LAM",
    "ez": "EZK", "dn": "DAN", "os": "HOS", "jl": "JOL", "am": "AMO",
    "ob": "OBA", "jn": "JON", "mq": "MIC", "na": "NAM", "hc": "HAB",
    "sf": "ZEP", "ag": "HAG", "zc": "ZEC", "ml": "MAL",
    "mt": "MAT", "mc": "MRK", "lc": "LUK", "jo": "JHN", "at": "ACT",
    "rm": "ROM", "1co": "1CO", "2co": "2CO", "gl": "GAL", "ef": "EPH",
    "fp": "PHP", "cl": "COL", "1ts": "1TH", "2ts": "2TH", "1ti": "1TI",
    "2ti": "2TI", "tt": "TIT", "fm": "PHM", "hb": "HEB", "tg": "JAS",
    "1pe": "1PE", "2pe": "2PE", "1jo": "1JN", "2jo": "2JN", "3jo": "3JN",
    "jd": "JUD", "ap": "REV",
}

CHAPTER_PARAMS = {
    "content-type": "json",
    "include-notes": "false",
    "include-titles": "false",
    "include-chapter-numbers": "false",
    "include-verse-numbers": "true",
    "include-verse-spans": "false",
}

PASSAGE_PARAMS = {
    "content-type": "text",
    "include-notes": "false",
    "include-titles": "false",
    "include-chapter-numbers": "false",
    "include-verse-numbers": "true",
}


class ApiBibleProvider(HttpTextProvider):
    """Chapter JSON tree first, verse list + plain-text passage second."""

    name = "apibible"
    shape = ResponseShape.STRUCTURED

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str,
        timeout: float,
        api_key: Optional[str],
        bible_ids: Mapping[str, str],
    ) -> None:
        super().__init__(client, base_url=base_url, timeout=timeout)
        self._api_key = api_key
        self._bible_ids = dict(bible_ids)
        self._books: Dict[str, Set[str]] = {}

    def version_id(self, version: str) -> Optional[str]:
        return self._bible_ids.get(version)

    def _headers(self) -> dict[str, str]:
        return {"api-key": self._api_key or "", "accept": "application/json"}

    async def is_available(self, book_key: str, version_id: str) -> bool:
        if version_id not in self._books:
            payload = await self.get_json(f"/bibles/{version_id}/books", headers=self._headers())
            if not isinstance(payload, dict):
                raise ProviderError(FailureReason.PARSE, "books listing is not an object")
            self._books[version_id] = {
                str(book.get("id", "")) for book in payload.get("data", []) if isinstance(book, dict)
            }
        return BOOK_IDS.get(book_key, "") in self._books[version_id]

    async def _fetch_chapter(self, book_key: str, chapter: int, version: str) -> ProviderResult:
        if not self._api_key:
            return self.failed(FailureReason.UNSUPPORTED, "no API key configured")
        usfm = BOOK_IDS.get(book_key)
        if usfm is None:
            return self.failed(FailureReason.UNSUPPORTED, f"unknown book {book_key}")
        bible_id = await self.resolve_version_id(book_key, version)
        chapter_id = f"{usfm}.{chapter}"

        try:
            result = await self._from_chapter(bible_id, chapter_id)
        except (ProviderError, httpx.HTTPError, ValueError, AttributeError) as exc:
            result = self.failed(FailureReason.TRANSPORT, str(exc))
        if result.ok:
            return result

        logger.debug(
            "[provider:%s] chapter endpoint gave nothing for %s; trying verse list",
            self.name,
            chapter_id,
        )
        return await self._from_verse_list(bible_id, chapter_id)

    async def _from_chapter(self, bible_id: str, chapter_id: str) -> ProviderResult:
        payload = await self.get_json(
            f"/bibles/{bible_id}/chapters/{chapter_id}",
            params=CHAPTER_PARAMS,
            headers=self._headers(),
        )
        if not isinstance(payload, dict):
            return self.failed(FailureReason.PARSE, f"chapter {chapter_id} is not an object")
        return self.extract((payload.get("data") or {}).get("content"))

    async def _from_verse_list(self, bible_id: str, chapter_id: str) -> ProviderResult:
        listing = await self.get_json(
            f"/bibles/{bible_id}/chapters/{chapter_id}/verses", headers=self._headers()
        )
        if not isinstance(listing, dict):
            return self.failed(FailureReason.PARSE, f"verse list for {chapter_id} is not an object")
        verse_ids = [
            str(entry["id"]) for entry in listing.get("data", []) if isinstance(entry, dict)
        ]
        if not verse_ids:
            return self.failed(FailureReason.EMPTY, f"no verses listed for {chapter_id}")
        passage = await self.get_json(
            f"/bibles/{bible_id}/passages/{verse_ids[0]}-{verse_ids[-1]}",
            params=PASSAGE_PARAMS,
            headers=self._headers(),
        )
        if not isinstance(passage, dict):
            return self.failed(FailureReason.PARSE, f"passage for {chapter_id} is not an object")
        return self.extract(
            (passage.get("data") or {}).get("content"), shape=ResponseShape.PLAIN_TEXT
        )


__all__ = ["ApiBibleProvider", "BOOK_IDS"]
