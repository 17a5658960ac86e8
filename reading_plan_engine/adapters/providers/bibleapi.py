"""bible-api.com provider: English book slugs, one Portuguese translation."""

from __future__ import annotations

from typing import Dict, Optional

import httpx

from reading_plan_engine.core.models import FailureReason, ProviderResult, ResponseShape
from reading_plan_engine.services.versions import SUPPORTED_VERSIONS

from .base import HttpTextProvider

# Canonical book key -> bible-api.com book slug.
BOOK_IDS: Dict[str, str] = {
    "gn": "genesis", "ex": "exodus", "lv": "leviticus", "nm": "numbers",
    "dt": "deuteronomy", "js": "joshua", "jz": "judges", "rt": "ruth",
    "1sm": "1samuel", "2sm": "2samuel", "1rs": "1kings", "2rs": "2kings",
    "1cr": "1chronicles", "2cr": "2chronicles", "ed": "ezra", "ne": "nehemiah",
    "et": "esther", "job": "job", "sl": "psalms", "pv": "proverbs",
    "ec": "ecclesiastes", "ct": "songofsolomon", "is": "isaiah", "jr": "jeremiah",
    "lm": "lamentations", "ez": "ezekiel", "dn": "daniel", "os": "hosea",
    "jl": "joel", "am": "amos", "ob": "obadiah", "jn": "jonah", "mq": "micah",
    "na": "nahum", "hc": "habakkuk", "sf": "zephaniah", "ag": "haggai",
    "zc": "zechariah", "ml": "malachi",
    "mt": "matthew", "mc": "mark", "lc": "luke", "jo": "john", "at": "acts",
    "rm": "romans", "1co": "1corinthians", "2co": "2corinthians", "gl": "galatians",
    "ef": "ephesians", "fp": "philippians", "cl": "colossians",
    "1ts": "1thessalonians", "2ts": "2thessalonians", "1ti": "1timothy",
    "2ti": "2timothy", "tt": "titus", "fm": "philemon", "hb": "hebrews",
    "tg": "james", "1pe": "1peter", "2pe": "2peter", "1jo": "1john",
    "2jo": "2john", "3jo": "3john", "jd": "jude", "ap": "revelation",
}


class BibleApiProvider(HttpTextProvider):
    """``/{book}+{chapter}?translation=...``; every version maps to one translation."""

    name = "bibleapi"
    shape = ResponseShape.STRUCTURED

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str,
        timeout: float,
        translation: str = "almeida",
    ) -> None:
        super().__init__(client, base_url=base_url, timeout=timeout)
        self._translation = translation

    def version_id(self, version: str) -> Optional[str]:
        return self._translation if version in SUPPORTED_VERSIONS else None

    async def _fetch_chapter(self, book_key: str, chapter: int, version: str) -> ProviderResult:
        slug = BOOK_IDS.get(book_key)
        if slug is None:
            return self.failed(FailureReason.UNSUPPORTED, f"unknown book {book_key}")
        translation = await self.resolve_version_id(book_key, version)
        payload = await self.get_json(f"/{slug}+{chapter}", params={"translation": translation})
        if not isinstance(payload, dict):
            return self.failed(FailureReason.PARSE, "unexpected body")
        return self.extract(payload.get("verses"))


__all__ = ["BibleApiProvider", "BOOK_IDS"]
