"""A Bíblia Digital provider: Portuguese abbreviations, path addressing."""

from __future__ import annotations

from typing import Dict, Optional, Set

import httpx

from reading_plan_engine.core.exceptions import ProviderError
from reading_plan_engine.core.models import FailureReason, ProviderResult, ResponseShape

from .base import HttpTextProvider

# Canonical book key -> A Bíblia Digital abbreviation.
BOOK_IDS: Dict[str, str] = {
    "gn": "gn", "ex": "ex", "lv": "lv", "nm": "nm", "dt": "dt",
    "js": "js", "jz": "jz", "rt": "rt", "1sm": "1sm", "2sm": "2sm",
    "1rs": "1rs", "2rs": "2rs", "1cr": "1cr", "2cr": "2cr", "ed": "ed",
    "ne": "ne", "et": "et", "job": "jó", "sl": "sl", "pv": "pv",
    "ec": "ec", "ct": "ct", "is": "is", "jr": "jr", "lm": "lm",
    "ez": "ez", "dn": "dn", "os": "os", "jl": "jl", "am": "am",
    "ob": "ob", "jn": "jn", "mq": "mq", "na": "na", "hc": "hc",
    "sf": "sf", "ag": "ag", "zc": "zc", "ml": "ml",
    "mt": "mt", "mc": "mc", "lc": "lc", "jo": "jo", "at": "at",
    "rm": "rm", "1co": "1co", "2co": "2co", "gl": "gl", "ef": "ef",
    "fp": "fp", "cl": "cl", "1ts": "1ts", "2ts": "2ts", "1ti": "1tm",
    "2ti": "2tm", "tt": "tt", "fm": "fm", "hb": "hb", "tg": "tg",
    "1pe": "1pe", "2pe": "2pe", "1jo": "1jo", "2jo": "2jo", "3jo": "3jo",
    "jd": "jd", "ap": "ap",
}


class ABibliaDigitalProvider(HttpTextProvider):
    """``/verses/{version}/{abbrev}/{chapter}`` returning verse records."""

    name = "abibliadigital"
    shape = ResponseShape.STRUCTURED
    version_ids = {"nvi": "nvi", "acf": "acf", "ara": "ra"}

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str,
        timeout: float,
        token: Optional[str] = None,
    ) -> None:
        super().__init__(client, base_url=base_url, timeout=timeout)
        self._token = token
        self._versions: Optional[Set[str]] = None

    def _headers(self) -> dict[str, str]:
        if self._token:
            return {"Authorization": f"Bearer {self._token}"}
        return {}

    async def is_available(self, book_key: str, version_id: str) -> bool:
        del book_key
        if self._versions is None:
            payload = await self.get_json("/versions", headers=self._headers())
            if not isinstance(payload, list):
                raise ProviderError(FailureReason.PARSE, "versions listing is not a list")
            self._versions = {
                str(entry.get("version", "")).lower()
                for entry in payload
                if isinstance(entry, dict)
            }
        return version_id in self._versions

    async def _fetch_chapter(self, book_key: str, chapter: int, version: str) -> ProviderResult:
        abbrev = BOOK_IDS.get(book_key)
        if abbrev is None:
            return self.failed(FailureReason.UNSUPPORTED, f"unknown book {book_key}")
        version_id = await self.resolve_version_id(book_key, version)
        payload = await self.get_json(
            f"/verses/{version_id}/{abbrev}/{chapter}", headers=self._headers()
        )
        if not isinstance(payload, dict):
            return self.failed(FailureReason.PARSE, "unexpected body")
        return self.extract(payload.get("verses"))


__all__ = ["ABibliaDigitalProvider", "BOOK_IDS"]
