"""Shared plumbing for HTTP text-provider adapters.

Every adapter translates the canonical book key and normalized version into
its own addressing scheme, fetches one chapter and hands the body to the
extraction strategy it declares. Transport errors, bad statuses, malformed
bodies, timeouts and implausible extractions all come back as a failed
:class:`ProviderResult`; nothing is raised past :meth:`fetch_chapter`.
"""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional, Tuple

import httpx

from reading_plan_engine.core.exceptions import ProviderError
from reading_plan_engine.core.logging import get_logger
from reading_plan_engine.core.models import (
    FailureReason,
    ProviderResult,
    ResponseShape,
    VerseCollection,
)
from reading_plan_engine.services.extraction import extract_verses, is_plausible
from reading_plan_engine.services.versions import default_version

logger = get_logger(__name__)

_HTTP_ERROR_THRESHOLD = HTTPStatus.BAD_REQUEST


class HttpTextProvider(ABC):
    """Base class for providers reached over HTTP."""

    name: str = "provider"
    shape: ResponseShape = ResponseShape.STRUCTURED
    # Provider-specific ids for the normalized version codes it carries.
    version_ids: Mapping[str, str] = {}

    def __init__(self, client: httpx.AsyncClient, *, base_url: str, timeout: float) -> None:
        self._client = client
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._availability: Dict[Tuple[str, str], bool] = {}

    async def fetch_chapter(self, book_key: str, chapter: int, version: str) -> ProviderResult:
        """Return the chapter's verses or a failure; never raises."""
        try:
            result = await asyncio.wait_for(
                self._fetch_chapter(book_key, chapter, version), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            result = self.failed(FailureReason.TIMEOUT, f"no response in {self._timeout:.1f}s")
        except ProviderError as exc:
            result = self.failed(exc.reason, exc.detail)
        except httpx.TimeoutException as exc:
            result = self.failed(FailureReason.TIMEOUT, str(exc) or type(exc).__name__)
        except httpx.HTTPError as exc:
            result = self.failed(FailureReason.TRANSPORT, str(exc) or type(exc).__name__)
        except (ValueError, KeyError, TypeError, AttributeError) as exc:
            result = self.failed(FailureReason.PARSE, str(exc))

        if result.failure is not None:
            logger.info(
                "[provider:%s] %s %s/%s failed: %s %s",
                self.name,
                version,
                book_key,
                chapter,
                result.failure.reason.value,
                result.failure.detail,
            )
        return result

    @abstractmethod
    async def _fetch_chapter(self, book_key: str, chapter: int, version: str) -> ProviderResult:
        """Provider-specific fetch; may raise, the caller converts errors."""

    def failed(self, reason: FailureReason, detail: str = "") -> ProviderResult:
        return ProviderResult.failed(self.name, reason, detail)

    def extract(self, body: Any, shape: Optional[ResponseShape] = None) -> ProviderResult:
        """Run the declared extraction strategy and the plausibility check."""
        return self.accept(extract_verses(body, shape or self.shape))

    def accept(self, verses: VerseCollection) -> ProviderResult:
        if not verses:
            return self.failed(FailureReason.EMPTY, "no verses extracted")
        if not is_plausible(verses):
            return self.failed(FailureReason.IMPLAUSIBLE, f"{len(verses)} entries rejected")
        return ProviderResult.success(self.name, verses)

    async def get_json(
        self,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        response = await self._client.get(
            f"{self._base_url}{path}", params=params, headers=headers, timeout=self._timeout
        )
        if response.status_code >= _HTTP_ERROR_THRESHOLD:
            raise ProviderError(FailureReason.STATUS, f"HTTP {response.status_code} for {path}")
        return response.json()

    def version_id(self, version: str) -> Optional[str]:
        return self.version_ids.get(version)

    async def resolve_version_id(self, book_key: str, version: str) -> str:
        """Pick the provider version id, skipping combinations known to be missing.

        A non-default version the provider lacks (no id, or metadata says the
        book is absent) goes straight to the provider's default version.
        """
        primary = default_version()
        fallback_id = self.version_id(primary)
        if fallback_id is None:
            raise ProviderError(FailureReason.UNSUPPORTED, f"no id for default version {primary}")
        if version == primary:
            return fallback_id

        requested_id = self.version_id(version)
        if requested_id is not None and await self._cached_availability(book_key, requested_id):
            return requested_id
        logger.info(
            "[provider:%s] %s unavailable for %s; using %s", self.name, version, book_key, primary
        )
        return fallback_id

    async def _cached_availability(self, book_key: str, version_id: str) -> bool:
        key = (book_key, version_id)
        if key not in self._availability:
            try:
                self._availability[key] = await self.is_available(book_key, version_id)
            except (httpx.HTTPError, ProviderError, ValueError, TypeError, AttributeError) as exc:
                # Unknown is treated as available; the fetch itself will tell.
                logger.debug("[provider:%s] availability lookup failed: %s", self.name, exc)
                return True
        return self._availability[key]

    async def is_available(self, book_key: str, version_id: str) -> bool:
        """Metadata lookup; providers without one report everything available."""
        del book_key, version_id
        return True


__all__ = ["HttpTextProvider"]
