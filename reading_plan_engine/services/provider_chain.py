"""Ordered fallback across external text providers."""

from __future__ import annotations

from typing import List, Sequence

from reading_plan_engine.core.logging import get_logger
from reading_plan_engine.core.models import ChainOutcome, FailureReason, ProviderFailure
from reading_plan_engine.core.ports import TextProviderPort

logger = get_logger(__name__)


class ProviderChain:
    """Try providers in priority order; the first plausible result wins."""

    def __init__(self, providers: Sequence[TextProviderPort]) -> None:
        self._providers = tuple(providers)

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(provider.name for provider in self._providers)

    async def resolve(self, book_key: str, chapter: int, version: str) -> ChainOutcome:
        failures: List[ProviderFailure] = []
        for provider in self._providers:
            try:
                result = await provider.fetch_chapter(book_key, chapter, version)
            except Exception as exc:  # pylint: disable=broad-except
                # Adapters should not raise; one that does is treated as a failed source.
                logger.warning(
                    "[chain] provider %s raised for %s/%s: %s", provider.name, book_key, chapter, exc
                )
                failures.append(ProviderFailure(provider.name, FailureReason.TRANSPORT, str(exc)))
                continue
            if result.ok:
                logger.info(
                    "[chain] %s %s/%s served by %s (%d verses)",
                    version,
                    book_key,
                    chapter,
                    provider.name,
                    len(result.verses),
                )
                return ChainOutcome(
                    verses=result.verses, provider=provider.name, failures=tuple(failures)
                )
            if result.failure is not None:
                failures.append(result.failure)
            else:
                failures.append(ProviderFailure(provider.name, FailureReason.EMPTY))

        logger.warning(
            "[chain] every provider failed for %s %s/%s: %s",
            version,
            book_key,
            chapter,
            ", ".join(f"{f.provider}={f.reason.value}" for f in failures) or "no providers",
        )
        return ChainOutcome(failures=tuple(failures))


__all__ = ["ProviderChain"]
