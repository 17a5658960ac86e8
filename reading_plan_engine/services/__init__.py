"""Application service layer: Bible text resolution and the reading plan."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence

import httpx

from reading_plan_engine.core.ports import TextProviderPort, VerseStorePort

from .background import BackgroundTaskRunner

if TYPE_CHECKING:  # pragma: no cover - type narrowing only
    from .bible_service import BibleService
    from .reading_plan import ReadingPlanService
    from .verse_cache import TieredVerseCache


@dataclass(slots=True)
class ServiceContainer:
    """Aggregate of application-level services available to handlers."""

    background: BackgroundTaskRunner
    cache: "TieredVerseCache"
    bible: "BibleService"
    reading_plan: Optional["ReadingPlanService"] = None
    verse_store: Optional[VerseStorePort] = None
    http_client: Optional[httpx.AsyncClient] = None

    async def aclose(self) -> None:
        """Wait for pending cache writes, then release the store and HTTP client."""
        await self.background.drain()
        if self.verse_store is not None:
            self.verse_store.close()
        if self.http_client is not None:
            await self.http_client.aclose()


def build_default_services(
    *,
    providers: Sequence[TextProviderPort],
    verse_store: Optional[VerseStorePort] = None,
    reading_plan: Optional["ReadingPlanService"] = None,
    background: Optional[BackgroundTaskRunner] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> ServiceContainer:
    """Return a service container wiring the cache, provider chain and plan."""

    # pylint: disable=import-outside-toplevel
    from .bible_service import BibleService
    from .provider_chain import ProviderChain
    from .verse_cache import TieredVerseCache

    runner = background or BackgroundTaskRunner()
    cache = TieredVerseCache(verse_store, runner)
    bible = BibleService(cache, ProviderChain(providers))
    if reading_plan is not None:
        reading_plan.attach_bible(bible)
    return ServiceContainer(
        background=runner,
        cache=cache,
        bible=bible,
        reading_plan=reading_plan,
        verse_store=verse_store,
        http_client=http_client,
    )


__all__ = ["ServiceContainer", "build_default_services"]
