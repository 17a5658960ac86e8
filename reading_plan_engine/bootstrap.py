"""Application bootstrap helpers for assembling the service container."""

from __future__ import annotations

from typing import Optional

import httpx

from reading_plan_engine.adapters.providers import build_providers
from reading_plan_engine.adapters.verse_store import TinyDBVerseStore
from reading_plan_engine.core.config import Settings, config
from reading_plan_engine.services import ServiceContainer, build_default_services
from reading_plan_engine.services.reading_plan import ReadingPlanService


def build_http_client(settings: Settings) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.PROVIDER_TIMEOUT_SECONDS),
        headers={"User-Agent": "reading-plan-engine"},
        follow_redirects=True,
    )


def build_default_service_container(
    settings: Optional[Settings] = None,
) -> ServiceContainer:
    """Return the default service container wired to production adapters."""

    active = settings or config
    client = build_http_client(active)
    verse_store = TinyDBVerseStore() if active.VERSE_CACHE_PERSISTENT_ENABLED else None
    reading_plan = ReadingPlanService.from_file(
        active.READING_PLAN_PATH, total_days=active.READING_PLAN_TOTAL_DAYS
    )
    return build_default_services(
        providers=build_providers(client, active),
        verse_store=verse_store,
        reading_plan=reading_plan,
        http_client=client,
    )


__all__ = ["build_default_service_container", "build_http_client"]
