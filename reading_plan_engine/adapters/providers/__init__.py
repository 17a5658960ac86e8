"""Text-provider adapters and the factory that orders them."""

from __future__ import annotations

from typing import Callable, Dict, List

import httpx

from reading_plan_engine.core.config import Settings
from reading_plan_engine.core.logging import get_logger

from .abibliadigital import ABibliaDigitalProvider
from .apibible import ApiBibleProvider
from .base import HttpTextProvider
from .bibleapi import BibleApiProvider
from .bolls import BollsProvider

logger = get_logger(__name__)

ProviderFactory = Callable[[httpx.AsyncClient, Settings], HttpTextProvider]

PROVIDER_FACTORIES: Dict[str, ProviderFactory] = {
    "abibliadigital": lambda client, s: ABibliaDigitalProvider(
        client,
        base_url=s.ABIBLIADIGITAL_BASE_URL,
        timeout=s.PROVIDER_TIMEOUT_SECONDS,
        token=s.ABIBLIADIGITAL_TOKEN,
    ),
    "apibible": lambda client, s: ApiBibleProvider(
        client,
        base_url=s.API_BIBLE_BASE_URL,
        timeout=s.PROVIDER_TIMEOUT_SECONDS,
        api_key=s.API_BIBLE_KEY,
        bible_ids=s.API_BIBLE_IDS,
    ),
    "bolls": lambda client, s: BollsProvider(
        client, base_url=s.BOLLS_BASE_URL, timeout=s.PROVIDER_TIMEOUT_SECONDS
    ),
    "bibleapi": lambda client, s: BibleApiProvider(
        client,
        base_url=s.BIBLE_API_BASE_URL,
        timeout=s.PROVIDER_TIMEOUT_SECONDS,
        translation=s.BIBLE_API_TRANSLATION,
    ),
}


def build_providers(client: httpx.AsyncClient, settings: Settings) -> List[HttpTextProvider]:
    """Instantiate providers in ``PROVIDER_ORDER``; unknown names are skipped."""
    providers: List[HttpTextProvider] = []
    for name in settings.PROVIDER_ORDER:
        factory = PROVIDER_FACTORIES.get(name.strip().lower())
        if factory is None:
            logger.warning("[providers] unknown provider %r in PROVIDER_ORDER; skipping", name)
            continue
        providers.append(factory(client, settings))
    return providers


__all__ = [
    "ABibliaDigitalProvider",
    "ApiBibleProvider",
    "BibleApiProvider",
    "BollsProvider",
    "HttpTextProvider",
    "PROVIDER_FACTORIES",
    "build_providers",
]
