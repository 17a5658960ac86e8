"""Fixtures wiring the API to in-process providers and a temporary store."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Tuple

import pytest
from fastapi.testclient import TestClient
from tinydb import TinyDB

from reading_plan_engine.adapters.verse_store import TinyDBVerseStore
from reading_plan_engine.apps.api.app import create_app
from reading_plan_engine.core.config import config as app_config
from reading_plan_engine.core.models import FailureReason, ProviderResult, ResponseShape
from reading_plan_engine.services import ServiceContainer, build_default_services
from reading_plan_engine.services.reading_plan import ReadingPlanDay, ReadingPlanService


class FakeProvider:
    """Returns ``<book> <chapter>:<verse>`` lines for books it knows."""

    name = "fake"
    shape = ResponseShape.STRUCTURED

    def __init__(self, books: Dict[str, int]) -> None:
        self._books = books
        self.calls: List[Tuple[str, int, str]] = []

    async def fetch_chapter(self, book_key: str, chapter: int, version: str) -> ProviderResult:
        self.calls.append((book_key, chapter, version))
        verse_count = self._books.get(book_key)
        if verse_count is None:
            return ProviderResult.failed(self.name, FailureReason.EMPTY)
        return ProviderResult.success(
            self.name, tuple(f"{book_key} {chapter}:{n}" for n in range(1, verse_count + 1))
        )


@pytest.fixture(name="provider")
def _provider() -> FakeProvider:
    return FakeProvider({"gn": 2, "sl": 1, "job": 1, "mt": 1})


@pytest.fixture(name="services")
def _services(tmp_path: Path, provider: FakeProvider) -> ServiceContainer:
    plan = ReadingPlanService(
        [
            ReadingPlanDay(day=1, passage="Gênesis 1 - 2", theme="A criação", book="Gênesis"),
            ReadingPlanDay(day=2, passage="Apocalipse 1", theme="Revelação", book="Apocalipse"),
        ],
        total_days=365,
    )
    return build_default_services(
        providers=[provider],
        verse_store=TinyDBVerseStore(TinyDB(tmp_path / "verses.json")),
        reading_plan=plan,
    )


@pytest.fixture(name="client")
def _client(services: ServiceContainer, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(app_config, "ENABLE_ADMIN_AUTH", True, raising=True)
    monkeypatch.setattr(app_config, "ADMIN_API_TOKEN", "admin-secret", raising=True)
    monkeypatch.setattr(app_config, "HEALTHCHECK_API_TOKEN", "health-secret", raising=True)
    with TestClient(create_app(services)) as test_client:
        yield test_client
