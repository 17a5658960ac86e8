"""Tests for the HTTP text-provider adapters using httpx mock transports."""

# pylint: disable=missing-function-docstring

from __future__ import annotations

import asyncio
from typing import Callable, List

import httpx

from reading_plan_engine.adapters.providers import (
    ABibliaDigitalProvider,
    ApiBibleProvider,
    BibleApiProvider,
    BollsProvider,
    build_providers,
)
from reading_plan_engine.core.config import Settings
from reading_plan_engine.core.models import FailureReason, ProviderResult

Handler = Callable[[httpx.Request], httpx.Response]


def _run(make_provider, handler, *args) -> ProviderResult:
    async def _exercise() -> ProviderResult:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            provider = make_provider(client)
            return await provider.fetch_chapter(*args)

    return asyncio.run(_exercise())


def _abd(client: httpx.AsyncClient) -> ABibliaDigitalProvider:
    return ABibliaDigitalProvider(client, base_url="https://abd.test/api", timeout=1.0, token="tok")


def test_abibliadigital_reads_verse_records() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "book": {"abbrev": {"pt": "gn"}, "name": "Gênesis"},
                "chapter": {"number": 1, "verses": 2},
                "verses": [
                    {"number": 1, "text": "No princípio criou Deus os céus e a terra."},
                    {"number": 2, "text": "A terra era sem forma e vazia."},
                ],
            },
        )

    result = _run(_abd, handler, "gn", 1, "nvi")

    assert result.ok
    assert result.verses[0] == "No princípio criou Deus os céus e a terra."
    assert seen[0].url.path == "/api/verses/nvi/gn/1"
    assert seen[0].headers["Authorization"] == "Bearer tok"


def test_abibliadigital_skips_missing_version() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        if request.url.path.endswith("/versions"):
            return httpx.Response(200, json=[{"version": "nvi"}, {"version": "acf"}])
        return httpx.Response(200, json={"verses": [{"number": 1, "text": "Texto"}]})

    result = _run(_abd, handler, "gn", 1, "ara")

    assert result.ok
    assert paths == ["/api/versions", "/api/verses/nvi/gn/1"]


def test_abibliadigital_uses_accented_job_abbreviation() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(200, json={"verses": [{"number": 1, "text": "Havia um homem"}]})

    assert _run(_abd, handler, "job", 1, "nvi").ok
    assert paths == ["/api/verses/nvi/jó/1"]


def test_bad_status_is_a_failure() -> None:
    result = _run(_abd, lambda request: httpx.Response(500), "gn", 1, "nvi")
    assert not result.ok
    assert result.failure is not None
    assert result.failure.reason is FailureReason.STATUS


def test_malformed_body_is_a_failure() -> None:
    result = _run(_abd, lambda request: httpx.Response(200, text="<html>"), "gn", 1, "nvi")
    assert result.failure is not None
    assert result.failure.reason is FailureReason.PARSE


def test_slow_provider_times_out() -> None:
    async def handler(request: httpx.Request) -> httpx.Response:
        await asyncio.sleep(1)
        return httpx.Response(200, json={"verses": []})

    def make(client: httpx.AsyncClient) -> BollsProvider:
        return BollsProvider(client, base_url="https://bolls.test", timeout=0.05)

    result = _run(make, handler, "gn", 1, "nvi")
    assert result.failure is not None
    assert result.failure.reason is FailureReason.TIMEOUT


def test_bolls_uses_numeric_book_and_translation_ids() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        return httpx.Response(
            200,
            json=[
                {"pk": 1, "verse": 1, "text": "Havia um homem na terra de <i>Uz</i>"},
                {"pk": 2, "verse": 2, "text": "Nasceram-lhe sete filhos"},
            ],
        )

    def make(client: httpx.AsyncClient) -> BollsProvider:
        return BollsProvider(client, base_url="https://bolls.test", timeout=1.0)

    result = _run(make, handler, "job", 1, "ara")

    assert result.verses == ("Havia um homem na terra de Uz", "Nasceram-lhe sete filhos")
    assert paths == ["/get-text/ARA/18/1/"]


def test_bibleapi_maps_every_version_to_configured_translation() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={
                "reference": "John 3",
                "verses": [
                    {"book_id": "JHN", "chapter": 3, "verse": 16, "text": "Porque Deus amou o mundo\n"}
                ],
            },
        )

    def make(client: httpx.AsyncClient) -> BibleApiProvider:
        return BibleApiProvider(client, base_url="https://bibleapi.test", timeout=1.0)

    result = _run(make, handler, "jo", 3, "ntlh")

    assert result.verses == ("Porque Deus amou o mundo",)
    assert "john" in str(seen[0].url)
    assert seen[0].url.params["translation"] == "almeida"


def _apibible(client: httpx.AsyncClient, key: str | None = "secret") -> ApiBibleProvider:
    return ApiBibleProvider(
        client,
        base_url="https://apibible.test/v1",
        timeout=1.0,
        api_key=key,
        bible_ids={"nvi": "bible-nvi"},
    )


def test_apibible_without_key_is_unsupported() -> None:
    result = _run(lambda client: _apibible(client, key=None), lambda r: httpx.Response(200), "gn", 1, "nvi")
    assert result.failure is not None
    assert result.failure.reason is FailureReason.UNSUPPORTED


def test_apibible_chapter_json_tree() -> None:
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        content = [
            {
                "name": "para",
                "type": "tag",
                "attrs": {"style": "p"},
                "items": [
                    {"name": "verse", "type": "tag", "attrs": {"number": "1", "style": "v"},
                     "items": [{"text": "1", "type": "text"}]},
                    {"text": "No princípio criou Deus", "type": "text", "attrs": {"verseId": "GEN.1.1"}},
                    {"name": "verse", "type": "tag", "attrs": {"number": "2", "style": "v"},
                     "items": [{"text": "2", "type": "text"}]},
                    {"text": "A terra era sem forma", "type": "text", "attrs": {"verseId": "GEN.1.2"}},
                ],
            }
        ]
        return httpx.Response(200, json={"data": {"id": "GEN.1", "number": "1", "content": content}})

    result = _run(_apibible, handler, "gn", 1, "nvi")

    assert result.verses == ("No princípio criou Deus", "A terra era sem forma")
    assert seen[0].url.path == "/v1/bibles/bible-nvi/chapters/GEN.1"
    assert seen[0].url.params["content-type"] == "json"
    assert seen[0].headers["api-key"] == "secret"


def test_apibible_falls_back_to_verse_list_and_plain_text() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        paths.append(path)
        if path.endswith("/chapters/GEN.1"):
            return httpx.Response(200, json={"data": {"content": []}})
        if path.endswith("/chapters/GEN.1/verses"):
            return httpx.Response(200, json={"data": [{"id": "GEN.1.1"}, {"id": "GEN.1.2"}]})
        return httpx.Response(
            200,
            json={"data": {"content": "     [1] No princípio criou Deus. [2] A terra era sem forma."}},
        )

    result = _run(_apibible, handler, "gn", 1, "nvi")

    assert result.verses == ("No princípio criou Deus.", "A terra era sem forma.")
    assert paths[-1] == "/v1/bibles/bible-nvi/passages/GEN.1.1-GEN.1.2"


def _run_many(make_provider, handler, *calls) -> List[ProviderResult]:
    async def _exercise() -> List[ProviderResult]:
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            provider = make_provider(client)
            return [await provider.fetch_chapter(*call) for call in calls]

    return asyncio.run(_exercise())


def _apibible_ara(client: httpx.AsyncClient) -> ApiBibleProvider:
    return ApiBibleProvider(
        client,
        base_url="https://apibible.test/v1",
        timeout=1.0,
        api_key="secret",
        bible_ids={"nvi": "bible-nvi", "ara": "bible-ara"},
    )


def _verse_list_fallback(chapter_body) -> Handler:
    """Chapter endpoint returns ``chapter_body``; verse list and passage work."""

    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/chapters/GEN.1"):
            return httpx.Response(200, json=chapter_body)
        if path.endswith("/chapters/GEN.1/verses"):
            return httpx.Response(200, json={"data": [{"id": "GEN.1.1"}, {"id": "GEN.1.2"}]})
        return httpx.Response(
            200, json={"data": {"content": "[1] No princípio criou Deus. [2] A terra era sem forma."}}
        )

    return handler


def test_abibliadigital_versions_lookup_is_cached() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        if request.url.path.endswith("/versions"):
            return httpx.Response(200, json=[{"version": "nvi"}, {"version": "ra"}])
        return httpx.Response(200, json={"verses": [{"number": 1, "text": "Texto"}]})

    results = _run_many(_abd, handler, ("gn", 1, "ara"), ("gn", 2, "ara"), ("ex", 1, "ara"))

    assert all(result.ok for result in results)
    assert paths.count("/api/versions") == 1
    assert "/api/verses/ra/gn/2" in paths


def test_abibliadigital_failed_versions_lookup_counts_as_available() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        if request.url.path.endswith("/versions"):
            return httpx.Response(503)
        return httpx.Response(200, json={"verses": [{"number": 1, "text": "Texto"}]})

    assert _run(_abd, handler, "gn", 1, "ara").ok
    assert paths == ["/api/versions", "/api/verses/ra/gn/1"]


def test_abibliadigital_non_list_versions_counts_as_available() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        if request.url.path.endswith("/versions"):
            return httpx.Response(200, json=7)
        return httpx.Response(200, json={"verses": [{"number": 1, "text": "Texto"}]})

    assert _run(_abd, handler, "gn", 1, "ara").ok
    assert paths[-1] == "/api/verses/ra/gn/1"


def test_apibible_books_lookup_is_cached() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        if request.url.path.endswith("/books"):
            return httpx.Response(200, json={"data": [{"id": "GEN"}, {"id": "EXO"}]})
        return httpx.Response(
            200, json={"data": {"content": [{"verse": 1, "text": "No princípio"}]}}
        )

    results = _run_many(_apibible_ara, handler, ("gn", 1, "ara"), ("gn", 2, "ara"))

    assert all(result.ok for result in results)
    assert paths.count("/v1/bibles/bible-ara/books") == 1
    assert paths[-1] == "/v1/bibles/bible-ara/chapters/GEN.2"


def test_apibible_book_missing_from_bible_uses_default_version() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        if request.url.path.endswith("/books"):
            return httpx.Response(200, json={"data": [{"id": "MAT"}]})
        return httpx.Response(
            200, json={"data": {"content": [{"verse": 1, "text": "No princípio"}]}}
        )

    assert _run(_apibible_ara, handler, "gn", 1, "ara").ok
    assert paths == ["/v1/bibles/bible-ara/books", "/v1/bibles/bible-nvi/chapters/GEN.1"]


def test_apibible_failed_books_lookup_counts_as_available() -> None:
    paths: List[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        paths.append(request.url.path)
        if request.url.path.endswith("/books"):
            return httpx.Response(200, json=["GEN"])
        return httpx.Response(
            200, json={"data": {"content": [{"verse": 1, "text": "No princípio"}]}}
        )

    assert _run(_apibible_ara, handler, "gn", 1, "ara").ok
    assert paths[-1] == "/v1/bibles/bible-ara/chapters/GEN.1"


def test_apibible_non_object_chapter_falls_back_to_verse_list() -> None:
    result = _run(_apibible, _verse_list_fallback([]), "gn", 1, "nvi")

    assert result.ok
    assert result.verses == ("No princípio criou Deus.", "A terra era sem forma.")


def test_apibible_implausible_chapter_tree_falls_back_to_verse_list() -> None:
    numbers_only = {
        "data": {
            "content": [
                {"name": "verse", "attrs": {"number": str(n), "style": "v"}, "items": [f"{n}."]}
                for n in range(1, 6)
            ]
        }
    }

    result = _run(_apibible, _verse_list_fallback(numbers_only), "gn", 1, "nvi")

    assert result.verses == ("No princípio criou Deus.", "A terra era sem forma.")


def test_apibible_malformed_passage_data_is_a_parse_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        path = request.url.path
        if path.endswith("/chapters/GEN.1"):
            return httpx.Response(200, json={"data": {"content": []}})
        if path.endswith("/chapters/GEN.1/verses"):
            return httpx.Response(200, json={"data": [{"id": "GEN.1.1"}]})
        return httpx.Response(200, json={"data": ["not", "an", "object"]})

    result = _run(_apibible, handler, "gn", 1, "nvi")

    assert result.failure is not None
    assert result.failure.reason is FailureReason.PARSE


def test_build_providers_follows_configured_order() -> None:
    settings = Settings(PROVIDER_ORDER=["bolls", "unknown", "bibleapi"])

    async def _exercise() -> List[str]:
        async with httpx.AsyncClient() as client:
            return [provider.name for provider in build_providers(client, settings)]

    assert asyncio.run(_exercise()) == ["bolls", "bibleapi"]
