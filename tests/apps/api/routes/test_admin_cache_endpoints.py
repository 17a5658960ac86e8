"""Tests for admin cache management endpoints."""

# pylint: disable=missing-function-docstring

from __future__ import annotations

from http import HTTPStatus

ADMIN_HEADERS = {"Authorization": "Bearer admin-secret"}


def test_stats_require_admin_token(client) -> None:
    assert client.get("/admin/cache/stats").status_code == HTTPStatus.UNAUTHORIZED
    resp = client.get("/admin/cache/stats", headers={"X-Admin-Token": "wrong"})
    assert resp.status_code == HTTPStatus.UNAUTHORIZED


def test_stats_report_tiers(client, services) -> None:
    client.get("/chapters/gn/1")
    client.get("/chapters/gn/1")
    resp = client.get("/admin/cache/stats", headers=ADMIN_HEADERS)
    assert resp.status_code == HTTPStatus.OK
    body = resp.json()
    assert body["memory_entries"] == 1
    assert body["persistent_enabled"] is True
    assert body["stats"]["memory_hits"] == 1
    assert body["stats"]["misses"] == 1
    assert body["background_failures"] == 0
    assert "persistent_entries" in body
    assert services.cache.memory_size() == 1


def test_clear_drops_memory_tier(client, services) -> None:
    client.get("/chapters/sl/1")
    resp = client.post("/admin/cache/clear", headers=ADMIN_HEADERS)
    assert resp.status_code == HTTPStatus.OK
    assert resp.json() == {"status": "cleared", "removed": 1}
    assert services.cache.memory_size() == 0


def test_alive_requires_healthcheck_token(client) -> None:
    assert client.get("/alive").status_code == HTTPStatus.UNAUTHORIZED
    resp = client.get("/alive", headers={"X-Admin-Token": "health-secret"})
    assert resp.status_code == HTTPStatus.OK
    assert resp.json()["status"] == "ok"
