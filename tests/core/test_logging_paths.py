"""Tests for log directory resolution logic."""

from __future__ import annotations

import pathlib
from types import SimpleNamespace

import pytest

from reading_plan_engine.core import logging as core_logging

# pylint: disable=missing-function-docstring


def _make_settings(log_dir: pathlib.Path | None, data_dir: pathlib.Path) -> SimpleNamespace:
    return SimpleNamespace(
        READING_PLAN_LOG_LEVEL="info",
        READING_PLAN_LOG_DIR=log_dir,
        DATA_DIR=data_dir,
    )


@pytest.fixture(name="layout")
def _layout(tmp_path: pathlib.Path, monkeypatch: pytest.MonkeyPatch) -> pathlib.Path:
    root_dir = tmp_path / "deploy"
    monkeypatch.setattr(core_logging, "ROOT_DIR", root_dir)
    monkeypatch.setattr(core_logging, "BASE_DIR", root_dir / "pkg")
    return root_dir


def test_override_directory_wins(
    tmp_path: pathlib.Path, layout: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    del layout
    override = tmp_path / "custom-logs"
    monkeypatch.setattr(core_logging, "settings", _make_settings(override, tmp_path / "data"))

    resolved = core_logging._resolve_logs_dir()  # pylint: disable=protected-access
    assert resolved == override
    assert resolved.exists()


def test_without_override_uses_root_logs(
    tmp_path: pathlib.Path, layout: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    monkeypatch.setattr(core_logging, "settings", _make_settings(None, tmp_path / "data"))

    resolved = core_logging._resolve_logs_dir()  # pylint: disable=protected-access
    assert resolved == layout / "logs"


def test_unwritable_candidates_fall_through_to_data_dir(
    tmp_path: pathlib.Path, layout: pathlib.Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    override = tmp_path / "override"
    data_dir = tmp_path / "data"
    monkeypatch.setattr(core_logging, "settings", _make_settings(override, data_dir))

    original_mkdir = pathlib.Path.mkdir
    blocked = {override, layout / "logs"}

    def guarded_mkdir(path_obj: pathlib.Path, *args, **kwargs):
        if path_obj in blocked:
            raise PermissionError("unwritable")
        return original_mkdir(path_obj, *args, **kwargs)

    monkeypatch.setattr(pathlib.Path, "mkdir", guarded_mkdir)

    resolved = core_logging._resolve_logs_dir()  # pylint: disable=protected-access
    assert resolved == data_dir / "logs"


def test_correlation_id_context_binds_and_resets() -> None:
    assert core_logging.get_correlation_id() is None
    with core_logging.correlation_id_context("abc123"):
        assert core_logging.get_correlation_id() == "abc123"
    assert core_logging.get_correlation_id() is None
