# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from academic_planner.core.state import AppState
from academic_planner.storage.json_store import JsonStore

from .fakes import InMemoryStore


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI handlers.

    A SimpleNamespace rather than the real config keeps tests isolated
    from the environment and any local .env file.
    """
    return SimpleNamespace(
        app_name="planner-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        store_path=tmp_path / "planner.json",
        log_dir=tmp_path,
        date_format="%Y-%m-%d",
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """
    AppState backed by a real JsonStore in tmp_path.

    File persistence is part of what the command tests exercise.
    """
    return AppState(settings=settings, store=JsonStore(settings.store_path))


@pytest.fixture()
def memory_state(settings: SimpleNamespace) -> AppState:
    return AppState(settings=settings, store=InMemoryStore())
