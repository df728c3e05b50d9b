# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from tasklist.cli import App
from tasklist.config import Settings
from tasklist.storage import Storage
from tasklist.store import TaskStore

from .helpers import FakeClock


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        todo_file=tmp_path / "todo.json",
        log_dir=tmp_path / "logs",
        no_color=True,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def make_app(settings: Settings, clock: FakeClock):
    """Build an App over the given store with file storage in tmp_path."""

    def _make(store: TaskStore | None = None) -> App:
        return App(store or TaskStore(), Storage(settings.todo_file), settings, clock=clock)

    return _make
