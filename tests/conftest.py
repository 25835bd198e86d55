# tests/conftest.py

from __future__ import annotations

import random
from pathlib import Path
from types import SimpleNamespace

import pytest

from ticklist.tasks.task_api import TaskListApp, Timings

from .fakes import ManualTimers, MemoryKeyValueStore, RecordingExporter, RecordingReporter, ScriptedConfirm


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and TaskListApp.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="ticklist-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        store_db_path=tmp_path / "data" / "store.sqlite3",
        export_dir=tmp_path / "exports",
        save_debounce_seconds=0.25,
        removal_delay_seconds=0.22,
        toast_seconds=2.5,
        search_debounce_seconds=0.12,
    )


@pytest.fixture()
def timers() -> ManualTimers:
    return ManualTimers()


@pytest.fixture()
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def confirm() -> ScriptedConfirm:
    return ScriptedConfirm(answer=True)


@pytest.fixture()
def exporter() -> RecordingExporter:
    return RecordingExporter()


@pytest.fixture()
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture()
def app(
    store: MemoryKeyValueStore,
    timers: ManualTimers,
    confirm: ScriptedConfirm,
    exporter: RecordingExporter,
    reporter: RecordingReporter,
) -> TaskListApp:
    """TaskListApp wired with deterministic fakes and the default timings."""
    return TaskListApp(
        store=store,
        timers=timers,
        confirm=confirm,
        exporter=exporter,
        reporter=reporter,
        timings=Timings(),
        rng=random.Random(7),
    )

