# tests/test_persistence.py

from __future__ import annotations

import json

from ticklist.tasks.persistence import (
    TASKS_KEY,
    THEME_KEY,
    PersistenceScheduler,
    load_tasks,
    load_theme,
)

from .fakes import ManualTimers, MemoryKeyValueStore, make_task


def test_burst_of_changes_flushes_only_final_state() -> None:
    timers = ManualTimers()
    store = MemoryKeyValueStore()
    scheduler = PersistenceScheduler(store, timers, delay_seconds=0.25)

    tasks = [make_task("one", id="1")]
    scheduler.on_collection_changed(tasks)
    timers.advance(0.2)
    tasks.append(make_task("two", id="2"))
    scheduler.on_collection_changed(tasks)
    timers.advance(0.2)
    assert store.writes == []

    timers.advance(0.1)
    assert len(store.writes) == 1
    key, value = store.writes[0]
    assert key == TASKS_KEY
    assert [d["id"] for d in json.loads(value)] == ["1", "2"]
    assert scheduler.flush_count == 1


def test_flush_now_writes_pending_state_once() -> None:
    timers = ManualTimers()
    store = MemoryKeyValueStore()
    scheduler = PersistenceScheduler(store, timers, delay_seconds=0.25)

    scheduler.on_collection_changed([make_task("one", id="1")])
    scheduler.flush_now()
    assert len(store.writes) == 1
    assert not scheduler.pending

    timers.advance(1.0)
    assert len(store.writes) == 1
    scheduler.flush_now()
    assert len(store.writes) == 1


def test_theme_is_written_immediately() -> None:
    timers = ManualTimers()
    store = MemoryKeyValueStore()
    scheduler = PersistenceScheduler(store, timers)

    scheduler.save_theme(True)
    assert store.writes == [(THEME_KEY, "true")]


def test_write_failure_is_reported_not_raised() -> None:
    timers = ManualTimers()
    store = MemoryKeyValueStore(fail_writes=True)
    errors: list[str] = []
    scheduler = PersistenceScheduler(store, timers, on_error=errors.append)

    scheduler.on_collection_changed([make_task("one", id="1")])
    timers.advance(1.0)
    scheduler.save_theme(False)

    assert len(errors) == 2
    assert scheduler.flush_count == 0


def test_load_tasks_treats_bad_shapes_as_absent() -> None:
    assert load_tasks(MemoryKeyValueStore()) == []
    assert load_tasks(MemoryKeyValueStore({TASKS_KEY: "{not json"})) == []
    assert load_tasks(MemoryKeyValueStore({TASKS_KEY: '{"a": 1}'})) == []
    assert load_tasks(MemoryKeyValueStore({TASKS_KEY: '[{"text": ""}]'})) == []

    stored = json.dumps([make_task("kept", id="k").to_dict()])
    loaded = load_tasks(MemoryKeyValueStore({TASKS_KEY: stored}))
    assert [t.id for t in loaded] == ["k"]


def test_load_theme_falls_back_to_light() -> None:
    assert load_theme(MemoryKeyValueStore()) is False
    assert load_theme(MemoryKeyValueStore({THEME_KEY: "true"})) is True
    assert load_theme(MemoryKeyValueStore({THEME_KEY: '"yes"'})) is False
    assert load_theme(MemoryKeyValueStore({THEME_KEY: "garbage"})) is False
