# src/ticklist/tasks/persistence.py

from __future__ import annotations

"""
Debounced persistence of the task collection + immediate theme writes.

Only the last state inside a quiet window is written. A crash between a
change and the flush loses that change; shutdown should call flush_now().
"""

import json
import logging
from collections.abc import Callable
from typing import Any

from ..core.ports import KeyValueStore, Timers
from ..core.timers import TimerSlot
from .serializer import decode_collection
from .task_models import Task

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
THEME_KEY = "darkMode"


class PersistenceScheduler:
    def __init__(
        self,
        store: KeyValueStore,
        timers: Timers,
        *,
        delay_seconds: float = 0.25,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self._store = store
        self._delay = max(0.0, float(delay_seconds))
        self._on_error = on_error
        self._slot = TimerSlot(timers, "persist-tasks")
        self._pending: list[dict[str, Any]] | None = None
        self.flush_count = 0

    @property
    def pending(self) -> bool:
        return self._slot.pending

    def on_collection_changed(self, tasks: list[Task]) -> None:
        self._pending = [t.to_dict() for t in tasks]
        self._slot.restart(self._delay, self._flush)

    def _flush(self) -> None:
        payload = self._pending
        self._pending = None
        if payload is None:
            return
        if self._write(TASKS_KEY, json.dumps(payload, ensure_ascii=False)):
            self.flush_count += 1
            logger.debug("Flushed %d tasks", len(payload))

    def flush_now(self) -> None:
        if self._slot.pending:
            self._slot.cancel()
            self._flush()

    def cancel(self) -> None:
        self._slot.cancel()
        self._pending = None

    def save_theme(self, dark_mode: bool) -> None:
        self._write(THEME_KEY, json.dumps(bool(dark_mode)))

    def _write(self, key: str, value: str) -> bool:
        try:
            self._store.set(key, value)
            return True
        except Exception:
            logger.exception("Store write failed key=%s", key)
            if self._on_error is not None:
                self._on_error("Could not save your changes")
            return False


def load_tasks(store: KeyValueStore) -> list[Task]:
    """Stored collection, or [] when missing, unreadable or in an unexpected shape."""
    try:
        raw = store.get(TASKS_KEY)
    except Exception:
        logger.exception("Store read failed key=%s", TASKS_KEY)
        return []
    if raw is None:
        return []
    decoded = decode_collection(raw)
    if not decoded.ok:
        logger.warning("Ignoring stored tasks (%s)", decoded.reason)
        return []
    return decoded.tasks


def load_theme(store: KeyValueStore) -> bool:
    try:
        raw = store.get(THEME_KEY)
    except Exception:
        logger.exception("Store read failed key=%s", THEME_KEY)
        return False
    if raw is None:
        return False
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return False
    return value if isinstance(value, bool) else False
