# src/ticklist/tasks/task_api.py

from __future__ import annotations

"""
High-level task list operations used by front-ends.

TaskListApp owns the state store and wires the engine parts together:
validator -> state mutations -> persistence scheduler,
soft-delete manager -> notification scheduler (undo actions),
serializer -> export channel / import source.

Front-ends call these methods and read `state`, `visible_tasks()` and
`notifier.current`; they never mutate the collection directly.
"""

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass

from ..core.ports import ConfirmPrompt, ErrorReporter, ExportChannel, ImportSource, KeyValueStore, Timers
from ..core.state import TaskListState
from ..core.timers import TimerSlot
from . import projection
from .notifications import Notification, NotificationAction, NotificationScheduler, UndoAction
from .persistence import PersistenceScheduler, load_tasks, load_theme
from .serializer import EXPORT_FILENAME, decode_collection, export_tasks
from .soft_delete import SoftDeleteManager
from .task_models import DEFAULT_CATEGORY, Category, SortOrder, StatusFilter, Task, new_task_id, now_ms
from .validator import MAX_TEXT_LEN, Validation, ValidationError, validate_for_add, validate_for_edit

logger = logging.getLogger(__name__)

QUOTES = (
    "Little by little, a little becomes a lot",
    "Focus on the next step",
    "Consistency is the key",
    "You are closer than you think",
    "Today is better than yesterday",
)

ADD_ERRORS = {
    ValidationError.EMPTY: "Task cannot be empty",
    ValidationError.TOO_LONG: f"At most {MAX_TEXT_LEN} characters",
    ValidationError.DUPLICATE: "A task with the same category already exists",
}

EDIT_ERRORS = {
    ValidationError.EMPTY: "Text cannot be empty",
    ValidationError.TOO_LONG: f"At most {MAX_TEXT_LEN} characters",
    ValidationError.DUPLICATE: "Duplicate in the same category",
}

IMPORT_FAILED = "Invalid or corrupted file. Make sure it is a JSON array of tasks."


@dataclass(frozen=True, slots=True)
class Timings:
    save_debounce_seconds: float = 0.25
    removal_delay_seconds: float = 0.22
    toast_seconds: float = 2.5
    search_debounce_seconds: float = 0.12

    @staticmethod
    def from_settings(settings: object) -> Timings:
        d = Timings()
        return Timings(
            save_debounce_seconds=float(getattr(settings, "save_debounce_seconds", d.save_debounce_seconds)),
            removal_delay_seconds=float(getattr(settings, "removal_delay_seconds", d.removal_delay_seconds)),
            toast_seconds=float(getattr(settings, "toast_seconds", d.toast_seconds)),
            search_debounce_seconds=float(getattr(settings, "search_debounce_seconds", d.search_debounce_seconds)),
        )


class TaskListApp:
    def __init__(
        self,
        *,
        store: KeyValueStore,
        timers: Timers,
        confirm: ConfirmPrompt,
        exporter: ExportChannel,
        reporter: ErrorReporter,
        timings: Timings | None = None,
        state: TaskListState | None = None,
        rng: random.Random | None = None,
    ) -> None:
        timings = timings or Timings()
        self.state = state or TaskListState()
        self._store = store
        self._exporter = exporter
        self._reporter = reporter
        self._rng = rng or random.Random()

        self.notifier = NotificationScheduler(timers, duration_seconds=timings.toast_seconds)
        self.soft_delete = SoftDeleteManager(
            self.state,
            timers,
            self.notifier,
            confirm,
            delay_seconds=timings.removal_delay_seconds,
        )
        self.notifier.bind_dispatch(self._run_action)

        self.persistence = PersistenceScheduler(
            store,
            timers,
            delay_seconds=timings.save_debounce_seconds,
            on_error=self._report_store_error,
        )
        self.state.subscribe(self.persistence.on_collection_changed)

        self._deferred_error: str | None = None
        self._error_slot = TimerSlot(timers, "store-error")
        self.notifier.subscribe(self._on_notification)

        self._search_delay = timings.search_debounce_seconds
        self._search_slot = TimerSlot(timers, "search-debounce")

    # ---- lifecycle ----

    def load(self) -> None:
        """Hydrate from the durable store; loading alone never schedules a write."""
        self.state.load_tasks(load_tasks(self._store))
        self.state.dark_mode = load_theme(self._store)
        logger.info("Loaded %d tasks (dark_mode=%s)", len(self.state.tasks), self.state.dark_mode)

    def shutdown(self) -> None:
        """Cancel outstanding timers (uncommitted deletes are dropped) and write what is pending."""
        self._search_slot.cancel()
        self.soft_delete.discard_pending()
        self.persistence.flush_now()
        self.notifier.clear()
        self._error_slot.cancel()
        self._deferred_error = None

    # ---- views ----

    def visible_tasks(self) -> list[Task]:
        s = self.state
        return projection.project(s.tasks, s.search, s.status_filter, s.sort_order)

    def progress(self) -> int:
        return projection.progress(self.state.tasks)

    def completed_count(self) -> int:
        return projection.completed_count(self.state.tasks)

    def category_stats(self) -> dict[Category, int]:
        return projection.category_counts(self.state.tasks)

    def is_removing(self, task_id: str) -> bool:
        return task_id in self.state.removing_ids

    # ---- add / toggle / edit ----

    def add_task(self, text: str, category: Category | str = DEFAULT_CATEGORY) -> Validation:
        category = Category(category)
        result = validate_for_add(text, category, self.state.tasks)
        if not result.ok:
            self.state.add_error = result.error
            return result

        self.state.add_error = None
        created_at = now_ms()
        self.state.append_task(
            Task(
                id=new_task_id(created_at),
                text=result.text,
                category=category,
                completed=False,
                created_at=created_at,
            )
        )
        self.notifier.show(self._rng.choice(QUOTES))
        return result

    def clear_add_error(self) -> None:
        self.state.add_error = None

    def add_error_message(self) -> str | None:
        err = self.state.add_error
        return ADD_ERRORS[err] if err is not None else None

    def toggle_task(self, task_id: str) -> Task | None:
        task = self.state.find(task_id)
        if task is None:
            return None
        self.state.update_task(task_id, completed=not task.completed)
        if task.completed and projection.all_completed(self.state.tasks):
            self.notifier.show("All tasks completed! 🎉")
        return task

    def begin_edit(self, task_id: str) -> bool:
        task = self.state.find(task_id)
        if task is None:
            return False
        self.state.editing_id = task.id
        self.state.editing_text = task.text
        return True

    def set_edit_text(self, text: str) -> None:
        self.state.editing_text = text

    def cancel_edit(self) -> None:
        self.state.editing_id = None
        self.state.editing_text = ""

    def save_edit(self) -> Validation | None:
        """
        Validate the edit session against the current collection and apply it.

        Errors keep the session open and surface as notifications.
        Returns None when there was no session or the task is gone.
        """
        editing_id = self.state.editing_id
        if editing_id is None:
            return None
        task = self.state.find(editing_id)
        if task is None:
            self.cancel_edit()
            self.notifier.show("Task no longer exists")
            return None

        result = validate_for_edit(self.state.editing_text, task.category, editing_id, self.state.tasks)
        if result.error is not None:
            self.notifier.show(EDIT_ERRORS[result.error])
            return result

        self.state.update_task(editing_id, text=result.text)
        self.cancel_edit()
        self.notifier.show("Task updated ✏️")
        return result

    # ---- deletion ----

    def delete_task(self, task_id: str) -> UndoAction | None:
        task = self.state.find(task_id)
        if task is None:
            return None
        return self.soft_delete.request_delete(
            [task_id],
            prompt=f'Delete task "{task.text}"?',
            message="Task deleted ❌",
        )

    def clear_completed(self) -> UndoAction | None:
        ids = [t.id for t in self.state.tasks if t.completed]
        if not ids:
            return None
        return self.soft_delete.request_delete(
            ids,
            prompt="Delete all completed tasks?",
            message="Completed tasks deleted 🧹",
        )

    def clear_all(self) -> UndoAction | None:
        ids = [t.id for t in self.state.tasks]
        if not ids:
            return None
        return self.soft_delete.request_delete(
            ids,
            prompt="Really delete all tasks?",
            message="All tasks deleted 🗑️",
        )

    def consume_notification(self) -> bool:
        return self.notifier.consume()

    def undo(self) -> bool:
        note = self.notifier.current
        if note is None or note.action is None:
            return False
        return self.notifier.consume()

    def _run_action(self, action: NotificationAction) -> None:
        if isinstance(action, UndoAction):
            self.soft_delete.undo(action)
            return
        logger.warning("Unknown notification action: %r", action)

    def _report_store_error(self, message: str) -> None:
        """Show a store failure, but never over a notification that still offers an action."""
        note = self.notifier.current
        if note is not None and note.action is not None:
            logger.debug("Store error deferred until %r is gone", note.message)
            self._deferred_error = message
            return
        self.notifier.show(message)

    def _on_notification(self, note: Notification | None) -> None:
        if note is None and self._deferred_error is not None:
            self._error_slot.restart(0.0, self._show_deferred_error)

    def _show_deferred_error(self) -> None:
        message, self._deferred_error = self._deferred_error, None
        if message is not None:
            self._report_store_error(message)

    # ---- search / filter / sort ----

    def set_search(self, query: str, *, debounce: bool = True) -> None:
        if not debounce or self._search_delay <= 0:
            self._search_slot.cancel()
            self.state.search = query
            return

        def _apply() -> None:
            self.state.search = query

        self._search_slot.restart(self._search_delay, _apply)

    def search_category(self, category: Category) -> None:
        self.set_search(Category(category).value, debounce=False)

    def clear_search(self) -> None:
        self.set_search("", debounce=False)

    def set_filter(self, status_filter: StatusFilter | str) -> None:
        self.state.status_filter = StatusFilter(status_filter)

    def set_sort(self, sort_order: SortOrder | str) -> None:
        self.state.sort_order = SortOrder(sort_order)

    # ---- theme ----

    def set_dark_mode(self, dark_mode: bool) -> None:
        if self.state.dark_mode == dark_mode:
            return
        self.state.dark_mode = dark_mode
        self.persistence.save_theme(dark_mode)

    def toggle_theme(self) -> bool:
        self.set_dark_mode(not self.state.dark_mode)
        return self.state.dark_mode

    # ---- import / export ----

    def export_tasks(self) -> bytes:
        blob = export_tasks(self.state.tasks)
        try:
            self._exporter.save(blob, EXPORT_FILENAME)
        except OSError:
            logger.exception("Export failed")
            self.notifier.show("Export failed")
            return blob
        self.notifier.show("Data exported 💾")
        return blob

    async def import_from(self, source: ImportSource) -> bool:
        """
        Replace the whole collection with the contents of `source`.

        All-or-nothing: on any read or decode failure the collection is
        untouched and the reporter shows a blocking error. The source is
        cleared in every case.
        """
        try:
            try:
                blob = await source.read_bytes()
            except OSError:
                logger.exception("Import read failed")
                self._reporter.alert(IMPORT_FAILED)
                return False

            decoded = decode_collection(blob)
            if not decoded.ok:
                logger.warning("Import rejected: %s", decoded.reason)
                self._reporter.alert(IMPORT_FAILED)
                return False

            self.soft_delete.discard_pending()
            self.cancel_edit()
            self.state.replace_tasks(decoded.tasks)
            self.notifier.show("Data imported successfully ✅")
            logger.info("Imported %d tasks", len(decoded.tasks))
            return True
        finally:
            source.clear()

    # ---- helpers for front-ends ----

    def task_at(self, position: int, tasks: Sequence[Task] | None = None) -> Task | None:
        """1-based position in the current visible list."""
        items = self.visible_tasks() if tasks is None else tasks
        if position < 1 or position > len(items):
            return None
        return items[position - 1]
