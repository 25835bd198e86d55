# src/ticklist/core/state.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field

from ..tasks.task_models import Category, SortOrder, StatusFilter, Task
from ..tasks.validator import ValidationError

logger = logging.getLogger(__name__)

CollectionListener = Callable[[list[Task]], None]


@dataclass
class TaskListState:
    """
    The authoritative task collection plus UI-facing flags.

    Collection mutations go through the methods below; each one notifies
    subscribers (the persistence scheduler) with the current list.
    Search/filter/sort/edit fields are plain attributes and do not notify.
    """

    tasks: list[Task] = field(default_factory=list)
    removing_ids: set[str] = field(default_factory=set)
    dark_mode: bool = False

    search: str = ""
    status_filter: StatusFilter = StatusFilter.ALL
    sort_order: SortOrder = SortOrder.NEWEST

    editing_id: str | None = None
    editing_text: str = ""
    add_error: ValidationError | None = None

    _listeners: list[CollectionListener] = field(default_factory=list, repr=False)

    def subscribe(self, listener: CollectionListener) -> None:
        self._listeners.append(listener)

    def _changed(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self.tasks)
            except Exception:
                logger.exception("Collection listener failed: %r", listener)

    # ---- queries ----

    def find(self, task_id: str) -> Task | None:
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    def snapshot(self, ids: Iterable[str] | None = None) -> tuple[Task, ...]:
        """Independent copies of the selected tasks (all tasks when ids is None)."""
        if ids is None:
            return tuple(t.copy() for t in self.tasks)
        wanted = set(ids)
        return tuple(t.copy() for t in self.tasks if t.id in wanted)

    # ---- collection mutations ----

    def append_task(self, task: Task) -> None:
        self.tasks.append(task)
        self._changed()

    def update_task(
        self,
        task_id: str,
        *,
        text: str | None = None,
        category: Category | None = None,
        completed: bool | None = None,
    ) -> Task | None:
        task = self.find(task_id)
        if task is None:
            return None
        if text is not None:
            task.text = text
        if category is not None:
            task.category = category
        if completed is not None:
            task.completed = completed
        self._changed()
        return task

    def remove_tasks(self, ids: Iterable[str]) -> list[Task]:
        doomed = set(ids)
        removed = [t for t in self.tasks if t.id in doomed]
        if removed:
            self.tasks = [t for t in self.tasks if t.id not in doomed]
            self._changed()
        return removed

    def restore_tasks(self, snapshot: Iterable[Task]) -> None:
        """Put snapshot values back: reset tasks still present, re-append missing ones."""
        index = {t.id: i for i, t in enumerate(self.tasks)}
        for saved in snapshot:
            pos = index.get(saved.id)
            if pos is None:
                self.tasks.append(saved.copy())
                index[saved.id] = len(self.tasks) - 1
            else:
                self.tasks[pos] = saved.copy()
        self._changed()

    def replace_tasks(self, tasks: Iterable[Task]) -> None:
        self.tasks = list(tasks)
        self._changed()

    def load_tasks(self, tasks: Iterable[Task]) -> None:
        """Initial hydration from storage; does not notify subscribers."""
        self.tasks = list(tasks)

    # ---- pending removal ----

    def mark_removing(self, ids: Iterable[str]) -> None:
        self.removing_ids.update(ids)

    def unmark_removing(self, ids: Iterable[str]) -> None:
        self.removing_ids.difference_update(ids)
