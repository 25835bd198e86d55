# src/ticklist/tasks/projection.py

"""
Derived, read-only views over the task collection.

Every function recomputes from scratch and never mutates its input.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .task_models import Category, SortOrder, StatusFilter, Task
from .validator import normalize


def _matches(task: Task, query: str) -> bool:
    return query in task.text.lower() or query in task.category.value.lower()


def project(
    tasks: Sequence[Task],
    search: str = "",
    status_filter: StatusFilter = StatusFilter.ALL,
    sort_order: SortOrder = SortOrder.NEWEST,
) -> list[Task]:
    """
    Filter by search query, then by status, then sort.

    Order: created_at (descending for newest, ascending for oldest), ties by
    ascending text regardless of direction, then id so the result is total.
    """
    items = list(tasks)

    query = normalize(search).lower()
    if query:
        items = [t for t in items if _matches(t, query)]

    if status_filter == StatusFilter.DONE:
        items = [t for t in items if t.completed]
    elif status_filter == StatusFilter.TODO:
        items = [t for t in items if not t.completed]

    sign = -1 if sort_order == SortOrder.NEWEST else 1
    items.sort(key=lambda t: (sign * t.created_at, t.text, t.id))
    return items


def completed_count(tasks: Sequence[Task]) -> int:
    return sum(1 for t in tasks if t.completed)


def all_completed(tasks: Sequence[Task]) -> bool:
    return bool(tasks) and all(t.completed for t in tasks)


def progress(tasks: Sequence[Task]) -> int:
    """Completed share as an integer percent, rounded half up; 0 for an empty list."""
    if not tasks:
        return 0
    return int(math.floor(100 * completed_count(tasks) / len(tasks) + 0.5))


def category_counts(tasks: Sequence[Task]) -> dict[Category, int]:
    counts = {c: 0 for c in Category}
    for t in tasks:
        counts[t.category] = counts.get(t.category, 0) + 1
    return counts
