# src/ticklist/tasks/task_models.py

from __future__ import annotations

import random
import string
import time
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

_ID_ALPHABET = string.digits + string.ascii_lowercase


class Category(StrEnum):
    """
    Closed set of task categories.

    Member order matters: the first member is the default for new tasks
    and the fallback for unknown values on import.
    """

    KULIAH = "Kuliah"
    KERJA = "Kerja"
    PERSONAL = "Personal"
    LAINNYA = "Lainnya"

    @classmethod
    def coerce(cls, raw: Any) -> Category:
        if isinstance(raw, str):
            try:
                return cls(raw)
            except ValueError:
                pass
        return DEFAULT_CATEGORY


DEFAULT_CATEGORY = Category.KULIAH


class StatusFilter(StrEnum):
    ALL = "all"
    DONE = "done"
    TODO = "todo"


class SortOrder(StrEnum):
    NEWEST = "newest"
    OLDEST = "oldest"


def now_ms() -> int:
    return int(time.time() * 1000)


def new_task_id(created_at: int) -> str:
    """Creation timestamp plus a short random base36 suffix, e.g. '1718000000000-k3f9z'."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=5))
    return f"{created_at}-{suffix}"


@dataclass(slots=True)
class Task:
    id: str
    text: str
    category: Category
    completed: bool
    created_at: int

    def copy(self) -> Task:
        return replace(self)

    def to_dict(self) -> dict[str, Any]:
        """Portable shape used by storage and export (camelCase createdAt)."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
            "category": self.category.value,
            "createdAt": self.created_at,
        }
