# src/ticklist/tasks/validator.py

"""
Text normalization and add/edit validation.

All functions are pure: they return a Validation value and never raise,
so callers decide whether an error becomes an inline message or a toast.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .task_models import Category, Task

MAX_TEXT_LEN = 100

_WHITESPACE_RE = re.compile(r"\s+")


class ValidationError(StrEnum):
    EMPTY = "empty"
    TOO_LONG = "too_long"
    DUPLICATE = "duplicate"


@dataclass(slots=True, frozen=True)
class Validation:
    text: str  # normalized input
    error: ValidationError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def normalize(text: str) -> str:
    return _WHITESPACE_RE.sub(" ", text).strip()


def is_duplicate(
    text: str,
    category: Category | None,
    tasks: Iterable[Task],
    exclude_id: str | None = None,
) -> bool:
    key = normalize(text).lower()
    return any(
        t.id != exclude_id and t.category == category and normalize(t.text).lower() == key
        for t in tasks
    )


def _validate(
    text: str,
    category: Category | None,
    tasks: Iterable[Task],
    exclude_id: str | None,
) -> Validation:
    clean = normalize(text)
    if not clean:
        return Validation(clean, ValidationError.EMPTY)
    if len(clean) > MAX_TEXT_LEN:
        return Validation(clean, ValidationError.TOO_LONG)
    if is_duplicate(clean, category, tasks, exclude_id):
        return Validation(clean, ValidationError.DUPLICATE)
    return Validation(clean)


def validate_for_add(text: str, category: Category, tasks: Iterable[Task]) -> Validation:
    return _validate(text, category, tasks, None)


def validate_for_edit(
    text: str,
    category: Category | None,
    exclude_id: str,
    tasks: Iterable[Task],
) -> Validation:
    """Same rules as add, but the task being edited never counts as its own duplicate."""
    return _validate(text, category, tasks, exclude_id)
