# tests/test_validator.py

from __future__ import annotations

import pytest

from ticklist.tasks.task_models import Category
from ticklist.tasks.validator import (
    MAX_TEXT_LEN,
    ValidationError,
    normalize,
    validate_for_add,
    validate_for_edit,
)

from .fakes import make_task


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("  Buy   milk ", "Buy milk"),
        ("a\tb\n\nc", "a b c"),
        ("   ", ""),
        ("", ""),
    ],
)
def test_normalize_collapses_and_trims(raw: str, expected: str) -> None:
    assert normalize(raw) == expected


def test_add_rejects_empty_after_normalization() -> None:
    result = validate_for_add(" \t\n ", Category.KERJA, [])
    assert result.error is ValidationError.EMPTY
    assert not result.ok


def test_add_length_limit_applies_after_normalization() -> None:
    exact = "x" * MAX_TEXT_LEN
    assert validate_for_add(f"  {exact}  ", Category.KERJA, []).ok
    assert validate_for_add(exact + "y", Category.KERJA, []).error is ValidationError.TOO_LONG
    # internal runs collapse before counting
    assert validate_for_add("a" + " " * 200 + "b", Category.KERJA, []).ok


def test_add_duplicate_is_case_and_whitespace_insensitive_per_category() -> None:
    tasks = [make_task("Buy milk", Category.PERSONAL)]

    dup = validate_for_add("buy   MILK", Category.PERSONAL, tasks)
    assert dup.error is ValidationError.DUPLICATE
    assert dup.text == "buy MILK"

    assert validate_for_add("buy milk", Category.KERJA, tasks).ok


def test_edit_ignores_the_task_being_edited() -> None:
    task = make_task("Read chapter 3", Category.KULIAH, id="t1")
    other = make_task("Read chapter 4", Category.KULIAH, id="t2")
    tasks = [task, other]

    assert validate_for_edit("Read chapter 3", Category.KULIAH, "t1", tasks).ok
    assert validate_for_edit("read CHAPTER 3 ", Category.KULIAH, "t1", tasks).ok
    assert (
        validate_for_edit("Read chapter 4", Category.KULIAH, "t1", tasks).error
        is ValidationError.DUPLICATE
    )


def test_edit_applies_same_empty_and_length_rules() -> None:
    tasks = [make_task("x", id="t1")]
    assert validate_for_edit("   ", Category.KULIAH, "t1", tasks).error is ValidationError.EMPTY
    assert (
        validate_for_edit("z" * (MAX_TEXT_LEN + 1), Category.KULIAH, "t1", tasks).error
        is ValidationError.TOO_LONG
    )
