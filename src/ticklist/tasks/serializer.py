# src/ticklist/tasks/serializer.py

"""
Import/export of the task collection as a portable JSON file.

Export writes every field, pretty-printed. Import is tolerant of legacy shapes and
all-or-nothing: each element is decoded into a TaskDecode result, and a
single failing element rejects the whole file so the caller never applies
a partial collection.

Accepted element shape (legacy aliases in brackets):
    {"id", "text" [title], "category", "completed" [done], "createdAt"}
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .task_models import Category, Task, new_task_id, now_ms
from .validator import normalize

logger = logging.getLogger(__name__)

EXPORT_FILENAME = "tasks.json"


@dataclass(slots=True, frozen=True)
class TaskDecode:
    task: Task | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.task is not None


@dataclass(slots=True, frozen=True)
class CollectionDecode:
    tasks: list[Task] = field(default_factory=list)
    reason: str | None = None  # set => Malformed

    @property
    def ok(self) -> bool:
        return self.reason is None


def export_tasks(tasks: list[Task]) -> bytes:
    data = [t.to_dict() for t in tasks]
    return json.dumps(data, ensure_ascii=False, indent=2).encode("utf-8")


def _first_present(raw: dict[str, Any], *keys: str) -> Any:
    for k in keys:
        v = raw.get(k)
        if v is not None:
            return v
    return None


def _scalar_text(value: Any) -> str | None:
    """String form of a JSON scalar; None for objects/arrays."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    return None


def _string_of(value: Any) -> str:
    """Text form of any JSON value: arrays join their items with commas, objects get a placeholder."""
    if value is None:
        return ""
    if isinstance(value, list):
        return ",".join(_string_of(v) for v in value)
    if isinstance(value, dict):
        return "[object Object]"
    text = _scalar_text(value)
    return "" if text is None else text


def _created_at(value: Any, now: int) -> int:
    if isinstance(value, bool) or value is None:
        return now
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return now
    else:
        return now
    if not math.isfinite(number):
        return now
    return int(number)


def decode_task(
    raw: Any,
    *,
    now: int,
    new_id: Callable[[int], str] = new_task_id,
) -> TaskDecode:
    if not isinstance(raw, dict):
        return TaskDecode(reason="item is not an object")

    text = normalize(_string_of(_first_present(raw, "text", "title")))
    if not text:
        return TaskDecode(reason="item without text")

    created_at = _created_at(raw.get("createdAt"), now)

    done_raw = _first_present(raw, "completed", "done")
    completed = bool(done_raw) if done_raw is not None else False

    id_raw = raw.get("id")
    task_id = _scalar_text(id_raw) if id_raw is not None else None
    if task_id is None:
        task_id = new_id(created_at)

    return TaskDecode(
        task=Task(
            id=task_id,
            text=text,
            category=Category.coerce(raw.get("category")),
            completed=completed,
            created_at=created_at,
        )
    )


def decode_collection(
    blob: bytes | str,
    *,
    now: int | None = None,
    new_id: Callable[[int], str] = new_task_id,
) -> CollectionDecode:
    """Decode a whole file. Any failure (bytes, JSON, shape, one element) rejects everything."""
    try:
        text = blob.decode("utf-8-sig") if isinstance(blob, bytes) else blob
    except UnicodeDecodeError:
        return CollectionDecode(reason="file is not UTF-8 text")

    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as e:
        return CollectionDecode(reason=f"invalid JSON: {e.msg} (line {e.lineno})")

    if not isinstance(parsed, list):
        return CollectionDecode(reason="not an array")

    ts = now_ms() if now is None else now
    tasks: list[Task] = []
    for index, item in enumerate(parsed):
        result = decode_task(item, now=ts, new_id=new_id)
        if result.task is None:
            logger.debug("Import rejected at item %d: %s", index, result.reason)
            return CollectionDecode(reason=f"item {index + 1}: {result.reason}")
        tasks.append(result.task)
    return CollectionDecode(tasks=tasks)
