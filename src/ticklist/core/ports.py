# src/ticklist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the task list engine.

The engine depends on Protocols instead of concrete implementations.
This keeps storage/file channels/prompts swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Any, Protocol


class TimerHandleLike(Protocol):
    name: str
    cancelled: bool
    fired: bool

    def cancel(self) -> None: ...


class Timers(Protocol):
    """
    Cancellable one-shot timers on a single cooperative thread.

    now() must use the same clock the delays are measured on.
    """

    def schedule(self, delay: float, callback: Callable[[], Any], *, name: str) -> TimerHandleLike: ...
    def cancel(self, handle: TimerHandleLike | None) -> None: ...
    def now(self) -> float: ...


class KeyValueStore(Protocol):
    """Durable local key-value store (values are JSON text)."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...


class ExportChannel(Protocol):
    """Hands a byte blob to the user under a suggested filename. No result is observed."""

    def save(self, blob: bytes, filename: str) -> None: ...


class ImportSource(Protocol):
    """
    One user-selected file.

    read_bytes() completes exactly once per selection; clear() drops the
    selection and is called after handling, success or failure.
    """

    async def read_bytes(self) -> bytes: ...
    def clear(self) -> None: ...


class ConfirmPrompt(Protocol):
    """Blocking yes/no gate shown before destructive batch actions."""

    def confirm(self, message: str) -> bool: ...


class ErrorReporter(Protocol):
    """Blocking error message (e.g. a rejected import file)."""

    def alert(self, message: str) -> None: ...
