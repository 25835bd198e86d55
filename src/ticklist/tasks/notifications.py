# src/ticklist/tasks/notifications.py

from __future__ import annotations

"""
Transient notifications ("toasts").

At most one notification is live. Showing a new one replaces the old one,
restarts the expiry timer and drops the old bound action. Actions are
tagged values interpreted by whoever was passed as `dispatch`, so nothing
here holds a closure over application state.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum

from ..core.ports import Timers
from ..core.timers import TimerSlot
from .task_models import Task

logger = logging.getLogger(__name__)


class ActionKind(StrEnum):
    UNDO = "undo"


@dataclass(slots=True, frozen=True)
class UndoAction:
    """Restore the tasks captured when soft-delete batch `batch_id` was requested."""

    batch_id: int
    snapshot: tuple[Task, ...]
    kind: ActionKind = ActionKind.UNDO

    @property
    def label(self) -> str:
        return "Undo"


NotificationAction = UndoAction


@dataclass(slots=True, frozen=True)
class Notification:
    message: str
    action: NotificationAction | None
    expires_at: float


NotificationListener = Callable[[Notification | None], None]


class NotificationScheduler:
    def __init__(
        self,
        timers: Timers,
        *,
        duration_seconds: float = 2.5,
        dispatch: Callable[[NotificationAction], None] | None = None,
    ) -> None:
        self._timers = timers
        self._duration = max(0.0, float(duration_seconds))
        self._dispatch = dispatch
        self._slot = TimerSlot(timers, "notification-expiry")
        self._current: Notification | None = None
        self._listeners: list[NotificationListener] = []

    def bind_dispatch(self, dispatch: Callable[[NotificationAction], None]) -> None:
        self._dispatch = dispatch

    def subscribe(self, listener: NotificationListener) -> None:
        self._listeners.append(listener)

    @property
    def current(self) -> Notification | None:
        return self._current

    def _set(self, notification: Notification | None) -> None:
        self._current = notification
        for listener in list(self._listeners):
            try:
                listener(notification)
            except Exception:
                logger.exception("Notification listener failed: %r", listener)

    def show(self, message: str, action: NotificationAction | None = None) -> Notification:
        note = Notification(
            message=message,
            action=action,
            expires_at=self._timers.now() + self._duration,
        )
        self._slot.restart(self._duration, self._expire)
        self._set(note)
        logger.debug("Notification shown message=%r action=%s", message, action.kind if action else None)
        return note

    def _expire(self) -> None:
        if self._current is not None:
            logger.debug("Notification expired message=%r", self._current.message)
        self._set(None)

    def clear(self) -> None:
        self._slot.cancel()
        if self._current is not None:
            self._set(None)

    def consume(self) -> bool:
        """
        Run the bound action (if any) exactly once and clear the notification.

        Returns True when an action was dispatched.
        """
        note = self._current
        if note is None:
            return False
        self.clear()
        if note.action is None:
            return False
        if self._dispatch is None:
            logger.warning("Notification action %s has no dispatcher", note.action.kind)
            return False
        self._dispatch(note.action)
        return True
