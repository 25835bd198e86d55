# src/ticklist/tasks/soft_delete.py

from __future__ import annotations

"""
Two-phase ("soft") deletion with undo.

Per batch:  ACTIVE -> MARKED -> REMOVED
                        \\-> RESTORED

Marked ids sit in the pending-removal set (so a front-end can fade them
out) until the commit timer fires. The undo notification outlives the
commit delay, so undo also works on an already REMOVED batch as long as
its notification is still live: the snapshot is simply re-inserted.
"""

import itertools
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from ..core.ports import ConfirmPrompt, TimerHandleLike, Timers
from ..core.state import TaskListState
from .notifications import NotificationScheduler, UndoAction

logger = logging.getLogger(__name__)

# Settled batches remembered for phase(); older ones report ACTIVE.
FINISHED_HISTORY = 64


class RemovalPhase(StrEnum):
    ACTIVE = "active"
    MARKED = "marked"
    REMOVED = "removed"
    RESTORED = "restored"


@dataclass(slots=True)
class _Batch:
    batch_id: int
    ids: frozenset[str]
    handle: TimerHandleLike | None
    phase: RemovalPhase = RemovalPhase.MARKED


class SoftDeleteManager:
    def __init__(
        self,
        state: TaskListState,
        timers: Timers,
        notifier: NotificationScheduler,
        confirm: ConfirmPrompt,
        *,
        delay_seconds: float = 0.22,
    ) -> None:
        self._state = state
        self._timers = timers
        self._notifier = notifier
        self._confirm = confirm
        self._delay = max(0.0, float(delay_seconds))
        self._ids = itertools.count(1)
        self._batches: dict[int, _Batch] = {}
        self._finished: dict[int, RemovalPhase] = {}

    def _finish(self, batch_id: int, phase: RemovalPhase) -> None:
        self._finished.pop(batch_id, None)
        self._finished[batch_id] = phase
        while len(self._finished) > FINISHED_HISTORY:
            del self._finished[next(iter(self._finished))]

    def phase(self, batch_id: int) -> RemovalPhase:
        batch = self._batches.get(batch_id)
        if batch is not None:
            return batch.phase
        return self._finished.get(batch_id, RemovalPhase.ACTIVE)

    @property
    def pending_batches(self) -> int:
        return len(self._batches)

    def request_delete(self, ids: Iterable[str], *, prompt: str, message: str) -> UndoAction | None:
        """
        Ask for confirmation, then mark `ids` and schedule their removal.

        Returns the undo action bound to the notification, or None when
        nothing was targeted or the user declined.
        """
        removing = self._state.removing_ids
        targets = [i for i in dict.fromkeys(ids) if i not in removing and self._state.find(i) is not None]
        if not targets:
            return None

        if not self._confirm.confirm(prompt):
            logger.debug("Delete declined ids=%s", targets)
            return None

        batch_id = next(self._ids)
        snapshot = self._state.snapshot(targets)
        self._state.mark_removing(targets)

        handle = self._timers.schedule(
            self._delay,
            lambda: self._commit(batch_id),
            name=f"soft-delete-{batch_id}",
        )
        self._batches[batch_id] = _Batch(batch_id=batch_id, ids=frozenset(targets), handle=handle)

        action = UndoAction(batch_id=batch_id, snapshot=snapshot)
        self._notifier.show(message, action)
        logger.info("Soft delete batch=%s marked=%d", batch_id, len(targets))
        return action

    def _commit(self, batch_id: int) -> None:
        batch = self._batches.pop(batch_id, None)
        if batch is None or batch.phase != RemovalPhase.MARKED:
            return
        still_marked = batch.ids & self._state.removing_ids
        removed = self._state.remove_tasks(still_marked)
        self._state.unmark_removing(batch.ids)
        batch.phase = RemovalPhase.REMOVED
        self._finish(batch_id, RemovalPhase.REMOVED)
        logger.info("Soft delete batch=%s removed=%d", batch_id, len(removed))

    def undo(self, action: UndoAction) -> None:
        batch = self._batches.pop(action.batch_id, None)
        if batch is not None:
            self._timers.cancel(batch.handle)
            self._state.unmark_removing(batch.ids)
        self._state.restore_tasks(action.snapshot)
        self._finish(action.batch_id, RemovalPhase.RESTORED)
        logger.info("Undo batch=%s restored=%d", action.batch_id, len(action.snapshot))

    def discard_pending(self) -> None:
        """Cancel every batch still waiting for its commit (the collection is being replaced)."""
        for batch in self._batches.values():
            self._timers.cancel(batch.handle)
            self._state.unmark_removing(batch.ids)
            self._finish(batch.batch_id, RemovalPhase.ACTIVE)
        self._batches.clear()
