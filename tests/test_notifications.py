# tests/test_notifications.py

from __future__ import annotations

from ticklist.tasks.notifications import NotificationScheduler, UndoAction

from .fakes import ManualTimers, make_task


def _undo(batch_id: int = 1) -> UndoAction:
    return UndoAction(batch_id=batch_id, snapshot=(make_task("x", id="x"),))


def test_show_expires_after_duration() -> None:
    timers = ManualTimers()
    notifier = NotificationScheduler(timers, duration_seconds=2.5)

    note = notifier.show("Saved")
    assert notifier.current is note
    assert note.expires_at == 2.5

    timers.advance(2.4)
    assert notifier.current is note
    timers.advance(0.2)
    assert notifier.current is None


def test_superseding_restarts_expiry_and_drops_action() -> None:
    timers = ManualTimers()
    dispatched: list[UndoAction] = []
    notifier = NotificationScheduler(timers, duration_seconds=2.5, dispatch=dispatched.append)

    notifier.show("Task deleted", _undo())
    timers.advance(2.0)
    notifier.show("Task updated")
    timers.advance(1.0)  # first deadline passed, second still live
    assert notifier.current is not None
    assert notifier.current.message == "Task updated"

    assert notifier.consume() is False
    assert dispatched == []


def test_consume_runs_action_exactly_once_and_clears() -> None:
    timers = ManualTimers()
    dispatched: list[UndoAction] = []
    notifier = NotificationScheduler(timers, duration_seconds=2.5, dispatch=dispatched.append)

    action = _undo(7)
    notifier.show("Task deleted", action)
    assert notifier.consume() is True
    assert notifier.current is None
    assert notifier.consume() is False
    assert dispatched == [action]

    # expiry timer of the consumed notification must not clear a later one
    later = notifier.show("Next")
    timers.advance(1.0)
    assert notifier.current is later


def test_expired_action_is_discarded() -> None:
    timers = ManualTimers()
    dispatched: list[UndoAction] = []
    notifier = NotificationScheduler(timers, duration_seconds=1.0, dispatch=dispatched.append)

    notifier.show("Task deleted", _undo())
    timers.advance(1.0)
    assert notifier.consume() is False
    assert dispatched == []


def test_listeners_see_show_and_clear() -> None:
    timers = ManualTimers()
    notifier = NotificationScheduler(timers, duration_seconds=1.0)
    seen: list[str | None] = []
    notifier.subscribe(lambda n: seen.append(n.message if n else None))

    notifier.show("hello")
    timers.advance(1.0)
    assert seen == ["hello", None]
