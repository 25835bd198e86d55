# tests/test_soft_delete.py

from __future__ import annotations

from ticklist.core.state import TaskListState
from ticklist.tasks.notifications import NotificationScheduler
from ticklist.tasks.soft_delete import FINISHED_HISTORY, RemovalPhase, SoftDeleteManager
from ticklist.tasks.task_models import Category

from .fakes import ManualTimers, ScriptedConfirm, make_task


def _setup(answer: bool = True):
    timers = ManualTimers()
    state = TaskListState(
        tasks=[
            make_task("Buy milk", Category.PERSONAL, id="a"),
            make_task("Write report", Category.KERJA, id="b", completed=True),
            make_task("Read paper", Category.KULIAH, id="c", completed=True),
        ]
    )
    notifier = NotificationScheduler(timers, duration_seconds=2.5)
    confirm = ScriptedConfirm(answer=answer)
    manager = SoftDeleteManager(state, timers, notifier, confirm, delay_seconds=0.22)
    notifier.bind_dispatch(manager.undo)
    return timers, state, notifier, confirm, manager


def test_declined_confirmation_changes_nothing() -> None:
    timers, state, notifier, confirm, manager = _setup(answer=False)

    assert manager.request_delete(["a"], prompt="Delete?", message="Deleted") is None
    assert confirm.prompts == ["Delete?"]
    assert state.removing_ids == set()
    assert notifier.current is None
    timers.advance(1.0)
    assert [t.id for t in state.tasks] == ["a", "b", "c"]


def test_unknown_ids_do_not_prompt() -> None:
    _, _, _, confirm, manager = _setup()
    assert manager.request_delete(["zzz"], prompt="Delete?", message="Deleted") is None
    assert confirm.prompts == []


def test_commit_removes_after_delay() -> None:
    timers, state, notifier, _, manager = _setup()

    action = manager.request_delete(["b", "c"], prompt="Delete done?", message="Deleted")
    assert action is not None
    assert manager.phase(action.batch_id) is RemovalPhase.MARKED
    assert state.removing_ids == {"b", "c"}
    assert notifier.current is not None and notifier.current.action is action

    timers.advance(0.21)
    assert len(state.tasks) == 3

    timers.advance(0.02)
    assert [t.id for t in state.tasks] == ["a"]
    assert state.removing_ids == set()
    assert manager.phase(action.batch_id) is RemovalPhase.REMOVED


def test_undo_before_commit_leaves_collection_identical() -> None:
    timers, state, notifier, _, manager = _setup()
    before = [t.to_dict() for t in state.tasks]

    action = manager.request_delete(["a", "b", "c"], prompt="All?", message="Deleted")
    assert action is not None
    timers.advance(0.1)
    assert notifier.consume() is True

    assert state.removing_ids == set()
    assert manager.phase(action.batch_id) is RemovalPhase.RESTORED
    timers.advance(5.0)
    assert sorted((t.to_dict() for t in state.tasks), key=lambda d: d["id"]) == before


def test_undo_after_commit_reinserts_snapshot() -> None:
    timers, state, notifier, _, manager = _setup()
    original = state.find("a").to_dict()

    manager.request_delete(["a"], prompt="Delete?", message="Deleted")
    timers.advance(1.0)
    assert state.find("a") is None

    assert notifier.consume() is True
    restored = state.find("a")
    assert restored is not None
    assert restored.to_dict() == original


def test_snapshot_is_independent_of_later_mutation() -> None:
    timers, state, notifier, _, manager = _setup()

    action = manager.request_delete(["a"], prompt="Delete?", message="Deleted")
    assert action is not None
    state.update_task("a", text="changed meanwhile")
    manager.undo(action)

    assert state.find("a").text == "Buy milk"
    assert action.snapshot[0].text == "Buy milk"


def test_discard_pending_cancels_commit() -> None:
    timers, state, _, _, manager = _setup()
    manager.request_delete(["a"], prompt="Delete?", message="Deleted")
    manager.discard_pending()

    timers.advance(1.0)
    assert state.find("a") is not None
    assert state.removing_ids == set()
    assert manager.pending_batches == 0


def test_marked_task_is_not_taken_by_a_second_batch() -> None:
    timers, state, notifier, confirm, manager = _setup()

    first = manager.request_delete(["a", "b", "c"], prompt="All?", message="Deleted")
    timers.advance(0.1)
    assert manager.request_delete(["b"], prompt="Delete b?", message="Deleted") is None
    assert confirm.prompts == ["All?"]

    assert notifier.current.action is first
    assert notifier.consume() is True
    timers.advance(1.0)
    assert [t.id for t in state.tasks] == ["a", "b", "c"]
    assert state.removing_ids == set()


def test_commit_skips_ids_no_longer_marked() -> None:
    timers, state, _, _, manager = _setup()

    manager.request_delete(["a", "b"], prompt="Delete?", message="Deleted")
    state.unmark_removing(["b"])
    timers.advance(1.0)
    assert [t.id for t in state.tasks] == ["b", "c"]


def test_settled_batch_history_is_bounded() -> None:
    timers, state, _, _, manager = _setup()

    last = None
    for _ in range(FINISHED_HISTORY + 10):
        last = manager.request_delete(["a"], prompt="Delete?", message="Deleted")
        manager.undo(last)

    assert len(manager._finished) == FINISHED_HISTORY
    assert manager.phase(last.batch_id) is RemovalPhase.RESTORED
    assert manager.phase(1) is RemovalPhase.ACTIVE
