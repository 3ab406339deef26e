# tests/test_task_store.py
from datetime import date

import pytest

from models.task import Task, TaskFrequency, TaskPriority, TaskStatus, TaskType
from services.errors import NotFoundError
from services.task_store import TaskStore


def _weekly_store(status=TaskStatus.IN_PROGRESS):
    store = TaskStore()
    t1 = store.create_task("u3", title="Weekly KPI Report", task_type=TaskType.BAU,
                           frequency=TaskFrequency.WEEKLY, status=status, priority=TaskPriority.HIGH,
                           assignee_id="u1", due_date=date(2024, 1, 1), due_time="10:00", file_ids=["f1"])
    return store, t1


def _actions(store):
    return [e.action for e in reversed(store.audit.entries)]


def test_create_task_assigns_identity_and_logs():
    store = TaskStore()
    t = store.create_task("u1", title="Write BRD", due_date="2024-02-01")
    assert t.id and t.created_at
    assert t.creator_id == "u1" and t.assignee_id == "u1"
    assert t.due_date == date(2024, 2, 1)
    assert t.task_type == TaskType.ADHOC
    assert store.get(t.id) is t
    assert _actions(store) == ["Create Task"]


def test_adhoc_task_never_keeps_frequency():
    store = TaskStore()
    t = store.create_task("u1", title="One-off", task_type="Ad-hoc", frequency="Weekly",
                          due_date=date(2024, 1, 1))
    assert t.frequency is None
    bau = store.create_task("u1", title="Recurring", task_type="BAU", frequency="Weekly",
                            due_date=date(2024, 1, 1))
    assert bau.frequency == TaskFrequency.WEEKLY
    changed = store.update_task("u1", bau.id, task_type=TaskType.ADHOC)
    assert changed.frequency is None


def test_update_task_merges_fields():
    store, t1 = _weekly_store()
    updated = store.update_task("u1", t1.id, description="new text")
    assert updated.id == t1.id
    assert updated.description == "new text"
    assert updated.title == t1.title
    assert store.get(t1.id).description == "new text"
    # earlier snapshots are untouched
    assert t1.description == ""
    assert _actions(store)[-1] == "Update Task"


def test_update_and_status_on_missing_task():
    store = TaskStore()
    with pytest.raises(NotFoundError):
        store.update_task("u1", "nope", title="x")
    with pytest.raises(NotFoundError):
        store.change_status("u1", "nope", TaskStatus.DONE)


def test_completing_weekly_task_spawns_next():
    store, t1 = _weekly_store()
    change = store.change_status("u1", t1.id, TaskStatus.DONE)

    assert change.task.status == TaskStatus.DONE
    assert store.get(t1.id).status == TaskStatus.DONE
    t2 = change.spawned
    assert t2 is not None
    assert t2.id != t1.id
    assert t2.due_date == date(2024, 1, 8)
    assert t2.status == TaskStatus.TODO
    assert (t2.title, t2.frequency, t2.priority, t2.assignee_id, t2.creator_id, t2.due_time, t2.file_ids) == \
        (t1.title, t1.frequency, t1.priority, t1.assignee_id, t1.creator_id, t1.due_time, t1.file_ids)
    assert len(store.tasks) == 2
    assert _actions(store) == ["Create Task", "Recurring Task", "Move Task"]


def test_completing_done_task_again_does_not_spawn():
    store, t1 = _weekly_store()
    store.change_status("u1", t1.id, TaskStatus.DONE)
    again = store.change_status("u1", t1.id, TaskStatus.DONE)
    assert again.spawned is None
    assert len(store.tasks) == 2


def test_existing_occurrence_suppresses_spawn():
    store, t1 = _weekly_store()
    store.create_task("u2", title=t1.title, task_type=TaskType.BAU, frequency=TaskFrequency.WEEKLY,
                      assignee_id="u2", due_date=date(2024, 1, 8))
    change = store.change_status("u1", t1.id, TaskStatus.DONE)
    assert change.spawned is None
    assert len(store.tasks) == 2
    assert "Recurring Task" not in _actions(store)


def test_adhoc_completion_does_not_spawn():
    store = TaskStore()
    t = store.create_task("u1", title="One-off", due_date=date(2024, 1, 1))
    assert store.change_status("u1", t.id, "Done").spawned is None


def test_any_transition_is_allowed():
    store, t1 = _weekly_store(status=TaskStatus.DONE)
    back = store.change_status("u1", t1.id, TaskStatus.TODO)
    assert back.task.status == TaskStatus.TODO
    assert back.spawned is None
    review = store.change_status("u1", t1.id, "In Review")
    assert review.task.status == TaskStatus.REVIEW


def test_reopen_then_complete_spawns_once_per_completion():
    store, t1 = _weekly_store()
    store.change_status("u1", t1.id, TaskStatus.DONE)
    store.change_status("u1", t1.id, TaskStatus.TODO)
    # next occurrence already exists, so completing again is suppressed
    assert store.change_status("u1", t1.id, TaskStatus.DONE).spawned is None


def test_delete_task():
    store, t1 = _weekly_store()
    assert store.delete_task("u1", t1.id).id == t1.id
    assert store.get(t1.id) is None
    assert store.delete_task("u1", t1.id) is None
    assert _actions(store).count("Delete Task") == 1


def test_merge_swaps_updates_and_prepends_created():
    store, t1 = _weekly_store()
    other = store.create_task("u1", title="Other", due_date=date(2024, 1, 3))
    from services.task_store import clone_task, copy_task
    changed = copy_task(t1, assignee_id="u2")
    new_a = clone_task(t1, due_date=date(2024, 1, 8))
    new_b = clone_task(t1, due_date=date(2024, 1, 15))
    merged = store.merge(updated=[changed], created=[new_a, new_b])
    assert [t.id for t in merged] == [new_b.id, new_a.id, other.id, t1.id]
    assert store.get(t1.id).assignee_id == "u2"


def test_detach_file():
    store, t1 = _weekly_store()
    plain = store.create_task("u1", title="No files", due_date=date(2024, 1, 3))
    changed = store.detach_file("f1")
    assert [t.id for t in changed] == [t1.id]
    assert store.get(t1.id).file_ids == []
    assert store.get(plain.id).file_ids == []
