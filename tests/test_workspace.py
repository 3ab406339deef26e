# tests/test_workspace.py
from datetime import date

import pytest

from models.leave import LeaveRecord
from models.task import TaskStatus, TaskType
from services.errors import NotFoundError
from services.workspace import Workspace, seed_state


@pytest.fixture
def ws():
    return Workspace.from_state(seed_state(today=date(2024, 1, 1)))


def _users(ws):
    alice, bob, charlie = ws.users.users
    return alice, bob, charlie


def test_seed_data():
    state = seed_state(today=date(2024, 1, 1))
    assert [u.name for u in state.users] == ["Alice Chen", "Bob Smith", "Charlie Kim"]
    bau = [t for t in state.tasks if t.task_type == TaskType.BAU]
    assert len(bau) == 1 and bau[0].due_date == date(2024, 1, 2)
    assert bau[0].file_ids == [state.files[0].id]
    assert state.leaves == [] and state.logs == []


def test_book_leave_hands_over_work(ws):
    alice, bob, _ = _users(ws)
    leave = LeaveRecord(user_id=alice.id, start_date=date(2024, 1, 1), end_date=date(2024, 1, 14))
    conflicts = ws.conflicts_for(alice.id, leave.start_date, leave.end_date)
    # Weekly KPI on the 2nd, its projections on the 9th, plus the ad-hoc task on the 3rd
    assert [c.due_date for c in conflicts] == [date(2024, 1, 2), date(2024, 1, 3), date(2024, 1, 9)]

    before = len(ws.tasks.tasks)
    result = ws.book_leave(alice.id, leave, {c.key: bob.id for c in conflicts})

    assert result.change_count == 3
    assert len(ws.tasks.tasks) == before + 1
    assert all(t.assignee_id == bob.id for t in ws.tasks.tasks)
    assert ws.leaves.for_user(alice.id)[0].id == leave.id
    assert ws.notifier.items[0].message == "Leave booked. 3 tasks reassigned/created for coverage."


def test_book_leave_without_picks(ws):
    alice, _, _ = _users(ws)
    leave = LeaveRecord(user_id=alice.id, start_date=date(2024, 1, 1), end_date=date(2024, 1, 14))
    result = ws.book_leave(alice.id, leave)
    assert result.change_count == 0
    assert all(t.assignee_id == alice.id for t in ws.tasks.tasks)


def test_completing_bau_after_coverage_does_not_duplicate(ws):
    alice, bob, _ = _users(ws)
    weekly = next(t for t in ws.tasks.tasks if t.task_type == TaskType.BAU)
    leave = LeaveRecord(user_id=alice.id, start_date=date(2024, 1, 8), end_date=date(2024, 1, 10))
    conflicts = ws.conflicts_for(alice.id, leave.start_date, leave.end_date)
    ws.book_leave(alice.id, leave, {c.key: bob.id for c in conflicts})

    change = ws.move_task(alice.id, weekly.id, TaskStatus.DONE)
    assert change.spawned is None
    assert len([t for t in ws.tasks.tasks if t.due_date == date(2024, 1, 9)]) == 1


def test_cancel_leave(ws):
    alice, _, _ = _users(ws)
    leave = LeaveRecord(user_id=alice.id, start_date=date(2024, 2, 1), end_date=date(2024, 2, 2))
    ws.book_leave(alice.id, leave)
    ws.cancel_leave(alice.id, leave.id)
    assert ws.leaves.leaves == []
    with pytest.raises(NotFoundError):
        ws.cancel_leave(alice.id, leave.id)


def test_delete_file_detaches_from_tasks(ws):
    alice, _, _ = _users(ws)
    dashboard = ws.files.items[0]
    ws.delete_file(alice.id, dashboard.id)
    assert ws.files.get(dashboard.id) is None
    assert all(dashboard.id not in t.file_ids for t in ws.tasks.tasks)
    assert ws.audit.entries[0].action == "Delete File"


def test_save_task_creates_then_updates(ws):
    alice, bob, _ = _users(ws)
    task = ws.save_task(alice.id, title="Churn deep dive", due_date="2024-02-01")
    assert task.assignee_id == alice.id and task.task_type == TaskType.ADHOC
    updated = ws.save_task(alice.id, task.id, assignee_id=bob.id)
    assert updated.id == task.id and ws.tasks.get(task.id).assignee_id == bob.id


def test_to_state_reflects_changes(ws):
    alice, _, _ = _users(ws)
    ws.add_file(alice.id, "Runbook", "https://example.com/runbook", "Document")
    state = ws.to_state()
    assert len(state.files) == 3
    assert state.logs[0].action == "Upload File"


def test_notifications_read_state(ws):
    alice, _, _ = _users(ws)
    ws.save_task(alice.id, title="A", due_date="2024-02-01")
    ws.add_file(alice.id, "Runbook", "https://example.com/runbook")
    assert ws.notifier.unread_count == 2
    ws.notifier.mark_all_read()
    assert ws.notifier.unread_count == 0
