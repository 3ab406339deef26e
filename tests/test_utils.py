# tests/test_utils.py
from datetime import date

from models.leave import LeaveRecord, LeaveType
from models.task import Task, TaskStatus, TaskType, TaskFrequency
from models.user import User
from utils.progress import completion_rate, workload_summary
from utils.timeline import leave_timeline_frame, tasks_frame


def _task(**kw):
    base = dict(title="T", assignee_id="u1", creator_id="u1", due_date=date(2024, 1, 1))
    base.update(kw)
    return Task(**base)


def test_workload_summary():
    tasks = [
        _task(task_type=TaskType.BAU, frequency=TaskFrequency.DAILY),
        _task(status=TaskStatus.DONE),
        _task(status=TaskStatus.REVIEW),
        _task(assignee_id="u2"),
    ]
    assert workload_summary(tasks, "u1") == {"pending": 2, "bau": 1, "completed": 1}
    assert round(completion_rate(tasks, "u1"), 2) == 33.33
    assert completion_rate([], "u1") == 0.0


def test_tasks_frame_sorted_by_due_date():
    users = [User(id="u1", name="Alice", email="a@x.com")]
    tasks = [_task(title="late", due_date=date(2024, 3, 1)), _task(title="early", due_date=date(2024, 1, 5))]
    df = tasks_frame(tasks, users)
    assert df["Task"].tolist() == ["early", "late"]
    assert df["Assignee"].tolist() == ["Alice", "Alice"]


def test_leave_timeline_frame_finish_is_exclusive():
    leave = LeaveRecord(user_id="u9", start_date=date(2024, 1, 5), end_date=date(2024, 1, 5),
                        leave_type=LeaveType.SICK)
    df = leave_timeline_frame([leave], [])
    row = df.iloc[0]
    assert row["Person"] == "Unknown"
    assert row["Finish"] == date(2024, 1, 6)
    assert row["Days"] == 1
    assert leave_timeline_frame([], []).empty
