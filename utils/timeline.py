import pandas as pd
from datetime import timedelta
from typing import Iterable

from models.leave import LeaveRecord
from models.task import Task

TASK_COLUMNS = ["Task", "Type", "Frequency", "Status", "Priority", "Assignee", "Due", "Time"]
LEAVE_COLUMNS = ["Person", "Type", "Start", "Finish", "Days", "Reason"]


def _names(users) -> dict:
    return {u.id: u.name for u in (users or [])}


def tasks_frame(tasks: Iterable[Task], users=None) -> pd.DataFrame:
    names = _names(users)
    rows = []
    for t in tasks:
        rows.append({
            "Task": t.title,
            "Type": t.task_type.value,
            "Frequency": t.frequency.value if t.frequency else "",
            "Status": t.status.value,
            "Priority": t.priority.value,
            "Assignee": names.get(t.assignee_id, "Unknown"),
            "Due": t.due_date,
            "Time": t.due_time or "",
        })
    df = pd.DataFrame(rows, columns=TASK_COLUMNS)
    if not df.empty:
        df = df.sort_values(by="Due", ascending=True, kind="stable").reset_index(drop=True)
    return df


def leave_timeline_frame(leaves: Iterable[LeaveRecord], users=None) -> pd.DataFrame:
    """One row per leave; ``Finish`` is exclusive so single days still show as bars."""
    names = _names(users)
    rows = []
    for l in leaves:
        rows.append({
            "Person": names.get(l.user_id, "Unknown"),
            "Type": l.leave_type.value,
            "Start": l.start_date,
            "Finish": l.end_date + timedelta(days=1),
            "Days": l.duration_days,
            "Reason": l.reason or "-",
        })
    df = pd.DataFrame(rows, columns=LEAVE_COLUMNS)
    if not df.empty:
        df = df.dropna(subset=["Start", "Finish"], how="any")
    return df
