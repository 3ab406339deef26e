from typing import Dict, Iterable

from models.task import Task, TaskStatus, TaskType


def workload_summary(tasks: Iterable[Task], user_id: str) -> Dict[str, int]:
    mine = [t for t in tasks if t.assignee_id == user_id]
    return {
        "pending": sum(1 for t in mine if t.status != TaskStatus.DONE),
        "bau": sum(1 for t in mine if t.task_type == TaskType.BAU),
        "completed": sum(1 for t in mine if t.status == TaskStatus.DONE),
    }


def completion_rate(tasks: Iterable[Task], user_id: str) -> float:
    s = workload_summary(tasks, user_id)
    total = s["pending"] + s["completed"]
    return float(s["completed"] * 100.0 / total) if total else 0.0
