# services/task_store.py
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from models.task import Task, TaskFrequency, TaskPriority, TaskStatus, TaskType
from services.activity import AuditTrail
from services.errors import NotFoundError
from utils.dates import parse_date
from utils.recurrence import next_occurrence

logger = logging.getLogger(__name__)

_ENUM_FIELDS = {
    "task_type": TaskType,
    "frequency": TaskFrequency,
    "status": TaskStatus,
    "priority": TaskPriority,
}


def _coerce(data: dict) -> dict:
    """Turn UI-ish values (enum labels, date strings) into record values."""
    out = dict(data)
    for key, enum_cls in _ENUM_FIELDS.items():
        if out.get(key) not in (None, ""):
            out[key] = enum_cls(out[key])
        elif key in out:
            out[key] = None
    if "due_date" in out:
        out["due_date"] = parse_date(out["due_date"])
    if "file_ids" in out:
        out["file_ids"] = list(out["file_ids"] or [])
    if out.get("task_type", TaskType.BAU) != TaskType.BAU:
        out["frequency"] = None
    return out


def copy_task(task: Task, **changes) -> Task:
    """Same record (same id), with ``changes`` applied."""
    data = task.model_dump()
    data["file_ids"] = list(data.get("file_ids") or [])
    data.update(changes)
    return Task(**data)


def clone_task(task: Task, **changes) -> Task:
    """New record built from ``task``: fresh id and creation time."""
    data = task.model_dump(exclude={"id", "created_at"})
    data["file_ids"] = list(data.get("file_ids") or [])
    data.update(changes)
    return Task(**data)


@dataclass
class StatusChange:
    task: Task
    spawned: Optional[Task] = None


class TaskStore:
    """Owns the task collection.

    Records are never mutated in place: every change swaps in a new copy,
    so snapshots handed out earlier stay stable.
    """

    def __init__(self, tasks: Optional[Iterable[Task]] = None, audit: Optional[AuditTrail] = None):
        self._tasks: List[Task] = list(tasks or [])
        self.audit = audit if audit is not None else AuditTrail()

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def get(self, task_id: str) -> Optional[Task]:
        return next((t for t in self._tasks if t.id == task_id), None)

    def tasks_for(self, user_id: str) -> List[Task]:
        return [t for t in self._tasks if t.assignee_id == user_id]

    def _require(self, task_id: str) -> Task:
        task = self.get(task_id)
        if task is None:
            raise NotFoundError("Task", task_id)
        return task

    def _replace(self, task: Task) -> None:
        self._tasks = [task if t.id == task.id else t for t in self._tasks]

    # ---- operations ----
    def create_task(self, actor_id: str, **fields) -> Task:
        fields.setdefault("task_type", TaskType.ADHOC)
        data = _coerce(fields)
        data.setdefault("creator_id", actor_id)
        data.setdefault("assignee_id", actor_id)
        data.pop("id", None)
        data.pop("created_at", None)
        task = Task(**data)
        self._tasks.insert(0, task)
        self.audit.record(actor_id, "Create Task", f"Created task: {task.title}", task.id, "Task")
        return task

    def update_task(self, actor_id: str, task_id: str, **changes) -> Task:
        current = self._require(task_id)
        data = _coerce(changes)
        data.pop("id", None)
        data.pop("created_at", None)
        if data.get("task_type", current.task_type) != TaskType.BAU:
            data["frequency"] = None
        task = copy_task(current, **data)
        self._replace(task)
        self.audit.record(actor_id, "Update Task", f"Updated task: {task.title}", task.id, "Task")
        return task

    def change_status(self, actor_id: str, task_id: str, new_status) -> StatusChange:
        current = self._require(task_id)
        new_status = TaskStatus(new_status)
        task = copy_task(current, status=new_status)
        self._replace(task)

        spawned = None
        if current.is_recurring and new_status == TaskStatus.DONE and current.status != TaskStatus.DONE:
            spawned = self._spawn_next(actor_id, current)

        self.audit.record(actor_id, "Move Task", f'Moved task "{task.title}" to {new_status.value}',
                          task.id, "Task")
        return StatusChange(task=task, spawned=spawned)

    def _spawn_next(self, actor_id: str, source: Task) -> Optional[Task]:
        next_date = next_occurrence(source)
        # same title + date + BAU counts as already spawned (e.g. by leave coverage)
        if self.has_occurrence(source.title, next_date):
            logger.debug("Occurrence of %r on %s already exists, not spawning", source.title, next_date)
            return None
        spawned = clone_task(source, status=TaskStatus.TODO, due_date=next_date)
        self._tasks.insert(0, spawned)
        self.audit.record(actor_id, "Recurring Task",
                          f'Generated next occurrence of "{source.title}" for {next_date.isoformat()}',
                          spawned.id, "Task")
        return spawned

    def has_occurrence(self, title: str, due_date) -> bool:
        return any(t.title == title and t.due_date == due_date and t.task_type == TaskType.BAU
                   for t in self._tasks)

    def delete_task(self, actor_id: str, task_id: str) -> Optional[Task]:
        task = self.get(task_id)
        if task is None:
            return None
        self._tasks = [t for t in self._tasks if t.id != task_id]
        self.audit.record(actor_id, "Delete Task", f"Deleted task: {task.title}", task_id, "Task")
        return task

    def merge(self, updated: Iterable[Task] = (), created: Iterable[Task] = ()) -> List[Task]:
        """Apply a batch of changed and new records in one collection swap."""
        by_id = {t.id: t for t in updated}
        merged = [by_id.get(t.id, t) for t in self._tasks]
        self._tasks = list(reversed(list(created))) + merged
        return self.tasks

    def detach_file(self, file_id: str) -> List[Task]:
        changed = [copy_task(t, file_ids=[f for f in t.file_ids if f != file_id])
                   for t in self._tasks if file_id in (t.file_ids or [])]
        if changed:
            self.merge(updated=changed)
        return changed
