# services/leave_coverage.py
"""Book (or edit) a leave and hand the owner's conflicting work to others.

The commit works on one snapshot of the task list and returns the changed
and new records; merging them into the task store is the caller's job, so
the whole batch lands as a single collection swap. There is no rollback: a
decision that cannot be applied is skipped and the rest still go through.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from models.activity_log import ActivityLog
from models.leave import LeaveRecord
from models.task import Task, TaskStatus
from services.errors import NotFoundError, SourceTaskNotFoundError
from services.leave_conflicts import AssignmentDecision, VirtualConflict
from services.leave_store import LeaveStore
from services.task_store import clone_task, copy_task

logger = logging.getLogger(__name__)


@dataclass
class CoverageResult:
    leave: LeaveRecord
    updated_tasks: List[Task] = field(default_factory=list)
    created_tasks: List[Task] = field(default_factory=list)
    log_entries: List[ActivityLog] = field(default_factory=list)
    skipped: List[AssignmentDecision] = field(default_factory=list)
    summary: str = ""

    @property
    def change_count(self) -> int:
        return len(self.updated_tasks) + len(self.created_tasks)


def _summary(is_update: bool, changes: int) -> str:
    if is_update:
        if changes:
            return f"Leave updated. {changes} tasks reassigned/created."
        return "Leave updated successfully."
    if changes:
        return f"Leave booked. {changes} tasks reassigned/created for coverage."
    return "Leave booked successfully."


def commit_leave(leave: LeaveRecord, decisions: Iterable[AssignmentDecision], tasks: Iterable[Task],
                 leave_store: LeaveStore, actor_id: str, users=None) -> CoverageResult:
    """Write the leave record, then apply the coverage decisions.

    ``leave`` is updated when its id is already known to ``leave_store`` and
    scheduled otherwise. Decisions that hand a task back to its current owner
    are dropped. ``users`` only provides display names for the audit text.
    """
    audit = leave_store.audit
    before = len(audit)
    snapshot: Dict[str, Task] = {t.id: t for t in tasks}
    name_of = users.display_name if users is not None else (lambda _uid: "Unknown")

    is_update = leave_store.get(leave.id) is not None
    if is_update:
        leave = leave_store.update(actor_id, leave)
    else:
        leave = leave_store.schedule(actor_id, leave)

    active = [d for d in decisions if not d.is_noop]
    real = [d for d in active if not d.entry.is_virtual]
    virtual = [d for d in active if d.entry.is_virtual]

    result = CoverageResult(leave=leave)
    updated: Dict[str, Task] = {}
    reason = "due to leave update." if is_update else "due to leave."

    for decision in real:
        task_id = decision.entry.key
        current = updated.get(task_id) or snapshot.get(task_id)
        if current is None:
            logger.warning("Skipping reassignment: %s", NotFoundError("Task", task_id))
            result.skipped.append(decision)
            continue
        updated[task_id] = copy_task(current, assignee_id=decision.assignee_id)
        audit.record(actor_id, "Task Reassigned",
                     f'Reassigned "{current.title}" to {name_of(decision.assignee_id)} {reason}',
                     task_id, "Task")

    for decision in virtual:
        try:
            created = _promote(decision, snapshot)
        except SourceTaskNotFoundError as e:
            logger.warning("Skipping future coverage: %s", e)
            result.skipped.append(decision)
            continue
        result.created_tasks.append(created)
        audit.record(actor_id, "Task Created",
                     f'Created future task "{created.title}" for coverage by {name_of(decision.assignee_id)}.',
                     created.id, "Task")

    result.updated_tasks = list(updated.values())
    result.log_entries = list(reversed(audit.entries[:len(audit) - before]))
    result.summary = _summary(is_update, result.change_count)
    logger.info("Leave %s committed: %d reassigned, %d created, %d skipped", leave.id,
                len(result.updated_tasks), len(result.created_tasks), len(result.skipped))
    return result


def _promote(decision: AssignmentDecision, snapshot: Dict[str, Task]) -> Task:
    entry: VirtualConflict = decision.entry
    source = snapshot.get(entry.source_task_id)
    if source is None:
        raise SourceTaskNotFoundError(entry.source_task_id)
    return clone_task(source, due_date=entry.due_date, assignee_id=decision.assignee_id,
                      status=TaskStatus.TODO)
