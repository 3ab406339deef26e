# services/leave_conflicts.py
"""Which of a user's tasks fall inside a proposed leave window.

Two kinds of entries come back: tasks that already exist (``RealConflict``)
and future occurrences of recurring tasks that have not been created yet
(``VirtualConflict``). Results are derived fresh on every call; callers must
re-run ``find_conflicts`` whenever the window changes instead of caching.
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import ClassVar, Dict, Iterable, List, Union

from models.task import Task, TaskStatus
from services.errors import InvalidWindowError
from services.task_store import copy_task
from utils.dates import parse_date
from utils.recurrence import DEFAULT_PROJECTION_LIMIT, project_future_occurrences

logger = logging.getLogger(__name__)

VIRTUAL_PREFIX = "virtual_"


@dataclass
class RealConflict:
    task: Task
    is_virtual: ClassVar[bool] = False

    @property
    def key(self) -> str:
        return self.task.id

    @property
    def due_date(self) -> date:
        return self.task.due_date

    @property
    def title(self) -> str:
        return self.task.title

    @property
    def current_owner(self) -> str:
        return self.task.assignee_id

    def as_task(self) -> Task:
        return self.task


@dataclass
class VirtualConflict:
    source: Task
    due_date: date
    is_virtual: ClassVar[bool] = True

    @property
    def source_task_id(self) -> str:
        return self.source.id

    @property
    def key(self) -> str:
        return f"{VIRTUAL_PREFIX}{self.source.id}_{self.due_date.isoformat()}"

    @property
    def title(self) -> str:
        return self.source.title

    @property
    def current_owner(self) -> str:
        return self.source.assignee_id

    def as_task(self) -> Task:
        """Unsaved preview of the occurrence, for display only."""
        return copy_task(self.source, id=self.key, due_date=self.due_date)


ConflictEntry = Union[RealConflict, VirtualConflict]


@dataclass
class AssignmentDecision:
    entry: ConflictEntry
    assignee_id: str

    @property
    def is_noop(self) -> bool:
        return self.assignee_id == self.entry.current_owner


def find_conflicts(window_start, window_end, tasks: Iterable[Task], owner_id: str,
                   max_iterations: int = DEFAULT_PROJECTION_LIMIT) -> List[ConflictEntry]:
    try:
        start = parse_date(window_start)
        end = parse_date(window_end)
    except ValueError as e:
        raise InvalidWindowError(str(e)) from e
    if start is None or end is None:
        return []

    conflicts: List[ConflictEntry] = []
    for task in tasks:
        if task.assignee_id != owner_id or task.status == TaskStatus.DONE:
            continue
        if start <= task.due_date <= end:
            conflicts.append(RealConflict(task))
        if task.is_recurring:
            for day in project_future_occurrences(task, start, end, max_iterations):
                conflicts.append(VirtualConflict(task, day))

    logger.debug("Leave window %s..%s: %d conflicts for %s", start, end, len(conflicts), owner_id)
    return sorted(conflicts, key=lambda c: c.due_date)


def decisions_from_choices(conflicts: Iterable[ConflictEntry],
                           choices: Dict[str, str]) -> List[AssignmentDecision]:
    """Pair a ``{entry.key: assignee_id}`` selection with its entries.

    Keys that match no entry and blank picks are dropped.
    """
    decisions = []
    for entry in conflicts:
        assignee_id = choices.get(entry.key)
        if assignee_id:
            decisions.append(AssignmentDecision(entry, assignee_id))
    return decisions
