# services/workspace.py
"""One user's session: every store, wired to a shared audit trail.

UI handlers call the action methods here; the stores do the work and this
layer adds the user-facing notifications. ``to_state()`` hands the whole
collections to persistence after each action.
"""
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, List, Optional

from models.activity_log import ActivityLog
from models.leave import LeaveRecord
from models.repository_item import RepositoryItem
from models.task import Task, TaskFrequency, TaskPriority, TaskStatus, TaskType
from models.user import User
from services.activity import AuditTrail
from services.file_repository import FileRepository
from services.leave_conflicts import ConflictEntry, decisions_from_choices, find_conflicts
from services.leave_coverage import CoverageResult, commit_leave
from services.leave_store import LeaveStore
from services.notifications import Notifier
from services.task_store import StatusChange, TaskStore
from services.users import UserDirectory


@dataclass
class AppState:
    users: List[User] = field(default_factory=list)
    tasks: List[Task] = field(default_factory=list)
    leaves: List[LeaveRecord] = field(default_factory=list)
    files: List[RepositoryItem] = field(default_factory=list)
    logs: List[ActivityLog] = field(default_factory=list)


class Workspace:
    def __init__(self, state: Optional[AppState] = None):
        state = state or AppState()
        self.audit = AuditTrail(state.logs)
        self.notifier = Notifier()
        self.users = UserDirectory(state.users, self.audit)
        self.tasks = TaskStore(state.tasks, self.audit)
        self.leaves = LeaveStore(state.leaves, self.audit)
        self.files = FileRepository(state.files, self.tasks, self.audit)

    @classmethod
    def from_state(cls, state: AppState) -> "Workspace":
        return cls(state)

    def to_state(self) -> AppState:
        return AppState(users=self.users.users, tasks=self.tasks.tasks, leaves=self.leaves.leaves,
                        files=self.files.items, logs=self.audit.entries)

    # ---- tasks ----
    def save_task(self, actor_id: str, task_id: Optional[str] = None, **fields) -> Task:
        if task_id:
            task = self.tasks.update_task(actor_id, task_id, **fields)
            self.notifier.notify(f'Task "{task.title}" updated.')
        else:
            task = self.tasks.create_task(actor_id, **fields)
            self.notifier.notify(f'Task "{task.title}" created successfully.', "success")
        return task

    def move_task(self, actor_id: str, task_id: str, status) -> StatusChange:
        change = self.tasks.change_status(actor_id, task_id, status)
        if change.spawned is not None:
            self.notifier.notify(f"Recurring task created for {change.spawned.due_date:%d %b %Y}.")
        return change

    def delete_task(self, actor_id: str, task_id: str) -> Optional[Task]:
        task = self.tasks.delete_task(actor_id, task_id)
        if task is not None:
            self.notifier.notify("Task deleted.")
        return task

    # ---- leave ----
    def conflicts_for(self, owner_id: str, start, end) -> List[ConflictEntry]:
        return find_conflicts(start, end, self.tasks.tasks, owner_id)

    def book_leave(self, actor_id: str, leave: LeaveRecord, choices: Optional[Dict[str, str]] = None) -> CoverageResult:
        """Create or update ``leave`` and apply the coverage picks.

        ``choices`` maps conflict keys to the chosen assignee; the conflicts
        are recomputed here for the leave's current window.
        """
        snapshot = self.tasks.tasks
        conflicts = find_conflicts(leave.start_date, leave.end_date, snapshot, leave.user_id)
        decisions = decisions_from_choices(conflicts, choices or {})
        result = commit_leave(leave, decisions, snapshot, self.leaves, actor_id, self.users)
        self.tasks.merge(result.updated_tasks, result.created_tasks)
        self.notifier.notify(result.summary, "success")
        return result

    def cancel_leave(self, actor_id: str, leave_id: str) -> LeaveRecord:
        leave = self.leaves.cancel(actor_id, leave_id)
        self.notifier.notify("Leave request cancelled.")
        return leave

    # ---- repository ----
    def add_file(self, actor_id: str, name: str, url: str, item_type: str = "Link") -> RepositoryItem:
        item = self.files.add_item(actor_id, name, url, item_type)
        self.notifier.notify("Resource added to repository.", "success")
        return item

    def edit_file(self, actor_id: str, item_id: str, **changes) -> RepositoryItem:
        item = self.files.edit_item(actor_id, item_id, **changes)
        self.notifier.notify("Resource updated.", "success")
        return item

    def delete_file(self, actor_id: str, item_id: str) -> Optional[RepositoryItem]:
        return self.files.delete_item(actor_id, item_id)


def seed_state(today: Optional[date] = None) -> AppState:
    """Starter data for an empty database."""
    today = today or date.today()
    alice = User(name="Alice Chen", email="alice@nexus.com", role="Senior Analyst")
    bob = User(name="Bob Smith", email="bob@nexus.com", role="Junior Analyst", theme_preference="light")
    charlie = User(name="Charlie Kim", email="charlie@nexus.com", role="Product Owner", theme_preference="dark")
    dashboard = RepositoryItem(name="Weekly Sales Dashboard", url="https://datastudio.google.com/reporting/sales",
                               item_type="Dashboard", uploaded_by=charlie.id)
    report = RepositoryItem(name="Q3 Market Analysis", url="https://docs.google.com/document/d/market-q3",
                            item_type="Report", uploaded_by=alice.id)
    tasks = [
        Task(title="Weekly KPI Report",
             description="Compile the sales and engagement metrics for the weekly stakeholder meeting.",
             task_type=TaskType.BAU, frequency=TaskFrequency.WEEKLY, status=TaskStatus.TODO,
             priority=TaskPriority.HIGH, assignee_id=alice.id, creator_id=charlie.id,
             due_date=today + timedelta(days=1), due_time="10:00", file_ids=[dashboard.id]),
        Task(title="Competitor Analysis - Project X",
             description="Deep dive into feature set of main competitor for the new checkout flow.",
             task_type=TaskType.ADHOC, status=TaskStatus.IN_PROGRESS, priority=TaskPriority.MEDIUM,
             assignee_id=alice.id, creator_id=alice.id, due_date=today + timedelta(days=2), due_time="17:00"),
    ]
    return AppState(users=[alice, bob, charlie], tasks=tasks, files=[dashboard, report])
