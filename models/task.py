from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime, JSON
from typing import Optional, List
from datetime import date, datetime
from enum import Enum
import uuid


class TaskType(str, Enum):
    BAU = "BAU"
    ADHOC = "Ad-hoc"


class TaskFrequency(str, Enum):
    DAILY = "Daily"
    WEEKLY = "Weekly"
    BIWEEKLY = "Bi-Weekly"
    MONTHLY = "Monthly"
    QUARTERLY = "Quarterly"


class TaskStatus(str, Enum):
    TODO = "To Do"
    IN_PROGRESS = "In Progress"
    REVIEW = "In Review"
    DONE = "Done"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"
    CRITICAL = "Critical"


class Task(SQLModel, table=True):
    __tablename__ = "tasks"
    __table_args__ = {"extend_existing": True}

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    title: str
    description: str = ""
    task_type: TaskType = Field(default=TaskType.ADHOC)
    # only set for BAU tasks
    frequency: Optional[TaskFrequency] = None
    status: TaskStatus = Field(default=TaskStatus.TODO)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    assignee_id: str = Field(index=True)
    creator_id: str
    due_date: date
    due_time: Optional[str] = None  # "HH:MM"
    # plain DateTime column: timestamps are naive local time
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime, nullable=False))
    file_ids: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    @property
    def is_recurring(self) -> bool:
        return self.task_type == TaskType.BAU and self.frequency is not None
