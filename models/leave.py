from sqlmodel import SQLModel, Field
from datetime import date
from enum import Enum
import uuid


class LeaveType(str, Enum):
    VACATION = "Vacation"
    SICK = "Sick Leave"
    PERSONAL = "Personal"
    OTHER = "Other"


class LeaveStatus(str, Enum):
    APPROVED = "Approved"
    PENDING = "Pending"


class LeaveRecord(SQLModel, table=True):
    __tablename__ = "leaves"
    __table_args__ = {"extend_existing": True}

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    user_id: str = Field(index=True)
    start_date: date
    end_date: date
    leave_type: LeaveType = Field(default=LeaveType.VACATION)
    reason: str = ""
    status: LeaveStatus = Field(default=LeaveStatus.APPROVED)

    @property
    def duration_days(self) -> int:
        """Inclusive number of calendar days covered by the leave."""
        return abs((self.end_date - self.start_date).days) + 1
