# models/__init__.py
from .task import Task, TaskType, TaskFrequency, TaskStatus, TaskPriority
from .leave import LeaveRecord, LeaveType, LeaveStatus
from .user import User
from .repository_item import RepositoryItem, ITEM_TYPES
from .activity_log import ActivityLog
