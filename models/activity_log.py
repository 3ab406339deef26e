from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime
from typing import Optional
from datetime import datetime
import uuid


class ActivityLog(SQLModel, table=True):
    __tablename__ = "activity_logs"
    __table_args__ = {"extend_existing": True}

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    user_id: str = Field(index=True)
    action: str
    details: str = ""
    timestamp: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime, nullable=False))
    # insertion order within the trail; breaks timestamp ties on reload
    seq: int = Field(default=0, index=True)
    entity_id: Optional[str] = None
    entity_type: Optional[str] = None  # Task | User | System | File | Leave
