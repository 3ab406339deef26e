from sqlmodel import SQLModel, Field
from sqlalchemy import Column, DateTime
from datetime import datetime
import uuid

ITEM_TYPES = ("Link", "Document", "Image", "Dashboard", "Report")


class RepositoryItem(SQLModel, table=True):
    __tablename__ = "repository_items"
    __table_args__ = {"extend_existing": True}

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    name: str
    url: str
    item_type: str = Field(default="Link")
    uploaded_by: str
    created_at: datetime = Field(default_factory=datetime.now, sa_column=Column(DateTime, nullable=False))
