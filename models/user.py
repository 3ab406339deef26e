from sqlmodel import SQLModel, Field
from typing import Optional
import uuid


class User(SQLModel, table=True):
    __tablename__ = "users"
    __table_args__ = {"extend_existing": True}

    id: str = Field(default_factory=lambda: uuid.uuid4().hex, primary_key=True)
    name: str
    email: str = Field(index=True, unique=True)
    role: str = Field(default="Analyst")
    avatar: Optional[str] = None  # base64 data url
    theme_preference: str = Field(default="system")  # light | dark | system
