# db.py

#============================================================#
#                     Nexus BA Workspace                     #
#============================================================#
# Version     : V1.0.0                                       #
#------------------------------------------------------------#
# Purpose     : Task tracking for business analysts with     #
#               recurring BAU work, leave planning and       #
#               coverage hand-over (SQLite/Postgres powered) #
#============================================================#


from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import create_engine, delete, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from sqlmodel import SQLModel

from models import ActivityLog, LeaveRecord, RepositoryItem, Task, User
from services.workspace import AppState, seed_state
from utils.config import get_setting

logger = logging.getLogger(__name__)

# ---- Engine / Session ----
DATABASE_URL = get_setting("DATABASE_URL", "sqlite:///nexus.db")

engine = create_engine(DATABASE_URL, pool_pre_ping=True, future=True)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, future=True,
                            expire_on_commit=False)

# state attribute -> table model, in save order
_COLLECTIONS = (
    ("users", User),
    ("files", RepositoryItem),
    ("tasks", Task),
    ("leaves", LeaveRecord),
    ("logs", ActivityLog),
)

# newest first, matching how the stores keep them
_ORDERING = {
    User: (User.name,),
    RepositoryItem: (RepositoryItem.created_at,),
    Task: (Task.created_at.desc(),),
    LeaveRecord: (LeaveRecord.start_date.desc(),),
    ActivityLog: (ActivityLog.timestamp.desc(), ActivityLog.seq.desc()),
}


def _session(bind: Optional[Engine] = None) -> Session:
    if bind is None:
        return SessionLocal()
    return sessionmaker(bind=bind, future=True, expire_on_commit=False)()


def init_db(bind: Optional[Engine] = None):
    SQLModel.metadata.create_all(bind or engine)


def _fresh_copy(model, row):
    """Transient copy so in-memory records never get attached to a session."""
    data = row.model_dump()
    if model is Task:
        data["file_ids"] = list(data.get("file_ids") or [])
    return model(**data)


def save_state(state: AppState, bind: Optional[Engine] = None) -> None:
    """Replace every table's content with the collections in ``state``."""
    with _session(bind) as s:
        for attr, model in _COLLECTIONS:
            s.execute(delete(model))
            s.add_all([_fresh_copy(model, r) for r in getattr(state, attr)])
        s.commit()
    logger.debug("Saved %d tasks, %d leaves", len(state.tasks), len(state.leaves))


def load_state(bind: Optional[Engine] = None) -> AppState:
    loaded = {}
    with _session(bind) as s:
        for attr, model in _COLLECTIONS:
            rows = s.execute(select(model).order_by(*_ORDERING[model])).scalars().all()
            loaded[attr] = [_fresh_copy(model, r) for r in rows]
    return AppState(**loaded)


def load_or_seed(bind: Optional[Engine] = None) -> AppState:
    """Load the saved workspace, seeding starter data into an empty database."""
    init_db(bind)
    state = load_state(bind)
    if not state.users:
        logger.info("Empty database, seeding starter data")
        state = seed_state()
        save_state(state, bind)
    return state
