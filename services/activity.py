# services/activity.py
from typing import List, Optional

from models.activity_log import ActivityLog


class AuditTrail:
    """Append-only activity log, newest entry first."""

    def __init__(self, entries: Optional[List[ActivityLog]] = None):
        self._entries = list(entries or [])
        self._seq = max((e.seq or 0 for e in self._entries), default=0)

    @property
    def entries(self) -> List[ActivityLog]:
        return list(self._entries)

    def record(self, user_id: str, action: str, details: str,
               entity_id: Optional[str] = None, entity_type: Optional[str] = None) -> ActivityLog:
        self._seq += 1
        entry = ActivityLog(user_id=user_id, action=action, details=details,
                            entity_id=entity_id, entity_type=entity_type, seq=self._seq)
        self._entries.insert(0, entry)
        return entry

    def for_user(self, user_id: str) -> List[ActivityLog]:
        return [e for e in self._entries if e.user_id == user_id]

    def __len__(self):
        return len(self._entries)
