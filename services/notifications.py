# services/notifications.py
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import List

LEVELS = ("info", "success", "warning", "error")


@dataclass
class Notification:
    message: str
    level: str = "info"
    read: bool = False
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)


class Notifier:
    def __init__(self):
        self._items: List[Notification] = []

    @property
    def items(self) -> List[Notification]:
        return list(self._items)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._items if not n.read)

    def notify(self, message: str, level: str = "info") -> Notification:
        n = Notification(message=message, level=level if level in LEVELS else "info")
        self._items.insert(0, n)
        return n

    def mark_all_read(self) -> None:
        for n in self._items:
            n.read = True
