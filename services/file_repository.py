# services/file_repository.py
from typing import Iterable, List, Optional

from models.repository_item import ITEM_TYPES, RepositoryItem
from services.activity import AuditTrail
from services.errors import NotFoundError
from services.task_store import TaskStore


class FileRepository:
    """Shared links and documents that tasks can reference by id."""

    def __init__(self, items: Optional[Iterable[RepositoryItem]] = None, task_store: Optional[TaskStore] = None,
                 audit: Optional[AuditTrail] = None):
        self._items: List[RepositoryItem] = list(items or [])
        self.task_store = task_store
        self.audit = audit if audit is not None else AuditTrail()

    @property
    def items(self) -> List[RepositoryItem]:
        return list(self._items)

    def get(self, item_id: str) -> Optional[RepositoryItem]:
        return next((i for i in self._items if i.id == item_id), None)

    def add_item(self, actor_id: str, name: str, url: str, item_type: str = "Link") -> RepositoryItem:
        if item_type not in ITEM_TYPES:
            raise ValueError(f"Unknown item type: {item_type}")
        item = RepositoryItem(name=name.strip(), url=url.strip(), item_type=item_type, uploaded_by=actor_id)
        self._items.append(item)
        self.audit.record(actor_id, "Upload File", f"Added file/link: {item.name}", item.id, "File")
        return item

    def edit_item(self, actor_id: str, item_id: str, **changes) -> RepositoryItem:
        current = self.get(item_id)
        if current is None:
            raise NotFoundError("File", item_id)
        changes.pop("id", None)
        data = current.model_dump()
        data.update(changes)
        item = RepositoryItem(**data)
        self._items = [item if i.id == item_id else i for i in self._items]
        self.audit.record(actor_id, "Update File", f"Updated file/link: {item.name}", item.id, "File")
        return item

    def delete_item(self, actor_id: str, item_id: str) -> Optional[RepositoryItem]:
        item = self.get(item_id)
        if item is None:
            return None
        self._items = [i for i in self._items if i.id != item_id]
        if self.task_store is not None:
            self.task_store.detach_file(item_id)
        self.audit.record(actor_id, "Delete File", "Removed file from repository", item_id, "File")
        return item
