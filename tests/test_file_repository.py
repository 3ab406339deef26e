# tests/test_file_repository.py
from datetime import date

import pytest

from models.task import Task
from services.errors import NotFoundError
from services.file_repository import FileRepository
from services.task_store import TaskStore


def test_add_edit_delete():
    store = TaskStore([Task(title="T", assignee_id="u1", creator_id="u1", due_date=date(2024, 1, 1))])
    repo = FileRepository(task_store=store, audit=store.audit)
    item = repo.add_item("u1", " Sales ", " https://example.com ", "Dashboard")
    assert item.name == "Sales" and item.url == "https://example.com"

    store.update_task("u1", store.tasks[0].id, file_ids=[item.id])
    renamed = repo.edit_item("u1", item.id, name="Sales v2")
    assert renamed.id == item.id and repo.get(item.id).name == "Sales v2"

    assert repo.delete_item("u1", item.id).id == item.id
    assert store.tasks[0].file_ids == []
    assert repo.delete_item("u1", item.id) is None


def test_bad_type_and_missing_item():
    repo = FileRepository()
    with pytest.raises(ValueError):
        repo.add_item("u1", "x", "y", "Spreadsheet")
    with pytest.raises(NotFoundError):
        repo.edit_item("u1", "missing", name="z")
