# tests/test_document_store.py

from __future__ import annotations

import json
import threading
from pathlib import Path

import pytest

from taskdeck.db import DocumentStore
from taskdeck.errors import StorageError
from taskdeck.models import CompletionRecord

from .factories import TODAY, make_task


def test_missing_file_is_created_empty(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "db.json"
    store = DocumentStore(path)

    document = store.load()

    assert path.exists()
    assert document.tasks == [] and document.projects == [] and document.stats == []
    assert document.deleted is None


def test_transaction_persists_on_success(store: DocumentStore) -> None:
    with store.transaction() as doc:
        doc.tasks.append(make_task("a", due=TODAY))

    assert [t.id for t in store.load().tasks] == ["a"]


def test_transaction_discards_changes_on_error(store: DocumentStore) -> None:
    with store.transaction() as doc:
        doc.tasks.append(make_task("a"))

    with pytest.raises(RuntimeError):
        with store.transaction() as doc:
            doc.tasks.append(make_task("b"))
            raise RuntimeError("boom")

    assert [t.id for t in store.load().tasks] == ["a"]


def test_document_is_written_with_camel_case_keys(store: DocumentStore) -> None:
    with store.transaction() as doc:
        doc.tasks.append(make_task("a", project_id="p1"))
        doc.stats.append(CompletionRecord(date=TODAY, count=2))

    raw = json.loads(store.path.read_text(encoding="utf-8"))
    task = raw["tasks"][0]

    assert task["projectId"] == "p1"
    assert task["dueDate"] == ""
    assert task["completedAt"] is None
    assert "createdAt" in task
    assert raw["stats"] == [{"date": TODAY.isoformat(), "count": 2}]
    assert raw["deleted"] is None


def test_legacy_document_loads_with_defaults(tmp_path: Path) -> None:
    path = tmp_path / "db.json"
    path.write_text(json.dumps({
        "tasks": [{
            "id": "1234-abcd-0000-ffff",
            "title": "old task",
            "description": None,
            "projectId": None,
            "priority": "high",
            "status": "todo",
            "dueDate": "2024-06-12",
            "createdAt": "2024-06-01T08:00:00.000Z",
            "updatedAt": "2024-06-01T08:00:00.000Z",
        }],
        "projects": [],
        "stats": None,
    }), encoding="utf-8")

    document = DocumentStore(path).load()
    task = document.tasks[0]

    assert task.order == 0
    assert task.subtasks == []
    assert task.description == ""
    assert task.due_date == TODAY
    assert document.stats == []
    assert document.deleted is None


def test_corrupt_json_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "db.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(StorageError):
        DocumentStore(path).load()


def test_undecodable_bytes_raise_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "db.json"
    path.write_bytes(b'{"tasks": ["\xff\xfe"]}')

    with pytest.raises(StorageError):
        DocumentStore(path).load()


def test_invalid_structure_raises_storage_error(tmp_path: Path) -> None:
    path = tmp_path / "db.json"
    path.write_text(json.dumps({"tasks": [{"title": "no id"}]}), encoding="utf-8")

    with pytest.raises(StorageError):
        DocumentStore(path).load()


def test_save_leaves_no_temp_files(store: DocumentStore) -> None:
    with store.transaction() as doc:
        doc.tasks.append(make_task("a"))

    assert sorted(p.name for p in store.path.parent.iterdir()) == ["db.json"]


def test_concurrent_transactions_keep_every_write(store: DocumentStore) -> None:
    def writer(prefix: str) -> None:
        for i in range(20):
            with store.transaction() as doc:
                doc.tasks.append(make_task(f"{prefix}{i}"))

    threads = [threading.Thread(target=writer, args=(prefix,)) for prefix in ("a", "b")]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    ids = {t.id for t in store.load().tasks}
    assert ids == {f"{prefix}{i}" for prefix in ("a", "b") for i in range(20)}
