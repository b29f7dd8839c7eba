# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from taskdeck.db import DocumentStore, get_store
from taskdeck.main import app


@pytest.fixture()
def store(tmp_path: Path) -> DocumentStore:
    """Document store backed by a per-test temporary file"""
    return DocumentStore(tmp_path / "db.json")


@pytest.fixture()
def client(store: DocumentStore):
    """
    TestClient whose routes all share the temporary store.

    The real store dependency is overridden so no test touches data/db.json.
    """
    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
