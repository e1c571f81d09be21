"""
Pytest configuration for BizTime API tests.

Route tests run without PostgreSQL: the `get_db` dependency is overridden
with a stand-in and repository functions are patched per test.
"""
import os
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

os.environ.setdefault("APP_ENV", "test")

from core.db import Database, get_db  # noqa: E402
from main import app  # noqa: E402


TEST_COMPANY = {
    "code": "testco",
    "name": "Test Company",
    "description": "Writer of Tests",
}


@pytest.fixture
def fake_db():
    """Stand-in for the pooled Database; repositories are patched, so it is never queried."""
    return MagicMock(spec=Database)


@pytest.fixture
def client(fake_db):
    """TestClient with the DB dependency overridden (lifespan is not run)."""
    app.dependency_overrides[get_db] = lambda: fake_db
    yield TestClient(app)
    app.dependency_overrides.clear()


class CompanyStore:
    """In-memory replacement for companies.repository."""

    def __init__(self):
        self.rows = {}

    async def list_companies(self, db):
        return [dict(row) for row in self.rows.values()]

    async def get_company(self, db, code):
        row = self.rows.get(code)
        return dict(row) if row else None

    async def insert_company(self, db, *, code, name, description):
        if code in self.rows:
            return None
        self.rows[code] = {"code": code, "name": name, "description": description}
        return dict(self.rows[code])

    async def update_company(self, db, code, *, name, description):
        if code not in self.rows:
            return None
        self.rows[code].update(name=name, description=description)
        return dict(self.rows[code])

    async def delete_company(self, db, code):
        return self.rows.pop(code, None) is not None


@pytest.fixture
def company_store(monkeypatch):
    from companies import repository

    store = CompanyStore()
    for name in ("list_companies", "get_company", "insert_company", "update_company", "delete_company"):
        monkeypatch.setattr(repository, name, getattr(store, name))
    return store
