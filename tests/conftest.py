# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - An in-memory stand-in for the Supabase tables
# - An app wired to that store, writing uploads under tmp_path
# =============================================================================

import os
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("SECRET_KEY", "test-secret-key-0123456789")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.dependencies import AppContext
from app.main import create_app
from lib.supabase_client import SupabaseClientError, UNIQUE_VIOLATION


# =============================================================================
# In-memory store
# =============================================================================

class InMemorySupabaseClient:
    """
    Implements the SupabaseClient row operations over dicts.

    Generated columns mimic the SQL schema: `id` is a uuid, users get
    `created_at`, reels get `created`. Each insert is stamped one second
    after the previous one so ordering is deterministic.
    """

    UNIQUE_COLUMNS = {"users": "email"}

    def __init__(self):
        self.tables: dict[str, list[dict[str, Any]]] = {"users": [], "reels": []}
        self._clock = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.closed = False

    def _tick(self) -> datetime:
        self._clock += timedelta(seconds=1)
        return self._clock

    def fetch_one(self, table: str, column: str, value: Any) -> dict[str, Any] | None:
        for row in self.tables.setdefault(table, []):
            if row.get(column) == value:
                return dict(row)
        return None

    def insert(self, table: str, data: dict[str, Any]) -> dict[str, Any]:
        rows = self.tables.setdefault(table, [])
        unique = self.UNIQUE_COLUMNS.get(table)
        if unique and any(row[unique] == data[unique] for row in rows):
            raise SupabaseClientError(
                message="duplicate key value violates unique constraint",
                code="INSERT_FAILED",
                pg_code=UNIQUE_VIOLATION,
            )

        row = {"id": str(uuid.uuid4()), **data}
        stamp_column = "created" if table == "reels" else "created_at"
        row.setdefault(stamp_column, self._tick())
        rows.append(row)
        return dict(row)

    def fetch_all(self, table: str, order_by: str, desc: bool = False) -> list[dict[str, Any]]:
        rows = [dict(row) for row in self.tables.setdefault(table, [])]
        return sorted(rows, key=lambda row: row[order_by], reverse=desc)

    def ping(self, table: str) -> None:
        return None

    def close(self) -> None:
        self.closed = True


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    """Empty in-memory store."""
    return InMemorySupabaseClient()


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing uploads and the index page into tmp_path."""
    return Settings(
        SUPABASE_URL="https://test-project.supabase.co",
        SUPABASE_SERVICE_KEY="test-service-key",
        SECRET_KEY="test-secret-key-0123456789",
        BCRYPT_ROUNDS=4,
        MAX_UPLOAD_SIZE_MB=1,
        UPLOAD_DIR=str(tmp_path / "uploads" / "reels"),
        PUBLIC_DIR=str(tmp_path / "public"),
    )


@pytest.fixture
def context(test_settings, store):
    """AppContext wired to the in-memory store."""
    return AppContext.from_settings(test_settings, client=store)


@pytest.fixture
def client(context):
    """TestClient with lifespan (creates the upload directory)."""
    app = create_app(context=context)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def registered_user(client):
    """Credentials of an account that already exists."""
    credentials = {"email": "a@x.com", "password": "secret1"}
    response = client.post("/api/register", json=credentials)
    assert response.status_code == 200
    return credentials


@pytest.fixture
def auth_headers(client, registered_user):
    """Authorization header carrying a fresh token."""
    response = client.post("/api/login", json=registered_user)
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}
