"""Shared fixtures: fresh stores per test and a TestClient over an app built
with explicit settings (never the process environment)."""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.services.sample_data import seed_sample_data
from app.services.sql_store import SqlTransactionStore
from app.services.store import MemoryTransactionStore
from main import create_app


@pytest.fixture
def memory_store() -> MemoryTransactionStore:
    return MemoryTransactionStore()


@pytest.fixture
def sql_store(tmp_path: Path):
    # File-backed SQLite so every session sees the same database
    store = SqlTransactionStore.from_url(f"sqlite:///{tmp_path / 'finance.db'}")
    yield store
    store.close()


@pytest.fixture(params=["memory", "sql"])
def store(request: pytest.FixtureRequest):
    """Run store tests against both backends."""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def seeded_store(store):
    seed_sample_data(store)
    return store


@pytest.fixture
def client() -> TestClient:
    app = create_app(Settings(storage="memory", seed_sample_data=False))
    return TestClient(app)


@pytest.fixture
def seeded_client() -> TestClient:
    app = create_app(Settings(storage="memory", seed_sample_data=True))
    return TestClient(app)
