"""Pytest fixtures — fresh SQLite document store per test, in-memory store for unit tests."""
import os

# The startup hook opens the configured store; keep it off disk during tests
os.environ["DATABASE_URL"] = "memory://"

import pytest
from fastapi.testclient import TestClient

from app.database import get_store
from app.main import app
from app.services.event_service import EventStore
from app.store.memory import InMemoryDocumentStore
from app.store.sql import SQLDocumentStore


@pytest.fixture(scope="function")
def sql_store(tmp_path):
    """An opened SQLite-backed store, disposed after the test."""
    store = SQLDocumentStore(f"sqlite:///{tmp_path / 'test.db'}")
    store.open()
    yield store
    store.close()


@pytest.fixture(scope="function")
def memory_store():
    store = InMemoryDocumentStore()
    store.open()
    yield store
    store.close()


@pytest.fixture(scope="function")
def events(memory_store):
    """EventStore over the in-memory document store."""
    return EventStore(memory_store)


@pytest.fixture(scope="function")
def client(sql_store):
    """FastAPI TestClient with the store dependency overridden to use SQLite."""
    app.dependency_overrides[get_store] = lambda: sql_store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def event_payload(**overrides) -> dict:
    """A complete, valid create/update body; keyword overrides replace fields."""
    payload = {
        "title": "Launch",
        "description": "Product launch party",
        "date": "2024-06-01",
        "location": "Main Hall",
        "organizer": "Ada",
        "eventType": "Concert",
    }
    payload.update(overrides)
    return payload


def create_test_event(client: TestClient, **overrides) -> dict:
    """Helper — POST /events and return response JSON."""
    resp = client.post("/events", json=event_payload(**overrides))
    assert resp.status_code == 201, resp.text
    return resp.json()
