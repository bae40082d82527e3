"""Declarative base, store construction, and the FastAPI store dependency."""
from fastapi import Request
from sqlalchemy.orm import declarative_base

Base = declarative_base()

MEMORY_URL = "memory://"


def build_store(url: str, collection: str = "events"):
    """Create (but do not open) the document store for ``url``.

    ``memory://`` selects the in-memory store; anything else is handed to
    SQLAlchemy.
    """
    # Imported here: the SQL store imports the ORM models, which import Base
    if url == MEMORY_URL:
        from app.store.memory import InMemoryDocumentStore
        return InMemoryDocumentStore()

    from app.models.event import Event
    from app.store.sql import SQLDocumentStore
    return SQLDocumentStore(url, models={collection: Event})


def get_store(request: Request):
    """Yield the store handle opened on application startup."""
    return request.app.state.store
