"""SQLAlchemy-backed document store.

Each collection maps to an ORM model; documents are the model's column
values keyed by column name. Any SQLAlchemy URL works (PostgreSQL in
deployment, SQLite for development and tests).
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Optional, Sequence

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.database import Base
from app.errors import StoreError
from app.models.event import Event
from app.store.base import DocumentStore, Predicate, as_utc

logger = logging.getLogger(__name__)

_IN_MEMORY_SQLITE = ("sqlite://", "sqlite:///:memory:")


class SQLDocumentStore(DocumentStore):
    """Document store over a relational database.

    ``models`` maps collection names to ORM classes. The engine is created
    in ``open()`` and disposed in ``close()``.
    """

    def __init__(self, url: str, models: Optional[dict[str, type]] = None):
        self.url = url
        self._models = models or {"events": Event}
        self._engine = None
        self._session_factory = None

    def open(self) -> None:
        kwargs: dict[str, Any] = {}
        if self.url.startswith("sqlite"):
            kwargs["connect_args"] = {"check_same_thread": False}
        if self.url in _IN_MEMORY_SQLITE:
            # One shared connection, otherwise every thread sees an empty database
            kwargs["poolclass"] = StaticPool
        self._engine = create_engine(self.url, **kwargs)
        Base.metadata.create_all(bind=self._engine)
        self._session_factory = sessionmaker(autoflush=False, bind=self._engine)
        logger.info("Opened SQL document store (%s)", self._engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Closed SQL document store")
        self._engine = None
        self._session_factory = None

    # ------------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------------
    @contextmanager
    def _session(self, action: str, collection: str):
        if self._session_factory is None:
            raise StoreError("Document store is not open")
        session: Session = self._session_factory()
        try:
            yield session
            session.commit()
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Error in %s: collection=%s, error=%s", action, collection, e)
            raise StoreError(f"Store {action} failed on '{collection}'") from e
        finally:
            session.close()

    def _model(self, collection: str):
        try:
            return self._models[collection]
        except KeyError:
            raise StoreError(f"Unknown collection '{collection}'") from None

    @staticmethod
    def _columns(model) -> list[str]:
        return [column.name for column in model.__table__.columns]

    def _values(self, model, data: dict[str, Any]) -> dict[str, Any]:
        columns = self._columns(model)
        unknown = sorted(set(data) - set(columns))
        if unknown:
            raise StoreError(f"Unknown fields for '{model.__tablename__}': {', '.join(unknown)}")
        return {k: _to_column(v) for k, v in data.items() if k != "id"}

    def _to_document(self, row) -> dict[str, Any]:
        return {name: _from_column(getattr(row, name)) for name in self._columns(type(row))}

    # ------------------------------------------------------------------
    # DocumentStore
    # ------------------------------------------------------------------
    def insert(self, collection: str, data: dict[str, Any]) -> str:
        model = self._model(collection)
        values = self._values(model, data)
        with self._session("insert", collection) as session:
            row = model(**values)
            session.add(row)
            session.flush()
            doc_id = row.id
        return doc_id

    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        model = self._model(collection)
        with self._session("get", collection) as session:
            row = session.get(model, doc_id)
            return self._to_document(row) if row is not None else None

    def find(self, collection: str, where: Sequence[Predicate] = ()) -> list[dict[str, Any]]:
        model = self._model(collection)
        columns = self._columns(model)
        with self._session("find", collection) as session:
            query = session.query(model)
            for predicate in where:
                if predicate.field not in columns:
                    raise StoreError(f"Unknown field '{predicate.field}' for '{collection}'")
                column = getattr(model, predicate.field)
                value = _to_column(predicate.value)
                if predicate.op == "==":
                    query = query.filter(column == value)
                elif predicate.op == ">=":
                    query = query.filter(column >= value)
                else:
                    query = query.filter(column <= value)
            return [self._to_document(row) for row in query.all()]

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        model = self._model(collection)
        values = self._values(model, data)
        with self._session("update", collection) as session:
            row = session.get(model, doc_id)
            if row is None:
                raise StoreError(f"No document {doc_id} in '{collection}'")
            for field, value in values.items():
                setattr(row, field, value)

    def delete(self, collection: str, doc_id: str) -> None:
        model = self._model(collection)
        with self._session("delete", collection) as session:
            session.query(model).filter(model.id == doc_id).delete()


def _to_column(value):
    if isinstance(value, datetime):
        return as_utc(value)
    return value


def _from_column(value):
    # SQLite hands back naive datetimes; everything is stored as UTC
    if isinstance(value, datetime):
        return as_utc(value)
    return value
