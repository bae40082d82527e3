"""Document store interface.

EventStore talks to persistence only through this interface, so any
networked or embedded store that can satisfy it is substitutable.

Documents are plain dicts keyed by field name. Every stored document
carries its store-assigned ``id``; callers never choose ids.
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Optional, Sequence

OPERATORS = ("==", ">=", "<=")


@dataclass(frozen=True)
class Predicate:
    """A single ``field <op> value`` condition used by ``find``."""

    field: str
    op: str
    value: Any

    def __post_init__(self):
        if self.op not in OPERATORS:
            raise ValueError(f"Unsupported operator {self.op!r}; expected one of {OPERATORS}")

    def matches(self, document: dict[str, Any]) -> bool:
        """Evaluate against a document held in memory."""
        if self.field not in document or document[self.field] is None:
            return False
        current = document[self.field]
        if self.op == "==":
            return current == self.value
        if self.op == ">=":
            return current >= self.value
        return current <= self.value


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Return a timezone-aware UTC datetime; naive values are taken as UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class DocumentStore(ABC):
    """Key-addressed collections of documents."""

    def open(self) -> None:
        """Acquire connections / create schema. Called once on startup."""

    def close(self) -> None:
        """Release resources. Called once on shutdown."""

    @abstractmethod
    def insert(self, collection: str, data: dict[str, Any]) -> str:
        """Persist a new document and return its generated id."""
        ...

    @abstractmethod
    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        """Return the document with ``doc_id``, or None if not found."""
        ...

    @abstractmethod
    def find(self, collection: str, where: Sequence[Predicate] = ()) -> list[dict[str, Any]]:
        """Return documents matching every predicate (all documents if none)."""
        ...

    @abstractmethod
    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        """Replace the given fields of an existing document."""
        ...

    @abstractmethod
    def delete(self, collection: str, doc_id: str) -> None:
        """Remove a document permanently."""
        ...

    def server_timestamp(self) -> datetime:
        """Current time according to the store, timezone-aware UTC."""
        return datetime.now(timezone.utc)
