"""In-memory document store.

Dictionary-backed implementation of DocumentStore for tests and local
development. Data is lost on process restart. A lock guards each single
operation; sequences of operations (check-then-insert) are not atomic,
same as with any other store.
"""
import logging
import threading
import uuid
from copy import deepcopy
from typing import Any, Optional, Sequence

from app.errors import StoreError
from app.store.base import DocumentStore, Predicate

logger = logging.getLogger(__name__)


class InMemoryDocumentStore(DocumentStore):
    def __init__(self) -> None:
        self._collections: dict[str, dict[str, dict[str, Any]]] = {}
        self._lock = threading.Lock()
        logger.debug("InMemoryDocumentStore initialized")

    def _collection(self, name: str) -> dict[str, dict[str, Any]]:
        return self._collections.setdefault(name, {})

    def close(self) -> None:
        with self._lock:
            self._collections.clear()

    def insert(self, collection: str, data: dict[str, Any]) -> str:
        doc_id = str(uuid.uuid4())
        document = deepcopy(data)
        document["id"] = doc_id
        with self._lock:
            self._collection(collection)[doc_id] = document
        return doc_id

    def get(self, collection: str, doc_id: str) -> Optional[dict[str, Any]]:
        with self._lock:
            document = self._collection(collection).get(doc_id)
            return deepcopy(document) if document is not None else None

    def find(self, collection: str, where: Sequence[Predicate] = ()) -> list[dict[str, Any]]:
        with self._lock:
            documents = list(self._collection(collection).values())
            return [deepcopy(doc) for doc in documents if all(p.matches(doc) for p in where)]

    def update(self, collection: str, doc_id: str, data: dict[str, Any]) -> None:
        with self._lock:
            document = self._collection(collection).get(doc_id)
            if document is None:
                raise StoreError(f"No document {doc_id} in '{collection}'")
            document.update(deepcopy({k: v for k, v in data.items() if k != "id"}))

    def delete(self, collection: str, doc_id: str) -> None:
        with self._lock:
            self._collection(collection).pop(doc_id, None)
