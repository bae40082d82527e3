"""Core event service — every decision about the event lifecycle lives here.

Responsibilities:
- Required-field validation and date parsing
- Duplicate detection: requestId first, then title + date
- Store-assigned timestamps (createdAt, updatedAt); client values never reach the store
- Filter query building
- Not-found handling

Known race: the duplicate guards and the existence pre-checks are plain
reads issued before the write. Two concurrent creates with the same
title/date (or requestId) can both pass the guards and both insert, and a
delete can interleave with another delete or update.
"""
import logging
from datetime import datetime, timedelta
from typing import Any, Optional

import pytz

from app.errors import DuplicateError, NotFoundError, StoreError, ValidationError
from app.store.base import DocumentStore, Predicate

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "date", "location", "organizer", "event_type")

# Names clients know the fields by, for error messages
_WIRE_NAMES = {"event_type": "eventType"}


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_date(value: Any, tz=pytz.utc) -> datetime:
    """Parse an ISO-8601 date or date-time into an aware UTC datetime.

    Date-only and naive values are interpreted in ``tz``.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            raise ValidationError(f"Invalid date: {value!r}") from None
    try:
        if parsed.tzinfo is None:
            parsed = tz.localize(parsed)
        return parsed.astimezone(pytz.utc)
    except (ValueError, OverflowError):
        # Valid locally but not representable once shifted to UTC
        raise ValidationError(f"Invalid date: {value!r}") from None


class EventStore:
    """Event operations over an injected document store."""

    def __init__(self, store: DocumentStore, collection: str = "events", default_timezone: str = "UTC"):
        self._store = store
        self._collection = collection
        self._tz = pytz.timezone(default_timezone)

    def _validate(self, fields: dict[str, Any]) -> dict[str, Any]:
        missing = [name for name in REQUIRED_FIELDS if _is_blank(fields.get(name))]
        if missing:
            names = ", ".join(_WIRE_NAMES.get(name, name) for name in missing)
            raise ValidationError(f"Missing required fields: {names}")
        values = {name: fields[name] for name in REQUIRED_FIELDS}
        values["date"] = parse_date(values["date"], self._tz)
        return values

    def _find(self, *where: Predicate) -> list[dict[str, Any]]:
        return self._store.find(self._collection, where)

    def _require(self, event_id: str) -> dict[str, Any]:
        event = self._store.get(self._collection, event_id)
        if event is None:
            raise NotFoundError("Event not found")
        return event

    def create_event(self, fields: dict[str, Any], request_id: Optional[str] = None) -> dict[str, Any]:
        """Validate, run both duplicate guards, insert, and return the persisted record."""
        values = self._validate(fields)
        if _is_blank(request_id):
            request_id = None

        if request_id is not None and self._find(Predicate("request_id", "==", request_id)):
            logger.info("Rejected duplicate request %s", request_id)
            raise DuplicateError("Duplicate request")

        if self._find(Predicate("title", "==", values["title"]), Predicate("date", "==", values["date"])):
            logger.info("Rejected duplicate event '%s' on %s", values["title"], values["date"].isoformat())
            raise DuplicateError("Event already exists")

        now = self._store.server_timestamp()
        values.update(request_id=request_id, created_at=now, updated_at=now)
        event_id = self._store.insert(self._collection, values)

        # Re-read so timestamps are what the store persisted
        event = self._store.get(self._collection, event_id)
        if event is None:
            raise StoreError(f"Event {event_id} missing after insert")
        logger.info("Created event '%s' (%s)", event["title"], event_id)
        return event

    def list_events(self) -> list[dict[str, Any]]:
        return self._find()

    def get_event(self, event_id: str) -> dict[str, Any]:
        return self._require(event_id)

    def update_event(self, event_id: str, fields: dict[str, Any]) -> dict[str, Any]:
        """Replace every mutable field of an existing event and refresh updatedAt."""
        values = self._validate(fields)
        existing = self._require(event_id)

        now = self._store.server_timestamp()
        previous = existing.get("updated_at")
        if previous is not None and now <= previous:
            now = previous + timedelta(microseconds=1)
        values["updated_at"] = now

        self._store.update(self._collection, event_id, values)
        event = self._require(event_id)
        logger.info("Updated event %s", event_id)
        return event

    def delete_event(self, event_id: str) -> dict[str, Any]:
        self._require(event_id)
        self._store.delete(self._collection, event_id)
        logger.info("Deleted event %s", event_id)
        return {"id": event_id, "message": f"Event with ID {event_id} deleted"}

    def filter_events(
        self,
        event_type: Optional[str] = None,
        start_date: Optional[str] = None,
        end_date: Optional[str] = None,
    ) -> list[dict[str, Any]]:
        """AND together an exact eventType match and an inclusive date range.

        The range applies only when both bounds are given.
        """
        where = []
        if event_type:
            where.append(Predicate("event_type", "==", event_type))
        if start_date and end_date:
            where.append(Predicate("date", ">=", parse_date(start_date, self._tz)))
            where.append(Predicate("date", "<=", parse_date(end_date, self._tz)))
        return self._find(*where)
