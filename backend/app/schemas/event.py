"""Pydantic schemas for Events.

Fields travel as camelCase on the wire (``eventType``, ``requestId``,
``updatedAt``); snake_case names are accepted on input too.
"""
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class EventFields(_WireModel):
    """Mutable fields. Presence is checked by the event service so that a
    missing field is a 400 with a readable message, not a schema error."""

    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[str] = None
    location: Optional[str] = None
    organizer: Optional[str] = None
    event_type: Optional[str] = None


class EventCreate(EventFields):
    request_id: Optional[str] = None


class EventUpdate(EventFields):
    pass


class EventOut(_WireModel):
    id: str
    title: str
    description: str
    date: datetime
    location: str
    organizer: str
    event_type: str
    request_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: datetime


class EventDeleted(_WireModel):
    id: str
    message: str
