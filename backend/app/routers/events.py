"""Event API routes — delegates to the event service for every decision."""
import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query, status

from app.config import settings
from app.database import get_store
from app.schemas.event import EventCreate, EventUpdate, EventOut, EventDeleted
from app.services.event_service import EventStore
from app.store.base import DocumentStore

logger = logging.getLogger(__name__)
router = APIRouter()


def get_event_store(store: DocumentStore = Depends(get_store)) -> EventStore:
    return EventStore(
        store,
        collection=settings.EVENTS_COLLECTION,
        default_timezone=settings.DEFAULT_TIMEZONE,
    )


@router.post("", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(payload: EventCreate, events: EventStore = Depends(get_event_store)):
    """Create an event; rejects duplicate requestIds and title + date collisions."""
    fields = payload.model_dump(exclude={"request_id"})
    return events.create_event(fields, request_id=payload.request_id)


@router.get("", response_model=list[EventOut])
def list_events(events: EventStore = Depends(get_event_store)):
    """List all events. No events is an empty list, not an error."""
    return events.list_events()


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, events: EventStore = Depends(get_event_store)):
    return events.get_event(event_id)


@router.put("/{event_id}", response_model=EventOut)
def update_event(event_id: str, payload: EventUpdate, events: EventStore = Depends(get_event_store)):
    """Replace all fields of an event; every field is required."""
    return events.update_event(event_id, payload.model_dump())


@router.delete("/{event_id}", response_model=EventDeleted)
def delete_event(event_id: str, events: EventStore = Depends(get_event_store)):
    return events.delete_event(event_id)


# Served at /filterEvents, registered in routers/legacy.py
def filter_events(
    event_type: Optional[str] = Query(None, alias="eventType"),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    events: EventStore = Depends(get_event_store),
):
    """Filter by exact eventType and/or an inclusive startDate..endDate range."""
    return events.filter_events(event_type=event_type, start_date=start_date, end_date=end_date)
