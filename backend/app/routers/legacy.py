"""Verb-named routes kept for clients built against the older API shape.

Each path is served by the same handler as its /events counterpart.
"""
from fastapi import APIRouter, status

from app.routers import events
from app.schemas.event import EventOut, EventDeleted

router = APIRouter()

router.add_api_route(
    "/createEvent", events.create_event, methods=["POST"],
    response_model=EventOut, status_code=status.HTTP_201_CREATED,
)
router.add_api_route("/getAllEvents", events.list_events, methods=["GET"], response_model=list[EventOut])
router.add_api_route("/getEventById/{event_id}", events.get_event, methods=["GET"], response_model=EventOut)
router.add_api_route("/updateEvent/{event_id}", events.update_event, methods=["PUT"], response_model=EventOut)
router.add_api_route("/deleteEvent/{event_id}", events.delete_event, methods=["DELETE"], response_model=EventDeleted)
router.add_api_route("/filterEvents", events.filter_events, methods=["GET"], response_model=list[EventOut])
