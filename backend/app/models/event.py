"""Event ORM model backing the ``events`` collection of the SQL store."""
import uuid
from sqlalchemy import Column, String, Text, DateTime
from app.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class Event(Base):
    __tablename__ = "events"

    id = Column(String(36), primary_key=True, default=_new_id)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    date = Column(DateTime(timezone=True), nullable=False, index=True)
    location = Column(String(500), nullable=False)
    organizer = Column(String(255), nullable=False)
    event_type = Column(String(100), nullable=False, index=True)
    request_id = Column(String(255), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False)
    updated_at = Column(DateTime(timezone=True), nullable=False)
