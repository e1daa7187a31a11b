"""
Calendar event CRUD service
"""

import logging
import re
from contextlib import contextmanager
from datetime import date
from typing import List, Optional

from google.api_core.exceptions import GoogleAPIError
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import NotFoundError, TransportError, ValidationError
from app.schemas.event import EVENT_ID_PATTERN, EventCreate, EventResponse, EventUpdate
from app.services.repositories import EventRepo, use_firestore

logger = logging.getLogger(__name__)


def check_event_id(event_id: Optional[str]) -> str:
    """Reject missing or malformed ids before they reach the store"""
    if not event_id:
        raise ValidationError("Event ID required")
    if not re.fullmatch(EVENT_ID_PATTERN, event_id):
        raise ValidationError(f"Malformed event ID: {event_id}")
    return event_id


@contextmanager
def store_errors(db: Optional[Session] = None):
    """Re-raise backend failures as TransportError"""
    try:
        yield
    except SQLAlchemyError as e:
        if db is not None:
            db.rollback()
        logger.error(f"Database error: {e}")
        raise TransportError(f"Database error: {e}") from e
    except GoogleAPIError as e:
        logger.error(f"Firestore error: {e}")
        raise TransportError(f"Firestore error: {e}") from e


class EventService:
    """Service for calendar event operations"""

    @staticmethod
    def list_events(db: Session) -> List[EventResponse]:
        """All events, date ascending"""
        with store_errors(db):
            rows = EventRepo.list_fs() if use_firestore() else EventRepo.list_sql(db)
        return [EventResponse.model_validate(row) for row in rows]

    @staticmethod
    def events_on(db: Session, day: date) -> List[EventResponse]:
        with store_errors(db):
            rows = EventRepo.list_on_fs(day) if use_firestore() else EventRepo.list_on_sql(db, day)
        return [EventResponse.model_validate(row) for row in rows]

    @staticmethod
    def create_event(db: Session, payload: EventCreate) -> EventResponse:
        fields = payload.model_dump()
        with store_errors(db):
            if use_firestore():
                row = EventRepo.create_fs(fields)
            else:
                row = EventRepo.create_sql(db, fields)
        event = EventResponse.model_validate(row)
        logger.info(f"Created event {event.id} on {event.date} for {event.customer_name}")
        return event

    @staticmethod
    def update_event(db: Session, payload: EventUpdate) -> int:
        """Apply the supplied fields; returns the matched count"""
        changes = payload.changes()
        with store_errors(db):
            if use_firestore():
                matched = EventRepo.update_fs(payload.id, changes)
            else:
                matched = EventRepo.update_sql(db, payload.id, changes)

        if not matched:
            raise NotFoundError("Event not found")

        logger.info(f"Updated event {payload.id}: {', '.join(sorted(changes))}")
        return matched

    @staticmethod
    def delete_event(db: Session, event_id: Optional[str]) -> int:
        """Delete by id; a zero count means the event was already gone"""
        event_id = check_event_id(event_id)
        with store_errors(db):
            if use_firestore():
                deleted = EventRepo.delete_fs(event_id)
            else:
                deleted = EventRepo.delete_sql(db, event_id)

        if deleted:
            logger.info(f"Deleted event {event_id}")
        else:
            logger.warning(f"Delete requested for missing event {event_id}")
        return deleted
