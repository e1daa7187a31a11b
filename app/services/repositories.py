"""
Repository layer abstracting storage (SQLAlchemy vs Firebase Firestore).
"""

from __future__ import annotations

import enum
from datetime import date, datetime
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.core.config import settings
from app.models import CalendarEvent
from app.models.event import new_event_id, utcnow
from app.services.firebase_client import events_collection


def use_firestore() -> bool:
    return settings.USE_FIREBASE is True


def _to_document(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Firestore stores dates and timestamps as ISO strings, statuses as plain text"""
    doc: Dict[str, Any] = {}
    for key, value in fields.items():
        if isinstance(value, enum.Enum):
            value = value.value
        elif isinstance(value, (date, datetime)):
            value = value.isoformat()
        doc[key] = value
    return doc


def _from_snapshot(snapshot) -> Dict[str, Any]:
    data = snapshot.to_dict()
    data["id"] = snapshot.id
    return data


class EventRepo:
    # -------- SQLAlchemy --------

    @staticmethod
    def list_sql(db: Session) -> List[CalendarEvent]:
        return db.query(CalendarEvent).order_by(
            CalendarEvent.date.asc(), CalendarEvent.created_at.asc()
        ).all()

    @staticmethod
    def list_on_sql(db: Session, day: date) -> List[CalendarEvent]:
        return db.query(CalendarEvent).filter(CalendarEvent.date == day).order_by(
            CalendarEvent.created_at.asc()
        ).all()

    @staticmethod
    def create_sql(db: Session, fields: Dict[str, Any]) -> CalendarEvent:
        event = CalendarEvent(**fields)
        db.add(event)
        db.commit()
        db.refresh(event)
        return event

    @staticmethod
    def update_sql(db: Session, event_id: str, changes: Dict[str, Any]) -> int:
        event = db.query(CalendarEvent).filter(CalendarEvent.id == event_id).first()
        if not event:
            return 0
        for key, value in changes.items():
            setattr(event, key, value)
        event.updated_at = utcnow()
        db.commit()
        return 1

    @staticmethod
    def delete_sql(db: Session, event_id: str) -> int:
        deleted = db.query(CalendarEvent).filter(CalendarEvent.id == event_id).delete()
        db.commit()
        return deleted

    # -------- Firestore --------
    # Shape: collection settings.FIRESTORE_COLLECTION, one document per event keyed by id

    @staticmethod
    def list_fs() -> List[Dict[str, Any]]:
        docs = events_collection().order_by("date").stream()
        return [_from_snapshot(d) for d in docs]

    @staticmethod
    def list_on_fs(day: date) -> List[Dict[str, Any]]:
        docs = events_collection().where("date", "==", day.isoformat()).stream()
        return [_from_snapshot(d) for d in docs]

    @staticmethod
    def create_fs(fields: Dict[str, Any]) -> Dict[str, Any]:
        event_id = new_event_id()
        data = {
            "customer_phone": "",
            "location": "",
            "customer_email": None,
            **_to_document(fields),
            "created_at": utcnow().isoformat(),
            "updated_at": None,
        }
        events_collection().document(event_id).set(data)
        return {**data, "id": event_id}

    @staticmethod
    def update_fs(event_id: str, changes: Dict[str, Any]) -> int:
        ref = events_collection().document(event_id)
        if not ref.get().exists:
            return 0
        ref.update({**_to_document(changes), "updated_at": utcnow().isoformat()})
        return 1

    @staticmethod
    def delete_fs(event_id: str) -> int:
        ref = events_collection().document(event_id)
        if not ref.get().exists:
            return 0
        ref.delete()
        return 1
