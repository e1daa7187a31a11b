"""
Calendar event model
"""

import enum
import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Date, DateTime, Enum

from app.core.db import Base


class EventStatus(str, enum.Enum):
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"


def new_event_id() -> str:
    return uuid.uuid4().hex


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CalendarEvent(Base):
    __tablename__ = "calendar_events"

    id = Column(String(32), primary_key=True, default=new_event_id)
    title = Column(String(255), nullable=False)
    # Plain calendar date, no timezone
    date = Column(Date, nullable=False, index=True)
    status = Column(
        Enum(EventStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=EventStatus.PENDING,
    )
    customer_name = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=False, default="")
    location = Column(String(255), nullable=False, default="")
    customer_email = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True)
