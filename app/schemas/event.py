"""
Event-related Pydantic schemas
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from app.models.event import EventStatus

EVENT_ID_PATTERN = r"^[0-9a-f]{32}$"

# Fields an update may omit but never clear
REQUIRED_FIELDS = ("title", "date", "status", "customer_name")


class EventFields(BaseModel):
    """Request body base: camelCase JSON, trimmed strings, no unknown fields"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )

    @field_validator("title", "customer_name", check_fields=False)
    @classmethod
    def not_blank(cls, value, info):
        if value is not None and not value:
            raise ValueError(f"{to_camel(info.field_name)} is required")
        return value

    @field_validator("customer_email", mode="before", check_fields=False)
    @classmethod
    def blank_email_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class EventCreate(EventFields):
    """Schema for creating an event"""
    title: str = Field(max_length=255)
    date: dt.date
    status: EventStatus = EventStatus.PENDING
    customer_name: str = Field(max_length=255)
    customer_phone: str = Field("", max_length=50)
    location: str = Field("", max_length=255)
    customer_email: Optional[EmailStr] = None


class EventUpdate(EventFields):
    """Schema for a full or partial update; only supplied fields change"""
    id: str = Field(pattern=EVENT_ID_PATTERN)
    title: Optional[str] = Field(None, max_length=255)
    date: Optional[dt.date] = None
    status: Optional[EventStatus] = None
    customer_name: Optional[str] = Field(None, max_length=255)
    customer_phone: Optional[str] = Field(None, max_length=50)
    location: Optional[str] = Field(None, max_length=255)
    customer_email: Optional[EmailStr] = None

    @model_validator(mode="after")
    def check_changes(self):
        for name in REQUIRED_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{to_camel(name)} cannot be empty")
        if not self.model_fields_set - {"id"}:
            raise ValueError("No fields to update")
        return self

    def changes(self) -> dict:
        data = self.model_dump(exclude_unset=True, exclude={"id"})
        for name in ("customer_phone", "location"):
            if name in data and data[name] is None:
                data[name] = ""
        return data


class EventResponse(BaseModel):
    """Event as returned to clients"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

    id: str
    title: str
    date: dt.date
    status: EventStatus
    customer_name: str
    customer_phone: str = ""
    location: str = ""
    customer_email: Optional[str] = None
    created_at: dt.datetime
    updated_at: Optional[dt.datetime] = None
