"""
Calendar event CRUD routes
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.errors import CalendarError
from app.schemas.common import CreateResult, DeleteResult, ErrorResponse, UpdateResult
from app.schemas.event import EventCreate, EventResponse, EventUpdate
from app.services.event_service import EventService
from app.utils.responses import calendar_error_response

router = APIRouter()

ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


@router.get("/events", response_model=List[EventResponse])
async def list_events(db: Session = Depends(get_db)):
    """List all events, date ascending"""
    try:
        return EventService.list_events(db)
    except CalendarError as e:
        return calendar_error_response(e)


@router.post(
    "/events",
    response_model=CreateResult,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORS,
)
async def create_event(payload: EventCreate, db: Session = Depends(get_db)):
    """Create a new event"""
    try:
        event = EventService.create_event(db, payload)
    except CalendarError as e:
        return calendar_error_response(e)
    return CreateResult(id=event.id)


@router.put("/events", response_model=UpdateResult, responses=ERRORS)
async def update_event(payload: EventUpdate, db: Session = Depends(get_db)):
    """Full or partial update of an existing event"""
    try:
        matched = EventService.update_event(db, payload)
    except CalendarError as e:
        return calendar_error_response(e)
    return UpdateResult(matched_count=matched)


@router.delete("/events", response_model=DeleteResult, responses=ERRORS)
async def delete_event(
    id: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Delete an event by id"""
    try:
        deleted = EventService.delete_event(db, id)
    except CalendarError as e:
        return calendar_error_response(e)
    return DeleteResult(deleted_count=deleted)
