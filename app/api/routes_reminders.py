"""
Reminder job route, triggered by an external scheduler
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.errors import CalendarError
from app.schemas.common import MessageResponse
from app.services.reminder_service import ReminderService
from app.utils.responses import calendar_error_response

router = APIRouter()


def get_reminder_service() -> ReminderService:
    return ReminderService()


# Plain def: SMTP calls block, so FastAPI runs this in its thread pool
@router.get("/reminders")
def send_reminders(
    db: Session = Depends(get_db),
    reminder_service: ReminderService = Depends(get_reminder_service),
):
    """E-mail every customer whose event is dated tomorrow"""
    try:
        result = reminder_service.send_reminders(db)
    except CalendarError as e:
        return calendar_error_response(e)

    if not result.total:
        return MessageResponse(message="No reminders for tomorrow")
    return result.model_dump(mode="json", by_alias=True)
