"""
Current date in the business time zone
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from app.core.config import settings


def local_today() -> date:
    """Today in ``REMINDER_TIMEZONE``; shared by the reminder job and the calendar page"""
    return datetime.now(ZoneInfo(settings.REMINDER_TIMEZONE)).date()
