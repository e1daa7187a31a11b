"""
Day-before reminder e-mails for booked events
"""

import logging
import smtplib
from datetime import date, timedelta
from typing import Optional, Tuple

from email_validator import EmailNotValidError, validate_email
from jinja2 import TemplateError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.templating import templates
from app.schemas.common import ReminderResult
from app.schemas.event import EventResponse
from app.services.email_service import EmailService
from app.services.event_service import EventService
from app.utils.dates import local_today

logger = logging.getLogger(__name__)


class ReminderService:
    """Finds tomorrow's events and e-mails each customer once"""

    def __init__(self, mailer: Optional[EmailService] = None):
        self.mailer = mailer or EmailService()

    @staticmethod
    def tomorrow(today: Optional[date] = None) -> date:
        if today is None:
            today = local_today()
        return today + timedelta(days=1)

    @staticmethod
    def recipient_for(event: EventResponse) -> Optional[str]:
        """Normalised address, or None when the event has no usable one"""
        if not event.customer_email:
            return None
        try:
            return validate_email(event.customer_email, check_deliverability=False).normalized
        except EmailNotValidError:
            return None

    @staticmethod
    def render(event: EventResponse) -> Tuple[str, str]:
        subject = f"Event Reminder - {event.title}"
        html = templates.get_template("reminder_email.html").render(
            event=event,
            business_name=settings.EMAIL_FROM_NAME,
        )
        return subject, html

    def send_reminders(self, db: Session, today: Optional[date] = None) -> ReminderResult:
        """Send one reminder per event dated tomorrow.

        Events without a valid address are skipped; a failed send is counted
        and the remaining reminders still go out.
        """
        day = self.tomorrow(today)
        events = EventService.events_on(db, day)
        result = ReminderResult(date=day)

        if not events:
            logger.info(f"No events on {day}, nothing to send")
            return result

        recipients = [(event, self.recipient_for(event)) for event in events]
        if any(address for _, address in recipients):
            self.mailer.ensure_configured()

        for event, address in recipients:
            if not address:
                result.skipped += 1
                logger.warning(f"Skipping reminder for event {event.id}: no valid customer email")
                continue

            try:
                subject, html = self.render(event)
                self.mailer.send(address, subject, html)
            except (TemplateError, smtplib.SMTPException, OSError) as e:
                result.failed += 1
                logger.error(f"Reminder for event {event.id} to {address} failed: {e}")
                continue
            result.sent += 1

        logger.info(
            f"Reminders for {day}: sent={result.sent} failed={result.failed} skipped={result.skipped}"
        )
        return result
