"""
Error taxonomy shared by services, routes and the calendar UI
"""

from fastapi import status


class CalendarError(Exception):
    """Base class for errors that map onto an HTTP response"""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(CalendarError):
    """Missing or empty required field, malformed id"""

    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(CalendarError):
    """Update or delete target does not exist"""

    status_code = status.HTTP_404_NOT_FOUND


class TransportError(CalendarError):
    """Database or mail provider unavailable"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
