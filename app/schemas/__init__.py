"""
Pydantic schemas package
"""

from .common import *
from .event import *

__all__ = [
    "ErrorResponse",
    "CreateResult",
    "UpdateResult",
    "DeleteResult",
    "ReminderResult",
    "MessageResponse",
    "EventCreate",
    "EventUpdate",
    "EventResponse",
]
