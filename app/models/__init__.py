"""
Database models package
"""

from .event import CalendarEvent, EventStatus

__all__ = ["CalendarEvent", "EventStatus"]
