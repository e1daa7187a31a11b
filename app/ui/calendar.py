"""
Calendar presentation helpers: colours, filtering and the month, week and day grids
"""

import calendar
import enum
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Dict, Iterable, List

from app.models.event import EventStatus
from app.schemas.event import EventResponse

STATUS_FILTER_ALL = "All"

STATUS_COLORS = {
    EventStatus.PENDING: "#f59e0b",
    EventStatus.CONFIRMED: "#10b981",
    EventStatus.COMPLETED: "#3b82f6",
    EventStatus.CANCELLED: "#ef4444",
}
DEFAULT_COLOR = "#6b7280"

# Weeks start on Sunday
_calendar = calendar.Calendar(firstweekday=calendar.SUNDAY)


class CalendarView(str, enum.Enum):
    MONTH = "month"
    WEEK = "week"
    DAY = "day"


def status_color(status) -> str:
    try:
        return STATUS_COLORS[EventStatus(status)]
    except ValueError:
        return DEFAULT_COLOR


def filter_events(
    events: Iterable[EventResponse],
    status_filter: str = STATUS_FILTER_ALL,
    search_text: str = "",
) -> List[EventResponse]:
    """Status equality AND case-insensitive customer name substring"""
    text = search_text.strip().lower()
    results = []
    for event in events:
        if status_filter != STATUS_FILTER_ALL and event.status != status_filter:
            continue
        if text and text not in (event.customer_name or "").lower():
            continue
        results.append(event)
    return results


def events_on(events: Iterable[EventResponse], day: date) -> List[EventResponse]:
    return [event for event in events if event.date == day]


@dataclass
class CalendarDay:
    day: date
    in_month: bool
    events: List[EventResponse] = field(default_factory=list)


def _by_day(events: Iterable[EventResponse]) -> Dict[date, List[EventResponse]]:
    by_day = {}
    for event in events:
        by_day.setdefault(event.date, []).append(event)
    return by_day


def month_grid(focus: date, events: Iterable[EventResponse]) -> List[List[CalendarDay]]:
    """Weeks of the month containing ``focus``, padded to whole weeks"""
    by_day = _by_day(events)
    return [
        [CalendarDay(day=d, in_month=d.month == focus.month, events=by_day.get(d, [])) for d in week]
        for week in _calendar.monthdatescalendar(focus.year, focus.month)
    ]


def week_start(focus: date) -> date:
    """Sunday on or before ``focus``"""
    return focus - timedelta(days=(focus.weekday() + 1) % 7)


def week_grid(focus: date, events: Iterable[EventResponse]) -> List[List[CalendarDay]]:
    by_day = _by_day(events)
    start = week_start(focus)
    days = [start + timedelta(days=i) for i in range(7)]
    return [[CalendarDay(day=d, in_month=True, events=by_day.get(d, [])) for d in days]]


def day_grid(focus: date, events: Iterable[EventResponse]) -> List[List[CalendarDay]]:
    return [[CalendarDay(day=focus, in_month=True, events=_by_day(events).get(focus, []))]]


def calendar_grid(view: CalendarView, focus: date, events: Iterable[EventResponse]) -> List[List[CalendarDay]]:
    """Rows of day cells for the given view"""
    if view == CalendarView.WEEK:
        return week_grid(focus, events)
    if view == CalendarView.DAY:
        return day_grid(focus, events)
    return month_grid(focus, events)


def shift_month(focus: date, months: int) -> date:
    """First day of the month ``months`` away from ``focus``"""
    index = focus.year * 12 + focus.month - 1 + months
    return date(index // 12, index % 12 + 1, 1)


def shift_period(view: CalendarView, focus: date, steps: int) -> date:
    """Focus date ``steps`` months, weeks or days away, depending on the view"""
    if view == CalendarView.WEEK:
        return focus + timedelta(weeks=steps)
    if view == CalendarView.DAY:
        return focus + timedelta(days=steps)
    return shift_month(focus, steps)
