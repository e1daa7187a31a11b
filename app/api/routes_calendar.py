"""
Admin calendar page: server-rendered view over the event service
"""

import logging
from datetime import date
from typing import Optional
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Form, Query, Request, status
from fastapi.responses import RedirectResponse
from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.db import get_db
from app.core.errors import CalendarError
from app.core.templating import templates
from app.models.event import EventStatus
from app.schemas.event import EventCreate, EventUpdate
from app.services.event_service import EventService
from app.ui.calendar import (
    STATUS_COLORS,
    STATUS_FILTER_ALL,
    CalendarView,
    calendar_grid,
    events_on,
    shift_period,
    status_color,
)
from app.ui.state import (
    CancelForm,
    CloseModal,
    DeleteSucceeded,
    DismissToast,
    EditForm,
    EventForm,
    EventsLoaded,
    Mode,
    RequestFailed,
    SaveSucceeded,
    SelectDate,
    SelectEvent,
    SetCalendarView,
    SetFocusDate,
    SetSearchText,
    SetStatusFilter,
    ShowToast,
    StartFullEdit,
    StatusChanged,
    SubmitStarted,
    Toast,
    ViewState,
    reduce,
)
from app.utils.dates import local_today
from app.utils.responses import format_validation_errors

logger = logging.getLogger(__name__)

router = APIRouter()

CALENDAR_PATH = "/admin/calendar"

# Navigation links that go through the reducer before redirecting
LINK_ACTIONS = {
    "cancel": CancelForm,
    "close": CloseModal,
    "dismiss": DismissToast,
}


def _status_filter(value: Optional[str]) -> str:
    valid = {s.value for s in EventStatus}
    return value if value in valid else STATUS_FILTER_ALL


def _calendar_view(value: Optional[str]) -> CalendarView:
    try:
        return CalendarView(value)
    except ValueError:
        return CalendarView.MONTH


def _parse_date(value: Optional[str]) -> Optional[date]:
    try:
        return date.fromisoformat(value) if value else None
    except ValueError:
        return None


def load_state(db: Session, status_filter: str = STATUS_FILTER_ALL, search: str = "",
               month: Optional[date] = None, view: Optional[str] = None) -> ViewState:
    """Fresh state with the full event list and the given filters applied"""
    state = ViewState()
    try:
        state = reduce(state, EventsLoaded(events=EventService.list_events(db)))
    except CalendarError as e:
        state = reduce(state, RequestFailed(message=f"Could not load events: {e.message}"))
    state = reduce(state, SetStatusFilter(status=_status_filter(status_filter)))
    state = reduce(state, SetSearchText(text=search or ""))
    state = reduce(state, SetCalendarView(view=_calendar_view(view)))
    # Explicit month navigation wins over search focus
    if month:
        state = reduce(state, SetFocusDate(date=month))
    return state


def calendar_url(state: ViewState, **overrides) -> str:
    query = {
        "status": state.status_filter if state.status_filter != STATUS_FILTER_ALL else None,
        "q": state.search_text or None,
        "month": state.focus_date.isoformat() if state.focus_date else None,
        "view": state.view.value if state.view != CalendarView.MONTH else None,
    }
    query.update(overrides)
    query = {k: v for k, v in query.items() if v}
    return f"{CALENDAR_PATH}?{urlencode(query)}" if query else CALENDAR_PATH


def render(request: Request, state: ViewState, status_code: int = 200):
    today = local_today()
    focus = state.focus_date or today
    context = {
        "state": state,
        "selected": state.selected_event,
        "weeks": calendar_grid(state.view, focus, state.visible_events),
        "focus": focus,
        "today": today,
        "todays_events": events_on(state.events, today),
        "prev_focus": shift_period(state.view, focus, -1),
        "next_focus": shift_period(state.view, focus, 1),
        "views": CalendarView,
        "here": state.to_query(),
        "statuses": [s.value for s in EventStatus],
        "status_colors": {s.value: c for s, c in STATUS_COLORS.items()},
        "status_color": status_color,
        "url": lambda **kw: calendar_url(state, **kw),
        "toast_seconds": settings.TOAST_SECONDS,
        "modes": Mode,
    }
    return templates.TemplateResponse(request, "calendar.html", context, status_code=status_code)


def redirect(state: ViewState) -> RedirectResponse:
    query = state.to_query()
    url = f"{CALENDAR_PATH}?{urlencode(query)}" if query else CALENDAR_PATH
    return RedirectResponse(url=url, status_code=status.HTTP_303_SEE_OTHER)


@router.get(CALENDAR_PATH)
async def calendar_page(
    request: Request,
    status_filter: str = Query(STATUS_FILTER_ALL, alias="status"),
    q: str = Query(""),
    month: Optional[str] = Query(None),
    event: Optional[str] = Query(None),
    mode: Optional[str] = Query(None),
    date_: Optional[str] = Query(None, alias="date"),
    view: Optional[str] = Query(None),
    toast: Optional[str] = Query(None),
    toast_type: str = Query("success"),
    action: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    """Render the calendar; query parameters carry the view state"""
    state = load_state(db, status_filter, q, _parse_date(month), view)

    if event:
        state = reduce(state, SelectEvent(event_id=event))
        if mode == Mode.EDIT.value:
            state = reduce(state, StartFullEdit())
    elif mode == Mode.CREATE.value:
        state = reduce(state, SelectDate(date=_parse_date(date_) or local_today()))

    if toast:
        kind = toast_type if toast_type in ("success", "error") else "success"
        state = reduce(state, ShowToast(toast=Toast(message=toast, type=kind)))

    if action in LINK_ACTIONS:
        return redirect(reduce(state, LINK_ACTIONS[action]()))

    return render(request, state)


@router.post(f"{CALENDAR_PATH}/save")
async def save_from_calendar(
    request: Request,
    id: str = Form(""),
    title: str = Form(""),
    date_: str = Form("", alias="date"),
    event_status: str = Form(EventStatus.PENDING.value, alias="status"),
    customer_name: str = Form(""),
    customer_phone: str = Form(""),
    location: str = Form(""),
    customer_email: str = Form(""),
    filter_status: str = Form(STATUS_FILTER_ALL),
    q: str = Form(""),
    month: str = Form(""),
    view: str = Form(CalendarView.MONTH.value),
    db: Session = Depends(get_db),
):
    """Create or fully update an event from the modal form"""
    form = EventForm(
        id=id,
        title=title,
        date=date_,
        status=event_status,
        customer_name=customer_name,
        customer_phone=customer_phone,
        location=location,
        customer_email=customer_email,
    )
    state = load_state(db, filter_status, q, _parse_date(month), view)
    if form.id:
        state = reduce(state, SelectEvent(event_id=form.id))
        state = reduce(state, StartFullEdit())
    else:
        state = reduce(state, SelectDate(date=_parse_date(form.date) or local_today()))
    state = reduce(state, EditForm(form=form))
    state = reduce(state, SubmitStarted())

    try:
        if form.id:
            EventService.update_event(db, EventUpdate.model_validate(form.to_payload()))
            message = "Event updated"
        else:
            EventService.create_event(db, EventCreate.model_validate(form.to_payload()))
            message = "Event created"
        state = reduce(state, SaveSucceeded(events=EventService.list_events(db), message=message))
    except SchemaValidationError as e:
        state = reduce(state, RequestFailed(message=f"Save failed: {format_validation_errors(e.errors())}"))
        return render(request, state, status_code=status.HTTP_400_BAD_REQUEST)
    except CalendarError as e:
        logger.error(f"Save from calendar failed: {e.message}")
        state = reduce(state, RequestFailed(message=f"Save failed: {e.message}"))
        return render(request, state, status_code=e.status_code)

    return redirect(state)


@router.post(f"{CALENDAR_PATH}/status")
async def change_status_from_calendar(
    request: Request,
    id: str = Form(...),
    new_status: str = Form(...),
    filter_status: str = Form(STATUS_FILTER_ALL),
    q: str = Form(""),
    month: str = Form(""),
    view: str = Form(CalendarView.MONTH.value),
    db: Session = Depends(get_db),
):
    """Quick status change from the read-only view; the list is re-fetched afterwards"""
    state = load_state(db, filter_status, q, _parse_date(month), view)
    state = reduce(state, SelectEvent(event_id=id))
    state = reduce(state, SubmitStarted())

    try:
        payload = EventUpdate(id=id, status=new_status)
        EventService.update_event(db, payload)
        state = reduce(state, StatusChanged(events=EventService.list_events(db), status=payload.status))
    except SchemaValidationError as e:
        state = reduce(state, RequestFailed(message=f"Status update failed: {format_validation_errors(e.errors())}"))
        return render(request, state, status_code=status.HTTP_400_BAD_REQUEST)
    except CalendarError as e:
        state = reduce(state, RequestFailed(message=f"Status update failed: {e.message}"))
        return render(request, state, status_code=e.status_code)

    return redirect(state)


@router.post(f"{CALENDAR_PATH}/delete")
async def delete_from_calendar(
    request: Request,
    id: str = Form(...),
    filter_status: str = Form(STATUS_FILTER_ALL),
    q: str = Form(""),
    month: str = Form(""),
    view: str = Form(CalendarView.MONTH.value),
    db: Session = Depends(get_db),
):
    """Delete the selected event"""
    state = load_state(db, filter_status, q, _parse_date(month), view)
    state = reduce(state, SelectEvent(event_id=id))
    state = reduce(state, SubmitStarted())

    try:
        EventService.delete_event(db, id)
        state = reduce(state, DeleteSucceeded(events=EventService.list_events(db)))
    except CalendarError as e:
        state = reduce(state, RequestFailed(message=f"Delete failed: {e.message}"))
        return render(request, state, status_code=e.status_code)

    return redirect(state)
