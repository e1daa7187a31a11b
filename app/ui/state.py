"""
Calendar page view state and its transitions.

Everything the calendar page shows lives in one serializable ``ViewState``.
Interactions are expressed as actions and applied with ``reduce``, which
never mutates its input.
"""

import enum
from datetime import date
from typing import Dict, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict

from app.models.event import EventStatus
from app.schemas.event import EventResponse
from app.ui.calendar import STATUS_FILTER_ALL, CalendarView, filter_events


class Mode(str, enum.Enum):
    VIEW = "view"
    EDIT = "edit"
    CREATE = "create"


class Toast(BaseModel):
    message: str
    type: Literal["success", "error"] = "success"


class EventForm(BaseModel):
    """Raw form input; validated only on submit"""
    id: str = ""
    title: str = ""
    date: str = ""
    status: str = EventStatus.PENDING.value
    customer_name: str = ""
    customer_phone: str = ""
    location: str = ""
    customer_email: str = ""

    @classmethod
    def from_event(cls, event: EventResponse) -> "EventForm":
        return cls(
            id=event.id,
            title=event.title,
            date=event.date.isoformat(),
            status=event.status.value,
            customer_name=event.customer_name,
            customer_phone=event.customer_phone,
            location=event.location,
            customer_email=event.customer_email or "",
        )

    def to_payload(self) -> Dict[str, str]:
        """Request body fields; ``id`` only when editing an existing event"""
        return self.model_dump(exclude={"id"} if not self.id else set())


class ViewState(BaseModel):
    model_config = ConfigDict(frozen=True)

    events: Tuple[EventResponse, ...] = ()
    mode: Optional[Mode] = None
    selected_id: Optional[str] = None
    form: Optional[EventForm] = None
    status_filter: str = STATUS_FILTER_ALL
    search_text: str = ""
    focus_date: Optional[date] = None
    view: CalendarView = CalendarView.MONTH
    saving: bool = False
    toast: Optional[Toast] = None

    @property
    def modal_open(self) -> bool:
        return self.mode is not None

    @property
    def selected_event(self) -> Optional[EventResponse]:
        return self.find(self.selected_id)

    @property
    def visible_events(self):
        return filter_events(self.events, self.status_filter, self.search_text)

    def find(self, event_id: Optional[str]) -> Optional[EventResponse]:
        if not event_id:
            return None
        return next((e for e in self.events if e.id == event_id), None)

    def to_query(self) -> Dict[str, str]:
        """URL parameters that reproduce this state on the next page load"""
        query = {
            "status": self.status_filter if self.status_filter != STATUS_FILTER_ALL else None,
            "q": self.search_text or None,
            "month": self.focus_date.isoformat() if self.focus_date else None,
            "view": self.view.value if self.view != CalendarView.MONTH else None,
        }
        if self.mode in (Mode.VIEW, Mode.EDIT):
            query["event"] = self.selected_id
            query["mode"] = self.mode.value
        if self.toast:
            query["toast"] = self.toast.message
            query["toast_type"] = self.toast.type
        return {k: v for k, v in query.items() if v}


# -------- Actions --------

class EventsLoaded(BaseModel):
    events: Sequence[EventResponse]


class SelectEvent(BaseModel):
    event_id: str


class SelectDate(BaseModel):
    date: date


class StartFullEdit(BaseModel):
    pass


class EditForm(BaseModel):
    form: EventForm


class CancelForm(BaseModel):
    pass


class CloseModal(BaseModel):
    pass


class SetStatusFilter(BaseModel):
    status: str


class SetSearchText(BaseModel):
    text: str


class SetFocusDate(BaseModel):
    date: date


class SetCalendarView(BaseModel):
    view: CalendarView


class SubmitStarted(BaseModel):
    pass


class SaveSucceeded(BaseModel):
    events: Sequence[EventResponse]
    message: str


class StatusChanged(BaseModel):
    events: Sequence[EventResponse]
    status: EventStatus


class DeleteSucceeded(BaseModel):
    events: Sequence[EventResponse]


class RequestFailed(BaseModel):
    message: str


class ShowToast(BaseModel):
    toast: Toast


class DismissToast(BaseModel):
    pass


_CLOSED = {"mode": None, "selected_id": None, "form": None}


def _focus_first_match(state: ViewState) -> ViewState:
    if not state.search_text.strip():
        return state
    matches = state.visible_events
    if not matches:
        return state
    return state.model_copy(update={"focus_date": matches[0].date})


def reduce(state: ViewState, action) -> ViewState:
    """Return the state that results from applying ``action`` to ``state``"""
    copy = state.model_copy

    if isinstance(action, EventsLoaded):
        return copy(update={"events": tuple(action.events)})

    if isinstance(action, SelectEvent):
        if state.find(action.event_id) is None:
            return copy(update={**_CLOSED, "toast": Toast(message="Event not found", type="error")})
        return copy(update={"mode": Mode.VIEW, "selected_id": action.event_id, "form": None})

    if isinstance(action, SelectDate):
        return copy(update={
            "mode": Mode.CREATE,
            "selected_id": None,
            "form": EventForm(date=action.date.isoformat()),
        })

    if isinstance(action, StartFullEdit):
        event = state.selected_event
        if state.mode != Mode.VIEW or event is None:
            return state
        return copy(update={"mode": Mode.EDIT, "form": EventForm.from_event(event)})

    if isinstance(action, EditForm):
        if state.mode is None and action.form.id:
            # Editing an event missing from the list; keep the input so a failure can show it
            return copy(update={"mode": Mode.EDIT, "selected_id": action.form.id, "form": action.form})
        if state.mode not in (Mode.EDIT, Mode.CREATE):
            return state
        return copy(update={"form": action.form})

    if isinstance(action, CancelForm):
        if state.mode == Mode.EDIT and state.selected_event is not None:
            return copy(update={"mode": Mode.VIEW, "form": None, "saving": False})
        return copy(update={**_CLOSED, "saving": False})

    if isinstance(action, CloseModal):
        return copy(update={**_CLOSED, "saving": False})

    if isinstance(action, SetStatusFilter):
        return _focus_first_match(copy(update={"status_filter": action.status or STATUS_FILTER_ALL}))

    if isinstance(action, SetSearchText):
        return _focus_first_match(copy(update={"search_text": action.text}))

    if isinstance(action, SetFocusDate):
        return copy(update={"focus_date": action.date})

    if isinstance(action, SetCalendarView):
        return copy(update={"view": action.view})

    if isinstance(action, SubmitStarted):
        return copy(update={"saving": True})

    if isinstance(action, SaveSucceeded):
        return copy(update={
            **_CLOSED,
            "events": tuple(action.events),
            "search_text": "",
            "saving": False,
            "toast": Toast(message=action.message),
        })

    if isinstance(action, StatusChanged):
        return copy(update={
            "events": tuple(action.events),
            "saving": False,
            "toast": Toast(message=f"Status updated to {action.status.value}"),
        })

    if isinstance(action, DeleteSucceeded):
        return copy(update={
            **_CLOSED,
            "events": tuple(action.events),
            "saving": False,
            "toast": Toast(message="Event deleted"),
        })

    if isinstance(action, RequestFailed):
        return copy(update={"saving": False, "toast": Toast(message=action.message, type="error")})

    if isinstance(action, ShowToast):
        return copy(update={"toast": action.toast})

    if isinstance(action, DismissToast):
        return copy(update={"toast": None})

    raise TypeError(f"Unknown calendar action: {type(action).__name__}")
