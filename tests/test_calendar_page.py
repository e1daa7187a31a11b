"""
Tests for the server-rendered admin calendar
"""

import pytest
from datetime import date
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.db import Base, get_db
from app.models import CalendarEvent, EventStatus
from app.schemas.event import EventCreate
from app.services.event_service import EventService
from main import app

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_calendar_page.db"
engine = create_engine(SQLALCHEMY_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

@pytest.fixture
def db_session():
    """Create test database session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)

@pytest.fixture
def client(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app, follow_redirects=False)
    app.dependency_overrides.clear()

@pytest.fixture
def booking(db_session):
    return EventService.create_event(db_session, EventCreate(
        title="Maternity shoot",
        date=date(2026, 11, 12),
        customer_name="Sowmya Bhat",
        location="Cubbon Park",
    ))

def test_page_shows_month_and_events(client, booking):
    """Test events render inside the focused month"""
    response = client.get("/admin/calendar?month=2026-11-01")
    assert response.status_code == 200
    assert "November 2026" in response.text
    assert "Maternity shoot" in response.text
    assert 'class="entry" style="background: #f59e0b"' in response.text

def test_status_filter_hides_other_events(client, booking):
    """Test filtered-out events are not rendered"""
    response = client.get("/admin/calendar?month=2026-11-01&status=Confirmed")
    assert "Maternity shoot" not in response.text

def test_search_navigates_to_first_match(client, booking):
    """Test search text moves the calendar to the matching month"""
    response = client.get("/admin/calendar?q=sowmya")
    assert "November 2026" in response.text
    assert "Maternity shoot" in response.text

def test_search_without_match_renders(client, booking):
    """Test empty results are not an error"""
    response = client.get("/admin/calendar?q=nobody&month=2026-11-01")
    assert response.status_code == 200
    assert "Maternity shoot" not in response.text

def test_view_modal(client, booking):
    """Test selecting an event opens the read-only view"""
    response = client.get(f"/admin/calendar?event={booking.id}&mode=view&month=2026-11-01")
    assert "Full Edit" in response.text
    assert "Cubbon Park" in response.text
    assert "12-11-2026" in response.text

def test_create_modal_prefills_date(client):
    """Test clicking an empty day"""
    response = client.get("/admin/calendar?mode=create&date=2026-11-20")
    assert "New event" in response.text
    assert 'value="2026-11-20"' in response.text

def test_save_creates_and_redirects(client, db_session):
    """Test create from the modal form"""
    response = client.post("/admin/calendar/save", data={
        "title": "Product shoot",
        "date": "2026-11-03",
        "status": "Confirmed",
        "customer_name": "  Nikhil  ",
        "month": "2026-11-01",
    })
    assert response.status_code == 303
    assert "toast=Event+created" in response.headers["location"]

    row = db_session.query(CalendarEvent).one()
    assert row.customer_name == "Nikhil"
    assert row.status == EventStatus.CONFIRMED

def test_save_failure_keeps_form_open(client, db_session):
    """Test validation failure re-renders the form with the input"""
    response = client.post("/admin/calendar/save", data={
        "title": "Product shoot",
        "date": "2026-11-03",
        "status": "Pending",
        "customer_name": "   ",
    })
    assert response.status_code == 400
    assert "Save failed" in response.text
    assert 'value="Product shoot"' in response.text
    assert db_session.query(CalendarEvent).count() == 0

def test_save_updates_existing(client, db_session, booking):
    """Test full edit submission"""
    response = client.post("/admin/calendar/save", data={
        "id": booking.id,
        "title": "Maternity shoot (outdoor)",
        "date": "2026-11-13",
        "status": "Confirmed",
        "customer_name": "Sowmya Bhat",
        "location": "Lalbagh",
    })
    assert response.status_code == 303
    assert "toast=Event+updated" in response.headers["location"]

    events = EventService.list_events(db_session)
    assert events[0].title == "Maternity shoot (outdoor)"
    assert events[0].date == date(2026, 11, 13)

def test_quick_status_change(client, db_session, booking):
    """Test status buttons keep the view open on the refreshed event"""
    response = client.post("/admin/calendar/status", data={"id": booking.id, "new_status": "Completed"})
    assert response.status_code == 303
    location = response.headers["location"]
    assert f"event={booking.id}" in location
    assert "mode=view" in location

    assert EventService.list_events(db_session)[0].status == EventStatus.COMPLETED

def test_quick_status_change_unknown_event(client):
    """Test not found surfaces as an error toast"""
    response = client.post("/admin/calendar/status", data={"id": "e" * 32, "new_status": "Completed"})
    assert response.status_code == 404
    assert "Status update failed" in response.text

def test_delete_from_calendar(client, db_session, booking):
    """Test delete closes the modal"""
    response = client.post("/admin/calendar/delete", data={"id": booking.id})
    assert response.status_code == 303
    assert "toast=Event+deleted" in response.headers["location"]
    assert db_session.query(CalendarEvent).count() == 0

def test_toast_rendered(client):
    """Test flash message from the redirect"""
    response = client.get("/admin/calendar?toast=Event+created&toast_type=success")
    assert "Event created" in response.text
    assert 'class="toast success"' in response.text

def test_edit_of_deleted_event_keeps_form(client, db_session, booking):
    """Test the typed input survives a save against a removed event"""
    EventService.delete_event(db_session, booking.id)

    response = client.post("/admin/calendar/save", data={
        "id": booking.id,
        "title": "Retouched title",
        "date": "2026-11-12",
        "status": "Confirmed",
        "customer_name": "Sowmya Bhat",
        "month": "2026-11-01",
    })
    assert response.status_code == 404
    assert "Save failed: Event not found" in response.text
    assert 'value="Retouched title"' in response.text
    assert "Edit event" in response.text

def test_today_banner_uses_business_date(client, booking, monkeypatch):
    """Test the banner follows the configured time zone's date"""
    monkeypatch.setattr("app.api.routes_calendar.local_today", lambda: date(2026, 11, 12))
    response = client.get("/admin/calendar")
    assert "<b>Today:</b>" in response.text
    assert "Maternity shoot (Sowmya Bhat)" in response.text

def test_week_view(client, booking):
    """Test the week layout and its navigation"""
    response = client.get("/admin/calendar?view=week&month=2026-11-12")
    assert response.status_code == 200
    assert "08-11-2026 - 14-11-2026" in response.text
    assert "Maternity shoot" in response.text
    assert "month=2026-11-05" in response.text

def test_day_view(client, booking):
    """Test the single day layout"""
    response = client.get("/admin/calendar?view=day&month=2026-11-12")
    assert "Thursday 12-11-2026" in response.text
    assert "Maternity shoot" in response.text

    response = client.get("/admin/calendar?view=day&month=2026-11-13")
    assert "Maternity shoot" not in response.text

def test_cancel_edit_link_returns_to_view(client, booking):
    """Test cancel from the edit form goes back to the read-only view"""
    response = client.get(f"/admin/calendar?event={booking.id}&mode=edit&action=cancel")
    assert response.status_code == 303
    location = response.headers["location"]
    assert f"event={booking.id}" in location
    assert "mode=view" in location

def test_cancel_create_link_closes(client):
    """Test cancel from the create form closes the modal"""
    response = client.get("/admin/calendar?mode=create&date=2026-11-20&month=2026-11-01&action=cancel")
    assert response.status_code == 303
    assert response.headers["location"] == "/admin/calendar?month=2026-11-01"

def test_close_link(client, booking):
    """Test close from the view keeps filters and drops the selection"""
    response = client.get(f"/admin/calendar?event={booking.id}&mode=view&status=Pending&action=close")
    assert response.status_code == 303
    location = response.headers["location"]
    assert "status=Pending" in location
    assert "event=" not in location

def test_dismiss_toast_link(client):
    """Test the toast close button"""
    response = client.get("/admin/calendar?toast=Event+created&toast_type=success&action=dismiss")
    assert response.status_code == 303
    assert "toast" not in response.headers["location"]
