"""
Tests for the calendar event CRUD endpoints
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.db import Base, get_db
from app.models import CalendarEvent
from main import app

# Test database setup
SQLALCHEMY_DATABASE_URL = "sqlite:///./test_event_api.db"
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
    """API client bound to the test session"""
    app.dependency_overrides[get_db] = lambda: db_session
    yield TestClient(app)
    app.dependency_overrides.clear()

def wedding_payload(**overrides):
    payload = {
        "title": "Wedding shoot",
        "date": "2026-11-14",
        "customerName": "Anna Rao",
        "customerPhone": "+91 98450 00000",
        "location": "Mysuru Palace",
        "customerEmail": "anna@example.com",
    }
    payload.update(overrides)
    return payload

def test_create_event_defaults_to_pending(client):
    """Test creating an event without status"""
    response = client.post("/events", json=wedding_payload())
    assert response.status_code == 201
    body = response.json()
    assert body["success"] is True
    assert len(body["id"]) == 32

    events = client.get("/events").json()
    assert len(events) == 1
    assert events[0]["id"] == body["id"]
    assert events[0]["status"] == "Pending"

def test_create_then_list_round_trip(client):
    """Test that listed fields equal the trimmed submission"""
    payload = wedding_payload(title="  Engagement  ", customerName=" Ravi Kumar ", status="Confirmed")
    created = client.post("/events", json=payload).json()

    event = client.get("/events").json()[0]
    assert event["id"] == created["id"]
    assert event["title"] == "Engagement"
    assert event["date"] == "2026-11-14"
    assert event["status"] == "Confirmed"
    assert event["customerName"] == "Ravi Kumar"
    assert event["customerPhone"] == "+91 98450 00000"
    assert event["location"] == "Mysuru Palace"
    assert event["customerEmail"] == "anna@example.com"
    assert event["createdAt"] is not None
    assert event["updatedAt"] is None

@pytest.mark.parametrize("field", ["title", "customerName"])
def test_create_rejects_blank_required_field(client, db_session, field):
    """Test that whitespace-only required fields are rejected"""
    response = client.post("/events", json=wedding_payload(**{field: "   "}))
    assert response.status_code == 400
    assert field in response.json()["error"]
    assert db_session.query(CalendarEvent).count() == 0

def test_create_rejects_unknown_field(client, db_session):
    """Test that unexpected body fields are not silently dropped"""
    response = client.post("/events", json=wedding_payload(notes="bring drone"))
    assert response.status_code == 400
    assert "notes" in response.json()["error"]
    assert db_session.query(CalendarEvent).count() == 0

def test_create_rejects_unknown_status(client):
    """Test status must be one of the four known values"""
    response = client.post("/events", json=wedding_payload(status="Tentative"))
    assert response.status_code == 400

def test_create_rejects_missing_date(client):
    """Test date is required"""
    payload = wedding_payload()
    del payload["date"]
    response = client.post("/events", json=payload)
    assert response.status_code == 400
    assert "date" in response.json()["error"]

def test_list_sorted_by_date(client):
    """Test listing order is independent of insertion order"""
    for day in ["2026-12-01", "2026-10-21", "2027-01-05", "2026-11-30"]:
        client.post("/events", json=wedding_payload(date=day))

    dates = [e["date"] for e in client.get("/events").json()]
    assert dates == ["2026-10-21", "2026-11-30", "2026-12-01", "2027-01-05"]

def test_full_update(client):
    """Test replacing every editable field"""
    event_id = client.post("/events", json=wedding_payload()).json()["id"]

    response = client.put("/events", json={
        "id": event_id,
        "title": "Reception",
        "date": "2026-11-15",
        "status": "Confirmed",
        "customerName": "Anna R",
        "customerPhone": "",
        "location": "Bengaluru",
        "customerEmail": "",
    })
    assert response.status_code == 200
    assert response.json() == {"success": True, "matchedCount": 1}

    event = client.get("/events").json()[0]
    assert event["title"] == "Reception"
    assert event["date"] == "2026-11-15"
    assert event["customerPhone"] == ""
    assert event["customerEmail"] is None
    assert event["updatedAt"] is not None

def test_status_only_update_leaves_other_fields(client):
    """Test a quick status change touches only status and updatedAt"""
    event_id = client.post("/events", json=wedding_payload()).json()["id"]
    before = client.get("/events").json()[0]

    response = client.put("/events", json={"id": event_id, "status": "Completed"})
    assert response.status_code == 200

    after = client.get("/events").json()[0]
    assert after["status"] == "Completed"
    assert after["updatedAt"] is not None
    unchanged = {k: v for k, v in before.items() if k not in ("status", "updatedAt")}
    assert {k: after[k] for k in unchanged} == unchanged

def test_update_missing_event(client):
    """Test updating an unknown id returns 404 and changes nothing"""
    event_id = client.post("/events", json=wedding_payload()).json()["id"]
    before = client.get("/events").json()

    response = client.put("/events", json={"id": "0" * 32, "status": "Cancelled"})
    assert response.status_code == 404
    assert response.json() == {"error": "Event not found"}
    assert client.get("/events").json() == before
    assert before[0]["id"] == event_id

def test_update_requires_id(client):
    """Test update without id"""
    response = client.put("/events", json={"status": "Confirmed"})
    assert response.status_code == 400
    assert "id" in response.json()["error"]

def test_update_malformed_id(client):
    """Test update with an id that cannot exist"""
    response = client.put("/events", json={"id": "not-an-id", "status": "Confirmed"})
    assert response.status_code == 400

def test_update_without_changes(client):
    """Test update carrying only the id"""
    event_id = client.post("/events", json=wedding_payload()).json()["id"]
    response = client.put("/events", json={"id": event_id})
    assert response.status_code == 400
    assert response.json()["error"] == "No fields to update"

def test_update_cannot_clear_required_field(client):
    """Test explicit null or blank for a required field"""
    event_id = client.post("/events", json=wedding_payload()).json()["id"]

    assert client.put("/events", json={"id": event_id, "title": None}).status_code == 400
    assert client.put("/events", json={"id": event_id, "customerName": "  "}).status_code == 400
    assert client.get("/events").json()[0]["title"] == "Wedding shoot"

def test_delete_event(client):
    """Test deleting an existing event"""
    event_id = client.post("/events", json=wedding_payload()).json()["id"]

    response = client.delete(f"/events?id={event_id}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "deletedCount": 1}
    assert client.get("/events").json() == []

def test_delete_missing_event_is_not_an_error(client):
    """Test deleting an unknown id reports zero deleted"""
    response = client.delete(f"/events?id={'a' * 32}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "deletedCount": 0}

def test_delete_requires_id(client):
    """Test delete without id"""
    response = client.delete("/events")
    assert response.status_code == 400
    assert response.json() == {"error": "Event ID required"}

def test_delete_malformed_id(client):
    """Test delete with a malformed id"""
    response = client.delete("/events?id=xyz")
    assert response.status_code == 400

def test_health(client):
    """Test health check endpoint"""
    assert client.get("/health").json() == {"status": "ok"}
