"""Pytest fixtures: per-test SQLite database for fast, isolated tests."""
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from campus_events.database import Base, get_db
from campus_events.main import app

# Import all models so they register with Base.metadata
from campus_events.models.user import User, UserRole            # noqa: F401
from campus_events.models.event_type import EventType           # noqa: F401
from campus_events.models.event import Event                    # noqa: F401
from campus_events.models.registration import EventRegistration  # noqa: F401

SQLITE_URL = "sqlite:///./test.db"


@pytest.fixture(scope="function")
def db_engine():
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})

    # Enable WAL mode for better concurrency
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(db_engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=db_engine)


@pytest.fixture(scope="function")
def db(session_factory):
    """Yield a database session, closed after the test."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def client(session_factory):
    """FastAPI TestClient with the database dependency overridden to use SQLite."""

    def _override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers: direct database factories for service-level tests
# ---------------------------------------------------------------------------
def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def make_user(db, name: str = "Student", email: str = None, role: UserRole = UserRole.student) -> User:
    user = User(name=name, email=email or f"{name.lower().replace(' ', '.')}@students.example.edu", role=role)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_event_type(db, name: str = "Workshop") -> EventType:
    event_type = EventType(name=name, slug=name.lower())
    db.add(event_type)
    db.commit()
    db.refresh(event_type)
    return event_type


def make_event(db, creator: User = None, event_type: EventType = None, **overrides) -> Event:
    """Insert a published event a week ahead with open registration."""
    creator = creator or (
        db.query(User).filter(User.role == UserRole.admin).first()
        or make_user(db, name="Admin", role=UserRole.admin)
    )
    event_type = event_type or db.query(EventType).first() or make_event_type(db)
    fields = {
        "title": "React Workshop",
        "description": "Hands-on intro to React",
        "date_time": now_utc() + timedelta(days=7),
        "location": "Lab 3, Main Campus",
        "event_type_id": event_type.event_type_id,
        "creator_id": creator.user_id,
        "is_published": True,
        "registration_required": True,
        "current_attendees": 0,
    }
    fields.update(overrides)
    ev = Event(**fields)
    db.add(ev)
    db.commit()
    db.refresh(ev)
    return ev


# ---------------------------------------------------------------------------
# Helpers: create records via the API, return the JSON response dict
# ---------------------------------------------------------------------------
def create_test_user(client: TestClient, name: str = "Test User", email: str = None, role: str = "STUDENT") -> dict:
    """POST /api/users and return response JSON."""
    resp = client.post("/api/users/", json={
        "name": name,
        "email": email or f"{name.lower().replace(' ', '.')}@students.example.edu",
        "role": role,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_event_type(client: TestClient, name: str = "Workshop") -> dict:
    """POST /api/event-types and return response JSON."""
    resp = client.post("/api/event-types/", json={"name": name})
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_test_event(client: TestClient, admin_email: str, event_type_id: str, **overrides) -> dict:
    """POST /api/admin/events and return response JSON."""
    payload = {
        "title": "Hackathon Kickoff",
        "description": "Team formation and briefing",
        "date_time": (now_utc() + timedelta(days=3)).isoformat(),
        "location": "Main Hall",
        "event_type_id": event_type_id,
        "is_published": True,
    }
    payload.update(overrides)
    resp = client.post("/api/admin/events/", params={"admin_email": admin_email}, json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()
