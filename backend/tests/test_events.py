"""Tests for the event endpoints.

Covers:
- Admin create / update / cancel / delete, admin-only creation
- Request validation (capacity, registration window)
- Public listings: upcoming, past, featured, by type, by slug (view count)
- Self-service registration endpoints and the my-registrations listing
- Admin registration listing, attendance marking, dashboard stats
"""
from datetime import timedelta

from tests.conftest import (
    create_test_event,
    create_test_event_type,
    create_test_user,
    now_utc,
)


def _setup(client):
    """Create an admin, a student and a Workshop event type."""
    admin = create_test_user(client, name="Admin", role="ADMIN")
    student = create_test_user(client, name="Student")
    etype = create_test_event_type(client, name="Workshop")
    return admin, student, etype


def _register(client, event_id: str, email: str, **body):
    return client.post(f"/api/events/{event_id}/register", params={"user_email": email}, json=body or None)


class TestEventAdmin:
    def test_create_event(self, client):
        admin, _, etype = _setup(client)
        data = create_test_event(
            client, admin["email"], etype["event_type_id"],
            title="React Workshop 2024!", max_attendees=30,
        )
        assert data["slug"] == "react-workshop-2024"
        assert data["creator_id"] == admin["user_id"]
        assert data["current_attendees"] == 0
        assert data["available_seats"] == 30
        assert data["is_full"] is False
        assert data["is_registration_open"] is True
        assert data["is_upcoming"] is True
        assert data["waitlist_enabled"] is False

    def test_student_cannot_create(self, client):
        _, student, etype = _setup(client)
        resp = client.post("/api/admin/events/", params={"admin_email": student["email"]}, json={
            "title": "Rogue", "description": "x", "location": "y",
            "date_time": (now_utc() + timedelta(days=1)).isoformat(),
            "event_type_id": etype["event_type_id"],
        })
        assert resp.status_code == 403

    def test_unknown_event_type(self, client):
        admin, _, _ = _setup(client)
        resp = client.post("/api/admin/events/", params={"admin_email": admin["email"]}, json={
            "title": "Orphan", "description": "x", "location": "y",
            "date_time": (now_utc() + timedelta(days=1)).isoformat(),
            "event_type_id": "missing",
        })
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Event type not found"

    def test_zero_capacity_rejected(self, client):
        admin, _, etype = _setup(client)
        resp = client.post("/api/admin/events/", params={"admin_email": admin["email"]}, json={
            "title": "Tiny", "description": "x", "location": "y",
            "date_time": (now_utc() + timedelta(days=1)).isoformat(),
            "event_type_id": etype["event_type_id"],
            "max_attendees": 0,
        })
        assert resp.status_code == 422

    def test_inverted_window_rejected(self, client):
        admin, _, etype = _setup(client)
        opens = now_utc() + timedelta(days=2)
        resp = client.post("/api/admin/events/", params={"admin_email": admin["email"]}, json={
            "title": "Backwards", "description": "x", "location": "y",
            "date_time": (now_utc() + timedelta(days=5)).isoformat(),
            "event_type_id": etype["event_type_id"],
            "registration_opens_at": opens.isoformat(),
            "registration_closes_at": (opens - timedelta(hours=1)).isoformat(),
        })
        assert resp.status_code == 422

    def test_update_event(self, client):
        admin, _, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"])
        resp = client.put(f"/api/admin/events/{event['event_id']}", json={
            "location": "Lab 4", "max_attendees": 10,
        })
        assert resp.status_code == 200
        data = resp.json()
        assert data["location"] == "Lab 4"
        assert data["max_attendees"] == 10
        assert data["title"] == event["title"]

    def test_update_rejects_null_for_required_fields(self, client):
        admin, _, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"])
        for field in ("title", "event_type_id", "date_time", "is_published", "location"):
            resp = client.put(f"/api/admin/events/{event['event_id']}", json={field: None})
            assert resp.status_code == 422, field

        unchanged = client.get(f"/api/admin/events/{event['event_id']}").json()
        assert unchanged["title"] == event["title"]
        assert unchanged["is_published"] is True

    def test_update_null_capacity_means_unlimited(self, client):
        admin, _, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"], max_attendees=5)
        resp = client.put(f"/api/admin/events/{event['event_id']}", json={"max_attendees": None})
        assert resp.status_code == 200
        assert resp.json()["max_attendees"] is None
        assert resp.json()["available_seats"] is None

    def test_update_window_checked_against_stored_bounds(self, client):
        admin, _, etype = _setup(client)
        opens = now_utc() + timedelta(days=1)
        event = create_test_event(
            client, admin["email"], etype["event_type_id"],
            registration_opens_at=opens.isoformat(),
        )
        resp = client.put(f"/api/admin/events/{event['event_id']}", json={
            "registration_closes_at": (opens - timedelta(hours=1)).isoformat(),
        })
        assert resp.status_code == 422
        stored = client.get(f"/api/admin/events/{event['event_id']}").json()
        assert stored["registration_closes_at"] is None

    def test_update_missing_event(self, client):
        resp = client.put("/api/admin/events/missing", json={"title": "Nope"})
        assert resp.status_code == 404

    def test_cancel_event(self, client):
        admin, _, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"])
        resp = client.put(f"/api/admin/events/{event['event_id']}/cancel", json={"reason": "Lecturer unavailable"})
        assert resp.status_code == 200
        data = resp.json()
        assert data["is_cancelled"] is True
        assert data["cancellation_reason"] == "Lecturer unavailable"
        assert data["is_registration_open"] is False

    def test_cancel_twice_conflicts(self, client):
        admin, _, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"])
        client.put(f"/api/admin/events/{event['event_id']}/cancel", json={})
        resp = client.put(f"/api/admin/events/{event['event_id']}/cancel", json={})
        assert resp.status_code == 409

    def test_delete_removes_registrations(self, client, db):
        from campus_events.models.registration import EventRegistration
        admin, student, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"])
        assert _register(client, event["event_id"], student["email"]).status_code == 201

        resp = client.delete(f"/api/admin/events/{event['event_id']}")
        assert resp.status_code == 204
        assert client.get(f"/api/admin/events/{event['event_id']}").status_code == 404
        assert db.query(EventRegistration).filter(EventRegistration.event_id == event["event_id"]).count() == 0

    def test_list_all_includes_drafts(self, client):
        admin, _, etype = _setup(client)
        create_test_event(client, admin["email"], etype["event_type_id"], title="Draft", is_published=False)
        create_test_event(client, admin["email"], etype["event_type_id"], title="Live")
        titles = {e["title"] for e in client.get("/api/admin/events/all").json()}
        assert titles == {"Draft", "Live"}


class TestPublicListings:
    def test_upcoming_excludes_drafts_cancelled_and_past(self, client):
        admin, _, etype = _setup(client)
        tid = etype["event_type_id"]
        create_test_event(client, admin["email"], tid, title="Later", date_time=(now_utc() + timedelta(days=9)).isoformat())
        create_test_event(client, admin["email"], tid, title="Soon", date_time=(now_utc() + timedelta(days=1)).isoformat())
        create_test_event(client, admin["email"], tid, title="Draft", is_published=False)
        create_test_event(client, admin["email"], tid, title="Old", date_time=(now_utc() - timedelta(days=3)).isoformat())
        dropped = create_test_event(client, admin["email"], tid, title="Dropped")
        client.put(f"/api/admin/events/{dropped['event_id']}/cancel", json={})

        titles = [e["title"] for e in client.get("/api/events/").json()]
        assert titles == ["Soon", "Later"]

        past = client.get("/api/events/past").json()
        assert [e["title"] for e in past] == ["Old"]
        assert past[0]["is_past"] is True

    def test_featured_and_by_type(self, client):
        admin, _, etype = _setup(client)
        other_type = create_test_event_type(client, name="Meeting")
        create_test_event(client, admin["email"], etype["event_type_id"], title="Star", is_featured=True)
        create_test_event(client, admin["email"], other_type["event_type_id"], title="Plain")

        assert [e["title"] for e in client.get("/api/events/featured").json()] == ["Star"]
        by_type = client.get(f"/api/events/type/{other_type['event_type_id']}").json()
        assert [e["title"] for e in by_type] == ["Plain"]

    def test_get_by_slug_counts_views(self, client):
        admin, _, etype = _setup(client)
        create_test_event(client, admin["email"], etype["event_type_id"], title="Cyber Security Talk")
        first = client.get("/api/events/cyber-security-talk")
        second = client.get("/api/events/cyber-security-talk")
        assert first.status_code == 200
        assert first.json()["view_count"] == 1
        assert second.json()["view_count"] == 2

    def test_unpublished_slug_not_found(self, client):
        admin, _, etype = _setup(client)
        create_test_event(client, admin["email"], etype["event_type_id"], title="Secret", is_published=False)
        assert client.get("/api/events/secret").status_code == 404


class TestRegistrationEndpoints:
    def test_register_and_cancel(self, client):
        admin, student, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"], max_attendees=5)

        resp = _register(client, event["event_id"], student["email"], special_requirements="Wheelchair access")
        assert resp.status_code == 201
        reg = resp.json()
        assert reg["attendance_status"] == "REGISTERED"
        assert reg["user_id"] == student["user_id"]
        assert reg["special_requirements"] == "Wheelchair access"
        assert client.get(f"/api/admin/events/{event['event_id']}").json()["current_attendees"] == 1

        resp = client.delete(f"/api/events/{event['event_id']}/register", params={"user_email": student["email"]})
        assert resp.status_code == 200
        assert resp.json()["registration_id"] == reg["registration_id"]
        assert client.get(f"/api/admin/events/{event['event_id']}").json()["current_attendees"] == 0

    def test_register_without_body(self, client):
        admin, student, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"])
        resp = client.post(f"/api/events/{event['event_id']}/register", params={"user_email": student["email"]})
        assert resp.status_code == 201

    def test_duplicate_is_conflict(self, client):
        admin, student, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"])
        _register(client, event["event_id"], student["email"])
        resp = _register(client, event["event_id"], student["email"])
        assert resp.status_code == 409
        assert resp.json()["detail"] == "You are already registered for this event"

    def test_full_event_is_conflict(self, client):
        admin, student, etype = _setup(client)
        other = create_test_user(client, name="Other")
        event = create_test_event(
            client, admin["email"], etype["event_type_id"],
            max_attendees=1, waitlist_enabled=True,
        )
        assert _register(client, event["event_id"], student["email"]).status_code == 201
        resp = _register(client, event["event_id"], other["email"])
        assert resp.status_code == 409
        assert resp.json()["detail"] == "Event is full"

    def test_closed_window_is_conflict(self, client):
        admin, student, etype = _setup(client)
        event = create_test_event(
            client, admin["email"], etype["event_type_id"],
            registration_closes_at=(now_utc() - timedelta(minutes=5)).isoformat(),
        )
        resp = _register(client, event["event_id"], student["email"])
        assert resp.status_code == 409
        assert resp.json()["detail"] == "Registration is not open for this event"

    def test_unknown_event_is_not_found(self, client):
        _, student, _ = _setup(client)
        assert _register(client, "missing", student["email"]).status_code == 404

    def test_cancel_missing_registration(self, client):
        admin, student, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"])
        resp = client.delete(f"/api/events/{event['event_id']}/register", params={"user_email": student["email"]})
        assert resp.status_code == 404

    def test_my_registrations(self, client):
        admin, student, etype = _setup(client)
        tid = etype["event_type_id"]
        later = create_test_event(client, admin["email"], tid, title="Later", date_time=(now_utc() + timedelta(days=8)).isoformat())
        sooner = create_test_event(client, admin["email"], tid, title="Sooner", date_time=(now_utc() + timedelta(days=2)).isoformat())
        _register(client, later["event_id"], student["email"])
        _register(client, sooner["event_id"], student["email"])

        resp = client.get("/api/events/my-registrations", params={"user_email": student["email"]})
        assert resp.status_code == 200
        assert [r["event_id"] for r in resp.json()] == [sooner["event_id"], later["event_id"]]

    def test_admin_lists_and_marks_attendance(self, client):
        admin, student, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"])
        reg = _register(client, event["event_id"], student["email"]).json()

        regs = client.get(f"/api/admin/events/{event['event_id']}/registrations").json()
        assert [r["registration_id"] for r in regs] == [reg["registration_id"]]

        resp = client.post(
            f"/api/admin/events/registrations/{reg['registration_id']}/attended",
            params={"admin_email": admin["email"]},
        )
        assert resp.status_code == 200
        assert resp.json()["attendance_status"] == "ATTENDED"
        assert resp.json()["checked_in_by"] == admin["user_id"]

        resp = client.post(
            f"/api/admin/events/registrations/{reg['registration_id']}/no-show",
            params={"admin_email": student["email"]},
        )
        assert resp.status_code == 403


class TestDashboard:
    def test_stats(self, client):
        admin, student, etype = _setup(client)
        event = create_test_event(client, admin["email"], etype["event_type_id"])
        _register(client, event["event_id"], student["email"])

        stats = client.get("/api/admin/dashboard/stats").json()
        assert stats == {
            "total_users": 2,
            "total_students": 1,
            "total_admins": 1,
            "upcoming_events": 1,
            "active_registrations": 1,
        }


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
