"""Event administration service.

Responsibilities:
- Admin-only event creation, tied to an event type and a creator
- Event-type bookkeeping counters (create/delete/re-type)
- Cancellation (soft) and deletion (hard, with registrations)
- Public listings: upcoming, past, featured, by type, by slug
"""
import logging
from datetime import datetime
from typing import Any, Optional

from sqlalchemy.orm import Session

from campus_events.exceptions import ConflictError, ForbiddenError, InvalidRequestError, NotFoundError
from campus_events.models.event import Event
from campus_events.models.event_type import EventType
from campus_events.models.registration import EventRegistration
from campus_events.models.user import User
from campus_events.utils import as_utc, slugify, utcnow

logger = logging.getLogger(__name__)

# Fields an admin may change through update_event
MUTABLE_FIELDS = frozenset({
    "title", "description", "date_time", "location", "event_type_id",
    "max_attendees", "waitlist_enabled", "featured_image", "featured_image_alt",
    "duration_minutes", "meeting_link", "requirements", "agenda",
    "registration_required", "registration_opens_at", "registration_closes_at",
    "is_published", "is_featured",
})


def get_admin(db: Session, email: str) -> User:
    """Look up a user by email and require the ADMIN role."""
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFoundError("User not found")
    if not user.is_admin:
        raise ForbiddenError("Only administrators may manage events")
    return user


def get_event(db: Session, event_id: str) -> Event:
    event = db.query(Event).filter(Event.event_id == event_id).first()
    if not event:
        raise NotFoundError("Event not found")
    return event


def _get_event_type(db: Session, event_type_id: str) -> EventType:
    event_type = db.query(EventType).filter(EventType.event_type_id == event_type_id).first()
    if not event_type:
        raise NotFoundError("Event type not found")
    return event_type


def create_event(db: Session, creator_email: str, **fields: Any) -> Event:
    """Create an event owned by an administrator and bump its type's counter."""
    creator = get_admin(db, creator_email)
    event_type = _get_event_type(db, fields["event_type_id"])

    event = Event(creator_id=creator.user_id, current_attendees=0, **fields)
    if not event.slug:
        event.slug = slugify(event.title)
    db.add(event)

    event_type.increment_event_count()
    db.commit()
    db.refresh(event)
    logger.info("Created event '%s' (%s) by %s", event.title, event.event_id, creator.email)
    return event


def update_event(db: Session, event_id: str, updates: dict[str, Any]) -> Event:
    """Apply a partial update; moving the event to another type moves the counters."""
    event = get_event(db, event_id)

    opens_at = as_utc(updates.get("registration_opens_at", event.registration_opens_at))
    closes_at = as_utc(updates.get("registration_closes_at", event.registration_closes_at))
    if opens_at and closes_at and closes_at < opens_at:
        raise InvalidRequestError("registration_closes_at must not be before registration_opens_at")

    new_type_id = updates.get("event_type_id")
    if new_type_id and new_type_id != event.event_type_id:
        new_type = _get_event_type(db, new_type_id)
        _get_event_type(db, event.event_type_id).decrement_event_count()
        new_type.increment_event_count()

    for field, value in updates.items():
        if field in MUTABLE_FIELDS:
            setattr(event, field, value)

    if event.max_attendees is not None and event.current_attendees > event.max_attendees:
        logger.warning(
            "Event %s capacity lowered to %d below %d current attendees",
            event_id, event.max_attendees, event.current_attendees,
        )

    db.commit()
    db.refresh(event)
    logger.info("Updated event %s", event_id)
    return event


def cancel_event(db: Session, event_id: str, reason: Optional[str] = None) -> Event:
    """Soft-cancel an event; registrations are left untouched."""
    event = get_event(db, event_id)
    if event.is_cancelled:
        raise ConflictError("Event is already cancelled")
    event.cancel(reason)
    db.commit()
    db.refresh(event)
    logger.info("Cancelled event %s (reason: %s)", event_id, reason)
    return event


def delete_event(db: Session, event_id: str) -> None:
    """Hard-delete an event together with its registrations."""
    event = get_event(db, event_id)
    event_type = db.query(EventType).filter(EventType.event_type_id == event.event_type_id).first()
    if event_type:
        event_type.decrement_event_count()

    removed = (
        db.query(EventRegistration)
        .filter(EventRegistration.event_id == event_id)
        .delete(synchronize_session=False)
    )
    db.delete(event)
    db.commit()
    logger.info("Deleted event %s and %d registrations", event_id, removed)


def get_event_by_slug(db: Session, slug: str) -> Event:
    """Fetch a published event by slug and count the view."""
    event = (
        db.query(Event)
        .filter(Event.slug == slug, Event.is_published.is_(True))
        .order_by(Event.date_time.desc())
        .first()
    )
    if not event:
        raise NotFoundError(f"Event not found with slug: {slug}")
    event.view_count = (event.view_count or 0) + 1
    db.commit()
    db.refresh(event)
    return event


def _upcoming_query(db: Session, now: datetime):
    return db.query(Event).filter(
        Event.date_time > now,
        Event.is_published.is_(True),
        Event.is_cancelled.is_(False),
    )


def list_upcoming_events(db: Session, now: Optional[datetime] = None) -> list[Event]:
    return _upcoming_query(db, now or utcnow()).order_by(Event.date_time.asc()).all()


def list_past_events(db: Session, now: Optional[datetime] = None) -> list[Event]:
    return (
        db.query(Event)
        .filter(Event.date_time < (now or utcnow()), Event.is_published.is_(True))
        .order_by(Event.date_time.desc())
        .all()
    )


def list_featured_events(db: Session, now: Optional[datetime] = None) -> list[Event]:
    return (
        _upcoming_query(db, now or utcnow())
        .filter(Event.is_featured.is_(True))
        .order_by(Event.date_time.asc())
        .all()
    )


def list_events_by_type(db: Session, event_type_id: str, now: Optional[datetime] = None) -> list[Event]:
    return (
        _upcoming_query(db, now or utcnow())
        .filter(Event.event_type_id == event_type_id)
        .order_by(Event.date_time.asc())
        .all()
    )


def list_all_events(db: Session) -> list[Event]:
    """Admin listing, drafts and cancelled events included."""
    return db.query(Event).order_by(Event.date_time.desc()).all()


def count_upcoming_events(db: Session, now: Optional[datetime] = None) -> int:
    return _upcoming_query(db, now or utcnow()).count()
