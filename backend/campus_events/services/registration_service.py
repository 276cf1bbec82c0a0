"""Registration coordinator: sign-ups, cancellations and attendance.

Each mutating operation runs inside one explicit transaction. The seat is
claimed with a guarded UPDATE so two requests that both read a non-full event
cannot push ``current_attendees`` past ``max_attendees``; the partial unique
index on active (event, user) pairs is the storage-level duplicate guard.

Waitlist columns exist on the models but nothing places or promotes
registrations; a full event refuses new sign-ups even with the waitlist flag on.
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import or_, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from campus_events.database import atomic
from campus_events.exceptions import ConflictError, NotFoundError
from campus_events.models.event import Event
from campus_events.models.registration import AttendanceStatus, EventRegistration
from campus_events.models.user import User
from campus_events.services.event_service import get_admin, get_event
from campus_events.utils import utcnow

logger = logging.getLogger(__name__)

ALREADY_REGISTERED = "You are already registered for this event"
REGISTRATION_CLOSED = "Registration is not open for this event"
EVENT_FULL = "Event is full"


def _get_user(db: Session, email: str) -> User:
    user = db.query(User).filter(User.email == email).first()
    if not user:
        raise NotFoundError("User not found")
    return user


def _active_registration(db: Session, event_id: str, user_id: str) -> Optional[EventRegistration]:
    return (
        db.query(EventRegistration)
        .filter(
            EventRegistration.event_id == event_id,
            EventRegistration.user_id == user_id,
            EventRegistration.is_cancelled.is_(False),
        )
        .first()
    )


def _claim_seat(db: Session, event_id: str) -> bool:
    """Increment the attendee counter only while a seat is free."""
    result = db.execute(
        update(Event)
        .where(
            Event.event_id == event_id,
            or_(Event.max_attendees.is_(None), Event.current_attendees < Event.max_attendees),
        )
        .values(current_attendees=Event.current_attendees + 1)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def _release_seat(db: Session, event_id: str) -> None:
    db.execute(
        update(Event)
        .where(Event.event_id == event_id, Event.current_attendees > 0)
        .values(current_attendees=Event.current_attendees - 1)
        .execution_options(synchronize_session=False)
    )


def register_for_event(
    db: Session,
    event_id: str,
    user_email: str,
    special_requirements: Optional[str] = None,
    notes: Optional[str] = None,
    now: Optional[datetime] = None,
) -> EventRegistration:
    """Register a user for an event.

    Checks run in order: event exists, user exists, no active registration for
    the pair, registration window open, event not full. Any failure leaves the
    database untouched.
    """
    now = now or utcnow()
    event = get_event(db, event_id)
    user = _get_user(db, user_email)

    if _active_registration(db, event_id, user.user_id):
        raise ConflictError(ALREADY_REGISTERED)

    if not event.registration_open_at(now):
        logger.warning("Refused registration of %s for event %s: window closed", user_email, event_id)
        raise ConflictError(REGISTRATION_CLOSED)

    # Redundant with the window check unless the waitlist flag is set
    if event.is_full:
        logger.warning("Refused registration of %s for event %s: full", user_email, event_id)
        raise ConflictError(EVENT_FULL)

    with atomic(db):
        if not _claim_seat(db, event_id):
            logger.warning("Refused registration of %s for event %s: seat taken concurrently", user_email, event_id)
            raise ConflictError(EVENT_FULL)

        registration = EventRegistration(
            event_id=event_id,
            user_id=user.user_id,
            registration_date=now,
            attendance_status=AttendanceStatus.registered,
            is_cancelled=False,
            is_waitlisted=False,
            special_requirements=special_requirements,
            notes=notes,
        )
        db.add(registration)
        try:
            db.flush()
        except IntegrityError:
            raise ConflictError(ALREADY_REGISTERED)

    db.refresh(registration)
    logger.info("Registered %s for event %s (%s)", user_email, event_id, registration.registration_id)
    return registration


def cancel_registration(
    db: Session,
    event_id: str,
    user_email: str,
    reason: str = "Cancelled by user",
    now: Optional[datetime] = None,
) -> EventRegistration:
    """Cancel the user's active registration and release its seat."""
    user = _get_user(db, user_email)
    registration = _active_registration(db, event_id, user.user_id)
    if not registration:
        raise NotFoundError("Registration not found")

    with atomic(db):
        registration.cancel(reason, now=now or utcnow())
        # Released whether or not the registration was waitlisted
        _release_seat(db, event_id)

    db.refresh(registration)
    logger.info("Cancelled registration %s of %s for event %s", registration.registration_id, user_email, event_id)
    return registration


def list_event_registrations(db: Session, event_id: str) -> list[EventRegistration]:
    """Active registrations for an event, oldest first."""
    get_event(db, event_id)
    return (
        db.query(EventRegistration)
        .filter(
            EventRegistration.event_id == event_id,
            EventRegistration.is_cancelled.is_(False),
        )
        .order_by(EventRegistration.registration_date.asc())
        .all()
    )


def list_user_registrations(db: Session, user_email: str, now: Optional[datetime] = None) -> list[EventRegistration]:
    """The user's active registrations for events still ahead, soonest first."""
    user = _get_user(db, user_email)
    return (
        db.query(EventRegistration)
        .join(Event, Event.event_id == EventRegistration.event_id)
        .filter(
            EventRegistration.user_id == user.user_id,
            EventRegistration.is_cancelled.is_(False),
            Event.date_time > (now or utcnow()),
        )
        .order_by(Event.date_time.asc())
        .all()
    )


def _get_registration(db: Session, registration_id: str) -> EventRegistration:
    registration = (
        db.query(EventRegistration)
        .filter(EventRegistration.registration_id == registration_id)
        .first()
    )
    if not registration:
        raise NotFoundError("Registration not found")
    if registration.is_cancelled:
        raise ConflictError("Registration is cancelled")
    return registration


def mark_attended(db: Session, registration_id: str, admin_email: str) -> EventRegistration:
    """Check a registrant in (admin only)."""
    admin = get_admin(db, admin_email)
    registration = _get_registration(db, registration_id)
    with atomic(db):
        registration.mark_attended(admin.user_id)
    db.refresh(registration)
    logger.info("Registration %s marked attended by %s", registration_id, admin.email)
    return registration


def mark_no_show(db: Session, registration_id: str, admin_email: str) -> EventRegistration:
    """Record that a registrant did not turn up (admin only)."""
    admin = get_admin(db, admin_email)
    registration = _get_registration(db, registration_id)
    with atomic(db):
        registration.mark_no_show()
    db.refresh(registration)
    logger.info("Registration %s marked no-show by %s", registration_id, admin.email)
    return registration
