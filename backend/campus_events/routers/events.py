"""Public event API routes: listings and self-service registration."""
from typing import Optional
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.schemas.event import EventOut
from campus_events.schemas.registration import RegistrationCreate, RegistrationOut
from campus_events.services import event_service, registration_service

router = APIRouter()


@router.get("/", response_model=list[EventOut])
def list_upcoming_events(db: Session = Depends(get_db)):
    """Published, non-cancelled events still ahead, soonest first."""
    return event_service.list_upcoming_events(db)


@router.get("/past", response_model=list[EventOut])
def list_past_events(db: Session = Depends(get_db)):
    return event_service.list_past_events(db)


@router.get("/featured", response_model=list[EventOut])
def list_featured_events(db: Session = Depends(get_db)):
    return event_service.list_featured_events(db)


@router.get("/type/{event_type_id}", response_model=list[EventOut])
def list_events_by_type(event_type_id: str, db: Session = Depends(get_db)):
    return event_service.list_events_by_type(db, event_type_id)


@router.get("/my-registrations", response_model=list[RegistrationOut])
def list_my_registrations(
    user_email: str = Query(..., description="Email of the registering user"),
    db: Session = Depends(get_db),
):
    """Upcoming active registrations of a user, ordered by event time."""
    return registration_service.list_user_registrations(db, user_email)


@router.get("/{slug}", response_model=EventOut)
def get_event_by_slug(slug: str, db: Session = Depends(get_db)):
    """Fetch a published event by slug (counts a view)."""
    return event_service.get_event_by_slug(db, slug)


@router.post("/{event_id}/register", response_model=RegistrationOut, status_code=status.HTTP_201_CREATED)
def register_for_event(
    event_id: str,
    user_email: str = Query(..., description="Email of the registering user"),
    payload: Optional[RegistrationCreate] = Body(None),
    db: Session = Depends(get_db),
):
    """Register a user for an event."""
    payload = payload or RegistrationCreate()
    return registration_service.register_for_event(
        db=db,
        event_id=event_id,
        user_email=user_email,
        special_requirements=payload.special_requirements,
        notes=payload.notes,
    )


@router.delete("/{event_id}/register", status_code=status.HTTP_200_OK)
def cancel_registration(
    event_id: str,
    user_email: str = Query(..., description="Email of the registered user"),
    db: Session = Depends(get_db),
):
    """Cancel a user's registration and free the seat."""
    registration = registration_service.cancel_registration(db=db, event_id=event_id, user_email=user_email)
    return {"status": "ok", "registration_id": registration.registration_id}
