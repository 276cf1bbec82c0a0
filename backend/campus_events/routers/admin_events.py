"""Admin event API routes: event management and attendance tracking."""
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.schemas.event import EventCreate, EventUpdate, EventOut, EventCancelRequest
from campus_events.schemas.registration import RegistrationOut
from campus_events.services import event_service, registration_service

router = APIRouter()


@router.post("/", response_model=EventOut, status_code=status.HTTP_201_CREATED)
def create_event(
    payload: EventCreate,
    admin_email: str = Query(..., description="Email of the admin creating the event"),
    db: Session = Depends(get_db),
):
    """Create a new event (admin only)."""
    return event_service.create_event(db, admin_email, **payload.model_dump())


@router.get("/all", response_model=list[EventOut])
def list_all_events(db: Session = Depends(get_db)):
    """All events including drafts and cancelled ones, newest first."""
    return event_service.list_all_events(db)


@router.get("/{event_id}", response_model=EventOut)
def get_event(event_id: str, db: Session = Depends(get_db)):
    return event_service.get_event(db, event_id)


@router.put("/{event_id}", response_model=EventOut)
def update_event(event_id: str, payload: EventUpdate, db: Session = Depends(get_db)):
    """Partially update an event."""
    return event_service.update_event(db, event_id, payload.model_dump(exclude_unset=True))


@router.put("/{event_id}/cancel", response_model=EventOut)
def cancel_event(event_id: str, payload: EventCancelRequest, db: Session = Depends(get_db)):
    """Cancel an event (soft)."""
    return event_service.cancel_event(db, event_id, payload.reason)


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_event(event_id: str, db: Session = Depends(get_db)):
    """Delete an event and its registrations."""
    event_service.delete_event(db, event_id)


@router.get("/{event_id}/registrations", response_model=list[RegistrationOut])
def list_event_registrations(event_id: str, db: Session = Depends(get_db)):
    """Active registrations for an event in sign-up order."""
    return registration_service.list_event_registrations(db, event_id)


@router.post("/registrations/{registration_id}/attended", response_model=RegistrationOut)
def mark_attended(
    registration_id: str,
    admin_email: str = Query(..., description="Email of the admin checking the registrant in"),
    db: Session = Depends(get_db),
):
    return registration_service.mark_attended(db, registration_id, admin_email)


@router.post("/registrations/{registration_id}/no-show", response_model=RegistrationOut)
def mark_no_show(
    registration_id: str,
    admin_email: str = Query(..., description="Email of the admin recording the no-show"),
    db: Session = Depends(get_db),
):
    return registration_service.mark_no_show(db, registration_id, admin_email)
