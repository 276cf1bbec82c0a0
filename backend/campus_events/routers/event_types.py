"""Event type catalog API routes."""
import logging
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.models.event_type import EventType
from campus_events.schemas.event_type import EventTypeCreate, EventTypeUpdate, EventTypeOut
from campus_events.utils import slugify

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/", response_model=EventTypeOut, status_code=status.HTTP_201_CREATED)
def create_event_type(payload: EventTypeCreate, db: Session = Depends(get_db)):
    """Create an event type; the slug is derived from the name when omitted."""
    if db.query(EventType).filter(EventType.name == payload.name).first():
        raise HTTPException(status_code=409, detail="Event type name already exists")
    event_type = EventType(**payload.model_dump())
    if not event_type.slug:
        event_type.slug = slugify(event_type.name)
    db.add(event_type)
    db.commit()
    db.refresh(event_type)
    logger.info("Created event type '%s' (%s)", event_type.name, event_type.event_type_id)
    return event_type


@router.get("/", response_model=list[EventTypeOut])
def list_event_types(include_inactive: bool = Query(False), db: Session = Depends(get_db)):
    """List event types in display order."""
    query = db.query(EventType)
    if not include_inactive:
        query = query.filter(EventType.is_active.is_(True))
    return query.order_by(EventType.display_order, EventType.name).all()


@router.get("/{event_type_id}", response_model=EventTypeOut)
def get_event_type(event_type_id: str, db: Session = Depends(get_db)):
    event_type = db.query(EventType).filter(EventType.event_type_id == event_type_id).first()
    if not event_type:
        raise HTTPException(status_code=404, detail="Event type not found")
    return event_type


@router.patch("/{event_type_id}", response_model=EventTypeOut)
def update_event_type(event_type_id: str, payload: EventTypeUpdate, db: Session = Depends(get_db)):
    """Partial update. Counters are maintained by the event service only."""
    event_type = db.query(EventType).filter(EventType.event_type_id == event_type_id).first()
    if not event_type:
        raise HTTPException(status_code=404, detail="Event type not found")
    for field, value in payload.model_dump(exclude_unset=True).items():
        setattr(event_type, field, value)
    db.commit()
    db.refresh(event_type)
    logger.info("Updated event type %s", event_type_id)
    return event_type
