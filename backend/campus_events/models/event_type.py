"""EventType ORM model: category catalog with event bookkeeping counters."""
import uuid
from sqlalchemy import Column, String, Integer, Boolean, DateTime
from sqlalchemy.sql import func
from campus_events.database import Base


class EventType(Base):
    __tablename__ = "event_types"

    event_type_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False, unique=True)
    description = Column(String(500), nullable=True)
    slug = Column(String(100), nullable=True)
    icon_class = Column(String(50), nullable=True)
    color_hex = Column(String(7), nullable=True)
    display_order = Column(Integer, nullable=False, default=0)
    requires_registration = Column(Boolean, nullable=False, default=True)
    has_capacity_limit = Column(Boolean, nullable=False, default=False)
    default_duration_minutes = Column(Integer, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    is_featured = Column(Boolean, nullable=False, default=False)
    event_count = Column(Integer, nullable=False, default=0)
    total_attendees = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def increment_event_count(self) -> None:
        self.event_count = (self.event_count or 0) + 1

    def decrement_event_count(self) -> None:
        if self.event_count and self.event_count > 0:
            self.event_count -= 1
