"""Event ORM model with capacity and registration-window predicates.

The predicates are computed on every read and never stored. ``now`` can be
passed explicitly so callers evaluate a whole request against one instant.
"""
import uuid
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy import Column, String, Text, DateTime, Integer, Boolean, ForeignKey, Index
from sqlalchemy.sql import func

from campus_events.database import Base
from campus_events.utils import as_utc, local_date, utcnow

DEFAULT_DURATION = timedelta(hours=1)


class Event(Base):
    __tablename__ = "events"

    event_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    date_time = Column(DateTime(timezone=True), nullable=False)
    location = Column(String(200), nullable=False)
    slug = Column(String(200), nullable=True, index=True)
    event_type_id = Column(String(36), ForeignKey("event_types.event_type_id"), nullable=False)
    creator_id = Column(String(36), ForeignKey("users.user_id"), nullable=False)

    # Capacity
    max_attendees = Column(Integer, nullable=True)  # NULL = unlimited
    current_attendees = Column(Integer, nullable=False, default=0)
    waitlist_enabled = Column(Boolean, nullable=False, default=False)

    # Details
    featured_image = Column(String(500), nullable=True)
    featured_image_alt = Column(String(200), nullable=True)
    duration_minutes = Column(Integer, nullable=True)
    meeting_link = Column(String(500), nullable=True)
    requirements = Column(String(1000), nullable=True)
    agenda = Column(Text, nullable=True)

    # Registration window
    registration_required = Column(Boolean, nullable=False, default=True)
    registration_opens_at = Column(DateTime(timezone=True), nullable=True)
    registration_closes_at = Column(DateTime(timezone=True), nullable=True)

    # Publishing
    is_published = Column(Boolean, nullable=False, default=False)
    is_featured = Column(Boolean, nullable=False, default=False)
    is_cancelled = Column(Boolean, nullable=False, default=False)
    cancellation_reason = Column(String(500), nullable=True)

    view_count = Column(Integer, nullable=False, default=0)
    share_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        Index("ix_events_published_date", "is_published", "date_time"),
    )

    # ── Capacity ─────────────────────────────────────────────────────
    @property
    def is_full(self) -> bool:
        if self.max_attendees is None:
            return False
        return (self.current_attendees or 0) >= self.max_attendees

    @property
    def available_seats(self) -> Optional[int]:
        if self.max_attendees is None:
            return None
        return self.max_attendees - (self.current_attendees or 0)

    # ── Registration window ──────────────────────────────────────────
    def registration_open_at(self, now: Optional[datetime] = None) -> bool:
        now = as_utc(now) if now else utcnow()
        opens_at = as_utc(self.registration_opens_at)
        closes_at = as_utc(self.registration_closes_at)

        if opens_at is not None and now < opens_at:
            return False
        if closes_at is not None and now > closes_at:
            return False
        if self.is_cancelled or (self.is_full and not self.waitlist_enabled):
            return False
        return bool(self.registration_required and self.is_published)

    @property
    def is_registration_open(self) -> bool:
        return self.registration_open_at()

    # ── Schedule ─────────────────────────────────────────────────────
    @property
    def end_time(self) -> datetime:
        start = as_utc(self.date_time)
        if self.duration_minutes is None:
            return start + DEFAULT_DURATION
        return start + timedelta(minutes=self.duration_minutes)

    def is_upcoming_at(self, now: Optional[datetime] = None) -> bool:
        return as_utc(self.date_time) > (as_utc(now) if now else utcnow())

    def is_past_at(self, now: Optional[datetime] = None) -> bool:
        return as_utc(self.date_time) < (as_utc(now) if now else utcnow())

    def is_today_at(self, now: Optional[datetime] = None) -> bool:
        return local_date(self.date_time) == local_date(now or utcnow())

    @property
    def is_upcoming(self) -> bool:
        return self.is_upcoming_at()

    @property
    def is_past(self) -> bool:
        return self.is_past_at()

    @property
    def is_today(self) -> bool:
        return self.is_today_at()

    def cancel(self, reason: Optional[str]) -> None:
        self.is_cancelled = True
        self.cancellation_reason = reason
