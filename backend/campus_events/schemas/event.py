"""Pydantic schemas for Events."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from campus_events.utils import as_utc

_DATETIME_FIELDS = ("date_time", "registration_opens_at", "registration_closes_at")


class _EventFields(BaseModel):
    @field_validator(*_DATETIME_FIELDS, mode="after", check_fields=False)
    @classmethod
    def normalize_utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @model_validator(mode="after")
    def check_registration_window(self):
        opens_at = getattr(self, "registration_opens_at", None)
        closes_at = getattr(self, "registration_closes_at", None)
        if opens_at and closes_at and closes_at < opens_at:
            raise ValueError("registration_closes_at must not be before registration_opens_at")
        return self


class EventCreate(_EventFields):
    title: str = Field(..., min_length=1, max_length=200)
    description: str
    date_time: datetime
    location: str = Field(..., min_length=1, max_length=200)
    event_type_id: str
    slug: Optional[str] = None
    max_attendees: Optional[int] = Field(None, ge=1)
    waitlist_enabled: bool = False
    featured_image: Optional[str] = None
    featured_image_alt: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=1)
    meeting_link: Optional[str] = None
    requirements: Optional[str] = None
    agenda: Optional[str] = None
    registration_required: bool = True
    registration_opens_at: Optional[datetime] = None
    registration_closes_at: Optional[datetime] = None
    is_published: bool = False
    is_featured: bool = False


class EventUpdate(_EventFields):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    date_time: Optional[datetime] = None
    location: Optional[str] = Field(None, min_length=1, max_length=200)
    event_type_id: Optional[str] = None
    max_attendees: Optional[int] = Field(None, ge=1)
    waitlist_enabled: Optional[bool] = None
    featured_image: Optional[str] = None
    featured_image_alt: Optional[str] = None
    duration_minutes: Optional[int] = Field(None, ge=1)
    meeting_link: Optional[str] = None
    requirements: Optional[str] = None
    agenda: Optional[str] = None
    registration_required: Optional[bool] = None
    registration_opens_at: Optional[datetime] = None
    registration_closes_at: Optional[datetime] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None

    @field_validator(
        "title", "description", "date_time", "location", "event_type_id",
        "waitlist_enabled", "registration_required", "is_published", "is_featured",
    )
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may not be null")
        return value


class EventCancelRequest(BaseModel):
    reason: Optional[str] = None


class EventOut(BaseModel):
    event_id: str
    title: str
    description: str
    date_time: datetime
    end_time: datetime
    location: str
    slug: Optional[str] = None
    event_type_id: str
    creator_id: str
    max_attendees: Optional[int] = None
    current_attendees: int
    available_seats: Optional[int] = None
    waitlist_enabled: bool
    featured_image: Optional[str] = None
    featured_image_alt: Optional[str] = None
    duration_minutes: Optional[int] = None
    meeting_link: Optional[str] = None
    requirements: Optional[str] = None
    agenda: Optional[str] = None
    registration_required: bool
    registration_opens_at: Optional[datetime] = None
    registration_closes_at: Optional[datetime] = None
    is_published: bool
    is_featured: bool
    is_cancelled: bool
    cancellation_reason: Optional[str] = None
    is_full: bool
    is_registration_open: bool
    is_upcoming: bool
    is_past: bool
    is_today: bool
    view_count: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
