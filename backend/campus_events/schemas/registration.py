"""Pydantic schemas for event registrations."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field

from campus_events.models.registration import AttendanceStatus


class RegistrationCreate(BaseModel):
    special_requirements: Optional[str] = Field(None, max_length=500)
    notes: Optional[str] = Field(None, max_length=1000)


class RegistrationOut(BaseModel):
    registration_id: str
    event_id: str
    user_id: str
    registration_date: datetime
    attendance_status: AttendanceStatus
    is_waitlisted: bool
    waitlist_position: Optional[int] = None
    special_requirements: Optional[str] = None
    notes: Optional[str] = None
    checked_in: bool
    check_in_time: Optional[datetime] = None
    checked_in_by: Optional[str] = None
    is_cancelled: bool
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None

    model_config = {"from_attributes": True}
