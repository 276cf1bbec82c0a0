"""Pydantic schemas for Users."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel

from campus_events.models.user import UserRole


class UserCreate(BaseModel):
    name: str
    email: str
    student_id: Optional[str] = None
    course: Optional[str] = None
    year: Optional[int] = None
    role: UserRole = UserRole.student


class UserUpdate(BaseModel):
    name: Optional[str] = None
    student_id: Optional[str] = None
    course: Optional[str] = None
    year: Optional[int] = None
    role: Optional[UserRole] = None
    is_active: Optional[bool] = None


class UserOut(BaseModel):
    user_id: str
    name: str
    email: str
    student_id: Optional[str] = None
    course: Optional[str] = None
    year: Optional[int] = None
    role: UserRole
    is_active: bool
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
