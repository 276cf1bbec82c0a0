"""Pydantic schemas for EventTypes."""
from __future__ import annotations
from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field


class EventTypeCreate(BaseModel):
    name: str
    description: Optional[str] = None
    slug: Optional[str] = None
    icon_class: Optional[str] = None
    color_hex: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    display_order: int = 0
    requires_registration: bool = True
    has_capacity_limit: bool = False
    default_duration_minutes: Optional[int] = Field(None, ge=1)
    is_featured: bool = False


class EventTypeUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    icon_class: Optional[str] = None
    color_hex: Optional[str] = Field(None, pattern=r"^#[0-9A-Fa-f]{6}$")
    display_order: Optional[int] = None
    requires_registration: Optional[bool] = None
    has_capacity_limit: Optional[bool] = None
    default_duration_minutes: Optional[int] = Field(None, ge=1)
    is_active: Optional[bool] = None
    is_featured: Optional[bool] = None


class EventTypeOut(BaseModel):
    event_type_id: str
    name: str
    description: Optional[str] = None
    slug: Optional[str] = None
    icon_class: Optional[str] = None
    color_hex: Optional[str] = None
    display_order: int
    requires_registration: bool
    has_capacity_limit: bool
    default_duration_minutes: Optional[int] = None
    is_active: bool
    is_featured: bool
    event_count: int
    total_attendees: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
