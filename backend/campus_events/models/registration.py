"""EventRegistration ORM model."""
import enum
import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import Column, String, Integer, Boolean, DateTime, ForeignKey, Index, Enum as SAEnum, text

from campus_events.database import Base
from campus_events.utils import utcnow


class AttendanceStatus(str, enum.Enum):
    registered = "REGISTERED"
    attended = "ATTENDED"
    no_show = "NO_SHOW"
    cancelled = "CANCELLED"


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    registration_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    event_id = Column(String(36), ForeignKey("events.event_id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False, index=True)
    registration_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    attendance_status = Column(
        SAEnum(AttendanceStatus, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AttendanceStatus.registered,
    )

    # Waitlist columns are stored and returned but nothing assigns or advances them
    is_waitlisted = Column(Boolean, nullable=False, default=False)
    waitlist_position = Column(Integer, nullable=True)

    special_requirements = Column(String(500), nullable=True)
    notes = Column(String(1000), nullable=True)
    reminder_sent = Column(Boolean, nullable=False, default=False)
    confirmation_sent = Column(Boolean, nullable=False, default=False)

    checked_in = Column(Boolean, nullable=False, default=False)
    check_in_time = Column(DateTime(timezone=True), nullable=True)
    checked_in_by = Column(String(36), ForeignKey("users.user_id"), nullable=True)

    is_cancelled = Column(Boolean, nullable=False, default=False)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancellation_reason = Column(String(500), nullable=True)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    __table_args__ = (
        # At most one non-cancelled registration per (event, user)
        Index(
            "uq_event_registrations_active",
            "event_id",
            "user_id",
            unique=True,
            sqlite_where=text("is_cancelled = 0"),
            postgresql_where=text("is_cancelled = false"),
        ),
    )

    @property
    def is_active(self) -> bool:
        return not self.is_cancelled and self.attendance_status == AttendanceStatus.registered

    def cancel(self, reason: Optional[str], now: Optional[datetime] = None) -> None:
        self.is_cancelled = True
        self.cancelled_at = now or utcnow()
        self.cancellation_reason = reason
        self.attendance_status = AttendanceStatus.cancelled

    def mark_attended(self, admin_user_id: str, now: Optional[datetime] = None) -> None:
        self.attendance_status = AttendanceStatus.attended
        self.checked_in = True
        self.check_in_time = now or utcnow()
        self.checked_in_by = admin_user_id

    def mark_no_show(self) -> None:
        self.attendance_status = AttendanceStatus.no_show
        self.checked_in = False
