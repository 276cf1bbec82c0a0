"""User ORM model, the user directory consulted by registrations."""
import enum
import uuid
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Enum as SAEnum
from sqlalchemy.sql import func
from campus_events.database import Base


class UserRole(str, enum.Enum):
    student = "STUDENT"
    admin = "ADMIN"


class User(Base):
    __tablename__ = "users"

    user_id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False, default="")
    student_id = Column(String(50), nullable=True, unique=True)
    course = Column(String(100), nullable=True)
    year = Column(Integer, nullable=True)
    role = Column(
        SAEnum(UserRole, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.student,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin
