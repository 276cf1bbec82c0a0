"""Admin dashboard statistics."""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from campus_events.database import get_db
from campus_events.models.registration import EventRegistration
from campus_events.models.user import User, UserRole
from campus_events.services import event_service

router = APIRouter()


@router.get("/stats")
def get_dashboard_stats(db: Session = Depends(get_db)):
    """Headline counts for the admin dashboard."""
    active_users = db.query(User).filter(User.is_active.is_(True))
    return {
        "total_users": active_users.count(),
        "total_students": active_users.filter(User.role == UserRole.student).count(),
        "total_admins": active_users.filter(User.role == UserRole.admin).count(),
        "upcoming_events": event_service.count_upcoming_events(db),
        "active_registrations": (
            db.query(EventRegistration).filter(EventRegistration.is_cancelled.is_(False)).count()
        ),
    }
