"""FastAPI application entry point."""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from campus_events.config import settings
from campus_events.database import Base, engine

# Import routers
from campus_events.routers import users, event_types, events, admin_events, dashboard

# Import all models so Base.metadata knows about them
from campus_events.models.user import User                       # noqa: F401
from campus_events.models.event_type import EventType            # noqa: F401
from campus_events.models.event import Event                     # noqa: F401
from campus_events.models.registration import EventRegistration  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.APP_NAME,
    description="Student association events: publishing, registration and attendance tracking",
    version="0.1.0",
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(","),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register routers
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(event_types.router, prefix="/api/event-types", tags=["EventTypes"])
app.include_router(events.router, prefix="/api/events", tags=["Events"])
app.include_router(admin_events.router, prefix="/api/admin/events", tags=["AdminEvents"])
app.include_router(dashboard.router, prefix="/api/admin/dashboard", tags=["Dashboard"])


@app.on_event("startup")
def on_startup():
    """Create database tables on startup (for SQLite dev mode)."""
    if settings.DATABASE_URL.startswith("sqlite"):
        Base.metadata.create_all(bind=engine)


@app.get("/api/health")
def health_check():
    return {"status": "ok"}
