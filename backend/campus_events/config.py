"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    APP_NAME: str = "Campus Events"
    DATABASE_URL: str = "sqlite:///./campus_events.db"
    CORS_ORIGINS: str = "http://localhost:5173"
    TIMEZONE: str = "Africa/Nairobi"  # IANA tz used for "today" checks
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
