"""Time and slug helpers shared by models and services."""
import re
from datetime import date, datetime
from typing import Optional

import pytz

from campus_events.config import settings


def utcnow() -> datetime:
    return datetime.now(pytz.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Normalize a datetime to aware UTC.

    SQLite hands back naive values; those are taken to already be UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def local_date(value: datetime) -> date:
    """Calendar date of ``value`` in the association's timezone."""
    return as_utc(value).astimezone(pytz.timezone(settings.TIMEZONE)).date()


def slugify(text: str) -> str:
    """'React Workshop 2024!' -> 'react-workshop-2024'."""
    slug = re.sub(r"[^a-z0-9\s-]", "", text.lower())
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-")
