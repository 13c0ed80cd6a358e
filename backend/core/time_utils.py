"""
Timestamp helpers.

Every timestamp is stored as naive UTC. Aware datetimes coming in from the
API are converted to UTC and stripped of tzinfo before they reach the database.
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is None:
        return None
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
