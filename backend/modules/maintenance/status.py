"""
Due-date classification for maintenance tasks.

Status is never stored; it is derived from due_at and the current time on
every read.
"""

import math
from datetime import datetime, timedelta
from typing import Optional

from core.base import TaskStatus

DAY = timedelta(days=1)


def derive_status(due_at: Optional[datetime], now: datetime, soon_days: int = 7) -> TaskStatus:
    if due_at is None:
        return TaskStatus.UNSCHEDULED
    if due_at < now:
        return TaskStatus.OVERDUE
    if due_at < now + timedelta(days=soon_days):
        return TaskStatus.SOON
    return TaskStatus.NORMAL


def days_until(due_at: Optional[datetime], now: datetime) -> Optional[int]:
    """Whole days to the due date, rounded down. Negative once overdue."""
    if due_at is None:
        return None
    return math.floor((due_at - now) / DAY)
