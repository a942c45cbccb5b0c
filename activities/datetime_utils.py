# activities/datetime_utils.py
"""
Centralized datetime handling for Huddle activities.

All "now" lookups in the activities app go through here so callers
(recommendations, participation, tests) can inject a fixed clock.
"""
from datetime import datetime
from typing import Optional
from django.utils import timezone


def now() -> datetime:
    """
    Get current datetime (timezone-aware when USE_TZ=True).

    This is the single source of truth for "now" in the activities app.
    """
    return timezone.now()


def days_until(scheduled_at: Optional[datetime], current: Optional[datetime] = None) -> Optional[int]:
    """
    Whole days from `current` until `scheduled_at`.

    Partial days are truncated toward the past, so an activity 7 days and
    23 hours away is 7 days away. Returns None for unscheduled activities.
    """
    if scheduled_at is None:
        return None
    current = current or now()
    return (scheduled_at - current).days
