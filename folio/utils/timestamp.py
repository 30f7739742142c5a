"""Timestamps for session directories, save records and status output."""

from datetime import datetime
from typing import Optional

# (seconds per unit, suffix), largest first
AGE_UNITS = ((86400, "d"), (3600, "h"), (60, "m"))


def now() -> str:
    """Current local time as a directory-safe stamp (YYYYmmdd_HHMMSS)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")


def now_exact() -> str:
    """Current local time as ISO 8601 with microseconds."""
    return datetime.now().isoformat()


def format_age(moment: datetime, reference: Optional[datetime] = None) -> str:
    """
    Describe how long ago a moment was, e.g. "just now", "42s ago", "3h ago".

    Uses the largest whole unit (days, hours, minutes, seconds). Moments after
    ``reference`` (clock skew between machines) read as "just now".

    Args:
        moment: The time to describe
        reference: Time to measure from (defaults to now)
    """
    seconds = int(((reference or datetime.now()) - moment).total_seconds())
    if seconds < 1:
        return "just now"

    for unit_seconds, suffix in AGE_UNITS:
        if seconds >= unit_seconds:
            return f"{seconds // unit_seconds}{suffix} ago"
    return f"{seconds}s ago"
