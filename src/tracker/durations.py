"""Duration arithmetic and human formatting."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from tracker.models import TrackingEntry


def format_duration_human(duration: timedelta) -> str:
    """Format a duration like '1 hour(s), 2 minute(s) and 5 second(s)'.

    Components are extracted from whole seconds by chained division and
    remainder. Each threshold check is strict, so a remainder of exactly
    3600 or 60 seconds produces no component for that unit (3600s formats
    as 'none', 3660s as '1 hour(s)').

    Args:
        duration: Elapsed time. Negative values are treated as zero.

    Returns:
        Human readable string, or 'none' when no component is non-zero.
    """
    seconds = max(int(duration.total_seconds()), 0)
    components = []

    if seconds > 3600:
        components.append(f"{seconds // 3600} hour(s)")
    seconds %= 3600

    if seconds > 60:
        components.append(f"{seconds // 60} minute(s)")
    seconds %= 60

    if seconds > 0:
        components.append(f"{seconds} second(s)")

    if not components:
        return "none"
    if len(components) == 1:
        return components[0]
    return f"{', '.join(components[:-1])} and {components[-1]}"


def total_elapsed(entries: Iterable[TrackingEntry], now: datetime) -> timedelta:
    """Sum elapsed time of entries, measuring open ones up to ``now``."""
    return sum((entry.elapsed(now) for entry in entries), timedelta(0))


def start_of_day(now: datetime) -> datetime:
    """Midnight UTC of the day containing ``now``."""
    now = now.astimezone(timezone.utc)
    return now.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(now: datetime) -> datetime:
    """Monday midnight UTC of the ISO week containing ``now``."""
    return start_of_day(now) - timedelta(days=now.astimezone(timezone.utc).weekday())
