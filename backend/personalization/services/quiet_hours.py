"""
Quiet Hours Evaluation

Decides whether a notification may fire at a given time of day.

Window semantics (minutes since midnight, half-open at the end):
- Same-day window  (start < end, e.g. 12:00 -> 14:00): blocked when start <= t < end
- Overnight window (start > end, e.g. 22:00 -> 08:00): blocked when t >= start or t < end
- Degenerate window (start == end): never blocks

Accepted time inputs:
- "HH:MM" string or datetime.time: already expressed in the quiet-hours timezone
- timezone-aware datetime: converted into the quiet-hours timezone
- naive datetime: interpreted in `timezone` (UTC if omitted), then converted
- None: the current instant
"""

from datetime import datetime, time, timezone as dt_timezone
from typing import Optional, Union
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from personalization.core.logging import get_logger
from personalization.schemas.notification import QuietHours

logger = get_logger(__name__)

TimeInput = Union[str, time, datetime, None]


def minutes_since_midnight(value: Union[str, time]) -> int:
    """Convert "HH:MM" (or a time) to minutes since midnight."""
    if isinstance(value, time):
        return value.hour * 60 + value.minute
    hours, minutes = value.split(":", 1)
    return int(hours) * 60 + int(minutes)


def resolve_zone(name: Optional[str]) -> ZoneInfo:
    """Resolve a zone name, falling back to UTC for unknown names."""
    if not name:
        return ZoneInfo("UTC")
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning("unknown_timezone_fallback_to_utc", timezone=name)
        return ZoneInfo("UTC")


def local_minutes(
    current_time: TimeInput,
    target_timezone: str,
    timezone: Optional[str] = None,
) -> int:
    """Minutes since midnight of `current_time`, expressed in `target_timezone`."""
    if isinstance(current_time, (str, time)):
        return minutes_since_midnight(current_time)

    if current_time is None:
        instant = datetime.now(dt_timezone.utc)
    elif current_time.tzinfo is None:
        instant = current_time.replace(tzinfo=resolve_zone(timezone))
    else:
        instant = current_time

    local = instant.astimezone(resolve_zone(target_timezone))
    return local.hour * 60 + local.minute


def is_within_window(minute: int, start: int, end: int) -> bool:
    """True when `minute` falls inside the [start, end) window."""
    if start == end:
        return False
    if start > end:
        return minute >= start or minute < end
    return start <= minute < end


def is_notification_allowed(
    quiet_hours: QuietHours,
    current_time: TimeInput = None,
    timezone: Optional[str] = None,
) -> bool:
    """
    Check whether notifications are allowed at `current_time`.

    Args:
        quiet_hours: The user's quiet-hours block
        current_time: Time to check (see module docstring for accepted forms)
        timezone: Zone of a naive datetime `current_time`

    Returns:
        False inside an enabled quiet-hours window, True otherwise
    """
    if not quiet_hours.enabled:
        return True

    minute = local_minutes(current_time, quiet_hours.timezone, timezone)
    blocked = is_within_window(
        minute,
        minutes_since_midnight(quiet_hours.start),
        minutes_since_midnight(quiet_hours.end),
    )

    logger.debug(
        "quiet_hours_evaluated",
        start=quiet_hours.start,
        end=quiet_hours.end,
        minute=minute,
        blocked=blocked,
    )
    return not blocked


def is_quiet_hours_active(
    quiet_hours: QuietHours,
    current_time: TimeInput = None,
    timezone: Optional[str] = None,
) -> bool:
    """True when quiet hours are enabled and currently suppressing notifications."""
    return quiet_hours.enabled and not is_notification_allowed(
        quiet_hours, current_time, timezone
    )
