"""
Digest Schedule Preview

Display logic for the digest settings screen. Nothing here schedules
anything; it only describes what the stored settings would do.

Preview entries per frequency:
- daily:        "Every day at 09:00",            up to max_items
- weekly:       "Every Monday at 09:00",         up to max_items * 7
- twice-weekly: "Monday and Thursday at 09:00",  up to max_items * 3.5 (half-up)

A disabled digest, or a frequency outside the supported set, previews as
an empty list.
"""

from datetime import datetime, timedelta, timezone as dt_timezone
from typing import Optional

from personalization.core.defaults import DIGEST_MAX_ITEMS_BOUNDS, TWICE_WEEKLY_DAYS
from personalization.core.logging import get_logger
from personalization.schemas.digest import (
    DigestFrequency,
    DigestSettingsBody,
    ScheduleEntry,
    SchedulePreview,
    Weekday,
)
from personalization.services.bounds import round_half_up
from personalization.services.quiet_hours import resolve_zone

logger = get_logger(__name__)

TWICE_WEEKLY_MULTIPLIER = 3.5
WEEKLY_MULTIPLIER = 7


def get_schedule_preview(digest: DigestSettingsBody) -> list[ScheduleEntry]:
    """
    Describe the delivery schedule of a digest configuration.

    Args:
        digest: Digest settings (stored or unsaved)

    Returns:
        Zero or one schedule entries
    """
    if not digest.enabled:
        return []

    frequency = digest.frequency
    at = digest.delivery_time

    if frequency == DigestFrequency.DAILY:
        return [
            ScheduleEntry(
                type="Daily Digest",
                time=f"Every day at {at}",
                items=f"Up to {digest.max_items} items",
            )
        ]

    if frequency == DigestFrequency.WEEKLY:
        return [
            ScheduleEntry(
                type="Weekly Digest",
                time=f"Every {Weekday(digest.weekly_day).display_name} at {at}",
                items=f"Up to {digest.max_items * WEEKLY_MULTIPLIER} items",
            )
        ]

    if frequency == DigestFrequency.TWICE_WEEKLY:
        first, second = (Weekday(day).display_name for day in TWICE_WEEKLY_DAYS)
        items = round_half_up(digest.max_items * TWICE_WEEKLY_MULTIPLIER)
        return [
            ScheduleEntry(
                type="Bi-weekly Digest",
                time=f"{first} and {second} at {at}",
                items=f"Up to {items} items each",
            )
        ]

    logger.warning("unknown_digest_frequency", frequency=str(frequency))
    return []


def _delivery_days(digest: DigestSettingsBody) -> Optional[set[int]]:
    """Weekday indexes the digest goes out on; None for unknown frequencies."""
    if digest.frequency == DigestFrequency.DAILY:
        return set(range(7))
    if digest.frequency == DigestFrequency.WEEKLY:
        return {Weekday(digest.weekly_day).index}
    if digest.frequency == DigestFrequency.TWICE_WEEKLY:
        return {Weekday(day).index for day in TWICE_WEEKLY_DAYS}
    return None


def calculate_next_delivery(
    digest: DigestSettingsBody,
    now: Optional[datetime] = None,
) -> Optional[datetime]:
    """
    Next instant the digest would be delivered.

    Args:
        digest: Digest settings
        now: Reference instant; naive values are taken as UTC. Defaults to now.

    Returns:
        Timezone-aware datetime in the digest timezone, or None when the
        digest is disabled or its frequency is unknown. A delivery time equal
        to `now` counts as already passed.
    """
    if not digest.enabled:
        return None

    days = _delivery_days(digest)
    if not days:
        return None

    if now is None:
        now = datetime.now(dt_timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=dt_timezone.utc)

    zone = resolve_zone(digest.timezone)
    local_now = now.astimezone(zone)
    hour, minute = (int(part) for part in digest.delivery_time.split(":"))

    # At most 7 days ahead, plus today
    for offset in range(8):
        day = local_now.date() + timedelta(days=offset)
        if day.weekday() not in days:
            continue
        wall_clock = datetime(day.year, day.month, day.day, hour, minute, tzinfo=zone)
        # A time skipped by a DST jump becomes the real instant it maps to
        candidate = wall_clock.astimezone(dt_timezone.utc).astimezone(zone)
        if candidate > local_now:
            return candidate

    return None


def validate_digest_settings(digest: DigestSettingsBody) -> list[str]:
    """Range check for digest settings. Empty list when valid."""
    low, high = DIGEST_MAX_ITEMS_BOUNDS
    errors: list[str] = []
    if not low <= digest.max_items <= high:
        errors.append(f"Invalid max items: must be between {low} and {high}")
    return errors


def build_schedule_preview(
    digest: DigestSettingsBody,
    now: Optional[datetime] = None,
) -> SchedulePreview:
    """Preview entries together with the next delivery instant."""
    return SchedulePreview(
        entries=get_schedule_preview(digest),
        next_delivery=calculate_next_delivery(digest, now),
    )
