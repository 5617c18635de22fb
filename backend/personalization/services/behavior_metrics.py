"""
Behavior Metrics Updates

Merges a partial reading-behavior observation into summary preferences.

Clamping rules:
- average_reading_speed: clamped to READING_SPEED_BOUNDS, then rounded to whole wpm
- engagement_with_summaries: clamped to ENGAGEMENT_BOUNDS
- preferred_summary_length: stored as given

The input record is never mutated; a new record is returned.
"""

from datetime import datetime, timezone
from typing import Optional

from personalization.core.defaults import ENGAGEMENT_BOUNDS, READING_SPEED_BOUNDS
from personalization.core.logging import get_logger
from personalization.schemas.summary import BehaviorMetricsUpdate, SummaryPreferences
from personalization.services.bounds import clamp

logger = get_logger(__name__)


def update_behavior_metrics(
    preferences: SummaryPreferences,
    update: BehaviorMetricsUpdate,
    now: Optional[datetime] = None,
) -> SummaryPreferences:
    """
    Apply a behavior observation to a copy of `preferences`.

    Args:
        preferences: Current summary preferences
        update: Fields to change; None fields are left alone
        now: Timestamp for last_updated (defaults to the current UTC time)

    Returns:
        Updated preferences. An empty update returns an unchanged copy.
    """
    updated = preferences.model_copy(deep=True)
    if update.is_empty():
        return updated

    metrics = updated.user_behavior_metrics

    if update.average_reading_speed is not None:
        metrics.average_reading_speed = round(
            clamp(update.average_reading_speed, *READING_SPEED_BOUNDS)
        )

    if update.preferred_summary_length is not None:
        metrics.preferred_summary_length = update.preferred_summary_length

    if update.engagement_with_summaries is not None:
        metrics.engagement_with_summaries = float(
            clamp(update.engagement_with_summaries, *ENGAGEMENT_BOUNDS)
        )

    metrics.last_updated = now or datetime.now(timezone.utc)

    logger.debug(
        "behavior_metrics_updated",
        user_id=updated.user_id,
        average_reading_speed=metrics.average_reading_speed,
        preferred_summary_length=metrics.preferred_summary_length.value,
        engagement_with_summaries=metrics.engagement_with_summaries,
    )
    return updated
