"""
Adaptive Summary Length

Adjusts a content type's base length tier using behavioral signals.

How It Works:
-------------
Each enabled signal casts one vote:

    reading speed     +1 if faster than fast_reader_wpm,  -1 if slower than slow_reader_wpm
    engagement        +1 if above high_engagement,        -1 if below low_engagement
    time available    +1 if >= long_time_minutes,         -1 if <= short_time_minutes

The votes are summed and the base tier index moves by that total, clamped
to [brief, comprehensive]. Summing before clamping makes the result
independent of the order signals are looked at, and several "longer"
votes can never push past the longest tier.

Example:
--------
    base = standard (index 1), fast reader (+1), high engagement (+1)
    -> index 3 -> comprehensive
"""

from typing import Optional

from pydantic import BaseModel

from personalization.core.config import settings
from personalization.core.logging import get_logger
from personalization.schemas.summary import (
    AdaptiveLengthContext,
    BehaviorMetrics,
    SummaryLength,
    SummaryPreferences,
)
from personalization.services.summary_parameters import resolve_base_length

logger = get_logger(__name__)


class AdaptiveThresholds(BaseModel):
    """Vote thresholds for the adaptive length calculation."""

    fast_reader_wpm: float = 250
    slow_reader_wpm: float = 150
    high_engagement: float = 0.7
    low_engagement: float = 0.3
    short_time_minutes: float = 2
    long_time_minutes: float = 15

    @classmethod
    def from_settings(cls) -> "AdaptiveThresholds":
        return cls(
            fast_reader_wpm=settings.ADAPTIVE_FAST_READER_WPM,
            slow_reader_wpm=settings.ADAPTIVE_SLOW_READER_WPM,
            high_engagement=settings.ADAPTIVE_HIGH_ENGAGEMENT,
            low_engagement=settings.ADAPTIVE_LOW_ENGAGEMENT,
            short_time_minutes=settings.ADAPTIVE_SHORT_TIME_MINUTES,
            long_time_minutes=settings.ADAPTIVE_LONG_TIME_MINUTES,
        )


def _vote(value: float, low: float, high: float) -> int:
    """+1 above `high`, -1 below `low`, 0 in between (bounds are neutral)."""
    if value > high:
        return 1
    if value < low:
        return -1
    return 0


def reading_speed_vote(metrics: BehaviorMetrics, thresholds: AdaptiveThresholds) -> int:
    return _vote(
        metrics.average_reading_speed,
        thresholds.slow_reader_wpm,
        thresholds.fast_reader_wpm,
    )


def engagement_vote(metrics: BehaviorMetrics, thresholds: AdaptiveThresholds) -> int:
    return _vote(
        metrics.engagement_with_summaries,
        thresholds.low_engagement,
        thresholds.high_engagement,
    )


def time_available_vote(minutes: float, thresholds: AdaptiveThresholds) -> int:
    # Inclusive at both bounds, unlike the other two signals
    if minutes <= thresholds.short_time_minutes:
        return -1
    if minutes >= thresholds.long_time_minutes:
        return 1
    return 0


def calculate_adaptive_length(
    preferences: SummaryPreferences,
    content_type: str,
    context: Optional[AdaptiveLengthContext] = None,
    thresholds: Optional[AdaptiveThresholds] = None,
) -> SummaryLength:
    """
    Compute the summary length tier for a content type.

    Args:
        preferences: The user's summary preferences
        content_type: Content type name (unknown types start from default_length)
        context: Optional per-request context (available reading time)
        thresholds: Vote thresholds; taken from settings when omitted

    Returns:
        The adjusted tier; the base tier when adaptation is disabled
    """
    base = resolve_base_length(preferences, content_type)
    adaptive = preferences.adaptive_settings
    if not adaptive.enabled:
        return base

    thresholds = thresholds or AdaptiveThresholds.from_settings()
    metrics = preferences.user_behavior_metrics
    votes: dict[str, int] = {}

    if adaptive.based_on_reading_speed:
        votes["reading_speed"] = reading_speed_vote(metrics, thresholds)
    if adaptive.based_on_engagement:
        votes["engagement"] = engagement_vote(metrics, thresholds)
    if (
        adaptive.based_on_time_available
        and context is not None
        and context.available_time_minutes is not None
    ):
        votes["time_available"] = time_available_vote(
            context.available_time_minutes, thresholds
        )

    delta = sum(votes.values())
    result = SummaryLength.from_index(base.index + delta)

    logger.debug(
        "adaptive_length_calculated",
        content_type=str(content_type),
        base_length=base.value,
        votes=votes,
        delta=delta,
        length=result.value,
    )
    return result
