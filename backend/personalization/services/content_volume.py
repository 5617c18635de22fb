"""
Content Volume

Daily item cap and priority ranking for delivered content.

Adaptive limit:
---------------
The daily limit scales with how the user consumes what they get:

    completion > 0.8 and engagement > 0.7    factor = 1 + 0.5 * (mean - 0.75) / 0.25
    completion < 0.3 or engagement < 0.3     factor = 0.7 + 0.3 * min(completion, engagement) / 0.3
    otherwise                                factor = 1

    adaptive limit = daily_limit * factor, rounded half-up

so engaged readers get up to 50% more and disengaged ones down to 70%.

Prioritization:
---------------
    priority = relevance_score * weight(type)      (unknown types weigh 0.5)

Items are ranked by priority, ties keeping their input order. Items below
priority_threshold are dropped before the list is cut to the adaptive limit.
"""

from datetime import datetime, timezone
from typing import Optional

from personalization.core.defaults import ENGAGEMENT_BOUNDS, FALLBACK_CONTENT_WEIGHT
from personalization.core.logging import get_logger
from personalization.schemas.content_volume import (
    ContentCandidate,
    ContentVolumeSettings,
    PrioritizedContent,
    VolumeMetricsUpdate,
)
from personalization.services.bounds import clamp, round_half_up

logger = get_logger(__name__)

HIGH_COMPLETION = 0.8
HIGH_ENGAGEMENT = 0.7
LOW_SIGNAL = 0.3
MAX_BOOST = 0.5
MAX_CUT = 0.3


def adaptive_factor(completion_rate: float, engagement_score: float) -> float:
    if completion_rate > HIGH_COMPLETION and engagement_score > HIGH_ENGAGEMENT:
        mean = (completion_rate + engagement_score) / 2
        return 1.0 + MAX_BOOST * (mean - 0.75) / 0.25
    if completion_rate < LOW_SIGNAL or engagement_score < LOW_SIGNAL:
        weakest = min(completion_rate, engagement_score)
        return (1.0 - MAX_CUT) + MAX_CUT * weakest / LOW_SIGNAL
    return 1.0


def calculate_adaptive_limit(settings: ContentVolumeSettings) -> int:
    """
    Items per day after behavioral adjustment.

    Returns:
        daily_limit unchanged when adaptation is disabled
    """
    if not settings.adaptive_enabled:
        return settings.daily_limit

    metrics = settings.user_behavior_metrics
    factor = adaptive_factor(metrics.completion_rate, metrics.engagement_score)
    limit = round_half_up(settings.daily_limit * factor)

    logger.debug(
        "adaptive_limit_calculated",
        daily_limit=settings.daily_limit,
        factor=factor,
        adaptive_limit=limit,
    )
    return limit


def update_volume_metrics(
    settings: ContentVolumeSettings,
    update: VolumeMetricsUpdate,
    now: Optional[datetime] = None,
) -> ContentVolumeSettings:
    """
    Apply a consumption observation to a copy of `settings`.

    Rates are clamped to [0, 1] and read time to >= 0. An empty update
    returns an unchanged copy.
    """
    updated = settings.model_copy(deep=True)
    if update.is_empty():
        return updated

    metrics = updated.user_behavior_metrics

    if update.average_read_time is not None:
        metrics.average_read_time = max(0.0, float(update.average_read_time))
    if update.completion_rate is not None:
        metrics.completion_rate = float(clamp(update.completion_rate, *ENGAGEMENT_BOUNDS))
    if update.engagement_score is not None:
        metrics.engagement_score = float(clamp(update.engagement_score, *ENGAGEMENT_BOUNDS))

    metrics.last_updated = now or datetime.now(timezone.utc)

    logger.debug(
        "volume_metrics_updated",
        user_id=updated.user_id,
        completion_rate=metrics.completion_rate,
        engagement_score=metrics.engagement_score,
    )
    return updated


def priority_score(settings: ContentVolumeSettings, candidate: ContentCandidate) -> float:
    weight = settings.content_type_weights.get(candidate.type, FALLBACK_CONTENT_WEIGHT)
    return candidate.relevance_score * weight


def prioritize_content(
    settings: ContentVolumeSettings,
    candidates: list[ContentCandidate],
) -> list[PrioritizedContent]:
    """
    Rank, filter and cut a candidate list.

    Args:
        settings: The user's content volume settings
        candidates: Items in arrival order

    Returns:
        At most calculate_adaptive_limit() items with priority_score >=
        priority_threshold, highest score first
    """
    scored = [
        PrioritizedContent.model_validate(
            {**candidate.model_dump(), "priority_score": priority_score(settings, candidate)}
        )
        for candidate in candidates
    ]
    # sorted() is stable, so equal scores keep arrival order
    ranked = sorted(scored, key=lambda item: item.priority_score, reverse=True)
    kept = [item for item in ranked if item.priority_score >= settings.priority_threshold]
    limit = calculate_adaptive_limit(settings)

    logger.debug(
        "content_prioritized",
        user_id=settings.user_id,
        total_original=len(candidates),
        above_threshold=len(kept),
        adaptive_limit=limit,
    )
    return kept[:limit]
