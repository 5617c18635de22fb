"""
Discovery Thresholds

Decides what happens to content the aggregator discovers on its own.

Effective threshold:
--------------------
    1. base       = content_type_thresholds[type], else auto_inclusion_threshold
    2. base      += (0.5 - aggressiveness_level) * 0.4, clamped to [0, 1]
    3. preferred topic:      / preferred_topic_boost
       non-preferred topic:  / non_preferred_topic_penalty
    4. recent content:       / recent_content_boost
       old content:          / old_content_penalty
    5. clamp to [0, 1]

Boosts are >= 1 and lower the threshold; penalties are <= 1 and raise it.

Decision:
---------
    fails a quality filter                     -> reject
    relevance >= threshold                     -> auto include
    breaking news and relevance >= 0.7 * threshold
        (with breaking-news detection on)      -> auto include
    relevance >= min(manual_review, threshold) -> queue for review
    anything else                              -> reject
"""

from typing import Optional, TypeVar

from personalization.core.defaults import (
    DEFAULT_DISCOVERY_SETTINGS,
    DEFAULT_DISCOVERY_THRESHOLDS,
    DISCOVERY_DEPTH_BOUNDS,
    DISCOVERY_PRESETS,
    FALLBACK_DISCOVERY_THRESHOLD,
)
from personalization.core.logging import get_logger
from personalization.schemas.discovery import (
    DiscoveryCandidate,
    DiscoveryContext,
    DiscoveryEvaluation,
    DiscoveryPreset,
    DiscoveryPresetInfo,
    DiscoverySettingsBody,
)
from personalization.services.bounds import clamp, round_half_up

logger = get_logger(__name__)

Settings = TypeVar("Settings", bound=DiscoverySettingsBody)

NEUTRAL_LEVEL = 0.5
LEVEL_SPREAD = 0.4
BREAKING_NEWS_FACTOR = 0.7

AUTO_INCLUSION_BOUNDS = (0.1, 0.9)
MANUAL_REVIEW_BOUNDS = (0.05, 0.8)
CONTENT_TYPE_THRESHOLD_BOUNDS = (0.1, 0.9)


def aggressiveness_adjustment(level: float) -> float:
    """Threshold shift for a level: +0.2 at 0, 0 at 0.5, -0.2 at 1."""
    return (NEUTRAL_LEVEL - level) * LEVEL_SPREAD


def base_threshold(settings: DiscoverySettingsBody, content_type: str) -> float:
    # An explicit 0 is a real threshold, not a missing one
    thresholds = settings.content_type_thresholds
    if content_type in thresholds:
        return thresholds[content_type]
    return settings.auto_inclusion_threshold


def calculate_effective_threshold(
    settings: DiscoverySettingsBody,
    content_type: str,
    context: Optional[DiscoveryContext] = None,
) -> float:
    """
    Relevance a candidate of `content_type` needs for automatic inclusion.

    Args:
        settings: The user's discovery settings
        content_type: Content type of the candidate
        context: Topic and age flags; all false when omitted

    Returns:
        Threshold in [0, 1]
    """
    context = context or DiscoveryContext()
    threshold = clamp(
        base_threshold(settings, content_type)
        + aggressiveness_adjustment(settings.aggressiveness_level),
        0.0,
        1.0,
    )

    topic = settings.topic_sensitivity
    if context.is_preferred_topic:
        threshold /= topic.preferred_topic_boost
    elif context.is_non_preferred_topic:
        threshold /= topic.non_preferred_topic_penalty

    temporal = settings.temporal_settings
    if context.is_recent:
        threshold /= temporal.recent_content_boost
    elif context.is_old:
        threshold /= temporal.old_content_penalty

    return clamp(threshold, 0.0, 1.0)


def passes_quality_filters(
    settings: DiscoverySettingsBody,
    candidate: DiscoveryCandidate,
) -> bool:
    """Missing credibility or length counts as 0; a floor of 0 is off."""
    filters = settings.quality_filters
    if filters.min_source_credibility > 0:
        if (candidate.source_credibility or 0) < filters.min_source_credibility:
            return False
    if filters.min_content_length > 0:
        if (candidate.content_length or 0) < filters.min_content_length:
            return False
    return True


def should_auto_include(
    settings: DiscoverySettingsBody,
    candidate: DiscoveryCandidate,
    relevance_score: float,
    context: Optional[DiscoveryContext] = None,
) -> bool:
    context = context or DiscoveryContext()
    if not passes_quality_filters(settings, candidate):
        return False

    threshold = calculate_effective_threshold(settings, candidate.type, context)
    if context.is_breaking_news and settings.temporal_settings.enable_breaking_news_detection:
        return relevance_score >= threshold * BREAKING_NEWS_FACTOR
    return relevance_score >= threshold


def should_queue_for_review(
    settings: DiscoverySettingsBody,
    candidate: DiscoveryCandidate,
    relevance_score: float,
    context: Optional[DiscoveryContext] = None,
) -> bool:
    """Review applies to candidates that pass the filters but miss auto inclusion."""
    if should_auto_include(settings, candidate, relevance_score, context):
        return False
    if not passes_quality_filters(settings, candidate):
        return False

    review_threshold = min(
        settings.manual_review_threshold,
        calculate_effective_threshold(settings, candidate.type, context),
    )
    return relevance_score >= review_threshold


def evaluate_candidate(
    settings: DiscoverySettingsBody,
    candidate: DiscoveryCandidate,
    relevance_score: float,
    context: Optional[DiscoveryContext] = None,
) -> DiscoveryEvaluation:
    """Include, review or reject, with the threshold that decided it."""
    context = context or DiscoveryContext()
    include = should_auto_include(settings, candidate, relevance_score, context)
    review = should_queue_for_review(settings, candidate, relevance_score, context)

    return DiscoveryEvaluation(
        should_auto_include=include,
        should_queue_for_review=review,
        should_reject=not include and not review,
        effective_threshold=calculate_effective_threshold(settings, candidate.type, context),
        relevance_score=relevance_score,
        context=context,
    )


def apply_aggressiveness_level(settings: Settings, level: float) -> Settings:
    """
    Recompute every threshold and the discovery depth from one level.

    The level is clamped to [0, 1] first and the clamped value drives all
    adjustments. Content type thresholds restart from their defaults, so
    applying the same level twice gives the same result. Returns a copy.
    """
    level = clamp(level, 0.0, 1.0)
    adjustment = aggressiveness_adjustment(level)
    updated = settings.model_copy(deep=True)

    updated.aggressiveness_level = level
    updated.auto_inclusion_threshold = clamp(
        DEFAULT_DISCOVERY_SETTINGS["auto_inclusion_threshold"] + adjustment,
        *AUTO_INCLUSION_BOUNDS,
    )
    updated.manual_review_threshold = clamp(
        DEFAULT_DISCOVERY_SETTINGS["manual_review_threshold"] + adjustment,
        *MANUAL_REVIEW_BOUNDS,
    )
    updated.content_type_thresholds = {
        content_type: clamp(
            DEFAULT_DISCOVERY_THRESHOLDS.get(content_type, FALLBACK_DISCOVERY_THRESHOLD)
            + adjustment,
            *CONTENT_TYPE_THRESHOLD_BOUNDS,
        )
        for content_type in updated.content_type_thresholds
    }

    depth = round_half_up(
        DEFAULT_DISCOVERY_SETTINGS["source_discovery"]["max_discovery_depth"]
        + (level - NEUTRAL_LEVEL) * 2
    )
    updated.source_discovery.max_discovery_depth = int(clamp(depth, *DISCOVERY_DEPTH_BOUNDS))

    logger.debug(
        "discovery_aggressiveness_applied",
        aggressiveness_level=level,
        auto_inclusion_threshold=updated.auto_inclusion_threshold,
        max_discovery_depth=updated.source_discovery.max_discovery_depth,
    )
    return updated


def preset_level(preset: DiscoveryPreset) -> float:
    return DISCOVERY_PRESETS[DiscoveryPreset(preset).value]["aggressiveness_level"]


def get_discovery_presets() -> list[DiscoveryPresetInfo]:
    """Each preset with the thresholds it produces on default settings."""
    presets = []
    for preset in DiscoveryPreset:
        applied = apply_aggressiveness_level(DiscoverySettingsBody(), preset_level(preset))
        presets.append(
            DiscoveryPresetInfo(
                preset=preset,
                description=DISCOVERY_PRESETS[preset.value]["description"],
                aggressiveness_level=applied.aggressiveness_level,
                auto_inclusion_threshold=applied.auto_inclusion_threshold,
                manual_review_threshold=applied.manual_review_threshold,
                max_discovery_depth=applied.source_discovery.max_discovery_depth,
            )
        )
    return presets
