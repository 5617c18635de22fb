"""
Pydantic schemas for content volume settings.

Content volume settings cap how many items reach a user per day. The cap
adapts to how much of the delivered content the user actually finishes,
and candidate items are ranked by relevance weighted per content type.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from personalization.core.defaults import (
    DAILY_LIMIT_BOUNDS,
    DEFAULT_CONTENT_TYPE_WEIGHTS,
    DEFAULT_CONTENT_VOLUME_SETTINGS,
    DEFAULT_VOLUME_BEHAVIOR_METRICS,
    ENGAGEMENT_BOUNDS,
)
from personalization.schemas.types import UserId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ========================================
# Document Parts
# ========================================


class VolumeBehaviorMetrics(BaseModel):
    """Observed consumption of delivered content."""

    average_read_time: float = Field(
        DEFAULT_VOLUME_BEHAVIOR_METRICS["average_read_time"],
        ge=0,
        description="Seconds spent per item",
    )
    completion_rate: float = Field(
        DEFAULT_VOLUME_BEHAVIOR_METRICS["completion_rate"],
        ge=ENGAGEMENT_BOUNDS[0],
        le=ENGAGEMENT_BOUNDS[1],
    )
    engagement_score: float = Field(
        DEFAULT_VOLUME_BEHAVIOR_METRICS["engagement_score"],
        ge=ENGAGEMENT_BOUNDS[0],
        le=ENGAGEMENT_BOUNDS[1],
    )
    last_updated: datetime = Field(default_factory=_utcnow)


def _default_weights() -> dict[str, float]:
    return dict(DEFAULT_CONTENT_TYPE_WEIGHTS)


# ========================================
# Documents
# ========================================


class ContentVolumeSettingsBody(BaseModel):
    """Content volume document body (whole-document replacement)."""

    daily_limit: int = Field(
        DEFAULT_CONTENT_VOLUME_SETTINGS["daily_limit"],
        ge=DAILY_LIMIT_BOUNDS[0],
        le=DAILY_LIMIT_BOUNDS[1],
    )
    priority_threshold: float = Field(
        DEFAULT_CONTENT_VOLUME_SETTINGS["priority_threshold"],
        ge=0,
        le=1,
        description="Minimum priority score an item needs to be kept",
    )
    adaptive_enabled: bool = DEFAULT_CONTENT_VOLUME_SETTINGS["adaptive_enabled"]
    content_type_weights: dict[str, float] = Field(default_factory=_default_weights)
    user_behavior_metrics: VolumeBehaviorMetrics = Field(default_factory=VolumeBehaviorMetrics)


class ContentVolumeSettings(ContentVolumeSettingsBody):
    """Content volume settings for one user."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UserId

    @classmethod
    def defaults(cls, user_id: str) -> "ContentVolumeSettings":
        return cls(user_id=user_id)


# ========================================
# Request Schemas
# ========================================


class VolumeMetricsUpdate(BaseModel):
    """Partial consumption observation; update_volume_metrics() clamps the values."""

    average_read_time: Optional[float] = None
    completion_rate: Optional[float] = None
    engagement_score: Optional[float] = None

    def is_empty(self) -> bool:
        return (
            self.average_read_time is None
            and self.completion_rate is None
            and self.engagement_score is None
        )


class ContentCandidate(BaseModel):
    """
    One item offered for prioritization.

    Fields beyond `type` and `relevance_score` (id, title, url, ...) are
    carried through to the result untouched.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    relevance_score: float


class PrioritizeRequest(BaseModel):
    content: list[ContentCandidate]


# ========================================
# Response Schemas
# ========================================


class PrioritizedContent(ContentCandidate):
    priority_score: float


class AdaptiveLimit(BaseModel):
    daily_limit: int
    adaptive_limit: int
    adaptive_enabled: bool
    user_behavior_metrics: VolumeBehaviorMetrics


class PrioritizationResult(BaseModel):
    """Kept items, highest priority first, with the numbers that cut the list."""

    prioritized_content: list[PrioritizedContent]
    total_original: int
    total_prioritized: int
    adaptive_limit: int
    priority_threshold: float
