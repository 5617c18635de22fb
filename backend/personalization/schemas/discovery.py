"""
Pydantic schemas for discovery settings.

Discovery settings decide what happens to content the aggregator finds on
its own (references, citations, related podcasts). An item is either
included automatically or queued for manual review; anything else is
dropped. One aggressiveness level in [0, 1] moves all thresholds together
and the remaining sections fine tune them.
"""

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from personalization.core.defaults import (
    DEFAULT_DISCOVERY_SETTINGS,
    DEFAULT_DISCOVERY_THRESHOLDS,
    DISCOVERY_DEPTH_BOUNDS,
)
from personalization.schemas.types import UserId

_SOURCE = DEFAULT_DISCOVERY_SETTINGS["source_discovery"]
_TOPIC = DEFAULT_DISCOVERY_SETTINGS["topic_sensitivity"]
_TEMPORAL = DEFAULT_DISCOVERY_SETTINGS["temporal_settings"]
_QUALITY = DEFAULT_DISCOVERY_SETTINGS["quality_filters"]


class DiscoveryPreset(str, enum.Enum):
    """Named aggressiveness levels."""

    CONSERVATIVE = "conservative"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"

    def __str__(self) -> str:
        return self.value


# ========================================
# Document Parts
# ========================================


class SourceDiscoverySettings(BaseModel):
    enable_reference_discovery: bool = _SOURCE["enable_reference_discovery"]
    enable_citation_discovery: bool = _SOURCE["enable_citation_discovery"]
    enable_podcast_discovery: bool = _SOURCE["enable_podcast_discovery"]
    max_discovery_depth: int = Field(
        _SOURCE["max_discovery_depth"],
        ge=DISCOVERY_DEPTH_BOUNDS[0],
        le=DISCOVERY_DEPTH_BOUNDS[1],
        description="How many hops away from followed sources discovery may go",
    )


class TopicSensitivity(BaseModel):
    """Threshold divisors for content on preferred and non-preferred topics."""

    sensitivity: float = Field(_TOPIC["sensitivity"], ge=0, le=1)
    preferred_topic_boost: float = Field(_TOPIC["preferred_topic_boost"], ge=1, le=3)
    non_preferred_topic_penalty: float = Field(
        _TOPIC["non_preferred_topic_penalty"], ge=0.1, le=1
    )


class TemporalSettings(BaseModel):
    """Threshold divisors for recent and old content."""

    recent_content_boost: float = Field(_TEMPORAL["recent_content_boost"], ge=1, le=3)
    old_content_penalty: float = Field(_TEMPORAL["old_content_penalty"], ge=0.1, le=1)
    enable_breaking_news_detection: bool = _TEMPORAL["enable_breaking_news_detection"]


class QualityFilters(BaseModel):
    """Hard floors applied before any threshold. A floor of 0 disables it."""

    min_source_credibility: float = Field(_QUALITY["min_source_credibility"], ge=0, le=1)
    enable_duplicate_filtering: bool = _QUALITY["enable_duplicate_filtering"]
    min_content_length: int = Field(_QUALITY["min_content_length"], ge=0)


def _default_thresholds() -> dict[str, float]:
    return dict(DEFAULT_DISCOVERY_THRESHOLDS)


# ========================================
# Documents
# ========================================


class DiscoverySettingsBody(BaseModel):
    """Discovery document body (whole-document replacement)."""

    aggressiveness_level: float = Field(
        DEFAULT_DISCOVERY_SETTINGS["aggressiveness_level"],
        ge=0,
        le=1,
        description="0 includes almost nothing automatically, 1 includes almost everything",
    )
    auto_inclusion_threshold: float = Field(
        DEFAULT_DISCOVERY_SETTINGS["auto_inclusion_threshold"], ge=0, le=1
    )
    manual_review_threshold: float = Field(
        DEFAULT_DISCOVERY_SETTINGS["manual_review_threshold"], ge=0, le=1
    )
    source_discovery: SourceDiscoverySettings = Field(default_factory=SourceDiscoverySettings)
    content_type_thresholds: dict[str, float] = Field(default_factory=_default_thresholds)
    topic_sensitivity: TopicSensitivity = Field(default_factory=TopicSensitivity)
    temporal_settings: TemporalSettings = Field(default_factory=TemporalSettings)
    quality_filters: QualityFilters = Field(default_factory=QualityFilters)


class DiscoverySettings(DiscoverySettingsBody):
    """Discovery settings for one user."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UserId

    @classmethod
    def defaults(cls, user_id: str) -> "DiscoverySettings":
        return cls(user_id=user_id)


# ========================================
# Request Schemas
# ========================================


class DiscoveryContext(BaseModel):
    """What the discovery pipeline knows about a candidate besides its score."""

    is_preferred_topic: bool = False
    is_non_preferred_topic: bool = False
    is_recent: bool = False
    is_old: bool = False
    is_breaking_news: bool = False


class DiscoveryCandidate(BaseModel):
    """
    A discovered item. Missing quality signals count as 0 against the
    quality filters; other fields are carried through untouched.
    """

    model_config = ConfigDict(extra="allow")

    type: str
    source_credibility: Optional[float] = None
    content_length: Optional[int] = None


class ThresholdRequest(BaseModel):
    content_type: str
    context: DiscoveryContext = Field(default_factory=DiscoveryContext)


class EvaluateRequest(BaseModel):
    content: DiscoveryCandidate
    relevance_score: float
    context: DiscoveryContext = Field(default_factory=DiscoveryContext)


class AggressivenessUpdate(BaseModel):
    aggressiveness_level: float = Field(ge=0, le=1)


class PresetRequest(BaseModel):
    preset: DiscoveryPreset


# ========================================
# Response Schemas
# ========================================


class ThresholdResult(BaseModel):
    content_type: str
    context: DiscoveryContext
    effective_threshold: float
    base_threshold: float
    aggressiveness_level: float


class DiscoveryEvaluation(BaseModel):
    """Outcome for one candidate. Exactly one of the three flags is true."""

    should_auto_include: bool
    should_queue_for_review: bool
    should_reject: bool
    effective_threshold: float
    relevance_score: float
    context: DiscoveryContext


class DiscoveryPresetInfo(BaseModel):
    """A preset and the thresholds applying it would produce."""

    preset: DiscoveryPreset
    description: str
    aggressiveness_level: float
    auto_inclusion_threshold: float
    manual_review_threshold: float
    max_discovery_depth: int
