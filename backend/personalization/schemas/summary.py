"""
Pydantic schemas for summary preferences.

Summary preferences decide the *shape* of a generated summary: its length
tier, the word/sentence budget of each tier, which sections to include for
each content type, and whether the tier adapts to observed reading behavior.
"""

import enum
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from personalization.core.defaults import (
    DEFAULT_ADAPTIVE_SETTINGS,
    DEFAULT_BEHAVIOR_METRICS,
    DEFAULT_CONTENT_TYPE_PREFERENCES,
    DEFAULT_LENGTH_PARAMETERS,
    DEFAULT_SUMMARY_LENGTH,
    ENGAGEMENT_BOUNDS,
    GENERIC_CONTENT_FLAGS,
    LENGTH_TIERS,
    READING_SPEED_BOUNDS,
)
from personalization.schemas.types import UserId


# ========================================
# Enums
# ========================================


class SummaryLength(str, enum.Enum):
    """
    Ordered summary length tiers.

    Tiers compare by position, not by string value:

        SummaryLength.BRIEF.index          # 0
        SummaryLength.from_index(3)        # SummaryLength.COMPREHENSIVE
    """

    BRIEF = "brief"
    STANDARD = "standard"
    DETAILED = "detailed"
    COMPREHENSIVE = "comprehensive"

    def __str__(self) -> str:
        return self.value

    @property
    def index(self) -> int:
        """Ordinal position of this tier (brief=0 ... comprehensive=3)."""
        return LENGTH_TIERS.index(self.value)

    @classmethod
    def from_index(cls, index: int) -> "SummaryLength":
        """Tier at an ordinal position. Out-of-range indexes are clamped."""
        clamped = max(0, min(len(LENGTH_TIERS) - 1, index))
        return cls(LENGTH_TIERS[clamped])


class ContentType(str, enum.Enum):
    """Built-in content types with their own default summary shape."""

    ARTICLE = "article"
    PAPER = "paper"
    PODCAST = "podcast"
    SOCIAL = "social"

    def __str__(self) -> str:
        return self.value


# ========================================
# Document Parts
# ========================================


class ContentTypePreference(BaseModel):
    """Summary shape for one content type. Flags default to the generic set."""

    length: SummaryLength = SummaryLength.STANDARD
    include_key_insights: bool = GENERIC_CONTENT_FLAGS["include_key_insights"]
    include_references: bool = GENERIC_CONTENT_FLAGS["include_references"]
    include_methodology: bool = GENERIC_CONTENT_FLAGS["include_methodology"]
    include_results: bool = GENERIC_CONTENT_FLAGS["include_results"]
    include_timestamps: bool = GENERIC_CONTENT_FLAGS["include_timestamps"]
    include_context: bool = GENERIC_CONTENT_FLAGS["include_context"]


class LengthParameter(BaseModel):
    """
    Word and sentence budget for one tier.

    No range constraints here; validate_configuration() reports
    out-of-range values for every tier at once.
    """

    max_words: int
    max_sentences: int


class AdaptiveSettings(BaseModel):
    """Which behavioral signals may move the summary length tier."""

    enabled: bool = DEFAULT_ADAPTIVE_SETTINGS["enabled"]
    based_on_reading_speed: bool = DEFAULT_ADAPTIVE_SETTINGS["based_on_reading_speed"]
    based_on_engagement: bool = DEFAULT_ADAPTIVE_SETTINGS["based_on_engagement"]
    based_on_time_available: bool = DEFAULT_ADAPTIVE_SETTINGS["based_on_time_available"]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BehaviorMetrics(BaseModel):
    """Observed reading behavior, kept within clamp bounds."""

    average_reading_speed: int = Field(
        DEFAULT_BEHAVIOR_METRICS["average_reading_speed"],
        ge=READING_SPEED_BOUNDS[0],
        le=READING_SPEED_BOUNDS[1],
        description="Words per minute",
    )
    preferred_summary_length: SummaryLength = SummaryLength(
        DEFAULT_BEHAVIOR_METRICS["preferred_summary_length"]
    )
    engagement_with_summaries: float = Field(
        DEFAULT_BEHAVIOR_METRICS["engagement_with_summaries"],
        ge=ENGAGEMENT_BOUNDS[0],
        le=ENGAGEMENT_BOUNDS[1],
    )
    last_updated: datetime = Field(default_factory=_utcnow)


def _default_content_type_preferences() -> dict[str, ContentTypePreference]:
    return {
        content_type: ContentTypePreference(**values)
        for content_type, values in DEFAULT_CONTENT_TYPE_PREFERENCES.items()
    }


def _default_length_parameters() -> dict[SummaryLength, LengthParameter]:
    return {
        SummaryLength(tier): LengthParameter(**values)
        for tier, values in DEFAULT_LENGTH_PARAMETERS.items()
    }


# ========================================
# Documents
# ========================================


class SummaryPreferencesBody(BaseModel):
    """Summary preferences document body (whole-document replacement)."""

    default_length: SummaryLength = SummaryLength(DEFAULT_SUMMARY_LENGTH)
    content_type_preferences: dict[str, ContentTypePreference] = Field(
        default_factory=_default_content_type_preferences
    )
    length_parameters: dict[SummaryLength, LengthParameter] = Field(
        default_factory=_default_length_parameters
    )
    adaptive_settings: AdaptiveSettings = Field(default_factory=AdaptiveSettings)
    user_behavior_metrics: BehaviorMetrics = Field(default_factory=BehaviorMetrics)

    @model_validator(mode="after")
    def fill_missing_tiers(self):
        """Every tier always has length parameters; missing ones use defaults."""
        for tier in SummaryLength:
            if tier not in self.length_parameters:
                self.length_parameters[tier] = LengthParameter(
                    **DEFAULT_LENGTH_PARAMETERS[tier.value]
                )
        return self


class SummaryPreferences(SummaryPreferencesBody):
    """Summary preferences for one user."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UserId

    @classmethod
    def defaults(cls, user_id: str) -> "SummaryPreferences":
        """Fresh preferences seeded with the shared defaults."""
        return cls(user_id=user_id)


# ========================================
# Request Schemas
# ========================================


class BehaviorMetricsUpdate(BaseModel):
    """
    Partial behavior observation.

    Numeric fields are unbounded; update_behavior_metrics() clamps
    out-of-range observations.
    """

    average_reading_speed: Optional[float] = None
    preferred_summary_length: Optional[SummaryLength] = None
    engagement_with_summaries: Optional[float] = None

    def is_empty(self) -> bool:
        return (
            self.average_reading_speed is None
            and self.preferred_summary_length is None
            and self.engagement_with_summaries is None
        )


class AdaptiveLengthContext(BaseModel):
    """Per-request context for the adaptive length calculation."""

    available_time_minutes: Optional[float] = Field(
        None,
        ge=0,
        description="Minutes the reader has right now",
    )


# ========================================
# Response Schemas
# ========================================


class SummaryParameters(BaseModel):
    """Resolved summary shape handed to the summarizer."""

    length: SummaryLength
    max_words: int
    max_sentences: int
    include_key_insights: bool
    include_references: bool
    include_methodology: bool
    include_results: bool
    include_timestamps: bool
    include_context: bool


class AdaptiveLengthResult(BaseModel):
    """Adaptive tier for a content type, with the tier it started from."""

    content_type: str
    base_length: SummaryLength
    length: SummaryLength


class LengthTierInfo(BaseModel):
    """Display information about one length tier."""

    length: SummaryLength
    name: str
    description: str
    default_max_words: int
    default_max_sentences: int
    recommended_for: list[str]


class ValidationReport(BaseModel):
    """Result of a configuration range check."""

    valid: bool
    errors: list[str]
