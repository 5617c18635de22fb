"""
Pydantic schemas for request/response validation.

Import all schemas here for easy access.
"""

from personalization.schemas.configuration import (
    DefaultConfiguration,
    EffectiveConfiguration,
)
from personalization.schemas.content_volume import (
    AdaptiveLimit,
    ContentCandidate,
    ContentVolumeSettings,
    ContentVolumeSettingsBody,
    PrioritizationResult,
    PrioritizedContent,
    PrioritizeRequest,
    VolumeBehaviorMetrics,
    VolumeMetricsUpdate,
)
from personalization.schemas.digest import (
    DigestFrequency,
    DigestSettings,
    DigestSettingsBody,
    ScheduleEntry,
    SchedulePreview,
    Weekday,
)
from personalization.schemas.discovery import (
    AggressivenessUpdate,
    DiscoveryCandidate,
    DiscoveryContext,
    DiscoveryEvaluation,
    DiscoveryPreset,
    DiscoveryPresetInfo,
    DiscoverySettings,
    DiscoverySettingsBody,
    EvaluateRequest,
    PresetRequest,
    QualityFilters,
    SourceDiscoverySettings,
    TemporalSettings,
    ThresholdRequest,
    ThresholdResult,
    TopicSensitivity,
)
from personalization.schemas.notification import (
    ChannelName,
    ChannelSettings,
    ContentTypeFlags,
    NotificationChannels,
    NotificationFrequency,
    NotificationPreferences,
    NotificationSettings,
    NotificationStatus,
    QuietHours,
)
from personalization.schemas.summary import (
    AdaptiveLengthContext,
    AdaptiveLengthResult,
    AdaptiveSettings,
    BehaviorMetrics,
    BehaviorMetricsUpdate,
    ContentType,
    ContentTypePreference,
    LengthParameter,
    LengthTierInfo,
    SummaryLength,
    SummaryParameters,
    SummaryPreferences,
    SummaryPreferencesBody,
    ValidationReport,
)

__all__ = [
    # Notification settings
    "ChannelName",
    "ChannelSettings",
    "ContentTypeFlags",
    "NotificationChannels",
    "NotificationFrequency",
    "NotificationPreferences",
    "NotificationSettings",
    "NotificationStatus",
    "QuietHours",
    # Summary preferences
    "AdaptiveLengthContext",
    "AdaptiveLengthResult",
    "AdaptiveSettings",
    "BehaviorMetrics",
    "BehaviorMetricsUpdate",
    "ContentType",
    "ContentTypePreference",
    "LengthParameter",
    "LengthTierInfo",
    "SummaryLength",
    "SummaryParameters",
    "SummaryPreferences",
    "SummaryPreferencesBody",
    "ValidationReport",
    # Digest settings
    "DigestFrequency",
    "DigestSettings",
    "DigestSettingsBody",
    "ScheduleEntry",
    "SchedulePreview",
    "Weekday",
    # Content volume
    "AdaptiveLimit",
    "ContentCandidate",
    "ContentVolumeSettings",
    "ContentVolumeSettingsBody",
    "PrioritizationResult",
    "PrioritizedContent",
    "PrioritizeRequest",
    "VolumeBehaviorMetrics",
    "VolumeMetricsUpdate",
    # Discovery
    "AggressivenessUpdate",
    "DiscoveryCandidate",
    "DiscoveryContext",
    "DiscoveryEvaluation",
    "DiscoveryPreset",
    "DiscoveryPresetInfo",
    "DiscoverySettings",
    "DiscoverySettingsBody",
    "EvaluateRequest",
    "PresetRequest",
    "QualityFilters",
    "SourceDiscoverySettings",
    "TemporalSettings",
    "ThresholdRequest",
    "ThresholdResult",
    "TopicSensitivity",
    # Composite
    "DefaultConfiguration",
    "EffectiveConfiguration",
]
