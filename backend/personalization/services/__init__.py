"""
Personalization engine.

Pure functions over preference records. PreferenceStore lives in
services.preference_store and is imported from there, so importing the
engine never touches the database layer.
"""

from personalization.services.adaptive_length import (
    AdaptiveThresholds,
    calculate_adaptive_length,
)
from personalization.services.behavior_metrics import update_behavior_metrics
from personalization.services.channel_frequency import get_channel_frequency
from personalization.services.config_validator import validate_configuration
from personalization.services.content_volume import (
    calculate_adaptive_limit,
    prioritize_content,
    update_volume_metrics,
)
from personalization.services.digest_preview import (
    build_schedule_preview,
    calculate_next_delivery,
    get_schedule_preview,
    validate_digest_settings,
)
from personalization.services.discovery import (
    apply_aggressiveness_level,
    calculate_effective_threshold,
    evaluate_candidate,
    get_discovery_presets,
    should_auto_include,
    should_queue_for_review,
)
from personalization.services.quiet_hours import (
    is_notification_allowed,
    is_quiet_hours_active,
)
from personalization.services.summary_parameters import get_summary_parameters

__all__ = [
    "AdaptiveThresholds",
    "apply_aggressiveness_level",
    "build_schedule_preview",
    "calculate_adaptive_length",
    "calculate_adaptive_limit",
    "calculate_effective_threshold",
    "calculate_next_delivery",
    "evaluate_candidate",
    "get_channel_frequency",
    "get_discovery_presets",
    "get_schedule_preview",
    "get_summary_parameters",
    "is_notification_allowed",
    "is_quiet_hours_active",
    "prioritize_content",
    "should_auto_include",
    "should_queue_for_review",
    "update_behavior_metrics",
    "update_volume_metrics",
    "validate_configuration",
    "validate_digest_settings",
]
