"""
Default Personalization Configuration

The one place where default preference values live.

Both the schema layer (pydantic defaults for new records) and the UI layer
(served by GET /defaults for form initial values and previews) read from
these constants, so a default can only ever be changed here.

Values are plain dicts and strings. Consumers copy them; nothing mutates
them in place.
"""

from copy import deepcopy
from typing import Any

# ================================
# Summary Length Tiers
# ================================
# Ordered from shortest to longest. The position in this tuple is the
# tier index used by the adaptive length calculator.
LENGTH_TIERS: tuple[str, ...] = ("brief", "standard", "detailed", "comprehensive")

LENGTH_PARAMETER_BOUNDS = {
    "max_words": (20, 1000),
    "max_sentences": (1, 50),
}

# Clamp ranges for observed reading behaviour
READING_SPEED_BOUNDS = (50, 1000)
ENGAGEMENT_BOUNDS = (0.0, 1.0)

# ================================
# Notification Settings
# ================================
DEFAULT_CHANNELS: dict[str, dict[str, Any]] = {
    "email": {"enabled": True, "frequency": "daily", "time": None, "timezone": None},
    "push": {"enabled": False, "frequency": "immediate", "time": None, "timezone": None},
    "digest": {"enabled": True, "frequency": "daily", "time": "09:00", "timezone": "UTC"},
}

DEFAULT_CONTENT_TYPE_FLAGS: dict[str, bool] = {
    "breaking_news": True,
    "new_content": True,
    "weekly_digest": True,
    "system_updates": True,
}

DEFAULT_QUIET_HOURS: dict[str, Any] = {
    "enabled": False,
    "start": "22:00",
    "end": "08:00",
    "timezone": "UTC",
}

# ================================
# Summary Preferences
# ================================
DEFAULT_SUMMARY_LENGTH = "standard"

# Flags used for content types without a stored preference
GENERIC_CONTENT_FLAGS: dict[str, bool] = {
    "include_key_insights": True,
    "include_references": True,
    "include_methodology": False,
    "include_results": False,
    "include_timestamps": False,
    "include_context": False,
}

DEFAULT_CONTENT_TYPE_PREFERENCES: dict[str, dict[str, Any]] = {
    "article": {
        **GENERIC_CONTENT_FLAGS,
        "length": "standard",
    },
    "paper": {
        **GENERIC_CONTENT_FLAGS,
        "length": "detailed",
        "include_methodology": True,
        "include_results": True,
    },
    "podcast": {
        **GENERIC_CONTENT_FLAGS,
        "length": "standard",
        "include_timestamps": True,
    },
    "social": {
        **GENERIC_CONTENT_FLAGS,
        "length": "brief",
        "include_references": False,
        "include_context": True,
    },
}

DEFAULT_LENGTH_PARAMETERS: dict[str, dict[str, int]] = {
    "brief": {"max_words": 50, "max_sentences": 3},
    "standard": {"max_words": 150, "max_sentences": 8},
    "detailed": {"max_words": 300, "max_sentences": 15},
    "comprehensive": {"max_words": 500, "max_sentences": 25},
}

DEFAULT_ADAPTIVE_SETTINGS: dict[str, bool] = {
    "enabled": True,
    "based_on_reading_speed": False,
    "based_on_engagement": False,
    "based_on_time_available": False,
}

DEFAULT_BEHAVIOR_METRICS: dict[str, Any] = {
    "average_reading_speed": 200,
    "preferred_summary_length": "standard",
    "engagement_with_summaries": 0.5,
}

# Display catalogue for the settings UI
LENGTH_TIER_CATALOGUE: dict[str, dict[str, Any]] = {
    "brief": {
        "name": "Brief",
        "description": "Quick overview with key points only",
        "recommended_for": ["social", "quick updates"],
    },
    "standard": {
        "name": "Standard",
        "description": "Balanced summary with main points and context",
        "recommended_for": ["article", "general content"],
    },
    "detailed": {
        "name": "Detailed",
        "description": "Comprehensive summary with analysis and insights",
        "recommended_for": ["paper", "research content"],
    },
    "comprehensive": {
        "name": "Comprehensive",
        "description": "Full analysis with methodology, results, and implications",
        "recommended_for": ["academic papers", "in-depth analysis"],
    },
}

# ================================
# Digest Settings
# ================================
DIGEST_MAX_ITEMS_BOUNDS = (5, 50)

# Fixed delivery days of the twice-weekly digest
TWICE_WEEKLY_DAYS: tuple[str, str] = ("monday", "thursday")

DEFAULT_DIGEST_SETTINGS: dict[str, Any] = {
    "enabled": True,
    "frequency": "daily",
    "delivery_time": "09:00",
    "weekly_day": "monday",
    "max_items": 10,
    "timezone": "UTC",
    "include_breaking_news": True,
    "include_top_stories": True,
    "include_personalized": True,
    "include_trending": False,
}

# ================================
# Content Volume
# ================================
DAILY_LIMIT_BOUNDS = (1, 1000)

# Priority weight for content types without their own weight
FALLBACK_CONTENT_WEIGHT = 0.5

DEFAULT_CONTENT_TYPE_WEIGHTS: dict[str, float] = {
    "article": 0.8,
    "paper": 0.9,
    "podcast": 0.7,
    "social": 0.4,
}

DEFAULT_VOLUME_BEHAVIOR_METRICS: dict[str, float] = {
    "average_read_time": 0,
    "completion_rate": 0.5,
    "engagement_score": 0.5,
}

DEFAULT_CONTENT_VOLUME_SETTINGS: dict[str, Any] = {
    "daily_limit": 50,
    "priority_threshold": 0.7,
    "adaptive_enabled": True,
    "content_type_weights": DEFAULT_CONTENT_TYPE_WEIGHTS,
    "user_behavior_metrics": DEFAULT_VOLUME_BEHAVIOR_METRICS,
}

# ================================
# Discovery
# ================================
DISCOVERY_DEPTH_BOUNDS = (1, 5)

# Starting point for content types without a default threshold when the
# aggressiveness level is applied
FALLBACK_DISCOVERY_THRESHOLD = 0.6

DEFAULT_DISCOVERY_THRESHOLDS: dict[str, float] = {
    "article": 0.6,
    "paper": 0.8,
    "podcast": 0.5,
    "social": 0.3,
}

DEFAULT_DISCOVERY_SETTINGS: dict[str, Any] = {
    "aggressiveness_level": 0.5,
    "auto_inclusion_threshold": 0.7,
    "manual_review_threshold": 0.4,
    "source_discovery": {
        "enable_reference_discovery": True,
        "enable_citation_discovery": True,
        "enable_podcast_discovery": True,
        "max_discovery_depth": 2,
    },
    "content_type_thresholds": DEFAULT_DISCOVERY_THRESHOLDS,
    "topic_sensitivity": {
        "sensitivity": 0.6,
        "preferred_topic_boost": 1.5,
        "non_preferred_topic_penalty": 0.7,
    },
    "temporal_settings": {
        "recent_content_boost": 1.3,
        "old_content_penalty": 0.8,
        "enable_breaking_news_detection": True,
    },
    "quality_filters": {
        "min_source_credibility": 0.3,
        "enable_duplicate_filtering": True,
        "min_content_length": 100,
    },
}

# Named aggressiveness levels offered by the settings UI
DISCOVERY_PRESETS: dict[str, dict[str, Any]] = {
    "conservative": {
        "aggressiveness_level": 0.2,
        "description": "Only include highly relevant content with strong confidence",
    },
    "moderate": {
        "aggressiveness_level": 0.5,
        "description": "Balanced approach with moderate content discovery",
    },
    "aggressive": {
        "aggressiveness_level": 0.8,
        "description": "Discover more content with lower confidence thresholds",
    },
}


def default_configuration() -> dict[str, Any]:
    """
    Full default configuration, grouped the way the settings UI renders it.

    Returns a fresh deep copy on every call.
    """
    return deepcopy(
        {
            "notifications": {
                "channels": DEFAULT_CHANNELS,
                "content_types": DEFAULT_CONTENT_TYPE_FLAGS,
                "quiet_hours": DEFAULT_QUIET_HOURS,
            },
            "summary_preferences": {
                "default_length": DEFAULT_SUMMARY_LENGTH,
                "content_type_preferences": DEFAULT_CONTENT_TYPE_PREFERENCES,
                "length_parameters": DEFAULT_LENGTH_PARAMETERS,
                "adaptive_settings": DEFAULT_ADAPTIVE_SETTINGS,
                "user_behavior_metrics": DEFAULT_BEHAVIOR_METRICS,
            },
            "digest": DEFAULT_DIGEST_SETTINGS,
            "content_volume": DEFAULT_CONTENT_VOLUME_SETTINGS,
            "discovery": DEFAULT_DISCOVERY_SETTINGS,
        }
    )
