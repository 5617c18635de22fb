"""
Summary Parameter Resolution

Turns a content type (and an optional explicit length) into the concrete
summary shape the summarizer must honor:

    params = get_summary_parameters(prefs, "paper")
    params.length         # SummaryLength.DETAILED
    params.max_words      # 300
    params.include_methodology  # True

Tier resolution order:
1. explicit length override
2. the content type's stored length
3. the user's default length (also used for unknown content types)
"""

from typing import Optional

from personalization.schemas.summary import (
    ContentTypePreference,
    SummaryLength,
    SummaryParameters,
    SummaryPreferences,
)


def get_content_type_preference(
    preferences: SummaryPreferences,
    content_type: str,
) -> Optional[ContentTypePreference]:
    """Stored preference for a content type, or None if it has none."""
    return preferences.content_type_preferences.get(str(content_type))


def resolve_base_length(
    preferences: SummaryPreferences,
    content_type: str,
) -> SummaryLength:
    """The content type's stored tier, falling back to the default tier."""
    content_pref = get_content_type_preference(preferences, content_type)
    if content_pref is not None:
        return content_pref.length
    return preferences.default_length


def get_summary_parameters(
    preferences: SummaryPreferences,
    content_type: str,
    length_override: Optional[SummaryLength] = None,
) -> SummaryParameters:
    """
    Resolve the summary shape for a content type.

    Args:
        preferences: The user's summary preferences
        content_type: Content type name; unknown types get the generic flag set
        length_override: Explicit tier that wins over stored preferences

    Returns:
        Tier, word/sentence budget, and section flags
    """
    length = length_override or resolve_base_length(preferences, content_type)
    budget = preferences.length_parameters[length]
    # Unknown content types take the schema defaults, which are the generic flags
    flags = get_content_type_preference(preferences, content_type) or ContentTypePreference()

    return SummaryParameters(
        length=length,
        max_words=budget.max_words,
        max_sentences=budget.max_sentences,
        include_key_insights=flags.include_key_insights,
        include_references=flags.include_references,
        include_methodology=flags.include_methodology,
        include_results=flags.include_results,
        include_timestamps=flags.include_timestamps,
        include_context=flags.include_context,
    )
