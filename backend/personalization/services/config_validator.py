"""Range checks for summary length parameters."""

from personalization.core.defaults import LENGTH_PARAMETER_BOUNDS
from personalization.schemas.summary import SummaryLength, SummaryPreferencesBody

# Field name -> label used in error messages
_FIELD_LABELS = {
    "max_words": "maxWords",
    "max_sentences": "maxSentences",
}


def validate_configuration(preferences: SummaryPreferencesBody) -> list[str]:
    """
    Check every tier's word and sentence budget against the allowed ranges.

    Returns:
        One message per violation, tiers in brief..comprehensive order and
        max_words before max_sentences within a tier. Empty when valid.
    """
    errors: list[str] = []

    for tier in SummaryLength:
        params = preferences.length_parameters.get(tier)
        if params is None:
            continue

        for field, (low, high) in LENGTH_PARAMETER_BOUNDS.items():
            value = getattr(params, field)
            if not low <= value <= high:
                errors.append(
                    f"Invalid {_FIELD_LABELS[field]} for {tier.value}: "
                    f"must be between {low} and {high}"
                )

    return errors
