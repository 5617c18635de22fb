"""
Tests for summary parameter resolution.

This test module verifies:
1. Built-in content types resolve to their stored tier and flags
2. Length overrides win over stored preferences
3. Unknown content types use the default tier and the generic flags
4. Budgets always come from the user's length parameters
"""

from personalization.schemas.summary import (
    ContentTypePreference,
    LengthParameter,
    SummaryLength,
    SummaryPreferences,
)
from personalization.services.summary_parameters import (
    get_summary_parameters,
    resolve_base_length,
)


class TestBuiltInContentTypes:

    def test_paper(self, summary_preferences: SummaryPreferences):
        params = get_summary_parameters(summary_preferences, "paper")
        assert params.length == SummaryLength.DETAILED
        assert params.max_words == 300
        assert params.max_sentences == 15
        assert params.include_methodology is True
        assert params.include_results is True
        assert params.include_key_insights is True
        assert params.include_references is True
        assert params.include_timestamps is False

    def test_article(self, summary_preferences):
        params = get_summary_parameters(summary_preferences, "article")
        assert params.length == SummaryLength.STANDARD
        assert params.max_words == 150
        assert params.max_sentences == 8
        assert params.include_key_insights is True
        assert params.include_references is True
        assert params.include_methodology is False

    def test_podcast_includes_timestamps(self, summary_preferences):
        params = get_summary_parameters(summary_preferences, "podcast")
        assert params.length == SummaryLength.STANDARD
        assert params.include_timestamps is True

    def test_social(self, summary_preferences):
        params = get_summary_parameters(summary_preferences, "social")
        assert params.length == SummaryLength.BRIEF
        assert params.max_words == 50
        assert params.max_sentences == 3
        assert params.include_context is True
        assert params.include_references is False


class TestOverrides:

    def test_length_override_wins(self, summary_preferences):
        params = get_summary_parameters(
            summary_preferences, "social", SummaryLength.COMPREHENSIVE
        )
        assert params.length == SummaryLength.COMPREHENSIVE
        assert params.max_words == 500
        assert params.max_sentences == 25
        # flags still come from the content type
        assert params.include_context is True

    def test_custom_budget_used(self, summary_preferences):
        summary_preferences.length_parameters[SummaryLength.DETAILED] = LengthParameter(
            max_words=420, max_sentences=20
        )
        params = get_summary_parameters(summary_preferences, "paper")
        assert params.max_words == 420
        assert params.max_sentences == 20

    def test_stored_content_type_tier(self, summary_preferences):
        summary_preferences.content_type_preferences["article"] = ContentTypePreference(
            length=SummaryLength.BRIEF
        )
        assert resolve_base_length(summary_preferences, "article") == SummaryLength.BRIEF


class TestUnknownContentType:

    def test_uses_default_length_and_generic_flags(self, summary_preferences):
        summary_preferences.default_length = SummaryLength.DETAILED
        params = get_summary_parameters(summary_preferences, "newsletter")

        assert params.length == SummaryLength.DETAILED
        assert params.max_words == 300
        assert params.include_key_insights is True
        assert params.include_references is True
        assert params.include_methodology is False
        assert params.include_results is False
        assert params.include_timestamps is False
        assert params.include_context is False

    def test_base_length_falls_back_to_default(self, summary_preferences):
        assert resolve_base_length(summary_preferences, "video") == SummaryLength.STANDARD
