"""Tests for behavior metric ingestion and clamping."""

from datetime import datetime, timezone

import pytest

from personalization.schemas.summary import (
    BehaviorMetricsUpdate,
    SummaryLength,
    SummaryPreferences,
)
from personalization.services.behavior_metrics import update_behavior_metrics

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


class TestClamping:

    @pytest.mark.parametrize("observed, stored", [
        (10, 50),
        (50, 50),
        (275.6, 276),
        (1000, 1000),
        (5000, 1000),
        (-20, 50),
    ])
    def test_reading_speed(self, summary_preferences, observed, stored):
        updated = update_behavior_metrics(
            summary_preferences, BehaviorMetricsUpdate(average_reading_speed=observed), NOW
        )
        assert updated.user_behavior_metrics.average_reading_speed == stored

    @pytest.mark.parametrize("observed, stored", [
        (-0.5, 0.0),
        (0.0, 0.0),
        (0.42, 0.42),
        (1.0, 1.0),
        (3.0, 1.0),
    ])
    def test_engagement(self, summary_preferences, observed, stored):
        updated = update_behavior_metrics(
            summary_preferences, BehaviorMetricsUpdate(engagement_with_summaries=observed), NOW
        )
        assert updated.user_behavior_metrics.engagement_with_summaries == pytest.approx(stored)


class TestPartialUpdates:

    def test_only_given_fields_change(self, summary_preferences: SummaryPreferences):
        updated = update_behavior_metrics(
            summary_preferences,
            BehaviorMetricsUpdate(preferred_summary_length=SummaryLength.DETAILED),
            NOW,
        )
        metrics = updated.user_behavior_metrics
        assert metrics.preferred_summary_length == SummaryLength.DETAILED
        assert metrics.average_reading_speed == 200
        assert metrics.engagement_with_summaries == 0.5
        assert metrics.last_updated == NOW

    def test_all_fields(self, summary_preferences):
        updated = update_behavior_metrics(
            summary_preferences,
            BehaviorMetricsUpdate(
                average_reading_speed=320,
                preferred_summary_length=SummaryLength.BRIEF,
                engagement_with_summaries=0.8,
            ),
            NOW,
        )
        metrics = updated.user_behavior_metrics
        assert metrics.average_reading_speed == 320
        assert metrics.preferred_summary_length == SummaryLength.BRIEF
        assert metrics.engagement_with_summaries == 0.8

    def test_empty_update_is_a_no_op(self, summary_preferences):
        before = summary_preferences.user_behavior_metrics.last_updated
        updated = update_behavior_metrics(summary_preferences, BehaviorMetricsUpdate(), NOW)
        assert updated == summary_preferences
        assert updated.user_behavior_metrics.last_updated == before


class TestValueSemantics:

    def test_input_is_not_mutated(self, summary_preferences):
        snapshot = summary_preferences.model_copy(deep=True)
        updated = update_behavior_metrics(
            summary_preferences, BehaviorMetricsUpdate(average_reading_speed=900), NOW
        )
        assert summary_preferences == snapshot
        assert updated is not summary_preferences
        assert updated.user_behavior_metrics.average_reading_speed == 900

    def test_timestamp_defaults_to_now(self, summary_preferences):
        before = datetime.now(timezone.utc)
        updated = update_behavior_metrics(
            summary_preferences, BehaviorMetricsUpdate(engagement_with_summaries=0.6)
        )
        assert updated.user_behavior_metrics.last_updated >= before
