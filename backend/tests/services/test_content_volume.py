"""
Tests for the content volume engine.

This test module verifies:
1. The adaptive daily limit for high, neutral and low engagement
2. Clamping of consumption observations
3. Priority scoring, threshold filtering and the limit cut
"""

from datetime import datetime, timezone

import pytest

from personalization.schemas.content_volume import (
    ContentCandidate,
    ContentVolumeSettings,
    VolumeMetricsUpdate,
)
from personalization.services.content_volume import (
    calculate_adaptive_limit,
    prioritize_content,
    update_volume_metrics,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)


def volume(completion: float = 0.5, engagement: float = 0.5, **overrides) -> ContentVolumeSettings:
    settings = ContentVolumeSettings(user_id="user-123", **overrides)
    settings.user_behavior_metrics.completion_rate = completion
    settings.user_behavior_metrics.engagement_score = engagement
    return settings


def candidate(type: str, relevance: float, **extra) -> ContentCandidate:
    return ContentCandidate(type=type, relevance_score=relevance, **extra)


class TestAdaptiveLimit:

    def test_disabled_returns_daily_limit(self):
        assert calculate_adaptive_limit(volume(0.95, 0.95, adaptive_enabled=False)) == 50

    def test_neutral_metrics_keep_daily_limit(self, content_volume_settings):
        assert calculate_adaptive_limit(content_volume_settings) == 50

    @pytest.mark.parametrize("completion, engagement, expected", [
        (0.9, 0.8, 60),
        (1.0, 1.0, 75),
        (0.2, 0.1, 40),
        (0.0, 0.9, 35),
        (0.9, 0.2, 45),
        (0.8, 0.8, 50),
    ])
    def test_engagement_scales_limit(self, completion, engagement, expected):
        assert calculate_adaptive_limit(volume(completion, engagement)) == expected

    def test_low_signal_never_raises_limit(self):
        # One strong signal does not offset a weak one
        assert calculate_adaptive_limit(volume(0.29, 0.95, daily_limit=100)) < 100

    def test_limit_stays_positive(self):
        assert calculate_adaptive_limit(volume(0.0, 0.0, daily_limit=1)) == 1


class TestUpdateVolumeMetrics:

    @pytest.mark.parametrize("observed, stored", [
        (-0.2, 0.0),
        (0.65, 0.65),
        (1.5, 1.0),
    ])
    def test_rates_are_clamped(self, content_volume_settings, observed, stored):
        updated = update_volume_metrics(
            content_volume_settings,
            VolumeMetricsUpdate(completion_rate=observed, engagement_score=observed),
            NOW,
        )
        metrics = updated.user_behavior_metrics
        assert metrics.completion_rate == pytest.approx(stored)
        assert metrics.engagement_score == pytest.approx(stored)

    def test_negative_read_time_becomes_zero(self, content_volume_settings):
        updated = update_volume_metrics(
            content_volume_settings, VolumeMetricsUpdate(average_read_time=-5), NOW
        )
        assert updated.user_behavior_metrics.average_read_time == 0.0

    def test_only_given_fields_change(self, content_volume_settings):
        updated = update_volume_metrics(
            content_volume_settings, VolumeMetricsUpdate(average_read_time=95), NOW
        )
        metrics = updated.user_behavior_metrics
        assert metrics.average_read_time == 95
        assert metrics.completion_rate == 0.5
        assert metrics.last_updated == NOW

    def test_input_is_not_mutated(self, content_volume_settings):
        update_volume_metrics(content_volume_settings, VolumeMetricsUpdate(completion_rate=0.9), NOW)
        assert content_volume_settings.user_behavior_metrics.completion_rate == 0.5

    def test_empty_update_is_unchanged_copy(self, content_volume_settings):
        updated = update_volume_metrics(content_volume_settings, VolumeMetricsUpdate(), NOW)
        assert updated == content_volume_settings
        assert updated is not content_volume_settings


class TestPrioritizeContent:

    def test_ranks_and_filters_by_weighted_relevance(self, content_volume_settings):
        result = prioritize_content(content_volume_settings, [
            candidate("social", 1.0),
            candidate("article", 0.9),
            candidate("podcast", 1.0),
            candidate("paper", 1.0),
        ])

        assert [item.type for item in result] == ["paper", "article", "podcast"]
        assert result[0].priority_score == pytest.approx(0.9)
        assert result[1].priority_score == pytest.approx(0.72)

    def test_unknown_type_weighs_half(self, content_volume_settings):
        content_volume_settings.priority_threshold = 0.4
        result = prioritize_content(content_volume_settings, [candidate("video", 1.0)])
        assert result[0].priority_score == pytest.approx(0.5)

    def test_equal_scores_keep_arrival_order(self, content_volume_settings):
        result = prioritize_content(content_volume_settings, [
            candidate("article", 0.9, id="first"),
            candidate("article", 0.9, id="second"),
        ])
        assert [item.model_dump()["id"] for item in result] == ["first", "second"]

    def test_cut_to_adaptive_limit(self):
        settings = volume(daily_limit=2, adaptive_enabled=False)
        result = prioritize_content(settings, [candidate("paper", 1.0)] * 5)
        assert len(result) == 2

    def test_extra_fields_are_carried_through(self, content_volume_settings):
        result = prioritize_content(
            content_volume_settings,
            [candidate("paper", 0.95, id="c-1", title="Attention Is All You Need")],
        )
        dumped = result[0].model_dump()
        assert dumped["id"] == "c-1"
        assert dumped["title"] == "Attention Is All You Need"

    def test_empty_list(self, content_volume_settings):
        assert prioritize_content(content_volume_settings, []) == []
