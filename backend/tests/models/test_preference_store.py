"""
Tests for the preference models and PreferenceStore.

Runs against an in-memory SQLite database (see conftest.py).
"""

from datetime import datetime, timezone

import pytest
from sqlalchemy import func, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from personalization.models import (
    ContentVolumeSettingsRecord,
    DigestSettingsRecord,
    DiscoverySettingsRecord,
    NotificationSettingsRecord,
    SummaryPreferencesRecord,
)
from personalization.schemas.content_volume import ContentVolumeSettingsBody, VolumeMetricsUpdate
from personalization.schemas.digest import DigestFrequency, DigestSettingsBody
from personalization.schemas.discovery import DiscoveryPreset, DiscoverySettingsBody
from personalization.schemas.notification import (
    ChannelName,
    ChannelSettings,
    NotificationFrequency,
    NotificationPreferences,
    QuietHours,
)
from personalization.schemas.summary import (
    BehaviorMetricsUpdate,
    LengthParameter,
    SummaryLength,
    SummaryPreferencesBody,
)
from personalization.services.preference_store import PreferenceStore


async def count_rows(session: AsyncSession, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


@pytest.mark.asyncio
class TestGetOrCreate:

    async def test_first_access_seeds_defaults(self, store: PreferenceStore, db_session):
        settings = await store.get_or_create_notification_settings("user-1")

        assert settings.user_id == "user-1"
        assert settings.channels.push.enabled is False
        assert await count_rows(db_session, NotificationSettingsRecord) == 1

    async def test_second_access_reuses_row(self, store: PreferenceStore, db_session):
        await store.get_or_create_digest_settings("user-1")
        await store.get_or_create_digest_settings("user-1")
        assert await count_rows(db_session, DigestSettingsRecord) == 1

    async def test_users_are_isolated(self, store: PreferenceStore, db_session):
        await store.replace_digest_settings("user-1", DigestSettingsBody(max_items=25))
        other = await store.get_or_create_digest_settings("user-2")

        assert other.max_items == 10
        assert await count_rows(db_session, DigestSettingsRecord) == 2

    async def test_record_columns(self, store: PreferenceStore, db_session):
        await store.get_or_create_summary_preferences("user-1")
        result = await db_session.execute(select(SummaryPreferencesRecord))
        record = result.scalar_one()

        assert record.user_id == "user-1"
        assert record.document["default_length"] == "standard"
        assert record.document["length_parameters"]["brief"] == {"max_words": 50, "max_sentences": 3}
        assert "user_id" not in record.document
        assert record.created_at is not None
        assert "user_id='user-1'" in repr(record)

    async def test_create_race_returns_winning_row(
        self, store: PreferenceStore, db_session, monkeypatch
    ):
        """Another request inserts the row between our read and our insert."""
        original_get_record = store._get_record
        calls = []

        async def get_record_with_competing_insert(model, user_id):
            calls.append(user_id)
            record = await original_get_record(model, user_id)
            if len(calls) == 1:
                winner = SummaryPreferencesBody(default_length=SummaryLength.BRIEF)
                await db_session.execute(
                    insert(SummaryPreferencesRecord).values(
                        user_id=user_id, document=winner.model_dump(mode="json")
                    )
                )
                await db_session.commit()
            return record

        monkeypatch.setattr(store, "_get_record", get_record_with_competing_insert)

        prefs = await store.get_or_create_summary_preferences("user-1")

        assert prefs.default_length == SummaryLength.BRIEF
        assert len(calls) == 2
        assert await count_rows(db_session, SummaryPreferencesRecord) == 1


@pytest.mark.asyncio
class TestReplaceAndReset:

    async def test_replace_notification_settings(self, store: PreferenceStore):
        body = NotificationPreferences(
            quiet_hours=QuietHours(enabled=True, start="23:00", end="07:00", timezone="Europe/Berlin"),
        )
        saved = await store.replace_notification_settings("user-1", body)
        loaded = await store.get_or_create_notification_settings("user-1")

        assert saved == loaded
        assert loaded.quiet_hours.enabled is True
        assert loaded.quiet_hours.timezone == "Europe/Berlin"

    async def test_replace_creates_missing_row(self, store: PreferenceStore, db_session):
        await store.replace_summary_preferences(
            "user-1", SummaryPreferencesBody(default_length=SummaryLength.BRIEF)
        )
        loaded = await store.get_or_create_summary_preferences("user-1")

        assert loaded.default_length == SummaryLength.BRIEF
        assert await count_rows(db_session, SummaryPreferencesRecord) == 1

    async def test_length_parameters_round_trip(self, store: PreferenceStore):
        body = SummaryPreferencesBody()
        body.length_parameters[SummaryLength.DETAILED] = LengthParameter(max_words=420, max_sentences=18)
        await store.replace_summary_preferences("user-1", body)

        loaded = await store.get_or_create_summary_preferences("user-1")
        assert loaded.length_parameters[SummaryLength.DETAILED].max_words == 420

    async def test_reset_restores_defaults_without_deleting(self, store: PreferenceStore, db_session):
        await store.replace_digest_settings(
            "user-1", DigestSettingsBody(frequency=DigestFrequency.WEEKLY, max_items=30)
        )
        reset = await store.reset_digest_settings("user-1")

        assert reset.frequency == DigestFrequency.DAILY
        assert reset.max_items == 10
        assert await count_rows(db_session, DigestSettingsRecord) == 1

    async def test_reset_notification_settings(self, store: PreferenceStore):
        await store.replace_notification_settings(
            "user-1",
            NotificationPreferences(quiet_hours=QuietHours(enabled=True)),
        )
        reset = await store.reset_notification_settings("user-1")
        assert reset.quiet_hours.enabled is False

    async def test_reset_summary_preferences(self, store: PreferenceStore):
        await store.replace_summary_preferences(
            "user-1", SummaryPreferencesBody(default_length=SummaryLength.COMPREHENSIVE)
        )
        reset = await store.reset_summary_preferences("user-1")
        assert reset.default_length == SummaryLength.STANDARD

    async def test_update_channel_keeps_other_channels(self, store: PreferenceStore):
        updated = await store.update_channel(
            "user-1",
            ChannelName.PUSH,
            ChannelSettings(enabled=True, frequency=NotificationFrequency.HOURLY),
        )

        assert updated.channels.push.enabled is True
        assert updated.channels.push.frequency == NotificationFrequency.HOURLY
        assert updated.channels.email.frequency == NotificationFrequency.DAILY
        assert updated.channels.digest.time == "09:00"


@pytest.mark.asyncio
class TestBehaviorMetrics:

    async def test_saved_metrics_are_clamped(self, store: PreferenceStore):
        now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
        saved = await store.save_behavior_metrics(
            "user-1",
            BehaviorMetricsUpdate(average_reading_speed=2000, engagement_with_summaries=0.9),
            now=now,
        )
        loaded = await store.get_or_create_summary_preferences("user-1")

        assert saved.user_behavior_metrics.average_reading_speed == 1000
        assert loaded.user_behavior_metrics.average_reading_speed == 1000
        assert loaded.user_behavior_metrics.engagement_with_summaries == 0.9
        assert loaded.user_behavior_metrics.last_updated == now

    async def test_empty_update_changes_nothing(self, store: PreferenceStore):
        before = await store.get_or_create_summary_preferences("user-1")
        after = await store.save_behavior_metrics("user-1", BehaviorMetricsUpdate())
        assert after == before


@pytest.mark.asyncio
class TestContentVolumeSettings:

    async def test_first_access_seeds_defaults(self, store: PreferenceStore, db_session):
        settings = await store.get_or_create_content_volume_settings("user-1")

        assert settings.daily_limit == 50
        assert settings.content_type_weights["paper"] == 0.9
        assert await count_rows(db_session, ContentVolumeSettingsRecord) == 1

    async def test_replace_and_reset(self, store: PreferenceStore):
        saved = await store.replace_content_volume_settings(
            "user-1", ContentVolumeSettingsBody(daily_limit=120, adaptive_enabled=False)
        )
        assert saved.daily_limit == 120

        reset = await store.reset_content_volume_settings("user-1")
        assert reset.daily_limit == 50
        assert reset.adaptive_enabled is True

    async def test_saved_metrics_are_clamped(self, store: PreferenceStore):
        now = datetime(2024, 6, 1, 12, 0, tzinfo=timezone.utc)
        await store.save_volume_metrics(
            "user-1",
            VolumeMetricsUpdate(completion_rate=1.4, engagement_score=0.85),
            now=now,
        )
        loaded = await store.get_or_create_content_volume_settings("user-1")

        assert loaded.user_behavior_metrics.completion_rate == 1.0
        assert loaded.user_behavior_metrics.engagement_score == 0.85
        assert loaded.user_behavior_metrics.last_updated == now

    async def test_empty_metrics_update_changes_nothing(self, store: PreferenceStore):
        before = await store.get_or_create_content_volume_settings("user-1")
        after = await store.save_volume_metrics("user-1", VolumeMetricsUpdate())
        assert after == before


@pytest.mark.asyncio
class TestDiscoverySettings:

    async def test_first_access_seeds_defaults(self, store: PreferenceStore, db_session):
        settings = await store.get_or_create_discovery_settings("user-1")

        assert settings.aggressiveness_level == 0.5
        assert settings.source_discovery.max_discovery_depth == 2
        assert await count_rows(db_session, DiscoverySettingsRecord) == 1

    async def test_aggressiveness_is_persisted(self, store: PreferenceStore):
        await store.set_discovery_aggressiveness("user-1", 0.9)
        loaded = await store.get_or_create_discovery_settings("user-1")

        assert loaded.aggressiveness_level == 0.9
        assert loaded.auto_inclusion_threshold == pytest.approx(0.54)
        assert loaded.source_discovery.max_discovery_depth == 3

    async def test_preset(self, store: PreferenceStore):
        applied = await store.apply_discovery_preset("user-1", DiscoveryPreset.CONSERVATIVE)

        assert applied.aggressiveness_level == 0.2
        assert applied.source_discovery.max_discovery_depth == 1

    async def test_replace_and_reset(self, store: PreferenceStore):
        await store.replace_discovery_settings(
            "user-1", DiscoverySettingsBody(auto_inclusion_threshold=0.95)
        )
        reset = await store.reset_discovery_settings("user-1")
        assert reset.auto_inclusion_threshold == 0.7


@pytest.mark.asyncio
class TestEffectiveConfiguration:

    async def test_combines_all_aggregates(self, store: PreferenceStore, db_session):
        await store.replace_digest_settings("user-1", DigestSettingsBody(max_items=20))
        config = await store.get_effective_configuration("user-1")

        assert config.user_id == "user-1"
        assert config.digest.max_items == 20
        assert config.notifications.channels.email.enabled is True
        assert config.summary_preferences.default_length == SummaryLength.STANDARD
        assert await count_rows(db_session, NotificationSettingsRecord) == 1
        assert await count_rows(db_session, SummaryPreferencesRecord) == 1
        assert config.content_volume.daily_limit == 50
        assert config.discovery.aggressiveness_level == 0.5
        assert await count_rows(db_session, DiscoverySettingsRecord) == 1
