"""
Preference Store

Loads and saves the preference aggregates of a user.

Every aggregate lives in its own table as one JSON document (see
models/preferences.py). The store is the only place that converts between
those rows and the pydantic schemas the rest of the service works with:

    store = PreferenceStore(db)
    prefs = await store.get_or_create_summary_preferences("user-1")
    length = calculate_adaptive_length(prefs, "paper")

Operations per aggregate:
- get_or_create_*: read, seeding the row with defaults on first access
- replace_*: whole-document replacement (creates the row if absent)
- reset_*: replace with defaults; rows are never deleted

Writes commit immediately. Documents are always reassigned, never mutated
in place, so SQLAlchemy sees every change to the JSON column.
"""

from datetime import datetime
from typing import Any, Optional, TypeVar

from pydantic import BaseModel as Schema
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from personalization.core.logging import get_logger
from personalization.models.preferences import (
    ContentVolumeSettingsRecord,
    DigestSettingsRecord,
    DiscoverySettingsRecord,
    NotificationSettingsRecord,
    SummaryPreferencesRecord,
)
from personalization.schemas.configuration import EffectiveConfiguration
from personalization.schemas.content_volume import (
    ContentVolumeSettings,
    ContentVolumeSettingsBody,
    VolumeMetricsUpdate,
)
from personalization.schemas.digest import DigestSettings, DigestSettingsBody
from personalization.schemas.discovery import (
    DiscoveryPreset,
    DiscoverySettings,
    DiscoverySettingsBody,
)
from personalization.schemas.notification import (
    ChannelName,
    ChannelSettings,
    NotificationPreferences,
    NotificationSettings,
)
from personalization.schemas.summary import (
    BehaviorMetricsUpdate,
    SummaryPreferences,
    SummaryPreferencesBody,
)
from personalization.services.behavior_metrics import update_behavior_metrics
from personalization.services.content_volume import update_volume_metrics
from personalization.services.discovery import apply_aggressiveness_level, preset_level

logger = get_logger(__name__)

Record = TypeVar(
    "Record",
    NotificationSettingsRecord,
    SummaryPreferencesRecord,
    DigestSettingsRecord,
    ContentVolumeSettingsRecord,
    DiscoverySettingsRecord,
)


def _document(schema: Schema) -> dict[str, Any]:
    """JSON-ready document for a schema instance, without the owner id."""
    return schema.model_dump(mode="json", exclude={"user_id"})


class PreferenceStore:
    """Async persistence for every preference aggregate of a user."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ========================================
    # Row Helpers
    # ========================================

    async def _get_record(self, model: type[Record], user_id: str) -> Optional[Record]:
        result = await self.db.execute(select(model).where(model.user_id == user_id))
        return result.scalar_one_or_none()

    async def _get_or_create_record(
        self,
        model: type[Record],
        user_id: str,
        default: Schema,
    ) -> Record:
        """
        Fetch a user's row, inserting `default` if there is none yet.

        Two requests can race to create the same row; the loser hits the
        unique constraint on user_id, rolls back and reads the winner's row.
        """
        record = await self._get_record(model, user_id)
        if record is not None:
            return record

        record = model(user_id=user_id, document=_document(default))
        self.db.add(record)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.info(
                "preference_record_create_race",
                table=model.__tablename__,
                user_id=user_id,
            )
            existing = await self._get_record(model, user_id)
            if existing is None:
                raise
            return existing

        await self.db.refresh(record)
        logger.info("preference_record_created", table=model.__tablename__, user_id=user_id)
        return record

    async def _write_record(
        self,
        model: type[Record],
        user_id: str,
        document: dict[str, Any],
        event: str,
    ) -> Record:
        """Store `document` as the user's row, creating the row if needed."""
        record = await self._get_record(model, user_id)
        if record is None:
            record = model(user_id=user_id, document=document)
            self.db.add(record)
        else:
            record.document = document

        await self.db.commit()
        await self.db.refresh(record)
        logger.info(event, table=model.__tablename__, user_id=user_id)
        return record

    # ========================================
    # Notification Settings
    # ========================================

    @staticmethod
    def _to_notification_settings(record: NotificationSettingsRecord) -> NotificationSettings:
        return NotificationSettings(user_id=record.user_id, **record.document)

    async def get_or_create_notification_settings(self, user_id: str) -> NotificationSettings:
        record = await self._get_or_create_record(
            NotificationSettingsRecord,
            user_id,
            NotificationSettings.defaults(user_id),
        )
        return self._to_notification_settings(record)

    async def replace_notification_settings(
        self,
        user_id: str,
        body: NotificationPreferences,
    ) -> NotificationSettings:
        record = await self._write_record(
            NotificationSettingsRecord,
            user_id,
            _document(body),
            "notification_settings_replaced",
        )
        return self._to_notification_settings(record)

    async def reset_notification_settings(self, user_id: str) -> NotificationSettings:
        record = await self._write_record(
            NotificationSettingsRecord,
            user_id,
            _document(NotificationSettings.defaults(user_id)),
            "notification_settings_reset",
        )
        return self._to_notification_settings(record)

    async def update_channel(
        self,
        user_id: str,
        channel: ChannelName,
        channel_settings: ChannelSettings,
    ) -> NotificationSettings:
        """Replace the settings of a single channel, keeping the rest of the document."""
        current = await self.get_or_create_notification_settings(user_id)
        updated = current.model_copy(deep=True)
        setattr(updated.channels, ChannelName(channel).value, channel_settings)

        record = await self._write_record(
            NotificationSettingsRecord,
            user_id,
            _document(updated),
            "notification_channel_updated",
        )
        return self._to_notification_settings(record)

    # ========================================
    # Summary Preferences
    # ========================================

    @staticmethod
    def _to_summary_preferences(record: SummaryPreferencesRecord) -> SummaryPreferences:
        return SummaryPreferences(user_id=record.user_id, **record.document)

    async def get_or_create_summary_preferences(self, user_id: str) -> SummaryPreferences:
        record = await self._get_or_create_record(
            SummaryPreferencesRecord,
            user_id,
            SummaryPreferences.defaults(user_id),
        )
        return self._to_summary_preferences(record)

    async def replace_summary_preferences(
        self,
        user_id: str,
        body: SummaryPreferencesBody,
    ) -> SummaryPreferences:
        record = await self._write_record(
            SummaryPreferencesRecord,
            user_id,
            _document(body),
            "summary_preferences_replaced",
        )
        return self._to_summary_preferences(record)

    async def reset_summary_preferences(self, user_id: str) -> SummaryPreferences:
        record = await self._write_record(
            SummaryPreferencesRecord,
            user_id,
            _document(SummaryPreferences.defaults(user_id)),
            "summary_preferences_reset",
        )
        return self._to_summary_preferences(record)

    async def save_behavior_metrics(
        self,
        user_id: str,
        update: BehaviorMetricsUpdate,
        now: Optional[datetime] = None,
    ) -> SummaryPreferences:
        """Apply a behavior observation and persist the result."""
        current = await self.get_or_create_summary_preferences(user_id)
        if update.is_empty():
            return current

        updated = update_behavior_metrics(current, update, now=now)
        record = await self._write_record(
            SummaryPreferencesRecord,
            user_id,
            _document(updated),
            "behavior_metrics_saved",
        )
        return self._to_summary_preferences(record)

    # ========================================
    # Digest Settings
    # ========================================

    @staticmethod
    def _to_digest_settings(record: DigestSettingsRecord) -> DigestSettings:
        return DigestSettings(user_id=record.user_id, **record.document)

    async def get_or_create_digest_settings(self, user_id: str) -> DigestSettings:
        record = await self._get_or_create_record(
            DigestSettingsRecord,
            user_id,
            DigestSettings.defaults(user_id),
        )
        return self._to_digest_settings(record)

    async def replace_digest_settings(
        self,
        user_id: str,
        body: DigestSettingsBody,
    ) -> DigestSettings:
        record = await self._write_record(
            DigestSettingsRecord,
            user_id,
            _document(body),
            "digest_settings_replaced",
        )
        return self._to_digest_settings(record)

    async def reset_digest_settings(self, user_id: str) -> DigestSettings:
        record = await self._write_record(
            DigestSettingsRecord,
            user_id,
            _document(DigestSettings.defaults(user_id)),
            "digest_settings_reset",
        )
        return self._to_digest_settings(record)

    # ========================================
    # Content Volume Settings
    # ========================================

    @staticmethod
    def _to_content_volume_settings(record: ContentVolumeSettingsRecord) -> ContentVolumeSettings:
        return ContentVolumeSettings(user_id=record.user_id, **record.document)

    async def get_or_create_content_volume_settings(self, user_id: str) -> ContentVolumeSettings:
        record = await self._get_or_create_record(
            ContentVolumeSettingsRecord,
            user_id,
            ContentVolumeSettings.defaults(user_id),
        )
        return self._to_content_volume_settings(record)

    async def replace_content_volume_settings(
        self,
        user_id: str,
        body: ContentVolumeSettingsBody,
    ) -> ContentVolumeSettings:
        record = await self._write_record(
            ContentVolumeSettingsRecord,
            user_id,
            _document(body),
            "content_volume_settings_replaced",
        )
        return self._to_content_volume_settings(record)

    async def reset_content_volume_settings(self, user_id: str) -> ContentVolumeSettings:
        record = await self._write_record(
            ContentVolumeSettingsRecord,
            user_id,
            _document(ContentVolumeSettings.defaults(user_id)),
            "content_volume_settings_reset",
        )
        return self._to_content_volume_settings(record)

    async def save_volume_metrics(
        self,
        user_id: str,
        update: VolumeMetricsUpdate,
        now: Optional[datetime] = None,
    ) -> ContentVolumeSettings:
        """Apply a consumption observation and persist the result."""
        current = await self.get_or_create_content_volume_settings(user_id)
        if update.is_empty():
            return current

        updated = update_volume_metrics(current, update, now=now)
        record = await self._write_record(
            ContentVolumeSettingsRecord,
            user_id,
            _document(updated),
            "volume_metrics_saved",
        )
        return self._to_content_volume_settings(record)

    # ========================================
    # Discovery Settings
    # ========================================

    @staticmethod
    def _to_discovery_settings(record: DiscoverySettingsRecord) -> DiscoverySettings:
        return DiscoverySettings(user_id=record.user_id, **record.document)

    async def get_or_create_discovery_settings(self, user_id: str) -> DiscoverySettings:
        record = await self._get_or_create_record(
            DiscoverySettingsRecord,
            user_id,
            DiscoverySettings.defaults(user_id),
        )
        return self._to_discovery_settings(record)

    async def replace_discovery_settings(
        self,
        user_id: str,
        body: DiscoverySettingsBody,
    ) -> DiscoverySettings:
        record = await self._write_record(
            DiscoverySettingsRecord,
            user_id,
            _document(body),
            "discovery_settings_replaced",
        )
        return self._to_discovery_settings(record)

    async def reset_discovery_settings(self, user_id: str) -> DiscoverySettings:
        record = await self._write_record(
            DiscoverySettingsRecord,
            user_id,
            _document(DiscoverySettings.defaults(user_id)),
            "discovery_settings_reset",
        )
        return self._to_discovery_settings(record)

    async def set_discovery_aggressiveness(self, user_id: str, level: float) -> DiscoverySettings:
        """Recompute thresholds and depth from `level` and persist them."""
        current = await self.get_or_create_discovery_settings(user_id)
        updated = apply_aggressiveness_level(current, level)
        record = await self._write_record(
            DiscoverySettingsRecord,
            user_id,
            _document(updated),
            "discovery_aggressiveness_saved",
        )
        return self._to_discovery_settings(record)

    async def apply_discovery_preset(
        self,
        user_id: str,
        preset: DiscoveryPreset,
    ) -> DiscoverySettings:
        logger.info("discovery_preset_applied", user_id=user_id, preset=str(preset))
        return await self.set_discovery_aggressiveness(user_id, preset_level(preset))

    # ========================================
    # Composite
    # ========================================

    async def get_effective_configuration(self, user_id: str) -> EffectiveConfiguration:
        """Every aggregate of a user, seeding any that are missing."""
        return EffectiveConfiguration(
            user_id=user_id,
            notifications=await self.get_or_create_notification_settings(user_id),
            summary_preferences=await self.get_or_create_summary_preferences(user_id),
            digest=await self.get_or_create_digest_settings(user_id),
            content_volume=await self.get_or_create_content_volume_settings(user_id),
            discovery=await self.get_or_create_discovery_settings(user_id),
        )
