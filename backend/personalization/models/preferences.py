"""
Preference Models

One row per user per aggregate. Each aggregate is stored as a single JSON
document validated by its pydantic schema before it is written:

    Table                    Document schema
    -----------------------  --------------------------------------------
    notification_settings    schemas.notification.NotificationPreferences
    summary_preferences      schemas.summary.SummaryPreferencesBody
    digest_settings          schemas.digest.DigestSettingsBody
    content_volume_settings  schemas.content_volume.ContentVolumeSettingsBody
    discovery_settings       schemas.discovery.DiscoverySettingsBody

Documents
---------
The settings UI reads and writes an aggregate as a whole, including its
nested shapes (channel map, per-content-type preferences, per-tier budgets).
The database only looks rows up by user_id; everything inside the document
belongs to the schema layer.

Table: every preference table
-----------------------------
Inherits from BaseModel, which provides:
- id (int, primary key, auto-increment)
- created_at (datetime, UTC, set on creation)
- updated_at (datetime, UTC, updates automatically)
"""

from typing import Any

from sqlalchemy.orm import Mapped, mapped_column

from personalization.db.base import BaseModel, JSONDocument, String255


class PreferenceDocumentMixin:
    """Columns shared by the preference tables."""

    # Opaque identifier from the auth service; there is no users table here
    user_id: Mapped[str] = mapped_column(
        String255,
        unique=True,
        index=True,
        nullable=False,
        comment="Owner of this preference document",
    )

    document: Mapped[dict[str, Any]] = mapped_column(
        JSONDocument,
        nullable=False,
        default=dict,
        comment="Preference document serialized by its pydantic schema",
    )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id}, user_id={self.user_id!r})"


# ================================
# Notification Settings
# ================================

class NotificationSettingsRecord(PreferenceDocumentMixin, BaseModel):
    """Channels, content-type flags and quiet hours for one user."""

    __tablename__ = "notification_settings"


# ================================
# Summary Preferences
# ================================

class SummaryPreferencesRecord(PreferenceDocumentMixin, BaseModel):
    """
    Summary shape preferences for one user.

    The behavior metrics inside the document are rewritten by
    PreferenceStore.save_behavior_metrics() whenever the reading tracker
    reports a new observation.
    """

    __tablename__ = "summary_preferences"


# ================================
# Digest Settings
# ================================

class DigestSettingsRecord(PreferenceDocumentMixin, BaseModel):
    """Digest cadence and content mix for one user."""

    __tablename__ = "digest_settings"


# ================================
# Content Volume Settings
# ================================

class ContentVolumeSettingsRecord(PreferenceDocumentMixin, BaseModel):
    """Daily item cap, type weights and consumption metrics for one user."""

    __tablename__ = "content_volume_settings"


# ================================
# Discovery Settings
# ================================

class DiscoverySettingsRecord(PreferenceDocumentMixin, BaseModel):
    """Thresholds for automatically discovered content for one user."""

    __tablename__ = "discovery_settings"
