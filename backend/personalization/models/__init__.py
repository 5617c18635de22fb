"""
Database Models

Import models from this module to ensure they're registered with SQLAlchemy:

    from personalization.models import DigestSettingsRecord

Alembic's env.py imports this package so autogenerate sees every table.
"""

from personalization.models.preferences import (
    ContentVolumeSettingsRecord,
    DigestSettingsRecord,
    DiscoverySettingsRecord,
    NotificationSettingsRecord,
    SummaryPreferencesRecord,
)

__all__ = [
    "NotificationSettingsRecord",
    "SummaryPreferencesRecord",
    "DigestSettingsRecord",
    "ContentVolumeSettingsRecord",
    "DiscoverySettingsRecord",
]
