"""
Composite configuration schemas.

Every preference aggregate (notifications, summaries, digest, content
volume, discovery) is independent; callers compose them into one view
per user.
"""

from typing import Any

from pydantic import BaseModel

from personalization.schemas.content_volume import ContentVolumeSettings
from personalization.schemas.digest import DigestSettings
from personalization.schemas.discovery import DiscoverySettings
from personalization.schemas.notification import NotificationSettings
from personalization.schemas.summary import SummaryPreferences
from personalization.schemas.types import UserId


class EffectiveConfiguration(BaseModel):
    """Everything that personalizes delivery and summaries for one user."""

    user_id: UserId
    notifications: NotificationSettings
    summary_preferences: SummaryPreferences
    digest: DigestSettings
    content_volume: ContentVolumeSettings
    discovery: DiscoverySettings


class DefaultConfiguration(BaseModel):
    """Shared defaults, as served to the settings UI."""

    notifications: dict[str, Any]
    summary_preferences: dict[str, Any]
    digest: dict[str, Any]
    content_volume: dict[str, Any]
    discovery: dict[str, Any]
