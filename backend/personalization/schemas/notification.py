"""
Pydantic schemas for notification settings.

A NotificationSettings document holds, for one user:
- channels: email / push / digest delivery settings
- content_types: which kinds of events may notify at all
- quiet_hours: a daily blackout window
"""

import enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from personalization.core.defaults import (
    DEFAULT_CHANNELS,
    DEFAULT_CONTENT_TYPE_FLAGS,
    DEFAULT_QUIET_HOURS,
)
from personalization.schemas.types import TimeOfDay, TimezoneName, UserId


# ========================================
# Enums
# ========================================


class NotificationFrequency(str, enum.Enum):
    """How often a channel delivers. NEVER is also the disabled-channel sentinel."""

    IMMEDIATE = "immediate"
    HOURLY = "hourly"
    DAILY = "daily"
    WEEKLY = "weekly"
    NEVER = "never"

    def __str__(self) -> str:
        return self.value


class ChannelName(str, enum.Enum):
    """The fixed set of delivery channels."""

    EMAIL = "email"
    PUSH = "push"
    DIGEST = "digest"

    def __str__(self) -> str:
        return self.value


# ========================================
# Document Parts
# ========================================


class ChannelSettings(BaseModel):
    """Delivery settings for a single channel."""

    enabled: bool = True
    frequency: NotificationFrequency = NotificationFrequency.DAILY
    time: Optional[TimeOfDay] = Field(
        None,
        description="Delivery time for scheduled channels (HH:MM)",
    )
    timezone: Optional[TimezoneName] = None


def _default_channel(name: str):
    return lambda: ChannelSettings(**DEFAULT_CHANNELS[name])


class NotificationChannels(BaseModel):
    """Settings for every channel in the fixed channel set."""

    email: ChannelSettings = Field(default_factory=_default_channel("email"))
    push: ChannelSettings = Field(default_factory=_default_channel("push"))
    digest: ChannelSettings = Field(default_factory=_default_channel("digest"))

    def get(self, name: str) -> Optional[ChannelSettings]:
        """Look up a channel by name; None for names outside the channel set."""
        try:
            channel = ChannelName(name)
        except ValueError:
            return None
        return getattr(self, channel.value)


class ContentTypeFlags(BaseModel):
    """Which categories of events are allowed to produce notifications."""

    breaking_news: bool = DEFAULT_CONTENT_TYPE_FLAGS["breaking_news"]
    new_content: bool = DEFAULT_CONTENT_TYPE_FLAGS["new_content"]
    weekly_digest: bool = DEFAULT_CONTENT_TYPE_FLAGS["weekly_digest"]
    system_updates: bool = DEFAULT_CONTENT_TYPE_FLAGS["system_updates"]


class QuietHours(BaseModel):
    """
    Daily blackout window.

    start > end means the window wraps past midnight (22:00 -> 08:00).
    """

    enabled: bool = DEFAULT_QUIET_HOURS["enabled"]
    start: TimeOfDay = DEFAULT_QUIET_HOURS["start"]
    end: TimeOfDay = DEFAULT_QUIET_HOURS["end"]
    timezone: TimezoneName = DEFAULT_QUIET_HOURS["timezone"]


# ========================================
# Documents
# ========================================


class NotificationPreferences(BaseModel):
    """Notification settings document body (whole-document replacement)."""

    channels: NotificationChannels = Field(default_factory=NotificationChannels)
    content_types: ContentTypeFlags = Field(default_factory=ContentTypeFlags)
    quiet_hours: QuietHours = Field(default_factory=QuietHours)


class NotificationSettings(NotificationPreferences):
    """Notification settings for one user."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UserId

    @classmethod
    def defaults(cls, user_id: str) -> "NotificationSettings":
        """Fresh settings seeded with the shared defaults."""
        return cls(user_id=user_id)


# ========================================
# Response Schemas
# ========================================


class NotificationStatus(BaseModel):
    """Whether a notification may be sent right now."""

    notifications_allowed: bool
    quiet_hours_active: bool
    channel: Optional[str] = None
    channel_frequency: Optional[NotificationFrequency] = None
