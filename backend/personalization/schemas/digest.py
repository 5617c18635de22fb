"""
Pydantic schemas for digest delivery settings and schedule previews.
"""

import enum
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from personalization.core.defaults import DEFAULT_DIGEST_SETTINGS
from personalization.schemas.types import TimeOfDay, TimezoneName, UserId


class DigestFrequency(str, enum.Enum):
    """Digest cadences offered by the settings UI."""

    DAILY = "daily"
    TWICE_WEEKLY = "twice-weekly"
    WEEKLY = "weekly"

    def __str__(self) -> str:
        return self.value


class Weekday(str, enum.Enum):
    """Day names, ordered the way datetime.weekday() numbers them."""

    MONDAY = "monday"
    TUESDAY = "tuesday"
    WEDNESDAY = "wednesday"
    THURSDAY = "thursday"
    FRIDAY = "friday"
    SATURDAY = "saturday"
    SUNDAY = "sunday"

    def __str__(self) -> str:
        return self.value

    @property
    def index(self) -> int:
        """0 for Monday ... 6 for Sunday."""
        return list(Weekday).index(self)

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


class DigestSettingsBody(BaseModel):
    """Digest settings document body."""

    enabled: bool = DEFAULT_DIGEST_SETTINGS["enabled"]
    frequency: DigestFrequency = DigestFrequency(DEFAULT_DIGEST_SETTINGS["frequency"])
    delivery_time: TimeOfDay = DEFAULT_DIGEST_SETTINGS["delivery_time"]
    weekly_day: Weekday = Weekday(DEFAULT_DIGEST_SETTINGS["weekly_day"])
    # Range is checked by validate_digest_settings()
    max_items: int = DEFAULT_DIGEST_SETTINGS["max_items"]
    timezone: TimezoneName = DEFAULT_DIGEST_SETTINGS["timezone"]
    include_breaking_news: bool = DEFAULT_DIGEST_SETTINGS["include_breaking_news"]
    include_top_stories: bool = DEFAULT_DIGEST_SETTINGS["include_top_stories"]
    include_personalized: bool = DEFAULT_DIGEST_SETTINGS["include_personalized"]
    include_trending: bool = DEFAULT_DIGEST_SETTINGS["include_trending"]


class DigestSettings(DigestSettingsBody):
    """Digest settings for one user."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UserId

    @classmethod
    def defaults(cls, user_id: str) -> "DigestSettings":
        return cls(user_id=user_id)


class ScheduleEntry(BaseModel):
    """One human-readable line of a digest schedule preview."""

    type: str = Field(..., examples=["Weekly Digest"])
    time: str = Field(..., examples=["Every Monday at 09:00"])
    items: str = Field(..., examples=["Up to 70 items"])


class SchedulePreview(BaseModel):
    """Digest schedule preview plus the next delivery instant, if any."""

    entries: list[ScheduleEntry]
    next_delivery: Optional[datetime] = None
