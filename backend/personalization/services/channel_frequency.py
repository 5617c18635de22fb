"""Effective delivery frequency per notification channel."""

from personalization.schemas.notification import (
    NotificationFrequency,
    NotificationSettings,
)


def get_channel_frequency(
    settings: NotificationSettings,
    channel_name: str,
) -> NotificationFrequency:
    """
    Frequency a channel actually delivers at.

    Disabled channels and names outside the channel set resolve to NEVER.
    """
    channel = settings.channels.get(channel_name)
    if channel is None or not channel.enabled:
        return NotificationFrequency.NEVER
    return channel.frequency
