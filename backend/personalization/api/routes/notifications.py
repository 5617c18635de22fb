"""
Notification settings API endpoints.

Channels, content-type flags and quiet hours for a user, plus a status
check that tells a dispatcher whether it may notify the user right now.
"""

import re
from datetime import datetime
from typing import Optional, Union

from fastapi import APIRouter, HTTPException, Query, status

from personalization.api.deps import Store, UserIdPath
from personalization.core.logging import get_logger
from personalization.schemas.notification import (
    ChannelName,
    ChannelSettings,
    NotificationPreferences,
    NotificationSettings,
    NotificationStatus,
)
from personalization.schemas.types import TIME_OF_DAY_PATTERN
from personalization.services.channel_frequency import get_channel_frequency
from personalization.services.quiet_hours import (
    is_notification_allowed,
    is_quiet_hours_active,
)

logger = get_logger(__name__)

router = APIRouter(prefix="/users/{user_id}/notifications", tags=["Notifications"])


# ========================================
# Helper Functions
# ========================================


def _parse_current_time(value: Optional[str]) -> Union[str, datetime, None]:
    """
    Accept "HH:MM" (quiet-hours local time) or an ISO 8601 datetime.

    Raises:
        HTTPException 422: for anything else
    """
    if value is None or re.match(TIME_OF_DAY_PATTERN, value):
        return value
    # fromisoformat only accepts the "Z" designator from Python 3.11
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise HTTPException(
            status_code=422,
            detail={"errors": [f"Invalid current_time: {value} (use HH:MM or ISO 8601)"]},
        )


def _parse_channel(channel: str) -> ChannelName:
    """Path value -> ChannelName, 404 for names outside the channel set."""
    try:
        return ChannelName(channel)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Unknown channel: {channel}. Must be one of: "
            + ", ".join(c.value for c in ChannelName),
        )


# ========================================
# Endpoints
# ========================================


@router.get(
    "",
    response_model=NotificationSettings,
    summary="Get notification settings",
    description="Returns the user's notification settings, creating defaults on first access.",
)
async def get_notification_settings(user_id: UserIdPath, store: Store):
    return await store.get_or_create_notification_settings(user_id)


@router.put(
    "",
    response_model=NotificationSettings,
    summary="Replace notification settings",
    responses={
        422: {"description": "Invalid frequency, time format or timezone"},
    },
)
async def replace_notification_settings(
    user_id: UserIdPath,
    body: NotificationPreferences,
    store: Store,
):
    """Whole-document replacement; omitted sections take their defaults."""
    return await store.replace_notification_settings(user_id, body)


@router.post(
    "/reset",
    response_model=NotificationSettings,
    summary="Reset notification settings to defaults",
)
async def reset_notification_settings(user_id: UserIdPath, store: Store):
    return await store.reset_notification_settings(user_id)


@router.put(
    "/channels/{channel}",
    response_model=ChannelSettings,
    summary="Update one channel",
    responses={
        404: {"description": "Channel is not email, push or digest"},
    },
)
async def update_channel_settings(
    user_id: UserIdPath,
    channel: str,
    body: ChannelSettings,
    store: Store,
):
    """Replace the settings of a single channel, leaving the others untouched."""
    channel_name = _parse_channel(channel)
    updated = await store.update_channel(user_id, channel_name, body)
    return getattr(updated.channels, channel_name.value)


@router.get(
    "/status",
    response_model=NotificationStatus,
    summary="Check whether notifications are allowed now",
    description=(
        "Evaluates quiet hours at `current_time` (HH:MM in the quiet-hours timezone, "
        "or an ISO 8601 datetime; defaults to now). Naive datetimes are read in "
        "`timezone`. With `channel`, also reports the channel's effective frequency; "
        "unknown channels report `never`."
    ),
)
async def get_notification_status(
    user_id: UserIdPath,
    store: Store,
    current_time: Optional[str] = Query(None, examples=["23:00"]),
    timezone: Optional[str] = Query(None, examples=["America/New_York"]),
    channel: Optional[str] = Query(None, examples=["email"]),
):
    moment = _parse_current_time(current_time)
    settings = await store.get_or_create_notification_settings(user_id)

    allowed = is_notification_allowed(settings.quiet_hours, moment, timezone)
    quiet_active = is_quiet_hours_active(settings.quiet_hours, moment, timezone)

    logger.info(
        "notification_status_checked",
        user_id=user_id,
        notifications_allowed=allowed,
        channel=channel,
    )

    return NotificationStatus(
        notifications_allowed=allowed,
        quiet_hours_active=quiet_active,
        channel=channel,
        channel_frequency=get_channel_frequency(settings, channel) if channel else None,
    )
