"""
Digest settings API endpoints.

Stored digest settings per user, and schedule previews for both stored
and unsaved settings (the settings form previews as the user types).
"""

from fastapi import APIRouter, HTTPException

from personalization.api.deps import Store, UserIdPath
from personalization.core.logging import get_logger
from personalization.schemas.digest import (
    DigestSettings,
    DigestSettingsBody,
    SchedulePreview,
)
from personalization.services.digest_preview import (
    build_schedule_preview,
    validate_digest_settings,
)

logger = get_logger(__name__)

router = APIRouter(tags=["Digest"])


# ========================================
# Stored Settings
# ========================================


@router.get(
    "/users/{user_id}/digest",
    response_model=DigestSettings,
    summary="Get digest settings",
)
async def get_digest_settings(user_id: UserIdPath, store: Store):
    return await store.get_or_create_digest_settings(user_id)


@router.put(
    "/users/{user_id}/digest",
    response_model=DigestSettings,
    summary="Replace digest settings",
    responses={
        422: {"description": "Unknown frequency or day, bad time, or max items out of range"},
    },
)
async def replace_digest_settings(
    user_id: UserIdPath,
    body: DigestSettingsBody,
    store: Store,
):
    errors = validate_digest_settings(body)
    if errors:
        logger.info("digest_settings_rejected", user_id=user_id, errors=errors)
        raise HTTPException(
            status_code=422,
            detail={"errors": errors},
        )
    return await store.replace_digest_settings(user_id, body)


@router.post(
    "/users/{user_id}/digest/reset",
    response_model=DigestSettings,
    summary="Reset digest settings to defaults",
)
async def reset_digest_settings(user_id: UserIdPath, store: Store):
    return await store.reset_digest_settings(user_id)


@router.get(
    "/users/{user_id}/digest/preview",
    response_model=SchedulePreview,
    summary="Preview the stored digest schedule",
)
async def preview_stored_digest(user_id: UserIdPath, store: Store):
    """Schedule description of the stored settings, plus the next delivery time."""
    digest = await store.get_or_create_digest_settings(user_id)
    return build_schedule_preview(digest)


# ========================================
# Unsaved Settings
# ========================================


@router.post(
    "/digest/preview",
    response_model=SchedulePreview,
    summary="Preview a digest schedule without saving",
)
async def preview_digest(body: DigestSettingsBody):
    """
    Preview settings that have not been stored yet.

    Out-of-range max items are previewed as given; they are only rejected
    when saved.
    """
    return build_schedule_preview(body)
