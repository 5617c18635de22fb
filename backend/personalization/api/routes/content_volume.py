"""
Content volume API endpoints.

The daily item cap of a user and its behavior-adjusted value. Consumption
observations move the cap; candidate lists are ranked against it.
"""

from fastapi import APIRouter

from personalization.api.deps import Store, UserIdPath
from personalization.schemas.content_volume import (
    AdaptiveLimit,
    ContentVolumeSettings,
    ContentVolumeSettingsBody,
    PrioritizationResult,
    PrioritizeRequest,
    VolumeMetricsUpdate,
)
from personalization.services.content_volume import (
    calculate_adaptive_limit,
    prioritize_content,
)

router = APIRouter(
    prefix="/users/{user_id}/content-volume",
    tags=["Content Volume"],
)


@router.get(
    "",
    response_model=ContentVolumeSettings,
    summary="Get content volume settings",
    description="Returns the user's content volume settings, creating defaults on first access.",
)
async def get_content_volume_settings(user_id: UserIdPath, store: Store):
    return await store.get_or_create_content_volume_settings(user_id)


@router.put(
    "",
    response_model=ContentVolumeSettings,
    summary="Replace content volume settings",
    responses={
        422: {"description": "Daily limit outside 1-1000 or threshold outside 0-1"},
    },
)
async def replace_content_volume_settings(
    user_id: UserIdPath,
    body: ContentVolumeSettingsBody,
    store: Store,
):
    return await store.replace_content_volume_settings(user_id, body)


@router.post(
    "/reset",
    response_model=ContentVolumeSettings,
    summary="Reset content volume settings to defaults",
)
async def reset_content_volume_settings(user_id: UserIdPath, store: Store):
    return await store.reset_content_volume_settings(user_id)


@router.put(
    "/behavior",
    response_model=ContentVolumeSettings,
    summary="Record content consumption",
)
async def update_volume_metrics(
    user_id: UserIdPath,
    body: VolumeMetricsUpdate,
    store: Store,
):
    """
    Merge a partial observation into the stored metrics.

    Completion rate and engagement score are clamped to 0-1; fields left
    out are unchanged.
    """
    return await store.save_volume_metrics(user_id, body)


@router.get(
    "/adaptive-limit",
    response_model=AdaptiveLimit,
    summary="Compute the adaptive daily limit",
)
async def get_adaptive_limit(user_id: UserIdPath, store: Store):
    settings = await store.get_or_create_content_volume_settings(user_id)
    return AdaptiveLimit(
        daily_limit=settings.daily_limit,
        adaptive_limit=calculate_adaptive_limit(settings),
        adaptive_enabled=settings.adaptive_enabled,
        user_behavior_metrics=settings.user_behavior_metrics,
    )


@router.post(
    "/prioritize",
    response_model=PrioritizationResult,
    summary="Prioritize candidate content",
)
async def prioritize(user_id: UserIdPath, body: PrioritizeRequest, store: Store):
    """
    Rank candidates by relevance times content type weight. Only those at
    or above the priority threshold are kept, up to the adaptive limit.

    Extra fields on each candidate are returned unchanged.
    """
    settings = await store.get_or_create_content_volume_settings(user_id)
    kept = prioritize_content(settings, body.content)

    return PrioritizationResult(
        prioritized_content=kept,
        total_original=len(body.content),
        total_prioritized=len(kept),
        adaptive_limit=calculate_adaptive_limit(settings),
        priority_threshold=settings.priority_threshold,
    )
