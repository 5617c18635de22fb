"""
Summary preferences API endpoints.

Stored preferences, resolved summary parameters per content type, the
adaptive length tier, and ingestion of reading-behavior observations.
"""

from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from personalization.api.deps import Store, UserIdPath
from personalization.core.logging import get_logger
from personalization.schemas.summary import (
    AdaptiveLengthContext,
    AdaptiveLengthResult,
    BehaviorMetricsUpdate,
    SummaryLength,
    SummaryParameters,
    SummaryPreferences,
    SummaryPreferencesBody,
    ValidationReport,
)
from personalization.services.adaptive_length import calculate_adaptive_length
from personalization.services.config_validator import validate_configuration
from personalization.services.summary_parameters import (
    get_summary_parameters,
    resolve_base_length,
)

logger = get_logger(__name__)

router = APIRouter(
    prefix="/users/{user_id}/summary-preferences",
    tags=["Summary Preferences"],
)


# ========================================
# Endpoints
# ========================================


@router.get(
    "",
    response_model=SummaryPreferences,
    summary="Get summary preferences",
    description="Returns the user's summary preferences, creating defaults on first access.",
)
async def get_summary_preferences(user_id: UserIdPath, store: Store):
    return await store.get_or_create_summary_preferences(user_id)


@router.put(
    "",
    response_model=SummaryPreferences,
    summary="Replace summary preferences",
    responses={
        422: {"description": "Invalid tier names, or length parameters out of range"},
    },
)
async def replace_summary_preferences(
    user_id: UserIdPath,
    body: SummaryPreferencesBody,
    store: Store,
):
    """
    Whole-document replacement.

    Length parameters are range-checked before anything is written; every
    violation is reported at once:

        {"detail": {"errors": ["Invalid maxWords for brief: must be between 20 and 1000"]}}
    """
    errors = validate_configuration(body)
    if errors:
        logger.info("summary_preferences_rejected", user_id=user_id, errors=errors)
        raise HTTPException(
            status_code=422,
            detail={"errors": errors},
        )
    return await store.replace_summary_preferences(user_id, body)


@router.post(
    "/reset",
    response_model=SummaryPreferences,
    summary="Reset summary preferences to defaults",
)
async def reset_summary_preferences(user_id: UserIdPath, store: Store):
    return await store.reset_summary_preferences(user_id)


@router.get(
    "/parameters/{content_type}",
    response_model=SummaryParameters,
    summary="Resolve summary parameters for a content type",
    description=(
        "Tier, word/sentence budget and section flags for `content_type`. "
        "`length` overrides the stored tier. Unknown content types use the "
        "default tier and the generic section flags."
    ),
)
async def get_parameters(
    user_id: UserIdPath,
    content_type: str,
    store: Store,
    length: Optional[SummaryLength] = Query(None),
):
    preferences = await store.get_or_create_summary_preferences(user_id)
    return get_summary_parameters(preferences, content_type, length)


@router.get(
    "/adaptive-length/{content_type}",
    response_model=AdaptiveLengthResult,
    summary="Compute the adaptive length tier",
)
async def get_adaptive_length(
    user_id: UserIdPath,
    content_type: str,
    store: Store,
    available_time_minutes: Optional[float] = Query(None, ge=0),
):
    """
    Base tier for the content type, moved by the enabled behavioral signals.

    `available_time_minutes` only counts when time-based adaptation is enabled.
    """
    preferences = await store.get_or_create_summary_preferences(user_id)
    context = AdaptiveLengthContext(available_time_minutes=available_time_minutes)

    return AdaptiveLengthResult(
        content_type=content_type,
        base_length=resolve_base_length(preferences, content_type),
        length=calculate_adaptive_length(preferences, content_type, context),
    )


@router.put(
    "/behavior-metrics",
    response_model=SummaryPreferences,
    summary="Record reading behavior",
)
async def update_behavior_metrics(
    user_id: UserIdPath,
    body: BehaviorMetricsUpdate,
    store: Store,
):
    """
    Merge a partial observation into the stored metrics.

    Reading speed is clamped to 50-1000 wpm and engagement to 0-1; fields
    left out are unchanged.
    """
    return await store.save_behavior_metrics(user_id, body)


@router.get(
    "/validation",
    response_model=ValidationReport,
    summary="Validate stored length parameters",
)
async def validate_summary_preferences(user_id: UserIdPath, store: Store):
    preferences = await store.get_or_create_summary_preferences(user_id)
    errors = validate_configuration(preferences)
    return ValidationReport(valid=not errors, errors=errors)
