"""
Discovery settings API endpoints.

Thresholds for content the aggregator discovers on its own. The
aggressiveness level and its presets rewrite the stored thresholds;
the evaluation endpoints apply them to one candidate.
"""

from fastapi import APIRouter

from personalization.api.deps import Store, UserIdPath
from personalization.schemas.discovery import (
    AggressivenessUpdate,
    DiscoveryEvaluation,
    DiscoveryPresetInfo,
    DiscoverySettings,
    DiscoverySettingsBody,
    EvaluateRequest,
    PresetRequest,
    ThresholdRequest,
    ThresholdResult,
)
from personalization.services.discovery import (
    base_threshold,
    calculate_effective_threshold,
    evaluate_candidate,
    get_discovery_presets,
)

router = APIRouter(tags=["Discovery"])


# ========================================
# Presets
# ========================================


@router.get(
    "/discovery-presets",
    response_model=list[DiscoveryPresetInfo],
    summary="Discovery presets",
)
async def list_discovery_presets():
    """Each preset with the thresholds it sets."""
    return get_discovery_presets()


# ========================================
# Stored Settings
# ========================================


@router.get(
    "/users/{user_id}/discovery",
    response_model=DiscoverySettings,
    summary="Get discovery settings",
)
async def get_discovery_settings(user_id: UserIdPath, store: Store):
    return await store.get_or_create_discovery_settings(user_id)


@router.put(
    "/users/{user_id}/discovery",
    response_model=DiscoverySettings,
    summary="Replace discovery settings",
    responses={
        422: {"description": "A threshold, boost, penalty or depth out of range"},
    },
)
async def replace_discovery_settings(
    user_id: UserIdPath,
    body: DiscoverySettingsBody,
    store: Store,
):
    """Whole-document replacement; thresholds are stored exactly as sent."""
    return await store.replace_discovery_settings(user_id, body)


@router.post(
    "/users/{user_id}/discovery/reset",
    response_model=DiscoverySettings,
    summary="Reset discovery settings to defaults",
)
async def reset_discovery_settings(user_id: UserIdPath, store: Store):
    return await store.reset_discovery_settings(user_id)


@router.put(
    "/users/{user_id}/discovery/aggressiveness",
    response_model=DiscoverySettings,
    summary="Set the aggressiveness level",
    responses={
        422: {"description": "Level outside 0-1"},
    },
)
async def set_aggressiveness(
    user_id: UserIdPath,
    body: AggressivenessUpdate,
    store: Store,
):
    """Recomputes every threshold and the discovery depth from the level."""
    return await store.set_discovery_aggressiveness(user_id, body.aggressiveness_level)


@router.post(
    "/users/{user_id}/discovery/preset",
    response_model=DiscoverySettings,
    summary="Apply a discovery preset",
)
async def apply_preset(user_id: UserIdPath, body: PresetRequest, store: Store):
    return await store.apply_discovery_preset(user_id, body.preset)


# ========================================
# Evaluation
# ========================================


@router.post(
    "/users/{user_id}/discovery/threshold",
    response_model=ThresholdResult,
    summary="Compute the effective inclusion threshold",
)
async def calculate_threshold(user_id: UserIdPath, body: ThresholdRequest, store: Store):
    settings = await store.get_or_create_discovery_settings(user_id)
    return ThresholdResult(
        content_type=body.content_type,
        context=body.context,
        effective_threshold=calculate_effective_threshold(
            settings, body.content_type, body.context
        ),
        base_threshold=base_threshold(settings, body.content_type),
        aggressiveness_level=settings.aggressiveness_level,
    )


@router.post(
    "/users/{user_id}/discovery/evaluate",
    response_model=DiscoveryEvaluation,
    summary="Decide what happens to a discovered item",
)
async def evaluate(user_id: UserIdPath, body: EvaluateRequest, store: Store):
    """
    The outcome for one candidate, e.g. for

        {"content": {"type": "article", "source_credibility": 0.8, "content_length": 900},
         "relevance_score": 0.5,
         "context": {"is_breaking_news": true}}
    """
    settings = await store.get_or_create_discovery_settings(user_id)
    return evaluate_candidate(settings, body.content, body.relevance_score, body.context)
