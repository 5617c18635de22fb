"""
Configuration API endpoints.

Shared defaults and the length-tier catalogue for the settings UI, and
the combined effective configuration of a user.
"""

from fastapi import APIRouter

from personalization.api.deps import Store, UserIdPath
from personalization.core.defaults import (
    DEFAULT_LENGTH_PARAMETERS,
    LENGTH_TIER_CATALOGUE,
    default_configuration,
)
from personalization.schemas.configuration import (
    DefaultConfiguration,
    EffectiveConfiguration,
)
from personalization.schemas.summary import LengthTierInfo, SummaryLength

router = APIRouter(tags=["Configuration"])


@router.get(
    "/defaults",
    response_model=DefaultConfiguration,
    summary="Default configuration",
    description="The values new users start with; also the settings form's initial values.",
)
async def get_defaults():
    return DefaultConfiguration(**default_configuration())


@router.get(
    "/summary-length-types",
    response_model=list[LengthTierInfo],
    summary="Summary length tiers",
)
async def get_summary_length_types():
    """Display name, description and default budget of each tier, shortest first."""
    return [
        LengthTierInfo(
            length=tier,
            default_max_words=DEFAULT_LENGTH_PARAMETERS[tier.value]["max_words"],
            default_max_sentences=DEFAULT_LENGTH_PARAMETERS[tier.value]["max_sentences"],
            **LENGTH_TIER_CATALOGUE[tier.value],
        )
        for tier in SummaryLength
    ]


@router.get(
    "/users/{user_id}/configuration",
    response_model=EffectiveConfiguration,
    summary="Effective configuration of a user",
)
async def get_effective_configuration(user_id: UserIdPath, store: Store):
    """Every preference aggregate of the user in one response."""
    return await store.get_effective_configuration(user_id)
