"""
API routes initialization.

This module aggregates all API routers and provides a single router
to include in the main application.
"""

from fastapi import APIRouter

from personalization.api.routes import (
    configuration,
    content_volume,
    digest,
    discovery,
    notifications,
    summaries,
)

# Create main API router
api_router = APIRouter()

# Defaults, length tiers, effective configuration
api_router.include_router(configuration.router)

# Notification settings and status
api_router.include_router(notifications.router)

# Summary preferences, parameters, adaptive length
api_router.include_router(summaries.router)

# Digest settings and schedule previews
api_router.include_router(digest.router)

# Daily item cap and prioritization
api_router.include_router(content_volume.router)

# Discovery thresholds, presets and evaluation
api_router.include_router(discovery.router)
