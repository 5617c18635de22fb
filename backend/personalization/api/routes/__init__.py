"""
API route modules.

Import all route modules here for easy access.
"""

from personalization.api.routes import (
    configuration,
    content_volume,
    digest,
    discovery,
    notifications,
    summaries,
)

__all__ = [
    "configuration",
    "content_volume",
    "digest",
    "discovery",
    "notifications",
    "summaries",
]
