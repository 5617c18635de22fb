"""
Shared route dependencies.

    @router.get("/users/{user_id}/digest")
    async def get_digest(user_id: UserIdPath, store: Store):
        return await store.get_or_create_digest_settings(user_id)
"""

from typing import Annotated

from fastapi import Depends, Path

from personalization.db.deps import DBSession
from personalization.services.preference_store import PreferenceStore


def get_preference_store(db: DBSession) -> PreferenceStore:
    """PreferenceStore bound to the request's database session."""
    return PreferenceStore(db)


Store = Annotated[PreferenceStore, Depends(get_preference_store)]

# Opaque identifier issued by the auth service
UserIdPath = Annotated[
    str,
    Path(min_length=1, max_length=255, description="Opaque user identifier"),
]
