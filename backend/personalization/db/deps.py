"""
Database Dependencies for FastAPI Routes

Routes declare the session they need and FastAPI provides it:

    @router.get("/users/{user_id}/digest")
    async def get_digest(user_id: str, db: DBSession):
        store = PreferenceStore(db)
        ...

Tests replace `get_db` through `app.dependency_overrides` to point every
request at an in-memory database (see tests/conftest.py).

Learning Resources:
- FastAPI Dependencies: https://fastapi.tiangolo.com/tutorial/dependencies/
"""

from collections.abc import AsyncGenerator, Callable
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from personalization.db.session import get_session


# ================================
# Database Session Dependency
# ================================

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency that provides a database session.

    Thin wrapper around get_session(): one session per request, rolled back
    if the handler raises. Handlers commit explicitly (PreferenceStore does).

    Yields:
        AsyncSession: Database session for the current request
    """
    async for session in get_session():
        yield session


# ================================
# Type Annotation Shortcut
# ================================

DBSession = Annotated[AsyncSession, Depends(get_db)]


# ================================
# Testing Helpers
# ================================

def get_db_override(
    session: AsyncSession,
) -> Callable[[], AsyncGenerator[AsyncSession, None]]:
    """
    Build a `get_db` replacement that always yields `session`.

    Usage in Tests:
    ---------------
        app.dependency_overrides[get_db] = get_db_override(test_session)
        response = await client.get("/api/v1/users/u1/digest")
        app.dependency_overrides.clear()
    """
    async def _override() -> AsyncGenerator[AsyncSession, None]:
        yield session

    return _override


__all__ = [
    "get_db",
    "DBSession",
    "get_db_override",
]
