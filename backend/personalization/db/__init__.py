"""Database utilities and session management."""

from personalization.db.base import Base, BaseModel, JSONDocument, String255
from personalization.db.deps import DBSession, get_db, get_db_override
from personalization.db.session import (
    AsyncSessionLocal,
    check_db_health,
    close_db,
    engine,
    get_session,
    init_db,
)

__all__ = [
    # Base classes
    "Base",
    "BaseModel",
    # Column types
    "JSONDocument",
    "String255",
    # Session management
    "engine",
    "AsyncSessionLocal",
    "get_session",
    "init_db",
    "close_db",
    "check_db_health",
    # Dependencies
    "get_db",
    "DBSession",
    "get_db_override",
]
