"""
Declarative Base and Shared Columns

Every ORM record in the service inherits from `BaseModel` below and gets:
- id: integer primary key
- created_at / updated_at: timezone-aware UTC timestamps

Preference records store their document as JSON, so the column helpers here
also provide a JSON type that becomes JSONB on PostgreSQL.

Learning Resources:
- SQLAlchemy Declarative Base: https://docs.sqlalchemy.org/en/20/orm/declarative_config.html
- Constraint naming: https://alembic.sqlalchemy.org/en/latest/naming.html
"""

from datetime import datetime, timezone

from sqlalchemy import JSON, DateTime, MetaData, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


# ================================
# Naming Convention for Constraints
# ================================
# Deterministic constraint names keep Alembic autogenerate diffs stable:
# - ix_summary_preferences_user_id
# - uq_digest_settings_user_id
# - pk_notification_settings
convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ================================
# Base DeclarativeBase Class
# ================================
class Base(DeclarativeBase):
    """
    Root of the ORM class hierarchy.

    Alembic's env.py points `target_metadata` at `Base.metadata`, so every
    model module must be imported before migrations are generated.
    """

    metadata = metadata

    __tablename__: str


# ================================
# Common Table Attributes Mixin
# ================================
class CommonTableAttributes:
    """
    Columns shared by every table.

    Timestamps are always stored in UTC. Converting to a user's timezone
    happens in the service layer (see services.quiet_hours and
    services.digest_preview), never in the database.
    """

    id: Mapped[int] = mapped_column(
        primary_key=True,
        autoincrement=True,
        comment="Auto-incrementing primary key",
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
        comment="Timestamp when record was created (UTC)",
    )

    # onupdate fires on every flush that changes the row
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
        comment="Timestamp when record was last updated (UTC)",
    )


# ================================
# Convenient Base Model
# ================================
class BaseModel(Base, CommonTableAttributes):
    """
    Abstract base for application tables.

        class DigestSettingsRecord(BaseModel):
            __tablename__ = "digest_settings"
            ...
    """

    __abstract__ = True


# ================================
# Column Types
# ================================
# Opaque user identifiers issued by the auth service
String255 = String(255)

# Preference documents: portable JSON, JSONB where PostgreSQL is the backend
JSONDocument = JSON().with_variant(JSONB(), "postgresql")
