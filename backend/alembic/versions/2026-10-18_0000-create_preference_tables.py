"""create_preference_tables

Revision ID: 5a1c2e7f9b30
Revises:
Create Date: 2026-10-18 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '5a1c2e7f9b30'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PREFERENCE_TABLES = (
    ('notification_settings', 'Channels, content-type flags and quiet hours per user'),
    ('summary_preferences', 'Summary length and content preferences per user'),
    ('digest_settings', 'Digest cadence and content mix per user'),
)


def upgrade() -> None:
    """
    Create the three preference document tables.

    Each table holds one row per user:
    - user_id: unique, indexed opaque identifier
    - document: JSON (JSONB on PostgreSQL) validated by the schema layer
    """
    for table_name, table_comment in PREFERENCE_TABLES:
        op.create_table(
            table_name,
            sa.Column('id', sa.Integer(), autoincrement=True, nullable=False, comment='Auto-incrementing primary key'),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, comment='Timestamp when record was created (UTC)'),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, comment='Timestamp when record was last updated (UTC)'),
            sa.Column('user_id', sa.String(length=255), nullable=False, comment='Owner of this preference document'),
            sa.Column(
                'document',
                sa.JSON().with_variant(postgresql.JSONB(astext_type=sa.Text()), 'postgresql'),
                nullable=False,
                comment='Preference document serialized by its pydantic schema',
            ),
            sa.PrimaryKeyConstraint('id', name=op.f(f'pk_{table_name}')),
            comment=table_comment,
        )
        op.create_index(
            op.f(f'ix_{table_name}_user_id'),
            table_name,
            ['user_id'],
            unique=True,
        )


def downgrade() -> None:
    """Drop the preference tables."""
    for table_name, _ in reversed(PREFERENCE_TABLES):
        op.drop_index(op.f(f'ix_{table_name}_user_id'), table_name=table_name)
        op.drop_table(table_name)
