"""create_volume_and_discovery_tables

Revision ID: 8d4b7e21c6a5
Revises: 5a1c2e7f9b30
Create Date: 2026-10-18 01:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '8d4b7e21c6a5'
down_revision: Union[str, None] = '5a1c2e7f9b30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

PREFERENCE_TABLES = (
    ('content_volume_settings', 'Daily item cap, type weights and consumption metrics per user'),
    ('discovery_settings', 'Thresholds for automatically discovered content per user'),
)


def upgrade() -> None:
    """Create the content volume and discovery document tables."""
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
    """Drop the content volume and discovery tables."""
    for table_name, _ in reversed(PREFERENCE_TABLES):
        op.drop_index(op.f(f'ix_{table_name}_user_id'), table_name=table_name)
        op.drop_table(table_name)
