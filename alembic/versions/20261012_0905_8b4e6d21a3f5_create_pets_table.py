"""create_pets_table

Revision ID: 8b4e6d21a3f5
Revises: 3f1a9c2b7d10
Create Date: 2026-10-12 09:05:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = '8b4e6d21a3f5'
down_revision: Union[str, None] = '3f1a9c2b7d10'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create pets table."""
    op.create_table(
        'pets',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('org_id', UUID(as_uuid=True), sa.ForeignKey('orgs.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('species', sa.String(length=20), nullable=False, server_default='dog'),
        sa.Column('age', sa.Integer(), nullable=True),
        sa.Column('size', sa.String(length=20), nullable=True),
        sa.Column('energy_level', sa.String(length=20), nullable=True),
        sa.Column('independence', sa.String(length=20), nullable=True),
        sa.Column('environment', sa.String(length=20), nullable=True),
        sa.Column('adopted', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_index('ix_pets_org_id', 'pets', ['org_id'])
    op.create_index('ix_pets_adopted', 'pets', ['adopted'])
    op.create_index('ix_pets_created_at', 'pets', ['created_at'])


def downgrade() -> None:
    """Drop pets table."""
    op.drop_index('ix_pets_created_at', table_name='pets')
    op.drop_index('ix_pets_adopted', table_name='pets')
    op.drop_index('ix_pets_org_id', table_name='pets')
    op.drop_table('pets')
