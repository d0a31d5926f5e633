"""create_photos_table

Revision ID: c7d2f0e94b61
Revises: 8b4e6d21a3f5
Create Date: 2026-10-12 09:10:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = 'c7d2f0e94b61'
down_revision: Union[str, None] = '8b4e6d21a3f5'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create photos table. Rows go away with their pet."""
    op.create_table(
        'photos',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('pet_id', UUID(as_uuid=True), sa.ForeignKey('pets.id', ondelete='CASCADE'), nullable=False),
        sa.Column('url', sa.String(length=2048), nullable=False),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
    )

    op.create_index('ix_photos_pet_id', 'photos', ['pet_id'])


def downgrade() -> None:
    """Drop photos table."""
    op.drop_index('ix_photos_pet_id', table_name='photos')
    op.drop_table('photos')
