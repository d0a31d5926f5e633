"""create_orgs_table

Revision ID: 3f1a9c2b7d10
Revises: 
Create Date: 2026-10-12 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

# revision identifiers, used by Alembic.
revision: str = '3f1a9c2b7d10'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create orgs table."""
    op.create_table(
        'orgs',
        sa.Column('id', UUID(as_uuid=True), primary_key=True, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(length=255), nullable=False),
        sa.Column('whatsapp', sa.String(length=30), nullable=False),
        sa.Column('address', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )

    op.create_index('ix_orgs_email', 'orgs', ['email'], unique=True)
    op.create_index('ix_orgs_created_at', 'orgs', ['created_at'])


def downgrade() -> None:
    """Drop orgs table."""
    op.drop_index('ix_orgs_created_at', table_name='orgs')
    op.drop_index('ix_orgs_email', table_name='orgs')
    op.drop_table('orgs')
