"""create favorites table

Revision ID: 20261019_1010_create_favorites
Revises: 20261019_1000_create_accounts_and_users
Create Date: 2026-10-19 10:10:00
"""
from alembic import op
import sqlalchemy as sa

revision = '20261019_1010_create_favorites'
down_revision = '20261019_1000_create_accounts_and_users'
branch_labels = None
depends_on = None

def upgrade() -> None:
    # (user_id, destination_id) may repeat
    op.create_table(
        'favorites',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('user_id', sa.String(32), nullable=False, index=True),
        sa.Column('destination_id', sa.String(128), nullable=False, index=True),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('country', sa.String(255), nullable=False),
        sa.Column('image_url', sa.String(1024), nullable=False, server_default=''),
        sa.Column('added_at', sa.DateTime(), server_default=sa.func.now(), nullable=False, index=True),
    )

def downgrade() -> None:
    op.drop_table('favorites')
