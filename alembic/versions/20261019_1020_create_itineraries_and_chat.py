"""create itineraries and chat_messages tables

Revision ID: 20261019_1020_create_itineraries_and_chat
Revises: 20261019_1010_create_favorites
Create Date: 2026-10-19 10:20:00
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '20261019_1020_create_itineraries_and_chat'
down_revision = '20261019_1010_create_favorites'
branch_labels = None
depends_on = None

def upgrade() -> None:
    json_type = sa.JSON().with_variant(postgresql.JSONB(), 'postgresql')
    op.create_table(
        'itineraries',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('user_id', sa.String(32), nullable=False, index=True),
        sa.Column('destination', sa.String(255), nullable=False),
        sa.Column('duration', sa.String(64), nullable=False),
        sa.Column('budget', sa.String(64), nullable=False),
        sa.Column('interests', json_type, nullable=False),
        sa.Column('days', json_type, nullable=False),
        sa.Column('tips', json_type, nullable=False),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False, index=True),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_table(
        'chat_messages',
        sa.Column('id', sa.String(32), primary_key=True),
        sa.Column('user_id', sa.String(32), nullable=False, index=True),
        sa.Column('role', sa.String(16), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('timestamp', sa.DateTime(), server_default=sa.func.now(), nullable=False, index=True),
    )

def downgrade() -> None:
    op.drop_table('chat_messages')
    op.drop_table('itineraries')
