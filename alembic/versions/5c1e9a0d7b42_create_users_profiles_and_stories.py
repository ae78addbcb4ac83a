"""create users, user_profiles and stories tables

Revision ID: 5c1e9a0d7b42
Revises:
Create Date: 2026-10-19 10:12:03.418502

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '5c1e9a0d7b42'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email')
    )
    op.create_index(op.f('ix_users_id'), 'users', ['id'], unique=False)

    op.create_table(
        'user_profiles',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('parent_one_name', sa.String(length=50), nullable=False),
        sa.Column('parent_two_name', sa.String(length=50), nullable=True),
        sa.Column('baby_nickname', sa.String(length=50), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('birth_date', sa.Date(), nullable=True),
        sa.Column('faith_preference', sa.String(length=50), nullable=False),
        sa.Column('default_theme', sa.String(length=50), nullable=True),
        sa.Column('default_length', sa.String(length=50), nullable=True),
        sa.Column('child_status', sa.String(length=20), nullable=False),
        sa.Column('age_group', sa.String(length=20), nullable=True),
        sa.Column('dark_mode', sa.Boolean(), nullable=False),
        sa.Column('font_size', sa.String(length=20), nullable=False),
        sa.Column('family_history', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id')
    )
    op.create_index(op.f('ix_user_profiles_id'), 'user_profiles', ['id'], unique=False)

    op.create_table(
        'stories',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('profile_id', sa.Integer(), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('theme', sa.String(length=50), nullable=False),
        sa.Column('length', sa.String(length=20), nullable=False),
        sa.Column('faith_preference', sa.String(length=50), nullable=False),
        sa.Column('parent_one_name', sa.String(length=50), nullable=False),
        sa.Column('parent_two_name', sa.String(length=50), nullable=True),
        sa.Column('baby_nickname', sa.String(length=50), nullable=True),
        sa.Column('due_date', sa.String(length=20), nullable=True),
        sa.Column('child_status', sa.String(length=20), nullable=False),
        sa.Column('age_group', sa.String(length=20), nullable=True),
        sa.Column('config_hash', sa.String(length=32), nullable=False),
        sa.Column('word_count', sa.Integer(), nullable=False),
        sa.Column('is_favorite', sa.Boolean(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(['profile_id'], ['user_profiles.id'], ),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'config_hash', name='uq_stories_user_config_hash')
    )
    op.create_index('idx_stories_user_id', 'stories', ['user_id'], unique=False)
    op.create_index('idx_stories_created_at', 'stories', ['created_at'], unique=False)
    op.create_index(op.f('ix_stories_id'), 'stories', ['id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_stories_id'), table_name='stories')
    op.drop_index('idx_stories_created_at', table_name='stories')
    op.drop_index('idx_stories_user_id', table_name='stories')
    op.drop_table('stories')
    op.drop_index(op.f('ix_user_profiles_id'), table_name='user_profiles')
    op.drop_table('user_profiles')
    op.drop_index(op.f('ix_users_id'), table_name='users')
    op.drop_table('users')
