"""create_profiles_and_posts

Revision ID: 4c1d9e7a2b10
Revises:
Create Date: 2026-10-19 09:12:44.318202

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4c1d9e7a2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the profiles directory and the posts collection."""
    op.create_table('profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('username', sa.String(length=50), nullable=True),
        sa.Column('name', sa.String(length=100), nullable=True),
        sa.Column('bio', sa.Text(), nullable=True),
        sa.Column('profile_picture_url', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )

    # No FK on user_id: posts may outlive or predate their author's profile.
    op.create_table('posts',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('user_id', sa.UUID(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('likes', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=True),
        sa.Column('comments', postgresql.JSONB(astext_type=sa.Text()), server_default='[]', nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_posts_created_at', 'posts', ['created_at'], unique=False)
    op.create_index('ix_posts_user_id', 'posts', ['user_id'], unique=False)


def downgrade() -> None:
    """Drop posts and profiles."""
    op.drop_index('ix_posts_user_id', table_name='posts')
    op.drop_index('ix_posts_created_at', table_name='posts')
    op.drop_table('posts')
    op.drop_table('profiles')
