"""Create news, spotify, vip and daily user count tables

Revision ID: 3f9a1c2b7d10
Revises:
Create Date: 2026-10-19 20:30:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f9a1c2b7d10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

media_type_enum = sa.Enum('image', 'audio', 'video', 'mixed', name='MediaTypeEnum')


def upgrade() -> None:
    op.create_table(
        'news_posts',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=True),
        sa.Column('uploadDate', sa.DateTime(timezone=True), nullable=False),
        sa.Column('link', sa.String(), nullable=True),
        sa.Column('imageUrl', sa.String(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_news_posts_id', 'news_posts', ['id'])
    op.create_index('ix_news_posts_uploadDate', 'news_posts', ['uploadDate'])

    op.create_table(
        'spotify_embeds',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('embedUrl', sa.Text(), nullable=False),
        sa.Column('uploadDate', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_spotify_embeds_id', 'spotify_embeds', ['id'])
    op.create_index('ix_spotify_embeds_uploadDate', 'spotify_embeds', ['uploadDate'])

    op.create_table(
        'vip_contents',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('mediaUrl', sa.JSON(), nullable=False),
        sa.Column('mediaType', media_type_enum, nullable=False),
        sa.Column('uploadDate', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_vip_contents_id', 'vip_contents', ['id'])
    op.create_index('ix_vip_contents_uploadDate', 'vip_contents', ['uploadDate'])

    op.create_table(
        'daily_user_counts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('userCount', sa.Integer(), nullable=False),
        sa.Column('users', sa.JSON(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_daily_user_counts_id', 'daily_user_counts', ['id'])
    op.create_index('ix_daily_user_counts_date', 'daily_user_counts', ['date'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_daily_user_counts_date', table_name='daily_user_counts')
    op.drop_index('ix_daily_user_counts_id', table_name='daily_user_counts')
    op.drop_table('daily_user_counts')

    op.drop_index('ix_vip_contents_uploadDate', table_name='vip_contents')
    op.drop_index('ix_vip_contents_id', table_name='vip_contents')
    op.drop_table('vip_contents')
    media_type_enum.drop(op.get_bind(), checkfirst=True)

    op.drop_index('ix_spotify_embeds_uploadDate', table_name='spotify_embeds')
    op.drop_index('ix_spotify_embeds_id', table_name='spotify_embeds')
    op.drop_table('spotify_embeds')

    op.drop_index('ix_news_posts_uploadDate', table_name='news_posts')
    op.drop_index('ix_news_posts_id', table_name='news_posts')
    op.drop_table('news_posts')
