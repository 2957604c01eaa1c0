"""initial catalog

Revision ID: 001
Revises:
Create Date: 2024-01-30 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

guide_type = sa.Enum(
    'CHRONOLOGICAL', 'BEGINNER', 'THEMATIC', 'FAMILY', 'ADVANCED', 'SEASONAL',
    name='guide_type',
)


def upgrade() -> None:
    # Create movies table
    op.create_table(
        'movies',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('tmdb_id', sa.Integer(), nullable=True),
        sa.Column('title_en', sa.String(length=500), nullable=False),
        sa.Column('title_ja', sa.String(length=500), nullable=False),
        sa.Column('title_zh', sa.String(length=500), nullable=True),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('director', sa.String(length=200), nullable=True),
        sa.Column('duration', sa.Integer(), nullable=True),
        sa.Column('synopsis', sa.Text(), nullable=True),
        sa.Column('poster_url', sa.String(length=500), nullable=True),
        sa.Column('backdrop_url', sa.String(length=500), nullable=True),
        sa.Column('vote_average', sa.Float(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_movies_tmdb_id'), 'movies', ['tmdb_id'], unique=True)
    op.create_index(op.f('ix_movies_title_en'), 'movies', ['title_en'], unique=False)
    op.create_index(op.f('ix_movies_year'), 'movies', ['year'], unique=False)

    # Create characters table
    op.create_table(
        'characters',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('name_ja', sa.String(length=200), nullable=True),
        sa.Column('name_zh', sa.String(length=200), nullable=True),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image_url', sa.String(length=500), nullable=True),
        sa.Column('is_main_character', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_characters_name'), 'characters', ['name'], unique=False)

    # Create movie_characters table
    op.create_table(
        'movie_characters',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.String(length=100), nullable=False),
        sa.Column('character_id', sa.String(length=100), nullable=False),
        sa.Column('voice_actor', sa.String(length=200), nullable=True),
        sa.Column('voice_actor_ja', sa.String(length=200), nullable=True),
        sa.Column('importance', sa.Integer(), nullable=False, server_default='0'),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['character_id'], ['characters.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('movie_id', 'character_id', name='uq_movie_character')
    )
    op.create_index(op.f('ix_movie_characters_movie_id'), 'movie_characters', ['movie_id'], unique=False)
    op.create_index(op.f('ix_movie_characters_character_id'), 'movie_characters', ['character_id'], unique=False)

    # Create watch_guides table
    op.create_table(
        'watch_guides',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('title', sa.String(length=300), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('guide_type', guide_type, nullable=False),
        sa.Column('content', JSONB(), nullable=True),
        sa.Column('language', sa.String(length=10), nullable=False, server_default='en'),
        sa.Column('is_published', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_watch_guides_guide_type'), 'watch_guides', ['guide_type'], unique=False)
    op.create_index(op.f('ix_watch_guides_is_published'), 'watch_guides', ['is_published'], unique=False)

    # Create watch_guide_movies table
    op.create_table(
        'watch_guide_movies',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('guide_id', sa.String(length=100), nullable=False),
        sa.Column('movie_id', sa.String(length=100), nullable=False),
        sa.Column('order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['guide_id'], ['watch_guides.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_watch_guide_movies_guide_id'), 'watch_guide_movies', ['guide_id'], unique=False)
    op.create_index(op.f('ix_watch_guide_movies_movie_id'), 'watch_guide_movies', ['movie_id'], unique=False)

    # Create movie_stats table
    op.create_table(
        'movie_stats',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.String(length=100), nullable=False),
        sa.Column('view_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('favorite_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('share_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_viewed', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('movie_id')
    )


def downgrade() -> None:
    op.drop_table('movie_stats')
    op.drop_table('watch_guide_movies')
    op.drop_table('watch_guides')
    op.drop_table('movie_characters')
    op.drop_table('characters')
    op.drop_table('movies')
    guide_type.drop(op.get_bind(), checkfirst=True)
