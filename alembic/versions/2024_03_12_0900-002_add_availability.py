"""add platforms, regions and availabilities

Revision ID: 002
Revises: 001
Create Date: 2024-03-12 09:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

# revision identifiers, used by Alembic.
revision: str = '002'
down_revision: Union[str, None] = '001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

platform_type = sa.Enum(
    'STREAMING', 'RENTAL', 'PURCHASE', 'FREE', 'CINEMA', 'PHYSICAL',
    name='platform_type',
)
availability_type = sa.Enum(
    'FREE', 'SUBSCRIPTION', 'RENTAL', 'PURCHASE',
    name='availability_type',
)


def upgrade() -> None:
    # Create platforms table
    op.create_table(
        'platforms',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('website', sa.String(length=500), nullable=True),
        sa.Column('type', platform_type, nullable=False),
        sa.Column('logo', sa.String(length=500), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    # Create regions table
    op.create_table(
        'regions',
        sa.Column('id', sa.String(length=100), nullable=False),
        sa.Column('code', sa.String(length=8), nullable=False),
        sa.Column('name', sa.String(length=200), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )
    op.create_index(op.f('ix_regions_code'), 'regions', ['code'], unique=True)

    # Create availabilities table
    op.create_table(
        'availabilities',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('movie_id', sa.String(length=100), nullable=False),
        sa.Column('platform_id', sa.String(length=100), nullable=False),
        sa.Column('region_id', sa.String(length=100), nullable=False),
        sa.Column('type', availability_type, nullable=False),
        sa.Column('url', sa.String(length=1000), nullable=True),
        sa.Column('price_info', JSONB(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('last_checked', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.ForeignKeyConstraint(['movie_id'], ['movies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['platform_id'], ['platforms.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['region_id'], ['regions.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('movie_id', 'platform_id', 'region_id', 'type', name='uq_movie_platform_region_type')
    )
    op.create_index(op.f('ix_availabilities_movie_id'), 'availabilities', ['movie_id'], unique=False)
    op.create_index(op.f('ix_availabilities_platform_id'), 'availabilities', ['platform_id'], unique=False)
    op.create_index(op.f('ix_availabilities_region_id'), 'availabilities', ['region_id'], unique=False)


def downgrade() -> None:
    op.drop_table('availabilities')
    op.drop_table('regions')
    op.drop_table('platforms')
    availability_type.drop(op.get_bind(), checkfirst=True)
    platform_type.drop(op.get_bind(), checkfirst=True)
