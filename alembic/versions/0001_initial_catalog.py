"""initial plant catalog schema

Revision ID: 0001_initial_catalog
Revises:
Create Date: 2026-10-19 09:12:41.318204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = '0001_initial_catalog'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

light_level_enum = sa.Enum('low', 'medium', 'bright', name='light_level_enum')
water_needs_enum = sa.Enum('low', 'medium', 'high', name='water_needs_enum')
height_category_enum = sa.Enum('Short', 'Medium', 'Tall', name='height_category_enum')


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sa.String(100), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('username'),
    )

    op.create_table(
        'plants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('scientific_name', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('image_url', sa.Text(), nullable=True),
        sa.Column('image_data', sa.Text(), nullable=True),
        sa.Column('image_mime_type', sa.String(100), nullable=True),
        sa.Column('image_storage_path', sa.Text(), nullable=True),
        sa.Column('light_level', light_level_enum, nullable=False),
        sa.Column('water_needs', water_needs_enum, nullable=False),
        sa.Column('bloom_time', sa.Text(), nullable=False),
        sa.Column('height', sa.String(200), nullable=False),
        sa.Column('height_text', height_category_enum, nullable=True),
        sa.Column('width', sa.String(200), nullable=False),
        sa.Column('temperature', sa.Text(), nullable=True),
        sa.Column('humidity', sa.Text(), nullable=True),
        sa.Column('care_instructions', sa.Text(), nullable=True),
        sa.Column('common_issues', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_plants_name', 'plants', ['name'])
    op.create_index('ix_plants_scientific_name', 'plants', ['scientific_name'])

    op.create_table(
        'zones',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('zone', sa.String(10), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('zone'),
    )

    op.create_table(
        'bloom_seasons',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('season', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('season'),
    )

    op.create_table(
        'plant_zones',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('plant_id', sa.Integer(), nullable=False),
        sa.Column('zone_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['zone_id'], ['zones.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('plant_id', 'zone_id'),
    )
    op.create_index('ix_plant_zones_plant_id', 'plant_zones', ['plant_id'])
    op.create_index('ix_plant_zones_zone_id', 'plant_zones', ['zone_id'])

    op.create_table(
        'plant_bloom_seasons',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('plant_id', sa.Integer(), nullable=False),
        sa.Column('bloom_season_id', sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(['plant_id'], ['plants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['bloom_season_id'], ['bloom_seasons.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('plant_id', 'bloom_season_id'),
    )
    op.create_index('ix_plant_bloom_seasons_plant_id', 'plant_bloom_seasons', ['plant_id'])
    op.create_index('ix_plant_bloom_seasons_bloom_season_id', 'plant_bloom_seasons', ['bloom_season_id'])


def downgrade() -> None:
    op.drop_table('plant_bloom_seasons')
    op.drop_table('plant_zones')
    op.drop_table('bloom_seasons')
    op.drop_table('zones')
    op.drop_table('plants')
    op.drop_table('users')
    height_category_enum.drop(op.get_bind(), checkfirst=True)
    water_needs_enum.drop(op.get_bind(), checkfirst=True)
    light_level_enum.drop(op.get_bind(), checkfirst=True)
