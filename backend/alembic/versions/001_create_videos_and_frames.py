"""Create videos and frames tables

Revision ID: 001_create_videos_and_frames
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '001_create_videos_and_frames'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create videos table
    op.create_table('videos',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=500), nullable=True),
        sa.Column('file_path', sa.String(length=1000), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_videos_id'), 'videos', ['id'], unique=False)
    op.create_index(op.f('ix_videos_title'), 'videos', ['title'], unique=False)
    op.create_index(op.f('ix_videos_created_at'), 'videos', ['created_at'], unique=False)

    # Create frames table; video_id is not a foreign key because frames land before the video upsert
    op.create_table('frames',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('video_id', sa.String(length=64), nullable=False),
        sa.Column('frame_number', sa.Integer(), nullable=False),
        sa.Column('timestamp_ms', sa.BigInteger(), nullable=False),
        sa.Column('actors', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('objects', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('scene_score', sa.Float(), nullable=True),
        sa.Column('emotion_dominant', sa.String(length=100), nullable=True),
        sa.Column('emotion_distribution', postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_frames_video_id'), 'frames', ['video_id'], unique=False)
    op.create_index(op.f('ix_frames_frame_number'), 'frames', ['frame_number'], unique=False)
    op.create_index('ix_frames_video_frame_num', 'frames', ['video_id', 'frame_number'], unique=False)


def downgrade() -> None:
    op.drop_index('ix_frames_video_frame_num', table_name='frames')
    op.drop_index(op.f('ix_frames_frame_number'), table_name='frames')
    op.drop_index(op.f('ix_frames_video_id'), table_name='frames')
    op.drop_table('frames')

    op.drop_index(op.f('ix_videos_created_at'), table_name='videos')
    op.drop_index(op.f('ix_videos_title'), table_name='videos')
    op.drop_index(op.f('ix_videos_id'), table_name='videos')
    op.drop_table('videos')
