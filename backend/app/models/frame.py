"""
Frame model definition - stores per-frame emotion analysis results.
"""


from sqlalchemy import BigInteger, Column, DateTime, Float, Index, Integer, JSON, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from app.core.database import Base


JSONType = JSON().with_variant(JSONB(), "postgresql")


# pylint: disable=not-callable,line-too-long
class Frame(Base):
    """Model for storing one analysed frame of a video"""
    __tablename__ = "frames"
    # Primary identifiers
    id = Column(Integer, primary_key=True, autoincrement=True)
    # No foreign key: frames are written before the parent video row is upserted
    video_id = Column(String(64), nullable=False, index=True)
    # Frame-specific properties
    frame_number = Column(Integer, nullable=False, index=True)
    timestamp_ms = Column(BigInteger, nullable=False, default=0)
    actors = Column(JSONType, nullable=False, default=list)
    objects = Column(JSONType, nullable=False, default=list)
    scene_score = Column(Float, nullable=True)
    emotion_dominant = Column(String(100), nullable=True)
    emotion_distribution = Column(JSONType, nullable=False, default=dict)
    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    # Not unique: re-ingested frames are appended
    __table_args__ = (
        Index('ix_frames_video_frame_num', 'video_id', 'frame_number'),
    )

    def __repr__(self):
        return f"<Frame(id={self.id}, video_id='{self.video_id}', frame_num={self.frame_number}, timestamp={self.timestamp_ms}ms)>"
