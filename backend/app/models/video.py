"""
Video model definition.
"""


import uuid

from sqlalchemy import Column, String, DateTime
from sqlalchemy.sql import func

from app.core.database import Base


def generate_video_id() -> str:
    """New opaque video identifier"""
    return str(uuid.uuid4())


# pylint: disable=not-callable,line-too-long
class Video(Base):
    """Uploaded video whose frames are analysed by the external worker"""
    __tablename__ = "videos"
    # Worker-supplied ids are not guaranteed to be UUIDs, so the key is a plain string
    id = Column(String(64), primary_key=True, default=generate_video_id, index=True)
    title = Column(String(500), nullable=True, index=True)
    file_path = Column(String(1000), nullable=True)  # Storage path/ID of the uploaded file
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)

    def __repr__(self):
        return f"<Video(id='{self.id}', title='{self.title}')>"
