"""
Frame schema definitions.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


# Column limits of frames.frame_number (INTEGER) and frames.timestamp_ms (BIGINT)
INT32_MAX = 2**31 - 1
INT64_MAX = 2**63 - 1


class ActorEmotion(BaseModel):
    """Emotion detected for one actor in a frame"""
    name: Optional[str] = Field(None, description="Actor name when recognised")
    emotion: str = Field(..., description="Emotion label")
    confidence: float = Field(..., description="Detection confidence in [0, 1]")


class FrameAnalysis(BaseModel):
    """One analysed frame as produced by the analysis worker"""
    frame_number: int = Field(..., ge=0, le=INT32_MAX, description="Frame number within the video")
    timestamp_ms: int = Field(0, ge=0, le=INT64_MAX, description="Position in video in milliseconds")
    actors: List[ActorEmotion] = Field(default_factory=list, description="Per-actor emotion detections")
    objects: List[str] = Field(default_factory=list, description="Detected object labels")
    scene_score: Optional[float] = Field(None, description="Scene score reported by the worker")
    emotion_dominant: Optional[str] = Field(None, description="Highest-weight emotion label")
    emotion_distribution: Dict[str, Any] = Field(default_factory=dict, description="Emotion label to fractional weight")


class IngestResponse(BaseModel):
    """Response schema for frame ingestion"""
    status: str = "ok"
    inserted_frames: int
    message: str = "Bulk ingest successful"


class FrameRecord(BaseModel):
    """Stored frame as returned by the raw frames endpoint"""
    model_config = ConfigDict(from_attributes=True)
    id: int
    video_id: str
    frame_number: int
    timestamp_ms: int
    actors: List[Dict[str, Any]]
    objects: List[str]
    scene_score: Optional[float] = None
    emotion_dominant: Optional[str] = None
    emotion_distribution: Dict[str, Any]
    created_at: Optional[datetime] = None


class FrameListResponse(BaseModel):
    """Response schema for frame list"""
    video_id: str
    frames: List[FrameRecord]
