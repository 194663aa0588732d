"""
Video schema definitions.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


class VideoSummary(BaseModel):
    """Summary schema for the video list"""
    model_config = ConfigDict(from_attributes=True)
    id: str
    title: Optional[str] = None


class UploadReferenceRequest(BaseModel):
    """Intake of a file the client already put into object storage"""
    model_config = ConfigDict(populate_by_name=True)
    file_path: Optional[str] = Field(None, alias="filePath", description="Storage path/ID of the uploaded file")
    original_filename: Optional[str] = Field(None, alias="originalFilename", description="Name the user uploaded the file under")


class UploadResponse(BaseModel):
    """Response schema for video upload intake"""
    status: str = "ok"
    video_id: str
    final_title: str


class ChartsResponse(BaseModel):
    """Chart-ready emotion analytics for one video"""
    model_config = ConfigDict(populate_by_name=True)
    area: List[Dict[str, Any]] = Field(default_factory=list, description="Per-frame emotion percentages")
    radar: Dict[str, int] = Field(default_factory=dict, description="Emotion percentages summed over all frames")
    movie_title: str = Field("", alias="movieTitle", description="Title of the video")
