"""
Schemas package
"""


from app.schemas.frame import (
    ActorEmotion,
    FrameAnalysis,
    IngestResponse,
    FrameRecord,
    FrameListResponse,
)
from app.schemas.video import (
    VideoSummary,
    UploadReferenceRequest,
    UploadResponse,
    ChartsResponse,
)


__all__ = [
    "ActorEmotion",
    "FrameAnalysis",
    "IngestResponse",
    "FrameRecord",
    "FrameListResponse",
    "VideoSummary",
    "UploadReferenceRequest",
    "UploadResponse",
    "ChartsResponse",
]
