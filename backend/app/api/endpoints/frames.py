"""
Frame endpoints for ingesting worker results and reading stored frames.
"""


import asyncio
import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.core.deps import get_ingestion_service, get_video_service, require_ingestion_token
from app.core.exceptions import UpstreamWriteError, ValidationError
from app.schemas.frame import FrameListResponse, FrameRecord, IngestResponse
from app.services.ingestion_service import FrameIngestionService
from app.services.video_service import VideoService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/frame/result",
    response_model=IngestResponse,
    dependencies=[Depends(require_ingestion_token)]
)
async def ingest_frame_results(
    request: Request,
    ingestion_service: FrameIngestionService = Depends(get_ingestion_service)
):
    """Ingest a batch (or a single frame) of analysis results"""
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must be JSON"
        ) from e
    try:
        video_id, frames = ingestion_service.parse_payload(body)
        logger.debug("📥 Ingesting %d frames for video %s", len(frames), video_id)
        inserted = await asyncio.to_thread(ingestion_service.ingest_frames, video_id, frames)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        ) from e
    except UpstreamWriteError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Frame ingestion failed at {e.stage} stage"
        ) from e
    return IngestResponse(inserted_frames=inserted)


@router.get("/video/{video_id}/frames", response_model=FrameListResponse)
async def list_video_frames(
    video_id: str,
    limit: Optional[int] = Query(None, ge=1, description="Maximum number of frames to return"),
    video_service: VideoService = Depends(get_video_service)
):
    """List stored frames of a video ordered by frame number"""
    limit = limit or settings.frames_default_limit
    logger.debug("📋 Listing up to %d frames for video %s", limit, video_id)
    try:
        frames = video_service.list_frames(video_id, limit)
    except SQLAlchemyError as e:
        logger.error("❌ Failed to fetch frames for video %s: %s", video_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch frames"
        ) from e
    return FrameListResponse(
        video_id=video_id,
        frames=[FrameRecord.model_validate(frame) for frame in frames]
    )
