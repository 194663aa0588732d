"""
Video endpoints for upload intake and listing.
"""


import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.exc import SQLAlchemyError

from app.core.deps import get_video_service
from app.core.exceptions import UpstreamWriteError, ValidationError, WorkerDispatchError
from app.schemas.video import UploadReferenceRequest, UploadResponse, VideoSummary
from app.services.video_service import VideoService


logger = logging.getLogger(__name__)

router = APIRouter()


async def _run_intake(coroutine) -> UploadResponse:
    """Await an intake call and translate its failures into HTTP errors"""
    try:
        video = await coroutine
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        ) from e
    except FileNotFoundError as e:
        logger.error("❌ Storage lookup failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to retrieve file from storage"
        ) from e
    except UpstreamWriteError as e:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database insertion failed"
        ) from e
    except WorkerDispatchError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Analysis worker did not accept the video"
        ) from e
    return UploadResponse(video_id=str(video.id), final_title=str(video.title))


@router.post("/movie", response_model=UploadResponse)
async def register_movie(
    payload: UploadReferenceRequest,
    video_service: VideoService = Depends(get_video_service)
):
    """Register a video already uploaded to storage and send it for analysis"""
    logger.debug("📤 Registering stored upload %s (%s)", payload.file_path, payload.original_filename)
    return await _run_intake(
        video_service.register_upload(payload.file_path or "", payload.original_filename or "")
    )


@router.post("/movie/upload", response_model=UploadResponse)
async def upload_movie(
    file: UploadFile = File(...),
    original_filename: Optional[str] = Form(None, alias="originalFilename"),
    video_service: VideoService = Depends(get_video_service)
):
    """Upload a video file and send it for analysis"""
    filename = original_filename or file.filename or ""
    logger.debug("📤 Receiving upload %s", filename)
    file_data = await file.read()
    await file.close()
    return await _run_intake(video_service.upload_video(file_data, filename))


@router.get("/movies", response_model=List[VideoSummary])
async def list_movies(
    video_service: VideoService = Depends(get_video_service)
):
    """List all videos, newest first"""
    try:
        videos = video_service.list_videos()
    except SQLAlchemyError as e:
        logger.error("❌ Error fetching movies: %s", e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch movies"
        ) from e
    return [VideoSummary.model_validate(video) for video in videos]
