"""
Chart endpoints for per-video emotion analytics.
"""


import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.schemas.video import ChartsResponse
from app.services.analytics_service import AnalyticsService


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/video/{video_id}/charts", response_model=ChartsResponse)
async def get_video_charts(
    video_id: str,
    db: Session = Depends(get_db)
):
    """Area series and radar totals of a video's emotion distribution"""
    logger.debug("📈 Charts requested for video %s", video_id)
    analytics_service = AnalyticsService(db)
    try:
        analytics, title = analytics_service.get_video_analytics(video_id)
    except SQLAlchemyError as e:
        logger.error("❌ Error in charts for video %s: %s", video_id, e)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch frames"
        ) from e
    return ChartsResponse(area=analytics.area, radar=analytics.radar, movie_title=title)
