"""
Emotion analytics: turns per-frame emotion fractions into chart data.
"""


import logging
import math
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError
from app.models.frame import Frame
from app.models.video import Video


logger = logging.getLogger(__name__)


@dataclass
class EmotionAnalytics:
    """Chart data for one video"""
    area: List[Dict[str, Any]] = field(default_factory=list)
    radar: Dict[str, int] = field(default_factory=dict)


def to_percent(fraction: Any) -> Optional[int]:
    """
    Convert a fractional weight to a whole percentage.
    Rounds half away from zero (0.045 -> 5). Returns None for anything
    that is not a finite real number, booleans included.
    """
    if isinstance(fraction, bool) or not isinstance(fraction, (int, float)):
        return None
    scaled = fraction * 100
    if not math.isfinite(scaled):
        return None
    return int(Decimal(scaled).to_integral_value(rounding=ROUND_HALF_UP))


def aggregate_emotions(frames: Iterable[Any]) -> EmotionAnalytics:
    """
    Build the per-frame percentage series and the per-emotion totals.
    Frames are taken in the order given and only need frame_number,
    timestamp_ms and emotion_distribution attributes.
    """
    analytics = EmotionAnalytics()
    for frame in frames:
        point: Dict[str, Any] = {
            "frame": frame.frame_number,
            "timestamp": frame.timestamp_ms,
        }
        distribution = frame.emotion_distribution or {}
        for emotion, fraction in distribution.items():
            percent = to_percent(fraction)
            if percent is None:
                continue
            point[emotion] = percent
            analytics.radar[emotion] = analytics.radar.get(emotion, 0) + percent
        analytics.area.append(point)
    return analytics


class AnalyticsService:
    """Service class for video emotion analytics"""

    def __init__(self, db: Session):
        self.db = db

    def get_ordered_frames(self, video_id: str) -> List[Frame]:
        """All stored frames of a video by ascending frame number"""
        return self.db.query(Frame).filter(
            Frame.video_id == video_id
        ).order_by(Frame.frame_number.asc(), Frame.id.asc()).all()

    def get_video_title(self, video_id: str) -> str:
        """
        Title of a video.
        Raises:
            NotFoundError: If no video row exists
        """
        video = self.db.query(Video).filter(Video.id == video_id).first()
        if video is None:
            raise NotFoundError(f"Video {video_id} not found")
        return video.title or ""

    def get_video_analytics(self, video_id: str) -> tuple[EmotionAnalytics, str]:
        """
        Chart data and title for a video.
        A missing video row yields an empty title rather than an error.
        """
        frames = self.get_ordered_frames(video_id)
        try:
            title = self.get_video_title(video_id)
        except NotFoundError as e:
            logger.warning("⚠️ No title for video %s: %s", video_id, e)
            title = ""
        analytics = aggregate_emotions(frames)
        logger.debug("📈 Aggregated %d frames for video %s", len(frames), video_id)
        return analytics, title
