"""
Frame ingestion: dual write of analysed frames to the Redis cache and the
relational store.

The cache is a fast-read projection keyed by (video_id, frame_number) and
overwritten on re-ingestion. The store is the source of truth for analytics
and appends a row per ingested frame. The two writes share no transaction:
the cache pipeline is sent first, then the bulk insert, then the parent
video row is upserted. A failure in a later stage does not undo an earlier
one; the caller gets an UpstreamWriteError naming the failed stage and may
retry the whole batch.
"""


import json
import logging
from typing import Any, List, Sequence, Tuple

import redis
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.cache import frame_cache_key
from app.core.exceptions import UpstreamWriteError, ValidationError
from app.models.frame import Frame
from app.models.video import Video
from app.schemas.frame import FrameAnalysis


logger = logging.getLogger(__name__)


def _describe_validation_error(error: PydanticValidationError) -> str:
    """Flatten a pydantic error into one readable line"""
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item.get("loc", ()))
        parts.append(f"{location}: {item.get('msg')}" if location else str(item.get("msg")))
    return "; ".join(parts)


class FrameIngestionService:
    """Service class for ingesting analysed frames"""

    def __init__(self, db: Session, cache: redis.Redis):
        self.db = db
        self.cache = cache

    def parse_payload(self, body: Any) -> Tuple[str, List[FrameAnalysis]]:
        """
        Validate an ingest request body.
        Accepts the batch shape {video_id, frames: [...]} and the single-frame
        shape {video_id, frame_number, ...}.
        Returns:
            Tuple of (video_id, frames)
        Raises:
            ValidationError: If video_id is missing, frames is empty or any
                frame is malformed
        """
        if not isinstance(body, dict):
            raise ValidationError("Invalid input: expected a JSON object")
        video_id = body.get("video_id")
        if not isinstance(video_id, str) or not video_id:
            raise ValidationError("Invalid input: expected video_id and frames[]")
        if "frames" in body:
            raw_frames = body["frames"]
        elif "frame_number" in body:
            raw_frames = [{key: value for key, value in body.items() if key != "video_id"}]
        else:
            raise ValidationError("Invalid input: expected video_id and frames[]")
        if not isinstance(raw_frames, list) or not raw_frames:
            raise ValidationError("Invalid input: expected video_id and frames[]")
        frames: List[FrameAnalysis] = []
        for index, raw_frame in enumerate(raw_frames):
            if not isinstance(raw_frame, dict) or raw_frame.get("frame_number") is None:
                raise ValidationError(f"Invalid input: frame {index} is missing frame_number")
            try:
                frames.append(FrameAnalysis.model_validate(raw_frame))
            except PydanticValidationError as e:
                raise ValidationError(
                    f"Invalid input: frame {index} is malformed ({_describe_validation_error(e)})"
                ) from e
        return video_id, frames

    def ingest_frames(self, video_id: str, frames: Sequence[FrameAnalysis]) -> int:
        """
        Write a batch of frames to the cache and the store and make sure the
        parent video row exists.
        Args:
            video_id: Video the frames belong to
            frames: Non-empty batch of analysed frames
        Returns:
            Number of frames accepted
        Raises:
            ValidationError: If video_id or frames is empty
            UpstreamWriteError: If a cache, store or video write failed
        """
        if not video_id:
            raise ValidationError("video_id is required")
        if not frames:
            raise ValidationError("At least one frame is required")
        self._write_cache(video_id, frames)
        self._write_store(video_id, frames)
        self._ensure_video(video_id)
        logger.info("🎞️ Ingested %d frames for video %s", len(frames), video_id)
        return len(frames)

    def _write_cache(self, video_id: str, frames: Sequence[FrameAnalysis]) -> None:
        """Send every frame hash in one non-transactional pipeline"""
        pipeline = self.cache.pipeline(transaction=False)
        for frame in frames:
            pipeline.hset(
                frame_cache_key(video_id, frame.frame_number),
                mapping=self._cache_fields(video_id, frame)
            )
        try:
            pipeline.execute()
        except redis.RedisError as e:
            logger.error("❌ Redis pipeline failed for video %s: %s", video_id, e)
            raise UpstreamWriteError("cache", str(e)) from e
        logger.debug("📦 Cached %d frames for video %s", len(frames), video_id)

    @staticmethod
    def _cache_fields(video_id: str, frame: FrameAnalysis) -> dict:
        """Flatten a frame into string hash fields"""
        return {
            "video_id": video_id,
            "frame_number": str(frame.frame_number),
            "timestamp_ms": str(frame.timestamp_ms),
            "actors": json.dumps([actor.model_dump() for actor in frame.actors]),
            "objects": json.dumps(frame.objects),
            "scene_score": "" if frame.scene_score is None else str(frame.scene_score),
            "emotion_dominant": frame.emotion_dominant or "",
            "emotion_distribution": json.dumps(frame.emotion_distribution),
        }

    def _write_store(self, video_id: str, frames: Sequence[FrameAnalysis]) -> None:
        """Insert all frames in a single transaction"""
        rows = [
            Frame(
                video_id=video_id,
                frame_number=frame.frame_number,
                timestamp_ms=frame.timestamp_ms,
                actors=[actor.model_dump() for actor in frame.actors],
                objects=list(frame.objects),
                scene_score=frame.scene_score,
                emotion_dominant=frame.emotion_dominant,
                emotion_distribution=dict(frame.emotion_distribution),
            )
            for frame in frames
        ]
        try:
            self.db.add_all(rows)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("❌ Bulk insert failed for video %s: %s", video_id, e)
            raise UpstreamWriteError("store", str(e)) from e

    def _ensure_video(self, video_id: str) -> None:
        """Create the video row if it does not exist yet"""
        try:
            dialect = self.db.get_bind().dialect.name
            if dialect == "postgresql":
                statement = pg_insert(Video).values(id=video_id).on_conflict_do_nothing(index_elements=["id"])
                self.db.execute(statement)
            elif dialect == "sqlite":
                statement = sqlite_insert(Video).values(id=video_id).on_conflict_do_nothing(index_elements=["id"])
                self.db.execute(statement)
            elif self.db.get(Video, video_id) is None:
                self.db.add(Video(id=video_id))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("❌ Video upsert failed for %s: %s", video_id, e)
            raise UpstreamWriteError("video", str(e)) from e
