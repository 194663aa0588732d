"""
Video service for upload intake and video/frame queries.
"""


import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, UpstreamWriteError, ValidationError
from app.core.file_storage import FileStorageService
from app.models.frame import Frame
from app.models.video import Video, generate_video_id
from app.services.analysis_worker import AnalysisWorkerClient
from app.services.version_resolver import FALLBACK_TITLE, resolve_versioned_title, split_filename


logger = logging.getLogger(__name__)


class VideoService:
    """Service class for video operations"""

    def __init__(
        self,
        db: Session,
        file_storage: Optional[FileStorageService] = None,
        worker: Optional[AnalysisWorkerClient] = None
    ):
        self.db = db
        self.file_storage = file_storage
        self.worker = worker

    def list_videos(self) -> List[Video]:
        """All videos, newest first"""
        return self.db.query(Video).order_by(Video.created_at.desc(), Video.id.desc()).all()

    def get_video(self, video_id: str) -> Video:
        """
        Get a video by ID.
        Raises:
            NotFoundError: If the video does not exist
        """
        video = self.db.query(Video).filter(Video.id == video_id).first()
        if video is None:
            raise NotFoundError(f"Video {video_id} not found")
        return video

    def find_titles_with_prefix(self, prefix: str) -> List[str]:
        """Existing titles starting with prefix, compared case-insensitively"""
        rows = self.db.query(Video.title).filter(
            Video.title.istartswith(prefix, autoescape=True)
        ).all()
        return [row.title for row in rows if row.title]

    def resolve_title(self, original_filename: str) -> str:
        """Versioned title for an upload that collides with no existing title"""
        original_filename = original_filename or FALLBACK_TITLE
        base_name, _ = split_filename(original_filename)
        candidates = self.find_titles_with_prefix(base_name)
        return resolve_versioned_title(original_filename, candidates)

    def create_video(self, title: str, file_path: Optional[str] = None) -> Video:
        """
        Insert a new video row.
        Raises:
            UpstreamWriteError: If the insert failed
        """
        video = Video(id=generate_video_id(), title=title, file_path=file_path)
        try:
            self.db.add(video)
            self.db.commit()
            self.db.refresh(video)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("❌ Video insert failed for %s: %s", title, e)
            raise UpstreamWriteError("video", str(e)) from e
        logger.info("Created video %s titled %s", video.id, title)
        return video

    def list_frames(self, video_id: str, limit: int = 1000) -> List[Frame]:
        """Stored frames of a video ordered by frame number"""
        return self.db.query(Frame).filter(
            Frame.video_id == video_id
        ).order_by(Frame.frame_number.asc(), Frame.id.asc()).limit(limit).all()

    async def register_upload(self, file_path: str, original_filename: str) -> Video:
        """
        Register a file already present in object storage and dispatch it
        to the analysis worker under its versioned title.
        Raises:
            ValidationError: If a field is missing or the stored file is not a video
            FileNotFoundError: If the file is not in storage
            UpstreamWriteError: If the video row could not be written
            WorkerDispatchError: If the worker did not accept the file
        """
        if not file_path or not original_filename:
            raise ValidationError("Missing filePath or originalFilename in request body")
        if self.file_storage is None or self.worker is None:
            raise RuntimeError("Upload intake needs file storage and an analysis worker")
        try:
            file_data, mime_type = self.file_storage.read_file(file_path)
        except ValueError as e:
            raise FileNotFoundError(str(e)) from e
        if not self.file_storage.is_video(mime_type):
            raise ValidationError(f"Unsupported file type: {mime_type}")
        final_title = self.resolve_title(original_filename)
        video = self.create_video(final_title, file_path)
        await self.worker.dispatch(str(video.id), final_title, file_data, mime_type)
        return video

    async def upload_video(self, file_data: bytes, original_filename: str) -> Video:
        """
        Store a streamed upload, then register and dispatch it.
        Raises:
            ValidationError: If the file is empty, too large or not a video
        """
        if self.file_storage is None:
            raise RuntimeError("Upload intake needs file storage")
        original_filename = original_filename or FALLBACK_TITLE
        try:
            file_info = self.file_storage.create_file(file_data, original_filename)
        except ValueError as e:
            raise ValidationError(str(e)) from e
        try:
            return await self.register_upload(file_info.file_id, original_filename)
        except UpstreamWriteError:
            self.file_storage.delete_file(file_info.file_id)
            raise
