"""
Local object storage for uploaded videos.

Objects are addressed by a relative id. Ids generated here are uuids with
the original extension; ids handed in by clients that uploaded directly to
storage may contain sub-directories but never escape the storage root.

Video types are recognised from the bytes with python-magic (libmagic).
The extension is only consulted when libmagic cannot tell more than
application/octet-stream.
"""

import uuid
import mimetypes
from pathlib import Path
from typing import Tuple
from dataclasses import dataclass
import logging

import magic

logger = logging.getLogger(__name__)

GENERIC_MIME_TYPE = 'application/octet-stream'


@dataclass
class FileInfo:
    """A stored video object"""
    file_id: str
    file_size: int
    mime_type: str


class FileStorageService:
    """Stores, reads and removes video objects under one root directory"""
    SUPPORTED_VIDEO_TYPES = {
        'video/mp4', 'video/mpeg', 'video/quicktime', 'video/x-msvideo',
        'video/x-ms-wmv', 'video/webm', 'video/3gpp', 'video/x-flv',
        'video/x-matroska', 'video/ogg'
    }
    # Containers libmagic reports as octet-stream on some platforms
    EXTENSION_MIME_MAP = {
        '.mkv': 'video/x-matroska',
        '.webm': 'video/webm',
        '.flv': 'video/x-flv',
    }

    def __init__(self, storage_root: str, max_file_size: int = 2 * 1024 * 1024 * 1024):
        self.storage_root = Path(storage_root)
        self.max_file_size = max_file_size
        self.storage_root.mkdir(parents=True, exist_ok=True)

    def _get_file_path(self, file_id: str) -> Path:
        """Resolve an object id, refusing ids outside the root"""
        root = self.storage_root.resolve()
        file_path = (root / file_id).resolve()
        if not file_id or file_path == root or root not in file_path.parents:
            raise ValueError(f"Invalid file id: {file_id}")
        return file_path

    def detect_mime_type(self, file_data: bytes, filename: str) -> str:
        """MIME type sniffed from the content, then from the filename"""
        try:
            mime_type = magic.from_buffer(file_data, mime=True)
        except magic.MagicException as e:
            logger.warning("⚠️ libmagic could not inspect %s: %s", filename, e)
            mime_type = None
        if mime_type and mime_type != GENERIC_MIME_TYPE:
            return mime_type
        file_ext = Path(filename).suffix.lower()
        if file_ext in self.EXTENSION_MIME_MAP:
            return self.EXTENSION_MIME_MAP[file_ext]
        guessed, _ = mimetypes.guess_type(filename)
        return guessed or GENERIC_MIME_TYPE

    def is_video(self, mime_type: str) -> bool:
        return mime_type in self.SUPPORTED_VIDEO_TYPES

    def create_file(self, file_data: bytes, filename: str) -> FileInfo:
        """
        Validate and store an uploaded video.
        Raises:
            ValueError: If the file is empty, too large or not a video
            OSError: If the file cannot be written
        """
        if not file_data:
            raise ValueError("File is empty")
        if len(file_data) > self.max_file_size:
            raise ValueError(f"File size exceeds maximum limit of {self.max_file_size / (1024*1024):.1f}MB")
        mime_type = self.detect_mime_type(file_data, filename)
        if not self.is_video(mime_type):
            raise ValueError(f"Unsupported file type: {mime_type}")
        file_id = f"{uuid.uuid4()}{Path(filename).suffix.lower()}"
        self._get_file_path(file_id).write_bytes(file_data)
        logger.info("Stored file %s (%d bytes, %s) as %s", filename, len(file_data), mime_type, file_id)
        return FileInfo(file_id=file_id, file_size=len(file_data), mime_type=mime_type)

    def read_file(self, file_id: str) -> Tuple[bytes, str]:
        """
        Read an object and sniff its type.
        Raises:
            ValueError: If the id points outside the storage root
            FileNotFoundError: If the object doesn't exist
        """
        file_path = self._get_file_path(file_id)
        if not file_path.is_file():
            raise FileNotFoundError(f"File not found: {file_id}")
        file_data = file_path.read_bytes()
        return file_data, self.detect_mime_type(file_data, file_path.name)

    def delete_file(self, file_id: str) -> bool:
        """Remove an object; False if it was already gone"""
        file_path = self._get_file_path(file_id)
        if not file_path.is_file():
            return False
        file_path.unlink()
        return True
