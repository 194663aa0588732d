"""
Dependency utilities for FastAPI routes.
Includes ingestion authentication and service construction.
"""


import logging

import redis
from fastapi import Depends, HTTPException, status, Request
from sqlalchemy.orm import Session

from app.core.cache import get_redis
from app.core.config import settings
from app.core.database import get_db
from app.core.exceptions import AuthError
from app.core.file_storage import FileStorageService
from app.core.security import CredentialVerifier, extract_bearer_token, get_credential_verifier
from app.services.analysis_worker import AnalysisWorkerClient
from app.services.ingestion_service import FrameIngestionService
from app.services.video_service import VideoService


logger = logging.getLogger(__name__)

credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Unauthorized",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def require_ingestion_token(
    request: Request,
    verifier: CredentialVerifier = Depends(get_credential_verifier)
) -> None:
    """Reject requests that do not carry the ingestion bearer token"""
    token = extract_bearer_token(request.headers.get("authorization", ""))
    try:
        verifier.verify(token)
    except AuthError as e:
        logger.warning("⚠️ Rejected ingestion request from %s: %s",
                       request.client.host if request.client else "unknown", e)
        raise credentials_exception from e


def get_file_storage() -> FileStorageService:
    """File storage rooted at the configured media directory"""
    return FileStorageService(settings.media_storage_root, max_file_size=settings.max_upload_bytes)


def get_analysis_worker() -> AnalysisWorkerClient:
    """Client for the external analysis worker"""
    return AnalysisWorkerClient(
        settings.analysis_worker_url,
        timeout=settings.analysis_worker_timeout_seconds
    )


def get_ingestion_service(
    db: Session = Depends(get_db),
    cache: redis.Redis = Depends(get_redis)
) -> FrameIngestionService:
    """Frame ingestion service bound to the request's session"""
    return FrameIngestionService(db, cache)


def get_video_service(
    db: Session = Depends(get_db),
    file_storage: FileStorageService = Depends(get_file_storage),
    worker: AnalysisWorkerClient = Depends(get_analysis_worker)
) -> VideoService:
    """Video service bound to the request's session"""
    return VideoService(db, file_storage=file_storage, worker=worker)
