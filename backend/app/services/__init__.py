"""
Service layer package
"""


from app.services.analysis_worker import AnalysisWorkerClient
from app.services.analytics_service import AnalyticsService, EmotionAnalytics, aggregate_emotions, to_percent
from app.services.ingestion_service import FrameIngestionService
from app.services.version_resolver import resolve_versioned_title, split_filename
from app.services.video_service import VideoService


__all__ = [
    "AnalysisWorkerClient",
    "AnalyticsService",
    "EmotionAnalytics",
    "aggregate_emotions",
    "to_percent",
    "FrameIngestionService",
    "resolve_versioned_title",
    "split_filename",
    "VideoService",
]
