"""
Client for the external video-analysis worker.
"""


import logging

import httpx

from app.core.exceptions import WorkerDispatchError


logger = logging.getLogger(__name__)


class AnalysisWorkerClient:
    """Hands uploaded videos to the worker, which posts frame batches back asynchronously"""

    def __init__(self, base_url: str, timeout: float = 300.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    async def dispatch(self, video_id: str, filename: str, file_data: bytes, mime_type: str = "video/mp4") -> None:
        """
        Send a video to the worker's /process endpoint.
        Returns once the worker has accepted the file, not after analysis.
        Raises:
            WorkerDispatchError: On transport errors or a non-2xx response
        """
        url = f"{self.base_url}/process"
        try:
            async with httpx.AsyncClient(timeout=httpx.Timeout(self.timeout)) as client:
                logger.debug("📡 Dispatching video %s (%d bytes) to %s", video_id, len(file_data), url)
                response = await client.post(
                    url,
                    data={"video_id": video_id},
                    files={"file": (filename, file_data, mime_type)},
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            logger.error("❌ Analysis worker rejected video %s: %s", video_id, e.response.status_code)
            raise WorkerDispatchError(f"Analysis worker returned {e.response.status_code}") from e
        except httpx.RequestError as e:
            logger.error("🌐 Error calling analysis worker for video %s: %s", video_id, e)
            raise WorkerDispatchError(f"Analysis worker unreachable: {e}") from e
        logger.info("🚀 Video %s dispatched to analysis worker", video_id)
