"""
API router configuration.
"""


from fastapi import APIRouter
from app.api.endpoints import health, frames, videos, charts


api_router = APIRouter()
api_router.include_router(health.router, tags=["health"])
api_router.include_router(frames.router, prefix="", tags=["frames"])
api_router.include_router(videos.router, prefix="", tags=["videos"])
api_router.include_router(charts.router, prefix="", tags=["charts"])
