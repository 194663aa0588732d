"""
Redis client configuration and frame cache keys.
"""


import redis

from app.core.config import settings


redis_client: redis.Redis = redis.from_url(
    settings.redis_url,
    decode_responses=True,
    health_check_interval=30
) # type: ignore


def frame_cache_key(video_id: str, frame_number: int) -> str:
    """Key of the hash holding one analysed frame"""
    return f"video:{video_id}:frame:{frame_number}"


def get_redis() -> redis.Redis:
    """Get Redis client"""
    return redis_client
