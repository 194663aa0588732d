"""
Application configuration settings.
"""


from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


# pylint: disable=line-too-long
class Settings(BaseSettings):
    """Application configuration settings."""
    # App settings
    app_name: str = "Emotion Frames Backend"
    debug: bool = False
    version: str = "1.0.0"
    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    # Security
    ingestion_api_key: str = ""  # Bearer secret for the frame ingest endpoint; empty rejects every request
    # Database
    postgres_user: str = "emotion"
    postgres_password: str = "emotion"
    postgres_db: str = "emotion"
    postgres_host: str = "postgres"
    postgres_port: int = 5432
    sqlalchemy_database_uri: Optional[str] = None
    @property
    def database_url(self) -> str:
        """Database connection URL (PostgreSQL unless overridden)."""
        if self.sqlalchemy_database_uri:
            return self.sqlalchemy_database_uri
        return f"postgresql://{self.postgres_user}:{self.postgres_password}@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
    # Redis
    redis_host: str = "redis"
    redis_port: int = 6379
    redis_db: int = 0
    @property
    def redis_url(self) -> str:
        """Redis database connection URL."""
        return f"redis://{self.redis_host}:{self.redis_port}/{self.redis_db}"
    # Analysis worker
    analysis_worker_url: str = "http://analysis-worker:8000"
    analysis_worker_timeout_seconds: float = 300.0
    # Media storage
    media_storage_root: str = "/app/media_storage"
    max_upload_bytes: int = 2 * 1024 * 1024 * 1024  # 2GB
    # Frames
    frames_default_limit: int = 1000
    # CORS
    allowed_origins: list[str] = ["*"]
    @field_validator('allowed_origins', mode='before')
    @classmethod
    def parse_allowed_origins(cls, v):
        """Parse allowed origins from comma-separated string or list."""
        if isinstance(v, str):
            # Handle comma-separated string
            return [origin.strip() for origin in v.split(',') if origin.strip()]
        return v
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False
    )


settings = Settings()
