from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = Field(..., alias="DATABASE_URL")

    # Record store connectivity
    store_max_retries: int = Field(5, alias="STORE_MAX_RETRIES")
    store_retry_backoff_seconds: float = Field(5.0, alias="STORE_RETRY_BACKOFF_SECONDS")
    store_reconnect_interval_seconds: float = Field(30.0, alias="STORE_RECONNECT_INTERVAL_SECONDS")
    store_connect_timeout_seconds: float = Field(5.0, alias="STORE_CONNECT_TIMEOUT_SECONDS")

    admission_no_prefix: str = Field("MPA", alias="ADMISSION_NO_PREFIX")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    cors_allow_origins: List[str] = Field(["*"], alias="CORS_ALLOW_ORIGINS")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()
