"""
Application configuration using Pydantic settings.

Usage:
    from teamup.config import get_settings
    settings = get_settings()

For constants, import from teamup.constants:
    from teamup.constants import MAX_RECOMMENDATIONS, PROJECT_STATUS_OPEN
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Relay settings:
        - RELAY_BUFFER_SIZE: outbound messages kept per connection before the oldest is dropped
        - RELAY_SEND_TIMEOUT_SECONDS: a send slower than this disconnects the subscriber
        - RELAY_REDIS_ENABLED: fan out chat broadcasts across processes through Redis pub/sub
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "TeamUp"
    api_prefix: str = "/api"
    debug: bool = Field(default=False)
    max_request_size_mb: int = Field(default=10, validation_alias="MAX_REQUEST_SIZE_MB")

    # Database
    database_url: str = Field(default="sqlite:///teamup.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")
    auto_create_tables: bool = Field(default=True, validation_alias="AUTO_CREATE_TABLES")

    # CORS
    cors_allowed_origins: str = Field(default="http://localhost:3000", validation_alias="CORS_ALLOWED_ORIGINS")

    # Redis
    redis_host: str = Field(default="localhost", validation_alias="REDIS_HOST")
    redis_port: int = Field(default=6379, validation_alias="REDIS_PORT")
    redis_db: int = Field(default=0, validation_alias="REDIS_DB")
    redis_password: Optional[str] = Field(default=None, validation_alias="REDIS_PASSWORD")

    @property
    def redis_url(self) -> str:
        """Construct Redis URL from components."""
        auth = f":{self.redis_password}@" if self.redis_password else ""
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Realtime relay
    relay_buffer_size: int = Field(default=100, validation_alias="RELAY_BUFFER_SIZE")
    relay_send_timeout_seconds: float = Field(default=5.0, validation_alias="RELAY_SEND_TIMEOUT_SECONDS")
    relay_redis_enabled: bool = Field(default=False, validation_alias="RELAY_REDIS_ENABLED")
    relay_redis_channel_prefix: str = Field(default="teamup:relay", validation_alias="RELAY_REDIS_CHANNEL_PREFIX")

    # Chat
    chat_history_max_limit: int = Field(default=200, validation_alias="CHAT_HISTORY_MAX_LIMIT")

    @field_validator("relay_buffer_size")
    @classmethod
    def validate_buffer_size(cls, v: int) -> int:
        """A relay connection needs room for at least one pending message."""
        if v < 1:
            raise ValueError(f"RELAY_BUFFER_SIZE must be at least 1 (got {v})")
        return v

    @field_validator("relay_send_timeout_seconds")
    @classmethod
    def validate_send_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"RELAY_SEND_TIMEOUT_SECONDS must be positive (got {v})")
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
