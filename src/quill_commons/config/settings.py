"""
Configuration management for quill-commons.

Environment-driven settings for the cache platform and its logging. Every
field can be set through a ``QUILL_``-prefixed environment variable or a
``.env`` file.
"""
from functools import lru_cache
from typing import Dict, Literal, Optional

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)


class QuillSettings(BaseSettings):
    """Settings for the blog cache platform."""

    model_config = SettingsConfigDict(
        env_prefix="QUILL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Cache Configuration
    cache_enabled: bool = Field(default=True)
    cache_backend: Literal["memory", "redis"] = Field(default="memory")
    cache_key_prefix: str = Field(default="quill:")
    cache_strict_namespaces: bool = Field(default=True)
    cache_negative_ttl_seconds: int = Field(default=30, ge=0)
    cache_invalidation_granularity: Literal["fine", "coarse"] = Field(default="fine")
    cache_invalidation_batch_size: int = Field(default=500, gt=0)
    cache_ttl_overrides: Dict[str, int] = Field(default_factory=dict)

    # Redis Configuration
    redis_url: Optional[str] = Field(default=None)
    redis_pool_size: int = Field(default=10, gt=0)
    redis_socket_timeout: float = Field(default=5.0, gt=0)
    redis_scan_count: int = Field(default=500, gt=0)

    # Logging Configuration
    log_level: str = Field(default="INFO")
    log_format: str = Field(default=DEFAULT_LOG_FORMAT)
    log_file: Optional[str] = Field(default=None)
    log_rotation: str = Field(default="10 MB")
    log_retention: str = Field(default="7 days")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        """Upper-case and check the log level name."""
        level = value.upper()
        if level not in ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level '{value}'")
        return level

    @field_validator("cache_ttl_overrides")
    @classmethod
    def validate_ttl_overrides(cls, value: Dict[str, int]) -> Dict[str, int]:
        """Reject non-positive TTL overrides."""
        invalid = {name: ttl for name, ttl in value.items() if ttl <= 0}
        if invalid:
            raise ValueError(f"TTL overrides must be positive: {invalid}")
        return value

    @model_validator(mode="after")
    def validate_backend(self) -> "QuillSettings":
        """Redis backend needs a connection URL."""
        if self.cache_backend == "redis" and not self.redis_url:
            raise ValueError("cache_backend 'redis' requires redis_url")
        return self

    @property
    def is_redis_backend(self) -> bool:
        """Check if entries are stored in Redis."""
        return self.cache_backend == "redis"


@lru_cache()
def get_settings() -> QuillSettings:
    """Get cached settings instance."""
    return QuillSettings()
