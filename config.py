"""Configuration management for TinyLink."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Database settings
    database_url: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection URL; when unset the SQLite file db_file is used"
    )

    db_file: str = Field(
        default="tinylink.db",
        description="SQLite database file used when DATABASE_URL is not set"
    )

    pool_max_size: int = Field(
        default=10,
        ge=1,
        description="Maximum PostgreSQL pool size"
    )

    connection_timeout_seconds: int = Field(
        default=30,
        description="Connection/command timeout (busy timeout for SQLite)"
    )

    # Redis settings (optional)
    redis_url: Optional[str] = Field(
        default=None,
        description="Redis connection URL for caching"
    )

    cache_ttl_seconds: int = Field(
        default=3600,
        description="Cache TTL in seconds"
    )

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=3000,
        description="Port to listen on"
    )

    workers: int = Field(
        default=1,
        ge=1,
        description="Number of uvicorn worker processes"
    )

    # Short link settings
    base_url: str = Field(
        default="http://localhost:3000",
        description="Externally visible base URL used to build {base_url}/{code}"
    )

    short_code_length: int = Field(
        default=6,
        ge=6,
        le=7,
        description="Length of generated short codes"
    )

    escalate_after: int = Field(
        default=10,
        ge=1,
        description="Failed generation attempts before codes grow by one character"
    )

    max_generation_attempts: int = Field(
        default=100,
        ge=1,
        description="Generation attempts before creation fails"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def storage_target(self) -> str:
        """Connection URL of the link store selected at startup."""
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.db_file}"


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
