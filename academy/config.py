"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./academy.db"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"

    # Concurrency
    SERIALIZABLE_ISOLATION: bool = True
    CONCURRENCY_MAX_RETRIES: int = 3
    CONCURRENCY_BACKOFF_SECONDS: float = 0.05

    # Certificates
    CERTIFICATE_BASE_URL: str = "https://certificates.example.com"

    # Auth
    PASSWORD_PEPPER: str = ""

    @field_validator("CERTIFICATE_BASE_URL", mode="after")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        """Normalize the base URL so paths can be appended with a single '/'."""
        value = value.strip().rstrip("/")
        if not value:
            msg = "CERTIFICATE_BASE_URL cannot be empty"
            raise ValueError(msg)
        return value

    @field_validator("CONCURRENCY_MAX_RETRIES", mode="after")
    @classmethod
    def validate_max_retries(cls, value: int) -> int:
        if value < 1:
            msg = "CONCURRENCY_MAX_RETRIES must be at least 1"
            raise ValueError(msg)
        return value

    @field_validator("CONCURRENCY_BACKOFF_SECONDS", mode="after")
    @classmethod
    def validate_backoff(cls, value: float) -> float:
        if value < 0:
            msg = "CONCURRENCY_BACKOFF_SECONDS cannot be negative"
            raise ValueError(msg)
        return value


def configure_logging(environment: str = "development") -> None:
    """Configure structured logging with structlog."""
    # Determine if we should use JSON output (production) or console output (dev)
    use_json = environment == "production"

    # Configure stdlib logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=logging.DEBUG if environment == "development" else logging.INFO,
    )

    # Configure structlog
    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if use_json:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
