"""Configuration for the YeniPara SDK.

Uses Pydantic v2 for validation with defaults matching the mobile client
(30 s resource timeout, 3 retries after the first attempt).
"""

from __future__ import annotations

import random
from typing import Annotated, Any, Self

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    HttpUrl,
    field_validator,
)


class RetryConfig(BaseModel):
    """Exponential backoff settings."""

    model_config = ConfigDict(frozen=True)

    initial_delay: Annotated[float, Field(gt=0, le=60)] = 1.0
    max_delay: Annotated[float, Field(gt=0, le=300)] = 30.0
    exponential_base: Annotated[float, Field(ge=1.5, le=3.0)] = 2.0
    jitter: Annotated[float, Field(ge=0, le=1.0)] = 0.0

    def get_delay(self, attempt: int) -> float:
        """Calculate delay for a zero-indexed attempt."""
        delay = min(
            self.initial_delay * (self.exponential_base**attempt),
            self.max_delay,
        )
        if not self.jitter:
            return delay
        jitter_range = delay * self.jitter
        return delay + random.uniform(-jitter_range, jitter_range)  # noqa: S311


class TelemetryConfig(BaseModel):
    """Logging and tracing configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = True
    service_name: str = "yenipara-sdk"
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Normalize and validate the log level name."""
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unsupported log level: {v}"
            raise ValueError(msg)
        return level


class ClientConfig(BaseModel):
    """Main configuration for the YeniPara SDK."""

    model_config = ConfigDict(frozen=True, validate_default=True)

    base_url: HttpUrl

    # Identification headers
    platform: str = Field(default="python", min_length=1)
    app_version: str = Field(default="1.0", min_length=1)

    # HTTP settings
    timeout: Annotated[float, Field(gt=0, le=300)] = 20.0
    connect_timeout: Annotated[float, Field(gt=0, le=60)] = 10.0
    resource_timeout: Annotated[float, Field(gt=0, le=600)] = 30.0

    # Default attempts for a RequestSpec built by the endpoint factories
    max_attempts: Annotated[int, Field(ge=1, le=10)] = 4

    refresh_path: str = "/api/v1/auth/refresh"

    retry: RetryConfig = Field(default_factory=RetryConfig)
    telemetry: TelemetryConfig = Field(default_factory=TelemetryConfig)

    @field_validator("platform", "app_version")
    @classmethod
    def validate_header_value(cls, v: str) -> str:
        """Identification values are sent as headers and must be printable ASCII."""
        if not (v.isascii() and v.isprintable()):
            msg = f"Header value must be printable ASCII: {v!r}"
            raise ValueError(msg)
        return v

    @field_validator("refresh_path")
    @classmethod
    def validate_refresh_path(cls, v: str) -> str:
        if not v.startswith("/"):
            msg = "refresh_path must start with '/'"
            raise ValueError(msg)
        return v

    @property
    def base_url_str(self) -> str:
        """Get base URL as string without trailing slash."""
        return str(self.base_url).rstrip("/")

    def with_overrides(self, **kwargs: Any) -> Self:
        """Create new config with overridden values."""
        data = self.model_dump()
        data.update(kwargs)
        return self.__class__(**data)

    @classmethod
    def from_env(cls, prefix: str = "YENIPARA_") -> Self:
        """Create config from environment variables."""
        import os

        def get_env(key: str, default: Any = None) -> Any:
            return os.environ.get(f"{prefix}{key}", default)

        base_url = get_env("BASE_URL")
        if not base_url:
            msg = f"{prefix}BASE_URL environment variable is required"
            raise ValueError(msg)

        return cls(
            base_url=base_url,
            platform=get_env("PLATFORM", "python"),
            app_version=get_env("APP_VERSION", "1.0"),
            timeout=float(get_env("TIMEOUT", "20.0")),
            resource_timeout=float(get_env("RESOURCE_TIMEOUT", "30.0")),
            max_attempts=int(get_env("MAX_ATTEMPTS", "4")),
            telemetry=TelemetryConfig(log_level=get_env("LOG_LEVEL", "INFO")),
        )
