"""Configuration contract for the hubperms engine.

Pydantic-validated settings shared by every resolution: logging output and
resolution behaviour switches. Callers embedding the engine in a larger
service either build ``PermissionsConfig`` themselves or load it once with
:func:`load_config_from_env`.

Direct os.environ/os.getenv usage is limited to ``load_config_from_env``.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class LogLevel(str, Enum):
    """Standard log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class PermissionsConfig(BaseModel):
    """Settings for logging and resolution behaviour.

    ``memoize`` only controls whether a resolution reuses its own earlier
    lookups; it never changes a result.
    """

    # Logging
    log_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="Logging level for the engine",
    )
    log_json: bool = Field(
        default=False,
        description="Use JSON log format (default: plain text)",
    )
    service_name: Optional[str] = Field(
        default=None,
        description="Name of the embedding service, used as logger name for setup",
    )

    # Resolution
    memoize: bool = Field(
        default=True,
        description="Cache managed sets and grant lookups for the lifetime of one resolution",
    )
    strict_permission_kinds: bool = Field(
        default=True,
        description=(
            "Reject snapshots whose stored edges carry unknown permission tags. "
            "When false such tags are logged and dropped."
        ),
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str | LogLevel) -> LogLevel:
        """Convert string to LogLevel enum."""
        if isinstance(v, LogLevel):
            return v
        if isinstance(v, str):
            try:
                return LogLevel[v.upper()]
            except KeyError:
                raise ValueError(f"Invalid log level: {v}. Must be one of {[e.value for e in LogLevel]}")
        raise ValueError(f"Log level must be string or LogLevel enum, got {type(v)}")

    model_config = {
        "use_enum_values": True,
        "extra": "forbid",
    }


_TRUTHY = ("true", "1", "yes", "on")


def load_config_from_env() -> PermissionsConfig:
    """Load engine configuration from environment variables.

    Environment variables:
    - HUBPERMS_LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    - HUBPERMS_LOG_JSON: Use JSON log format (true/false, default: false)
    - HUBPERMS_SERVICE_NAME: Embedding service name
    - HUBPERMS_MEMOIZE: Per-resolution memoization (default: true)
    - HUBPERMS_STRICT_PERMISSION_KINDS: Reject unknown stored tags (default: true)

    Returns:
        PermissionsConfig instance with values from environment or defaults.
    """
    import os

    return PermissionsConfig(
        log_level=os.getenv("HUBPERMS_LOG_LEVEL", "INFO"),
        log_json=os.getenv("HUBPERMS_LOG_JSON", "false").lower() in _TRUTHY,
        service_name=os.getenv("HUBPERMS_SERVICE_NAME"),
        memoize=os.getenv("HUBPERMS_MEMOIZE", "true").lower() in _TRUTHY,
        strict_permission_kinds=os.getenv("HUBPERMS_STRICT_PERMISSION_KINDS", "true").lower() in _TRUTHY,
    )


__all__ = [
    "LogLevel",
    "PermissionsConfig",
    "load_config_from_env",
]
