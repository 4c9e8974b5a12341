"""Centralized logging utilities for hubperms.

This module provides:
- Logging configuration from PermissionsConfig
- Bounded previews for identifier sets and other values
- Structured logging with per-resolution context (user_id, resolution_id)
"""

from __future__ import annotations

import json
import logging
from typing import Any, Iterable, Optional

from .config import LogLevel, PermissionsConfig

_RECORD_FIELDS = frozenset(
    {
        "name", "msg", "args", "created", "filename", "funcName",
        "levelname", "levelno", "lineno", "module", "msecs",
        "message", "pathname", "process", "processName", "relativeCreated",
        "thread", "threadName", "exc_info", "exc_text", "stack_info",
        "taskName", "user_id", "resolution_id",
    }
)


def safe_preview(value: Any, limit: int = 240) -> str:
    """Create a length-bounded, single-line preview of a value for logging.

    Args:
        value: The value to preview (any type)
        limit: Maximum length of the preview (default: 240)

    Returns:
        A truncated string representation
    """
    if value is None:
        return ""

    if isinstance(value, str):
        s = value
    elif isinstance(value, (dict, list)):
        try:
            s = json.dumps(value, default=str, ensure_ascii=False)
        except (TypeError, ValueError):
            s = str(value)
    else:
        s = str(value)

    s = " ".join(s.split())

    if len(s) > limit:
        return s[: limit - 1] + "…"

    return s


def preview_ids(ids: Iterable[Any], limit: int = 120) -> str:
    """Preview an identifier collection in a stable order.

    Example::

        >>> preview_ids({3, 1, 2})
        '[1, 2, 3]'
    """
    return safe_preview(sorted(ids, key=str), limit=limit)


class ResolutionFormatter(logging.Formatter):
    """Formatter that includes resolution context and optional JSON output."""

    def __init__(
        self,
        include_context: bool = True,
        json_format: bool = True,
        *args: Any,
        **kwargs: Any,
    ):
        super().__init__(*args, **kwargs)
        self.include_context = include_context
        self.json_format = json_format

    def format(self, record: logging.LogRecord) -> str:
        user_id = getattr(record, "user_id", None)
        resolution_id = getattr(record, "resolution_id", None)

        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if self.include_context:
            if user_id is not None:
                log_data["user_id"] = user_id
            if resolution_id:
                log_data["resolution_id"] = resolution_id

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _RECORD_FIELDS:
                log_data[key] = safe_preview(value)

        if self.json_format:
            return json.dumps(log_data, default=str, ensure_ascii=False)

        parts = [
            f"[{log_data['timestamp']}]",
            f"{log_data['level']}",
            f"{log_data['logger']}",
        ]
        if self.include_context and user_id is not None:
            parts.append(f"user_id={user_id}")
        if self.include_context and resolution_id:
            parts.append(f"resolution_id={resolution_id}")
        parts.append(f": {log_data['message']}")
        return " ".join(parts)


class ResolutionLoggerAdapter(logging.LoggerAdapter):
    """Logger adapter that stamps records with the resolving user and resolution id.

    Usage:
        logger = get_resolution_logger(__name__, user_id=user.id, resolution_id=rid)
        logger.debug("granting_to resolved", extra={"permission": "edit_profile"})
    """

    def __init__(
        self,
        logger: logging.Logger,
        user_id: Optional[Any] = None,
        resolution_id: Optional[str] = None,
    ):
        super().__init__(logger, {})
        self.user_id = user_id
        self.resolution_id = resolution_id

    def process(self, msg: str, kwargs: dict[str, Any]) -> tuple[str, dict[str, Any]]:
        user_id = kwargs.pop("user_id", self.user_id)
        resolution_id = kwargs.pop("resolution_id", self.resolution_id)

        extra = dict(kwargs.get("extra") or {})
        if user_id is not None:
            extra["user_id"] = user_id
        if resolution_id:
            extra["resolution_id"] = resolution_id
        kwargs["extra"] = extra

        return msg, kwargs


_LEVELS = {
    LogLevel.DEBUG.value: logging.DEBUG,
    LogLevel.INFO.value: logging.INFO,
    LogLevel.WARNING.value: logging.WARNING,
    LogLevel.ERROR.value: logging.ERROR,
    LogLevel.CRITICAL.value: logging.CRITICAL,
}


def setup_logging(
    config: Optional[PermissionsConfig] = None,
    json_format: Optional[bool] = None,
) -> None:
    """Configure the root logger for a process embedding the engine.

    Args:
        config: PermissionsConfig instance (if None, loads from environment)
        json_format: Override ``config.log_json``
    """
    if config is None:
        from .config import load_config_from_env

        config = load_config_from_env()

    level_name = config.log_level.value if isinstance(config.log_level, LogLevel) else config.log_level
    log_level = _LEVELS.get(level_name, logging.INFO)
    use_json = config.log_json if json_format is None else json_format

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(ResolutionFormatter(include_context=True, json_format=use_json))
    root_logger.addHandler(console_handler)

    if config.service_name:
        logging.getLogger(config.service_name).setLevel(log_level)


def get_resolution_logger(
    name: str,
    user_id: Optional[Any] = None,
    resolution_id: Optional[str] = None,
) -> ResolutionLoggerAdapter:
    """Get a logger adapter bound to one resolution.

    Args:
        name: Logger name (typically __name__)
        user_id: Id of the user being resolved
        resolution_id: Id of the resolution, shared by all its records

    Returns:
        ResolutionLoggerAdapter instance
    """
    return ResolutionLoggerAdapter(logging.getLogger(name), user_id=user_id, resolution_id=resolution_id)


__all__ = [
    "safe_preview",
    "preview_ids",
    "ResolutionFormatter",
    "ResolutionLoggerAdapter",
    "setup_logging",
    "get_resolution_logger",
]
