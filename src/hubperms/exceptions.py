"""Unified exception hierarchy for hubperms.

All errors raised by the engine inherit from HubPermsError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for mapping codes back to classes (API layers, report jobs)

Usage in callers:
    from hubperms.exceptions import (
        HubPermsError,
        DataAccessError,
        InvalidPermissionKind,
    )

Store adapters may define thin subclasses for backend-specific errors:
    class PostgresStoreError(DataAccessError):
        pass
"""

from __future__ import annotations

import logging
from typing import Any, Callable, TypeVar, cast

__all__ = [
    # Base hierarchy
    "HubPermsError",
    "ConfigurationError",
    "DataAccessError",
    "InvalidPermissionKind",
    "EmptyEdgePermissionSet",
    # Registry
    "ErrorRegistry",
    "error_registry",
    "register_error",
]

logger = logging.getLogger(__name__)


# ---- Exception Hierarchy ----------------------------------------------------


class HubPermsError(Exception):
    """Base exception for the permission engine.

    Attributes:
        code: Stable error code string (e.g. "DATA_ACCESS_ERROR").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(HubPermsError):
    """Invalid or missing configuration."""

    code: str = "CONFIGURATION_ERROR"


class DataAccessError(HubPermsError):
    """The entity store failed to answer a lookup.

    Never retried inside the engine. ``details["operation"]`` names the
    store read that failed.
    """

    code: str = "DATA_ACCESS_ERROR"
    message: str = "Entity store lookup failed"


class InvalidPermissionKind(HubPermsError):
    """A permission tag outside the enumerated set was supplied."""

    code: str = "INVALID_PERMISSION_KIND"
    message: str = "Unknown permission kind"


class EmptyEdgePermissionSet(HubPermsError):
    """A grant edge carries no permission kinds.

    Raised by ``EnterpriseRelationship.ensure_permissions()``. The grant graph
    logs and skips such edges; it never aborts a resolution because of one.
    """

    code: str = "EMPTY_EDGE_PERMISSION_SET"
    message: str = "Enterprise relationship has an empty permission set"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[HubPermsError])


class ErrorRegistry:
    """Registry for mapping error codes to exception classes."""

    def __init__(self) -> None:
        self._errors: dict[str, type[HubPermsError]] = {}

    def register(self, code: str, error_cls: type[HubPermsError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[HubPermsError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[HubPermsError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("STORE_TIMEOUT")
        class StoreTimeout(DataAccessError):
            code = "STORE_TIMEOUT"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


# Register base errors
error_registry.register("INTERNAL_ERROR", HubPermsError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("DATA_ACCESS_ERROR", DataAccessError)
error_registry.register("INVALID_PERMISSION_KIND", InvalidPermissionKind)
error_registry.register("EMPTY_EDGE_PERMISSION_SET", EmptyEdgePermissionSet)
