"""Tests for PermissionsConfig."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from hubperms import LogLevel, PermissionsConfig, load_config_from_env


class TestPermissionsConfig:
    """Tests for PermissionsConfig model."""

    def test_create_default_config(self) -> None:
        config = PermissionsConfig()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.service_name is None
        assert config.memoize is True
        assert config.strict_permission_kinds is True

    def test_create_custom_config(self) -> None:
        config = PermissionsConfig(
            log_level=LogLevel.DEBUG,
            log_json=True,
            service_name="order-reports",
            memoize=False,
            strict_permission_kinds=False,
        )
        assert config.log_level == LogLevel.DEBUG
        assert config.log_json is True
        assert config.service_name == "order-reports"
        assert config.memoize is False
        assert config.strict_permission_kinds is False

    def test_log_level_from_string(self) -> None:
        assert PermissionsConfig(log_level="debug").log_level == LogLevel.DEBUG

    def test_log_level_invalid(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            PermissionsConfig(log_level="INVALID")

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(Exception):  # Pydantic validation error
            PermissionsConfig(redis_url="redis://localhost")  # type: ignore[call-arg]


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env function."""

    @patch.dict(os.environ, {}, clear=True)
    def test_load_defaults(self) -> None:
        config = load_config_from_env()
        assert config.log_level == LogLevel.INFO
        assert config.log_json is False
        assert config.memoize is True
        assert config.strict_permission_kinds is True

    @patch.dict(
        os.environ,
        {
            "HUBPERMS_LOG_LEVEL": "DEBUG",
            "HUBPERMS_LOG_JSON": "true",
            "HUBPERMS_SERVICE_NAME": "order-reports",
            "HUBPERMS_MEMOIZE": "false",
            "HUBPERMS_STRICT_PERMISSION_KINDS": "0",
        },
        clear=True,
    )
    def test_load_from_env(self) -> None:
        config = load_config_from_env()
        assert config.log_level == LogLevel.DEBUG
        assert config.log_json is True
        assert config.service_name == "order-reports"
        assert config.memoize is False
        assert config.strict_permission_kinds is False

    def test_boolean_variants(self) -> None:
        for value in ("true", "1", "yes", "on", "TRUE"):
            with patch.dict(os.environ, {"HUBPERMS_LOG_JSON": value}, clear=True):
                assert load_config_from_env().log_json is True

    @patch.dict(os.environ, {"HUBPERMS_LOG_LEVEL": "LOUD"}, clear=True)
    def test_invalid_env_level(self) -> None:
        with pytest.raises(ValueError, match="Invalid log level"):
            load_config_from_env()
