"""Tests for configuration loading."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from totp_generator.config import Settings, configure_logging, get_settings


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for var in ("ENVIRONMENT", "LOG_LEVEL", "CORS_ALLOW_ORIGINS", "DOCS_URL", "HOST", "PORT"):
        monkeypatch.delenv(var, raising=False)
    s = Settings.from_env()
    assert s.environment == "dev"
    assert s.log_level == "INFO"
    assert s.cors_allow_origins == ["*"]
    assert s.docs_url == "/docs"
    assert s.port == 8000


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "prod")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ALLOW_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("PORT", "9090")
    s = Settings.from_env()
    assert s.environment == "prod"
    assert s.log_level == "DEBUG"
    assert s.cors_allow_origins == ["https://a.example", "https://b.example"]
    assert s.port == 9090


def test_invalid_log_level() -> None:
    with pytest.raises(ValidationError):
        Settings(log_level="LOUD")


def test_get_settings_cached() -> None:
    assert get_settings() is get_settings()


def test_configure_logging_explicit_level() -> None:
    with patch("logging.basicConfig") as mock_basic:
        configure_logging("WARNING")
    assert mock_basic.call_args.kwargs["level"] == "WARNING"
