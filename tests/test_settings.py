"""Tests for environment-driven settings."""

from __future__ import annotations

import logging

from core.log import configure_logging, resolve_level
from core.settings import DEFAULT_DATABASE_URL, load_settings


def test_defaults(monkeypatch, caplog):
    for name in ("DATABASE_URL", "DB_POOL_MIN_SIZE", "DB_POOL_MAX_SIZE", "DB_COMMAND_TIMEOUT", "APP_HOST", "APP_PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    with caplog.at_level(logging.WARNING, logger="core.settings"):
        settings = load_settings()

    assert settings.database_url == DEFAULT_DATABASE_URL
    assert "password" not in settings.database_url
    assert ":" not in settings.database_url.split("@")[0].split("//")[1]
    assert (settings.pool_min_size, settings.pool_max_size) == (1, 5)
    assert settings.command_timeout == 30.0
    assert (settings.host, settings.port) == ("0.0.0.0", 8080)
    assert settings.log_level == "INFO"
    assert "DATABASE_URL not set" in caplog.text


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", " postgresql://app@db/texts ")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "10")
    monkeypatch.setenv("DB_COMMAND_TIMEOUT", "2.5")
    monkeypatch.setenv("APP_PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.database_url == "postgresql://app@db/texts"
    assert settings.pool_max_size == 10
    assert settings.command_timeout == 2.5
    assert settings.port == 9000
    assert settings.log_level == "DEBUG"


def test_malformed_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("APP_PORT", "eighty")
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "x")
    monkeypatch.setenv("DB_COMMAND_TIMEOUT", "soon")

    settings = load_settings()

    assert settings.port == 8080
    assert settings.pool_min_size == 1
    assert settings.command_timeout == 30.0


def test_min_pool_size_never_exceeds_max(monkeypatch):
    monkeypatch.setenv("DB_POOL_MIN_SIZE", "8")
    monkeypatch.setenv("DB_POOL_MAX_SIZE", "3")

    settings = load_settings()

    assert (settings.pool_min_size, settings.pool_max_size) == (3, 3)


def test_resolve_level_falls_back_to_info():
    assert resolve_level("nonsense") == logging.INFO
    assert resolve_level("") == logging.INFO
    assert resolve_level("debug") == logging.DEBUG
    assert resolve_level("WARNING") == logging.WARNING


def test_configure_logging_sets_root_level():
    root = logging.getLogger()
    previous = root.level
    try:
        configure_logging("debug")
        assert root.level == logging.DEBUG

        configure_logging("nonsense")
        assert root.level == logging.INFO
    finally:
        root.setLevel(previous)
