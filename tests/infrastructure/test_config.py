"""Tests for settings loading and logging setup."""

import logging
from pathlib import Path

from orderstock.infrastructure.config import load_settings
from orderstock.infrastructure.logging import configure_logging


class TestLoadSettings:

    def test_defaults(self, monkeypatch):
        for name in ("ORDERSTOCK_DATA_DIR", "ORDERSTOCK_TRACK_INVENTORY_LEVELS", "ENVIRONMENT", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)

        settings = load_settings()

        assert settings.environment == "development"
        assert settings.log_level == "DEBUG"
        assert settings.track_inventory_levels is True
        assert settings.data_dir.name == "data"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ORDERSTOCK_DATA_DIR", str(tmp_path))
        monkeypatch.setenv("ORDERSTOCK_TRACK_INVENTORY_LEVELS", "false")
        monkeypatch.setenv("ENVIRONMENT", "Production")
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        settings = load_settings()

        assert settings.data_dir == Path(tmp_path)
        assert settings.track_inventory_levels is False
        assert settings.environment == "production"
        assert settings.log_level == "INFO"

    def test_explicit_log_level_wins(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "test")
        monkeypatch.setenv("LOG_LEVEL", "error")

        assert load_settings().log_level == "ERROR"


class TestConfigureLogging:

    def test_sets_root_level(self, monkeypatch):
        monkeypatch.setenv("ENVIRONMENT", "test")
        monkeypatch.delenv("LOG_LEVEL", raising=False)

        configure_logging(load_settings())

        assert logging.getLogger().level == logging.WARNING
        assert len(logging.getLogger().handlers) == 1
