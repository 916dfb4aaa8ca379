"""Tests for configuration and logging setup."""

import logging

import pytest
from pyrank import NOT_FOUND, Config, setup_logging
from pyrank.config import get_logger


class TestConfig:
    """Test configuration constants."""

    def test_not_found_is_not_a_time(self):
        """Test the sentinel cannot collide with an int time."""
        assert NOT_FOUND is Config.not_found
        assert not isinstance(NOT_FOUND, int)

    def test_get_logger(self):
        """Test module loggers are standard loggers."""
        assert get_logger("pyrank.catalog") is logging.getLogger("pyrank.catalog")


class TestSetupLogging:
    """Test setup_logging level resolution."""

    @pytest.fixture
    def captured(self, monkeypatch):
        calls = []
        monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
        return calls

    def test_explicit_level(self, captured):
        """Test an explicit level wins."""
        setup_logging("debug")
        assert captured[0]["level"] == logging.DEBUG
        assert captured[0]["format"] == Config.log_format

    def test_environment_level(self, captured, monkeypatch):
        """Test the environment variable is used when no level is given."""
        monkeypatch.setenv(Config.log_env_var, "INFO")
        setup_logging()
        assert captured[0]["level"] == logging.INFO

    def test_default_level(self, captured, monkeypatch):
        """Test the configured default applies last."""
        monkeypatch.delenv(Config.log_env_var, raising=False)
        setup_logging()
        assert captured[0]["level"] == getattr(logging, Config.log_level)
