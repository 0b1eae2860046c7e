"""
Tests for client configuration.

Author: Yobie Benjamin
Date: 2026-10-19
"""

import pytest
from pydantic import ValidationError

from persontrack.client.models import Endpoints
from persontrack.config import ClientSettings, get_settings


class TestClientSettings:
    """Test ClientSettings configuration."""

    def test_default_settings(self):
        """Test default settings creation."""
        settings = ClientSettings(_env_file=None)

        assert str(settings.base_url).rstrip("/") == "http://localhost:8000"
        assert settings.request_timeout_seconds == 10.0
        assert settings.max_consecutive_failures == 5
        assert settings.escalate_transport_loss == False
        assert settings.log_level == "INFO"
        assert settings.log_file is None
        assert settings.log_rotation == "10 MB"
        assert settings.log_retention == "7 days"

    def test_environment_variable_override(self, monkeypatch):
        """Test environment variable override."""
        monkeypatch.setenv("PERSONTRACK_BASE_URL", "http://detector.local:9000")
        monkeypatch.setenv("PERSONTRACK_ESCALATE_TRANSPORT_LOSS", "true")
        monkeypatch.setenv("PERSONTRACK_LOG_LEVEL", "debug")

        settings = ClientSettings(_env_file=None)

        assert settings.endpoints().start_session_url == "http://detector.local:9000/start_session/"
        assert settings.escalate_transport_loss == True
        assert settings.log_level == "DEBUG"

    def test_invalid_values(self):
        """Test validation of bad values."""
        with pytest.raises(ValidationError):
            ClientSettings(_env_file=None, request_timeout_seconds=0)

        with pytest.raises(ValidationError):
            ClientSettings(_env_file=None, send_person_path="person_detection/")

        with pytest.raises(ValidationError):
            ClientSettings(_env_file=None, base_url="not a url")

    def test_get_settings_cached(self):
        """Test settings are cached."""
        get_settings.cache_clear()

        assert get_settings() is get_settings()

        get_settings.cache_clear()


class TestEndpoints:
    """Test the endpoint table."""

    def test_default_urls(self):
        endpoints = Endpoints()

        assert endpoints.start_session_url == "http://localhost:8000/start_session/"
        assert endpoints.send_person_url == "http://localhost:8000/person_detection/"
        assert endpoints.stop_session_url == "http://localhost:8000/stop_session/"

    def test_immutable(self):
        endpoints = Endpoints()

        with pytest.raises(ValidationError):
            endpoints.start_session = "/other/"

    def test_from_settings(self):
        settings = ClientSettings(_env_file=None, send_person_path="/v2/person/")

        assert settings.endpoints().send_person_url == "http://localhost:8000/v2/person/"
