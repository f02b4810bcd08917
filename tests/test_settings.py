"""Tests for settings.py - immutable runtime settings."""

import os
import sys

import pytest
from pydantic import ValidationError

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import config
import settings
from settings import Settings, get_settings, load_settings


@pytest.fixture(autouse=True)
def reset_settings_cache():
    settings.invalidate_cache()
    yield
    settings.invalidate_cache()


class TestSettingsModel:
    """Tests for the Settings model."""

    def test_defaults(self):
        s = Settings()
        assert s.api_key is None
        assert s.public_base_url is None
        assert s.ytdlp_path == "yt-dlp"
        assert s.stream_chunk_size == 256 * 1024
        assert s.stream_buffer_limit == 1 << 25

    def test_auth_enabled(self):
        assert Settings().auth_enabled is False
        assert Settings(api_key="").auth_enabled is False
        assert Settings(api_key="k").auth_enabled is True

    def test_frozen(self):
        s = Settings()
        with pytest.raises(ValidationError):
            s.api_key = "changed"

    def test_token_ttl_lower_bound(self):
        with pytest.raises(ValidationError):
            Settings(stream_token_ttl=1)


class TestLoadSettings:
    """Tests for load_settings / get_settings."""

    def test_reads_config(self, monkeypatch):
        monkeypatch.setattr(config, "API_KEY", "env-key")
        monkeypatch.setattr(config, "PUBLIC_BASE_URL", "https://svc.example")
        monkeypatch.setattr(config, "YTDLP_PATH", "/usr/bin/yt-dlp")
        monkeypatch.setattr(config, "YTDLP_SKIP_TLS_VERIFY", True)

        s = load_settings()
        assert s.api_key == "env-key"
        assert s.public_base_url == "https://svc.example"
        assert s.ytdlp_path == "/usr/bin/yt-dlp"
        assert s.ytdlp_skip_tls_verify is True

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()

    def test_invalidate_cache(self, monkeypatch):
        first = get_settings()
        monkeypatch.setattr(config, "API_KEY", "rotated")
        settings.invalidate_cache()
        second = get_settings()
        assert second is not first
        assert second.api_key == "rotated"
