"""
Unit tests for app/config.py
"""

import pytest

from app.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("HOST", "PORT", "APP_BASE_URL", "MAX_BODY_BYTES", "LOG_LEVEL", "CORS_ORIGINS", "DEBUG"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings.from_env()
        assert settings.PORT == 4000
        assert settings.HOST == "0.0.0.0"
        assert settings.MAX_BODY_BYTES == 1024 * 1024
        assert settings.LOG_LEVEL == "INFO"
        assert settings.cors_origins == ["*"]
        assert settings.DEBUG is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "8080")
        monkeypatch.setenv("APP_BASE_URL", "https://pastes.example.org")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
        monkeypatch.setenv("DEBUG", "yes")
        settings = Settings.from_env()
        assert settings.PORT == 8080
        assert settings.APP_BASE_URL == "https://pastes.example.org"
        assert settings.LOG_LEVEL == "DEBUG"
        assert settings.cors_origins == ["https://a.example", "https://b.example"]
        assert settings.DEBUG is True

    def test_empty_port_falls_back_to_default(self, monkeypatch):
        monkeypatch.setenv("PORT", "")
        assert Settings.from_env().PORT == 4000

    def test_non_numeric_port_is_an_error(self, monkeypatch):
        monkeypatch.setenv("PORT", "eighty")
        with pytest.raises(ValueError):
            Settings.from_env()

    @pytest.mark.parametrize(
        "base_url",
        ["https://paste.example.com", "https://paste.example.com/"],
    )
    def test_share_url_joins_without_double_slash(self, base_url):
        settings = Settings(APP_BASE_URL=base_url)
        assert settings.share_url("abc") == "https://paste.example.com/p/abc"
