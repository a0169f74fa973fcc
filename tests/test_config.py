"""
Tests for environment-driven configuration.
"""

import pytest

from utils.config import Config


class TestConfig:

    def test_defaults(self, monkeypatch):
        for name in ("PORT", "DEBUG", "PRODUCTION", "RAILWAY_ENVIRONMENT", "ALLOWED_ORIGINS",
                     "DEFAULT_PAGE_SIZE", "MAX_PAGE_SIZE", "NEARBY_RADIUS_KM"):
            monkeypatch.delenv(name, raising=False)

        config = Config.load()

        assert config.port == 8000
        assert config.production is False
        assert config.allowed_origins == []
        assert config.default_page_size == 10
        assert config.nearby_radius_km == 200

    def test_origins_split(self, monkeypatch):
        monkeypatch.setenv("ALLOWED_ORIGINS", "https://a.example, https://b.example,")

        assert Config.load().allowed_origins == ["https://a.example", "https://b.example"]

    def test_debug_disabled_in_production(self, monkeypatch):
        monkeypatch.setenv("DEBUG", "true")
        monkeypatch.setenv("RAILWAY_ENVIRONMENT", "production")

        config = Config.load()

        assert config.production is True
        assert config.debug is False

    def test_invalid_page_sizes(self, monkeypatch):
        monkeypatch.setenv("DEFAULT_PAGE_SIZE", "50")
        monkeypatch.setenv("MAX_PAGE_SIZE", "20")

        with pytest.raises(ValueError):
            Config.load()

    def test_listings_path(self, monkeypatch):
        monkeypatch.setenv("DATA_DIR", "/tmp/propgo")
        monkeypatch.delenv("LISTINGS_FILE", raising=False)

        assert Config.load().listings_path == "/tmp/propgo/listings.json"
