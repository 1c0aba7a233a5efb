"""Tests for settings parsing."""

from __future__ import annotations

import pytest

from product_api.core.config import DEFAULT_CORS_ORIGINS, Settings

pytestmark = pytest.mark.unit


class TestSettings:
    def test_rewrites_heroku_postgres_url(self):
        settings = Settings(database_url="postgres://u:p@db:5432/products")

        assert settings.database_url == "postgresql+psycopg://u:p@db:5432/products"

    def test_detects_sqlite(self):
        assert Settings(database_url="sqlite://").is_sqlite

    def test_cors_defaults_to_local_origins(self):
        assert Settings(front_url=None).cors_origins == DEFAULT_CORS_ORIGINS

    def test_cors_uses_front_url(self):
        settings = Settings(front_url="https://shop.example.com/")

        assert settings.cors_origins == ["https://shop.example.com"]

    def test_log_level_is_normalized(self):
        assert Settings(log_level=" debug ").log_level == "DEBUG"

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("PORT", "9000")
        monkeypatch.setenv("FRONT_URL", "http://front.local")

        settings = Settings()

        assert settings.port == 9000
        assert settings.cors_origins == ["http://front.local"]
