"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from core.config import DEFAULT_CORS_ORIGINS, Settings, load_settings

ENV_VARS = [
    "EIGHTS_HOST",
    "EIGHTS_PORT",
    "EIGHTS_LOG_LEVEL",
    "EIGHTS_THINK_DELAY_MS",
    "EIGHTS_STRATEGY",
    "FRONTEND_URL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    def test_defaults(self):
        settings = load_settings()

        assert settings.think_delay_ms == 1500
        assert settings.think_delay == 1.5
        assert settings.strategy == "first-match"
        assert settings.port == 8000
        assert settings.cors_origins == DEFAULT_CORS_ORIGINS

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("EIGHTS_THINK_DELAY_MS", "250")
        monkeypatch.setenv("EIGHTS_PORT", "9001")
        monkeypatch.setenv("EIGHTS_STRATEGY", "random")

        settings = load_settings()

        assert settings.think_delay == 0.25
        assert settings.port == 9001
        assert settings.strategy == "random"

    def test_frontend_url_added_to_cors(self, monkeypatch):
        monkeypatch.setenv("FRONTEND_URL", "https://eights.example.com")

        settings = load_settings()

        assert settings.cors_origins[-1] == "https://eights.example.com"
        assert DEFAULT_CORS_ORIGINS == ["http://localhost:5173", "http://localhost:3000"]

    def test_negative_delay_rejected(self):
        with pytest.raises(ValidationError):
            Settings(think_delay_ms=-5)
