"""Tests for environment-driven settings."""
from initializr.core.config import Settings


def test_defaults():
    settings = Settings(_env_file=None)
    assert settings.api_port == 8080
    assert settings.search_provider == "pkg.go.dev"
    assert settings.search_timeout == 5.0
    assert settings.search_cache_ttl == 600


def test_port_variable(monkeypatch):
    monkeypatch.setenv("PORT", "9090")
    monkeypatch.setenv("SEARCH_PROVIDER", "fallback")
    settings = Settings(_env_file=None)
    assert settings.api_port == 9090
    assert settings.search_provider == "fallback"
