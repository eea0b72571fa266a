from config import Settings


def test_defaults(monkeypatch):
    for name in ("SCRAPE_TIMEOUT_SECONDS", "SCRAPE_USER_AGENT", "SCRAPE_MAX_REDIRECTS", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)
    settings = Settings.from_env()
    assert settings.request_timeout_seconds == 10.0
    assert settings.max_redirects == 21
    assert settings.user_agent.startswith("Mozilla/5.0")
    assert settings.cors_origins == ("*",)


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("SCRAPE_TIMEOUT_SECONDS", "3.5")
    monkeypatch.setenv("PAGESPEED_STRATEGY", "Desktop")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    settings = Settings.from_env()
    assert settings.request_timeout_seconds == 3.5
    assert settings.pagespeed_strategy == "desktop"
    assert settings.cors_origins == ("https://a.example", "https://b.example")


def test_bad_numbers_fall_back(monkeypatch):
    monkeypatch.setenv("SCRAPE_TIMEOUT_SECONDS", "soon")
    monkeypatch.setenv("SCRAPE_MAX_REDIRECTS", "-1")
    settings = Settings.from_env()
    assert settings.request_timeout_seconds == 10.0
    assert settings.max_redirects == 21


def test_placeholder_keys_are_ignored(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "your_real_key_here")
    monkeypatch.setenv("PAGESPEED_API_KEY", "your_pagespeed_api_key_here")
    settings = Settings.from_env()
    assert settings.anthropic_api_key == ""
    assert settings.pagespeed_api_key == ""
