"""Runtime configuration loaded from environment variables.

Values can be placed in a .env file in the backend root:

SCRAPE_TIMEOUT_SECONDS=10
PAGESPEED_API_KEY=your_pagespeed_key_here
ANTHROPIC_API_KEY=your_real_key_here

The app loads environment variables automatically using python-dotenv.
"""

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parent / ".env")

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_CLAUDE_MODEL = "claude-3-5-haiku-latest"

# Values shipped in sample .env files that mean "not configured".
PLACEHOLDER_KEYS = {
    "your_actual_api_key_here",
    "your_real_key_here",
    "your_pagespeed_api_key_here",
    "your_pagespeed_key_here",
}


def _env_text(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _env_float(name: str, default: float) -> float:
    try:
        value = float(os.getenv(name, default))
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


def _env_int(name: str, default: int) -> int:
    try:
        value = int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default
    return value if value >= 0 else default


def _env_secret(name: str) -> str:
    value = _env_text(name)
    if value in PLACEHOLDER_KEYS:
        return ""
    return value


@dataclass(frozen=True)
class Settings:
    """Immutable settings handed to the scraper and API clients."""

    request_timeout_seconds: float = 10.0
    user_agent: str = DEFAULT_USER_AGENT
    max_redirects: int = 21
    pagespeed_api_key: str = ""
    pagespeed_timeout_seconds: float = 60.0
    pagespeed_strategy: str = "mobile"
    anthropic_api_key: str = ""
    claude_model: str = DEFAULT_CLAUDE_MODEL
    claude_max_tokens: int = 600
    cors_origins: tuple[str, ...] = ("*",)
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        origins = tuple(o.strip() for o in _env_text("CORS_ORIGINS", "*").split(",") if o.strip())
        return cls(
            request_timeout_seconds=_env_float("SCRAPE_TIMEOUT_SECONDS", 10.0),
            user_agent=_env_text("SCRAPE_USER_AGENT", DEFAULT_USER_AGENT),
            max_redirects=_env_int("SCRAPE_MAX_REDIRECTS", 21),
            pagespeed_api_key=_env_secret("PAGESPEED_API_KEY"),
            pagespeed_timeout_seconds=_env_float("PAGESPEED_TIMEOUT_SECONDS", 60.0),
            pagespeed_strategy=_env_text("PAGESPEED_STRATEGY", "mobile").lower() or "mobile",
            anthropic_api_key=_env_secret("ANTHROPIC_API_KEY"),
            claude_model=_env_text("CLAUDE_MODEL", DEFAULT_CLAUDE_MODEL),
            claude_max_tokens=_env_int("CLAUDE_MAX_TOKENS", 600) or 600,
            cors_origins=origins or ("*",),
            log_level=_env_text("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache
def get_settings() -> Settings:
    """Settings for the running process (FastAPI dependency)."""
    return Settings.from_env()
