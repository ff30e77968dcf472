"""
API configuration loaded from environment or defaults.
"""

import os
from pathlib import Path

DEFAULT_DAILY_RECOMMENDATION_LIMIT = 10


def get_database_path() -> str:
    """Get database file path from env or default."""
    return os.getenv("DATABASE_URL", "sqlite:///").replace("sqlite:///", "") or str(
        Path(__file__).resolve().parents[2] / "data" / "mymovies.db"
    )


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_log_file() -> str | None:
    """Get log file name, or None to log to console only."""
    return os.getenv("LOG_FILE") or None


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "8000"))


def get_tmdb_api_key() -> str:
    """Get TMDb API key (empty when not configured)."""
    return os.getenv("TMDB_API_KEY", "")


def get_tmdb_language() -> str:
    """Get language for TMDb responses."""
    return os.getenv("TMDB_LANGUAGE", "pl-PL")


def get_openrouter_api_key() -> str:
    """Get OpenRouter API key (empty when not configured)."""
    return os.getenv("OPENROUTER_API_KEY", "")


def get_openrouter_model() -> str:
    """Get the completion model used for recommendations."""
    return os.getenv("OPENROUTER_MODEL", "openai/gpt-4o-mini")


def _positive_env(name: str, default, cast=int):
    """Read a positive number from env; missing, malformed, or non-positive values give ``default``."""
    try:
        value = cast(os.getenv(name, ""))
    except ValueError:
        return default
    return value if value > 0 else default


def get_daily_recommendation_limit() -> int:
    """Get per-user daily recommendation limit."""
    return _positive_env("DAILY_RECOMMENDATION_LIMIT", DEFAULT_DAILY_RECOMMENDATION_LIMIT)


def get_http_timeout() -> float:
    """Get timeout (seconds) applied to every outbound HTTP call."""
    return _positive_env("HTTP_TIMEOUT_SECONDS", 10.0, float)


def get_metadata_cache_ttl() -> int:
    """Get TTL (seconds) for cached TMDb responses."""
    return _positive_env("TMDB_CACHE_TTL_SECONDS", 3600)


def get_cache_sweep_interval() -> int:
    """Get minimum seconds between sweeps of expired cache entries."""
    return _positive_env("TMDB_CACHE_SWEEP_SECONDS", 300)
