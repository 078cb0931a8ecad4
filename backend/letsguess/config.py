"""Конфигурация приложения."""
import os
from functools import lru_cache

from . import __version__


@lru_cache
def get_config():
    debug = os.environ.get("DEBUG", "0").lower() in ("1", "true", "yes")
    return type("Config", (), {
        "debug": debug,
        "log_level": os.environ.get("LOG_LEVEL", "DEBUG" if debug else "INFO").upper(),
        "allowed_origins": os.environ.get("ALLOWED_ORIGINS", "*").split(","),
        "host": os.environ.get("HOST", "0.0.0.0"),
        "port": int(os.environ.get("PORT", "3001")),
        "wikipedia_rest_url": os.environ.get(
            "WIKIPEDIA_REST_URL", "https://en.wikipedia.org/api/rest_v1"
        ),
        "wikipedia_api_url": os.environ.get(
            "WIKIPEDIA_API_URL", "https://en.wikipedia.org/w/api.php"
        ),
        "fetch_timeout": float(os.environ.get("ARTICLE_FETCH_TIMEOUT", "5")),
        "fetch_attempts": max(1, int(os.environ.get("ARTICLE_FETCH_ATTEMPTS", "2"))),
        "fetch_deadline": float(os.environ.get("ARTICLE_FETCH_DEADLINE", "15")),
        "fetch_backoff": float(os.environ.get("ARTICLE_FETCH_BACKOFF", "0.5")),
        "fetch_backoff_max": float(os.environ.get("ARTICLE_FETCH_BACKOFF_MAX", "8")),
        "user_agent": os.environ.get("LETSGUESS_USER_AGENT", f"LetsGuess/{__version__}"),
    })()
