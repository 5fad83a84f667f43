"""
Default settings for the MoodMelody service.

Values here are defaults only; constructors and CLI options take precedence.
"""

import os

# Cached search results expire after 24 hours.
CACHE_EXPIRATION_SECONDS = 24 * 60 * 60

DEFAULT_SEARCH_LIMIT = 10

FEEDBACK_HISTORY_LIMIT = 1000

DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
DEFAULT_BASE_URL = "http://localhost:8000"


def store_path() -> str | None:
    """Path of the file-backed store, or None for an in-memory store."""
    return os.environ.get("MOODMELODY_STORE_PATH") or None


def log_level() -> str:
    return os.environ.get("MOODMELODY_LOG_LEVEL", "INFO")
