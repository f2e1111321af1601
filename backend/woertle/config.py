"""Centralised runtime configuration loaded from environment variables."""

import os
from pathlib import Path

_DATA_DIR = Path(__file__).parent / "data"

WORD_LENGTH = 5
MAX_GUESSES = 6

GAME_NAME: str = os.getenv("WOERTLE_GAME_NAME", "Wörtle")

# IANA zone whose civil day defines "today's" word
TIMEZONE: str = os.getenv("WOERTLE_TIMEZONE", "America/New_York")

WORDS_PATH: str = os.getenv("WOERTLE_WORDS_PATH", str(_DATA_DIR / "words.txt"))
# Empty string keeps the daily usage record in memory only
STORE_PATH: str = os.getenv(
    "WOERTLE_STORE_PATH", str(Path(__file__).parent.parent / "daily_words.json")
)
SHARE_LINK: str = os.getenv("WOERTLE_SHARE_LINK", "http://localhost:8000/")

ADMIN_MODE: bool = os.getenv("ADMIN_MODE", "false").lower() in ("1", "true", "yes")
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Least recently used sessions are evicted beyond this many
MAX_SESSIONS: int = int(os.getenv("WOERTLE_MAX_SESSIONS", "10000"))
