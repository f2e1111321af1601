"""Daily word selection.

The word for a day is drawn once, with a PRNG seeded by the date, from the
words that have not been used yet. The choice is written to the store so every
reload that day sees the same word. Once every word has been used the cycle
starts over.
"""

from __future__ import annotations

import json
import logging
import random
from collections.abc import Sequence
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

from . import config
from .errors import ConfigurationError
from .store import KeyValueStore

logger = logging.getLogger(__name__)

USED_WORDS_KEY = "usedWords"


def date_key(when: date | datetime | None = None, tz: str = config.TIMEZONE) -> str:
    """Return the civil date of *when* in *tz* as ``YYYY-MM-DD``.

    A plain ``date`` is taken as already being the civil date. Naive datetimes
    are read as UTC.
    """
    if when is None:
        when = datetime.now(timezone.utc)
    if isinstance(when, datetime):
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        return when.astimezone(ZoneInfo(tz)).date().isoformat()
    return when.isoformat()


def seed_for(key: str) -> int:
    """``2026-10-19`` -> ``20261019``."""
    return int(key.replace("-", ""))


class DailyUsageRecord:
    """View of the ``{dateKey: word}`` entries and the ``usedWords`` list."""

    def __init__(self, store: KeyValueStore):
        self.store = store

    def word_for(self, key: str) -> str | None:
        return self.store.get(key)

    def used_words(self) -> list[str]:
        raw = self.store.get(USED_WORDS_KEY)
        if not raw:
            return []
        try:
            used = json.loads(raw)
        except ValueError:
            logger.warning("[daily] usedWords entry is not JSON; treating as empty.")
            return []
        return [w for w in used if isinstance(w, str)]

    def reset_used(self) -> None:
        self.store.set(USED_WORDS_KEY, "[]")

    def record(self, key: str, word: str) -> None:
        used = self.used_words()
        used.append(word)
        self.store.set(USED_WORDS_KEY, json.dumps(used, ensure_ascii=False))
        self.store.set(key, word)


def word_for_date(
    when: date | datetime | None,
    words: Sequence[str],
    store: KeyValueStore,
    tz: str = config.TIMEZONE,
) -> str:
    """Return the target word for the day containing *when*."""
    if not words:
        raise ConfigurationError("Word list is empty; cannot choose a daily word")

    key = date_key(when, tz)
    record = DailyUsageRecord(store)

    stored = record.word_for(key)
    if stored is not None:
        return stored

    used = set(record.used_words())
    available = [w for w in words if w not in used]
    if not available:
        logger.info("[daily] All %d words used; starting a new cycle.", len(words))
        record.reset_used()
        available = list(words)

    word = random.Random(seed_for(key)).choice(available)
    record.record(key, word)
    logger.info("[daily] Selected word for %s (%d left in cycle).", key, len(available) - 1)
    return word


def seconds_until_next_word(now: datetime | None = None, tz: str = config.TIMEZONE) -> int:
    """Seconds until the next civil midnight in *tz*."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    zone = ZoneInfo(tz)
    today = now.astimezone(zone).date()
    midnight = datetime.combine(today + timedelta(days=1), time(), tzinfo=zone)
    # Subtract in UTC; same-tzinfo subtraction ignores DST offset changes.
    delta = midnight.astimezone(timezone.utc) - now.astimezone(timezone.utc)
    return max(0, int(delta.total_seconds()))


def format_countdown(seconds: int) -> str:
    hours, rest = divmod(seconds, 3600)
    return f"Nächstes Wort in: {hours}h {rest // 60}m"
