#!/usr/bin/env python3
"""Daily cron script: pre-selects the word for a day.

Usage:
    python scripts/daily_word.py                     # select for today
    python scripts/daily_word.py --date 2026-10-20   # select for a given day

Run this shortly after midnight in the reference timezone (e.g. via crontab):
    5 0 * * * /path/to/venv/bin/python /path/to/scripts/daily_word.py

The choice is written to the same usage store the server reads
(WOERTLE_STORE_PATH, default backend/daily_words.json), so the server and
this script always agree on the day's word.
"""

import argparse
import sys
from datetime import date, datetime, timezone
from pathlib import Path

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
_SCRIPT_DIR = Path(__file__).resolve().parent
_PROJECT_ROOT = _SCRIPT_DIR.parent
_BACKEND_DIR = _PROJECT_ROOT / "backend"


def select(target: date | datetime, show_word: bool = False) -> str:
    # Add backend to sys.path so we can import the game package directly
    sys.path.insert(0, str(_BACKEND_DIR))
    from woertle import config  # noqa: PLC0415
    from woertle.daily import date_key, word_for_date  # noqa: PLC0415
    from woertle.store import open_store  # noqa: PLC0415
    from woertle.words import WordList  # noqa: PLC0415

    words = WordList.from_file(config.WORDS_PATH)
    store = open_store(config.STORE_PATH)
    key = date_key(target, config.TIMEZONE)
    already = store.get(key) is not None

    word = word_for_date(target, words.words, store, config.TIMEZONE)
    status = "already selected" if already else "selected"
    shown = word.upper() if show_word else "*" * len(word)
    print(f"[cron] Word for {key} {status}: {shown}")
    return word


def main() -> None:
    parser = argparse.ArgumentParser(description="Pre-select the daily word.")
    parser.add_argument(
        "--date",
        help="Target date in YYYY-MM-DD format (default: today in the game's timezone)",
        default=None,
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the word itself instead of a mask.",
    )
    args = parser.parse_args()

    if args.date:
        target = date.fromisoformat(args.date)
    else:
        target = datetime.now(timezone.utc)

    select(target, show_word=args.show)

    if not args.date:
        from woertle import config  # noqa: PLC0415
        from woertle.daily import format_countdown, seconds_until_next_word  # noqa: PLC0415

        print(f"[cron] {format_countdown(seconds_until_next_word(tz=config.TIMEZONE))}")


if __name__ == "__main__":
    main()
