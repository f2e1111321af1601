#!/usr/bin/env python3
"""Play today's Wörtle in a terminal.

Usage:
    python scripts/play.py
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

_BACKEND_DIR = Path(__file__).resolve().parent.parent / "backend"
sys.path.insert(0, str(_BACKEND_DIR))

from woertle import config  # noqa: E402
from woertle.clipboard import MANUAL_COPY_PROMPT, copy_with_fallback, default_strategies  # noqa: E402
from woertle.daily import date_key, format_countdown, seconds_until_next_word, word_for_date  # noqa: E402
from woertle.evaluator import LetterState  # noqa: E402
from woertle.session import GameSession, Outcome  # noqa: E402
from woertle.share import share_text  # noqa: E402
from woertle.store import open_store  # noqa: E402
from woertle.words import WordList  # noqa: E402

# ANSI color codes
_COLORS = {
    LetterState.CORRECT: "\033[42;30m",
    LetterState.PRESENT: "\033[43;30m",
    LetterState.ABSENT: "\033[100;37m",
}
_RESET = "\033[0m"
_BOLD = "\033[1m"


def _tile(letter: str, state: LetterState | None) -> str:
    if state is None:
        return f" {letter.upper()} "
    return f"{_COLORS[state]} {letter.upper()} {_RESET}"


def render(session: GameSession) -> str:
    lines = []
    for record in session.state.history:
        lines.append("".join(_tile(ch, st) for ch, st in zip(record.guess, record.states)))
    lines.append("")
    for row in session.view()["keyboard"]:
        keys = [k for k in row if len(k["key"]) == 1]
        lines.append(
            "".join(_tile(k["key"], LetterState(k["state"]) if k["state"] else None) for k in keys)
        )
    return "\n".join(lines)


def main() -> int:
    now = datetime.now(timezone.utc)
    words = WordList.from_file(config.WORDS_PATH)
    store = open_store(config.STORE_PATH)
    today = date_key(now, config.TIMEZONE)
    session = GameSession(
        word_for_date(now, words.words, store, config.TIMEZONE), words, date_key=today
    )

    print(f"{_BOLD}{config.GAME_NAME} {today}{_RESET}")
    print(f"Errate das Wort mit {config.WORD_LENGTH} Buchstaben in {config.MAX_GUESSES} Versuchen.")

    while not session.state.is_over:
        attempt = len(session.state.history) + 1
        try:
            guess = input(f"\nVersuch {attempt}/{config.MAX_GUESSES}: ").strip()
        except EOFError:
            print()
            return 1
        result = session.enter_word(guess)
        if result.outcome is Outcome.IGNORED:
            print(f"Bitte ein Wort mit {config.WORD_LENGTH} Buchstaben eingeben.")
            continue
        if result.outcome is Outcome.UNRECOGNIZED:
            print(result.message)
            continue
        print(render(session))

    print(f"\n{_BOLD}{session.message}{_RESET}")
    text = share_text(today, session.state.history, session.target, config.SHARE_LINK, config.GAME_NAME)
    print(f"\n{text}\n")

    try:
        answer = input("Ergebnis in die Zwischenablage kopieren? [j/N] ").strip().lower()
    except EOFError:
        answer = ""
    if answer in ("j", "ja", "y", "yes"):
        outcome = copy_with_fallback(text, default_strategies())
        if outcome.copied:
            print("Kopiert!")
        else:
            print(MANUAL_COPY_PROMPT)
            print(outcome.manual_text)

    print(format_countdown(seconds_until_next_word(now, config.TIMEZONE)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
