"""On-screen keyboard: layout and accumulated per-key feedback."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from .evaluator import GuessRecord, LetterState

ENTER = "Enter"
BACKSPACE = "Backspace"

# German QWERTZ with umlauts on the right edge
KEYBOARD_LAYOUT: tuple[tuple[str, ...], ...] = (
    ("Q", "W", "E", "R", "T", "Z", "U", "I", "O", "P", "Ü"),
    ("A", "S", "D", "F", "G", "H", "J", "K", "L", "Ö", "Ä"),
    (ENTER, "Y", "X", "C", "V", "B", "N", "M", BACKSPACE),
)


def aggregate(history: Iterable[GuessRecord]) -> dict[str, LetterState]:
    """Fold every guess into the best state seen per letter.

    correct beats present beats absent; a key is never downgraded.
    """
    key_states: dict[str, LetterState] = {}
    for guess, states in history:
        for letter, state in zip(guess, states):
            best = key_states.get(letter)
            if best is None or state.rank > best.rank:
                key_states[letter] = state
    return key_states


def keyboard_rows(key_states: Mapping[str, LetterState]) -> list[list[dict]]:
    """Layout rows annotated with each key's state (None when unknown)."""
    rows = []
    for row in KEYBOARD_LAYOUT:
        keys = []
        for key in row:
            state = key_states.get(key.lower()) if len(key) == 1 else None
            keys.append({"key": key, "state": state.value if state else None})
        rows.append(keys)
    return rows
