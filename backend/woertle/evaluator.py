from __future__ import annotations

from collections import Counter
from enum import Enum
from typing import NamedTuple


class LetterState(str, Enum):
    ABSENT = "absent"
    PRESENT = "present"
    CORRECT = "correct"

    @property
    def rank(self) -> int:
        return _RANK[self]


_RANK = {LetterState.ABSENT: 0, LetterState.PRESENT: 1, LetterState.CORRECT: 2}


class GuessRecord(NamedTuple):
    guess: str
    states: tuple[LetterState, ...]

    @property
    def solved(self) -> bool:
        return all(s is LetterState.CORRECT for s in self.states)


def evaluate(guess: str, target: str) -> tuple[LetterState, ...]:
    """Score *guess* against *target*, one state per position.

    Exact matches are settled first and take their letter out of the pool;
    the remaining positions then claim pooled letters left to right, so a
    target letter is never credited twice.
    """
    if len(guess) != len(target):
        raise ValueError(f"Guess {guess!r} and target {target!r} differ in length")

    states: list[LetterState | None] = [None] * len(target)
    pool: Counter[str] = Counter()

    for i, (g, t) in enumerate(zip(guess, target)):
        if g == t:
            states[i] = LetterState.CORRECT
        else:
            pool[t] += 1

    for i, g in enumerate(guess):
        if states[i] is not None:
            continue
        if pool[g] > 0:
            states[i] = LetterState.PRESENT
            pool[g] -= 1
        else:
            states[i] = LetterState.ABSENT

    return tuple(states)
