"""Game session state machine.

SessionState is an immutable value; the transition functions below return a
new state instead of mutating one. GameSession owns the current state for one
player and one target word, and tells subscribers about evaluated guesses and
the end of the game.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from enum import Enum

from . import config
from .errors import ConfigurationError, UnrecognizedGuess
from .evaluator import GuessRecord, LetterState, evaluate
from .keyboard import BACKSPACE, ENTER, aggregate, keyboard_rows
from .words import ALPHABET, WordList, is_valid_word, normalize

logger = logging.getLogger(__name__)

UNKNOWN_WORD_MESSAGE = "Wort nicht im Wörterbuch"


class Phase(str, Enum):
    COLLECTING = "collecting"
    EVALUATING = "evaluating"
    WON = "won"
    LOST = "lost"


@dataclass(frozen=True)
class SessionState:
    current_input: str = ""
    history: tuple[GuessRecord, ...] = ()
    phase: Phase = Phase.COLLECTING

    @property
    def is_over(self) -> bool:
        return self.phase in (Phase.WON, Phase.LOST)


class Outcome(str, Enum):
    ACCEPTED = "accepted"
    UNRECOGNIZED = "unrecognized"
    IGNORED = "ignored"


@dataclass(frozen=True)
class SubmitResult:
    outcome: Outcome
    state: SessionState
    record: GuessRecord | None = None
    message: str | None = None


@dataclass(frozen=True)
class GuessEvaluated:
    history: tuple[GuessRecord, ...]
    key_states: dict[str, LetterState] = field(default_factory=dict)


@dataclass(frozen=True)
class GameOver:
    won: bool
    target: str
    message: str


def type_letter(state: SessionState, letter: str) -> SessionState:
    letter = normalize(letter)
    if (
        state.phase is not Phase.COLLECTING
        or len(state.current_input) >= config.WORD_LENGTH
        or len(letter) != 1
        or letter not in ALPHABET
    ):
        return state
    return replace(state, current_input=state.current_input + letter)


def backspace(state: SessionState) -> SessionState:
    if state.phase is not Phase.COLLECTING or not state.current_input:
        return state
    return replace(state, current_input=state.current_input[:-1])


def end_message(won: bool, target: str) -> str:
    prefix = "Gewonnen!" if won else "Verloren!"
    return f"{prefix} Das Wort war {target.upper()}"


class GameSession:
    def __init__(self, target: str, word_list: WordList, date_key: str | None = None):
        target = normalize(target)
        if not is_valid_word(target):
            raise ConfigurationError(f"Target is not a {config.WORD_LENGTH}-letter word: {target!r}")
        self.target = target
        self.word_list = word_list
        self.date_key = date_key
        self.message: str | None = None
        self._state = SessionState()
        self._listeners: list[Callable[[GuessEvaluated | GameOver], None]] = []

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, callback: Callable[[GuessEvaluated | GameOver], None]) -> None:
        self._listeners.append(callback)

    def _emit(self, event: GuessEvaluated | GameOver) -> None:
        for callback in self._listeners:
            try:
                callback(event)
            except Exception:
                logger.exception("[session] Listener %r failed on %s", callback, type(event).__name__)

    # ── transitions ────────────────────────────────────────────────────────

    def _apply(self, state: SessionState) -> SessionState:
        # No-op transitions return the same object and keep the message
        if state is not self._state:
            self._state = state
            self.message = None
        return self._state

    def type_letter(self, letter: str) -> SessionState:
        return self._apply(type_letter(self._state, letter))

    def backspace(self) -> SessionState:
        return self._apply(backspace(self._state))

    def _evaluate(self, guess: str) -> GuessRecord:
        if not self.word_list.is_known(guess):
            raise UnrecognizedGuess(guess)
        return GuessRecord(guess, evaluate(guess, self.target))

    def submit(self) -> SubmitResult:
        before = self._state
        if before.phase is not Phase.COLLECTING or len(before.current_input) != config.WORD_LENGTH:
            return SubmitResult(Outcome.IGNORED, before)

        guess = before.current_input
        self._state = replace(before, phase=Phase.EVALUATING)
        try:
            record = self._evaluate(guess)
        except UnrecognizedGuess:
            logger.debug("[session] Rejected unknown word %r", guess)
            self._state = before
            self.message = UNKNOWN_WORD_MESSAGE
            return SubmitResult(Outcome.UNRECOGNIZED, before, message=self.message)

        history = before.history + (record,)
        if guess == self.target:
            phase = Phase.WON
        elif len(history) >= config.MAX_GUESSES:
            phase = Phase.LOST
        else:
            phase = Phase.COLLECTING
        self._state = SessionState(current_input="", history=history, phase=phase)

        self.message = end_message(phase is Phase.WON, self.target) if self._state.is_over else None
        self._emit(GuessEvaluated(history, aggregate(history)))
        if self._state.is_over:
            logger.info("[session] Game %s after %d guesses.", phase.value, len(history))
            self._emit(GameOver(phase is Phase.WON, self.target, self.message))
        return SubmitResult(Outcome.ACCEPTED, self._state, record, self.message)

    def press(self, key: str) -> SessionState:
        """Dispatch one key from a keyboard or the on-screen keys."""
        if key.lower() == ENTER.lower():
            self.submit()
        elif key.lower() == BACKSPACE.lower():
            self.backspace()
        else:
            self.type_letter(key)
        return self._state

    def enter_word(self, word: str) -> SubmitResult:
        """Replace the current input with *word* and submit it."""
        word = normalize(word)
        if self._state.is_over or not is_valid_word(word):
            return SubmitResult(Outcome.IGNORED, self._state)
        while self._state.current_input:
            self.backspace()
        for letter in word:
            self.type_letter(letter)
        return self.submit()

    def restart(self) -> SessionState:
        """Clear the board; the target word stays the same."""
        self._state = SessionState()
        self.message = None
        return self._state

    # ── render surface ─────────────────────────────────────────────────────

    def key_states(self) -> dict[str, LetterState]:
        return aggregate(self._state.history)

    def view(self, reveal_target: bool = False) -> dict:
        state = self._state
        key_states = self.key_states()
        show_target = reveal_target or state.is_over
        return {
            "date_key": self.date_key,
            "phase": state.phase.value,
            "current_input": state.current_input,
            "history": [
                {"guess": rec.guess, "states": [s.value for s in rec.states]}
                for rec in state.history
            ],
            "key_states": {k: v.value for k, v in key_states.items()},
            "keyboard": keyboard_rows(key_states),
            "attempts_left": config.MAX_GUESSES - len(state.history),
            "message": self.message,
            "target": self.target if show_target else None,
        }
