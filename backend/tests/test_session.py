"""Tests for the game session state machine."""

import pytest
from woertle.errors import ConfigurationError
from woertle.evaluator import LetterState
from woertle.session import (
    UNKNOWN_WORD_MESSAGE,
    GameOver,
    GameSession,
    GuessEvaluated,
    Outcome,
    Phase,
    SessionState,
    backspace,
    type_letter,
)
from woertle.words import WordList

WRONG = ["birne", "zebra", "tisch", "stuhl", "lampe", "nebel"]


@pytest.fixture
def session():
    return GameSession("apfel", WordList(["apfel", *WRONG]), date_key="2026-10-19")


def _submit(session, word):
    for letter in word:
        session.type_letter(letter)
    return session.submit()


# ── pure transitions ──────────────────────────────────────────────────────

class TestTransitions:
    def test_type_letter_returns_new_state(self):
        start = SessionState()
        after = type_letter(start, "A")
        assert after.current_input == "a"
        assert start.current_input == ""

    def test_type_letter_stops_at_five(self):
        state = SessionState(current_input="apfel")
        assert type_letter(state, "x") is state

    def test_type_letter_rejects_non_letters(self):
        state = SessionState()
        for key in ("1", "ß", "ab", "", "-"):
            assert type_letter(state, key) is state

    def test_umlauts_accepted(self):
        assert type_letter(SessionState(), "Ä").current_input == "ä"

    def test_backspace(self):
        assert backspace(SessionState(current_input="apf")).current_input == "ap"

    def test_backspace_on_empty_input(self):
        state = SessionState()
        assert backspace(state) is state

    def test_terminal_state_rejects_input(self):
        state = SessionState(current_input="ap", phase=Phase.WON)
        assert type_letter(state, "f") is state
        assert backspace(state) is state


# ── submit ────────────────────────────────────────────────────────────────

class TestSubmit:
    def test_incomplete_input_is_ignored(self, session):
        session.type_letter("a")
        result = session.submit()
        assert result.outcome is Outcome.IGNORED
        assert session.state.current_input == "a"
        assert session.state.history == ()

    def test_unknown_word_leaves_state_unchanged(self, session):
        result = _submit(session, "qqqqq")
        assert result.outcome is Outcome.UNRECOGNIZED
        assert result.message == UNKNOWN_WORD_MESSAGE
        assert session.message == UNKNOWN_WORD_MESSAGE
        assert session.state.current_input == "qqqqq"
        assert session.state.history == ()
        assert session.state.phase is Phase.COLLECTING

    def test_input_stays_editable_after_unknown_word(self, session):
        _submit(session, "qqqqq")
        session.backspace()
        assert session.state.current_input == "qqqq"
        assert session.message is None

    def test_accepted_guess_is_recorded(self, session):
        result = _submit(session, "birne")
        assert result.outcome is Outcome.ACCEPTED
        assert result.record.guess == "birne"
        assert result.record.states[-1] is LetterState.PRESENT
        assert session.state.current_input == ""
        assert len(session.state.history) == 1
        assert session.state.phase is Phase.COLLECTING

    @pytest.mark.parametrize("attempt", range(1, 7))
    def test_win_on_attempt(self, session, attempt):
        for word in WRONG[: attempt - 1]:
            _submit(session, word)
        result = _submit(session, "apfel")
        assert session.state.phase is Phase.WON
        assert len(session.state.history) == attempt
        assert result.message == "Gewonnen! Das Wort war APFEL"

    def test_six_misses_lose(self, session):
        for word in WRONG:
            _submit(session, word)
        assert session.state.phase is Phase.LOST
        assert session.message == "Verloren! Das Wort war APFEL"

    def test_no_transitions_after_win(self, session):
        _submit(session, "apfel")
        final = session.state
        session.type_letter("a")
        session.backspace()
        assert session.submit().outcome is Outcome.IGNORED
        assert session.state == final

    def test_no_transitions_after_loss(self, session):
        for word in WRONG:
            _submit(session, word)
        final = session.state
        assert _submit(session, "apfel").outcome is Outcome.IGNORED
        assert session.state == final

    def test_stray_keys_keep_end_message_after_win(self, session):
        session.enter_word("apfel")
        before = session.message
        session.press("x")
        session.press("Backspace")
        session.press("Enter")
        assert session.message == before == "Gewonnen! Das Wort war APFEL"

    def test_stray_keys_keep_end_message_after_loss(self, session):
        for word in WRONG:
            session.enter_word(word)
        before = session.message
        session.press("x")
        session.press("Backspace")
        assert session.message == before == "Verloren! Das Wort war APFEL"

    def test_full_input_keeps_unknown_word_message(self, session):
        _submit(session, "qqqqq")
        session.press("x")
        assert session.message == UNKNOWN_WORD_MESSAGE


# ── events ────────────────────────────────────────────────────────────────

class TestEvents:
    def test_guess_evaluated_carries_history_and_keys(self, session):
        events = []
        session.subscribe(events.append)
        _submit(session, "birne")
        assert len(events) == 1
        event = events[0]
        assert isinstance(event, GuessEvaluated)
        assert event.history == session.state.history
        assert event.key_states["e"] is LetterState.PRESENT

    def test_game_over_after_win(self, session):
        events = []
        session.subscribe(events.append)
        _submit(session, "apfel")
        assert isinstance(events[-1], GameOver)
        assert events[-1].won
        assert events[-1].target == "apfel"
        assert "APFEL" in events[-1].message

    def test_no_events_for_rejected_guess(self, session):
        events = []
        session.subscribe(events.append)
        _submit(session, "qqqqq")
        assert events == []

    def test_failing_listener_does_not_break_game(self, session):
        def boom(event):
            raise RuntimeError("render failed")

        session.subscribe(boom)
        assert _submit(session, "apfel").outcome is Outcome.ACCEPTED
        assert session.state.phase is Phase.WON


# ── keys, restart, view ───────────────────────────────────────────────────

class TestSessionHelpers:
    def test_press_dispatches_keys(self, session):
        for key in "APFEX":
            session.press(key)
        session.press("Backspace")
        session.press("L")
        session.press("Enter")
        assert session.state.phase is Phase.WON

    def test_enter_word_replaces_partial_input(self, session):
        session.type_letter("z")
        result = session.enter_word("Birne")
        assert result.outcome is Outcome.ACCEPTED
        assert session.state.history[0].guess == "birne"

    def test_enter_word_rejects_wrong_shape(self, session):
        session.type_letter("z")
        assert session.enter_word("apfelbaum").outcome is Outcome.IGNORED
        assert session.state.current_input == "z"

    def test_restart_keeps_target(self, session):
        _submit(session, "apfel")
        session.restart()
        assert session.state == SessionState()
        assert session.target == "apfel"
        assert session.message is None

    def test_view_hides_target_until_over(self, session):
        assert session.view()["target"] is None
        assert session.view(reveal_target=True)["target"] == "apfel"
        _submit(session, "apfel")
        view = session.view()
        assert view["target"] == "apfel"
        assert view["phase"] == "won"
        assert view["history"] == [{"guess": "apfel", "states": ["correct"] * 5}]
        assert view["attempts_left"] == 5

    def test_invalid_target(self):
        with pytest.raises(ConfigurationError):
            GameSession("baum", WordList(["apfel"]))
