"""Tests for the clipboard fallback chain."""

import pytest
from woertle.clipboard import command_strategy, copy_with_fallback
from woertle.errors import ClipboardUnavailable


def _failing(text):
    raise ClipboardUnavailable("no clipboard")


class TestCopyWithFallback:
    def test_first_working_strategy_wins(self):
        copied = []

        def primary(text):
            copied.append(text)

        outcome = copy_with_fallback("hallo", [primary, _failing])
        assert outcome.copied
        assert outcome.method == "primary"
        assert copied == ["hallo"]

    def test_falls_through_to_next_strategy(self):
        copied = []

        def selection(text):
            copied.append(text)

        outcome = copy_with_fallback("hallo", [_failing, selection])
        assert outcome.method == "selection"
        assert copied == ["hallo"]

    def test_all_failing_returns_text_for_manual_copy(self):
        outcome = copy_with_fallback("hallo", [_failing, _failing])
        assert not outcome.copied
        assert outcome.manual_text == "hallo"

    def test_no_strategies(self):
        assert copy_with_fallback("hallo", []).manual_text == "hallo"

    def test_other_errors_propagate(self):
        def broken(text):
            raise TypeError("bug")

        with pytest.raises(TypeError):
            copy_with_fallback("hallo", [broken])


class TestCommandStrategy:
    def test_missing_command_is_unavailable(self):
        strategy = command_strategy("woertle-no-such-clipboard-tool")
        with pytest.raises(ClipboardUnavailable):
            strategy("hallo")
