"""Share text: a spoiler-free summary of a finished (or running) game."""

from __future__ import annotations

from collections.abc import Sequence

from . import config
from .evaluator import GuessRecord, LetterState

GLYPHS = {
    LetterState.CORRECT: "🟩",
    LetterState.PRESENT: "🟨",
    LetterState.ABSENT: "⬛",
}


def share_text(
    date_key: str,
    history: Sequence[GuessRecord],
    target: str,
    share_link: str,
    game_name: str = config.GAME_NAME,
) -> str:
    """Render the share block; identical inputs give identical bytes.

    The score is the number of guesses, or ``X`` for a lost game.
    """
    lost = len(history) >= config.MAX_GUESSES and history[-1].guess != target
    score = "X" if lost else str(len(history))
    lines = [f"{game_name} {date_key} - {score}/{config.MAX_GUESSES}"]
    for record in history:
        lines.append("".join(GLYPHS[s] for s in record.states))
    lines.append(share_link)
    return "\n".join(lines)
