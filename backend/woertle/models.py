from typing import Literal

from pydantic import BaseModel

StateName = Literal["correct", "present", "absent"]


class KeyRequest(BaseModel):
    key: str


class GuessRequest(BaseModel):
    guess: str


class GuessRow(BaseModel):
    guess: str
    states: list[StateName]


class KeyCap(BaseModel):
    key: str
    state: StateName | None = None


class SessionView(BaseModel):
    session_id: str
    date_key: str | None = None
    phase: Literal["collecting", "evaluating", "won", "lost"]
    current_input: str
    history: list[GuessRow]
    key_states: dict[str, StateName]
    keyboard: list[list[KeyCap]]
    attempts_left: int
    message: str | None = None   # user-facing text, German
    target: str | None = None    # only once the game is over, or in admin mode


class TodayResponse(BaseModel):
    game_name: str
    date_key: str
    word_length: int
    max_guesses: int
    keyboard: list[list[str]]
    seconds_until_next_word: int
    countdown: str


class ShareResponse(BaseModel):
    text: str
