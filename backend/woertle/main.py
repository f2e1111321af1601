import logging
import threading
import uuid
from collections import OrderedDict
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from fastapi import FastAPI, HTTPException, Request
from fastapi.staticfiles import StaticFiles
from starlette.middleware.base import BaseHTTPMiddleware

from . import config
from .daily import date_key, format_countdown, seconds_until_next_word, word_for_date
from .keyboard import KEYBOARD_LAYOUT
from .models import (
    GuessRequest,
    KeyRequest,
    SessionView,
    ShareResponse,
    TodayResponse,
)
from .session import GameSession
from .share import share_text
from .store import KeyValueStore, open_store
from .words import WordList

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Game state (word list and store loaded once at startup)
# ---------------------------------------------------------------------------
_word_list: WordList | None = None
_store: KeyValueStore | None = None
# Routes run in the threadpool; every session access goes through _lock
_lock = threading.Lock()
_sessions: "OrderedDict[str, GameSession]" = OrderedDict()


def _now() -> datetime:
    return datetime.now(timezone.utc)


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _word_list, _store

    logging.getLogger("woertle").setLevel(config.LOG_LEVEL)

    # ConfigurationError here is fatal: no word list, no game
    _word_list = WordList.from_file(config.WORDS_PATH)
    _store = open_store(config.STORE_PATH)
    _sessions.clear()

    now = _now()
    today = date_key(now, config.TIMEZONE)
    word_for_date(now, _word_list.words, _store, config.TIMEZONE)
    logger.info("[game] Ready for %s with %d words.", today, len(_word_list))

    yield


class NoStoreMiddleware(BaseHTTPMiddleware):
    """Daily state must never be served from a cache."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        if request.url.path.startswith("/api/"):
            response.headers["Cache-Control"] = "no-store"
        return response


app = FastAPI(lifespan=lifespan)

app.add_middleware(NoStoreMiddleware)

_STATIC_DIR = Path(__file__).parent.parent / "static"


def _get_session(session_id: str) -> GameSession:
    """Look up a session and mark it recently used. Caller holds ``_lock``."""
    session = _sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Unknown session")
    _sessions.move_to_end(session_id)
    return session


def _prune_sessions(today: str) -> None:
    """Drop other days' sessions and the least recently used beyond the cap."""
    for sid in [sid for sid, s in _sessions.items() if s.date_key != today]:
        del _sessions[sid]
    while len(_sessions) >= config.MAX_SESSIONS:
        sid, _ = _sessions.popitem(last=False)
        logger.info("[game] Evicted idle session %s.", sid)


def _view(session_id: str, session: GameSession) -> SessionView:
    return SessionView(session_id=session_id, **session.view(reveal_target=config.ADMIN_MODE))


# ---------------------------------------------------------------------------
# API routes
# ---------------------------------------------------------------------------


@app.get("/api/today", response_model=TodayResponse)
def get_today():
    now = _now()
    seconds = seconds_until_next_word(now, config.TIMEZONE)
    return TodayResponse(
        game_name=config.GAME_NAME,
        date_key=date_key(now, config.TIMEZONE),
        word_length=config.WORD_LENGTH,
        max_guesses=config.MAX_GUESSES,
        keyboard=[list(row) for row in KEYBOARD_LAYOUT],
        seconds_until_next_word=seconds,
        countdown=format_countdown(seconds),
    )


@app.post("/api/session", response_model=SessionView)
def create_session():
    now = _now()
    today = date_key(now, config.TIMEZONE)
    with _lock:
        target = word_for_date(now, _word_list.words, _store, config.TIMEZONE)
        _prune_sessions(today)
        session_id = uuid.uuid4().hex
        session = _sessions[session_id] = GameSession(target, _word_list, date_key=today)
        logger.info("[game] New session %s for %s (%d active).", session_id, today, len(_sessions))
        return _view(session_id, session)


@app.get("/api/session/{session_id}", response_model=SessionView)
def get_session(session_id: str):
    with _lock:
        return _view(session_id, _get_session(session_id))


@app.post("/api/session/{session_id}/key", response_model=SessionView)
def post_key(session_id: str, body: KeyRequest):
    with _lock:
        session = _get_session(session_id)
        session.press(body.key)
        return _view(session_id, session)


@app.post("/api/session/{session_id}/guess", response_model=SessionView)
def post_guess(session_id: str, body: GuessRequest):
    with _lock:
        session = _get_session(session_id)
        session.enter_word(body.guess)
        return _view(session_id, session)


@app.post("/api/session/{session_id}/restart", response_model=SessionView)
def post_restart(session_id: str):
    with _lock:
        session = _get_session(session_id)
        session.restart()
        return _view(session_id, session)


@app.get("/api/session/{session_id}/share", response_model=ShareResponse)
def get_share(session_id: str):
    with _lock:
        session = _get_session(session_id)
        text = share_text(
            session.date_key,
            session.state.history,
            session.target,
            config.SHARE_LINK,
            config.GAME_NAME,
        )
    return ShareResponse(text=text)


# Mount static files last so API routes take priority
if _STATIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=str(_STATIC_DIR), html=True), name="static")
