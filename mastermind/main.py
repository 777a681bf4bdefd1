'''
Mastermind API

Endpoints:
POST /game                 -> start a new game (?code_length=4|6|8)
GET  /game                 -> read state & history (never the secret)
POST /game/guess           -> submit a guess
GET  /game/secret          -> the secret, once the game is over

Extras:
GET  /health               -> liveness check

One game is stored under a fixed key. Every request loads it, applies at most
one change and saves it back before answering.
'''

import logging
from threading import RLock
from typing import Optional

from fastapi import FastAPI, HTTPException, Depends
from fastapi.middleware.cors import CORSMiddleware

from . import config
from .random_client import fetch_code
from .db import get_db                          # SQLAlchemy Session dependency
from .repository import SnapshotRepository      # snapshot persistence
from .bootstrap_db import create_all            # dev-only: create tables
from .session import new_game
from .errors import (
    GameAlreadyTerminal,
    GameNotOver,
    InvalidGuessLength,
    InvalidGuessSymbol,
    InvalidParameters,
    MastermindError,
    PersistenceError,
)
from .types import color_names

from .schemas import (
    GuessRequest,
    GuessResponse,
    GameState,
    HealthResponse,
    SecretOut,
    to_game_state,
    to_guess_out,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Mastermind API", version="3.0.0")

# Allow everything in dev so the docs and front-end work easily
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# --- Dev convenience: auto-create tables locally ---
if config.APP_ENV == "local":
    @app.on_event("startup")
    def _dev_create_tables():
        create_all()

# One load -> mutate -> save in flight at a time
_game_lock = RLock()

# Small factory so routes get a per-request repository (bound to the current DB session)
def get_repository(session = Depends(get_db)) -> SnapshotRepository:
    return SnapshotRepository(session, key=config.SNAPSHOT_KEY)

def _load(repo: SnapshotRepository):
    return repo.load(
        default_code_length=config.DEFAULT_LENGTH,
        alphabet_size=config.ALPHABET_SIZE,
        generator=fetch_code,
    )

def _http_error(exc: Exception) -> HTTPException:
    if isinstance(exc, (InvalidGuessLength, InvalidGuessSymbol, InvalidParameters)):
        return HTTPException(status_code=400, detail=str(exc))
    if isinstance(exc, (GameAlreadyTerminal, GameNotOver)):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, PersistenceError):
        return HTTPException(status_code=503, detail="Game state could not be saved. Try again.")
    # Any other MastermindError is a logic defect, not the player's fault
    logger.exception("Unexpected game error")
    return HTTPException(status_code=500, detail="Internal error")

# ---------------- Routes ----------------

@app.post("/game", response_model=GameState, summary="Start a new game")
def start_game(
    code_length: Optional[int] = None,
    repo: SnapshotRepository = Depends(get_repository),
) -> GameState:
    """
    Replaces whatever game was stored with a fresh one.
    code_length defaults to MASTERMIND_CODE_LENGTH and must be one of
    MASTERMIND_CODE_LENGTHS (4, 6 or 8 unless configured otherwise).
    """
    if code_length is None:
        code_length = config.DEFAULT_LENGTH
    if code_length not in config.ALLOWED_CODE_LENGTHS:
        allowed = ", ".join(str(n) for n in config.ALLOWED_CODE_LENGTHS)
        raise HTTPException(status_code=400, detail=f"code_length must be one of {allowed}.")

    with _game_lock:
        try:
            game = new_game(code_length, alphabet_size=config.ALPHABET_SIZE, generator=fetch_code)
            repo.save(game)
        except (MastermindError, PersistenceError) as exc:
            raise _http_error(exc) from exc

    return to_game_state(game.view())

@app.get("/game", response_model=GameState, summary="Get current game state")
def get_game(repo: SnapshotRepository = Depends(get_repository)) -> GameState:
    with _game_lock:
        try:
            game = _load(repo)
        except (MastermindError, PersistenceError) as exc:
            raise _http_error(exc) from exc
    return to_game_state(game.view())

@app.post("/game/guess", response_model=GuessResponse, summary="Submit a guess")
def submit_guess(
    payload: GuessRequest,
    repo: SnapshotRepository = Depends(get_repository),
) -> GuessResponse:
    with _game_lock:
        try:
            game = _load(repo)
            game.add_guess(payload.guess)
            repo.save(game)
        except (MastermindError, PersistenceError) as exc:
            raise _http_error(exc) from exc

    feedback = to_guess_out(game.history[-1])

    # When the game ends, include the secret in the response
    secret = None
    note = None
    if game.is_over:
        secret = game.reveal_secret()
        note = f"Game {game.status}. No more guesses allowed."

    return GuessResponse(
        attempts_left=game.attempts_left,
        status=game.status,
        feedback=feedback,
        secret=secret,
        note=note,
    )

@app.get("/game/secret", response_model=SecretOut, summary="Reveal the secret of a finished game")
def reveal_secret(repo: SnapshotRepository = Depends(get_repository)) -> SecretOut:
    with _game_lock:
        try:
            game = _load(repo)
            secret = game.reveal_secret()
        except (MastermindError, PersistenceError) as exc:
            raise _http_error(exc) from exc
    return SecretOut(status=game.status, secret=secret, colors=color_names(secret))

@app.get("/health", response_model=HealthResponse, summary="Liveness check")
def health() -> HealthResponse:
    return HealthResponse()
