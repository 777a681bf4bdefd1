"""
Explicit validation & Pydantic models
- Defines the structure of API requests and responses.
- The secret only ever appears in responses for a finished game.
"""

from typing import List, Literal

from pydantic import BaseModel, Field, StrictInt

from .session import GameView, HistoryEntry
from .types import COLORS, Hint

# 1. Validates player's guess
class GuessRequest(BaseModel):
    # StrictInt: true, "2" and 2.0 are not colors
    guess: List[StrictInt] = Field(
        ..., description="Color indices, one per peg. Length must match the game's code length."
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                { "guess": [0, 1, 2, 3] },              # length 4 (default)
                { "guess": [0, 1, 2, 3, 4, 5] },        # length 6
                { "guess": [0, 1, 2, 3, 4, 5, 0, 1] },  # length 8
            ]
        }
    }

# 2. Black/white pegs for one guess
class HintOut(BaseModel):
    correct: int = Field(..., description="Right color in the right position")
    misplaced: int = Field(..., description="Right color in the wrong position")

# 3. Describes the feedback for a single guess
class GuessEntryOut(BaseModel):
    guess: List[int] = Field(..., description="The player's guess")
    hint: HintOut = Field(..., description="Feedback for this guess")
    message: str = Field(..., description="Feedback message")

# 4. Represents the overall state of the game (no secret in here)
class GameState(BaseModel):
    status: Literal["in_progress", "won", "lost"] = Field(..., description="Current state of the game")
    code_length: int = Field(..., description="Pegs per code")
    colors: int = Field(..., description="Number of colors in play")
    attempts_left: int = Field(..., description="How many guesses remain")
    max_attempts: int = Field(..., description="Guesses allowed per game")
    palette: List[str] = Field(..., description="Color names by index")
    history: List[GuessEntryOut] = Field(..., description="All guesses made so far with feedback")

# 5. Result of a guess (or end of the game)
class GuessResponse(BaseModel):
    attempts_left: int = Field(..., description="How many guesses remain")
    status: Literal["in_progress", "won", "lost"] = Field(..., description="Current state of the game")
    feedback: GuessEntryOut = Field(..., description="Feedback from the latest guess")
    secret: List[int] | None = Field(None, description="The secret code (only revealed if game is over)")
    note: str | None = Field(None, description="Extra note (ex. 'Game lost. No more guesses allowed.')")

# 6. Answer to /game/secret
class SecretOut(BaseModel):
    status: Literal["won", "lost"] = Field(..., description="How the game ended")
    secret: List[int] = Field(..., description="The secret code")
    colors: List[str] = Field(..., description="The secret as color names")

# 7. Liveness check
class HealthResponse(BaseModel):
    status: Literal["ok"] = Field("ok", description="Always 'ok' while the service is up")


def hint_message(hint: Hint) -> str:
    # Build a message without revealing which pegs are right
    if hint.correct == 0 and hint.misplaced == 0:
        return "all incorrect"
    return f"{hint.correct} correct location(s) and {hint.misplaced} misplaced color(s)"


def to_guess_out(entry: HistoryEntry) -> GuessEntryOut:
    return GuessEntryOut(
        guess=list(entry.guess),
        hint=HintOut(correct=entry.hint.correct, misplaced=entry.hint.misplaced),
        message=hint_message(entry.hint),
    )


def to_game_state(view: GameView) -> GameState:
    return GameState(
        status=view.status,
        code_length=view.code_length,
        colors=view.alphabet_size,
        attempts_left=view.attempts_left,
        max_attempts=view.max_attempts,
        palette=list(COLORS[:view.alphabet_size]),
        history=[to_guess_out(entry) for entry in view.history],
    )
