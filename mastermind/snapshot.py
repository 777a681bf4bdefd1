"""
Snapshot codec: GameSession <-> bytes.

The persisted record is plain JSON described by Pydantic models, so any store
(a DB row, a file, a browser's local storage) can hold it as an opaque blob.
Loading re-validates everything through GameSession.restore(); a snapshot that
decodes but breaks a game rule is just as corrupt as one that does not decode.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import CorruptPersistedState
from .session import GameSession
from .types import MAX_ATTEMPTS

SNAPSHOT_VERSION = 1


class SnapshotHint(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    correct: int = Field(..., ge=0)
    misplaced: int = Field(..., ge=0)


class SnapshotEntry(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    guess: List[int]
    hint: SnapshotHint


class SessionSnapshot(BaseModel):
    model_config = ConfigDict(extra="forbid", strict=True)

    version: Literal[1] = SNAPSHOT_VERSION
    secret: List[int] = Field(..., description="Color indices of the secret code")
    history: List[SnapshotEntry] = Field(default_factory=list)
    status: Literal["in_progress", "won", "lost"]
    code_length: int
    alphabet_size: int
    max_attempts: int = MAX_ATTEMPTS


def to_snapshot(session: GameSession) -> SessionSnapshot:
    return SessionSnapshot(
        secret=session._secret_for_snapshot(),
        history=[
            SnapshotEntry(
                guess=list(entry.guess),
                hint=SnapshotHint(correct=entry.hint.correct, misplaced=entry.hint.misplaced),
            )
            for entry in session.history
        ],
        status=session.status,
        code_length=session.code_length,
        alphabet_size=session.alphabet_size,
        max_attempts=session.max_attempts,
    )


def from_snapshot(snapshot: SessionSnapshot) -> GameSession:
    return GameSession.restore(
        secret=snapshot.secret,
        history=[
            (entry.guess, (entry.hint.correct, entry.hint.misplaced))
            for entry in snapshot.history
        ],
        status=snapshot.status,
        code_length=snapshot.code_length,
        alphabet_size=snapshot.alphabet_size,
        max_attempts=snapshot.max_attempts,
    )


def serialize(session: GameSession) -> bytes:
    return to_snapshot(session).model_dump_json().encode("utf-8")


def deserialize(data: bytes) -> GameSession:
    """Decode and validate a snapshot; raises CorruptPersistedState on anything wrong."""
    if not data:
        raise CorruptPersistedState("Empty snapshot.")
    try:
        snapshot = SessionSnapshot.model_validate_json(data)
    except ValidationError as exc:
        raise CorruptPersistedState(f"Snapshot failed validation: {exc.error_count()} error(s).") from exc
    except ValueError as exc:
        raise CorruptPersistedState("Snapshot is not readable JSON.") from exc
    return from_snapshot(snapshot)
