"""
DB-backed persistence adapter for a single game.

Public methods:
- load(default_code_length, alphabet_size) -> GameSession
- save(session) -> None
- clear() -> None

The game lives under one fixed key. A missing or unreadable snapshot is never
the caller's problem: load() logs it and starts a fresh game instead.
"""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .config import SNAPSHOT_KEY
from .errors import CorruptPersistedState, PersistenceError
from .models import StoredSnapshot
from .session import GameSession, SecretGenerator, new_game
from .codegen import generate
from .snapshot import deserialize, serialize
from .types import DEFAULT_ALPHABET_SIZE, DEFAULT_CODE_LENGTH

logger = logging.getLogger(__name__)

class SnapshotRepository:
    """Load/save one GameSession as an opaque blob in the snapshots table."""

    def __init__(self, db: Session, key: str = SNAPSHOT_KEY):
        self.db = db
        self.key = key

    def load(
        self,
        default_code_length: int = DEFAULT_CODE_LENGTH,
        alphabet_size: int = DEFAULT_ALPHABET_SIZE,
        generator: SecretGenerator = generate,
    ) -> GameSession:
        row = self.db.get(StoredSnapshot, self.key)
        if row is not None:
            try:
                return deserialize(row.payload)
            except CorruptPersistedState as exc:
                logger.warning("Discarding corrupt snapshot %r: %s", self.key, exc)
        else:
            logger.info("No snapshot under %r; starting a new game", self.key)

        session = new_game(default_code_length, alphabet_size=alphabet_size, generator=generator)
        self.save(session)
        return session

    def save(self, session: GameSession) -> None:
        """Write the snapshot and commit. Raises PersistenceError if that fails."""
        payload = serialize(session)
        try:
            row = self.db.get(StoredSnapshot, self.key)
            if row is None:
                self.db.add(StoredSnapshot(key=self.key, payload=payload, updated_at=datetime.utcnow()))
            else:
                row.payload = payload
                row.updated_at = datetime.utcnow()
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            logger.error("Could not save snapshot %r: %s", self.key, exc)
            raise PersistenceError(f"Could not save game state: {exc}") from exc

    def clear(self) -> None:
        try:
            row = self.db.get(StoredSnapshot, self.key)
            if row is not None:
                self.db.delete(row)
                self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            raise PersistenceError(f"Could not clear game state: {exc}") from exc
