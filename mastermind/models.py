"""
SQLAlchemy ORM models.

Tables:
- snapshots: one row per storage key; the payload is the opaque bytes
  produced by snapshot.serialize()

The row does not know anything about the game. Validation happens when the
payload is decoded, not here.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, DateTime, LargeBinary
from sqlalchemy.orm import Mapped, mapped_column
from .db import Base

class StoredSnapshot(Base):
    __tablename__ = "snapshots"

    # Fixed namespace, e.g. "mastermind"
    key: Mapped[str] = mapped_column(String(64), primary_key=True)

    # serialize(GameSession) output (UTF-8 JSON, kept as raw bytes)
    payload: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
