"""
Single place to:
- Create a SQLAlchemy Engine from config.DATABASE_URL (SQLite by default,
  MySQL via PyMySQL when configured)
- Create a Session factory (SessionLocal) for per-request DB sessions
- Provide get_db() dependency for FastAPI routes
"""

from typing import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .config import DATABASE_URL

# SQLite connections are used from FastAPI's worker threads
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

# pool_pre_ping=True = auto-detect dead connections (helps with long-lived processes).
# echo=False = set True to print SQL during local debugging.
engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
    echo=False,
    future=True,
    connect_args=connect_args,
)

# Each request gets its own session from this factory.
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)

# Base class for ORM models.
class Base(DeclarativeBase):
    pass

# FastAPI dependency that yields a DB session for the duration of a request.
#    - Opens a session
#    - Yields it to the route code
#    - Ensures it gets closed even if exceptions happen
def get_db() -> Generator:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
