"""
Single place to read settings from the environment.

A local .env is loaded first (dev convenience; in prod the platform injects
env vars).
"""

import logging
import os

from dotenv import load_dotenv

from .types import CODE_LENGTHS, DEFAULT_ALPHABET_SIZE, DEFAULT_CODE_LENGTH

load_dotenv()

logger = logging.getLogger(__name__)

APP_ENV = os.getenv("APP_ENV", "local")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# SQLite file by default so the game runs with zero setup;
# point it at MySQL with e.g. mysql+pymysql://user:pw@host/mastermind
DATABASE_URL = os.getenv("DATABASE_URL") or "sqlite+pysqlite:///./mastermind.db"

# "local" -> secrets.randbelow, "random.org" -> HTTP with local fallback
RANDOM_SOURCE = os.getenv("MASTERMIND_RANDOM_SOURCE", "local").lower()

# Everything the game remembers lives under this one key
SNAPSHOT_KEY = os.getenv("MASTERMIND_SNAPSHOT_KEY", "mastermind")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer); using %d", name, raw, default)
        return default


def _lengths_env(name: str, default: tuple) -> tuple:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        lengths = tuple(int(part) for part in raw.split(",") if part.strip())
    except ValueError:
        logger.warning("Ignoring %s=%r; using %s", name, raw, default)
        return default
    return lengths or default


ALPHABET_SIZE = _int_env("MASTERMIND_COLORS", DEFAULT_ALPHABET_SIZE)
ALLOWED_CODE_LENGTHS = _lengths_env("MASTERMIND_CODE_LENGTHS", CODE_LENGTHS)
DEFAULT_LENGTH = _int_env("MASTERMIND_CODE_LENGTH", DEFAULT_CODE_LENGTH)
