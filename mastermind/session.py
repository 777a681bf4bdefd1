"""
One playthrough of the game.

A GameSession owns the secret, the guess history and the status. It is the
only thing with mutable state; scoring is delegated to engine.compute_hint
and secrets come from codegen.generate (or any callable with the same shape).

The secret is kept private: while the game is in progress the only way to see
it is to finish the game and call reveal_secret().
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence, Tuple

from .codegen import check_parameters, generate
from .engine import compute_hint, is_win
from .errors import (
    CorruptPersistedState,
    GameAlreadyTerminal,
    GameNotOver,
    InvalidGuessLength,
    InvalidGuessSymbol,
    InvalidParameters,
)
from .types import DEFAULT_ALPHABET_SIZE, MAX_ATTEMPTS, Code, Color, GameStatus, Hint

logger = logging.getLogger(__name__)

SecretGenerator = Callable[[int, int], Code]

STATUSES = ("in_progress", "won", "lost")


@dataclass(frozen=True)
class HistoryEntry:
    guess: Tuple[Color, ...]
    hint: Hint


@dataclass(frozen=True)
class GameView:
    """What a caller is allowed to see. Never carries the secret."""
    history: Tuple[HistoryEntry, ...]
    status: GameStatus
    code_length: int
    alphabet_size: int
    max_attempts: int

    @property
    def attempts_left(self) -> int:
        return self.max_attempts - len(self.history)


def _is_color(value, alphabet_size: int) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value < alphabet_size
    )


class GameSession:
    max_attempts = MAX_ATTEMPTS

    def __init__(
        self,
        secret: Sequence[Color],
        alphabet_size: int = DEFAULT_ALPHABET_SIZE,
        generator: SecretGenerator = generate,
    ) -> None:
        secret = tuple(secret)
        check_parameters(len(secret), alphabet_size)
        if not all(_is_color(value, alphabet_size) for value in secret):
            raise InvalidParameters(f"Secret must use colors 0..{alphabet_size - 1}.")
        self._secret: Tuple[Color, ...] = secret
        self._alphabet_size = alphabet_size
        self._generator = generator
        self._history: Tuple[HistoryEntry, ...] = ()
        self._status: GameStatus = "in_progress"

    def __repr__(self) -> str:
        # Keep the secret out of logs and tracebacks
        return (
            f"GameSession(code_length={self.code_length}, "
            f"alphabet_size={self._alphabet_size}, status={self._status!r}, "
            f"guesses={len(self._history)}/{self.max_attempts})"
        )

    # --- read-only state ---

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def code_length(self) -> int:
        return len(self._secret)

    @property
    def alphabet_size(self) -> int:
        return self._alphabet_size

    @property
    def history(self) -> Tuple[HistoryEntry, ...]:
        return self._history

    @property
    def attempts_left(self) -> int:
        return self.max_attempts - len(self._history)

    @property
    def is_over(self) -> bool:
        return self._status != "in_progress"

    def view(self) -> GameView:
        return GameView(
            history=self._history,
            status=self._status,
            code_length=self.code_length,
            alphabet_size=self._alphabet_size,
            max_attempts=self.max_attempts,
        )

    # --- transitions ---

    def add_guess(self, guess: Sequence[Color]) -> Hint:
        """
        Score a guess and record it.

        Raises GameAlreadyTerminal, InvalidGuessLength or InvalidGuessSymbol
        (checked in that order) without touching the session.
        """
        if self._status != "in_progress":
            raise GameAlreadyTerminal(f"Game already {self._status}. No more guesses allowed.")

        guess = tuple(guess)
        if len(guess) != self.code_length:
            raise InvalidGuessLength(
                f"Guess must have exactly {self.code_length} colors, got {len(guess)}."
            )
        for position, value in enumerate(guess):
            if not _is_color(value, self._alphabet_size):
                raise InvalidGuessSymbol(
                    f"Position {position}: {value!r} is not a color in 0..{self._alphabet_size - 1}."
                )

        hint = compute_hint(guess, self._secret)
        history = self._history + (HistoryEntry(guess, hint),)

        if is_win(self._secret, guess):
            status: GameStatus = "won"
        elif len(history) >= self.max_attempts:
            status = "lost"
        else:
            status = "in_progress"

        # history and status move together
        self._history, self._status = history, status

        if status != "in_progress":
            logger.info("Game %s after %d guess(es)", status, len(history))
        return hint

    def reveal_secret(self) -> Code:
        if self._status == "in_progress":
            raise GameNotOver("The secret is only revealed once the game is over.")
        return list(self._secret)

    def next_game(self, code_length: Optional[int] = None) -> "GameSession":
        """Start over with a fresh secret, keeping the palette (and, by default, the length)."""
        if code_length is None:
            code_length = self.code_length
        return new_game(
            code_length,
            alphabet_size=self._alphabet_size,
            generator=self._generator,
        )

    # --- persistence support ---

    @classmethod
    def restore(
        cls,
        secret: Sequence[Color],
        history: Iterable[Tuple[Sequence[Color], Hint]],
        status: str,
        code_length: int,
        alphabet_size: int = DEFAULT_ALPHABET_SIZE,
        max_attempts: int = MAX_ATTEMPTS,
    ) -> "GameSession":
        """
        Rebuild a session from stored parts.

        Every invariant a live session keeps is re-checked here; anything off
        raises CorruptPersistedState.
        """
        try:
            check_parameters(code_length, alphabet_size)
        except InvalidParameters as exc:
            raise CorruptPersistedState(str(exc)) from exc
        if max_attempts != MAX_ATTEMPTS:
            raise CorruptPersistedState(f"max_attempts must be {MAX_ATTEMPTS}, got {max_attempts}.")
        if status not in STATUSES:
            raise CorruptPersistedState(f"Unknown status {status!r}.")

        secret = tuple(secret)
        if len(secret) != code_length:
            raise CorruptPersistedState("Secret length does not match code_length.")
        if not all(_is_color(value, alphabet_size) for value in secret):
            raise CorruptPersistedState("Secret contains an invalid color.")

        entries = []
        for guess, hint in history:
            guess = tuple(guess)
            if len(guess) != code_length:
                raise CorruptPersistedState("Stored guess has the wrong length.")
            if not all(_is_color(value, alphabet_size) for value in guess):
                raise CorruptPersistedState("Stored guess contains an invalid color.")
            expected = compute_hint(guess, secret)
            if tuple(hint) != tuple(expected):
                raise CorruptPersistedState("Stored hint does not match its guess.")
            entries.append(HistoryEntry(guess, expected))

        if len(entries) > max_attempts:
            raise CorruptPersistedState("More guesses stored than attempts allowed.")

        wins = [i for i, entry in enumerate(entries) if is_win(secret, entry.guess)]
        if wins and wins[0] != len(entries) - 1:
            raise CorruptPersistedState("Guesses recorded after the game was won.")

        if wins:
            expected_status = "won"
        elif len(entries) == max_attempts:
            expected_status = "lost"
        else:
            expected_status = "in_progress"
        if status != expected_status:
            raise CorruptPersistedState(
                f"Stored status {status!r} does not match history (expected {expected_status!r})."
            )

        session = cls(secret, alphabet_size=alphabet_size)
        session._history = tuple(entries)
        session._status = expected_status
        return session

    def _secret_for_snapshot(self) -> Code:
        # Only the snapshot codec reads this; it must not reach callers.
        return list(self._secret)


def new_game(
    code_length: int,
    alphabet_size: int = DEFAULT_ALPHABET_SIZE,
    generator: SecretGenerator = generate,
) -> GameSession:
    """Draw a fresh secret and start an empty, in-progress session."""
    check_parameters(code_length, alphabet_size)
    secret = list(generator(code_length, alphabet_size))
    if len(secret) != code_length:
        raise InvalidParameters("Secret generator returned a code of the wrong length.")
    logger.info("New game: %d pegs, %d colors", code_length, alphabet_size)
    return GameSession(
        secret,
        alphabet_size=alphabet_size,
        generator=generator,
    )
