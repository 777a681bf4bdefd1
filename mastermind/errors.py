"""
Game errors.

Everything the engine raises derives from MastermindError. It subclasses
ValueError so the API layer can keep treating "bad input" as a 4xx, the same
way it always did.
"""


class MastermindError(ValueError):
    """Base class for recoverable game errors."""


class InvalidParameters(MastermindError):
    """Code generator asked for a non-positive length or fewer than 2 colors."""


class LengthMismatch(MastermindError):
    """Guess and secret handed to the hint engine differ in length."""


class InvalidGuessLength(MastermindError):
    """Guess does not have exactly code_length pegs."""


class InvalidGuessSymbol(MastermindError):
    """Guess contains something that is not a color index in [0, alphabet_size)."""


class GameAlreadyTerminal(MastermindError):
    """Guess submitted after the game was won or lost."""


class GameNotOver(MastermindError):
    """Secret requested while the game is still in progress."""


class CorruptPersistedState(MastermindError):
    """Stored snapshot could not be decoded or breaks a session invariant."""


class PersistenceError(RuntimeError):
    """Snapshot could not be written; the mutation must not be treated as committed."""
