"""
Pure game logic (no HTTP, no storage).
We compute two feedback numbers for each guess:
- correct: how many indices are exactly correct (right color, right place)
- misplaced: how many of the remaining guessed colors also appear in the
  remaining secret pegs, counted per color so a color is never credited more
  often than it is left over on either side

Duplicates are allowed in both the secret and the guess.
"""

from typing import Dict, Sequence

from .errors import LengthMismatch
from .types import Color, Hint


def compute_hint(guess: Sequence[Color], secret: Sequence[Color]) -> Hint:
    """
    Example:
      secret = [0, 1, 2, 3]
      guess  = [1, 0, 2, 3]
      correct   = 2  (positions 2 and 3)
      misplaced = 2  (the swapped 0 and 1)
      Returns Hint(correct=2, misplaced=2)
    """

    # 0. Validate lengths match
    n = len(secret)
    if len(guess) != n:
        raise LengthMismatch(
            f"Guess has {len(guess)} pegs but the secret has {n}."
        )

    # 1. Exact matches; everything else goes into the per-color remainders
    correct = 0
    secret_remainder: Dict[Color, int] = {}
    guess_remainder: Dict[Color, int] = {}
    for i in range(n):
        if guess[i] == secret[i]:
            correct += 1
        else:
            secret_remainder[secret[i]] = secret_remainder.get(secret[i], 0) + 1
            guess_remainder[guess[i]] = guess_remainder.get(guess[i], 0) + 1

    # 2. Overlap of the leftovers is the sum of the smaller count per color
    misplaced = 0
    for color, count in guess_remainder.items():
        misplaced += min(count, secret_remainder.get(color, 0))

    return Hint(correct, misplaced)


def is_win(secret: Sequence[Color], guess: Sequence[Color]) -> bool:
    """True when the guess reproduces a non-empty secret peg for peg."""
    return len(secret) > 0 and tuple(guess) == tuple(secret)
