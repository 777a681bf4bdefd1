"""
Secret code generation.

Each peg is drawn independently and uniformly from the palette, so colors can
repeat (classic rules).
"""

from secrets import randbelow

from .errors import InvalidParameters
from .types import Code


def check_parameters(length: int, alphabet_size: int) -> None:
    if isinstance(length, bool) or not isinstance(length, int) or length <= 0:
        raise InvalidParameters(f"Code length must be a positive integer, got {length!r}.")
    if isinstance(alphabet_size, bool) or not isinstance(alphabet_size, int) or alphabet_size <= 1:
        raise InvalidParameters(f"Need at least 2 colors, got {alphabet_size!r}.")


def generate(length: int, alphabet_size: int) -> Code:
    check_parameters(length, alphabet_size)
    return [randbelow(alphabet_size) for _ in range(length)]
