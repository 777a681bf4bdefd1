"""
Labels for clarity.
"""

from typing import List, Literal, NamedTuple, Sequence

Color = int  # index into the palette, 0 -> alphabet_size - 1
Code = List[Color]
GameStatus = Literal["in_progress", "won", "lost"]

MAX_ATTEMPTS = 10
DEFAULT_ALPHABET_SIZE = 6
DEFAULT_CODE_LENGTH = 4
CODE_LENGTHS = (4, 6, 8)

# Display names only; the engine never looks at these.
COLORS = (
    "yellow",
    "blue",
    "red",
    "green",
    "brown",
    "white",
    "orange",
    "black",
)


class Hint(NamedTuple):
    correct: int    # right color, right position (black peg)
    misplaced: int  # right color, wrong position (white peg)


def color_names(code: Sequence[Color]) -> List[str]:
    """Map color indices to palette names ("" for anything off the palette)."""
    names = []
    for index in code:
        if 0 <= index < len(COLORS):
            names.append(COLORS[index])
        else:
            names.append("")
    return names
