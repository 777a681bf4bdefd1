"""
- HTTP call with clear fallback
Optionally get the secret's colors from random.org. If anything goes wrong
(no internet, timeout, bad response), we fall back to the local generator so
the game still works.
"""

import logging

import requests

from . import config
from .codegen import check_parameters, generate
from .types import Code

logger = logging.getLogger(__name__)

RANDOM_URL = "https://www.random.org/integers/"


def fetch_code(length: int, alphabet_size: int) -> Code:
    # Bad parameters are the caller's problem, not something to fall back from
    check_parameters(length, alphabet_size)

    if config.RANDOM_SOURCE != "random.org":
        return generate(length, alphabet_size)

    # Parameters to send to random.org
    params = {
        "num": length,              # how many numbers we want
        "min": 0,                   # smallest allowed color
        "max": alphabet_size - 1,   # largest allowed color
        "col": 1,                   # one number per line
        "base": 10,                 # normal decimal numbers
        "format": "plain",          # plain text response
        "rnd": "new",               # always generate new numbers
    }

    # keep network quick; if it takes too long, we will just fallback
    timeout_seconds = 3.0

    try:
        response = requests.get(RANDOM_URL, params=params, timeout=timeout_seconds)
        response.raise_for_status()

        # The body looks like:
        #   0\n3\n1\n2\n
        colors = [int(line) for line in response.text.splitlines() if line.strip() != ""]

        if len(colors) != length:
            raise ValueError(f"random.org returned {len(colors)} values, expected {length}.")
        for color in colors:
            if color < 0 or color >= alphabet_size:
                raise ValueError(f"random.org number out of range 0..{alphabet_size - 1}.")

        return colors

    except (requests.RequestException, ValueError) as exc:
        logger.warning("random.org unavailable (%s); using local generator", exc)
        return generate(length, alphabet_size)
