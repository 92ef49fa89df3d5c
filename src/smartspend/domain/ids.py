"""Identifier generation for books and transactions."""

import random
import time
from typing import Callable, Optional

_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


def to_base36(value: int) -> str:
    """Encode a non-negative integer in lowercase base 36."""
    if value < 0:
        raise ValueError(f"Cannot encode negative value {value}")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_ALPHABET[rem])
    return "".join(reversed(digits))


class IdGenerator:
    """Produce opaque ids of the form ``<millis base36>-<6 random chars>``.

    The timestamp prefix makes ids roughly sortable by creation time; the
    random suffix separates ids minted within the same millisecond.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        rng: Optional[random.Random] = None,
        suffix_length: int = 6,
    ):
        self.clock = clock
        self.rng = rng or random.SystemRandom()
        self.suffix_length = suffix_length

    def __call__(self) -> str:
        millis = int(self.clock() * 1000)
        suffix = "".join(self.rng.choice(_ALPHABET) for _ in range(self.suffix_length))
        return f"{to_base36(millis)}-{suffix}"


make_id = IdGenerator()
