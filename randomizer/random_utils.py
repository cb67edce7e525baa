from __future__ import annotations

import math
import time
from dataclasses import dataclass


# Constants from "Numerical Recipes in C".
MODULUS = 233280
MULTIPLIER = 9301
INCREMENT = 49297


def round_half_away(x: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    q = math.floor(abs(x))
    if abs(x) - q >= 0.5:
        q += 1
    return -q if x < 0 else q


def scale_state(seed: int, max: int) -> int:
    """Round ``max * seed / MODULUS`` to the nearest integer, ties away from zero.

    Works on the integer state so exact ties are never lost to float error.
    """
    n = max * seed
    q = (2 * abs(n) + MODULUS) // (2 * MODULUS)
    return -q if n < 0 else q


@dataclass
class SeededGenerator:
    """A tiny seeded RNG.

    Linear Congruential Generator (LCG):
      seed = (seed * 9301 + 49297) % 233280
      next = seed / 233280

    Any integer is accepted as the initial seed; the first call to
    ``next_fraction`` brings it into ``[0, MODULUS)``. Not thread-safe:
    callers sharing one instance must serialize calls themselves.

    This is not cryptographically secure and makes no statistical quality
    guarantees; it exists to produce reproducible sequences.
    """

    seed: int

    def next_fraction(self) -> float:
        """Advance the state and return it as a float in [0, 1)."""
        self.seed = (self.seed * MULTIPLIER + INCREMENT) % MODULUS
        return self.seed / MODULUS

    def next_int(self, max: int) -> int:
        """Return ``max * next_fraction()`` rounded to the nearest integer.

        For ``max >= 0`` the result lies in ``[0, max]``. A negative ``max``
        is not rejected; the result then carries the product's sign.
        """
        self.next_fraction()
        return scale_state(self.seed, max)

    @staticmethod
    def from_string(seed_str: str) -> "SeededGenerator":
        # 32-bit string hash (h = 31 * h + unit) over UTF-16 code units, wrapped to a signed int
        data = seed_str.encode("utf-16-be", errors="surrogatepass")
        h = 0
        for i in range(0, len(data), 2):
            h = (h * 31 + int.from_bytes(data[i:i + 2], "big")) & 0xFFFFFFFF
        if h >= 0x80000000:
            h -= 0x100000000
        return SeededGenerator(abs(h))


def time_seed() -> int:
    """Milliseconds since the epoch, used to seed the demo generator."""
    return time.time_ns() // 1_000_000
