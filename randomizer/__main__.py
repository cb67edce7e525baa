"""Print ten pseudo-random integers seeded from the current time."""

from __future__ import annotations

from .random_utils import SeededGenerator, time_seed


def main() -> None:
    rng = SeededGenerator(time_seed())
    for _ in range(10):
        print(rng.next_int(100))


if __name__ == "__main__":
    main()
