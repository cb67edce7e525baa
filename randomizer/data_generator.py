from __future__ import annotations

import logging
from typing import Union

import pandas as pd

from .random_utils import SeededGenerator, scale_state


logger = logging.getLogger(__name__)

COLUMNS = ["draw", "seed", "fraction", "value"]


def generate_draws(
    seed: Union[int, str],
    count: int,
    max_value: int = 100,
) -> pd.DataFrame:
    """Record ``count`` successive draws from a generator seeded with ``seed``.

    A string seed goes through ``SeededGenerator.from_string``. Each row's
    ``value`` is what ``next_int(max_value)`` returns for that draw.

    Returns a pandas DataFrame with:
      draw, seed, fraction, value
    """
    if count <= 0:
        raise ValueError("count must be > 0")

    rng = SeededGenerator.from_string(seed) if isinstance(seed, str) else SeededGenerator(int(seed))

    rows: list[dict] = []
    for i in range(1, count + 1):
        fraction = rng.next_fraction()
        rows.append(
            {
                "draw": i,
                "seed": rng.seed,
                "fraction": fraction,
                "value": scale_state(rng.seed, max_value),
            }
        )

    logger.debug("generated %d draws (max_value=%d, final state=%d)", count, max_value, rng.seed)
    return pd.DataFrame(rows, columns=COLUMNS)


def export_to_csv(df: pd.DataFrame) -> str:
    """Export a draw log to a CSV string."""
    out = df.copy()
    for c in COLUMNS:
        if c not in out.columns:
            out[c] = ""
    return out[COLUMNS].to_csv(index=False)
