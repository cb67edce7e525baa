from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

import pandas as pd

from .data_generator import COLUMNS


logger = logging.getLogger(__name__)

DEFAULT_DB = Path(__file__).resolve().parent.parent / "randomizer.db"


@contextmanager
def _get_conn(db_path: Path = DEFAULT_DB) -> Iterator[sqlite3.Connection]:
    conn = sqlite3.connect(db_path)
    conn.row_factory = sqlite3.Row
    try:
        # commit or roll back, then always close
        with conn:
            yield conn
    finally:
        conn.close()


def init_db(db_path: Path = DEFAULT_DB) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.debug("initialising run history at %s", db_path)
    with _get_conn(db_path) as conn:
        conn.executescript(
            """
            CREATE TABLE IF NOT EXISTS runs (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              label TEXT NOT NULL,
              seed TEXT NOT NULL,
              count INTEGER NOT NULL,
              max_value INTEGER NOT NULL,
              mean REAL NOT NULL,
              p_value REAL NOT NULL,
              created_at TEXT NOT NULL
            );

            CREATE TABLE IF NOT EXISTS draws (
              id INTEGER PRIMARY KEY AUTOINCREMENT,
              run_id INTEGER NOT NULL,
              draw INTEGER NOT NULL,
              seed INTEGER NOT NULL,
              fraction REAL NOT NULL,
              value INTEGER NOT NULL,
              FOREIGN KEY (run_id) REFERENCES runs(id)
            );
            """
        )


def save_run(
    label: str,
    seed: Union[int, str],
    count: int,
    max_value: int,
    mean: float,
    p_value: float,
    db_path: Path = DEFAULT_DB,
) -> int:
    init_db(db_path)
    now = datetime.now(timezone.utc).isoformat()

    with _get_conn(db_path) as conn:
        cur = conn.execute(
            """
            INSERT INTO runs (
              label, seed, count, max_value, mean, p_value, created_at
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            """,
            (
                label,
                str(seed),
                int(count),
                int(max_value),
                float(mean),
                float(p_value),
                now,
            ),
        )
        return int(cur.lastrowid)


def save_run_draws(
    run_id: int,
    df: pd.DataFrame,
    db_path: Path = DEFAULT_DB,
) -> None:
    init_db(db_path)
    if df is None or len(df) == 0:
        return

    records = [
        (
            run_id,
            int(r.draw),
            int(r.seed),
            float(r.fraction),
            int(r.value),
        )
        for r in df.itertuples(index=False)
    ]

    with _get_conn(db_path) as conn:
        conn.executemany(
            """
            INSERT INTO draws (
              run_id, draw, seed, fraction, value
            ) VALUES (?, ?, ?, ?, ?)
            """,
            records,
        )
    logger.debug("stored %d draws for run #%d", len(records), run_id)


def get_runs(limit: int = 25, db_path: Path = DEFAULT_DB) -> List[Dict[str, Any]]:
    init_db(db_path)
    with _get_conn(db_path) as conn:
        rows = conn.execute(
            "SELECT * FROM runs ORDER BY datetime(created_at) DESC, id DESC LIMIT ?",
            (int(limit),),
        ).fetchall()

    return [dict(r) for r in rows]


def get_run_draws(run_id: int, db_path: Path = DEFAULT_DB) -> pd.DataFrame:
    init_db(db_path)
    with _get_conn(db_path) as conn:
        rows = conn.execute(
            "SELECT draw, seed, fraction, value FROM draws WHERE run_id = ? ORDER BY draw",
            (int(run_id),),
        ).fetchall()

    if not rows:
        return pd.DataFrame(columns=COLUMNS)

    return pd.DataFrame([dict(r) for r in rows], columns=COLUMNS)
