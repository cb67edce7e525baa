import sqlite3
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from randomizer.data_generator import generate_draws
from randomizer.storage import get_run_draws, get_runs, save_run, save_run_draws


class TrackingConnection(sqlite3.Connection):
    opened = []

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.closed = False
        TrackingConnection.opened.append(self)

    def close(self):
        self.closed = True
        super().close()


class TestStorage(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.db = Path(self.tmp.name) / "history" / "runs.db"

    def tearDown(self):
        self.tmp.cleanup()

    def test_empty_history(self):
        self.assertEqual(get_runs(db_path=self.db), [])
        self.assertEqual(len(get_run_draws(1, db_path=self.db)), 0)

    def test_round_trip(self):
        df = generate_draws(99, 20, max_value=6)
        run_id = save_run("dice", 99, 20, 6, mean=0.5, p_value=0.9, db_path=self.db)
        save_run_draws(run_id, df, db_path=self.db)

        runs = get_runs(db_path=self.db)
        self.assertEqual(len(runs), 1)
        self.assertEqual(runs[0]["label"], "dice")
        self.assertEqual(runs[0]["seed"], "99")
        self.assertEqual(runs[0]["max_value"], 6)

        back = get_run_draws(run_id, db_path=self.db)
        self.assertEqual(back["seed"].tolist(), df["seed"].tolist())
        self.assertEqual(back["value"].tolist(), df["value"].tolist())
        self.assertEqual(back["fraction"].tolist(), df["fraction"].tolist())

    def test_runs_newest_first(self):
        first = save_run("a", 1, 10, 10, 0.5, 0.5, db_path=self.db)
        second = save_run("b", "text", 10, 10, 0.5, 0.5, db_path=self.db)
        ids = [r["id"] for r in get_runs(limit=5, db_path=self.db)]
        self.assertEqual(ids, [second, first])

    def test_connections_are_closed(self):
        real_connect = sqlite3.connect
        TrackingConnection.opened = []

        def connect(path):
            return real_connect(path, factory=TrackingConnection)

        with mock.patch("randomizer.storage.sqlite3.connect", side_effect=connect):
            run_id = save_run("closed", 3, 5, 10, 0.5, 0.5, db_path=self.db)
            save_run_draws(run_id, generate_draws(3, 5, max_value=10), db_path=self.db)
            get_runs(db_path=self.db)
            get_run_draws(run_id, db_path=self.db)

        self.assertTrue(TrackingConnection.opened)
        self.assertTrue(all(c.closed for c in TrackingConnection.opened))
        self.assertEqual(len(get_run_draws(run_id, db_path=self.db)), 5)


if __name__ == '__main__':
    unittest.main()
