import unittest

import pandas as pd

from randomizer.data_generator import COLUMNS, export_to_csv, generate_draws
from randomizer.random_utils import INCREMENT, MODULUS, MULTIPLIER, SeededGenerator


class TestGenerateDraws(unittest.TestCase):
    def test_columns_and_length(self):
        df = generate_draws(7, 25)
        self.assertEqual(list(df.columns), COLUMNS)
        self.assertEqual(len(df), 25)
        self.assertEqual(df["draw"].tolist(), list(range(1, 26)))

    def test_matches_generator(self):
        df = generate_draws(1, 50, max_value=100)
        self.assertEqual(int(df["seed"].iloc[0]), 58598)
        self.assertEqual(int(df["value"].iloc[0]), 25)

        rng = SeededGenerator(1)
        self.assertEqual(df["value"].tolist(), [rng.next_int(100) for _ in range(50)])

    def test_string_seed(self):
        df = generate_draws("ab", 10)
        rng = SeededGenerator(3105)
        self.assertEqual(df["fraction"].tolist(), [rng.next_fraction() for _ in range(10)])

    def test_exact_tie_value(self):
        # the state after this seed is 33696; 45 * 33696 / 233280 == 6.5
        start = ((33696 - INCREMENT) * pow(MULTIPLIER, -1, MODULUS)) % MODULUS
        df = generate_draws(start, 1, max_value=45)
        self.assertEqual(int(df["seed"].iloc[0]), 33696)
        self.assertEqual(int(df["value"].iloc[0]), 7)

    def test_count_must_be_positive(self):
        with self.assertRaises(ValueError):
            generate_draws(1, 0)

    def test_export_to_csv(self):
        csv = export_to_csv(generate_draws(0, 3))
        lines = csv.splitlines()
        self.assertEqual(lines[0], "draw,seed,fraction,value")
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[1].startswith("1,49297,"))

    def test_export_fills_missing_columns(self):
        df = pd.DataFrame({"draw": [1], "seed": [5], "fraction": [0.5]})
        lines = export_to_csv(df).splitlines()
        self.assertEqual(lines[0], "draw,seed,fraction,value")
        self.assertEqual(lines[1], "1,5,0.5,")


if __name__ == '__main__':
    unittest.main()
