import unittest

from rubik_search.logic import predicates
from rubik_search.solve import experiments


class TestExperiments(unittest.TestCase):
    def test_batch(self):
        res = experiments.brute_force_batch(3, 1, predicates.always_true, shuffle_n=5, seed=1)
        self.assertEqual(len(res.runs), 3)
        self.assertEqual(res.solved_runs, 3)
        for stats in res.runs:
            self.assertEqual(stats.ticks, 1)
            self.assertEqual(stats.solution_count, 1)

    def test_batch_without_solutions(self):
        res = experiments.brute_force_batch(2, 2, predicates.always_false, shuffle_n=5, seed=1)
        self.assertEqual(res.solved_runs, 0)
        self.assertEqual([s.ticks for s in res.runs], [156, 156])

    def test_hillclimb(self):
        res = experiments.hillclimb(2, shuffle_n=3, seed=8)
        self.assertLessEqual(res.best_distance, res.start_distance)
        self.assertEqual(res.ticks, 156)
        self.assertLessEqual(len(res.best_path), 2)

    def test_hillclimb_finds_inverse_of_short_scramble(self):
        # con una mezcla de 1 movimiento, deshacerlo da distancia 0
        res = experiments.hillclimb(1, shuffle_n=1, seed=3)
        self.assertEqual(res.best_distance, 0)
        self.assertEqual(len(res.best_path), 1)

    def test_hamming_histogram(self):
        hist = experiments.hamming_histogram(50, shuffle_n=10, seed=2)
        self.assertEqual(sorted(hist), list(range(21)))
        self.assertAlmostEqual(sum(hist.values()), 100.0)

    def test_hamming_histogram_unshuffled(self):
        hist = experiments.hamming_histogram(10, shuffle_n=0)
        self.assertEqual(hist[0], 100.0)

    def test_cross_frequency(self):
        res = experiments.cross_frequency(10, shuffle_n=0)
        self.assertEqual(res["count_any"], 10)
        self.assertEqual(res["count_red"], 10)
        self.assertEqual(res["estimate_any"], experiments.CUBE_STATES)

    def test_invalid_counts(self):
        with self.assertRaises(ValueError):
            experiments.hamming_histogram(0)
        with self.assertRaises(ValueError):
            experiments.cross_frequency(-1)

    def test_hamming_trend_first_move_from_solved(self):
        for walk in (False, True):
            res = experiments.hamming_trend(1, shuffle_n=0, walk=walk, warmup=0)
            self.assertEqual(res.increase, 1.0)
            self.assertEqual(res.decrease, 0.0)
            self.assertEqual(res.no_change, 0.0)
            self.assertEqual(res.lowest, 0)

    def test_hamming_trend_fractions(self):
        for walk in (False, True):
            res = experiments.hamming_trend(300, walk=walk, seed=4)
            self.assertAlmostEqual(res.increase + res.decrease + res.no_change, 1.0)
            self.assertGreater(res.decrease, 0.0)
            self.assertLessEqual(res.lowest, 20)
            self.assertEqual(res, experiments.hamming_trend(300, walk=walk, seed=4))

    def test_hamming_trend_bad_count(self):
        with self.assertRaises(ValueError):
            experiments.hamming_trend(0)


if __name__ == "__main__":
    unittest.main()
