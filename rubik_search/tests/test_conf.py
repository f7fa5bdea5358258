import os
import tempfile
import unittest

from main import resolve_seed
from rubik_search.conf import Config
from rubik_search.core.cube_state import DEFAULT_HISTORY_SIZE

INI = """
[cube]
history_size = 50
track_history = no

[search]
depth = 6
stop_when_true = yes
predicate = red_cross

[run]
shuffle = 12
seed = 42
runs = 3
"""


class TestConfig(unittest.TestCase):
    def test_defaults(self):
        c = Config()
        self.assertEqual(c.cube_history_size, DEFAULT_HISTORY_SIZE)
        self.assertTrue(c.cube_track_history)
        self.assertEqual(c.search_depth, 4)
        self.assertFalse(c.search_stop_when_true)
        self.assertTrue(c.search_track_stats)
        self.assertEqual(c.search_predicate, "any_cross")
        self.assertIsNone(c.run_seed)

    def test_read_file(self):
        fd, path = tempfile.mkstemp(suffix=".ini")
        try:
            with os.fdopen(fd, "wt", encoding="utf-8") as f:
                f.write(INI)
            c = Config(path)
        finally:
            os.remove(path)
        self.assertEqual(c.cube_history_size, 50)
        self.assertFalse(c.cube_track_history)
        self.assertEqual(c.search_depth, 6)
        self.assertTrue(c.search_stop_when_true)
        self.assertEqual(c.search_predicate, "red_cross")
        self.assertEqual(c.search_print_interval, 0)
        self.assertEqual(c.run_shuffle, 12)
        self.assertEqual(c.run_seed, 42)
        self.assertEqual(c.run_count, 3)

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            Config(os.path.join(tempfile.gettempdir(), "no-such-rubik-config.ini"))

    def _config_from(self, text):
        fd, path = tempfile.mkstemp(suffix=".ini")
        try:
            with os.fdopen(fd, "wt", encoding="utf-8") as f:
                f.write(text)
            return Config(path)
        finally:
            os.remove(path)

    def test_seed_zero_is_a_seed(self):
        self.assertEqual(self._config_from("[run]\nseed = 0\n").run_seed, 0)

    def test_empty_seed_means_unseeded(self):
        self.assertIsNone(self._config_from("[run]\nseed =\n").run_seed)
        self.assertIsNone(self._config_from("[run]\nshuffle = 5\n").run_seed)


class TestResolveSeed(unittest.TestCase):
    def test_flag_zero_wins_over_ini(self):
        c = Config()
        c.sect_run["seed"] = "42"
        self.assertEqual(resolve_seed(0, c), 0)
        self.assertEqual(resolve_seed(None, c), 42)

    def test_unseeded(self):
        self.assertIsNone(resolve_seed(None, Config()))


if __name__ == "__main__":
    unittest.main()
