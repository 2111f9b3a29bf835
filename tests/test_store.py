import json
import os
import tempfile
import unittest

from falling_blocks.game import JsonHighScoreStore, MemoryHighScoreStore
from falling_blocks.game.store import HIGH_SCORE_KEY, load_high_score, save_high_score


class JsonHighScoreStoreTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.path = os.path.join(self.tmp.name, "scores", "highscore.json")

    def tearDown(self):
        self.tmp.cleanup()

    def test_missing_file_reads_as_zero(self):
        self.assertEqual(load_high_score(JsonHighScoreStore(self.path)), 0)

    def test_write_then_read(self):
        store = JsonHighScoreStore(self.path)
        self.assertTrue(save_high_score(store, 4200))
        self.assertEqual(load_high_score(JsonHighScoreStore(self.path)), 4200)
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), {HIGH_SCORE_KEY: 4200})

    def test_other_keys_are_preserved(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({"volume": 3}, f)
        save_high_score(JsonHighScoreStore(self.path), 10)
        with open(self.path, encoding="utf-8") as f:
            self.assertEqual(json.load(f), {"volume": 3, HIGH_SCORE_KEY: 10})

    def test_corrupt_file_reads_as_zero(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            f.write("{not json")
        with self.assertLogs("falling_blocks.game.store", level="WARNING"):
            self.assertEqual(load_high_score(JsonHighScoreStore(self.path)), 0)

    def test_negative_value_reads_as_zero(self):
        os.makedirs(os.path.dirname(self.path))
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump({HIGH_SCORE_KEY: -5}, f)
        self.assertEqual(load_high_score(JsonHighScoreStore(self.path)), 0)

    def test_unwritable_path_is_dropped(self):
        # A directory where the file should be makes open() fail
        os.makedirs(self.path)
        with self.assertLogs("falling_blocks.game.store", level="WARNING"):
            self.assertFalse(save_high_score(JsonHighScoreStore(self.path), 99))


class MemoryHighScoreStoreTests(unittest.TestCase):
    def test_round_trip(self):
        store = MemoryHighScoreStore()
        self.assertEqual(store.get_high_score(), 0)
        store.set_high_score(12)
        self.assertEqual(load_high_score(store), 12)


if __name__ == "__main__":
    unittest.main()
