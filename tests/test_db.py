import os
import sqlite3
import tempfile
import unittest

from game import HIGH_SCORE_KEY, MemoryKeyValueStore, SqliteKeyValueStore


class TestSqliteKeyValueStore(unittest.TestCase):
    def test_given_value_when_store_then_load_returns_it(self):
        with tempfile.TemporaryDirectory() as td:
            store = SqliteKeyValueStore(os.path.join(td, "applesum.db"))
            self.assertIsNone(store.load(HIGH_SCORE_KEY))
            store.store(HIGH_SCORE_KEY, 14)
            self.assertEqual(store.load(HIGH_SCORE_KEY), 14)
            store.store(HIGH_SCORE_KEY, 6)  # overwrite is unconditional
            self.assertEqual(store.load(HIGH_SCORE_KEY), 6)

    def test_given_value_when_reopened_then_persisted_as_decimal_text(self):
        with tempfile.TemporaryDirectory() as td:
            path = os.path.join(td, "applesum.db")
            SqliteKeyValueStore(path).store(HIGH_SCORE_KEY, 22)
            self.assertEqual(SqliteKeyValueStore(path).load(HIGH_SCORE_KEY), 22)
            conn = sqlite3.connect(path)
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (HIGH_SCORE_KEY,)).fetchone()
            finally:
                conn.close()
            self.assertEqual(row[0], "22")

    def test_given_malformed_text_when_load_then_none(self):
        with tempfile.TemporaryDirectory() as td:
            store = SqliteKeyValueStore(os.path.join(td, "applesum.db"))
            for raw in ("twelve", "", "-3", "7x"):
                store.store_raw(HIGH_SCORE_KEY, raw)
                self.assertIsNone(store.load(HIGH_SCORE_KEY), raw)
            store.store_raw(HIGH_SCORE_KEY, " 8 ")
            self.assertEqual(store.load(HIGH_SCORE_KEY), 8)

    def test_given_nested_path_when_store_then_directories_created(self):
        with tempfile.TemporaryDirectory() as td:
            nested = os.path.join(td, "deep", "nest", "file.db")
            store = SqliteKeyValueStore(nested)
            store.store(HIGH_SCORE_KEY, 4)
            self.assertTrue(os.path.isfile(nested))
            self.assertEqual(store.load(HIGH_SCORE_KEY), 4)


class TestMemoryKeyValueStore(unittest.TestCase):
    def test_given_memory_store_when_used_then_behaves_like_sqlite(self):
        store = MemoryKeyValueStore({"other": "oops"})
        self.assertIsNone(store.load(HIGH_SCORE_KEY))
        self.assertIsNone(store.load("other"))
        store.store(HIGH_SCORE_KEY, 10)
        self.assertEqual(store.data[HIGH_SCORE_KEY], "10")
        self.assertEqual(store.load(HIGH_SCORE_KEY), 10)


if __name__ == "__main__":
    unittest.main(verbosity=2)
