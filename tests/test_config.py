import tempfile
import unittest
from pathlib import Path

from segcut.config import ConfigStore


class TestConfigStore(unittest.TestCase):
    def test_load_default_when_missing(self):
        with tempfile.TemporaryDirectory() as td:
            store = ConfigStore(Path(td) / "cfg")
            cfg = store.load()
            self.assertIn("fps", cfg)
            self.assertIn("history_limit", cfg)
            self.assertEqual(store.fps(), 30.0)
            self.assertEqual(store.new_segment_sec(), 10.0)
            self.assertFalse(store.invert_default())

    def test_corrupted_file_falls_back_to_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            store = ConfigStore(Path(td))
            store.path.write_text("{not json", encoding="utf-8")
            self.assertEqual(store.load(), store.default_config())

    def test_set_value_persists(self):
        with tempfile.TemporaryDirectory() as td:
            store = ConfigStore(Path(td) / "nested")
            store.set_value("fps", 25)
            store.set_value("invert_default", True)
            again = ConfigStore(Path(td) / "nested")
            self.assertEqual(again.fps(), 25.0)
            self.assertTrue(again.invert_default())

    def test_values_clamp(self):
        with tempfile.TemporaryDirectory() as td:
            store = ConfigStore(Path(td))
            store.save({"fps": 1000, "history_limit": 0, "new_segment_sec": "abc", "media_duration_sec": -5})
            self.assertEqual(store.fps(), 240.0)
            self.assertEqual(store.history_limit(), 1)
            self.assertEqual(store.new_segment_sec(), 10.0)
            self.assertEqual(store.media_duration_sec(), 120.0)


if __name__ == "__main__":
    unittest.main()
