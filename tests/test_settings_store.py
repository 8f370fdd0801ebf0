import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from klondike_ui import settings_store


class SettingsStoreTestCase(unittest.TestCase):
    def test_missing_file_gives_defaults(self):
        with tempfile.TemporaryDirectory() as td:
            with patch.object(settings_store, "SETTINGS_PATH", Path(td) / "settings.ini"):
                data = settings_store.load_settings()
        self.assertEqual({"draw_count": "3", "autosave": "yes"}, data)

    def test_load_sanitizes_bad_values(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            ini_path.write_text("[game]\ndraw_count = 2\nautosave = maybe\n", encoding="utf-8")
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                data = settings_store.load_settings()
        self.assertEqual("3", data["draw_count"])
        self.assertEqual("yes", data["autosave"])

    def test_save_then_load(self):
        with tempfile.TemporaryDirectory() as td:
            ini_path = Path(td) / "settings.ini"
            with patch.object(settings_store, "SETTINGS_PATH", ini_path):
                settings_store.save_settings({"draw_count": 1, "autosave": "off", "theme": "Forest"})
                text = ini_path.read_text(encoding="utf-8")
                data = settings_store.load_settings()
        self.assertIn("draw_count = 1", text)
        self.assertNotIn("theme", text)
        self.assertEqual(1, settings_store.draw_count(data))
        self.assertFalse(settings_store.autosave_enabled(data))

    def test_helpers_fall_back_on_garbage(self):
        self.assertEqual(3, settings_store.draw_count({"draw_count": "x"}))
        self.assertTrue(settings_store.autosave_enabled({}))


if __name__ == "__main__":
    unittest.main()
