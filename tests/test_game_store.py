import json
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from klondike.Core import Core, GameConfig
from klondike.Model import stateToDict
from klondike_ui import game_store


class GameStoreTestCase(unittest.TestCase):
    def test_save_and_load_round_trip(self):
        core = Core(config=GameConfig(seed=5))
        first = core.getState()
        current = core.draw()
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "klondike-game-state.json"
            with patch.object(game_store, "_state_path", return_value=path):
                self.assertFalse(game_store.has_saved_game())
                self.assertTrue(game_store.save_game(current, [first]))
                self.assertTrue(game_store.has_saved_game())
                loaded = game_store.load_game()
            data = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual({"current", "undo"}, set(data))
        self.assertEqual((current, [first]), loaded)

    def test_default_path_uses_fixed_key(self):
        self.assertEqual("klondike-game-state.json", game_store._state_path().name)

    def test_load_missing_file_returns_none(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "missing.json"
            with patch.object(game_store, "_state_path", return_value=path):
                self.assertIsNone(game_store.load_game())

    def test_load_rejects_corrupt_payloads(self):
        incomplete = stateToDict(Core(config=GameConfig(seed=1)).getState())
        incomplete["stock"].pop()
        relabelled = stateToDict(Core(config=GameConfig(seed=1)).getState())
        top = relabelled["stock"][0]
        relabelled["stock"][0] = dict(top, rank=2 if top["rank"] == 1 else 1)
        payloads = [
            "not json",
            json.dumps({"undo": []}),
            json.dumps({"current": incomplete, "undo": []}),
            json.dumps({"current": relabelled, "undo": []}),
        ]
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "klondike-game-state.json"
            with patch.object(game_store, "_state_path", return_value=path):
                for payload in payloads:
                    path.write_text(payload, encoding="utf-8")
                    with self.assertLogs("klondike_ui.game_store", level="WARNING"):
                        self.assertIsNone(game_store.load_game())

    def test_clear_game_removes_existing_file(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "klondike-game-state.json"
            path.write_text("dummy", encoding="utf-8")
            with patch.object(game_store, "_state_path", return_value=path):
                self.assertTrue(game_store.has_saved_game())
                self.assertTrue(game_store.clear_game())
                self.assertFalse(game_store.has_saved_game())

    def test_clear_game_is_idempotent_for_missing_file(self):
        with tempfile.TemporaryDirectory() as td:
            path = Path(td) / "klondike-game-state.json"
            with patch.object(game_store, "_state_path", return_value=path):
                self.assertTrue(game_store.clear_game())
                self.assertFalse(game_store.has_saved_game())


if __name__ == "__main__":
    unittest.main()
