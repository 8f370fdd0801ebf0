import unittest

from klondike.History import MAX_UNDO, HistoryRecorder
from klondike.Model import GameState


class HistoryRecorderTestCase(unittest.TestCase):
    def test_undo_returns_snapshots_newest_first(self):
        history = HistoryRecorder()
        self.assertFalse(history.canUndo())
        self.assertIsNone(history.undo())
        history.log(GameState.empty(1))
        history.log(GameState.empty(3))
        self.assertEqual(3, history.undo().draw_count)
        self.assertEqual(1, history.undo().draw_count)
        self.assertIsNone(history.undo())

    def test_log_copies_the_state(self):
        history = HistoryRecorder()
        state = GameState.empty()
        history.log(state)
        state.tableau[0].append("mutated")
        self.assertEqual([], history.undo().tableau[0])

    def test_oldest_entries_are_dropped(self):
        history = HistoryRecorder(limit=3)
        for count in (1, 3, 1, 3):
            history.log(GameState.empty(count))
        self.assertEqual(3, len(history))
        self.assertEqual([3, 1, 3], [s.draw_count for s in history.snapshots()])

    def test_default_cap(self):
        history = HistoryRecorder()
        for _ in range(MAX_UNDO + 5):
            history.log(GameState.empty())
        self.assertEqual(200, len(history))

    def test_load_truncates_to_limit(self):
        history = HistoryRecorder(limit=2)
        history.load([GameState.empty(1), GameState.empty(3), GameState.empty(1)])
        self.assertEqual([3, 1], [s.draw_count for s in history.snapshots()])
        history.clear()
        self.assertFalse(history.canUndo())


if __name__ == "__main__":
    unittest.main()
