from klondike.Model import GameState

MAX_UNDO = 200


class HistoryRecorder:
    """
    Undo stack of whole-state snapshots, taken before each mutating call.
    The oldest entry is dropped once the stack is full.
    """

    def __init__(self, limit=MAX_UNDO):
        self.limit = limit
        self.lst = []

    def __len__(self):
        return len(self.lst)

    def canUndo(self):
        return len(self.lst) > 0

    def log(self, state: GameState):
        self.lst.append(state.copy())
        if len(self.lst) > self.limit:
            self.lst = self.lst[len(self.lst) - self.limit:]

    def undo(self):
        if not self.lst:
            return None
        return self.lst.pop()

    def clear(self):
        self.lst = []

    def snapshots(self):
        return [s.copy() for s in self.lst]

    def load(self, states):
        self.lst = [s.copy() for s in states][-self.limit:] if self.limit > 0 else []
