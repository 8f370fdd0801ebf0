import logging

from klondike.Core import Core, GameConfig, GameError
from klondike.History import HistoryRecorder
from klondike.Model import NUM_PER_SUIT, SUITS, Card, GameState, MoveRequest, PileRef
from klondike_ui import game_store, settings_store
from klondike_ui.adapter import CoreAdapter
from klondike_ui.view_model import GameViewModel

logger = logging.getLogger(__name__)


def solved_state(draw_count=3) -> GameState:
    """Every suit built Ace to King, nothing left anywhere else."""
    state = GameState.empty(draw_count)
    for i, suit in enumerate(SUITS):
        state.foundations[i] = [Card.fromSuitAndRank(suit, r) for r in range(1, NUM_PER_SUIT + 1)]
    return state


class GameSession:
    """
    One player's table: the engine, the undo stack, and auto-save.

    The engine never sees the undo stack; a snapshot is pushed only after
    the call it guards has been accepted. Rejections land in `message`.
    """

    def __init__(self, settings=None, autosave=None):
        self.settings = settings if settings is not None else settings_store.load_settings()
        if autosave is None:
            autosave = settings_store.autosave_enabled(self.settings)
        self.autosave = autosave
        self.history = HistoryRecorder()
        self.core = Core(config=GameConfig(settings_store.draw_count(self.settings)))
        self.message = ""

    @property
    def state(self) -> GameState:
        return self.core.getState()

    def view(self) -> GameViewModel:
        return CoreAdapter.snapshot(self.core.getState())

    def drop_targets(self, src: PileRef) -> list[PileRef]:
        return CoreAdapter.drop_targets(self.core, src)

    def new_game(self, seed=None) -> GameViewModel:
        self.message = ""
        self.history.clear()
        self.core.newGame(GameConfig(self.core.getState().draw_count, seed))
        self.save()
        return self.view()

    def resume(self) -> bool:
        loaded = game_store.load_game()
        if loaded is None:
            return False
        current, undo = loaded
        self.core.setState(current)
        self.history.load(undo)
        self.message = ""
        return True

    def save(self) -> bool:
        if not self.autosave:
            return False
        return game_store.save_game(self.core.getState(), self.history.snapshots())

    def _apply(self, action) -> bool:
        self.message = ""
        before = self.core.getState()
        try:
            after = action()
        except GameError as err:
            self.message = str(err)
            return False
        if after == before:
            return False
        self.history.log(before)
        self.save()
        if after.isWon():
            logger.info("game won")
        return True

    def draw(self) -> bool:
        return self._apply(self.core.draw)

    def move(self, src: PileRef, dest: PileRef) -> bool:
        return self._apply(lambda: self.core.moveCards(MoveRequest(src, dest)))

    def set_draw_mode(self, draw_count) -> bool:
        ok = self._apply(lambda: self.core.setDrawCount(draw_count))
        if not self.message:
            self.settings = dict(self.settings, draw_count=str(draw_count))
            self.persist_settings()
        return ok

    def persist_settings(self) -> bool:
        try:
            settings_store.save_settings(self.settings)
            return True
        except OSError as err:
            logger.warning("could not save settings: %s", err)
            return False

    def simulate_win(self) -> bool:
        return self._apply(lambda: self.core.setState(solved_state(self.core.getState().draw_count)))

    def undo(self) -> bool:
        self.message = ""
        previous = self.history.undo()
        if previous is None:
            return False
        self.core.setState(previous)
        self.save()
        return True
