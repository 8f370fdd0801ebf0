import json
import logging
from pathlib import Path

from klondike.Core import GameError, checkStructure
from klondike.History import MAX_UNDO
from klondike.Model import GameState, stateFromDict, stateToDict

logger = logging.getLogger(__name__)

STORAGE_KEY = "klondike-game-state"
SAVE_SUFFIX = ".json"


def _state_path() -> Path:
    return Path(__file__).with_name(f"{STORAGE_KEY}{SAVE_SUFFIX}")


def has_saved_game() -> bool:
    path = _state_path()
    return path.exists() and path.is_file()


def save_game(current: GameState, undo: list[GameState] = ()) -> bool:
    payload = {
        "current": stateToDict(current),
        "undo": [stateToDict(s) for s in undo][-MAX_UNDO:],
    }
    path = _state_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
        return True
    except OSError as err:
        logger.warning("could not save game to %s: %s", path, err)
        return False


def load_game() -> tuple[GameState, list[GameState]] | None:
    """Returns (current, undo) or None when nothing usable is stored."""
    path = _state_path()
    if not path.exists() or not path.is_file():
        return None
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        current = stateFromDict(data["current"])
        checkStructure(current)
        undo = []
        for raw in data.get("undo", []):
            state = stateFromDict(raw)
            checkStructure(state)
            undo.append(state)
    except (OSError, ValueError, KeyError, TypeError, GameError) as err:
        logger.warning("ignoring unreadable saved game %s: %s", path, err)
        return None
    return current, undo[-MAX_UNDO:]


def clear_game() -> bool:
    path = _state_path()
    try:
        if path.exists():
            path.unlink()
        return True
    except OSError as err:
        logger.warning("could not remove saved game %s: %s", path, err)
        return False
