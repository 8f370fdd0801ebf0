import configparser
import logging
from pathlib import Path

from klondike.Core import DRAW_MODES

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "game"

DEFAULT_SETTINGS = {
    "draw_count": "3",
    "autosave": "yes",
}

_TRUE = ("1", "yes", "true", "on")
_FALSE = ("0", "no", "false", "off")


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: str(v) for k, v in settings.items() if k in DEFAULT_SETTINGS})

    try:
        draw_count = int(data["draw_count"])
    except ValueError:
        draw_count = int(DEFAULT_SETTINGS["draw_count"])
    if draw_count not in DRAW_MODES:
        draw_count = int(DEFAULT_SETTINGS["draw_count"])
    data["draw_count"] = str(draw_count)

    autosave = data["autosave"].strip().lower()
    if autosave in _TRUE:
        data["autosave"] = "yes"
    elif autosave in _FALSE:
        data["autosave"] = "no"
    else:
        data["autosave"] = DEFAULT_SETTINGS["autosave"]
    return data


def load_settings():
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except configparser.Error as err:
        logger.warning("unreadable settings file %s: %s", SETTINGS_PATH, err)
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {key: parser[SECTION].get(key, default) for key, default in DEFAULT_SETTINGS.items()}
    return _sanitize(raw)


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser[SECTION] = data
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)


def draw_count(settings) -> int:
    return int(_sanitize(settings)["draw_count"])


def autosave_enabled(settings) -> bool:
    return _sanitize(settings)["autosave"] == "yes"
