import configparser
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).with_name("settings.ini")
SECTION = "game"

DEFAULT_SETTINGS = {
    "undo_enabled": "true",
}

_BOOL_TEXT = {
    "1": True, "yes": True, "true": True, "on": True,
    "0": False, "no": False, "false": False, "off": False,
}


def _as_bool(value, default):
    if isinstance(value, bool):
        return value
    return _BOOL_TEXT.get(str(value).strip().lower(), default)


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update(settings)
    default_undo = _as_bool(DEFAULT_SETTINGS["undo_enabled"], True)
    data["undo_enabled"] = "true" if _as_bool(data["undo_enabled"], default_undo) else "false"
    return data


def load_settings():
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except (OSError, configparser.Error, UnicodeDecodeError) as e:
        logger.warning("failed to read settings from %s, using defaults: %s", SETTINGS_PATH, e)
        return dict(DEFAULT_SETTINGS)
    if SECTION not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {
        "undo_enabled": parser[SECTION].get("undo_enabled", DEFAULT_SETTINGS["undo_enabled"]),
    }
    return _sanitize(raw)


def save_settings(settings) -> bool:
    data = _sanitize(settings)
    parser = configparser.ConfigParser(interpolation=None)
    parser[SECTION] = data
    try:
        SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        with SETTINGS_PATH.open("w", encoding="utf-8") as f:
            parser.write(f)
    except OSError as e:
        logger.warning("unable to persist settings to %s: %s", SETTINGS_PATH, e)
        return False
    return True


def load_undo_enabled() -> bool:
    return _as_bool(load_settings()["undo_enabled"], True)


def save_undo_enabled(enabled: bool) -> bool:
    settings = load_settings()
    settings["undo_enabled"] = "true" if enabled else "false"
    return save_settings(settings)
