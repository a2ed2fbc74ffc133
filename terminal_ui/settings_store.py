import configparser
from pathlib import Path

from terminal_ui.ui_config import DIFFICULTY_ORDER

SETTINGS_PATH = Path(__file__).with_name("settings.ini")

DEFAULT_SETTINGS = {
    "difficulty": "Easy",
    "music": "on",
    "sound_fx": "on",
    "seed": "",
}


def _sanitize(settings):
    data = dict(DEFAULT_SETTINGS)
    data.update({k: v for k, v in settings.items() if k in DEFAULT_SETTINGS})

    if data["difficulty"] not in DIFFICULTY_ORDER:
        data["difficulty"] = DEFAULT_SETTINGS["difficulty"]

    for key in ("music", "sound_fx"):
        value = str(data[key]).strip().lower()
        data[key] = "off" if value in ("off", "0", "false", "no") else "on"

    raw_seed = str(data["seed"]).strip()
    try:
        data["seed"] = str(int(raw_seed)) if raw_seed else ""
    except Exception:
        data["seed"] = ""
    return data


def sound_enabled(settings) -> bool:
    return _sanitize(settings)["sound_fx"] == "on"


def music_enabled(settings) -> bool:
    return _sanitize(settings)["music"] == "on"


def seed_of(settings):
    raw = _sanitize(settings)["seed"]
    return int(raw) if raw else None


def load_settings():
    parser = configparser.ConfigParser()
    if not SETTINGS_PATH.exists():
        return dict(DEFAULT_SETTINGS)
    try:
        parser.read(SETTINGS_PATH, encoding="utf-8")
    except Exception:
        return dict(DEFAULT_SETTINGS)
    if "game" not in parser:
        return dict(DEFAULT_SETTINGS)
    raw = {key: parser["game"].get(key, default) for key, default in DEFAULT_SETTINGS.items()}
    return _sanitize(raw)


def save_settings(settings):
    data = _sanitize(settings)
    parser = configparser.ConfigParser()
    parser["game"] = data
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    with SETTINGS_PATH.open("w", encoding="utf-8") as f:
        parser.write(f)
