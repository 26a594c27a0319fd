import json
import logging
import os

HOME = os.path.expanduser("~")
XDG_CONFIG_HOME = os.environ.get("XDG_CONFIG_HOME")
CONFIG_HOME = XDG_CONFIG_HOME if XDG_CONFIG_HOME else os.path.join(HOME, ".config")
CONFIG_DIR = os.path.join(CONFIG_HOME, "parqview")
CONFIG_JSON = os.path.join(CONFIG_DIR, "config.json")
LOG_PATH = os.path.join(CONFIG_DIR, "parqview.log")

# default settings
PREVIEW_ROWS_DEFAULT = 20
SCROLL_STEP_DEFAULT = 3
LOG_LEVEL_DEFAULT = "INFO"

_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def ensure_config_dirs():
    os.makedirs(CONFIG_DIR, exist_ok=True)


def _int_setting(value, minimum):
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    if value < minimum:
        return None
    return value


def load_config():
    cfg = {
        "PREVIEW_ROWS": PREVIEW_ROWS_DEFAULT,
        "SCROLL_STEP": SCROLL_STEP_DEFAULT,
        "LOG_LEVEL": LOG_LEVEL_DEFAULT,
    }

    if not os.path.exists(CONFIG_JSON):
        return cfg

    try:
        with open(CONFIG_JSON, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as exc:
        logging.getLogger(__name__).warning(
            "ignoring unreadable config %s: %s", CONFIG_JSON, exc
        )
        return cfg

    if not isinstance(data, dict):
        return cfg

    preview_rows = _int_setting(data.get("preview_rows"), 0)
    if preview_rows is not None:
        cfg["PREVIEW_ROWS"] = preview_rows

    scroll_step = _int_setting(data.get("scroll_step"), 1)
    if scroll_step is not None:
        cfg["SCROLL_STEP"] = scroll_step

    level = data.get("log_level")
    if isinstance(level, str) and level.upper() in _LOG_LEVELS:
        cfg["LOG_LEVEL"] = level.upper()

    return cfg
