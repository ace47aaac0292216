"""Persistent settings for the scoring command line.

Stores output preferences in ~/.yahtzee_scoring.json. Flags given on the
command line always win over anything loaded here.
"""

import json
import logging
from pathlib import Path

OUTPUT_FORMATS = ("text", "json")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

DEFAULTS = {
    "format": "text",
    "available_only": False,
    "log_level": "WARNING",
}

logger = logging.getLogger(__name__)


def _default_path():
    """Return the default path for the settings file."""
    return Path.home() / ".yahtzee_scoring.json"


def _is_valid(key, value):
    if key == "format":
        return value in OUTPUT_FORMATS
    if key == "available_only":
        return isinstance(value, bool)
    if key == "log_level":
        return isinstance(value, str) and value.upper() in LOG_LEVELS
    return False


def load_settings(path=None):
    """Load settings from JSON file. Returns DEFAULTS on missing/corrupt.

    Known keys with a valid value override DEFAULTS; invalid values fall
    back to the default for that key. Unknown keys are ignored.
    """
    path = Path(path) if path is not None else _default_path()
    try:
        data = json.loads(path.read_text())
    except FileNotFoundError:
        return dict(DEFAULTS)
    except (json.JSONDecodeError, OSError):
        logger.warning("Ignoring unreadable settings file %s", path)
        return dict(DEFAULTS)
    if not isinstance(data, dict):
        return dict(DEFAULTS)

    result = dict(DEFAULTS)
    for key in DEFAULTS:
        if key not in data:
            continue
        if _is_valid(key, data[key]):
            result[key] = data[key]
        else:
            logger.warning("Ignoring invalid setting %s=%r", key, data[key])
    if isinstance(result["log_level"], str):
        result["log_level"] = result["log_level"].upper()
    return result


def save_settings(settings, path=None):
    """Write the known keys of settings to JSON. Silently ignores write errors."""
    path = Path(path) if path is not None else _default_path()
    known = {key: settings.get(key, default) for key, default in DEFAULTS.items()}
    try:
        path.write_text(json.dumps(known, indent=2))
    except OSError:
        pass
