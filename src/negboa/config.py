"""Defines basic config for negboa"""
from __future__ import annotations

import json
import warnings
from os import environ
from pathlib import Path

__all__ = [
    "NEGBOA_CONFIG",
    "CONFIG_KEY_MAX_DELAY",
    "CONFIG_KEY_LOG_FILE",
    "CONFIG_KEY_LOG_LEVEL",
    "negboa_config",
]

LOCAL_NEGBOA_CONFIG_FILENAME = "negboaconf.json"

NEGBOA_DEFAULT_PATH = Path(
    environ.get("NEGBOA_DEFAULT_PATH", Path.home() / "negboa" / "config.json")
)
"""Default path for negboa configurations"""

CONFIG_KEY_MAX_DELAY = "max_delay"
"""Key name for the longest pause (in seconds) any offering policy may take"""

CONFIG_KEY_LOG_FILE = "log_file"
"""Key name for the file session logs are written to (None for screen only)"""

CONFIG_KEY_LOG_LEVEL = "log_level"
"""Key name for the minimum level of log messages shown on screen"""

NEGBOA_CONFIG = {
    CONFIG_KEY_MAX_DELAY: 1.0,
    CONFIG_KEY_LOG_FILE: None,
    CONFIG_KEY_LOG_LEVEL: "WARNING",
}


def _update_from_file(path: Path) -> None:
    if not path.exists():
        return
    try:
        with open(path) as f:
            NEGBOA_CONFIG.update(json.load(f))
    except (OSError, json.JSONDecodeError) as e:
        warnings.warn(f"Cannot read negboa config at {path}: {e}")


# loading config files if any
_update_from_file(Path(NEGBOA_DEFAULT_PATH).expanduser().absolute())
_update_from_file(Path.cwd() / LOCAL_NEGBOA_CONFIG_FILENAME)


def _from_env(key: str, default):
    envkey = "NEGBOA_" + key.upper()
    v = environ.get(envkey, default)
    if key in (CONFIG_KEY_MAX_DELAY,):
        return float(v) if v is not None and v != "" else 0.0
    return v


def negboa_config(key: str, default=None):
    """
    Returns the config value associated with the given key.

    Remarks:
        - config values are read from the following sources (in descending order of priority):
            - Environment variable with the name NEGBOA_{key} (with the key converted to all uppercase)
            - Local file called negboaconf.json (with the key all lowercase)
            - json file stored at the location indicated by environment variable "NEGBOA_DEFAULT_PATH" (with the key all lowercase)
            - ~/negboa/config.json (with the key all lowercase)
            - A default value hardcoded in the negboa library.
    """
    return _from_env(key, NEGBOA_CONFIG.get(key.lower(), default))
