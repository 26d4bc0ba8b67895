"""
Logging utilities shared by negotiation sessions and agents.

Every session logs through a named logger created once by `create_loggers`.
Screen output is colored with `colorlog` when stderr is a terminal.
"""
from __future__ import annotations

import datetime
import logging
import os
import sys

import colorlog

from negboa.config import CONFIG_KEY_LOG_FILE, CONFIG_KEY_LOG_LEVEL, negboa_config

__all__ = [
    "create_loggers",
    "session_logger",
    "log_level",
]

LOGS_BASE_DIR = "./logs"

DEFAULT_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"

LOG_COLORS = {
    "DEBUG": "magenta",
    "INFO": "green",
    "WARNING": "yellow",
    "ERROR": "red",
    "CRITICAL": "bold_red",
}

_log_files: dict[str, str] = dict()


def log_level(level: int | str | None, default: int = logging.WARNING) -> int:
    """Converts a level name (e.g. "DEBUG") or number to a logging level."""
    if level is None:
        return default
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else default


def _screen_handler(level: int, format_str: str, colored: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(level)
    if colored and os.isatty(2):
        handler.setFormatter(
            colorlog.ColoredFormatter(
                "%(log_color)s" + format_str, "%Y-%m-%d %H:%M:%S", log_colors=LOG_COLORS
            )
        )
    else:
        handler.setFormatter(logging.Formatter(format_str))
    return handler


def _log_file_name(module_name: str, file_name: str) -> str:
    # an empty name means a time-stamped file per module under LOGS_BASE_DIR
    if file_name:
        return file_name
    if module_name not in _log_files:
        stamp = datetime.datetime.now().strftime("%Y%m%d-%H%M%S")
        _log_files[module_name] = f"{LOGS_BASE_DIR}/{module_name}_{stamp}.txt"
    return _log_files[module_name]


def _file_handler(file_name: str, level: int, format_str: str) -> logging.Handler:
    dirname = os.path.dirname(file_name)
    if dirname:
        os.makedirs(dirname, exist_ok=True)
    handler = logging.FileHandler(file_name)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(format_str))
    return handler


def create_loggers(
    file_name: str | None = None,
    module_name: str | None = None,
    screen_level: int | None = logging.WARNING,
    file_level: int | None = logging.DEBUG,
    format_str: str = DEFAULT_FORMAT,
    colored: bool = True,
) -> logging.Logger:
    """
    Create a logger that reports to the screen and (optionally) to a file.

    Args:
        file_name: The file to write the logs to. If None only the screen is
                   used. If empty, a time-stamped file under `./logs` is used.
        module_name: The logger name ("negboa" if not given).
        screen_level: Level of the screen handler (None to disable).
        file_level: Level of the file handler (None to disable).
        format_str: The format of logged records.
        colored: Try to color screen output.

    Remarks:
        - Calling this function again with the same `module_name` returns the
          logger created the first time, ignoring the other arguments.
        - The logger does not propagate to the root logger. A logger with no
          handler gets a `NullHandler`.
    """
    logger = logging.getLogger(module_name if module_name else "negboa")
    if logger.handlers:
        return logger
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    if screen_level is not None:
        logger.addHandler(_screen_handler(screen_level, format_str, colored))
    if file_name is not None and file_level is not None:
        path = _log_file_name(logger.name, str(file_name))
        logger.addHandler(_file_handler(path, file_level, format_str))
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


def session_logger(module_name: str = "negboa.session") -> logging.Logger:
    """The logger used by sessions that are not given one (configured by `log_file` and `log_level`)."""
    return create_loggers(
        file_name=negboa_config(CONFIG_KEY_LOG_FILE, None),
        module_name=module_name,
        screen_level=log_level(negboa_config(CONFIG_KEY_LOG_LEVEL, None)),
    )
