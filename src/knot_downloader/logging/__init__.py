from __future__ import annotations

import logging
import sys

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

PACKAGE_LOGGER = "knot_downloader"

_LEVELS = {
    "error": logging.ERROR,
    "warn": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE,
}

_LABELS = {
    logging.CRITICAL: "ERROR",
    logging.ERROR: "ERROR",
    logging.WARNING: "WARN",
    logging.INFO: "INFO",
    logging.DEBUG: "DEBUG",
    TRACE: "TRACE",
}

RESET = "\033[0m"
RED = "\033[31m"
GREEN = "\033[32m"
YELLOW = "\033[33m"
BRIGHT_BLACK = "\033[90m"

_LEVEL_COLORS = {
    "ERROR": RED,
    "WARN": YELLOW,
    "INFO": GREEN,
    "DEBUG": BRIGHT_BLACK,
}


def colorize(text: str, color: str, *, enabled: bool) -> str:
    if not enabled:
        return text
    return f"{color}{text}{RESET}"


class LevelFormatter(logging.Formatter):
    """Formats records as `<timestamp> <LEVEL> <message>` with optional level colours."""

    def __init__(self, *, color: bool) -> None:
        super().__init__(fmt="%(asctime)s %(levellabel)s %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        self._color = color

    def format(self, record: logging.LogRecord) -> str:
        label = _LABELS.get(record.levelno, record.levelname)
        padded = f"{label:<5}"
        color = _LEVEL_COLORS.get(label)
        record.levellabel = colorize(padded, color, enabled=self._color) if color else padded
        return super().format(record)


def resolve_level(name: str) -> int:
    level = _LEVELS.get(name.strip().lower())
    if level is None:
        raise ValueError(f"Invalid logging level: {name}")
    return level


def init_logging(level_name: str, *, color: bool = True, stream=None) -> None:
    """
    Initialize application logging.

    Only records from the knot_downloader logger hierarchy are emitted, so library
    loggers (aiohttp, asyncio) stay quiet regardless of the configured level.
    """

    level = resolve_level(level_name)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)

    stream_handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    stream_handler.setLevel(level)
    stream_handler.setFormatter(LevelFormatter(color=color))
    stream_handler.addFilter(logging.Filter(PACKAGE_LOGGER))
    root_logger.addHandler(stream_handler)


__all__ = ["BRIGHT_BLACK", "GREEN", "RED", "TRACE", "YELLOW", "colorize", "init_logging", "resolve_level"]
