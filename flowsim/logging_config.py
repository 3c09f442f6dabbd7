"""Logging setup for the simulator and its API.

Three named channels, each with its own file under LOG_DIR:

    engine  -> "flowsim" logger (store, executor, registry: every flowsim.* module)
    sse     -> event stream fan-out
    api     -> HTTP routes and app lifecycle
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Tuple

from .config import LOG_DIR, LOG_LEVEL, LOG_TO_FILE

FILE_FORMAT = "%(asctime)s [%(name)s] [%(levelname)s] %(message)s"
CONSOLE_FORMAT = "%(asctime)s [%(name)s] %(message)s"

# channel -> (logger name, log file)
CHANNELS: Dict[str, Tuple[str, str]] = {
    "engine": ("flowsim", "engine.log"),
    "sse": ("sse", "sse.log"),
    "api": ("api", "api.log"),
}

_configured_loggers: set[str] = set()


def _resolve_level(level: str) -> int:
    resolved = logging.getLevelName(level.upper())
    if not isinstance(resolved, int):
        raise ValueError(f"unknown log level: {level}")
    return resolved


def setup_logger(
    name: str,
    filename: str,
    log_dir: Optional[Path] = None,
    level: str = LOG_LEVEL,
    to_file: bool = LOG_TO_FILE,
) -> logging.Logger:
    """Attach console (and optionally file) handlers to a logger, once.

    Repeated calls for the same name return the already-configured logger
    untouched.
    """
    logger = logging.getLogger(name)
    if name in _configured_loggers:
        return logger

    numeric_level = _resolve_level(level)
    logger.setLevel(numeric_level)
    logger.propagate = False

    if to_file:
        directory = log_dir or LOG_DIR
        directory.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(directory / filename, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    _configured_loggers.add(name)
    return logger


def get_channel_logger(channel: str) -> logging.Logger:
    try:
        name, filename = CHANNELS[channel]
    except KeyError:
        raise ValueError(f"unknown log channel: {channel}") from None
    return setup_logger(name, filename)


def get_engine_logger() -> logging.Logger:
    return get_channel_logger("engine")


def get_sse_logger() -> logging.Logger:
    return get_channel_logger("sse")


def get_api_logger() -> logging.Logger:
    return get_channel_logger("api")
