"""Logging setup shared by the aquin CLI and service."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

_LOGGER_NAME = "aquin"
_CONSOLE_FORMAT = "[aquin] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``aquin.<name>``, or the package logger itself."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def _file_handler(log_file: Union[str, Path]) -> logging.FileHandler:
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


def configure_logging(
    *, verbose: bool = False, log_file: Union[str, Path, None] = None
) -> logging.Logger:
    """Route aquin records to stderr and, when ``log_file`` is set, to a file.

    Calling this again replaces the previous handlers, which lets the CLI
    attach the file sink named in ``.aquin.yml`` once the config is loaded.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    logger.addHandler(console)
    if log_file is not None:
        logger.addHandler(_file_handler(log_file))

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


__all__ = ["configure_logging", "get_logger"]
