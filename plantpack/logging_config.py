"""
Logging Configuration
Wires the 'plantpack' logger to the terminal (and optionally a file) for CLI runs.

stdout carries the JSON result, so every log line goes to stderr.
"""
from __future__ import annotations

import logging
import sys

CONSOLE_FORMAT = "plantpack: %(levelname)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """
    Configures the 'plantpack' namespace logger and returns it.

    The console gets short ``plantpack: LEVEL: message`` lines.  With
    *log_file*, the same records are also written with timestamps and
    the emitting module, overwriting any previous run's log.

    Calling again replaces (and closes) the handlers from the last call.
    """
    logger = logging.getLogger("plantpack")
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
        logger.debug("Logging to %s", log_file)

    return logger
