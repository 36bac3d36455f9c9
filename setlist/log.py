"""
Logging bootstrap.

Handlers are attached only to the root logger; module loggers propagate.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s | [%(levelname)s] | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _level_to_int(level: str | int) -> int:
    if isinstance(level, int):
        return level
    lvl = logging.getLevelName(str(level).upper())
    return lvl if isinstance(lvl, int) else logging.INFO


def _squelch_noisy_loggers() -> None:
    logging.getLogger("googleapiclient.discovery_cache").setLevel(logging.ERROR)
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
    logging.getLogger("google").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def init_logging(level: str | int = "INFO") -> None:
    """
    Initialize logging for the process.

    Safe to call multiple times; the stream handler is replaced, not stacked.
    """
    _squelch_noisy_loggers()

    root = logging.getLogger()
    root.setLevel(_level_to_int(level))

    for h in list(root.handlers):
        if getattr(h, "_setlist_handler", False):
            root.removeHandler(h)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    handler._setlist_handler = True  # type: ignore[attr-defined]
    root.addHandler(handler)
