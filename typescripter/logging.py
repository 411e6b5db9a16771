"""Run logging for typescripter.

Every component logs under the ``typescripter`` logger: the loader reports
files it skips, the scanner and expander report unreadable modules and types,
and the orchestrator reports progress and timing. The CLI calls
:func:`configure_logging` once per run; ``-v`` lowers the level to DEBUG and
``--log-file`` adds a timestamped copy of the run log.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "typescripter"
CONSOLE_FORMAT = "[typescripter] %(levelname)s %(message)s"
FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``typescripter.<name>``, e.g. ``get_logger("graph.scanner")``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(*, verbose: bool = False, log_file: Path | None = None) -> logging.Logger:
    """Route typescripter records to stderr, and to ``log_file`` when given.

    Handlers from an earlier call are replaced, so running ``main`` repeatedly in
    one process prints each record once.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.addHandler(_handler(logging.StreamHandler(), level, CONSOLE_FORMAT))
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(_handler(logging.FileHandler(log_file, encoding="utf-8"), level, FILE_FORMAT))
    return logger


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


__all__ = ["configure_logging", "get_logger"]
