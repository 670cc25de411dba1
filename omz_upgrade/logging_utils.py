"""
Logging helpers for omz-upgrade.

Diagnostics go to stderr on the omz_upgrade package logger; the status
output written by the orchestrator goes to stdout and never passes
through here. The root logger is left alone so embedding callers (and
pytest) keep their own handlers.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "omz_upgrade"

PLAIN_FORMAT = "omz-upgrade: %(levelname)s: %(message)s"
DEBUG_FORMAT = "omz-upgrade: %(levelname)s %(name)s: %(message)s"


def _level_for(verbosity: int) -> int:
    if verbosity <= 0:
        return logging.WARNING
    if verbosity == 1:
        return logging.INFO
    return logging.DEBUG


def configure_logging(verbosity: int, stream: Optional[TextIO] = None) -> logging.Logger:
    """
    Attach a stderr handler to the package logger for this verbosity.

    -v shows the per-step progress, -vv adds every git command line and
    the originating module. Calling it again replaces the handler rather
    than stacking another one.
    """

    level = _level_for(verbosity)
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        if getattr(handler, "_omz_upgrade", False):
            logger.removeHandler(handler)
            handler.close()

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT if level == logging.DEBUG else PLAIN_FORMAT))
    handler._omz_upgrade = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger
