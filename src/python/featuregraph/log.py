# Copyright 2026 Pants project contributors (see CONTRIBUTORS.md).
# Licensed under the Apache License, Version 2.0 (see LICENSE).

from __future__ import annotations

import logging
import sys
from enum import Enum
from functools import total_ordering

# A custom log level for per-coordinate trace logging.
TRACE = 5

logging.addLevelName(TRACE, "TRACE")

_ROOT_LOGGER_NAME = "featuregraph"
_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@total_ordering
class LogLevel(Enum):
    """The `logging` module's levels, with the addition of TRACE.

    Ordering follows verbosity: TRACE < DEBUG < INFO < WARN < ERROR.
    """

    TRACE = ("trace", TRACE)
    DEBUG = ("debug", logging.DEBUG)
    INFO = ("info", logging.INFO)
    WARN = ("warn", logging.WARN)
    ERROR = ("error", logging.ERROR)

    _level: int

    def __new__(cls, value: str, level: int) -> LogLevel:
        member: LogLevel = object.__new__(cls)
        member._value_ = value
        member._level = level
        return member

    @property
    def level(self) -> int:
        return self._level

    def log(self, logger: logging.Logger, *args, **kwargs) -> None:
        logger.log(self._level, *args, **kwargs)

    def set_level_for(self, logger: logging.Logger) -> None:
        logger.setLevel(self.level)

    def __lt__(self, other):
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self._level < other._level


def setup_logging(level: LogLevel = LogLevel.INFO) -> logging.Logger:
    """Route `featuregraph` logging to stderr at the given level.

    Calling this more than once only adjusts the level.
    """
    logger = logging.getLogger(_ROOT_LOGGER_NAME)
    level.set_level_for(logger)
    if not any(getattr(h, "_featuregraph", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        handler._featuregraph = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
    return logger
