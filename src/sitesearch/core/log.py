"""Grouped, leveled logging collaborator built on stdlib logging"""

from __future__ import annotations

import logging
import sys
import time
from typing import Any


LEVELS: dict[str, int] = {
    "info":    logging.INFO,
    "success": logging.INFO,
    "warning": logging.WARNING,
    "error":   logging.ERROR,
}

_handler: logging.Handler | None = None


def setup_logging(level: str | int = "INFO") -> logging.Logger:
    """Attach a stderr handler to the `sitesearch` logger and set its level.

    Calling again replaces the handler, binding it to the current sys.stderr.
    """
    global _handler
    logger = logging.getLogger("sitesearch")
    logger.setLevel(level if isinstance(level, int) else getattr(logging, str(level).upper(), logging.INFO))
    if _handler is not None:
        logger.removeHandler(_handler)
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    logger.addHandler(_handler)
    return logger


class GroupLogger:
    """Leveled messages grouped under timed titles.

    Constructed explicitly and handed to the aggregator and the client engine.
    Logging never affects control flow.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("sitesearch")
        self._group: str | None = None
        self._started: float | None = None

    @property
    def current_group(self) -> str | None:
        return self._group

    def start_group(self, title: str) -> None:
        if self._group:
            self.end_group()
        self._group = title
        self._started = time.perf_counter()
        self.logger.info("-- %s", title)

    def end_group(self) -> None:
        if not self._group:
            return
        elapsed_ms = (time.perf_counter() - self._started) * 1000
        self.logger.info("-- %s done (%.2fms)", self._group, elapsed_ms)
        self._group = None
        self._started = None

    def log(self, message: str, level: str = "info") -> None:
        self.logger.log(LEVELS.get(level, logging.INFO), message)

    def log_summary(self, title: str, data: dict[str, Any]) -> None:
        lines = [f"{title}:"] + [f"  {key}: {value}" for key, value in data.items()]
        self.logger.info("\n".join(lines))
