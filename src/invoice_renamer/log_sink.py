"""
Run log sink: a plain callable ``(message, level)`` passed into every step.

Levels are ``info``, ``success`` and ``error``. Sinks only observe; nothing in
the pipeline reads back from them.
"""
from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Callable, Literal, Optional

from .models import LogMessage

LogLevel = Literal["info", "success", "error"]
LogSink = Callable[[str, LogLevel], None]

_LEVELS = {
    "info": logging.INFO,
    "success": logging.INFO,
    "error": logging.ERROR,
}

logger = logging.getLogger("invoice_renamer")


def logging_sink(target: Optional[logging.Logger] = None) -> LogSink:
    """Return a sink that forwards to a stdlib logger."""
    target = target or logger

    def _sink(message: str, level: LogLevel = "info") -> None:
        if level == "success":
            message = f"✓ {message}"
        target.log(_LEVELS.get(level, logging.INFO), message)

    return _sink


def null_sink(message: str, level: LogLevel = "info") -> None:
    return None


class CollectingSink:
    """Keeps every message in order, optionally forwarding to another sink."""

    def __init__(self, forward: Optional[LogSink] = None):
        self.messages: list[LogMessage] = []
        self._forward = forward

    def __call__(self, message: str, level: LogLevel = "info") -> None:
        self.messages.append(LogMessage(message=message, level=level))
        if self._forward is not None:
            self._forward(message, level)

    def errors(self) -> list[LogMessage]:
        return [m for m in self.messages if m.level == "error"]


def setup_logging(log_level: str = "INFO", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure root logging for CLI use.

    Args:
        log_level: Logging level name (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional file to mirror console output into

    Returns:
        The package logger
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )
    return logger
