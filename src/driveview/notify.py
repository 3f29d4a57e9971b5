"""User-visible notifications (toasts) emitted by the dashboard."""

from __future__ import annotations

import logging
from typing import Literal, Protocol

Level = Literal["success", "info", "error"]

_LOG_LEVELS: dict[str, int] = {
    "success": logging.INFO,
    "info": logging.INFO,
    "error": logging.WARNING,
}


class Notifier(Protocol):
    def notify(self, level: Level, message: str) -> None: ...


class LoggingNotifier:
    """Default notifier: forwards notifications to the `driveview.notify` logger."""

    def __init__(self, logger_name: str = "driveview.notify") -> None:
        self._logger = logging.getLogger(logger_name)

    def notify(self, level: Level, message: str) -> None:
        self._logger.log(_LOG_LEVELS.get(level, logging.INFO), "%s", message)


class RecordingNotifier:
    """Keeps notifications in memory (handy for embedding UIs and tests)."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, str]] = []

    def notify(self, level: Level, message: str) -> None:
        self.messages.append((level, message))

    def of_level(self, level: Level) -> list[str]:
        return [m for lvl, m in self.messages if lvl == level]
