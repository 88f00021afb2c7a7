"""
User-facing notification sinks.
"""

import logging
from abc import ABC, abstractmethod

from tartil._logging import get_logger
from tartil.models import Severity

_LEVELS = {
    Severity.INFO: logging.INFO,
    Severity.SUCCESS: logging.INFO,
    Severity.WARNING: logging.WARNING,
    Severity.ERROR: logging.ERROR,
}


class NotificationSink(ABC):
    """Receives status and error messages meant for the user."""

    @abstractmethod
    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        """Deliver a message. Fire-and-forget; must not raise."""
        pass


class LoggingNotificationSink(NotificationSink):
    """Writes notifications to the ``tartil.notifications`` logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or get_logger("tartil.notifications")

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.logger.log(_LEVELS.get(Severity(severity), logging.INFO), message)


class RecordingNotificationSink(NotificationSink):
    """Keeps every notification in memory, oldest first."""

    def __init__(self) -> None:
        self.messages: list[tuple[str, Severity]] = []

    def notify(self, message: str, severity: Severity = Severity.INFO) -> None:
        self.messages.append((message, Severity(severity)))

    def of_severity(self, severity: Severity) -> list[str]:
        return [m for m, s in self.messages if s == severity]

    def clear(self) -> None:
        self.messages.clear()
