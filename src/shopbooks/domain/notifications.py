"""Notification sink for user-facing success and error messages."""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from enum import Enum
from typing import Iterator

from shopbooks.domain.errors import DomainError


class Severity(str, Enum):
    """Severity of a user notification."""

    SUCCESS = "success"
    ERROR = "error"


class Notifier(ABC):
    """Receives transient messages meant for the user."""

    @abstractmethod
    def notify(self, title: str, description: str, severity: Severity = Severity.SUCCESS) -> None:
        """Deliver one message."""
        pass

    def success(self, title: str, description: str) -> None:
        self.notify(title, description, Severity.SUCCESS)

    def error(self, title: str, description: str) -> None:
        self.notify(title, description, Severity.ERROR)


class LoggingNotifier(Notifier):
    """Notifier that writes messages to a logger."""

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("shopbooks.notifications")

    def notify(self, title: str, description: str, severity: Severity = Severity.SUCCESS) -> None:
        level = logging.ERROR if severity is Severity.ERROR else logging.INFO
        self.logger.log(level, "%s: %s", title, description)


class NullNotifier(Notifier):
    """Notifier that discards every message."""

    def notify(self, title: str, description: str, severity: Severity = Severity.SUCCESS) -> None:
        pass


@contextmanager
def report_errors(notifier: Notifier, title: str) -> Iterator[None]:
    """Send any domain error raised in the block to the notifier, then re-raise it."""
    try:
        yield
    except DomainError as e:
        notifier.error(title, str(e))
        raise
