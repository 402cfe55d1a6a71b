"""Notification sink that writes to the terminal."""

import logging

import click
from shopbooks.domain.notifications import Notifier, Severity

logger = logging.getLogger(__name__)


class ClickNotifier(Notifier):
    """Echo success messages to stdout.

    Errors are printed by the command that catches them, so they are only
    logged here.
    """

    def notify(self, title: str, description: str, severity: Severity = Severity.SUCCESS) -> None:
        if severity is Severity.ERROR:
            logger.debug("%s: %s", title, description)
            return
        click.echo(f"{title}: {description}")
