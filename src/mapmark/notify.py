"""User-facing notification hook for repository operations.

The repository reports the outcome of every operation through a
:class:`Notifier`; front ends decide how to render it.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from rich.console import Console
from rich.markup import escape

logger = logging.getLogger(__name__)


class Notifier(ABC):
    """Observer for transient success/failure messages."""

    @abstractmethod
    def success(self, message: str) -> None:
        """An operation completed."""
        ...  # pragma: no cover

    @abstractmethod
    def error(self, message: str) -> None:
        """An operation failed; *message* carries the reason."""
        ...  # pragma: no cover


class NullNotifier(Notifier):
    """No-op implementation used when no feedback is requested."""

    def success(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass


class LoggingNotifier(Notifier):
    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.error(message)


class RichNotifier(Notifier):
    """Short coloured status lines on the terminal."""

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console(stderr=True)

    def success(self, message: str) -> None:
        self._console.print(f"[green]✓[/green] {escape(message)}", highlight=False)

    def error(self, message: str) -> None:
        self._console.print(f"[red]✗[/red] {escape(message)}", highlight=False)
