"""
Reporter interface shared by the platform and local backends.

The sync pipeline only talks to a ``Reporter``; which backend renders the
events is decided once at startup.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager


class Reporter(ABC):
    """
    Uniform logging and grouping API.

    Example:
        >>> with reporter.group("Fetching changes"):
        ...     reporter.log("git fetch upstream --depth=1")
    """

    @abstractmethod
    def log(self, message: str) -> None:
        """Emit a debug-level line."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Emit an informational line."""

    @abstractmethod
    def warning(self, message: str) -> None:
        """Emit a warning."""

    @abstractmethod
    def error(self, message: str) -> None:
        """
        Emit an error.

        Only emits; the process keeps running. The CLI is the only caller
        and raises ``typer.Exit`` right after reporting, in both modes.
        """

    @abstractmethod
    def group_start(self, title: str) -> None:
        """Open a (collapsible or indented) section."""

    @abstractmethod
    def group_end(self) -> None:
        """Close the innermost open section."""

    def mask(self, secret: str) -> None:
        """Register a value that must never appear in rendered output."""

    def banner(self) -> None:
        """Emit whatever precedes the first event of a run."""

    @contextmanager
    def group(self, title: str) -> Iterator[None]:
        """
        Wrap a block in a section.

        The section is closed on success only; an exception propagates to
        the caller with the group still open so the error is rendered inside
        it, matching how a failed step is shown.
        """
        self.group_start(title)
        yield
        self.group_end()
