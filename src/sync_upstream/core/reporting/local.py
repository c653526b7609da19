"""
Local reporter.

Prints human-readable, indented lines for runs outside the automation
platform.
"""

from __future__ import annotations

from rich.console import Console

from .base import Reporter

INDENT = "  "


class LocalReporter(Reporter):
    """
    Reporter printing indented lines through a rich console.

    Each open group adds one ``INDENT`` to the prefix of subsequent lines.

    Example:
        >>> reporter = LocalReporter()
        >>> reporter.group_start("Checking for changes to sync")
        >>> reporter.info("Changes detected, proceeding with sync.")
        >>> reporter.group_end()
    """

    def __init__(self, console: Console | None = None, debug: bool = False) -> None:
        self.console = console or Console(highlight=False, soft_wrap=True)
        self.debug = debug
        self.indentation = ""

    def _print(self, message: str, style: str | None = None) -> None:
        self.console.print(f"{self.indentation}{message}", style=style, markup=False)

    def log(self, message: str) -> None:
        self._print(message)

    def info(self, message: str) -> None:
        self._print(message)

    def warning(self, message: str) -> None:
        self._print(message, style="yellow")

    def error(self, message: str) -> None:
        self._print(message, style="red")

    def group_start(self, title: str) -> None:
        self._print(title, style="bold")
        self.indentation += INDENT

    def group_end(self) -> None:
        self.indentation = self.indentation.removesuffix(INDENT)
        # Blank separator between groups
        self.console.print()

    def banner(self) -> None:
        self.console.print()
        if self.debug:
            self._print("! DEBUG MODE ENABLED !", style="bold magenta")
