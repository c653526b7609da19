"""
GitHub Actions reporter.

Renders events as workflow commands that the Actions UI turns into
annotations and collapsible log groups.
"""

from __future__ import annotations

import sys
from typing import TextIO

from .base import Reporter


def _escape_data(value: str) -> str:
    # Workflow command data must not contain raw newlines or percent signs.
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class PlatformReporter(Reporter):
    """Reporter emitting ``::command::message`` lines to stdout."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved lazily so test harnesses that swap sys.stdout see the output.
        return self._stream or sys.stdout

    def _command(self, command: str, message: str = "") -> None:
        self.stream.write(f"::{command}::{_escape_data(message)}\n")
        self.stream.flush()

    def log(self, message: str) -> None:
        self._command("debug", message)

    def info(self, message: str) -> None:
        self._command("notice", message)

    def warning(self, message: str) -> None:
        self._command("warning", message)

    def error(self, message: str) -> None:
        self._command("error", message)

    def group_start(self, title: str) -> None:
        self._command("group", title)

    def group_end(self) -> None:
        self._command("endgroup")

    def mask(self, secret: str) -> None:
        if secret:
            self._command("add-mask", secret)
