"""
Step output files.

GitHub Actions collects step outputs from ``name=value`` lines appended to
the file named by ``GITHUB_OUTPUT``. Local runs write to a temporary file
instead and print it when the run ends.
"""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from types import TracebackType

from rich.console import Console

from .base import Reporter

logger = logging.getLogger(__name__)


class OutputFile:
    """
    Appends step outputs to a file.

    Example:
        >>> with OutputFile(Path(os.environ["GITHUB_OUTPUT"])) as outputs:
        ...     outputs.set_output("synced", "true")
    """

    def __init__(self, path: Path | None, reporter: Reporter | None = None) -> None:
        self.path = path
        self.reporter = reporter

    def set_output(self, name: str, value: str) -> None:
        """Record a single step output."""
        line = f"{name}={value}"
        if self.path is None:
            if self.reporter is not None:
                self.reporter.warning(f"GITHUB_OUTPUT is not set, output not recorded: {line}")
            return

        logger.debug("Writing step output %s to %s", line, self.path)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"{line}\n")

    def close(self) -> None:
        pass

    def __enter__(self) -> OutputFile:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


class LocalOutputFile(OutputFile):
    """
    Temporary output file for local runs.

    On close, whether the run succeeded or not, the collected outputs are
    printed under a ``GITHUB_OUTPUT:`` heading and the file is removed.
    """

    def __init__(self, console: Console | None = None) -> None:
        fd, name = tempfile.mkstemp(prefix="sync-upstream-output-")
        os.close(fd)
        super().__init__(Path(name))
        self.console = console or Console(highlight=False, soft_wrap=True)

    def close(self) -> None:
        if self.path is None:
            return

        path, self.path = self.path, None
        try:
            self.console.print()
            self.console.print("GITHUB_OUTPUT:", markup=False)
            content = path.read_text(encoding="utf-8")
            if content:
                self.console.print(content.rstrip("\n"), markup=False)
        finally:
            path.unlink(missing_ok=True)
