"""
Dual-mode reporting.

``PlatformReporter`` renders GitHub Actions workflow commands;
``LocalReporter`` prints indented, human-readable lines. The backend is
picked once from the runtime environment.

Example:
    >>> from sync_upstream.core.reporting import create_reporter
    >>> reporter = create_reporter(RuntimeEnvironment.from_environ())
    >>> with reporter.group("Validating environment and input parameters"):
    ...     reporter.log("ok")
"""

from rich.console import Console

from sync_upstream.core.config import RuntimeEnvironment

from .base import Reporter
from .local import LocalReporter
from .outputs import LocalOutputFile, OutputFile
from .platform import PlatformReporter


def create_reporter(env: RuntimeEnvironment, console: Console | None = None) -> Reporter:
    """Select the reporter backend for this run."""
    if env.platform_mode:
        return PlatformReporter()
    return LocalReporter(console=console, debug=env.debug_enabled)


def create_output_file(
    env: RuntimeEnvironment,
    reporter: Reporter,
    console: Console | None = None,
) -> OutputFile:
    """Select where step outputs are written for this run."""
    if env.platform_mode:
        return OutputFile(env.github_output, reporter=reporter)
    return LocalOutputFile(console=console)


__all__ = [
    "LocalOutputFile",
    "LocalReporter",
    "OutputFile",
    "PlatformReporter",
    "Reporter",
    "create_output_file",
    "create_reporter",
]
