"""
Standardized error handling and exit codes for the sync-upstream CLI.

Maps pipeline exceptions onto exit codes and renders them through the
active reporter so failures show up as annotations in GitHub Actions and
inline in local runs.
"""

from enum import IntEnum

from sync_upstream.core.reporting import Reporter
from sync_upstream.core.sync import (
    EnvironmentSetupError,
    InputError,
    OperationError,
    ProtectedBranchError,
    SyncError,
)


class ExitCode(IntEnum):
    """Standard exit codes for sync-upstream."""

    SUCCESS = 0
    """Run completed, whether or not the branch had to be synced."""

    GENERAL_ERROR = 1
    """Broken environment or a failed git step."""

    USER_ERROR = 2
    """Invalid invocation parameters or a protected target branch."""

    SIGINT = 130
    """Terminated by SIGINT (Ctrl+C) - Unix standard."""


def exit_code_for(error: SyncError) -> ExitCode:
    """Exit code the process terminates with for a pipeline error."""
    if isinstance(error, (InputError, ProtectedBranchError)):
        return ExitCode.USER_ERROR
    return ExitCode.GENERAL_ERROR


def report_error(reporter: Reporter, error: SyncError) -> None:
    """
    Render a pipeline error.

    Operational errors carry the stderr of the failed git command, which is
    logged at debug level ahead of the error itself.

    Args:
        reporter: Active reporter
        error: The error that stopped the run
    """
    if isinstance(error, OperationError) and error.details:
        reporter.log(error.details)

    if isinstance(error, EnvironmentSetupError):
        reporter.error(f"Setup error: {error}")
    else:
        reporter.error(str(error))


__all__ = [
    "ExitCode",
    "exit_code_for",
    "report_error",
]
