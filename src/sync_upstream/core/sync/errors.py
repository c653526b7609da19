"""
Exceptions raised by the sync pipeline.

Every failure stops the run. The class tells the caller who has to act:
the workflow setup, the person invoking the action, or nobody (a git step
failed at runtime).
"""

from __future__ import annotations

from sync_upstream.core.git import GitError


class SyncError(Exception):
    """Base exception for sync failures."""

    pass


class EnvironmentSetupError(SyncError):
    """The surrounding setup is broken (no checkout, no repository identity)."""

    pass


class InputError(SyncError):
    """An invocation parameter is missing or invalid."""

    pass


class ProtectedBranchError(SyncError):
    """The target branch is protected and must not be overwritten."""

    def __init__(self, branch: str):
        super().__init__(f"{branch} is a protected branch and cannot be synced!")
        self.branch = branch


class OperationError(SyncError):
    """A git step failed."""

    def __init__(self, message: str, git_error: GitError | None = None):
        super().__init__(message)
        self.git_error = git_error

    @property
    def details(self) -> str:
        """stderr of the failed git command, if any."""
        if self.git_error is None:
            return ""
        return self.git_error.stderr
