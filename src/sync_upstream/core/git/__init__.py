"""
Git command execution.

Example:
    >>> from sync_upstream.core.git import LiveGitExecutor
    >>> executor = LiveGitExecutor(Path("."))
    >>> executor.fetch("upstream", depth=1)
"""

from .executor import (
    REDACTED,
    DryRunGitExecutor,
    GitError,
    GitExecutor,
    LiveGitExecutor,
)

__all__ = [
    "REDACTED",
    "DryRunGitExecutor",
    "GitError",
    "GitExecutor",
    "LiveGitExecutor",
]
