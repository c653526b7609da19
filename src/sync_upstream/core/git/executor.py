"""
Git command executors.

The sync pipeline drives git through a ``GitExecutor``. ``LiveGitExecutor``
runs commands with GitPython; ``DryRunGitExecutor`` runs read-only queries
but only reports the commands that would change the repository or its
remotes.
"""

from __future__ import annotations

import logging
import shlex
from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

from git import GitCommandError, InvalidGitRepositoryError, NoSuchPathError, Repo

from sync_upstream.core.reporting import Reporter

logger = logging.getLogger(__name__)

REDACTED = "***"


class GitError(Exception):
    """Exception raised when a git operation fails."""

    def __init__(self, message: str, command: list[str] | None = None, stderr: str = ""):
        super().__init__(message)
        self.command = command
        self.stderr = stderr


class GitExecutor(ABC):
    """
    Version-control capability used by the sync pipeline.

    Subclasses decide how a command is carried out through ``_run``
    (commands that mutate the repository, its configuration or remotes, and
    commit resolution) and ``_query`` (read-only inspection).

    Example:
        >>> executor = LiveGitExecutor(Path("."))
        >>> executor.is_valid_repo()
        True
        >>> executor.get_current_branch()
        'feature-x'
    """

    def __init__(self, repo_path: Path | None = None, secrets: Iterable[str] = ()) -> None:
        self.repo_path = (repo_path or Path.cwd()).resolve()
        self._secrets: set[str] = {s for s in secrets if s}
        self._repo: Repo | None = None

    def add_secret(self, secret: str) -> None:
        """Register a value to redact from rendered commands and errors."""
        if secret:
            self._secrets.add(secret)

    def redact(self, text: str) -> str:
        for secret in self._secrets:
            text = text.replace(secret, REDACTED)
        return text

    def render(self, args: list[str]) -> str:
        """Render a git command for display with secrets redacted."""
        return self.redact(shlex.join(["git", *args]))

    @property
    def repo(self) -> Repo:
        """Repository handle, opened on first use."""
        if self._repo is None:
            try:
                self._repo = Repo(self.repo_path)
            except (InvalidGitRepositoryError, NoSuchPathError) as e:
                raise GitError(f"Not a git repository: {self.repo_path}") from e
        return self._repo

    def _execute(self, args: list[str]) -> str:
        """Run git for real and return its stdout."""
        cmd = ["git", *args]
        logger.debug("Running git command: %s", self.render(args))
        try:
            return str(self.repo.git.execute(cmd))
        except GitCommandError as e:
            # GitCommandError carries the unredacted command line; don't chain it.
            stderr = self.redact(str(e.stderr or "").strip())
            raise GitError(
                f"Git command failed: {self.render(args)}",
                command=[self.redact(part) for part in cmd],
                stderr=stderr,
            ) from None

    @abstractmethod
    def _run(self, args: list[str]) -> str:
        """Carry out a command that is simulated in dry-run mode."""

    def _query(self, args: list[str]) -> str:
        return self._execute(args)

    def is_valid_repo(self) -> bool:
        """Whether the directory is the root of a git working tree."""
        if not (self.repo_path / ".git").exists():
            return False
        try:
            return self._query(["rev-parse", "--is-inside-work-tree"]).strip() == "true"
        except GitError:
            return False

    def get_current_branch(self) -> str:
        """Name of the checked-out branch, or "" for a detached HEAD."""
        branch = self._query(["rev-parse", "--abbrev-ref", "HEAD"]).strip()
        return "" if branch == "HEAD" else branch

    def config_identity(self, name: str, email: str) -> None:
        """Set the global committer identity."""
        self._run(["config", "--global", "user.email", email])
        self._run(["config", "--global", "user.name", name])

    def set_remote_url(self, remote: str, url: str) -> None:
        self._run(["remote", "set-url", remote, url])

    def checkout(self, branch: str) -> None:
        self._run(["checkout", branch])

    def add_remote(self, name: str, url: str) -> None:
        self._run(["remote", "add", name, url])

    def fetch(self, remote: str, depth: int | None = None) -> None:
        """
        Fetch from a remote.

        Args:
            remote: Remote name
            depth: Commits of history to fetch; None or 0 fetches everything
        """
        args = ["fetch", remote]
        if depth:
            args.append(f"--depth={depth}")
        self._run(args)

    def resolve_commit(self, ref: str) -> str:
        """Resolve a ref to the full SHA of the commit it points at."""
        return self._run(["rev-parse", "--verify", f"{ref}^{{commit}}"]).strip()

    def reset_hard(self, ref: str) -> None:
        self._run(["reset", "--hard", ref])

    def push_force(self, remote: str, branch: str) -> None:
        self._run(["push", remote, branch, "--force"])


class LiveGitExecutor(GitExecutor):
    """Executor that runs every command."""

    def _run(self, args: list[str]) -> str:
        return self._execute(args)


class DryRunGitExecutor(GitExecutor):
    """
    Executor for local simulation.

    Queries still run so the branch can be resolved from the real checkout,
    everything else is printed with a ``(simulated)`` marker.
    """

    SIMULATED_SUFFIX = "(simulated)"

    def __init__(
        self,
        reporter: Reporter,
        repo_path: Path | None = None,
        secrets: Iterable[str] = (),
    ) -> None:
        super().__init__(repo_path, secrets)
        self.reporter = reporter
        self.simulated: list[list[str]] = []

    def _run(self, args: list[str]) -> str:
        self.simulated.append(list(args))
        self.reporter.log(f"{self.render(args)} {self.SIMULATED_SUFFIX}")
        return ""

    def resolve_commit(self, ref: str) -> str:
        # Simulated remotes were never fetched, so there is nothing to resolve.
        super().resolve_commit(ref)
        return f"<simulated {ref}>"
