"""
Configuration data models for sync-upstream.

``RuntimeEnvironment`` captures what the hosting platform provides,
``SyncInputs`` the raw invocation parameters and ``SyncConfig`` the
validated result the pipeline executes against.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, SecretStr

from sync_upstream.core.github import DEFAULT_SERVER_URL, RepoInfo

DEFAULT_PROTECTED_BRANCHES = "master,main,production"
DEFAULT_FETCH_DEPTH = 1
FULL_HISTORY_DEPTH = 0


def parse_protected_branches(raw: str | None) -> frozenset[str]:
    """
    Parse the comma-separated protected-branches input.

    Matching is exact: entries are neither trimmed nor case folded, so
    ``"main, dev"`` protects ``"main"`` and ``" dev"``.

    Args:
        raw: Input value; None means the input was not supplied

    Returns:
        Set of protected branch names (empty when raw is an empty string)
    """
    if raw is None:
        raw = DEFAULT_PROTECTED_BRANCHES
    if raw == "":
        return frozenset()
    return frozenset(name for name in raw.split(",") if name)


def parse_fetch_depth(raw: str | None) -> int:
    """
    Parse the fetch-depth input.

    Args:
        raw: Input value; None or empty means the default depth

    Returns:
        Number of commits to fetch, 0 for the complete history

    Raises:
        ValueError: If the value is not a non-negative integer
    """
    if raw is None or raw == "":
        return DEFAULT_FETCH_DEPTH

    value = raw.strip()
    if not (value.isascii() and value.isdigit()):
        raise ValueError(f"'{raw}' is not a non-negative integer")
    return int(value)


def _flag(value: str | None) -> bool:
    return value == "true"


class RuntimeEnvironment(BaseModel):
    """
    Values supplied by the hosting context.

    Read once at startup. In GitHub Actions ``CI`` is ``true`` and the
    runner exports the ``GITHUB_*`` variables; anywhere else the tool runs
    in local simulation mode.
    """

    model_config = ConfigDict(frozen=True)

    ci: bool = Field(default=False, description="Running inside the automation platform")
    debug: bool = Field(default=False, description="Verbose tracing requested")
    github_repository: str | None = Field(
        default=None,
        description="Repository identity (owner/repo) of the checked-out repository",
    )
    github_output: Path | None = Field(
        default=None,
        description="File the platform reads step outputs from",
    )
    github_server_url: str = Field(
        default=DEFAULT_SERVER_URL,
        description="Base URL of the GitHub server",
    )

    @property
    def platform_mode(self) -> bool:
        """Whether platform annotations and live git execution are used."""
        return self.ci

    @property
    def debug_enabled(self) -> bool:
        """Debug tracing only applies to local runs."""
        return self.debug and not self.ci

    @classmethod
    def from_environ(cls, environ: Mapping[str, str] | None = None) -> RuntimeEnvironment:
        """Build the runtime environment from a mapping (defaults to os.environ)."""
        if environ is None:
            environ = os.environ

        output = environ.get("GITHUB_OUTPUT")
        return cls(
            ci=_flag(environ.get("CI")),
            debug=_flag(environ.get("DEBUG")),
            github_repository=environ.get("GITHUB_REPOSITORY") or None,
            github_output=Path(output) if output else None,
            github_server_url=environ.get("GITHUB_SERVER_URL") or DEFAULT_SERVER_URL,
        )


class SyncInputs(BaseModel):
    """
    Raw invocation parameters, in the order the action passes them.

    None means "not supplied"; an empty string means "supplied but empty",
    which matters for ``protected_branches``.
    """

    branch: str | None = None
    upstream_repo: str | None = None
    protected_branches: str | None = None
    repo_token: str | None = Field(default=None, repr=False)
    fetch_depth: str | None = None


class SyncConfig(BaseModel):
    """Validated configuration for a single sync run."""

    model_config = ConfigDict(frozen=True)

    branch: str = Field(..., min_length=1, description="Branch to overwrite")
    upstream: RepoInfo = Field(..., description="Repository to copy the branch from")
    origin: RepoInfo = Field(..., description="Repository pushed to")
    protected_branches: frozenset[str] = Field(
        default_factory=frozenset,
        description="Branches that must never be overwritten",
    )
    repo_token: SecretStr = Field(..., description="Token with push access to origin")
    fetch_depth: int = Field(
        default=DEFAULT_FETCH_DEPTH,
        ge=FULL_HISTORY_DEPTH,
        description="Commits to fetch from upstream (0 for full history)",
    )
    server_url: str = Field(default=DEFAULT_SERVER_URL, description="GitHub server base URL")

    @property
    def full_history(self) -> bool:
        return self.fetch_depth == FULL_HISTORY_DEPTH

    @property
    def upstream_ref(self) -> str:
        """Remote-tracking ref of the branch on the upstream remote."""
        return f"upstream/{self.branch}"
