"""
Pytest configuration and shared fixtures.

Provides an isolated git/CI environment for every test, real temporary git
repositories, reporters writing to in-memory buffers and a mocked git
executor.
"""

import io
import subprocess
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from rich.console import Console

from sync_upstream.core.config import RuntimeEnvironment, SyncInputs
from sync_upstream.core.git import GitExecutor
from sync_upstream.core.reporting import LocalReporter, OutputFile, PlatformReporter

# ==============================================================================
# Environment Isolation
# ==============================================================================

HOST_VARIABLES = (
    "CI",
    "DEBUG",
    "GITHUB_REPOSITORY",
    "GITHUB_OUTPUT",
    "GITHUB_SERVER_URL",
)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path_factory, monkeypatch):
    """
    Isolate tests from the host's CI variables and git configuration.

    ``git config --global`` writes land in a throwaway file, and commits made
    by fixtures get a fixed identity.
    """
    home = tmp_path_factory.mktemp("home")
    gitconfig = home / ".gitconfig"
    gitconfig.write_text(
        "[user]\n"
        "\tname = Test User\n"
        "\temail = test@example.com\n"
        "[init]\n"
        "\tdefaultBranch = main\n"
    )

    for name in HOST_VARIABLES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(gitconfig))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    return gitconfig


# ==============================================================================
# Git Repository Fixtures
# ==============================================================================


def git(*args: str, cwd: Path) -> str:
    """Run a git command in a test repository and return its stdout."""
    result = subprocess.run(
        ["git", *args],
        cwd=cwd,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout.strip()


def commit_file(repo: Path, name: str, content: str, message: str) -> str:
    """Write a file, commit it and return the new HEAD SHA."""
    (repo / name).write_text(content)
    git("add", name, cwd=repo)
    git("commit", "-m", message, cwd=repo)
    return git("rev-parse", "HEAD", cwd=repo)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one commit on ``feature-x``."""
    repo = tmp_path / "repo"
    repo.mkdir()
    git("init", cwd=repo)
    commit_file(repo, "README.md", "# Test Repo\n", "Initial commit")
    git("checkout", "-b", "feature-x", cwd=repo)
    return repo


# ==============================================================================
# Reporter Fixtures
# ==============================================================================


@pytest.fixture
def local_console() -> Console:
    """Rich console writing to a buffer; read it with ``console.file.getvalue()``."""
    return Console(file=io.StringIO(), highlight=False, soft_wrap=True, color_system=None)


@pytest.fixture
def local_reporter(local_console: Console) -> LocalReporter:
    return LocalReporter(console=local_console)


@pytest.fixture
def platform_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def platform_reporter(platform_stream: io.StringIO) -> PlatformReporter:
    return PlatformReporter(stream=platform_stream)


@pytest.fixture
def output_path(tmp_path: Path) -> Path:
    path = tmp_path / "github_output"
    path.write_text("")
    return path


@pytest.fixture
def outputs(output_path: Path) -> OutputFile:
    return OutputFile(output_path)


# ==============================================================================
# Pipeline Fixtures
# ==============================================================================


@pytest.fixture
def platform_env(output_path: Path) -> RuntimeEnvironment:
    """Runtime environment of a GitHub Actions job."""
    return RuntimeEnvironment(
        ci=True,
        github_repository="me/fork",
        github_output=output_path,
    )


@pytest.fixture
def mock_executor() -> MagicMock:
    """
    Mocked git executor for a valid checkout on ``feature-x``.

    HEAD resolves to ``abc123`` and the upstream tip to ``def456``, so a run
    syncs unless the test changes ``resolve_commit``.
    """
    executor = MagicMock(spec=GitExecutor)
    executor.is_valid_repo.return_value = True
    executor.get_current_branch.return_value = "feature-x"
    executor.resolve_commit.side_effect = lambda ref: "abc123" if ref == "HEAD" else "def456"
    return executor


@pytest.fixture
def sync_inputs() -> SyncInputs:
    return SyncInputs(
        branch="feature-x",
        upstream_repo="org/upstream",
        protected_branches="master,main,production",
        repo_token="ghs_secret",
        fetch_depth="1",
    )
