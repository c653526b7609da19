"""
sync-upstream CLI - Main application entry point.

Force-syncs a branch of the checked-out repository from an upstream
repository. In GitHub Actions (``CI=true``) git commands are executed and
progress is reported as workflow commands; anywhere else the run is a
simulation that prints what would be executed.
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from sync_upstream import __version__
from sync_upstream.cli.errors import ExitCode, exit_code_for, report_error
from sync_upstream.core.config import RuntimeEnvironment, SyncInputs, load_layered_env
from sync_upstream.core.git import DryRunGitExecutor, GitExecutor, LiveGitExecutor
from sync_upstream.core.reporting import Reporter, create_output_file, create_reporter
from sync_upstream.core.sync import SyncError, SyncPipeline

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sync-upstream",
    help="Force sync a branch from an upstream repository",
    no_args_is_help=False,
    add_completion=False,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console(highlight=False, soft_wrap=True)


def setup_logging(debug: bool) -> None:
    """
    Configure logging for the run.

    Args:
        debug: If True, enable DEBUG level logging (git command tracing)
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    # GitPython traces every subprocess at DEBUG, including credentials in URLs.
    logging.getLogger("git").setLevel(logging.WARNING)


def create_executor(env: RuntimeEnvironment, reporter: Reporter, repo_dir: Path) -> GitExecutor:
    """Live git in the automation platform, simulated git everywhere else."""
    if env.platform_mode:
        return LiveGitExecutor(repo_dir)
    return DryRunGitExecutor(reporter, repo_dir)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"sync-upstream version {__version__}")
        raise typer.Exit(ExitCode.SUCCESS)


@app.command()
def main(
    branch: str | None = typer.Argument(
        None,
        help="Branch to sync (defaults to the currently checked out branch)",
        show_default=False,
    ),
    upstream_repo: str | None = typer.Argument(
        None,
        help="Upstream repository in the format owner/repo",
        show_default=False,
    ),
    protected_branches: str | None = typer.Argument(
        None,
        help="Comma-separated branches that must not be synced "
        "(defaults to master,main,production; pass \"\" to protect nothing)",
        show_default=False,
    ),
    repo_token: str | None = typer.Argument(
        None,
        help="GitHub token with push access to the repository",
        show_default=False,
    ),
    fetch_depth: str | None = typer.Argument(
        None,
        help="Number of commits to fetch, 0 for the complete history (defaults to 1)",
        show_default=False,
    ),
    repo_dir: Path | None = typer.Option(
        None,
        "--repo-dir",
        "-C",
        help="Repository checkout to sync (defaults to the current directory)",
        file_okay=False,
    ),
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Force sync BRANCH from the same branch of UPSTREAM_REPO.

    The branch is hard-reset to the upstream tip and force-pushed to origin
    when the two differ. The step output ``synced`` tells whether that
    happened.

    Examples:
        sync-upstream feature-x octo-org/upstream "master,main" "$TOKEN"
        sync-upstream "" octo-org/upstream "" "$TOKEN" 0
        DEBUG=true sync-upstream "" octo-org/upstream   # local simulation
    """
    repo_dir = repo_dir or Path.cwd()

    env = RuntimeEnvironment.from_environ()
    if not env.platform_mode:
        # Precedence: OS env > project .env > user .env
        load_layered_env(project_dir=repo_dir)
        env = RuntimeEnvironment.from_environ()
    setup_logging(env.debug_enabled)

    reporter = create_reporter(env, console=console)
    reporter.banner()
    executor = create_executor(env, reporter, repo_dir)

    inputs = SyncInputs(
        branch=branch,
        upstream_repo=upstream_repo,
        protected_branches=protected_branches,
        repo_token=repo_token,
        fetch_depth=fetch_depth,
    )

    with create_output_file(env, reporter, console=console) as outputs:
        try:
            result = SyncPipeline(executor, reporter, env).run(inputs, outputs)
        except SyncError as e:
            report_error(reporter, e)
            raise typer.Exit(exit_code_for(e))
        except KeyboardInterrupt:
            reporter.error("Interrupted")
            raise typer.Exit(ExitCode.SIGINT)
        except Exception as e:
            logger.debug("Unexpected error", exc_info=env.debug_enabled)
            reporter.error(executor.redact(f"Unexpected error: {e}"))
            raise typer.Exit(ExitCode.GENERAL_ERROR)

    logger.debug("Run finished: %s", result.model_dump())


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main", "create_executor", "setup_logging"]
