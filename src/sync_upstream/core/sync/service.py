"""
Upstream branch synchronization pipeline.

Force-updates a branch of the checked-out repository to the state of the
same branch in an upstream repository:

1. Validate the environment and the invocation parameters, failing on the
   first problem and before anything is changed.
2. Configure the committer identity and push credentials, check out the
   branch, add and fetch the upstream remote, and when the upstream tip
   differs from the local one, hard-reset the branch to it and force-push
   it to origin.

Every step is reported through a ``Reporter``; every git call goes through a
``GitExecutor``, which is a dry-run executor for local simulations.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from pydantic import SecretStr

from sync_upstream.core.config import (
    RuntimeEnvironment,
    SyncConfig,
    SyncInputs,
    parse_fetch_depth,
    parse_protected_branches,
)
from sync_upstream.core.git import GitError, GitExecutor
from sync_upstream.core.github import RepoInfo
from sync_upstream.core.reporting import OutputFile, Reporter
from sync_upstream.core.sync.errors import (
    EnvironmentSetupError,
    InputError,
    OperationError,
    ProtectedBranchError,
)
from sync_upstream.core.sync.models import SyncResult

logger = logging.getLogger(__name__)

BOT_NAME = "GitHub Actions"
BOT_EMAIL = "actions@github.com"
ORIGIN_REMOTE = "origin"
UPSTREAM_REMOTE = "upstream"
SYNCED_OUTPUT = "synced"


class SyncPipeline:
    """
    Validation-then-execution pipeline for a single sync run.

    Example:
        >>> pipeline = SyncPipeline(executor, reporter, RuntimeEnvironment.from_environ())
        >>> inputs = SyncInputs(upstream_repo="org/upstream", repo_token=token)
        >>> result = pipeline.run(inputs, outputs)
        >>> result.synced
        True
    """

    def __init__(
        self,
        executor: GitExecutor,
        reporter: Reporter,
        env: RuntimeEnvironment,
    ) -> None:
        self.executor = executor
        self.reporter = reporter
        self.env = env

    def run(self, inputs: SyncInputs, outputs: OutputFile) -> SyncResult:
        """Validate the inputs, then sync."""
        config = self.validate(inputs)
        return self.execute(config, outputs)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------

    def validate(self, inputs: SyncInputs) -> SyncConfig:
        """
        Check the environment and the invocation parameters.

        Nothing is modified during validation; the only git calls are
        read-only queries.

        Args:
            inputs: Raw invocation parameters

        Returns:
            Validated configuration

        Raises:
            EnvironmentSetupError: If the checkout or repository identity is missing
            InputError: If a parameter is missing or invalid
            ProtectedBranchError: If the branch is protected
        """
        with self.reporter.group("Validating environment and input parameters"):
            if not self.executor.is_valid_repo():
                raise EnvironmentSetupError(
                    "The current directory doesn't appear to be a valid Git repository, "
                    "the 'git' command is unavailable or an unexpected error occurred. "
                    "Ensure that the 'checkout' action has run successfully before "
                    "executing this action."
                )

            origin = self._validate_repository_identity()

            branch = inputs.branch or self._current_branch()
            if not branch:
                raise InputError(
                    "Branch name is invalid or not set. Please provide a valid branch name to sync."
                )
            self.reporter.log(f"Branch: {branch}")

            upstream = self._validate_upstream(inputs.upstream_repo)
            self.reporter.log(f"Upstream repository: {upstream}")

            protected = parse_protected_branches(inputs.protected_branches)
            if branch in protected:
                raise ProtectedBranchError(branch)
            self.reporter.log(
                "Protected branches: " + (", ".join(sorted(protected)) if protected else "(none)")
            )

            token = inputs.repo_token
            if not token:
                raise InputError(
                    "GitHub Token is invalid or not set. "
                    "Please provide a valid GitHub Token with the 'repo' scope."
                )
            self.reporter.mask(token)
            self.executor.add_secret(token)

            try:
                fetch_depth = parse_fetch_depth(inputs.fetch_depth)
            except ValueError as e:
                raise InputError(
                    f"Fetch depth is invalid: {e}. Please provide a valid fetch depth "
                    "(a number of commits, or 0 for the complete history)."
                ) from e
            self.reporter.log(f"Fetch depth: {fetch_depth or 'complete history'}")

        return SyncConfig(
            branch=branch,
            upstream=upstream,
            origin=origin,
            protected_branches=protected,
            repo_token=SecretStr(token),
            fetch_depth=fetch_depth,
            server_url=self.env.github_server_url,
        )

    def _validate_repository_identity(self) -> RepoInfo:
        identity = self.env.github_repository
        if not identity:
            raise EnvironmentSetupError("GITHUB_REPOSITORY is not set. Something went wrong.")

        origin = RepoInfo.parse(identity)
        if origin is None:
            raise EnvironmentSetupError(
                f"GITHUB_REPOSITORY '{identity}' is not in the 'owner/repo' format."
            )
        return origin

    def _current_branch(self) -> str:
        try:
            return self.executor.get_current_branch()
        except GitError as e:
            logger.debug("Could not determine the current branch: %s", e.stderr or e)
            return ""

    def _validate_upstream(self, value: str | None) -> RepoInfo:
        if not value:
            raise InputError(
                "Upstream repository is invalid or not set. Please provide a valid "
                "upstream repository in the GitHub format of 'owner/repo'."
            )

        upstream = RepoInfo.parse(value)
        if upstream is None:
            raise InputError(
                f"Upstream repository '{value}' is invalid. Please provide a valid "
                "upstream repository in the GitHub format of 'owner/repo'."
            )
        return upstream

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------

    @contextmanager
    def _failing_with(self, message: str) -> Iterator[None]:
        """Turn a git failure inside the block into an OperationError."""
        try:
            yield
        except GitError as e:
            logger.debug("%s (stderr: %s)", e, e.stderr)
            raise OperationError(message, e) from e

    def execute(self, config: SyncConfig, outputs: OutputFile) -> SyncResult:
        """
        Sync the branch from upstream.

        Args:
            config: Validated configuration
            outputs: Where the ``synced`` step output is recorded

        Returns:
            SyncResult describing whether the branch was overwritten

        Raises:
            OperationError: If any git step fails
        """
        branch = config.branch
        upstream = config.upstream

        with self.reporter.group("Setting up git credentials"):
            with self._failing_with("Failed to configure the git user name and email."):
                self.executor.config_identity(BOT_NAME, BOT_EMAIL)

        with self.reporter.group(f"Setting up GitHub Token for repository {config.origin}"):
            with self._failing_with(
                "Failed to set the GitHub token for authentication. "
                "Make sure you have push access and that the GitHub Token is valid."
            ):
                self.executor.set_remote_url(
                    ORIGIN_REMOTE,
                    config.origin.clone_url(
                        config.server_url, token=config.repo_token.get_secret_value()
                    ),
                )

        with self.reporter.group(f"Ensuring we are on branch {branch}"):
            with self._failing_with(
                f"Failed to switch to branch {branch}. Make sure the branch exists "
                "and that you have permissions to access it."
            ):
                self.executor.checkout(branch)

        with self.reporter.group(f"Adding upstream repository {upstream}"):
            with self._failing_with(
                f"Failed to add remote upstream repository {upstream}. "
                "Make sure the repository format or URL is correct."
            ):
                self.executor.add_remote(UPSTREAM_REMOTE, upstream.clone_url(config.server_url))

        with self.reporter.group(f"Fetching changes from upstream repository {upstream}"):
            self._fetch_upstream(config)

        with self.reporter.group("Checking for changes to sync"):
            with self._failing_with(
                f"Failed to compare branch {branch} with upstream. Make sure the branch "
                f"{branch} exists in the upstream repository {upstream}."
            ):
                local_commit = self.executor.resolve_commit("HEAD")
                upstream_commit = self.executor.resolve_commit(config.upstream_ref)
            self.reporter.log(f"Local HEAD: {local_commit}")
            self.reporter.log(f"Upstream {config.upstream_ref}: {upstream_commit}")

            if local_commit == upstream_commit:
                self.reporter.info(
                    f"No changes detected. Branch {branch} is already up-to-date with upstream."
                )
                outputs.set_output(SYNCED_OUTPUT, "false")
                return SyncResult(
                    synced=False,
                    branch=branch,
                    upstream=upstream.full_name,
                    local_commit=local_commit,
                    upstream_commit=upstream_commit,
                )

            self.reporter.info("Changes detected, proceeding with sync.")

        with self.reporter.group(
            f"Resetting branch {branch} to match upstream repository {upstream}"
        ):
            with self._failing_with(
                f"Failed to reset the branch {branch}. Make sure the branch {branch} "
                f"exists in the upstream repository {upstream}."
            ):
                self.executor.reset_hard(config.upstream_ref)

        with self.reporter.group(f"Pushing changes to forked repository {config.origin}"):
            with self._failing_with(
                "Failed to push changes. Make sure you have push access and ensure "
                "that your inputs are correctly set and valid."
            ):
                self.executor.push_force(ORIGIN_REMOTE, branch)

        result = SyncResult(
            synced=True,
            branch=branch,
            upstream=upstream.full_name,
            local_commit=local_commit,
            upstream_commit=upstream_commit,
        )
        outputs.set_output(SYNCED_OUTPUT, result.output_value)
        self.reporter.info(
            f"Branch {branch} successfully synced with upstream repository {upstream}."
        )
        return result

    def _fetch_upstream(self, config: SyncConfig) -> None:
        """Fetch upstream at the configured depth, retrying once with full history."""
        full_history_failure = (
            f"Failed to fetch from upstream repository {config.upstream}. "
            "Make sure you have permissions to access it."
        )

        if config.full_history:
            with self._failing_with(full_history_failure):
                self.executor.fetch(UPSTREAM_REMOTE)
            return

        try:
            self.executor.fetch(UPSTREAM_REMOTE, depth=config.fetch_depth)
        except GitError as e:
            logger.debug("Shallow fetch failed: %s", e.stderr or e)
            self.reporter.warning(
                f"Shallow fetch with depth {config.fetch_depth} failed, "
                "falling back to fetching complete history."
            )
            with self._failing_with(full_history_failure):
                self.executor.fetch(UPSTREAM_REMOTE)
