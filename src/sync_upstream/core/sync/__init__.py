"""
Upstream branch synchronization.

Example:
    >>> from sync_upstream.core.sync import SyncPipeline
    >>> pipeline = SyncPipeline(executor, reporter, env)
    >>> result = pipeline.run(SyncInputs(upstream_repo="org/upstream", repo_token=token), outputs)
    >>> if result.synced:
    ...     print(f"{result.branch} now at {result.upstream_commit}")
"""

from sync_upstream.core.sync.errors import (
    EnvironmentSetupError,
    InputError,
    OperationError,
    ProtectedBranchError,
    SyncError,
)
from sync_upstream.core.sync.models import SyncResult
from sync_upstream.core.sync.service import (
    BOT_EMAIL,
    BOT_NAME,
    ORIGIN_REMOTE,
    UPSTREAM_REMOTE,
    SyncPipeline,
)

__all__ = [
    "BOT_EMAIL",
    "BOT_NAME",
    "ORIGIN_REMOTE",
    "UPSTREAM_REMOTE",
    "EnvironmentSetupError",
    "InputError",
    "OperationError",
    "ProtectedBranchError",
    "SyncError",
    "SyncPipeline",
    "SyncResult",
]
