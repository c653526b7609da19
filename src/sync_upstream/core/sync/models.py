"""
Data models for the sync pipeline.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SyncResult(BaseModel):
    """
    Outcome of a completed run.

    ``synced`` is true only when the upstream tip differed from the local
    tip and both the reset and the force-push went through.

    Example:
        >>> result = SyncResult(synced=False, branch="feature-x", upstream="org/upstream")
        >>> result.output_value
        'false'
    """

    model_config = ConfigDict(frozen=True)

    synced: bool = Field(..., description="Whether the branch was overwritten from upstream")
    branch: str = Field(..., description="Branch that was compared")
    upstream: str = Field(..., description="Upstream repository (owner/repo)")
    local_commit: str | None = Field(default=None, description="Local HEAD before the sync")
    upstream_commit: str | None = Field(default=None, description="Upstream branch tip")

    @property
    def output_value(self) -> str:
        """Value of the ``synced`` step output."""
        return "true" if self.synced else "false"
