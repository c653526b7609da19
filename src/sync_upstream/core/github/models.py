"""
GitHub data models for sync-upstream.

Defines Pydantic models for repository references and the URLs derived
from them.
"""

from __future__ import annotations

import re
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field, computed_field

DEFAULT_SERVER_URL = "https://github.com"

_FULL_NAME_PATTERN = re.compile(r"^([^/\s]+)/([^/\s]+?)(?:\.git)?$")


class RepoInfo(BaseModel):
    """
    GitHub repository reference.

    Parsed from the conventional ``owner/repo`` form used by the
    ``GITHUB_REPOSITORY`` variable and the upstream-repo input.

    Example:
        >>> RepoInfo.parse("octo-org/upstream").full_name
        'octo-org/upstream'
        >>> RepoInfo.parse("octo-org/upstream").clone_url()
        'https://github.com/octo-org/upstream.git'
    """

    model_config = ConfigDict(frozen=True)

    owner: str = Field(..., description="Repository owner (user or organization)")
    repo: str = Field(..., description="Repository name")

    @computed_field
    @property
    def full_name(self) -> str:
        """Full repository name (owner/repo)."""
        return f"{self.owner}/{self.repo}"

    def clone_url(self, server_url: str = DEFAULT_SERVER_URL, token: str | None = None) -> str:
        """
        Build the HTTPS clone URL for the repository.

        Args:
            server_url: Base URL of the GitHub server (github.com or a GHES host)
            token: Optional access token to embed for authenticated pushes

        Returns:
            URL such as ``https://x-access-token:<token>@github.com/owner/repo.git``
        """
        parts = urlsplit(server_url.rstrip("/"))
        scheme = parts.scheme or "https"
        host = parts.netloc or parts.path
        credentials = f"x-access-token:{token}@" if token else ""
        return f"{scheme}://{credentials}{host}/{self.owner}/{self.repo}.git"

    @classmethod
    def parse(cls, value: str | None) -> RepoInfo | None:
        """
        Parse an ``owner/repo`` reference.

        Args:
            value: Repository reference

        Returns:
            RepoInfo, or None if the value is empty or not owner/repo shaped
        """
        if not value:
            return None

        match = _FULL_NAME_PATTERN.match(value)
        if not match:
            return None
        return cls(owner=match.group(1), repo=match.group(2))

    def __str__(self) -> str:
        return self.full_name
