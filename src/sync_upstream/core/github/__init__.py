"""
GitHub repository references.
"""

from .models import DEFAULT_SERVER_URL, RepoInfo

__all__ = ["DEFAULT_SERVER_URL", "RepoInfo"]
