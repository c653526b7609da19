"""
sync-upstream - force sync a branch from an upstream repository.

A GitHub Actions step (and local dry-run tool) that resets a branch of the
checked-out repository to the same branch of an upstream repository and
force-pushes it, unless the branch is protected.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
