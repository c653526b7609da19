"""Environment loading for local runs.

A local simulation reads the same variables GitHub Actions provides (for
example ``GITHUB_REPOSITORY``) from layered environment files:
- OS environment (highest precedence)
- Project environment files (e.g. .env)
- User environment files (e.g. ~/.config/sync-upstream/.env)

Variables already present in the process environment are never overridden.
The project files live in the checkout being synced, so they may not steer
git itself (``GIT_*``) or switch the run mode (``CI``). In GitHub Actions the
CLI does not load them at all.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from dotenv import dotenv_values

logger = logging.getLogger(__name__)

RESERVED_KEYS = frozenset({"CI"})
RESERVED_PREFIXES = ("GIT_",)


def is_reserved(key: str) -> bool:
    """Whether an env file may not set this variable."""
    return key in RESERVED_KEYS or key.startswith(RESERVED_PREFIXES)


def _read_env(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    out: dict[str, str] = {}
    for k, v in dotenv_values(path).items():
        if k is None or v is None:
            continue
        if is_reserved(k):
            logger.warning("Ignoring %s from %s", k, path)
            continue
        out[str(k)] = str(v)
    return out


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> dict[str, str]:
    """Load environment variables from user + project .env files.

    Args:
        project_dir: base directory for project env paths (defaults to cwd)
        user_env_paths: explicit user env file paths
        project_env_paths: explicit project env file paths

    Returns:
        The variables that were set in ``os.environ``
    """
    if project_dir is None:
        project_dir = Path.cwd()

    if user_env_paths is None:
        xdg_home = Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config")))
        user_env_paths = [xdg_home / "sync-upstream" / ".env"]

    if project_env_paths is None:
        project_env_paths = [project_dir / ".env", project_dir / ".env.local"]

    # User env is the lowest layer; project env may replace what it set.
    loaded: dict[str, str] = {}
    for p in [*user_env_paths, *project_env_paths]:
        for k, v in _read_env(Path(p)).items():
            if k not in os.environ or k in loaded:
                os.environ[k] = v
                loaded[k] = v

    if loaded:
        logger.debug("Loaded from env files: %s", ", ".join(sorted(loaded)))
    return loaded
