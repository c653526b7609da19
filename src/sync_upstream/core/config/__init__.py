"""
Configuration for sync-upstream.

Runtime values come from the process environment (optionally seeded from
layered .env files); invocation parameters are validated into a
``SyncConfig`` by the sync pipeline.
"""

from .env import load_layered_env
from .models import (
    DEFAULT_FETCH_DEPTH,
    DEFAULT_PROTECTED_BRANCHES,
    FULL_HISTORY_DEPTH,
    RuntimeEnvironment,
    SyncConfig,
    SyncInputs,
    parse_fetch_depth,
    parse_protected_branches,
)

__all__ = [
    "DEFAULT_FETCH_DEPTH",
    "DEFAULT_PROTECTED_BRANCHES",
    "FULL_HISTORY_DEPTH",
    "RuntimeEnvironment",
    "SyncConfig",
    "SyncInputs",
    "load_layered_env",
    "parse_fetch_depth",
    "parse_protected_branches",
]
