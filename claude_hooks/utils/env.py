"""Environment utilities for claude-hooks."""

from __future__ import annotations

import os
from pathlib import Path

ENV_PREFIX = "CLAUDE_HOOKS_"


def env_var(name: str) -> str | None:
    """Read ``CLAUDE_HOOKS_<name>``; empty values count as unset."""
    val = os.environ.get(f"{ENV_PREFIX}{name}")
    return val if val else None


def is_truthy(val: str | None) -> bool:
    return (val or "").strip().lower() in ("1", "true", "yes", "on")


def is_debug_mode() -> bool:
    """Check if debug mode is enabled.

    Returns:
        True if CLAUDE_HOOKS_DEBUG is set to a truthy value
    """
    return is_truthy(env_var("DEBUG"))


def get_home_dir() -> Path:
    """Get user home directory.

    Returns:
        Path to home directory
    """
    return Path.home()


def get_base_dir() -> Path:
    """Get the hooks base directory (``$CLAUDE_HOOKS_BASE_DIR`` or ``~/.claude``).

    Returns:
        Absolute path to the base directory
    """
    base = env_var("BASE_DIR")
    if base:
        return Path(base).expanduser().resolve()
    return get_home_dir() / ".claude"


def get_project_dir() -> Path | None:
    """Get the project directory the agent runs in, if it told us.

    Returns:
        Path from CLAUDE_PROJECT_DIR, or None
    """
    project = os.environ.get("CLAUDE_PROJECT_DIR")
    return Path(project).expanduser() if project else None
