"""Configuration loader for claude-hooks.

Handles loading and merging configuration from multiple sources.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from ..utils.env import ENV_PREFIX, env_var, get_base_dir, get_project_dir
from ..utils.fs import load_json_object
from .types import OPTIONS, HooksConfig, MergeStrategy

CONFIG_RELATIVE_PATH = Path("config") / "config.json"


def _coerce_strategy(val: str | None) -> MergeStrategy:
    if val in {"project", "home"}:
        return MergeStrategy(val)
    return MergeStrategy.PROJECT


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return load_json_object(path)
    except (OSError, ValueError) as e:
        print(f"Warning: Error parsing config file {path}: {e}", file=sys.stderr)
        return {}


class ConfigLoader:
    """Loads and caches the hooks configuration.

    One loader is built at startup and its config handed to the runner;
    call ``reload()`` to pick up changed files or environment.
    """

    def __init__(self, project_root: Path | None = None, base_dir: Path | None = None):
        """Initialize config loader.

        Args:
            project_root: Project directory (defaults to $CLAUDE_PROJECT_DIR)
            base_dir: Hooks base directory (defaults to $CLAUDE_HOOKS_BASE_DIR or ~/.claude)
        """
        self.project_root = project_root
        self.base_dir = base_dir
        self._config: HooksConfig | None = None

    @property
    def config(self) -> HooksConfig:
        """Get loaded configuration, loading if necessary."""
        if self._config is None:
            self._config = self.load()
        return self._config

    def reload(self) -> HooksConfig:
        """Force reload configuration."""
        self._config = None
        return self.config

    def resolved_base_dir(self) -> Path:
        return self.base_dir if self.base_dir is not None else get_base_dir()

    def home_config_path(self) -> Path:
        return self.resolved_base_dir() / CONFIG_RELATIVE_PATH

    def project_config_path(self) -> Path | None:
        root = self.project_root if self.project_root is not None else get_project_dir()
        if root is None:
            return None
        return root / ".claude" / CONFIG_RELATIVE_PATH

    def load_file_config(self) -> dict[str, Any]:
        """Merge the home and project config files.

        Priority follows CLAUDE_HOOKS_CONFIG_MERGE_STRATEGY:
        - ``project`` (default): project values override home values
        - ``home``: home values override project values
        """
        home_data = _read_config_file(self.home_config_path())
        project_path = self.project_config_path()
        project_data = _read_config_file(project_path) if project_path else {}

        if _coerce_strategy(env_var("CONFIG_MERGE_STRATEGY")) is MergeStrategy.HOME:
            return self._deep_merge(project_data, home_data)
        return self._deep_merge(home_data, project_data)

    def load(self) -> HooksConfig:
        """Load configuration from all sources.

        Priority (highest to lowest):
        1. CLAUDE_HOOKS_* environment variables
        2. Merged config files
        3. Default values

        Returns:
            Effective HooksConfig
        """
        base_dir = self.resolved_base_dir()
        merged = self.load_file_config()

        values: dict[str, Any] = {}
        for name, option in OPTIONS.items():
            raw = os.environ.get(f"{ENV_PREFIX}{option.env}") or merged.get(option.key)
            values[name] = option.resolve(raw)

        # Logs always live under the home base dir, whatever the project says.
        log_dir = Path(values["logDirectory"]).expanduser()
        if not log_dir.is_absolute():
            log_dir = base_dir / log_dir

        return HooksConfig(
            base_dir=base_dir,
            log_directory=log_dir,
            ask_exit_mode=values["askExitMode"],
            debug=values["debug"],
            values=values,
        )

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dictionaries.

        Args:
            base: Base dictionary
            override: Dictionary to merge (takes precedence)

        Returns:
            Merged dictionary
        """
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ConfigLoader._deep_merge(result[key], value)
            else:
                result[key] = value
        return result
