"""Configuration schemas for claude-hooks.

Known options are listed explicitly with their file key, environment
override and typed default. Lookups for anything else return ``None``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Mapping

from ..output.exit_codes import ASK_MODES, AskMode, ExitPolicy


class MergeStrategy(str, Enum):
    """Which config file wins when home and project both set a key."""
    PROJECT = "project"  # .claude/config/config.json in the project
    HOME = "home"        # <base_dir>/config/config.json


def _as_str(val: object, default: str) -> str:
    return val if isinstance(val, str) and val else default


def _as_bool(val: object, default: bool) -> bool:
    if isinstance(val, bool):
        return val
    if isinstance(val, str):
        return val.strip().lower() in ("1", "true", "yes", "on")
    return default


def _as_ask_mode(val: object, default: str) -> str:
    if isinstance(val, str) and val in ASK_MODES:
        return val
    return default


@dataclass(frozen=True, slots=True)
class ConfigOption:
    """One supported configuration key."""
    key: str
    env: str
    default: Any
    coerce: Callable[[object, Any], Any]

    def resolve(self, val: object) -> Any:
        if val is None:
            return self.default
        return self.coerce(val, self.default)


OPTIONS: dict[str, ConfigOption] = {
    "logDirectory": ConfigOption("logDirectory", "LOG_DIR", "logs", _as_str),
    "userName": ConfigOption("userName", "USER_NAME", "unknown", _as_str),
    "askExitMode": ConfigOption("askExitMode", "ASK_EXIT_MODE", "passthrough", _as_ask_mode),
    "debug": ConfigOption("debug", "DEBUG", False, _as_bool),
}


@dataclass(frozen=True)
class HooksConfig:
    """Effective configuration for one hook invocation."""
    base_dir: Path
    log_directory: Path
    ask_exit_mode: AskMode = "passthrough"
    debug: bool = False
    values: Mapping[str, Any] = field(default_factory=dict)

    @property
    def exit_policy(self) -> ExitPolicy:
        return ExitPolicy(ask_mode=self.ask_exit_mode)

    def path_for(self, relative_path: str | Path) -> Path:
        """Resolve a path relative to the base directory."""
        return self.base_dir / relative_path

    def get(self, name: str) -> Any:
        """Typed value of a known option, or ``None`` for unknown names."""
        if name not in OPTIONS:
            return None
        return self.values.get(name, OPTIONS[name].default)

    def to_dict(self) -> dict[str, Any]:
        return {
            "baseDir": str(self.base_dir),
            "logDirectory": str(self.log_directory),
            "userName": self.get("userName"),
            "askExitMode": self.ask_exit_mode,
            "debug": self.debug,
        }
