"""Configuration management for claude-hooks."""

from .types import (
    MergeStrategy,
    ConfigOption,
    OPTIONS,
    HooksConfig,
)
from .loader import ConfigLoader

__all__ = [
    "MergeStrategy",
    "ConfigOption",
    "OPTIONS",
    "HooksConfig",
    "ConfigLoader",
]
