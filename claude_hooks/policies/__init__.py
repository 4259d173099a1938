"""Ready-made hook policies."""

from .git_guard import GitGuard
from .rules import AppendRules

__all__ = ["GitGuard", "AppendRules"]
