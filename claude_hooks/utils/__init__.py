"""Utility modules for claude-hooks."""

from .fs import append_text, ensure_dir, load_json_object
from .env import env_var, get_base_dir, get_home_dir, get_project_dir, is_debug_mode, is_truthy
from .log import SessionLogger, sanitize_session_id

__all__ = [
    "append_text",
    "ensure_dir",
    "load_json_object",
    "env_var",
    "get_base_dir",
    "get_home_dir",
    "get_project_dir",
    "is_debug_mode",
    "is_truthy",
    "SessionLogger",
    "sanitize_session_id",
]
