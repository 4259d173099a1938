"""File system utilities for claude-hooks.

Provides safe JSON loading and append-only writes.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any


def ensure_dir(dir_path: Path | str) -> Path:
    """Ensure directory exists, creating it if necessary.

    Args:
        dir_path: Directory path to create

    Returns:
        Path object for the directory
    """
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def load_json_object(file_path: Path | str) -> dict[str, Any]:
    """Load a JSON file that must contain an object.

    Args:
        file_path: Path to JSON file

    Returns:
        Parsed object

    Raises:
        OSError: If the file cannot be read
        ValueError: If it is not valid JSON or not an object
    """
    with open(file_path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{file_path} does not contain a JSON object")
    return data


def append_text(file_path: Path | str, text: str) -> None:
    """Append ``text`` to a file with a single ``write`` call.

    Several hook processes may log to the same file at once. Appends of a
    single write on an ``O_APPEND`` descriptor are not interleaved, so no
    lock file is needed.

    Raises:
        OSError: If the directory cannot be created or the write fails
    """
    path = Path(file_path)
    ensure_dir(path.parent)
    fd = os.open(path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o644)
    try:
        os.write(fd, text.encode("utf-8"))
    finally:
        os.close(fd)
