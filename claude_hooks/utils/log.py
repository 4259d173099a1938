"""Per-session hook logging.

Each session gets one append-only file under ``<log_dir>/hooks/``. Hooks
run as independent processes, so every entry is written with one append
call. A logger never raises: if the file cannot be written the entry goes
to stderr instead.
"""

from __future__ import annotations

import re
import sys
from datetime import datetime
from pathlib import Path
from typing import Literal

from .fs import append_text

LogLevel = Literal["debug", "info", "warn", "error"]
LOG_LEVELS: tuple[str, ...] = ("debug", "info", "warn", "error")

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_session_id(session_id: str) -> str:
    return _UNSAFE_CHARS.sub("_", session_id or "unknown")


def format_entry(source: str, message: str, level: LogLevel = "info", now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    prefix = f"[{stamp}] [{level.upper()}] [{source}]"
    if "\n" in message:
        return f"{prefix}\n{message}\n"
    return f"{prefix} {message}\n"


class SessionLogger:
    """Appends hook log entries to the session's log file."""

    def __init__(self, session_id: str, source: str, log_dir: Path | str):
        self.session_id = session_id
        self.source = source
        self.log_dir = Path(log_dir)

    @property
    def log_file(self) -> Path:
        return self.log_dir / "hooks" / f"session-{sanitize_session_id(self.session_id)}.log"

    def log(self, message: str, level: LogLevel = "info") -> None:
        if level not in LOG_LEVELS:
            level = "info"
        entry = format_entry(self.source, str(message), level)
        try:
            append_text(self.log_file, entry)
        except OSError as e:
            print(f"Warning: Failed to write to session log: {e}", file=sys.stderr)
            sys.stderr.write(entry)

    def debug(self, message: str) -> None:
        self.log(message, "debug")

    def info(self, message: str) -> None:
        self.log(message, "info")

    def warn(self, message: str) -> None:
        self.log(message, "warn")

    def error(self, message: str) -> None:
        self.log(message, "error")
