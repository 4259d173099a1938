from __future__ import annotations

from datetime import datetime

from claude_hooks.utils.fs import append_text
from claude_hooks.utils.log import SessionLogger, format_entry, sanitize_session_id


def test_format_single_line():
    entry = format_entry("GitGuard", "Checking tool", "warn", now=datetime(2025, 1, 2, 3, 4, 5))

    assert entry == "[2025-01-02 03:04:05] [WARN] [GitGuard] Checking tool\n"


def test_format_multi_line_starts_on_next_line():
    entry = format_entry("HookRunner", "first\nsecond", "error", now=datetime(2025, 1, 2, 3, 4, 5))

    assert entry == "[2025-01-02 03:04:05] [ERROR] [HookRunner]\nfirst\nsecond\n"


def test_sanitize_session_id():
    assert sanitize_session_id("abc-123_x") == "abc-123_x"
    assert sanitize_session_id("../../etc/passwd") == "______etc_passwd"
    assert sanitize_session_id("") == "unknown"


def test_logger_appends_to_session_file(tmp_path):
    logger = SessionLogger("sess/1", "MyHook", tmp_path)

    logger.info("one")
    logger.debug("two")

    assert logger.log_file == tmp_path / "hooks" / "session-sess_1.log"
    lines = logger.log_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].endswith("[INFO] [MyHook] one")
    assert lines[1].endswith("[DEBUG] [MyHook] two")


def test_unknown_level_logged_as_info(tmp_path):
    logger = SessionLogger("s", "MyHook", tmp_path)

    logger.log("hello", level="loud")

    assert "[INFO] [MyHook] hello" in logger.log_file.read_text(encoding="utf-8")


def test_loggers_share_one_file(tmp_path):
    SessionLogger("s", "First", tmp_path).warn("a")
    SessionLogger("s", "Second", tmp_path).error("b")

    text = (tmp_path / "hooks" / "session-s.log").read_text(encoding="utf-8")
    assert "[WARN] [First] a" in text
    assert "[ERROR] [Second] b" in text


def test_unwritable_log_falls_back_to_stderr(tmp_path, capsys):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("", encoding="utf-8")
    logger = SessionLogger("s", "MyHook", blocker)

    logger.error("still visible")

    err = capsys.readouterr().err
    assert "Warning: Failed to write to session log" in err
    assert "[ERROR] [MyHook] still visible" in err


def test_append_text_creates_parents(tmp_path):
    target = tmp_path / "a" / "b" / "log.txt"

    append_text(target, "x\n")
    append_text(target, "y\n")

    assert target.read_text(encoding="utf-8") == "x\ny\n"
