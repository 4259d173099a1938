from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_home(monkeypatch: pytest.MonkeyPatch, tmp_path):
    """Prevent developer machine `~/.claude/config/config.json` from influencing tests."""

    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("CLAUDE_HOOKS_BASE_DIR", str(tmp_path / ".claude"))
    monkeypatch.delenv("CLAUDE_PROJECT_DIR", raising=False)
    for name in (
        "CLAUDE_HOOKS_DEBUG",
        "CLAUDE_HOOKS_LOG_DIR",
        "CLAUDE_HOOKS_USER_NAME",
        "CLAUDE_HOOKS_ASK_EXIT_MODE",
        "CLAUDE_HOOKS_CONFIG_MERGE_STRATEGY",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def base_dir(tmp_path):
    return tmp_path / ".claude"
