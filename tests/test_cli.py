from __future__ import annotations

import io
import json
import os
import sys
from unittest.mock import patch

import pytest

from claude_hooks.app.cli import create_parser, main, sample_input
from claude_hooks.output import EventKind


def _write(path, data) -> str:
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage: claude-hooks" in capsys.readouterr().out


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        create_parser().parse_args(["--version"])

    assert exc.value.code == 0
    assert "1.0.0" in capsys.readouterr().out


def test_debug_flag_sets_environment(monkeypatch, capsys):
    monkeypatch.setenv("CLAUDE_HOOKS_DEBUG", "0")

    main(["--debug", "config"])

    assert os.environ["CLAUDE_HOOKS_DEBUG"] == "1"
    assert json.loads(capsys.readouterr().out)["debug"] is True


def test_config_command(base_dir, capsys):
    assert main(["config"]) == 0

    data = json.loads(capsys.readouterr().out)
    assert data["baseDir"] == str(base_dir.resolve())
    assert data["askExitMode"] == "passthrough"


def test_sample_input_defaults():
    data = sample_input(EventKind.USER_PROMPT_SUBMIT, {"prompt": "hello"})

    assert data["session_id"] == "test-session"
    assert data["transcript_path"] == "/tmp/test_transcript.md"
    assert data["hook_event_name"] == "UserPromptSubmit"
    assert data["prompt"] == "hello"


def test_sample_runs_hook(capsys):
    code = main(
        [
            "sample",
            "claude_hooks.policies:GitGuard",
            "--set",
            'tool_input={"command": "git push --force"}',
        ]
    )

    err = capsys.readouterr().err
    assert code == 2
    assert '"permissionDecision": "deny"' in err
    assert "Exit code: 2" in err


def test_sample_function_handler_needs_event(capsys):
    code = main(["sample", "claude_hooks.app.cli:sample_input"])

    assert code == 1
    assert "--event is required" in capsys.readouterr().err


def test_sample_rejects_bad_override(capsys):
    code = main(["sample", "claude_hooks.policies:GitGuard", "--set", "novalue"])

    assert code == 1
    assert "Expected KEY=VALUE" in capsys.readouterr().err


def test_run_command(capsys):
    stdin = json.dumps(sample_input(EventKind.PRE_TOOL_USE, {"tool_input": {"command": "git status"}}))

    with patch.object(sys, 'stdin', io.StringIO(stdin)):
        code = main(["run", "PreToolUse", "claude_hooks.policies:GitGuard"])

    assert code == 0
    assert json.loads(capsys.readouterr().out)["hookSpecificOutput"]["permissionDecision"] == "allow"


def test_run_unknown_handler(capsys):
    assert main(["run", "PreToolUse", "claude_hooks.nowhere:Hook"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_merge_command(tmp_path, capsys):
    first = _write(
        tmp_path / "a.json",
        {"hookSpecificOutput": {"hookEventName": "PreToolUse", "permissionDecision": "allow"}},
    )
    second = _write(
        tmp_path / "b.json",
        {"hookSpecificOutput": {"permissionDecision": "deny", "permissionDecisionReason": "no"}},
    )

    assert main(["merge", "PreToolUse", first, second]) == 0

    out = capsys.readouterr().out
    merged = json.loads(out[: out.rindex("}") + 1])
    assert merged["hookSpecificOutput"]["permissionDecision"] == "deny"
    assert "Exit code: 2 (stderr)" in out


def test_merge_rejects_mismatched_tag(tmp_path, capsys):
    path = _write(tmp_path / "a.json", {"hookSpecificOutput": {"hookEventName": "Stop"}})

    assert main(["merge", "PreToolUse", path]) == 1
    assert "Error:" in capsys.readouterr().err


def test_merge_missing_file(tmp_path, capsys):
    assert main(["merge", "Stop", str(tmp_path / "missing.json")]) == 1
    assert "Error:" in capsys.readouterr().err
