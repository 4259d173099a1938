"""Tests for hook input handling."""

import io
import json
import sys
from unittest.mock import patch

import pytest

from claude_hooks.hooks.io import (
    HookInputError,
    emit_verdict,
    log_debug,
    missing_fields,
    parse_input,
    read_input,
    read_input_as,
)
from claude_hooks.hooks.types import (
    NotificationInput,
    PostToolUseInput,
    PreCompactInput,
    PreToolUseInput,
    SessionEndInput,
    SessionStartInput,
    StopInput,
    SubagentStopInput,
    UserPromptSubmitInput,
)
from claude_hooks.output import EventKind, ExitPolicy, Stream, Verdict


def _input(event: str, **fields) -> dict:
    data = {
        "session_id": "test",
        "transcript_path": "/tmp/t",
        "cwd": "/home/user",
        "hook_event_name": event,
    }
    data.update(fields)
    return data


class TestHookTypes:
    def test_pre_tool_use_input(self):
        """Test PreToolUseInput dataclass."""
        inp = PreToolUseInput(
            session_id="test-session",
            transcript_path="/tmp/transcript",
            cwd="/home/user/project",
            hook_event_name="PreToolUse",
            tool_name="Edit",
            tool_input={"file_path": "/home/user/project/app.py"},
        )

        assert inp.tool_name == "Edit"
        assert inp.tool_input["file_path"] == "/home/user/project/app.py"
        assert inp.event is EventKind.PRE_TOOL_USE

    def test_session_start_input(self):
        """Test SessionStartInput dataclass."""
        inp = SessionStartInput(
            session_id="test-session",
            transcript_path="/tmp/transcript",
            cwd="/home/user/project",
            hook_event_name="SessionStart",
            source="startup",
        )

        assert inp.source == "startup"
        assert inp.event is EventKind.SESSION_START


class TestParseInput:
    @pytest.mark.parametrize(
        "data, expected_type",
        [
            (_input("PreToolUse", tool_name="Bash", tool_input={"command": "ls"}), PreToolUseInput),
            (
                _input("PostToolUse", tool_name="Bash", tool_input={}, tool_response={"stdout": "ok"}),
                PostToolUseInput,
            ),
            (_input("UserPromptSubmit", prompt="hi"), UserPromptSubmitInput),
            (_input("Stop", stop_hook_active=True), StopInput),
            (_input("SubagentStop", stop_hook_active=False), SubagentStopInput),
            (_input("SessionStart", source="resume"), SessionStartInput),
            (_input("SessionEnd", reason="logout"), SessionEndInput),
            (_input("Notification", message="Waiting"), NotificationInput),
            (_input("PreCompact", trigger="auto", custom_instructions=""), PreCompactInput),
        ],
    )
    def test_every_event_parses_to_its_type(self, data, expected_type):
        result = parse_input(data)

        assert isinstance(result, expected_type)
        assert result.event.value == data["hook_event_name"]

    def test_missing_fields_take_defaults(self):
        result = parse_input({"hook_event_name": "PreToolUse"})

        assert isinstance(result, PreToolUseInput)
        assert result.session_id == ""
        assert result.tool_name == ""
        assert result.tool_input == {}

    def test_expected_event_used_when_name_missing(self):
        result = parse_input({"session_id": "s", "prompt": "hello"}, EventKind.USER_PROMPT_SUBMIT)

        assert isinstance(result, UserPromptSubmitInput)
        assert result.prompt == "hello"

    def test_camel_case_event_name_accepted(self):
        result = parse_input({"hookEventName": "Stop"})

        assert isinstance(result, StopInput)

    def test_event_mismatch_raises(self):
        with pytest.raises(HookInputError, match="Expected PreToolUse input"):
            parse_input(_input("Stop"), EventKind.PRE_TOOL_USE)

    def test_unknown_event_raises(self):
        with pytest.raises(HookInputError, match="Unsupported hook event"):
            parse_input(_input("BeforeLunch"))

    def test_missing_event_without_expectation_raises(self):
        with pytest.raises(HookInputError):
            parse_input({"session_id": "s"})

    def test_non_object_raises(self):
        with pytest.raises(HookInputError):
            parse_input(["PreToolUse"])

    def test_missing_fields_reports_expected_keys(self):
        data = {"hook_event_name": "PreToolUse", "tool_name": "Bash"}

        assert missing_fields(data, EventKind.PRE_TOOL_USE) == ["session_id", "cwd", "tool_input"]

    def test_transcript_path_is_optional(self):
        data = _input("Notification", message="x")
        del data["transcript_path"]

        assert missing_fields(data, EventKind.NOTIFICATION) == []


class TestHookIO:
    def test_read_input_pre_tool_use(self):
        """Test reading PreToolUse input from stdin."""
        input_data = json.dumps(_input("PreToolUse", tool_name="Edit", tool_input={"file_path": "app.py"}))

        with patch.object(sys, 'stdin', io.StringIO(input_data)):
            result = read_input()

        assert isinstance(result, PreToolUseInput)
        assert result.tool_name == "Edit"

    def test_read_input_session_start(self):
        """Test reading SessionStart input from stdin."""
        input_data = json.dumps(_input("SessionStart", source="startup"))

        with patch.object(sys, 'stdin', io.StringIO(input_data)):
            result = read_input()

        assert isinstance(result, SessionStartInput)
        assert result.source == "startup"

    def test_read_input_from_explicit_stream(self):
        stream = io.StringIO(json.dumps(_input("Notification", message="Idle")))

        result = read_input(stream)

        assert isinstance(result, NotificationInput)
        assert result.message == "Idle"

    def test_read_input_as_correct_type(self):
        """Test read_input_as with correct type."""
        input_data = json.dumps(_input("PreToolUse", tool_name="Write", tool_input={}))

        with patch.object(sys, 'stdin', io.StringIO(input_data)):
            result = read_input_as(PreToolUseInput)

        assert isinstance(result, PreToolUseInput)

    def test_read_input_as_wrong_type(self):
        """Test read_input_as with wrong type raises error."""
        input_data = json.dumps(_input("PreToolUse", tool_name="Edit", tool_input={}))

        with patch.object(sys, 'stdin', io.StringIO(input_data)):
            with pytest.raises(HookInputError):
                read_input_as(SessionStartInput)

    def test_read_input_empty_stdin(self):
        """Test read_input with empty stdin raises error."""
        with patch.object(sys, 'stdin', io.StringIO("")):
            with pytest.raises(HookInputError):
                read_input()

    def test_read_input_invalid_json(self):
        """Test read_input with invalid JSON raises error."""
        with patch.object(sys, 'stdin', io.StringIO("not json")):
            with pytest.raises(HookInputError):
                read_input()

    def test_read_input_json_array(self):
        with patch.object(sys, 'stdin', io.StringIO("[1, 2]")):
            with pytest.raises(HookInputError):
                read_input()


class TestEmitVerdict:
    def test_allow_goes_to_stdout(self):
        stdout, stderr = io.StringIO(), io.StringIO()

        resolution = emit_verdict(Verdict(kind=EventKind.NOTIFICATION), stdout=stdout, stderr=stderr)

        assert resolution.code == 0
        assert resolution.stream is Stream.STDOUT
        assert json.loads(stdout.getvalue())["continue"] is True
        assert stderr.getvalue() == ""

    def test_deny_goes_to_stderr(self):
        verdict = Verdict(kind=EventKind.PRE_TOOL_USE)
        verdict.set_payload(permissionDecision="deny", permissionDecisionReason="no")
        stdout, stderr = io.StringIO(), io.StringIO()

        resolution = emit_verdict(verdict, ExitPolicy(), stdout=stdout, stderr=stderr)

        assert resolution.code == 2
        assert stdout.getvalue() == ""
        body = json.loads(stderr.getvalue())
        assert body["hookSpecificOutput"]["permissionDecision"] == "deny"


class TestLogDebug:
    def test_enabled_flag_wins(self, monkeypatch):
        monkeypatch.setenv("CLAUDE_HOOKS_DEBUG", "1")
        stream = io.StringIO()

        log_debug("hidden", enabled=False, stream=stream)
        log_debug("shown", enabled=True, stream=stream)

        assert stream.getvalue() == "[claude-hooks] shown\n"

    def test_environment_used_when_unset(self, monkeypatch):
        stream = io.StringIO()
        log_debug("quiet", stream=stream)
        monkeypatch.setenv("CLAUDE_HOOKS_DEBUG", "true")
        log_debug("loud", stream=stream)

        assert stream.getvalue() == "[claude-hooks] loud\n"
