"""I/O utilities for hooks.

Implements both ends of the hook protocol:
- Input: one JSON object on stdin, parsed into a typed hook input
- Output: one JSON object on stdout (exit 0) or stderr (non-zero exit)
"""

from __future__ import annotations

import json
import sys
from typing import IO, Any, Callable, Mapping, TypeVar, overload

from ..output.exit_codes import ExitPolicy, ExitResolution, Stream, resolve_exit
from ..output.registry import EventKind, spec_for
from ..output.verdict import Verdict
from ..utils.env import is_debug_mode
from .types import (
    BaseHookInput,
    HookInput,
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


class HookInputError(Exception):
    """Raised when hook input cannot be parsed."""


T = TypeVar("T", bound=BaseHookInput)


def _extract_base_fields(data: Mapping[str, Any], kind: EventKind) -> dict[str, Any]:
    """Extract common base fields from hook input data."""
    return {
        "session_id": data.get("session_id") or "",
        "transcript_path": data.get("transcript_path") or "",
        "cwd": data.get("cwd") or "",
        "hook_event_name": kind.value,
    }


def _dict_field(data: Mapping[str, Any], key: str) -> dict[str, Any]:
    val = data.get(key)
    return dict(val) if isinstance(val, Mapping) else {}


def _parse_pre_tool_use(data: Mapping[str, Any], base: dict[str, Any]) -> PreToolUseInput:
    return PreToolUseInput(
        **base,
        tool_name=data.get("tool_name") or "",
        tool_input=_dict_field(data, "tool_input"),
    )


def _parse_post_tool_use(data: Mapping[str, Any], base: dict[str, Any]) -> PostToolUseInput:
    return PostToolUseInput(
        **base,
        tool_name=data.get("tool_name") or "",
        tool_input=_dict_field(data, "tool_input"),
        tool_response=_dict_field(data, "tool_response"),
    )


def _parse_session_start(data: Mapping[str, Any], base: dict[str, Any]) -> SessionStartInput:
    return SessionStartInput(**base, source=data.get("source") or "startup")


def _parse_session_end(data: Mapping[str, Any], base: dict[str, Any]) -> SessionEndInput:
    return SessionEndInput(**base, reason=data.get("reason") or "other")


def _parse_user_prompt_submit(data: Mapping[str, Any], base: dict[str, Any]) -> UserPromptSubmitInput:
    return UserPromptSubmitInput(**base, prompt=data.get("prompt") or "")


def _parse_stop(data: Mapping[str, Any], base: dict[str, Any]) -> StopInput:
    return StopInput(**base, stop_hook_active=bool(data.get("stop_hook_active", False)))


def _parse_subagent_stop(data: Mapping[str, Any], base: dict[str, Any]) -> SubagentStopInput:
    return SubagentStopInput(**base, stop_hook_active=bool(data.get("stop_hook_active", False)))


def _parse_notification(data: Mapping[str, Any], base: dict[str, Any]) -> NotificationInput:
    return NotificationInput(**base, message=data.get("message") or "")


def _parse_pre_compact(data: Mapping[str, Any], base: dict[str, Any]) -> PreCompactInput:
    return PreCompactInput(
        **base,
        trigger=data.get("trigger") or "manual",
        custom_instructions=data.get("custom_instructions") or "",
    )


_PARSERS: dict[EventKind, Callable[[Mapping[str, Any], dict[str, Any]], HookInput]] = {
    EventKind.PRE_TOOL_USE: _parse_pre_tool_use,
    EventKind.POST_TOOL_USE: _parse_post_tool_use,
    EventKind.SESSION_START: _parse_session_start,
    EventKind.SESSION_END: _parse_session_end,
    EventKind.USER_PROMPT_SUBMIT: _parse_user_prompt_submit,
    EventKind.STOP: _parse_stop,
    EventKind.SUBAGENT_STOP: _parse_subagent_stop,
    EventKind.NOTIFICATION: _parse_notification,
    EventKind.PRE_COMPACT: _parse_pre_compact,
}


def resolve_event(data: Mapping[str, Any], expected: EventKind | None = None) -> EventKind:
    """Work out which event an input document belongs to.

    Raises:
        HookInputError: If the event is missing, unknown, or not ``expected``
    """
    name = data.get("hook_event_name") or data.get("hookEventName")
    if not name:
        if expected is None:
            raise HookInputError("Missing 'hook_event_name' field")
        return expected

    try:
        kind = EventKind(name)
    except ValueError:
        raise HookInputError(f"Unsupported hook event: {name}") from None

    if expected is not None and kind is not expected:
        raise HookInputError(f"Expected {expected.value} input, got {kind.value}")
    return kind


def missing_fields(data: Mapping[str, Any], kind: EventKind) -> list[str]:
    """Expected input fields absent from ``data``."""
    return [f for f in spec_for(kind).expected_input_fields if f not in data]


def parse_input(data: object, expected: EventKind | None = None) -> HookInput:
    """Parse a decoded input document into its typed hook input.

    Missing fields take their defaults; use ``missing_fields`` to report them.

    Raises:
        HookInputError: If the document is not an object or the event is unusable
    """
    if not isinstance(data, Mapping):
        raise HookInputError("Hook input must be a JSON object")
    kind = resolve_event(data, expected)
    return _PARSERS[kind](data, _extract_base_fields(data, kind))


def read_json_input(stream: IO[str] | None = None) -> dict[str, Any]:
    """Read the raw input document from stdin.

    Raises:
        HookInputError: If input is unreadable, empty, not JSON, or not an object
    """
    try:
        raw = (stream or sys.stdin).read().strip()
    except (UnicodeDecodeError, OSError) as e:
        raise HookInputError(f"Cannot read input: {e}") from e
    if not raw:
        raise HookInputError("No input received on stdin")

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise HookInputError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise HookInputError("Hook input must be a JSON object")
    return data


def read_input(stream: IO[str] | None = None, expected: EventKind | None = None) -> HookInput:
    """Read and parse hook input from stdin.

    Returns:
        Typed hook input based on hook_event_name

    Raises:
        HookInputError: If input cannot be read or parsed
    """
    return parse_input(read_json_input(stream), expected)


@overload
def read_input_as(input_type: type[PreToolUseInput], stream: IO[str] | None = None) -> PreToolUseInput: ...
@overload
def read_input_as(input_type: type[PostToolUseInput], stream: IO[str] | None = None) -> PostToolUseInput: ...
@overload
def read_input_as(input_type: type[SessionStartInput], stream: IO[str] | None = None) -> SessionStartInput: ...
@overload
def read_input_as(input_type: type[UserPromptSubmitInput], stream: IO[str] | None = None) -> UserPromptSubmitInput: ...
@overload
def read_input_as(input_type: type[StopInput], stream: IO[str] | None = None) -> StopInput: ...
@overload
def read_input_as(input_type: type[T], stream: IO[str] | None = None) -> T: ...


def read_input_as(input_type: type[T], stream: IO[str] | None = None) -> T:
    """Read hook input and validate it matches expected type.

    Args:
        input_type: Expected input type class

    Returns:
        Typed hook input

    Raises:
        HookInputError: If input doesn't match expected type
    """
    hook_input = read_input(stream)
    if not isinstance(hook_input, input_type):
        raise HookInputError(
            f"Expected {input_type.__name__}, got {type(hook_input).__name__}"
        )
    return hook_input


def emit_verdict(
    verdict: Verdict,
    policy: ExitPolicy | None = None,
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
) -> ExitResolution:
    """Write the verdict's JSON to the stream its exit code selects.

    Returns:
        The resolved exit code and stream

    Raises:
        TypeError: If the payload holds values JSON cannot encode
    """
    resolution = resolve_exit(verdict, policy)
    write_envelope(verdict.to_json(), resolution, stdout, stderr)
    return resolution


def write_envelope(
    body: str,
    resolution: ExitResolution,
    stdout: IO[str] | None = None,
    stderr: IO[str] | None = None,
) -> None:
    target = (stderr or sys.stderr) if resolution.stream is Stream.STDERR else (stdout or sys.stdout)
    print(body, file=target)


def log_debug(message: str, enabled: bool | None = None, stream: IO[str] | None = None) -> None:
    """Log debug message to stderr.

    Only outputs if ``enabled`` is true, or, when it is None, if
    CLAUDE_HOOKS_DEBUG is set.
    """
    if enabled is None:
        enabled = is_debug_mode()
    if enabled:
        print(f"[claude-hooks] {message}", file=stream or sys.stderr)
