"""Event type registry.

Every hook event the agent can emit is listed here together with the
input fields it carries, the fields allowed in its ``hookSpecificOutput``
payload and the exit code used when a hook asks the agent to halt
(``continue: false``).

The set is closed: the agent's protocol is fixed, so adding a kind means
adding an entry to ``EVENT_SPECS`` and to the merge and exit tables.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import VerdictError


class EventKind(str, Enum):
    """Lifecycle events a hook can be registered for."""
    PRE_TOOL_USE = "PreToolUse"
    POST_TOOL_USE = "PostToolUse"
    USER_PROMPT_SUBMIT = "UserPromptSubmit"
    STOP = "Stop"
    SUBAGENT_STOP = "SubagentStop"
    SESSION_START = "SessionStart"
    SESSION_END = "SessionEnd"
    NOTIFICATION = "Notification"
    PRE_COMPACT = "PreCompact"


class Decision(str, Enum):
    """Top-level ``decision`` values."""
    BLOCK = "block"
    APPROVE = "approve"


class PermissionDecision(str, Enum):
    """PreToolUse ``permissionDecision`` values, least restrictive first."""
    ALLOW = "allow"
    ASK = "ask"
    DENY = "deny"

    @property
    def rank(self) -> int:
        return _PERMISSION_RANK[self]


_PERMISSION_RANK = {
    PermissionDecision.ALLOW: 0,
    PermissionDecision.ASK: 1,
    PermissionDecision.DENY: 2,
}


COMMON_INPUT_FIELDS: tuple[str, ...] = ("session_id", "cwd", "hook_event_name")
OPTIONAL_INPUT_FIELDS: tuple[str, ...] = ("transcript_path",)

# Exit code for a hook that failed to run (bad input, handler exception).
ERROR_EXIT_CODE = 1


@dataclass(frozen=True, slots=True)
class EventSpec:
    """Static facts about one event kind."""
    kind: EventKind
    input_fields: tuple[str, ...]
    payload_fields: tuple[str, ...] = ()
    halt_exit_code: int = 1
    error_exit_code: int = ERROR_EXIT_CODE

    @property
    def expected_input_fields(self) -> tuple[str, ...]:
        return COMMON_INPUT_FIELDS + self.input_fields


EVENT_SPECS: dict[EventKind, EventSpec] = {
    EventKind.PRE_TOOL_USE: EventSpec(
        kind=EventKind.PRE_TOOL_USE,
        input_fields=("tool_name", "tool_input"),
        payload_fields=("permissionDecision", "permissionDecisionReason"),
        halt_exit_code=2,
    ),
    EventKind.POST_TOOL_USE: EventSpec(
        kind=EventKind.POST_TOOL_USE,
        input_fields=("tool_name", "tool_input", "tool_response"),
    ),
    EventKind.USER_PROMPT_SUBMIT: EventSpec(
        kind=EventKind.USER_PROMPT_SUBMIT,
        input_fields=("prompt",),
        payload_fields=("additionalContext",),
    ),
    EventKind.STOP: EventSpec(
        kind=EventKind.STOP,
        input_fields=("stop_hook_active",),
    ),
    EventKind.SUBAGENT_STOP: EventSpec(
        kind=EventKind.SUBAGENT_STOP,
        input_fields=("stop_hook_active",),
    ),
    EventKind.SESSION_START: EventSpec(
        kind=EventKind.SESSION_START,
        input_fields=("source",),
        payload_fields=("additionalContext",),
    ),
    # Cleanup only: a SessionEnd hook can never hold up termination.
    EventKind.SESSION_END: EventSpec(
        kind=EventKind.SESSION_END,
        input_fields=("reason",),
        halt_exit_code=0,
    ),
    EventKind.NOTIFICATION: EventSpec(
        kind=EventKind.NOTIFICATION,
        input_fields=("message",),
    ),
    EventKind.PRE_COMPACT: EventSpec(
        kind=EventKind.PRE_COMPACT,
        input_fields=("trigger", "custom_instructions"),
    ),
}


def ensure_exhaustive(table: dict[EventKind, object], name: str) -> None:
    """Fail loudly if a per-kind lookup table misses an event kind."""
    missing = [kind.value for kind in EventKind if kind not in table]
    if missing:
        raise RuntimeError(f"{name} has no entry for: {', '.join(missing)}")


ensure_exhaustive(EVENT_SPECS, "EVENT_SPECS")


def coerce_kind(value: EventKind | str) -> EventKind:
    """Resolve an event name (e.g. ``"PreToolUse"``) to its ``EventKind``.

    Raises:
        VerdictError: If the name is not a known event.
    """
    if isinstance(value, EventKind):
        return value
    try:
        return EventKind(value)
    except ValueError:
        raise VerdictError(f"Unknown hook event: {value!r}") from None


def spec_for(kind: EventKind | str) -> EventSpec:
    return EVENT_SPECS[coerce_kind(kind)]
