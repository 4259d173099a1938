"""Hook handling for claude-hooks.

Provides the hook protocol implementation for Claude Code.
"""

from .types import (
    HookEventName,
    HookInput,
    PreToolUseInput,
    PostToolUseInput,
    SessionStartInput,
    SessionEndInput,
    UserPromptSubmitInput,
    StopInput,
    SubagentStopInput,
    NotificationInput,
    PreCompactInput,
)
from .io import (
    HookInputError,
    parse_input,
    read_input,
    read_input_as,
    emit_verdict,
    log_debug,
)
from .handler import (
    Hook,
    PreToolUseHook,
    PostToolUseHook,
    UserPromptSubmitHook,
    StopHook,
    SubagentStopHook,
    SessionStartHook,
    SessionEndHook,
    NotificationHook,
    PreCompactHook,
)
from .runner import HandlerLoadError, load_handler, run_hooks

__all__ = [
    "HookEventName",
    "HookInput",
    "PreToolUseInput",
    "PostToolUseInput",
    "SessionStartInput",
    "SessionEndInput",
    "UserPromptSubmitInput",
    "StopInput",
    "SubagentStopInput",
    "NotificationInput",
    "PreCompactInput",
    "HookInputError",
    "parse_input",
    "read_input",
    "read_input_as",
    "emit_verdict",
    "log_debug",
    "Hook",
    "PreToolUseHook",
    "PostToolUseHook",
    "UserPromptSubmitHook",
    "StopHook",
    "SubagentStopHook",
    "SessionStartHook",
    "SessionEndHook",
    "NotificationHook",
    "PreCompactHook",
    "HandlerLoadError",
    "load_handler",
    "run_hooks",
]
