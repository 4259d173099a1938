"""Base classes for writing hooks.

A hook subclasses the class for its event, implements ``call()`` and uses
the helper methods to fill in its verdict::

    class BlockSecrets(PreToolUseHook):
        def call(self):
            if ".env" in self.tool_input.get("file_path", ""):
                self.block_tool("Refusing to touch .env files")
            return self.verdict

Each instance starts from a fresh default verdict, so hooks run one after
another never see each other's answers.
"""

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, ClassVar, Mapping

from ..config import ConfigLoader, HooksConfig
from ..output.errors import VerdictError
from ..output.registry import Decision, EventKind, PermissionDecision, ensure_exhaustive
from ..output.verdict import Verdict
from ..utils.log import LogLevel, SessionLogger
from .io import missing_fields, parse_input
from .types import BaseHookInput, HookInput


class Hook:
    """Common behaviour for all hook classes."""

    event: ClassVar[EventKind]

    def __init__(
        self,
        input_data: Mapping[str, Any] | BaseHookInput | None = None,
        config: HooksConfig | None = None,
    ):
        """Initialize a hook for one invocation.

        Args:
            input_data: Decoded stdin document or an already typed input
            config: Effective configuration; loaded from disk/env when omitted
        """
        if isinstance(input_data, BaseHookInput):
            raw = asdict(input_data)
        else:
            raw = dict(input_data or {})

        self.input_data: dict[str, Any] = raw
        self.hook_input: HookInput = parse_input(raw, self.event)
        self.config = config or ConfigLoader().config
        self.verdict = Verdict(kind=self.event)
        self.logger = SessionLogger(self.session_id, type(self).__name__, self.config.log_directory)

        self._validate_input()

    def call(self) -> Verdict | Mapping[str, Any] | None:
        """Run the hook's logic. Subclasses must override."""
        raise NotImplementedError("Subclasses must implement call()")

    def run(self) -> Verdict:
        """Run ``call()`` and return the verdict it produced."""
        result = self.call()
        if result is None or result is self.verdict:
            return self.verdict
        if isinstance(result, Verdict):
            return result
        if isinstance(result, Mapping):
            return Verdict.from_dict(self.event, result)
        raise VerdictError(f"{type(self).__name__}.call() returned {type(result).__name__}")

    # === Common input data ===

    @property
    def session_id(self) -> str:
        return self.hook_input.session_id

    @property
    def transcript_path(self) -> str:
        return self.hook_input.transcript_path

    @property
    def cwd(self) -> str:
        return self.hook_input.cwd

    @property
    def hook_event_name(self) -> str:
        return self.event.value

    def read_transcript(self) -> str:
        """Return the transcript contents, or "" if it cannot be read."""
        path = Path(self.transcript_path) if self.transcript_path else None
        if path is None or not path.exists():
            self.log(f"Transcript file not found at {self.transcript_path}", level="warn")
            return ""
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            self.log(f"Error reading transcript file at {path}: {e}", level="error")
            return ""

    # === Common output helpers ===

    def allow_continue(self) -> None:
        self.verdict.continue_ = True

    def prevent_continue(self, reason: str) -> None:
        self.verdict.continue_ = False
        self.verdict.stop_reason = reason

    def suppress_output(self) -> None:
        """Hide stdout from transcript mode."""
        self.verdict.suppress_output = True

    def show_output(self) -> None:
        self.verdict.suppress_output = False

    def clear_specifics(self) -> None:
        self.verdict.specific = None

    # === Config and utility methods ===

    @property
    def base_dir(self) -> Path:
        return self.config.base_dir

    def path_for(self, relative_path: str | Path) -> Path:
        return self.config.path_for(relative_path)

    def log(self, message: str, level: LogLevel = "info") -> None:
        self.logger.log(message, level)

    def _validate_input(self) -> None:
        missing = missing_fields(self.input_data, self.event)
        if missing:
            self.log(
                f"Missing required input fields for {self.event.value}: {', '.join(missing)}",
                level="warn",
            )


class PreToolUseHook(Hook):
    event = EventKind.PRE_TOOL_USE

    @property
    def tool_name(self) -> str:
        return self.hook_input.tool_name

    @property
    def tool_input(self) -> dict[str, Any]:
        return self.hook_input.tool_input

    def _set_permission(self, decision: PermissionDecision, reason: str) -> None:
        self.verdict.set_payload(permissionDecision=decision.value, permissionDecisionReason=reason)

    def approve_tool(self, reason: str = "") -> None:
        self._set_permission(PermissionDecision.ALLOW, reason)

    def block_tool(self, reason: str = "") -> None:
        self._set_permission(PermissionDecision.DENY, reason)

    def ask_for_permission(self, reason: str = "") -> None:
        self._set_permission(PermissionDecision.ASK, reason)


class PostToolUseHook(Hook):
    event = EventKind.POST_TOOL_USE

    @property
    def tool_name(self) -> str:
        return self.hook_input.tool_name

    @property
    def tool_input(self) -> dict[str, Any]:
        return self.hook_input.tool_input

    @property
    def tool_response(self) -> dict[str, Any]:
        return self.hook_input.tool_response

    def block_tool(self, reason: str = "") -> None:
        self.verdict.decision = Decision.BLOCK
        self.verdict.reason = reason

    def approve_tool(self) -> None:
        self.verdict.decision = None
        self.verdict.reason = None


class _ContextMixin:
    verdict: Verdict

    def add_additional_context(self, context: str) -> None:
        self.verdict.set_payload(additionalContext=context)

    add_context = add_additional_context

    def empty_additional_context(self) -> None:
        self.verdict.specific = None


class UserPromptSubmitHook(_ContextMixin, Hook):
    event = EventKind.USER_PROMPT_SUBMIT

    @property
    def prompt(self) -> str:
        return self.hook_input.prompt

    def block_prompt(self, reason: str = "") -> None:
        self.verdict.decision = Decision.BLOCK
        self.verdict.reason = reason

    def unblock_prompt(self) -> None:
        self.verdict.decision = None
        self.verdict.reason = None


class StopHook(Hook):
    """Stop hook.

    Note: ``block`` here keeps the agent running; ``reason`` becomes its
    next instructions.
    """
    event = EventKind.STOP

    @property
    def stop_hook_active(self) -> bool:
        return self.hook_input.stop_hook_active

    def continue_with_instructions(self, instructions: str) -> None:
        self.verdict.decision = Decision.BLOCK
        self.verdict.reason = instructions

    block = continue_with_instructions

    def ensure_stopping(self) -> None:
        self.verdict.decision = None
        self.verdict.reason = None


class SubagentStopHook(StopHook):
    event = EventKind.SUBAGENT_STOP


class SessionStartHook(_ContextMixin, Hook):
    event = EventKind.SESSION_START

    @property
    def source(self) -> str:
        return self.hook_input.source


class SessionEndHook(Hook):
    """SessionEnd hook. Cleanup only: it cannot stop the session ending."""
    event = EventKind.SESSION_END

    @property
    def reason(self) -> str:
        return self.hook_input.reason


class NotificationHook(Hook):
    event = EventKind.NOTIFICATION

    @property
    def message(self) -> str:
        return self.hook_input.message


class PreCompactHook(Hook):
    event = EventKind.PRE_COMPACT

    @property
    def trigger(self) -> str:
        return self.hook_input.trigger

    @property
    def custom_instructions(self) -> str:
        return self.hook_input.custom_instructions


HOOK_CLASSES: dict[EventKind, type[Hook]] = {
    cls.event: cls
    for cls in (
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
}

ensure_exhaustive(HOOK_CLASSES, "hook classes")
