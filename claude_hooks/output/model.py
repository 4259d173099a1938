"""Typed view over a verdict.

``HookOutput`` wraps a ``Verdict`` for a known event kind and exposes the
questions callers actually ask ("was the tool denied?", "must the agent
keep going?") so nobody has to poke at raw envelope fields.

Accessors are checked against the view's kind: asking a Stop verdict for
its permission decision raises ``VerdictError`` instead of answering
with a default.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

from .errors import VerdictError
from .registry import Decision, EventKind, PermissionDecision, coerce_kind
from .verdict import Verdict

if TYPE_CHECKING:
    from .exit_codes import ExitPolicy, ExitResolution, Stream

_TOOL_KINDS = (EventKind.PRE_TOOL_USE,)
_BLOCKING_KINDS = (EventKind.POST_TOOL_USE, EventKind.USER_PROMPT_SUBMIT)
_STOP_KINDS = (EventKind.STOP, EventKind.SUBAGENT_STOP)
_CONTEXT_KINDS = (EventKind.USER_PROMPT_SUBMIT, EventKind.SESSION_START)
_DECISION_KINDS = _BLOCKING_KINDS + _STOP_KINDS


class HookOutput:
    """Read-only view of a verdict for one event kind."""

    def __init__(self, verdict: Verdict, policy: ExitPolicy | None = None):
        self.verdict = verdict
        self.policy = policy

    @classmethod
    def for_kind(
        cls,
        kind: EventKind | str,
        data: Mapping[str, Any] | Verdict | None = None,
        policy: ExitPolicy | None = None,
    ) -> HookOutput:
        """Build a view from a raw envelope (or an existing verdict)."""
        kind = coerce_kind(kind)
        if isinstance(data, Verdict):
            if data.kind is not kind:
                raise VerdictError(f"Expected a {kind.value} verdict, got {data.kind.value}")
            return cls(data, policy)
        return cls(Verdict.from_dict(kind, data or {}), policy)

    @property
    def kind(self) -> EventKind:
        return self.verdict.kind

    def _require(self, kinds: tuple[EventKind, ...], name: str) -> None:
        if self.kind not in kinds:
            raise VerdictError(f"'{name}' is not defined for {self.kind.value} hooks")

    # === Common envelope ===

    @property
    def continue_(self) -> bool:
        return self.verdict.continue_

    @property
    def stop_reason(self) -> str:
        return self.verdict.stop_reason

    @property
    def suppress_output(self) -> bool:
        return self.verdict.suppress_output

    @property
    def hook_specific_output(self) -> dict[str, Any]:
        return dict(self.verdict.specific or {})

    # === PreToolUse ===

    @property
    def permission_decision(self) -> PermissionDecision:
        """Permission granted to the tool call; ``allow`` when none was given."""
        self._require(_TOOL_KINDS, "permission_decision")
        raw = self.verdict.payload_value("permissionDecision")
        if raw is None:
            return PermissionDecision.ALLOW
        try:
            return PermissionDecision(raw)
        except ValueError:
            raise VerdictError(f"Unknown permissionDecision: {raw!r}") from None

    @property
    def permission_reason(self) -> str:
        self._require(_TOOL_KINDS, "permission_reason")
        return self.verdict.payload_value("permissionDecisionReason") or ""

    @property
    def allowed(self) -> bool:
        return self.permission_decision is PermissionDecision.ALLOW

    @property
    def denied(self) -> bool:
        return self.permission_decision is PermissionDecision.DENY

    @property
    def should_ask_permission(self) -> bool:
        return self.permission_decision is PermissionDecision.ASK

    # === Decision events ===

    @property
    def decision(self) -> Decision | None:
        self._require(_DECISION_KINDS, "decision")
        return self.verdict.decision

    @property
    def reason(self) -> str:
        self._require(_DECISION_KINDS, "reason")
        return self.verdict.reason or ""

    @property
    def blocked(self) -> bool:
        """True if the hook blocked the action.

        For PreToolUse this means the tool was denied.
        """
        if self.kind is EventKind.PRE_TOOL_USE:
            return self.denied
        self._require(_BLOCKING_KINDS, "blocked")
        return self.verdict.decision is Decision.BLOCK

    # In Stop and SubagentStop hooks "block" blocks the *stopping*: the
    # agent is forced to continue with ``reason`` as its instructions.

    @property
    def should_continue(self) -> bool:
        self._require(_STOP_KINDS, "should_continue")
        return self.verdict.decision is Decision.BLOCK

    @property
    def should_stop(self) -> bool:
        return not self.should_continue

    @property
    def continue_instructions(self) -> str:
        self._require(_STOP_KINDS, "continue_instructions")
        return self.verdict.reason or ""

    # === Additional context ===

    @property
    def additional_context(self) -> str:
        self._require(_CONTEXT_KINDS, "additional_context")
        return self.verdict.payload_value("additionalContext") or ""

    # === Exit behaviour ===

    def resolve(self) -> ExitResolution:
        from .exit_codes import resolve_exit

        return resolve_exit(self.verdict, self.policy)

    @property
    def exit_code(self) -> int:
        return self.resolve().code

    @property
    def output_stream(self) -> Stream:
        return self.resolve().stream

    def to_dict(self) -> dict[str, Any]:
        return self.verdict.to_dict()

    def to_json(self) -> str:
        return self.verdict.to_json()

    def __repr__(self) -> str:
        return f"HookOutput({self.kind.value}, {self.verdict.to_dict()!r})"
