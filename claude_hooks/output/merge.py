"""Combine the verdicts of several hooks registered for the same event.

Hooks run one after another and each returns its own verdict; the agent
only reads one. ``merge_verdicts`` folds them in execution order:

- ``continue`` is false if any hook stopped, ``stopReason`` values are
  joined with ``"; "`` and ``suppressOutput`` is sticky.
- Each event kind then applies its own rule (most restrictive permission
  wins for PreToolUse, any ``block`` wins for the decision events, extra
  context is concatenated).

Inputs are never modified.
"""

from __future__ import annotations

from typing import Callable, Iterable

from .errors import VerdictError, VerdictKindMismatch
from .registry import Decision, EventKind, PermissionDecision, coerce_kind, ensure_exhaustive
from .verdict import Verdict

REASON_SEPARATOR = "; "
CONTEXT_SEPARATOR = "\n\n"


def _join(values: Iterable[object], separator: str = REASON_SEPARATOR) -> str:
    return separator.join(v for v in values if isinstance(v, str) and v)


def _merge_base(kind: EventKind, verdicts: list[Verdict]) -> Verdict:
    return Verdict(
        kind=kind,
        continue_=all(v.continue_ for v in verdicts),
        stop_reason=_join(v.stop_reason for v in verdicts),
        suppress_output=any(v.suppress_output for v in verdicts),
    )


def _permission_of(verdict: Verdict) -> PermissionDecision | None:
    raw = verdict.payload_value("permissionDecision")
    if raw is None:
        return None
    try:
        return PermissionDecision(raw)
    except ValueError:
        raise VerdictError(f"Unknown permissionDecision: {raw!r}") from None


def _merge_pre_tool_use(merged: Verdict, verdicts: list[Verdict]) -> None:
    decisions = [d for d in map(_permission_of, verdicts) if d is not None]
    if not decisions:
        return
    merged.set_payload(
        permissionDecision=max(decisions, key=lambda d: d.rank).value,
        permissionDecisionReason=_join(v.payload_value("permissionDecisionReason") for v in verdicts),
    )


def _merge_blocking_decision(merged: Verdict, verdicts: list[Verdict]) -> None:
    if any(v.decision is Decision.BLOCK for v in verdicts):
        merged.decision = Decision.BLOCK
    merged.reason = _join(v.reason for v in verdicts) or None


def _merge_additional_context(merged: Verdict, verdicts: list[Verdict]) -> None:
    context = _join((v.payload_value("additionalContext") for v in verdicts), CONTEXT_SEPARATOR)
    if context:
        merged.set_payload(additionalContext=context)


def _merge_user_prompt_submit(merged: Verdict, verdicts: list[Verdict]) -> None:
    _merge_blocking_decision(merged, verdicts)
    _merge_additional_context(merged, verdicts)


def _merge_stop(merged: Verdict, verdicts: list[Verdict]) -> None:
    # Only blocking hooks carry continuation instructions.
    blocking = [v for v in verdicts if v.decision is Decision.BLOCK]
    if blocking:
        merged.decision = Decision.BLOCK
        merged.reason = _join(v.reason for v in blocking) or None


def _base_only(merged: Verdict, verdicts: list[Verdict]) -> None:
    return None


_MERGERS: dict[EventKind, Callable[[Verdict, list[Verdict]], None]] = {
    EventKind.PRE_TOOL_USE: _merge_pre_tool_use,
    EventKind.POST_TOOL_USE: _merge_blocking_decision,
    EventKind.USER_PROMPT_SUBMIT: _merge_user_prompt_submit,
    EventKind.STOP: _merge_stop,
    EventKind.SUBAGENT_STOP: _merge_stop,
    EventKind.SESSION_START: _merge_additional_context,
    EventKind.SESSION_END: _base_only,
    EventKind.NOTIFICATION: _base_only,
    EventKind.PRE_COMPACT: _base_only,
}

ensure_exhaustive(_MERGERS, "merge table")


def merge_verdicts(kind: EventKind | str, verdicts: Iterable[Verdict | None]) -> Verdict:
    """Merge hook verdicts for one event into a single verdict.

    Args:
        kind: Event all verdicts were produced for
        verdicts: Verdicts in hook execution order; ``None`` entries are skipped

    Returns:
        A new verdict. With no input it is the default verdict for ``kind``;
        with one input it is an equal copy of it.

    Raises:
        VerdictKindMismatch: If a verdict belongs to another event kind
    """
    kind = coerce_kind(kind)
    present = [v for v in verdicts if v is not None]

    for verdict in present:
        if verdict.kind is not kind:
            raise VerdictKindMismatch(kind.value, verdict.kind.value)

    if not present:
        return Verdict(kind=kind)
    if len(present) == 1:
        return present[0].copy()

    merged = _merge_base(kind, present)
    _MERGERS[kind](merged, present)
    return merged
