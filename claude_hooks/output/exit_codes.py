"""Map a final verdict to the process exit code and output stream.

The agent learns how serious a hook's answer is from the exit code alone:

- Exit 0: proceed; the JSON body goes to stdout.
- Exit 1: non-blocking error or halt; the body goes to stderr.
- Exit 2: block (or, for Stop hooks, force the agent to continue); the
  body goes to stderr and is shown to the agent.

Resolution order per event: ``continue: false`` first, then the event's
own decision, then the default (0, stdout). SessionEnd hooks always exit 0.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Literal

from .model import HookOutput
from .registry import EVENT_SPECS, EventKind, ensure_exhaustive
from .verdict import Verdict

AskMode = Literal["passthrough", "prompt"]
ASK_MODES: tuple[str, ...] = ("passthrough", "prompt")

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_BLOCK = 2


class Stream(str, Enum):
    STDOUT = "stdout"
    STDERR = "stderr"


@dataclass(frozen=True, slots=True)
class ExitPolicy:
    """Site-wide choices the exit table leaves open.

    ``ask_mode`` decides what a PreToolUse ``ask`` verdict exits with:
    ``passthrough`` exits 0 so the agent raises its own permission prompt,
    ``prompt`` exits 2 so the reason is shown on stderr.
    """
    ask_mode: AskMode = "passthrough"


@dataclass(frozen=True, slots=True)
class ExitResolution:
    code: int
    stream: Stream

    @classmethod
    def for_code(cls, code: int) -> ExitResolution:
        return cls(code=code, stream=Stream.STDERR if code else Stream.STDOUT)


def _pre_tool_use(output: HookOutput, policy: ExitPolicy) -> int:
    if output.denied:
        return EXIT_BLOCK
    if output.should_ask_permission and policy.ask_mode == "prompt":
        return EXIT_BLOCK
    return EXIT_OK


def _post_tool_use(output: HookOutput, policy: ExitPolicy) -> int:
    return EXIT_ERROR if output.blocked else EXIT_OK


def _user_prompt_submit(output: HookOutput, policy: ExitPolicy) -> int:
    return EXIT_BLOCK if output.blocked else EXIT_OK


def _stop(output: HookOutput, policy: ExitPolicy) -> int:
    # block on a stop event means "keep going".
    return EXIT_BLOCK if output.should_continue else EXIT_OK


def _no_decision(output: HookOutput, policy: ExitPolicy) -> int:
    return EXIT_OK


_DECISION_RULES: dict[EventKind, Callable[[HookOutput, ExitPolicy], int]] = {
    EventKind.PRE_TOOL_USE: _pre_tool_use,
    EventKind.POST_TOOL_USE: _post_tool_use,
    EventKind.USER_PROMPT_SUBMIT: _user_prompt_submit,
    EventKind.STOP: _stop,
    EventKind.SUBAGENT_STOP: _stop,
    EventKind.SESSION_START: _no_decision,
    EventKind.SESSION_END: _no_decision,
    EventKind.NOTIFICATION: _no_decision,
    EventKind.PRE_COMPACT: _no_decision,
}

ensure_exhaustive(_DECISION_RULES, "exit table")


def resolve_exit(verdict: Verdict, policy: ExitPolicy | None = None) -> ExitResolution:
    """Derive ``(code, stream)`` for a final verdict.

    Args:
        verdict: Merged verdict for the event
        policy: Exit policy; defaults to ``ExitPolicy()``

    Returns:
        ExitResolution; the stream is stderr exactly when the code is non-zero
    """
    policy = policy or ExitPolicy()
    if verdict.kind is EventKind.SESSION_END:
        return ExitResolution.for_code(EXIT_OK)
    if not verdict.continue_:
        return ExitResolution.for_code(EVENT_SPECS[verdict.kind].halt_exit_code)
    return ExitResolution.for_code(_DECISION_RULES[verdict.kind](HookOutput(verdict, policy), policy))


def error_resolution(kind: EventKind | None = None) -> ExitResolution:
    """Exit code and stream for a hook that failed to run."""
    if kind is None:
        return ExitResolution.for_code(EXIT_ERROR)
    return ExitResolution.for_code(EVENT_SPECS[kind].error_exit_code)
