"""Tests for the typed HookOutput view."""

import pytest

from claude_hooks.output import (
    Decision,
    EventKind,
    ExitPolicy,
    HookOutput,
    PermissionDecision,
    Stream,
    Verdict,
    VerdictError,
)


class TestPreToolUseOutput:
    def test_defaults_to_allow(self):
        output = HookOutput.for_kind("PreToolUse", {})

        assert output.permission_decision is PermissionDecision.ALLOW
        assert output.allowed is True
        assert output.denied is False
        assert output.permission_reason == ""

    def test_deny(self):
        output = HookOutput.for_kind(
            EventKind.PRE_TOOL_USE,
            {"hookSpecificOutput": {"permissionDecision": "deny", "permissionDecisionReason": "rm -rf"}},
        )

        assert output.denied is True
        assert output.blocked is True
        assert output.permission_reason == "rm -rf"
        assert output.exit_code == 2
        assert output.output_stream is Stream.STDERR

    def test_ask_follows_policy(self):
        data = {"hookSpecificOutput": {"permissionDecision": "ask"}}

        assert HookOutput.for_kind(EventKind.PRE_TOOL_USE, data).exit_code == 0
        prompt = HookOutput.for_kind(EventKind.PRE_TOOL_USE, data, ExitPolicy(ask_mode="prompt"))
        assert prompt.should_ask_permission is True
        assert prompt.exit_code == 2

    def test_unknown_permission_raises(self):
        output = HookOutput.for_kind(EventKind.PRE_TOOL_USE, {"hookSpecificOutput": {"permissionDecision": "perhaps"}})

        with pytest.raises(VerdictError):
            output.permission_decision


class TestDecisionOutputs:
    def test_post_tool_use_blocked(self):
        output = HookOutput.for_kind(EventKind.POST_TOOL_USE, {"decision": "block", "reason": "Lint"})

        assert output.blocked is True
        assert output.decision is Decision.BLOCK
        assert output.reason == "Lint"
        assert output.exit_code == 1

    def test_user_prompt_submit_context(self):
        output = HookOutput.for_kind(
            EventKind.USER_PROMPT_SUBMIT,
            {"hookSpecificOutput": {"hookEventName": "UserPromptSubmit", "additionalContext": "rules"}},
        )

        assert output.blocked is False
        assert output.additional_context == "rules"
        assert output.exit_code == 0

    def test_stop_continue_instructions(self):
        output = HookOutput.for_kind(EventKind.STOP, {"decision": "block", "reason": "Write tests"})

        assert output.should_continue is True
        assert output.should_stop is False
        assert output.continue_instructions == "Write tests"
        assert output.exit_code == 2

    def test_for_kind_accepts_verdict(self):
        verdict = Verdict(kind=EventKind.SUBAGENT_STOP)

        output = HookOutput.for_kind(EventKind.SUBAGENT_STOP, verdict)

        assert output.verdict is verdict
        assert output.should_stop is True

    def test_for_kind_rejects_other_verdict(self):
        with pytest.raises(VerdictError):
            HookOutput.for_kind(EventKind.STOP, Verdict(kind=EventKind.NOTIFICATION))


class TestWrongKindAccessors:
    @pytest.mark.parametrize(
        "kind, accessor",
        [
            (EventKind.STOP, "permission_decision"),
            (EventKind.NOTIFICATION, "denied"),
            (EventKind.PRE_TOOL_USE, "should_continue"),
            (EventKind.SESSION_START, "decision"),
            (EventKind.STOP, "additional_context"),
            (EventKind.SESSION_END, "blocked"),
            (EventKind.POST_TOOL_USE, "continue_instructions"),
        ],
    )
    def test_raises(self, kind, accessor):
        output = HookOutput(Verdict(kind=kind))

        with pytest.raises(VerdictError):
            getattr(output, accessor)

    @pytest.mark.parametrize("kind", list(EventKind))
    def test_common_fields_available_everywhere(self, kind):
        output = HookOutput(Verdict(kind=kind))

        assert output.continue_ is True
        assert output.stop_reason == ""
        assert output.suppress_output is False
        assert output.hook_specific_output == {}
        assert output.to_dict() == {"continue": True, "stopReason": "", "suppressOutput": False}
