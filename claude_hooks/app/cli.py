"""claude-hooks developer CLI.

Run, try out and debug hooks outside the agent:
- `claude-hooks run EVENT HANDLER...`: same as the production entry point
- `claude-hooks sample HANDLER`: run a hook against generated sample input
- `claude-hooks merge EVENT FILE...`: merge saved hook outputs
- `claude-hooks config`: show the effective configuration
"""

from __future__ import annotations

import argparse
import io
import json
import os
import sys
from typing import Any

from ..config import ConfigLoader
from ..hooks.handler import Hook
from ..hooks.runner import Handler, HandlerLoadError, load_handler, run_hooks
from ..output.errors import VerdictError
from ..output.exit_codes import resolve_exit
from ..output.merge import merge_verdicts
from ..output.registry import EventKind, coerce_kind
from ..output.verdict import Verdict

SAMPLE_FIELDS: dict[EventKind, dict[str, Any]] = {
    EventKind.PRE_TOOL_USE: {"tool_name": "Bash", "tool_input": {"command": "ls"}},
    EventKind.POST_TOOL_USE: {
        "tool_name": "Bash",
        "tool_input": {"command": "ls"},
        "tool_response": {"stdout": "", "stderr": "", "interrupted": False},
    },
    EventKind.USER_PROMPT_SUBMIT: {"prompt": "test prompt"},
    EventKind.STOP: {"stop_hook_active": False},
    EventKind.SUBAGENT_STOP: {"stop_hook_active": False},
    EventKind.SESSION_START: {"source": "startup"},
    EventKind.SESSION_END: {"reason": "other"},
    EventKind.NOTIFICATION: {"message": "test notification"},
    EventKind.PRE_COMPACT: {"trigger": "manual", "custom_instructions": ""},
}


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="claude-hooks",
        description="claude-hooks - run, test and merge Claude Code hooks",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version="%(prog)s 1.0.0",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output",
    )

    subparsers = parser.add_subparsers(dest="command")

    run = subparsers.add_parser("run", help="Run hooks for an event with JSON input on stdin")
    run.add_argument("event", help="Hook event, e.g. PreToolUse")
    run.add_argument("handlers", nargs="+", help="Handlers as package.module:Name")

    sample = subparsers.add_parser("sample", help="Run a hook against sample input")
    sample.add_argument("handler", help="Handler as package.module:Name")
    sample.add_argument(
        "--event",
        help="Hook event (required for plain function handlers)",
    )
    sample.add_argument(
        "--set",
        dest="overrides",
        action="append",
        default=[],
        metavar="KEY=VALUE",
        help="Override an input field; VALUE is parsed as JSON when possible",
    )

    merge = subparsers.add_parser("merge", help="Merge saved hook outputs for one event")
    merge.add_argument("event", help="Hook event the outputs belong to")
    merge.add_argument("files", nargs="+", help="JSON files holding hook outputs")

    subparsers.add_parser("config", help="Show the effective configuration")

    return parser


def main(args: list[str] | None = None) -> int:
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.debug:
        os.environ["CLAUDE_HOOKS_DEBUG"] = "1"

    if parsed.command == "run":
        return cmd_run(parsed)
    if parsed.command == "sample":
        return cmd_sample(parsed)
    if parsed.command == "merge":
        return cmd_merge(parsed)
    if parsed.command == "config":
        return cmd_config()

    parser.print_help()
    return 1


def cmd_run(args: argparse.Namespace) -> int:
    try:
        event = coerce_kind(args.event)
        handlers = [load_handler(ref) for ref in args.handlers]
    except (VerdictError, HandlerLoadError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return run_hooks(event, handlers, config=ConfigLoader().config)


def _parse_override(item: str) -> tuple[str, Any]:
    key, sep, raw = item.partition("=")
    if not sep or not key:
        raise ValueError(f"Expected KEY=VALUE, got {item!r}")
    try:
        return key, json.loads(raw)
    except json.JSONDecodeError:
        return key, raw


def sample_input(event: EventKind, overrides: dict[str, Any] | None = None) -> dict[str, Any]:
    """Build a plausible input document for ``event``."""
    data: dict[str, Any] = {
        "session_id": "test-session",
        "transcript_path": "/tmp/test_transcript.md",
        "cwd": os.getcwd(),
        "hook_event_name": event.value,
        **SAMPLE_FIELDS[event],
    }
    data.update(overrides or {})
    return data


def _handler_event(handler: Handler, event: str | None) -> EventKind:
    if isinstance(handler, type) and issubclass(handler, Hook):
        return handler.event
    if not event:
        raise VerdictError("--event is required for function handlers")
    return coerce_kind(event)


def cmd_sample(args: argparse.Namespace) -> int:
    try:
        handler = load_handler(args.handler)
        event = _handler_event(handler, args.event)
        overrides = dict(_parse_override(item) for item in args.overrides)
    except (VerdictError, HandlerLoadError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    stdin = io.StringIO(json.dumps(sample_input(event, overrides)))
    code = run_hooks(event, [handler], stdin=stdin, config=ConfigLoader().config)
    print(f"Exit code: {code}", file=sys.stderr)
    return code


def cmd_merge(args: argparse.Namespace) -> int:
    config = ConfigLoader().config
    try:
        event = coerce_kind(args.event)
        verdicts = []
        for path in args.files:
            with open(path, encoding="utf-8") as f:
                verdicts.append(Verdict.from_json(event, f.read()))
        merged = merge_verdicts(event, verdicts)
        resolution = resolve_exit(merged, config.exit_policy)
    except (OSError, VerdictError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(json.dumps(merged.to_dict(), indent=2))
    print(f"Exit code: {resolution.code} ({resolution.stream.value})")
    return 0


def cmd_config() -> int:
    print(json.dumps(ConfigLoader().config.to_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
