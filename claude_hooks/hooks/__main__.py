"""Entry point for running hooks via: python3 -m claude_hooks.hooks <event> <handler>...

This is the command registered in the agent's hook settings. Handlers are
``package.module:Name`` references, run in the order given. It implements
the hook protocol:
- Exit 0: Allow (JSON on stdout)
- Exit 1: Non-blocking error / halt (JSON on stderr)
- Exit 2: Block, or force a Stop hook to continue (JSON on stderr)
"""

from __future__ import annotations

import sys


def main(argv: list[str] | None = None) -> int:
    """Main entry point for hook processing."""
    args = sys.argv[1:] if argv is None else argv
    if len(args) < 2:
        print("Usage: python3 -m claude_hooks.hooks <event> <module:Handler> [...]", file=sys.stderr)
        print("Events: PreToolUse, PostToolUse, UserPromptSubmit, Stop, SubagentStop,", file=sys.stderr)
        print("        SessionStart, SessionEnd, Notification, PreCompact", file=sys.stderr)
        return 1

    # Import lazily to minimize startup time
    from ..output.errors import VerdictError
    from ..output.registry import coerce_kind
    from .runner import HandlerLoadError, load_handler, run_hooks

    try:
        event = coerce_kind(args[0])
        handlers = [load_handler(ref) for ref in args[1:]]
    except (VerdictError, HandlerLoadError) as e:
        print(f"[claude-hooks] {e}", file=sys.stderr)
        return 1

    return run_hooks(event, handlers)


if __name__ == "__main__":
    sys.exit(main())
