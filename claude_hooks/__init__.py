"""claude-hooks - Typed hooks for Claude Code.

Write hooks as small Python classes; verdicts from several hooks on the
same event are merged and turned into the exit code the agent expects.
"""

__version__ = "1.0.0"
