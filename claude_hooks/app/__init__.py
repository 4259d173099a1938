"""Command-line interface for claude-hooks."""
