"""PreToolUse policy guarding dangerous git / GitHub actions.

Register it with::

    python3 -m claude_hooks.hooks PreToolUse claude_hooks.policies.git_guard:GitGuard
"""

from __future__ import annotations

import re

from ..hooks.handler import PreToolUseHook

BLOCKED_TOOL_TIP = (
    "If they are sure they want to proceed, the user should run the command themselves "
    "using `!` (e.g. `!gh pr merge`, `!git push --force`, etc...)"
)

MCP_ALWAYS_BLOCKED = {
    "mcp__github__delete_repository",
    "mcp__github__delete_file",
}
MCP_OWNER_RESTRICTED = {
    "mcp__github__merge_pull_request",
    "mcp__github__update_pull_request",
}
MCP_DRAFT_REQUIRED = {
    "mcp__github__create_pull_request",
}

ALWAYS_BLOCKED = [
    re.compile(p)
    for p in (
        r"gh\s+pr\s+merge.*--rebase",
        r"gh\s+repo\s+delete",
        r"gh\s+secret\s+(set|delete)",
        r"git\s+push\s+.*(--force|-f\b)",
        r"git\s+reset\s+--hard",
        r"git\s+clean\s+-[fd]",
        r"git\s+reflog\s+expire",
        r"git\s+filter-branch",
        r"git\s+checkout\s+--\s+\.",
    )
]
REQUIRES_PERMISSION = [
    re.compile(p)
    for p in (
        r"gh\s+api",
        r"git\s+branch\s+(-D|-d|--delete)",
        r"git\s+rebase\s+(master|main)",
        r"git\s+commit\s+--amend",
        r"git\s+rebase\s+-i",
    )
]
OWNER_RESTRICTED_PR = ("gh pr merge", "gh pr edit", "gh pr close", "gh pr ready", "gh pr lock")
DRAFT_REQUIRED_PR = ("gh pr create",)

_REMOTE_BRANCH_DELETE = re.compile(r"git\s+push.*(--delete|-d|-D)")
_DELETED_BRANCH = re.compile(r"(?:--delete|-d|-D)\s+(\S+)")


class GitGuard(PreToolUseHook):
    """Deny destructive git/gh commands and ask before risky ones."""

    def call(self):
        self.log(f"Input data: {self.input_data!r}", level="debug")

        if self.tool_name.startswith("mcp__github__"):
            self._validate_mcp_tool()
        elif self.tool_name == "Bash":
            self.log(f"Checking tool: {self.tool_name}({self.command})")
            self._validate_bash_command()
        else:
            self.approve_tool(f"Tool {self.tool_name} is allowed")

        return self.verdict

    @property
    def command(self) -> str:
        command = self.tool_input.get("command")
        return command.strip() if isinstance(command, str) else ""

    def block_with_tip(self, message: str) -> None:
        self.block_tool(f"{message}\n{BLOCKED_TOOL_TIP}")

    def _validate_mcp_tool(self) -> None:
        if self.tool_name in MCP_ALWAYS_BLOCKED:
            self.block_with_tip(f"{self.tool_name} is dangerous and not allowed.")
        elif self.tool_name in MCP_OWNER_RESTRICTED:
            self.ask_for_permission(f"{self.tool_name} changes a pull request; confirm you own it")
        elif self.tool_name in MCP_DRAFT_REQUIRED:
            if self.tool_input.get("draft") is True:
                self.approve_tool("PR creation allowed (draft mode)")
            else:
                self.block_with_tip("PR creation must use draft: true. All PRs should be created as drafts.")
        else:
            self.approve_tool("Safe github MCP call")

    def _validate_bash_command(self) -> None:
        command = self.command
        if any(p.match(command) for p in ALWAYS_BLOCKED):
            self.block_with_tip(f"Command blocked: {command} - dangerous pattern.")
        elif any(p.match(command) for p in REQUIRES_PERMISSION):
            self.ask_for_permission(f"Command requires permission: {command}")
        elif command.startswith(OWNER_RESTRICTED_PR):
            self.ask_for_permission(f"'{command}' changes a pull request; confirm you own it")
        elif _REMOTE_BRANCH_DELETE.match(command):
            self._validate_branch_deletion(command)
        elif command.startswith(DRAFT_REQUIRED_PR):
            if "--draft" in command:
                self.approve_tool("PR creation allowed (draft mode)")
            else:
                self.block_with_tip("gh pr create must use --draft flag. All PRs should be created as drafts.")
        else:
            self.approve_tool("Safe bash command")

    def _validate_branch_deletion(self, command: str) -> None:
        match = _DELETED_BRANCH.search(command)
        if not match:
            self.ask_for_permission("Could not determine branch name")
        elif "origin" in command or "upstream" in command:
            self.block_with_tip(f"Cannot delete remote branch '{match.group(1)}'")
        else:
            self.approve_tool("Branch deletion allowed")
