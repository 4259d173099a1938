"""UserPromptSubmit policy that injects project rules as extra context."""

from __future__ import annotations

from ..hooks.handler import UserPromptSubmitHook

RULES_DIR = "rules"


class AppendRules(UserPromptSubmitHook):
    """Append every ``<base_dir>/rules/*.md`` file to the prompt's context."""

    def call(self):
        rule_content = self.read_rule_content()
        if rule_content:
            self.add_additional_context(rule_content)
            self.log(f"Added rule content as additional context ({len(rule_content)} characters)")
        else:
            self.log(f"No rule content found in {self.path_for(RULES_DIR)}", level="warn")
        return self.verdict

    def read_rule_content(self) -> str:
        rules_dir = self.path_for(RULES_DIR)
        if not rules_dir.is_dir():
            return ""

        parts = []
        for path in sorted(rules_dir.glob("*.md")):
            try:
                content = path.read_text(encoding="utf-8").strip()
            except OSError as e:
                self.log(f"Cannot read rule file {path}: {e}", level="error")
                continue
            if content:
                parts.append(content)
        return "\n\n".join(parts)
