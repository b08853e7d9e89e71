"""Markdown renderer, used for pull request comments."""

from __future__ import annotations

from typing import Any

from dnp_audit.models.policy import ValidationResult
from dnp_audit.renderers.base import BaseRenderer, OutputFormat, RenderContext


class MarkdownRenderer(BaseRenderer):
    """Renderer for Markdown output format."""

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.MARKDOWN

    def render(self, data: Any, context: RenderContext) -> str:
        if not isinstance(data, ValidationResult):
            raise TypeError(f"Cannot render {type(data).__name__} as Markdown")

        status = "PASSED" if data.passed else "FAILED"
        lines = [
            "# Compose Validation Report",
            "",
            f"- **Package:** `{data.dnp_name}`",
            f"- **Core package:** {'yes' if data.is_core else 'no'}",
            f"- **Status:** **{status}**",
            "",
        ]

        if data.passed:
            lines.append("No violations found.")
            return "\n".join(lines) + "\n"

        lines.extend(
            [
                f"## Violations ({len(data.violations)})",
                "",
                "| Kind | Service | Message |",
                "|------|---------|---------|",
            ]
        )
        for v in data.violations:
            message = v.message.replace("|", "\\|")
            lines.append(f"| {v.kind.value} | {v.service or '-'} | {message} |")

        return "\n".join(lines) + "\n"
