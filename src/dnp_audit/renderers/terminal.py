"""Terminal renderer for dnp-audit output."""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from dnp_audit.models.policy import ValidationResult
from dnp_audit.renderers.base import BaseRenderer, OutputFormat, RenderContext


class TerminalRenderer(BaseRenderer):
    """Renderer for rich terminal output.

    Prints to its console and returns an empty string. Use
    ``render_to_file`` to capture the output.
    """

    def __init__(self, console: Console | None = None) -> None:
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.TERMINAL

    def render(self, data: Any, context: RenderContext) -> str:
        if isinstance(data, ValidationResult):
            self._render_validation_result(data, context)
        else:
            self._console.print(data)
        return ""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        file_console = Console(record=True, force_terminal=context.color, width=120)
        original_console = self._console
        self._console = file_console

        try:
            self.render(data, context)
            context.output_path.write_text(file_console.export_text(styles=context.color), encoding="utf-8")
        finally:
            self._console = original_console

    def _render_validation_result(self, result: ValidationResult, context: RenderContext) -> None:
        self._console.print()

        status = "[bold green]PASSED[/bold green]" if result.passed else "[bold red]FAILED[/bold red]"
        self._console.print(
            Panel(
                f"[bold]Package:[/bold] {result.dnp_name}\n"
                f"[bold]Core:[/bold] {'yes' if result.is_core else 'no'}\n"
                f"[bold]Status:[/bold] {status}",
                title="Compose Validation Report",
            )
        )

        if result.passed:
            self._console.print()
            self._console.print("[green]No violations found![/green]")
            return

        self._console.print()
        table = Table(title=f"Violations ({len(result.violations)})")
        table.add_column("Kind", style="red")
        table.add_column("Service", style="bold")
        table.add_column("Message", max_width=80 if not context.verbose else None)

        for v in result.violations:
            table.add_row(v.kind.value, v.service or "-", v.message)

        self._console.print(table)
