"""Shared utilities for CLI commands."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer
from rich.console import Console
from rich.markup import escape

from dnp_audit.utils.errors import DnpAuditError

# Shared console instance
console = Console()


@contextmanager
def exit_on_error() -> Iterator[None]:
    """Print dnp-audit errors and exit with code 1."""
    try:
        yield
    except DnpAuditError as e:
        console.print(f"[red]Error:[/red] {escape(str(e.to_audit_error()))}")
        raise typer.Exit(1)

