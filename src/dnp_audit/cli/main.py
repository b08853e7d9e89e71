"""Main CLI entry point for dnp-audit."""

import typer
from rich.console import Console

from dnp_audit.cli import end_to_end, validate

app = typer.Typer(
    name="dnp-audit",
    help="Validate third-party package compose files against the platform policy.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

console = Console()

app.command(name="validate")(validate.validate_cmd)
app.command(name="params")(validate.params_cmd)
app.command(name="test-end-to-end")(end_to_end.end_to_end_cmd)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-essential output"),
) -> None:
    """
    dnp-audit: validate package compose files before they reach the host fleet.

    - [bold]validate[/bold]: Check a package against the compose policy
    - [bold]params[/bold]: Show the policy whitelists
    - [bold]test-end-to-end[/bold]: Install and update a package on a test host
    """
    from dnp_audit.utils.logging import configure_logging

    if verbose:
        configure_logging(level="DEBUG")
    elif quiet:
        configure_logging(level="WARNING")
    else:
        configure_logging(level="INFO")


@app.command()
def version() -> None:
    """Show the dnp-audit version."""
    from dnp_audit import __version__

    console.print(f"dnp-audit version {__version__}")


if __name__ == "__main__":
    app()
