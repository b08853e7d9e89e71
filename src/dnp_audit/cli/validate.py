"""CLI command for compose policy validation."""

from pathlib import Path
from typing import Optional

import typer

from dnp_audit.cli.utils import console, exit_on_error
from dnp_audit.renderers import OutputFormat, RenderContext, get_renderer
from dnp_audit.renderers.terminal import TerminalRenderer


def validate_cmd(
    dir: Path = typer.Option(
        Path("."),
        "--dir",
        "-d",
        help="Package directory",
    ),
    compose_file_name: Optional[str] = typer.Option(
        None,
        "--compose-file-name",
        help="Compose file name (default from config, docker-compose.yml)",
    ),
    format: Optional[OutputFormat] = typer.Option(
        None,
        "--format",
        "-f",
        help="Output format (terminal, json, markdown)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file path",
    ),
) -> None:
    """
    Validate a package compose file against the platform policy.

    Loads the compose file and manifest from the package directory and
    reports every policy violation at once. Exits with code 1 when the
    compose file is rejected.

    Example:
        dnp-audit validate --dir ./my-package
    """
    from dnp_audit.core.validator import ComposeValidator
    from dnp_audit.files import read_compose, read_manifest
    from dnp_audit.utils.config import get_config

    config = get_config()
    compose_file_name = compose_file_name or config.files.compose_file_name
    format = format or OutputFormat(config.output.default_format)

    with exit_on_error():
        compose = read_compose(dir, compose_file_name)
        manifest = read_manifest(dir, config.files.manifest_file_names)

    result = ComposeValidator().validate(compose, manifest)

    context = RenderContext(
        format=format,
        output_path=output,
        verbose=config.output.verbose,
        color=config.output.color,
    )
    renderer = TerminalRenderer(console) if format == OutputFormat.TERMINAL else get_renderer(format)

    if output:
        renderer.render_to_file(result, context)
        console.print(f"Report written to {output}")
    elif format == OutputFormat.TERMINAL:
        renderer.render(result, context)
    else:
        typer.echo(renderer.render(result, context))

    if not result.passed:
        raise typer.Exit(1)


def params_cmd() -> None:
    """Show the policy parameters compose files are checked against."""
    from rich.table import Table

    from dnp_audit.knowledge import get_policy_params

    params = get_policy_params()

    table = Table(title="Policy Parameters", show_header=False)
    table.add_column("Parameter", style="bold")
    table.add_column("Value")
    table.add_row("Minimum compose version", params.minimum_compose_version)
    table.add_row("DNS service", params.dns_service)
    table.add_row("Whitelisted networks", "\n".join(params.whitelisted_networks))
    table.add_row("Core aliases", "\n".join(params.core_aliases))
    table.add_row("Safe service keys", ", ".join(params.safe_keys))
    console.print(table)
