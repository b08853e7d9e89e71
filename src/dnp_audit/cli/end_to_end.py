"""CLI command for end-to-end package tests."""

import json
from pathlib import Path
from typing import Any, Optional

import typer

from dnp_audit.cli.utils import console, exit_on_error


def _parse_environment_by_service(value: str) -> dict[str, Any]:
    try:
        environment = json.loads(value)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Invalid JSON: {e}", param_hint="--environment-by-service")
    if not isinstance(environment, dict):
        raise typer.BadParameter("Must be a JSON object", param_hint="--environment-by-service")
    return environment


def end_to_end_cmd(
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
    health_check_url: Optional[str] = typer.Option(
        None,
        "--health-check-url",
        help="Optional health check URL, the test fails if it does not return HTTP 200",
    ),
    error_logs_timeout: Optional[int] = typer.Option(
        None,
        "--error-logs-timeout",
        help="Seconds to wait for error logs to appear (default from config, 30)",
    ),
    environment_by_service: str = typer.Option(
        "{}",
        "--environment-by-service",
        help="Environment by service to install the package with, JSON format",
    ),
) -> None:
    """
    Run end-to-end tests: install from scratch and update.

    Validates the package, uploads it to the configured IPFS node and
    installs it on the test host through the test API. The test host is
    cleaned before and after the run.

    Example:
        dnp-audit test-end-to-end --dir ./my-package --health-check-url http://my.dappnode/health
    """
    from dnp_audit.release import IpfsUploader, package_release_builder
    from dnp_audit.testing import DappmanagerTestApi, run_end_to_end_test
    from dnp_audit.utils.config import get_config

    environment = _parse_environment_by_service(environment_by_service)

    config = get_config()
    compose_file_name = compose_file_name or config.files.compose_file_name
    overrides: dict[str, Any] = {}
    if health_check_url is not None:
        overrides["health_check_url"] = health_check_url
    if error_logs_timeout is not None:
        overrides["error_logs_timeout"] = error_logs_timeout
    e2e_config = config.end_to_end.model_copy(update=overrides)

    api = DappmanagerTestApi(e2e_config.test_api_url, timeout=e2e_config.request_timeout)
    uploader = IpfsUploader(e2e_config.upload_provider_url)
    build = package_release_builder(uploader, compose_file_name=compose_file_name)

    with exit_on_error():
        run_end_to_end_test(
            dir,
            api,
            build,
            config=e2e_config,
            environment_by_service=environment,
            compose_file_name=compose_file_name,
        )

    console.print("[green]End-to-end tests passed[/green]")
