"""Read and rewrite package compose files."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from dnp_audit.models.compose import Compose
from dnp_audit.utils.errors import PackageFileNotFoundError, ValidationError
from dnp_audit.utils.logging import get_logger

DEFAULT_COMPOSE_FILE_NAME = "docker-compose.yml"

logger = get_logger("files.compose")


def read_compose_dict(dir: Path | str, compose_file_name: str = DEFAULT_COMPOSE_FILE_NAME) -> dict[str, Any]:
    """Read a compose file as decoded YAML.

    Raises:
        PackageFileNotFoundError: If the file does not exist
        ValidationError: If the file is not a YAML mapping
    """
    path = Path(dir) / compose_file_name
    if not path.exists():
        raise PackageFileNotFoundError(str(path))

    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML in compose file {path}: {e}", field=compose_file_name)

    if not isinstance(data, dict):
        raise ValidationError(f"Compose file {path} must contain a mapping", field=compose_file_name)

    return data


def read_compose(dir: Path | str, compose_file_name: str = DEFAULT_COMPOSE_FILE_NAME) -> Compose:
    """Read a compose file into a Compose model."""
    data = read_compose_dict(dir, compose_file_name)
    try:
        return Compose.from_dict(data)
    except ValueError as e:
        raise ValidationError(f"Invalid compose file: {e}", field=compose_file_name)


def compose_delete_build_properties(
    dir: Path | str,
    compose_file_name: str = DEFAULT_COMPOSE_FILE_NAME,
) -> None:
    """Remove ``build`` from every service once the images are built.

    Released compose files must only reference images.
    """
    data = read_compose_dict(dir, compose_file_name)
    services = data.get("services") or {}
    removed = []
    for name, service in services.items():
        if isinstance(service, dict) and "build" in service:
            del service["build"]
            removed.append(name)

    if not removed:
        return

    logger.debug(f"Removed build properties from services: {', '.join(removed)}")
    path = Path(dir) / compose_file_name
    path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))
