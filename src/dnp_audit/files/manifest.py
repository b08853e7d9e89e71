"""Read package manifests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml

from dnp_audit.models.manifest import Manifest
from dnp_audit.utils.errors import PackageFileNotFoundError, ValidationError

MANIFEST_FILE_NAMES = (
    "dappnode_package.json",
    "dappnode_package.yml",
    "dappnode_package.yaml",
)


def _parse(path: Path) -> Any:
    content = path.read_text()
    try:
        if path.suffix == ".json":
            return json.loads(content)
        return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValidationError(f"Invalid manifest {path}: {e}", field=path.name)


def read_manifest(dir: Path | str, file_names: tuple[str, ...] | list[str] = MANIFEST_FILE_NAMES) -> Manifest:
    """Read the first manifest found in a package directory.

    Args:
        dir: Package directory
        file_names: Candidate manifest file names, tried in order

    Returns:
        The parsed Manifest

    Raises:
        PackageFileNotFoundError: If no manifest exists
        ValidationError: If the manifest cannot be parsed
    """
    for name in file_names:
        path = Path(dir) / name
        if not path.exists():
            continue

        data = _parse(path)
        if not isinstance(data, dict):
            raise ValidationError(f"Manifest {path} must contain a mapping", field=name)
        try:
            return Manifest.from_dict(data)
        except ValueError as e:
            raise ValidationError(f"Invalid manifest {path}: {e}", field=name)

    raise PackageFileNotFoundError(str(Path(dir) / file_names[0]))
