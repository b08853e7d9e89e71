"""Configuration file support for dnp-audit."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

from dnp_audit.utils.errors import ConfigurationError

CONFIG_FILE_NAME = ".dnp-audit.yaml"


class OutputConfig(BaseModel):
    """Output configuration."""

    default_format: str = Field(default="terminal", description="Default output format")
    color: bool = Field(default=True, description="Enable color output")
    verbose: bool = Field(default=False, description="Verbose output")


class FilesConfig(BaseModel):
    """Package file names."""

    compose_file_name: str = Field(default="docker-compose.yml", description="Compose file name")
    manifest_file_names: list[str] = Field(
        default_factory=lambda: [
            "dappnode_package.json",
            "dappnode_package.yml",
            "dappnode_package.yaml",
        ],
        description="Manifest file names, tried in order",
    )


class EndToEndConfig(BaseModel):
    """End-to-end test configuration."""

    test_api_url: str = Field(default="http://172.33.1.7:7000", description="Test manager API URL")
    upload_provider_url: str = Field(default="http://172.33.1.5:5001", description="Release upload provider")
    error_logs_timeout: int = Field(default=30, description="Seconds to wait for error logs")
    health_check_url: str | None = Field(default=None, description="URL that must return HTTP 200")
    request_timeout: float = Field(default=30.0, description="HTTP request timeout in seconds")


class DnpAuditConfig(BaseModel):
    """Main configuration for dnp-audit."""

    output: OutputConfig = Field(default_factory=OutputConfig)
    files: FilesConfig = Field(default_factory=FilesConfig)
    end_to_end: EndToEndConfig = Field(default_factory=EndToEndConfig)


def get_config_paths() -> list[Path]:
    """Get possible configuration file paths, most specific first."""
    paths = [
        Path.cwd() / CONFIG_FILE_NAME,
        Path.cwd() / "dnp-audit.yaml",
        Path.home() / CONFIG_FILE_NAME,
        Path.home() / ".config" / "dnp-audit" / "config.yaml",
    ]

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        paths.append(Path(xdg_config) / "dnp-audit" / "config.yaml")

    return paths


def load_config(config_path: Path | str | None = None) -> DnpAuditConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file. If None, searches default locations.

    Returns:
        Loaded configuration, defaults when no file exists

    Raises:
        ConfigurationError: If an explicit path is missing or a file is invalid
    """
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {config_path}")
        return _load_config_file(path)

    for path in get_config_paths():
        if path.exists():
            return _load_config_file(path)

    return DnpAuditConfig()


def _load_config_file(path: Path) -> DnpAuditConfig:
    try:
        data = yaml.safe_load(path.read_text())
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in config file {path}: {e}")

    if data is None:
        return DnpAuditConfig()
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file {path} must contain a mapping")

    try:
        return DnpAuditConfig.model_validate(data)
    except ValueError as e:
        raise ConfigurationError(f"Invalid config file {path}: {e}")


def save_config(config: DnpAuditConfig, config_path: Path | str | None = None) -> Path:
    """Save configuration to file.

    Args:
        config: Configuration to save
        config_path: Path to save to. Defaults to ~/.dnp-audit.yaml

    Returns:
        Path where config was saved
    """
    path = Path(config_path) if config_path is not None else Path.home() / CONFIG_FILE_NAME
    path.parent.mkdir(parents=True, exist_ok=True)

    data = config.model_dump(mode="json", exclude_defaults=True)
    path.write_text(yaml.dump(data, default_flow_style=False, sort_keys=False))

    return path


_config: DnpAuditConfig | None = None


def get_config() -> DnpAuditConfig:
    """Get the global configuration, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: DnpAuditConfig | None) -> None:
    """Set the global configuration. ``None`` forces a reload on next use."""
    global _config
    _config = config
