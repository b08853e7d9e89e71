"""Shared test fixtures for dnp-audit tests."""

import json
import logging
from pathlib import Path
from typing import Any

import pytest
import yaml

from dnp_audit.models.manifest import Manifest
from dnp_audit.utils.config import set_config


@pytest.fixture(autouse=True)
def reset_global_config():
    """Keep the global config from leaking between tests."""
    set_config(None)
    yield
    set_config(None)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers bound to streams the CLI runner has closed."""
    yield
    logger = logging.getLogger("dnp_audit")
    logger.handlers = []
    logger.propagate = True


@pytest.fixture
def valid_compose() -> dict[str, Any]:
    """A compose file that passes every policy rule."""
    return {
        "version": "3.5",
        "services": {
            "geth": {
                "image": "geth.dnp.dappnode.eth:1.0.0",
                "restart": "unless-stopped",
                "volumes": ["data:/root/.ethereum"],
                "networks": [
                    "dncore_network",
                    {"dncore_network": {"aliases": ["geth.public.dappnode"]}},
                ],
                "environment": {"EXTRA_OPTS": ""},
                "dns": "172.33.1.2",
            },
        },
        "volumes": {"data": {}},
        "networks": {"dncore_network": {"external": True}},
    }


@pytest.fixture
def manifest() -> Manifest:
    """A regular (non-core) package manifest."""
    return Manifest(name="geth.dnp.dappnode.eth", version="1.0.0", type="service")


@pytest.fixture
def core_manifest() -> Manifest:
    """A core package manifest."""
    return Manifest(name="bind.dnp.dappnode.eth", version="0.2.0", type="dncore")


@pytest.fixture
def package_dir(tmp_path: Path, valid_compose: dict[str, Any]) -> Path:
    """A package directory with a valid compose file and manifest."""
    (tmp_path / "docker-compose.yml").write_text(yaml.dump(valid_compose, sort_keys=False))
    (tmp_path / "dappnode_package.json").write_text(
        json.dumps({"name": "geth.dnp.dappnode.eth", "version": "1.0.0", "type": "service"})
    )
    return tmp_path
