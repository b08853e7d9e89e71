"""Package policy parameters for compose files."""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, Field


class PolicyParams(BaseModel):
    """Fixed whitelist applied to every package compose file."""

    model_config = {"frozen": True}

    minimum_compose_version: str = Field(description="Lowest supported compose file version")
    whitelisted_networks: tuple[str, ...] = Field(description="Docker networks packages may join")
    core_aliases: tuple[str, ...] = Field(description="Network aliases reserved to core packages")
    safe_keys: tuple[str, ...] = Field(description="Compose service keys packages may use")
    dns_service: str = Field(description="Only DNS server a service may set")


@lru_cache(maxsize=1)
def get_policy_params() -> PolicyParams:
    """Get the policy parameters.

    Returns:
        The process-wide, immutable policy parameters
    """
    return PolicyParams(
        minimum_compose_version="3.4",
        whitelisted_networks=(
            "dncore_network",
            "dnpublic_network",
        ),
        core_aliases=(
            "dappmanager.dnp.dappnode.eth",
            "bind.dappnode",
            "ipfs.dappnode",
            "wifi.dappnode",
            "vpn.dappnode",
            "wireguard.dappnode",
            "my.dappnode",
            "dappnode.local",
            "dappmanager.dappnode",
            "https.dappnode",
        ),
        safe_keys=(
            "build",
            "command",
            "container_name",
            "depends_on",
            "devices",
            "dns",
            "entrypoint",
            "environment",
            "expose",
            "extra_hosts",
            "healthcheck",
            "image",
            "labels",
            "logging",
            "network_mode",
            "networks",
            "pid",
            "ports",
            "privileged",
            "restart",
            "stop_grace_period",
            "stop_signal",
            "ulimits",
            "user",
            "volumes",
            "working_dir",
        ),
        dns_service="172.33.1.2",
    )
