"""Docker compose data models.

The models mirror the subset of a compose file the package policy inspects.
They are built from already-decoded YAML/JSON data with ``Compose.from_dict``
and are frozen, so validation can never modify them.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field


class ComposeNetwork(BaseModel):
    """A network declared in the top level ``networks`` section."""

    model_config = {"frozen": True}

    external: bool | None = Field(default=None, description="Whether the network is external")
    name: str | None = Field(default=None, description="Actual docker network name")
    aliases: tuple[str, ...] = Field(default=(), description="Network aliases")

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ComposeNetwork":
        data = data or {}
        external = data.get("external")
        # external: {name: <network>} declares an external network under another name
        if isinstance(external, dict):
            external = True
        return cls(
            external=external,
            name=data.get("name"),
            aliases=tuple(data.get("aliases") or ()),
        )


class NetworkByName(BaseModel):
    """Service network given as a bare network name."""

    model_config = {"frozen": True}

    kind: Literal["name"] = "name"
    name: str = Field(description="Network name")


class NetworkDetailed(BaseModel):
    """Service network given as an object keyed by network name."""

    model_config = {"frozen": True}

    kind: Literal["detailed"] = "detailed"
    names: tuple[str, ...] = Field(description="Network names (object keys)")
    aliases: tuple[str, ...] = Field(default=(), description="Aliases across all networks")


NetworkReference = Annotated[Union[NetworkByName, NetworkDetailed], Field(discriminator="kind")]


def parse_network_reference(raw: Any) -> NetworkByName | NetworkDetailed | None:
    """Build a network reference from a raw ``networks`` element.

    Returns None for null or empty elements.
    """
    if not raw:
        return None
    if isinstance(raw, str):
        return NetworkByName(name=raw)
    if isinstance(raw, dict):
        aliases: list[str] = []
        for settings in raw.values():
            if isinstance(settings, dict):
                aliases.extend(a for a in settings.get("aliases") or [] if a)
        return NetworkDetailed(names=tuple(raw.keys()), aliases=tuple(aliases))
    raise ValueError(f"Unsupported service network definition: {raw!r}")


def _parse_service_networks(raw: Any) -> list[NetworkByName | NetworkDetailed]:
    if not raw:
        return []
    # Mapping syntax: {network_name: {aliases: [...]}}
    if isinstance(raw, dict):
        raw = [raw]
    references = []
    for item in raw:
        reference = parse_network_reference(item)
        if reference is not None:
            references.append(reference)
    return references


def _parse_service_volumes(raw: Any) -> list[str]:
    mounts: list[str] = []
    for item in raw or []:
        if not item:
            continue
        if isinstance(item, dict):
            # Long syntax: {type, source, target, read_only}
            mount = f"{item.get('source') or ''}:{item.get('target') or ''}"
            if item.get("read_only"):
                mount += ":ro"
            mounts.append(mount)
        else:
            mounts.append(str(item))
    return mounts


class ComposeService(BaseModel):
    """A single compose service.

    ``keys`` keeps every key present on the service in declaration order,
    including keys the policy has no typed field for.
    """

    model_config = {"frozen": True}

    name: str = Field(description="Service name")
    keys: tuple[str, ...] = Field(default=(), description="Keys present on the service")
    image: str | None = Field(default=None, description="Service image")
    dns: str | None = Field(default=None, description="DNS server")
    pid: str | None = Field(default=None, description="PID namespace mode")
    privileged: bool | None = Field(default=None, description="Privileged mode")
    network_mode: str | None = Field(default=None, description="Network mode")
    networks: list[NetworkReference] = Field(default_factory=list, description="Service networks")
    volumes: list[str] = Field(default_factory=list, description="Volume mounts")
    raw: dict[str, Any] = Field(default_factory=dict, description="Decoded service definition")

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any] | None) -> "ComposeService":
        data = data or {}
        dns = data.get("dns")
        return cls(
            name=name,
            keys=tuple(data.keys()),
            image=data.get("image"),
            dns=str(dns) if dns is not None else None,
            pid=data.get("pid"),
            privileged=data.get("privileged"),
            network_mode=data.get("network_mode"),
            networks=_parse_service_networks(data.get("networks")),
            volumes=_parse_service_volumes(data.get("volumes")),
            raw=dict(data),
        )


class Compose(BaseModel):
    """A decoded docker compose file."""

    model_config = {"frozen": True}

    version: str = Field(description="Compose file format version")
    services: dict[str, ComposeService] = Field(default_factory=dict, description="Services by name")
    networks: dict[str, ComposeNetwork] | None = Field(
        default=None,
        description="Top level networks, None when the section is absent",
    )
    volumes: dict[str, dict[str, Any]] | None = Field(
        default=None,
        description="Top level volumes, None when the section is absent",
    )

    @property
    def service_names(self) -> list[str]:
        """Service names in declaration order."""
        return list(self.services.keys())

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Compose":
        """Build a compose model from decoded compose data."""
        networks = data.get("networks")
        volumes = data.get("volumes")
        return cls(
            version=str(data.get("version", "")),
            services={
                name: ComposeService.from_dict(name, service)
                for name, service in (data.get("services") or {}).items()
            },
            networks=(
                {name: ComposeNetwork.from_dict(net) for name, net in networks.items()}
                if networks is not None
                else None
            ),
            volumes=(
                {name: dict(volume or {}) for name, volume in volumes.items()}
                if volumes is not None
                else None
            ),
        )
