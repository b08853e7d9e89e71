"""Compose policy rules.

Every rule shares the same signature so the validator can run them from a
list: ``rule(compose, is_core, service_name, collector, params)``. Top level
rules receive ``service_name=None``. Rules only add to the collector and
never raise for a policy problem.
"""

from __future__ import annotations

from typing import Callable, Optional

from packaging.version import InvalidVersion, Version

from dnp_audit.core.collector import ViolationCollector
from dnp_audit.knowledge.policy import PolicyParams
from dnp_audit.models.compose import Compose, NetworkByName
from dnp_audit.models.policy import ViolationKind as Kind

Rule = Callable[[Compose, bool, Optional[str], ViolationCollector, PolicyParams], None]


def _normalize_version(version: str) -> Version:
    """Parse a compose version, appending a patch component to ``major.minor``."""
    version = version.strip()
    if version.count(".") == 1:
        version += ".0"
    return Version(version)


def check_compose_version(
    compose: Compose,
    is_core: bool,
    service_name: str | None,
    collector: ViolationCollector,
    params: PolicyParams,
) -> None:
    """The compose file version must be at least the minimum supported one."""
    minimum = params.minimum_compose_version
    try:
        too_low = _normalize_version(compose.version) < _normalize_version(minimum)
    except InvalidVersion:
        too_low = True

    if too_low:
        collector.add(
            Kind.VERSION_TOO_LOW,
            f"Compose version {compose.version} is not supported. Minimum version is {minimum}",
        )


def check_compose_networks(
    compose: Compose,
    is_core: bool,
    service_name: str | None,
    collector: ViolationCollector,
    params: PolicyParams,
) -> None:
    """Top level networks must be whitelisted and external."""
    if compose.networks is None:
        return

    whitelist = params.whitelisted_networks
    not_whitelisted = [name for name in compose.networks if name not in whitelist]
    if not_whitelisted:
        collector.add(
            Kind.NETWORK_NOT_WHITELISTED,
            f"Docker networks {','.join(not_whitelisted)} are not allowed. "
            f"Only docker networks {','.join(whitelist)} are allowed",
        )

    internal = [name for name, network in compose.networks.items() if network.external is False]
    if internal:
        collector.add(
            Kind.NETWORK_NOT_EXTERNAL,
            f"Docker internal networks are not allowed: {','.join(internal)}",
        )


def check_service_keys(
    compose: Compose,
    is_core: bool,
    service_name: str | None,
    collector: ViolationCollector,
    params: PolicyParams,
) -> None:
    """A service may only use whitelisted compose keys."""
    service = compose.services[service_name]
    unsafe = [key for key in service.keys if key not in params.safe_keys]
    if unsafe:
        collector.add(
            Kind.SERVICE_KEY_NOT_ALLOWED,
            f"Compose service {service_name} has keys that are not allowed: {','.join(unsafe)}. "
            f"Allowed keys are: {','.join(params.safe_keys)}",
            service=service_name,
        )


def check_service_values(
    compose: Compose,
    is_core: bool,
    service_name: str | None,
    collector: ViolationCollector,
    params: PolicyParams,
) -> None:
    """Check dns, pid, privileged and network_mode values of a service."""
    service = compose.services[service_name]

    if service.dns and service.dns != params.dns_service:
        collector.add(
            Kind.DNS_MISMATCH,
            f"Compose service {service_name} has DNS different than {params.dns_service}",
            service=service_name,
        )

    # pid: service:<name> shares a container namespace, anything else (host) is unsafe
    if service.pid and not service.pid.startswith("service:"):
        collector.add(
            Kind.PID_UNSAFE,
            f"Compose service {service_name} has PID feature different than service:*",
            service=service_name,
        )

    if is_core:
        return

    if service.privileged is True:
        collector.add(
            Kind.PRIVILEGED_NOT_ALLOWED,
            f"Compose service {service_name} has privileged as true but is not a core package",
            service=service_name,
        )

    if service.network_mode == "host":
        collector.add(
            Kind.NETWORK_MODE_HOST_NOT_ALLOWED,
            f"Compose service {service_name} has network_mode: host but is not a core package",
            service=service_name,
        )


def check_service_networks(
    compose: Compose,
    is_core: bool,
    service_name: str | None,
    collector: ViolationCollector,
    params: PolicyParams,
) -> None:
    """Service networks must be whitelisted and must not use core aliases."""
    service = compose.services[service_name]
    whitelist = params.whitelisted_networks
    not_whitelisted_message = (
        f"Compose service {service_name} has a non-whitelisted docker network. "
        f"Only docker networks {','.join(whitelist)} are allowed"
    )

    for network in service.networks:
        if isinstance(network, NetworkByName):
            if network.name not in whitelist:
                collector.add(Kind.SERVICE_NETWORK_NOT_WHITELISTED, not_whitelisted_message, service=service_name)
            continue

        if any(name not in whitelist for name in network.names):
            collector.add(Kind.SERVICE_NETWORK_NOT_WHITELISTED, not_whitelisted_message, service=service_name)

        if not is_core and any(alias in params.core_aliases for alias in network.aliases):
            collector.add(
                Kind.RESERVED_ALIAS_USED,
                f"Compose service {service_name} has a reserved docker alias. "
                f"Aliases {','.join(params.core_aliases)} are reserved to core packages",
                service=service_name,
            )


def check_service_volumes(
    compose: Compose,
    is_core: bool,
    service_name: str | None,
    collector: ViolationCollector,
    params: PolicyParams,
) -> None:
    """Only core packages may bind-mount host paths.

    Every mount must refer to a volume declared at the top level. A compose
    file without a top level ``volumes`` section is rejected once per
    service, core packages included.
    """
    service = compose.services[service_name]

    for mount in service.volumes:
        if not mount:
            continue

        if compose.volumes is None:
            collector.add(
                Kind.VOLUME_MISSING_TOP_LEVEL_DEFINITION,
                f"Compose service {service_name} has a volume not allowed. All docker volumes "
                "defined at the service level must be defined also at the top level volumes",
                service=service_name,
            )
            return

        volume_name = mount.split(":")[0]
        if not volume_name:
            collector.add(
                Kind.VOLUME_NAME_MISSING,
                f"Compose service {service_name} has a volume without name",
                service=service_name,
            )
        elif not is_core and volume_name not in compose.volumes:
            collector.add(
                Kind.BIND_MOUNT_NOT_ALLOWED,
                f"Compose service {service_name} has a bind-mounted volume, bind-mounted volumes "
                f"are not allowed. Make sure the compose service volume {volume_name} is defined "
                "in the top level volumes",
                service=service_name,
            )


TOP_LEVEL_RULES: list[Rule] = [
    check_compose_version,
    check_compose_networks,
]

SERVICE_RULES: list[Rule] = [
    check_service_keys,
    check_service_values,
    check_service_networks,
    check_service_volumes,
]
