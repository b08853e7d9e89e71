"""ComposeValidator for package compose policy checks."""

from __future__ import annotations

from typing import Any

from dnp_audit.core.collector import ViolationCollector
from dnp_audit.core.rules import SERVICE_RULES, TOP_LEVEL_RULES, Rule
from dnp_audit.knowledge.policy import PolicyParams, get_policy_params
from dnp_audit.models.compose import Compose
from dnp_audit.models.manifest import Manifest
from dnp_audit.models.policy import ValidationResult
from dnp_audit.utils.logging import get_logger_with_context


class ComposeValidator:
    """Validator for third-party package compose files.

    Runs every policy rule against a decoded compose file and reports all
    violations at once. Top level rules run first, then the service rules
    for each service in declaration order.

    Example:
        validator = ComposeValidator()
        result = validator.validate(compose, manifest)

        if not result.passed:
            for violation in result.violations:
                print(f"{violation.kind.value}: {violation.message}")

        # Or raise ComposeRejectedError listing every violation
        result.raise_for_violations()
    """

    def __init__(
        self,
        params: PolicyParams | None = None,
        top_level_rules: list[Rule] | None = None,
        service_rules: list[Rule] | None = None,
    ) -> None:
        """Initialize the validator.

        Args:
            params: Policy parameters, defaults to the platform policy
            top_level_rules: Rules run once per compose file
            service_rules: Rules run once per service
        """
        self._params = params or get_policy_params()
        self._top_level_rules = list(TOP_LEVEL_RULES if top_level_rules is None else top_level_rules)
        self._service_rules = list(SERVICE_RULES if service_rules is None else service_rules)

    @property
    def params(self) -> PolicyParams:
        return self._params

    def validate(
        self,
        compose: Compose | dict[str, Any],
        manifest: Manifest | dict[str, Any],
    ) -> ValidationResult:
        """Validate a compose file for a package.

        Args:
            compose: Decoded compose file
            manifest: Package manifest, decides whether the package is core

        Returns:
            ValidationResult with every violation found
        """
        if isinstance(compose, dict):
            compose = Compose.from_dict(compose)
        if isinstance(manifest, dict):
            manifest = Manifest.from_dict(manifest)

        is_core = manifest.is_core
        logger = get_logger_with_context("validator", dnp_name=manifest.dnp_name)
        logger.debug(f"Validating compose version {compose.version} (core={is_core})")

        collector = ViolationCollector()

        for rule in self._top_level_rules:
            rule(compose, is_core, None, collector, self._params)

        for service_name in compose.service_names:
            logger.debug(f"Validating service {service_name}")
            for rule in self._service_rules:
                rule(compose, is_core, service_name, collector, self._params)

        result = ValidationResult(
            dnp_name=manifest.dnp_name,
            is_core=is_core,
            violations=collector.violations,
        )

        if result.passed:
            logger.debug("Compose file accepted")
        else:
            logger.info(f"Compose file rejected with {len(result.violations)} violation(s)")

        return result


def validate_dappnode_compose(
    compose: Compose | dict[str, Any],
    manifest: Manifest | dict[str, Any],
    params: PolicyParams | None = None,
) -> None:
    """Validate a compose file and raise if it breaks the package policy.

    Silent when the compose file is accepted.

    Raises:
        ComposeRejectedError: Listing every violation, one per line
    """
    ComposeValidator(params).validate(compose, manifest).raise_for_violations()
