"""Unit tests for the compose policy rules."""

import pytest

from dnp_audit.core.collector import ViolationCollector
from dnp_audit.core.validator import ComposeValidator
from dnp_audit.core.rules import (
    check_compose_networks,
    check_compose_version,
    check_service_keys,
    check_service_networks,
    check_service_values,
    check_service_volumes,
)
from dnp_audit.knowledge.policy import get_policy_params
from dnp_audit.models.compose import Compose
from dnp_audit.models.policy import ViolationKind


def run_rule(rule, compose_data, is_core=False, service_name=None):
    collector = ViolationCollector()
    rule(Compose.from_dict(compose_data), is_core, service_name, collector, get_policy_params())
    return [v.kind for v in collector.violations]


def service_compose(service, **top_level):
    return {"version": "3.5", "services": {"app": service}, **top_level}


class TestComposeVersionRule:
    """Tests for the compose version rule."""

    def test_version_too_low(self):
        assert run_rule(check_compose_version, {"version": "3.0", "services": {}}) == [
            ViolationKind.VERSION_TOO_LOW
        ]

    @pytest.mark.parametrize("version", ["3.4", "3.4.0", "3.5", "3.8"])
    def test_supported_versions(self, version):
        assert run_rule(check_compose_version, {"version": version, "services": {}}) == []

    def test_version_parsed_from_yaml_float(self):
        assert run_rule(check_compose_version, {"version": 3.4, "services": {}}) == []

    def test_invalid_version(self):
        assert run_rule(check_compose_version, {"version": "latest", "services": {}}) == [
            ViolationKind.VERSION_TOO_LOW
        ]

    def test_message_mentions_minimum(self):
        collector = ViolationCollector()
        check_compose_version(
            Compose.from_dict({"version": "2.1", "services": {}}), False, None, collector, get_policy_params()
        )
        assert "Minimum version is 3.4" in collector.violations[0].message


class TestComposeNetworksRule:
    """Tests for the top level networks rule."""

    def test_no_networks(self):
        assert run_rule(check_compose_networks, {"version": "3.5", "services": {}}) == []

    def test_whitelisted_external_network(self):
        data = {"version": "3.5", "services": {}, "networks": {"dncore_network": {"external": True}}}
        assert run_rule(check_compose_networks, data) == []

    def test_not_whitelisted_and_internal(self):
        data = {"version": "3.5", "services": {}, "networks": {"mynet": {"external": False}}}
        assert run_rule(check_compose_networks, data) == [
            ViolationKind.NETWORK_NOT_WHITELISTED,
            ViolationKind.NETWORK_NOT_EXTERNAL,
        ]

    def test_missing_external_flag_is_allowed(self):
        data = {"version": "3.5", "services": {}, "networks": {"dnpublic_network": None}}
        assert run_rule(check_compose_networks, data) == []

    def test_named_external_network(self):
        data = {
            "version": "3.4",
            "services": {},
            "networks": {"dncore_network": {"external": {"name": "dncore_network"}}},
        }
        assert run_rule(check_compose_networks, data) == []

    def test_named_external_network_passes_validation(self, manifest):
        data = {
            "version": "3.4",
            "services": {"app": {"image": "app:1", "networks": ["dncore_network"]}},
            "networks": {"dncore_network": {"external": {"name": "dncore_network"}}},
        }
        assert ComposeValidator().validate(data, manifest).passed


class TestServiceKeysRule:
    """Tests for the service keys rule."""

    def test_safe_keys(self):
        data = service_compose({"image": "app:1", "restart": "always", "environment": []})
        assert run_rule(check_service_keys, data, service_name="app") == []

    def test_unsafe_key(self):
        data = service_compose({"image": "app:1", "cap_add": ["ALL"]})
        assert run_rule(check_service_keys, data, service_name="app") == [ViolationKind.SERVICE_KEY_NOT_ALLOWED]

    def test_one_violation_lists_all_keys(self):
        collector = ViolationCollector()
        compose = Compose.from_dict(service_compose({"cap_add": ["ALL"], "ipc": "host"}))
        check_service_keys(compose, False, "app", collector, get_policy_params())

        assert len(collector) == 1
        violation = collector.violations[0]
        assert violation.service == "app"
        assert "Compose service app" in violation.message
        assert "cap_add,ipc" in violation.message


class TestServiceValuesRule:
    """Tests for dns, pid, privileged and network_mode values."""

    def test_dns_mismatch(self):
        data = service_compose({"dns": "8.8.8.8"})
        assert run_rule(check_service_values, data, service_name="app") == [ViolationKind.DNS_MISMATCH]

    def test_expected_dns(self):
        data = service_compose({"dns": "172.33.1.2"})
        assert run_rule(check_service_values, data, service_name="app") == []

    def test_pid_host(self):
        data = service_compose({"pid": "host"})
        assert run_rule(check_service_values, data, service_name="app") == [ViolationKind.PID_UNSAFE]

    def test_pid_service_sharing(self):
        data = service_compose({"pid": "service:other"})
        assert run_rule(check_service_values, data, service_name="app") == []

    def test_privileged_non_core(self):
        data = service_compose({"privileged": True})
        assert run_rule(check_service_values, data, service_name="app") == [
            ViolationKind.PRIVILEGED_NOT_ALLOWED
        ]

    def test_privileged_core(self):
        data = service_compose({"privileged": True})
        assert run_rule(check_service_values, data, is_core=True, service_name="app") == []

    def test_network_mode_host_non_core(self):
        data = service_compose({"network_mode": "host"})
        assert run_rule(check_service_values, data, service_name="app") == [
            ViolationKind.NETWORK_MODE_HOST_NOT_ALLOWED
        ]

    def test_network_mode_host_core(self):
        data = service_compose({"network_mode": "host"})
        assert run_rule(check_service_values, data, is_core=True, service_name="app") == []

    def test_core_still_checks_dns_and_pid(self):
        data = service_compose({"dns": "1.1.1.1", "pid": "host"})
        assert run_rule(check_service_values, data, is_core=True, service_name="app") == [
            ViolationKind.DNS_MISMATCH,
            ViolationKind.PID_UNSAFE,
        ]


class TestServiceNetworksRule:
    """Tests for the service networks rule."""

    def test_whitelisted_names(self):
        data = service_compose({"networks": ["dncore_network", "dnpublic_network"]})
        assert run_rule(check_service_networks, data, service_name="app") == []

    def test_not_whitelisted_name(self):
        data = service_compose({"networks": ["mynet"]})
        assert run_rule(check_service_networks, data, service_name="app") == [
            ViolationKind.SERVICE_NETWORK_NOT_WHITELISTED
        ]

    def test_not_whitelisted_object(self):
        data = service_compose({"networks": [{"mynet": {"aliases": ["app.dappnode"]}}]})
        assert run_rule(check_service_networks, data, service_name="app") == [
            ViolationKind.SERVICE_NETWORK_NOT_WHITELISTED
        ]

    def test_reserved_alias_non_core(self):
        data = service_compose({"networks": [{"dncore_network": {"aliases": ["bind.dappnode"]}}]})
        assert run_rule(check_service_networks, data, service_name="app") == [ViolationKind.RESERVED_ALIAS_USED]

    def test_reserved_alias_core(self):
        data = service_compose({"networks": [{"dncore_network": {"aliases": ["bind.dappnode"]}}]})
        assert run_rule(check_service_networks, data, is_core=True, service_name="app") == []

    def test_mapping_syntax(self):
        data = service_compose({"networks": {"dncore_network": {"aliases": ["my.dappnode"]}, "other": None}})
        assert run_rule(check_service_networks, data, service_name="app") == [
            ViolationKind.SERVICE_NETWORK_NOT_WHITELISTED,
            ViolationKind.RESERVED_ALIAS_USED,
        ]

    def test_empty_elements_skipped(self):
        data = service_compose({"networks": [None, "", "dncore_network"]})
        assert run_rule(check_service_networks, data, service_name="app") == []


class TestServiceVolumesRule:
    """Tests for the service volumes rule."""

    def test_missing_top_level_volumes(self):
        data = service_compose({"volumes": ["data:/data", "other:/other"]})
        assert run_rule(check_service_volumes, data, service_name="app") == [
            ViolationKind.VOLUME_MISSING_TOP_LEVEL_DEFINITION
        ]

    def test_missing_top_level_volumes_core(self):
        data = service_compose({"volumes": ["data:/data"]})
        assert run_rule(check_service_volumes, data, is_core=True, service_name="app") == [
            ViolationKind.VOLUME_MISSING_TOP_LEVEL_DEFINITION
        ]

    def test_bind_mount_non_core(self):
        data = service_compose({"volumes": ["data:/data"]}, volumes={"other": {}})
        assert run_rule(check_service_volumes, data, service_name="app") == [ViolationKind.BIND_MOUNT_NOT_ALLOWED]

    def test_host_path_non_core(self):
        data = service_compose({"volumes": ["/var/run/docker.sock:/var/run/docker.sock"]}, volumes={"data": {}})
        assert run_rule(check_service_volumes, data, service_name="app") == [ViolationKind.BIND_MOUNT_NOT_ALLOWED]

    def test_bind_mount_core(self):
        data = service_compose({"volumes": ["/etc/hosts:/etc/hosts:ro"]}, volumes={"data": {}})
        assert run_rule(check_service_volumes, data, is_core=True, service_name="app") == []

    def test_named_volume(self):
        data = service_compose({"volumes": ["data:/data"]}, volumes={"data": {}})
        assert run_rule(check_service_volumes, data, service_name="app") == []

    def test_empty_top_level_volumes_is_declared(self):
        data = service_compose({"volumes": ["data:/data"]}, volumes={})
        assert run_rule(check_service_volumes, data, service_name="app") == [ViolationKind.BIND_MOUNT_NOT_ALLOWED]

    def test_volume_without_name(self):
        data = service_compose({"volumes": [":/data"]}, volumes={"data": {}})
        assert run_rule(check_service_volumes, data, service_name="app") == [ViolationKind.VOLUME_NAME_MISSING]

    def test_long_syntax(self):
        data = service_compose(
            {"volumes": [{"type": "volume", "source": "data", "target": "/data"}]},
            volumes={"data": {}},
        )
        assert run_rule(check_service_volumes, data, service_name="app") == []

    def test_no_service_volumes(self):
        data = service_compose({"image": "app:1"})
        assert run_rule(check_service_volumes, data, service_name="app") == []
