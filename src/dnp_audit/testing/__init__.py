"""End-to-end package testing against a test host."""

from dnp_audit.testing.api import DappmanagerTestApi
from dnp_audit.testing.end_to_end import (
    check_package_running,
    ensure_clean_environment,
    execute_install_and_update_test,
    run_end_to_end_test,
)

__all__ = [
    "DappmanagerTestApi",
    "check_package_running",
    "ensure_clean_environment",
    "execute_install_and_update_test",
    "run_end_to_end_test",
]
