"""Package platform knowledge base.

Contains the fixed whitelists every package compose file is checked against.
"""

from dnp_audit.knowledge.policy import PolicyParams, get_policy_params

__all__ = [
    "PolicyParams",
    "get_policy_params",
]
