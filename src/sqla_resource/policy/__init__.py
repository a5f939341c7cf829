"""Policy engine — registration of policies and the oracles that evaluate them."""

from sqla_resource.policy._base import PolicyRegistration
from sqla_resource.policy._decorator import policy
from sqla_resource.policy._oracle import ActorOracle, PolicyOracle
from sqla_resource.policy._registry import PolicyRegistry, get_default_registry

__all__ = [
    "ActorOracle",
    "PolicyOracle",
    "PolicyRegistration",
    "PolicyRegistry",
    "get_default_registry",
    "policy",
]
