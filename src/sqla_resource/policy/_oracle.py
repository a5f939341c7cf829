"""Authorization oracles — answer ``can(actor, action, resource)``."""

from __future__ import annotations

from typing import Any

from sqla_resource.config._config import ResourceConfig, get_global_config
from sqla_resource.exceptions import NoPolicyError
from sqla_resource.policy._registry import PolicyRegistry, get_default_registry

__all__ = ["ActorOracle", "PolicyOracle"]


class PolicyOracle:
    """Oracle backed by a :class:`PolicyRegistry`.

    Policies registered for ``(type(resource), action)`` are OR'd: the
    first one returning ``True`` grants access.  With no policy
    registered the oracle denies, or raises
    :class:`~sqla_resource.exceptions.NoPolicyError` when the config says
    ``on_missing_policy="raise"``.

    Args:
        registry: Policy registry. Defaults to the global registry.
        config: Config override. Defaults to the global config at call time.

    Example::

        oracle = PolicyOracle()
        oracle.can(current_user, "read", note)
    """

    def __init__(
        self,
        registry: PolicyRegistry | None = None,
        *,
        config: ResourceConfig | None = None,
    ) -> None:
        self._registry = registry
        self._config = config

    @property
    def registry(self) -> PolicyRegistry:
        return self._registry if self._registry is not None else get_default_registry()

    def can(self, actor: Any, action: str, resource: Any) -> bool:
        config = self._config if self._config is not None else get_global_config()
        resource_type = type(resource)
        policies = self.registry.lookup(resource_type, action)

        if not policies and config.on_missing_policy == "raise":
            raise NoPolicyError(resource_type=resource_type.__name__, action=action)

        allowed = any(p.fn(actor, resource) for p in policies)

        if config.log_decisions:
            from sqla_resource._audit import log_policy_evaluation

            log_policy_evaluation(
                resource_type=resource_type,
                action=action,
                actor=actor,
                policy_names=[p.name for p in policies],
                allowed=allowed,
            )
        return allowed

    def __repr__(self) -> str:
        return f"PolicyOracle(registry={self.registry!r})"


class ActorOracle:
    """Oracle that asks the actor itself: ``actor.can(action, resource)``.

    Suits user models that already carry their own permission logic.
    An actor of ``None`` (anonymous) is always refused.
    """

    def can(self, actor: Any, action: str, resource: Any) -> bool:
        if actor is None:
            return False
        return bool(actor.can(action, resource))

    def __repr__(self) -> str:
        return "ActorOracle()"
