"""PolicyRegistry — stores and retrieves policy registrations."""

from __future__ import annotations

from sqla_resource.policy._base import PolicyFn, PolicyRegistration

__all__ = ["PolicyRegistry", "get_default_registry"]


class PolicyRegistry:
    """Registry that maps (model, action) pairs to policy functions.

    Append-only during registration, read-only once the application has
    started.

    Example::

        registry = PolicyRegistry()
        registry.register(Note, "read", lambda actor, note: True, name="p", description="")
        policies = registry.lookup(Note, "read")
    """

    def __init__(self) -> None:
        self._policies: dict[tuple[type, str], list[PolicyRegistration]] = {}

    def register(
        self,
        resource_type: type,
        action: str,
        fn: PolicyFn,
        *,
        name: str,
        description: str,
    ) -> None:
        """Register a policy function for a (model, action) pair.

        Multiple policies can be registered for the same key; any one of
        them returning ``True`` grants access.

        Args:
            resource_type: The model class.
            action: The verb (e.g. ``"read"``).
            fn: ``fn(actor, resource) -> bool``.
            name: Human-readable name for the policy (used in logging).
            description: Description of the policy (typically the docstring).
        """
        registration = PolicyRegistration(
            resource_type=resource_type,
            action=action,
            fn=fn,
            name=name,
            description=description,
        )
        self._policies.setdefault((resource_type, action), []).append(registration)

    def lookup(self, resource_type: type, action: str) -> list[PolicyRegistration]:
        """Look up all policies for a (model, action) pair.

        Returns a copy of the internal list so callers cannot mutate
        the registry state.  Empty list if nothing is registered.
        """
        return list(self._policies.get((resource_type, action), []))

    def has_policy(self, resource_type: type, action: str) -> bool:
        """Check whether at least one policy exists for (model, action)."""
        return (resource_type, action) in self._policies

    def registered_actions(self, resource_type: type) -> set[str]:
        """Return every action with a policy for *resource_type*.

        Example::

            registry.registered_actions(Note)  # {"read", "update"}
        """
        return {act for entity, act in self._policies if entity is resource_type}

    def clear(self) -> None:
        """Remove all registered policies (test teardown)."""
        self._policies.clear()


# Module-level default registry (singleton).
_default_registry = PolicyRegistry()


def get_default_registry() -> PolicyRegistry:
    """Return the global default policy registry used by ``@policy``."""
    return _default_registry
