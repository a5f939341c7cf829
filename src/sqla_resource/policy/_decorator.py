"""@policy decorator — register authorization policy functions."""

from __future__ import annotations

from collections.abc import Callable
from typing import TypeVar

from sqla_resource.policy._registry import PolicyRegistry, get_default_registry

__all__ = ["policy"]

F = TypeVar("F", bound=Callable[..., bool])


def policy(
    resource_type: type,
    action: str,
    *,
    registry: PolicyRegistry | None = None,
) -> Callable[[F], F]:
    """Decorator that registers a policy function for (model, action).

    The decorated function receives ``(actor, resource)`` and returns a
    boolean.  Registering several functions for the same pair grants
    access when any of them returns ``True``.

    Example::

        @policy(Note, "read")
        def note_read(actor: User, note: Note) -> bool:
            return note.is_public or note.author_id == actor.id
    """

    def decorator(fn: F) -> F:
        target = registry if registry is not None else get_default_registry()
        target.register(
            resource_type,
            action,
            fn,
            name=fn.__name__,
            description=fn.__doc__ or "",
        )
        return fn

    return decorator
