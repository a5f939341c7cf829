"""Shared protocols and type aliases for sqla-resource."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, Literal, Protocol, runtime_checkable

__all__ = [
    "ActorLike",
    "AttributeSource",
    "AuthorizationOracle",
    "OnMissingPolicy",
    "Repository",
    "Scope",
    "StageName",
]

# Valid values for ResourceConfig.on_missing_policy.
OnMissingPolicy = Literal["deny", "raise"]

# Pipeline stages, in execution order.
StageName = Literal["load_parent", "authorize_parent", "load_resource", "authorize_resource"]

# Supplies the sanitized attributes applied to a new resource on ``create``.
# Called with the singular resource name.
AttributeSource = Callable[[str], Mapping[str, Any]]


@runtime_checkable
class ActorLike(Protocol):
    """Structural type for actors.

    Any object with an ``id`` attribute satisfies this protocol.
    """

    @property
    def id(self) -> int | str: ...


@runtime_checkable
class Scope(Protocol):
    """A collection of entities of one type, optionally scoped to a parent.

    ``find`` fetches one entity by id (raising
    :class:`~sqla_resource.exceptions.ResourceNotFound` when absent),
    ``new`` constructs an unpersisted entity belonging to the scope and
    ``all`` lists the members.
    """

    def find(self, id: Any) -> Any: ...

    def new(self) -> Any: ...

    def all(self) -> Sequence[Any]: ...


@runtime_checkable
class Repository(Protocol):
    """Persistence capability the resolver needs.

    Entity types are addressed by their underscored singular name
    (``"note"``, ``"group"``), never by dynamic class lookup.
    """

    def find(self, type_name: str, id: Any) -> Any: ...

    def scope(self, type_name: str) -> Scope: ...

    def new(self, type_name: str) -> Any: ...

    def children(self, parent: Any, accessor_name: str) -> Scope: ...


@runtime_checkable
class AuthorizationOracle(Protocol):
    """Boolean authorization decision keyed by (actor, action, resource)."""

    def can(self, actor: Any, action: str, resource: Any) -> bool: ...
