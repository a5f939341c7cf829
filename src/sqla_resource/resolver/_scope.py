"""Scope resolution for synthesized accessors."""

from __future__ import annotations

from sqla_resource._naming import singularize
from sqla_resource._types import Repository, Scope
from sqla_resource.declaration._registry import ControllerRegistry
from sqla_resource.resolver._context import ResolutionContext

__all__ = ["resolve_scope"]


def resolve_scope(
    registry: ControllerRegistry,
    context: ResolutionContext,
    name: str,
    *,
    repository: Repository,
) -> Scope:
    """Return the collection behind the scope accessor ``name``.

    Scans the accessor's parent candidates in declaration order and
    returns the children of the first loaded parent
    (``repository.children(parent, name)``).  With no parent loaded,
    returns the unscoped collection of the singular type
    (``notes`` -> ``note``).  Reads the context, never writes it.

    Raises:
        ConfigurationError: If no accessor called ``name`` is declared.
    """
    accessor = registry.accessor(name)
    candidates = accessor.candidates or registry.parent_candidates()
    found = context.first_loaded(candidates)
    if found is not None:
        return repository.children(found[1], name)
    return repository.scope(singularize(name))
