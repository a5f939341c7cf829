"""Resource stages — load and authorize the primary resource."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqla_resource._checks import check
from sqla_resource._types import AttributeSource, AuthorizationOracle, Repository
from sqla_resource.config._config import ResourceConfig, get_global_config
from sqla_resource.declaration._registry import ControllerRegistry
from sqla_resource.declaration._rules import ResourceAuthorization, ResourceRule
from sqla_resource.exceptions import AccessDenied, ConfigurationError
from sqla_resource.resolver._actions import NEW_ACTIONS, action_verb
from sqla_resource.resolver._context import ResolutionContext
from sqla_resource.resolver._scope import resolve_scope

__all__ = ["assign_attributes", "authorize_resource", "load_resource"]


def assign_attributes(entity: Any, attributes: Mapping[str, Any]) -> None:
    """Set each attribute on ``entity``.

    Raises:
        ConfigurationError: If ``entity`` has no attribute of that name.
    """
    for key, value in attributes.items():
        if not hasattr(entity, key):
            raise ConfigurationError(f"{type(entity).__name__} has no attribute {key!r}")
        setattr(entity, key, value)


def load_resource(
    context: ResolutionContext,
    rule: ResourceRule,
    *,
    repository: Repository,
    registry: ControllerRegistry,
    attributes: AttributeSource | None = None,
    config: ResourceConfig | None = None,
) -> None:
    """Load or construct the primary resource into its slot.

    - ``new``/``create``: a new, unpersisted entity from the scope; for
      ``create`` the mapping returned by ``attributes(resource_name)`` is
      assigned to it.
    - ``id`` present: ``scope.find(id)``.
    - otherwise the slot is set to ``None`` (collection actions such as
      ``index``).

    Raises:
        ConfigurationError: On ``create`` without an attribute source.
        ResourceNotFound: Propagated from the scope.
    """
    cfg = config if config is not None else get_global_config()
    scope = resolve_scope(registry, context, rule.children, repository=repository)

    if context.action in NEW_ACTIONS:
        resource = scope.new()
        if context.action == "create":
            if attributes is None:
                raise ConfigurationError(
                    f"{context.controller or 'controller'} needs an attribute source "
                    f"to create {context.resource_name!r}"
                )
            assign_attributes(resource, attributes(context.resource_name))
    else:
        resource_id = context.param(cfg.id_param)
        resource = scope.find(resource_id) if resource_id is not None else None

    context.set(context.resource_name, resource)


def authorize_resource(
    context: ResolutionContext,
    rule: ResourceAuthorization | None = None,
    *,
    oracle: AuthorizationOracle,
    resource: Any = None,
    permit: str | None = None,
    config: ResourceConfig | None = None,
) -> AccessDenied | None:
    """Check the primary (or an explicit) resource against the oracle.

    The verb is ``permit``, else ``rule.permit``, else derived from the
    action (``show`` -> ``read``, ``rotate`` -> ``rotate``).

    Returns:
        ``None`` when allowed, ``AccessDenied`` otherwise.

    Raises:
        ConfigurationError: If there is no resource to check or no verb
            can be derived.
    """
    target = resource if resource is not None else context.resource
    verb = permit or (rule.permit if rule is not None else None) or action_verb(context.action)
    if target is None:
        raise ConfigurationError(
            f"cannot authorize {context.controller or 'controller'}.{context.action}: "
            f"no {context.resource_name!r} resource is loaded"
        )
    if verb is None:
        raise ConfigurationError(
            f"cannot authorize {context.controller or 'controller'}: no verb for an empty action"
        )
    return check(context.actor, verb, target, oracle=oracle, config=config)
