"""Point checks — can() and authorize() for single resource instances."""

from __future__ import annotations

from typing import Any

from sqla_resource._types import AuthorizationOracle
from sqla_resource.config._config import ResourceConfig, get_global_config
from sqla_resource.exceptions import AccessDenied
from sqla_resource.policy._oracle import PolicyOracle

__all__ = ["authorize", "can", "check"]


def can(
    actor: Any,
    action: str,
    resource: Any,
    *,
    oracle: AuthorizationOracle | None = None,
    config: ResourceConfig | None = None,
) -> bool:
    """Check if *actor* can perform *action* on *resource*.

    Args:
        actor: The user/principal performing the action.
        action: The verb (e.g. ``"read"``, ``"update"``).
        resource: The resource instance.
        oracle: Optional oracle.  Defaults to a ``PolicyOracle`` over the
            global policy registry.
        config: Overrides the global configuration (``log_decisions``).

    Example::

        if can(current_user, "read", note):
            return note
    """
    target = oracle if oracle is not None else PolicyOracle()
    allowed = bool(target.can(actor, action, resource))

    cfg = config if config is not None else get_global_config()
    if cfg.log_decisions:
        from sqla_resource._audit import log_authorization

        log_authorization(actor=actor, action=action, resource=resource, allowed=allowed)
    return allowed


def check(
    actor: Any,
    action: str,
    resource: Any,
    *,
    oracle: AuthorizationOracle | None = None,
    message: str | None = None,
    config: ResourceConfig | None = None,
) -> AccessDenied | None:
    """Return an ``AccessDenied`` failure when the check fails, else ``None``.

    The non-raising form used by pipeline stages.
    """
    if can(actor, action, resource, oracle=oracle, config=config):
        return None
    return AccessDenied(actor=actor, action=action, resource=resource, message=message)


def authorize(
    actor: Any,
    action: str,
    resource: Any,
    *,
    oracle: AuthorizationOracle | None = None,
    message: str | None = None,
) -> None:
    """Assert that *actor* is authorized to perform *action* on *resource*.

    Raises:
        AccessDenied: If the actor is not authorized.

    Example::

        authorize(current_user, "update", note)  # raises if denied
    """
    failure = check(actor, action, resource, oracle=oracle, message=message)
    if failure is not None:
        raise failure
