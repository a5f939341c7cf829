"""Parent stages — load and authorize the parent resource."""

from __future__ import annotations

from sqla_resource._checks import check
from sqla_resource._types import AuthorizationOracle, Repository
from sqla_resource.config._config import ResourceConfig, get_global_config
from sqla_resource.declaration._registry import ControllerRegistry
from sqla_resource.declaration._rules import ParentAuthorization, ParentRule
from sqla_resource.exceptions import AccessDenied, ParameterMissing
from sqla_resource.resolver._context import ResolutionContext

__all__ = ["authorize_parent", "load_parent"]


def load_parent(
    context: ResolutionContext,
    rule: ParentRule,
    *,
    repository: Repository,
    config: ResourceConfig | None = None,
) -> ParameterMissing | None:
    """Resolve the first candidate of ``rule`` whose id parameter is present.

    The entity is fetched with ``repository.find(name, id)`` and stored in
    the slot named after the candidate.  Remaining candidates are not
    consulted once one matches.

    Returns:
        ``None`` on success (including an optional rule with no match),
        or a ``ParameterMissing`` failure listing every expected id
        parameter when a required rule matched nothing.

    Raises:
        ResourceNotFound: Propagated from the repository.
    """
    cfg = config if config is not None else get_global_config()

    for name in rule.candidates:
        entity_id = context.param(f"{name}{cfg.parent_param_suffix}")
        if entity_id is None:
            continue
        context.set_parent(name, repository.find(name, entity_id))
        if cfg.log_decisions:
            from sqla_resource._audit import log_parent_resolution

            log_parent_resolution(
                controller=context.controller,
                action=context.action,
                candidates=rule.candidates,
                resolved=name,
                entity_id=entity_id,
            )
        return None

    if cfg.log_decisions:
        from sqla_resource._audit import log_parent_resolution

        log_parent_resolution(
            controller=context.controller,
            action=context.action,
            candidates=rule.candidates,
            resolved=None,
        )

    if not rule.required:
        return None
    expected = rule.id_params(cfg.parent_param_suffix)
    return ParameterMissing(
        "must supply one of " + ", ".join(f":{param}" for param in expected),
        params=expected,
    )


def authorize_parent(
    context: ResolutionContext,
    rule: ParentAuthorization,
    *,
    oracle: AuthorizationOracle,
    registry: ControllerRegistry,
    config: ResourceConfig | None = None,
) -> ParameterMissing | AccessDenied | None:
    """Check the loaded parent against the authorization oracle.

    The parent is the first loaded slot among ``rule.candidates``, or the
    first resolved parent when the rule names none.  The verb is
    ``rule.permit``, else the ``permit`` of the parent rule declaring that
    slot, else the configured ``default_parent_action``.

    Returns:
        ``None`` when allowed or when an optional parent is absent;
        ``ParameterMissing`` when a required parent is absent (the oracle
        is not consulted); ``AccessDenied`` when the oracle refuses.
    """
    cfg = config if config is not None else get_global_config()

    if rule.candidates:
        found = context.first_loaded(rule.candidates)
    else:
        found = context.first_loaded(context.resolved_parents)

    if found is None:
        if not rule.required:
            return None
        names = rule.candidates or registry.parent_candidates()
        return ParameterMissing(
            "parent resource not found",
            params=tuple(f"{name}{cfg.parent_param_suffix}" for name in names),
        )

    name, parent = found
    verb = rule.permit
    if verb is None:
        parent_rule = registry.parent_rule_for(name)
        verb = parent_rule.permit if parent_rule is not None else cfg.default_parent_action
    return check(context.actor, verb, parent, oracle=oracle, config=cfg)
