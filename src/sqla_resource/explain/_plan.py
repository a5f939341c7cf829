"""explain_action() — list the stages that run before an action."""

from __future__ import annotations

from sqla_resource.controller._base import ResourceController
from sqla_resource.declaration._registry import ControllerRegistry
from sqla_resource.explain._models import ActionPlan, PlannedStage
from sqla_resource.resolver._actions import action_verb

__all__ = ["explain_action"]


def _parent_verb(registry: ControllerRegistry, name: str, default: str) -> str:
    parent_rule = registry.parent_rule_for(name)
    return parent_rule.permit if parent_rule is not None else default


def explain_action(controller: type[ResourceController], action: str) -> ActionPlan:
    """Describe what the pipeline would do before ``controller.action``.

    Nothing is loaded and no oracle is consulted; the plan only reflects
    the declared rules and their action filters.

    Example::

        print(explain_action(NotesController, "update"))
        # Action Plan: NotesController.update
        #   Resource: note
        #   1. load_parent candidates=['group'] required scope='notes'
        #   2. authorize_parent candidates=['group'] required permit='read'
        #   3. load_resource scope='notes'
        #   4. authorize_resource permit='update'
    """
    registry = controller.resource_registry()
    config = registry.config
    stages: list[PlannedStage] = []

    for rule in registry.parent_rules_for(action):
        stages.append(
            PlannedStage(
                stage="load_parent",
                candidates=rule.candidates,
                required=rule.required,
                children=rule.children,
            )
        )

    for auth in registry.parent_authorizations_for(action):
        candidates = auth.candidates or registry.parent_candidates()
        permit = auth.permit
        candidate_permits: tuple[tuple[str, str], ...] = ()
        if permit is None:
            candidate_permits = tuple(
                (name, _parent_verb(registry, name, config.default_parent_action))
                for name in candidates
            )
            verbs = {verb for _, verb in candidate_permits}
            if len(verbs) <= 1:
                permit = verbs.pop() if verbs else config.default_parent_action
                candidate_permits = ()
        stages.append(
            PlannedStage(
                stage="authorize_parent",
                candidates=candidates,
                required=auth.required,
                permit=permit,
                candidate_permits=candidate_permits,
            )
        )

    for resource_rule in registry.resource_rules_for(action):
        stages.append(PlannedStage(stage="load_resource", children=resource_rule.children))

    for resource_auth in registry.resource_authorizations_for(action):
        stages.append(
            PlannedStage(
                stage="authorize_resource",
                permit=resource_auth.permit or action_verb(action),
            )
        )

    return ActionPlan(
        controller=controller.__name__,
        action=action,
        resource_name=registry.resource_name,
        stages=stages,
    )
