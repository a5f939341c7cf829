"""Pipeline driver — run the declared stages for one request."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from sqla_resource._types import AttributeSource, AuthorizationOracle, Repository, StageName
from sqla_resource.config._config import ResourceConfig, get_global_config
from sqla_resource.declaration._registry import ControllerRegistry
from sqla_resource.exceptions import ResourceError
from sqla_resource.resolver._context import ResolutionContext
from sqla_resource.resolver._parent import authorize_parent, load_parent
from sqla_resource.resolver._resource import authorize_resource, load_resource

__all__ = ["PipelineResult", "run_pipeline"]


@dataclass(frozen=True, slots=True)
class PipelineResult:
    """Outcome of one pipeline run.

    Attributes:
        context: The request context, populated up to the failing stage.
        failure: The first failure, or ``None`` when every stage passed.
        stage: The stage that produced ``failure``.

    Example::

        result = run_pipeline(registry, ctx, repository=repo, oracle=oracle)
        if not result.ok:
            log.info("%s failed: %s", result.stage, result.failure)
        result.raise_for_failure()
    """

    context: ResolutionContext
    failure: ResourceError | None = None
    stage: StageName | None = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    def raise_for_failure(self) -> None:
        """Raise ``failure`` for the hosting framework's error handling."""
        if self.failure is not None:
            raise self.failure


def run_pipeline(
    registry: ControllerRegistry,
    context: ResolutionContext,
    *,
    repository: Repository,
    oracle: AuthorizationOracle,
    attributes: AttributeSource | None = None,
    config: ResourceConfig | None = None,
) -> PipelineResult:
    """Run load parent -> authorize parent -> load resource -> authorize resource.

    Each stage runs the rules registered for it whose action filter
    matches ``context.action``, in declaration order.  The first failure
    stops the pipeline and is returned; the remaining stages do not run.

    Raises:
        ConfigurationError: Wiring mistakes, raised as soon as they are found.
        ResourceNotFound: Propagated from the repository.
    """
    cfg = config if config is not None else get_global_config()
    action = context.action

    stages: Sequence[tuple[StageName, Sequence[Any], Callable[[Any], ResourceError | None]]] = (
        (
            "load_parent",
            registry.parent_rules_for(action),
            lambda rule: load_parent(context, rule, repository=repository, config=cfg),
        ),
        (
            "authorize_parent",
            registry.parent_authorizations_for(action),
            lambda rule: authorize_parent(
                context, rule, oracle=oracle, registry=registry, config=cfg
            ),
        ),
        (
            "load_resource",
            registry.resource_rules_for(action),
            lambda rule: load_resource(
                context,
                rule,
                repository=repository,
                registry=registry,
                attributes=attributes,
                config=cfg,
            ),
        ),
        (
            "authorize_resource",
            registry.resource_authorizations_for(action),
            lambda rule: authorize_resource(context, rule, oracle=oracle, config=cfg),
        ),
    )

    for stage, rules, run in stages:
        for rule in rules:
            failure = run(rule)
            if failure is None:
                continue
            if cfg.log_decisions:
                from sqla_resource._audit import log_stage_failure

                log_stage_failure(
                    stage=stage,
                    controller=context.controller,
                    action=action,
                    failure=failure,
                )
            return PipelineResult(context=context, failure=failure, stage=stage)

    return PipelineResult(context=context)
