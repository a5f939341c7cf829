"""Audit logging for resolution and authorization decisions."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from sqla_resource.exceptions import ResourceError

__all__ = [
    "log_authorization",
    "log_parent_resolution",
    "log_policy_evaluation",
    "log_stage_failure",
]

logger = logging.getLogger("sqla_resource")


def log_parent_resolution(
    *,
    controller: str,
    action: str,
    candidates: Sequence[str],
    resolved: str | None,
    entity_id: object = None,
) -> None:
    """Log which parent candidate (if any) a rule resolved.

    Logging levels:
    - INFO: Summary (controller, action, resolved candidate)
    - DEBUG: The candidate list that was scanned

    Example::

        log_parent_resolution(
            controller="NotesController",
            action="index",
            candidates=("group", "person"),
            resolved="group",
            entity_id="1",
        )
    """
    if resolved is None:
        logger.info(
            "Parent resolution: %s.%s — no parent among %s",
            controller,
            action,
            list(candidates),
        )
        return

    logger.info(
        "Parent resolution: %s.%s — loaded %s id=%r",
        controller,
        action,
        resolved,
        entity_id,
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Parent candidates scanned for %s.%s: %s",
            controller,
            action,
            list(candidates),
        )


def log_authorization(
    *,
    actor: object,
    action: str,
    resource: object,
    allowed: bool,
) -> None:
    """Log an authorization decision.

    Allowed checks are logged at INFO, denials at WARNING.
    """
    if allowed:
        logger.info(
            "Authorization: %r may %s %s",
            actor,
            action,
            type(resource).__name__,
        )
        return

    logger.warning(
        "Authorization denied: %r cannot %s %r",
        actor,
        action,
        resource,
    )


def log_policy_evaluation(
    *,
    resource_type: type,
    action: str,
    actor: object,
    policy_names: Sequence[str],
    allowed: bool,
) -> None:
    """Log a policy oracle evaluation.

    Logging levels:
    - WARNING: No policy found (deny-by-default triggered)
    - INFO: Summary (entity, action, policy count, verdict)
    - DEBUG: Names of the policies consulted
    """
    entity_name = resource_type.__name__

    if not policy_names:
        logger.warning(
            "No policy registered for (%s, %r) — deny-by-default applied",
            entity_name,
            action,
        )
        return

    logger.info(
        "Policy evaluation: %s.%s — %d policy(ies) for actor %r, allowed=%s",
        entity_name,
        action,
        len(policy_names),
        actor,
        allowed,
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Policies consulted for %s.%s: %s",
            entity_name,
            action,
            list(policy_names),
        )


def log_stage_failure(
    *,
    stage: str,
    controller: str,
    action: str,
    failure: ResourceError,
) -> None:
    """Log a pipeline failure to a stage-specific sub-logger.

    Each stage gets its own logger under ``sqla_resource.stage.<stage>``
    so operators can enable/disable granularly.
    """
    stage_logger = logging.getLogger(f"sqla_resource.stage.{stage}")
    stage_logger.warning(
        "FAILED:%s controller=%s action=%s — %s: %s",
        stage,
        controller,
        action,
        type(failure).__name__,
        failure,
    )
