"""FastAPI dependencies that run a controller's loading pipeline."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from fastapi import Depends, Request

from sqla_resource._types import ActorLike, AuthorizationOracle, Repository
from sqla_resource.controller._base import ResourceController
from sqla_resource.policy._oracle import PolicyOracle

__all__ = ["ResourceDep", "get_actor", "get_oracle", "get_repository"]


# ---------------------------------------------------------------------------
# Sentinel dependency functions for DI-based configuration
# ---------------------------------------------------------------------------


def get_actor(request: Request) -> ActorLike | None:
    """Sentinel dependency — override via ``app.dependency_overrides[get_actor]``.

    Raises ``NotImplementedError`` if not overridden, ensuring users
    configure their actor provider before using ``ResourceDep``.

    Example::

        from sqla_resource.integrations.fastapi import get_actor

        app.dependency_overrides[get_actor] = my_get_current_user
    """
    raise NotImplementedError(
        "Override get_actor via app.dependency_overrides[get_actor]. "
        "See sqla-resource docs for configuration guide."
    )


def get_repository(request: Request) -> Repository:
    """Sentinel dependency — override via ``app.dependency_overrides[get_repository]``.

    Example::

        def repository(session: Session = Depends(get_db)) -> SQLAlchemyRepository:
            return SQLAlchemyRepository.from_base(session, Base)

        app.dependency_overrides[get_repository] = repository
    """
    raise NotImplementedError(
        "Override get_repository via app.dependency_overrides[get_repository]. "
        "See sqla-resource docs for configuration guide."
    )


def get_oracle(request: Request) -> AuthorizationOracle:
    """Authorization oracle dependency; defaults to the global policy registry.

    Override it to use another oracle, e.g. ``ActorOracle()``.
    """
    return PolicyOracle()


# ---------------------------------------------------------------------------
# Dependency builder
# ---------------------------------------------------------------------------


def _make_dependency(
    controller: type[ResourceController],
    action: str,
) -> Callable[..., Any]:
    def _resolve(
        request: Request,
        actor: Any = Depends(get_actor),
        repository: Repository = Depends(get_repository),
        oracle: AuthorizationOracle = Depends(get_oracle),
    ) -> ResourceController:
        params: dict[str, Any] = {**request.query_params, **request.path_params}
        instance = controller(
            action=action,
            params=params,
            actor=actor,
            repository=repository,
            oracle=oracle,
        )
        instance.before_action()
        return instance

    return _resolve


def ResourceDep(controller: type[ResourceController], action: str) -> Any:  # noqa: N802
    """FastAPI dependency that runs ``controller``'s pipeline for ``action``.

    The controller is built from the path and query parameters (path
    parameters win), the actor, the repository and the oracle
    dependencies.  Its declared stages run before the route body; the
    first failure is raised and, with :func:`install_error_handlers`,
    becomes a 400/403/404 response.

    Args:
        controller: The ``ResourceController`` subclass to run.
        action: The action name, e.g. ``"show"``.

    Returns:
        A FastAPI ``Depends`` instance resolving to the controller.

    Example::

        @app.get("/groups/{group_id}/notes/{id}")
        def show_note(
            notes: NotesController = ResourceDep(NotesController, "show"),
        ) -> dict:
            return {"title": notes.resource.title}
    """
    return Depends(_make_dependency(controller, action))
