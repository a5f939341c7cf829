"""Flask extension for sqla-resource."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from flask import Flask, current_app, jsonify, request

from sqla_resource._types import ActorLike, AuthorizationOracle, Repository
from sqla_resource.controller._base import ResourceController
from sqla_resource.exceptions import (
    AccessDenied,
    ConfigurationError,
    NoPolicyError,
    ParameterMissing,
    ResourceNotFound,
)
from sqla_resource.policy._oracle import PolicyOracle

__all__ = ["ResourceExtension"]

C = TypeVar("C", bound=ResourceController)


class ResourceExtension:
    """Flask extension that runs controller pipelines inside view functions.

    Registers error handlers for sqla-resource errors and provides
    :meth:`load`, which builds a controller from the current request and
    runs its declared stages.

    Supports the Flask app-factory pattern via ``init_app()``.

    Args:
        app: Optional Flask application. If provided, calls ``init_app()``
            immediately.
        actor_provider: A callable ``() -> actor`` returning the current
            actor. Called within request context.
        repository_provider: A callable ``() -> Repository`` returning the
            repository for the current request.
        oracle: Optional authorization oracle. Defaults to a
            ``PolicyOracle`` over the global registry.

    Example::

        app = Flask(__name__)
        resources = ResourceExtension(
            app,
            actor_provider=lambda: g.user,
            repository_provider=lambda: SQLAlchemyRepository.from_base(db.session, Base),
        )

        @app.get("/groups/<int:group_id>/notes/<int:id>")
        def show(group_id, id):
            controller = resources.load(NotesController)
            return {"title": controller.resource.title}
    """

    def __init__(
        self,
        app: Flask | None = None,
        *,
        actor_provider: Callable[[], ActorLike | None],
        repository_provider: Callable[[], Repository],
        oracle: AuthorizationOracle | None = None,
    ) -> None:
        self._actor_provider = actor_provider
        self._repository_provider = repository_provider
        self._oracle = oracle

        if app is not None:
            self.init_app(app)

    def init_app(self, app: Flask) -> None:
        """Initialize the extension with a Flask application.

        Stores the providers on ``app.extensions["sqla_resource"]`` and
        registers error handlers: ``ParameterMissing`` -> 400,
        ``AccessDenied`` -> 403, ``ResourceNotFound`` -> 404,
        ``ConfigurationError``/``NoPolicyError`` -> 500.
        """
        app.extensions["sqla_resource"] = {
            "actor_provider": self._actor_provider,
            "repository_provider": self._repository_provider,
            "oracle": self._oracle,
        }

        @app.errorhandler(ParameterMissing)
        def handle_parameter_missing(exc: ParameterMissing):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc), "params": list(exc.params)}), 400

        @app.errorhandler(AccessDenied)
        def handle_access_denied(exc: AccessDenied):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 403

        @app.errorhandler(ResourceNotFound)
        def handle_not_found(exc: ResourceNotFound):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 404

        @app.errorhandler(ConfigurationError)
        def handle_configuration_error(exc: ConfigurationError):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 500

        @app.errorhandler(NoPolicyError)
        def handle_no_policy(exc: NoPolicyError):  # pyright: ignore[reportUnusedFunction]
            return jsonify({"detail": str(exc)}), 500

    def load(self, controller: type[C], action: str | None = None) -> C:
        """Build ``controller`` for the current request and run its pipeline.

        Must be called within a Flask request context.  Parameters are the
        query string merged with the URL rule's view arguments (view
        arguments win).

        Args:
            controller: The ``ResourceController`` subclass to run.
            action: The action name. Defaults to the endpoint name
                without its blueprint prefix (``"notes.show"`` -> ``"show"``).

        Raises:
            ParameterMissing, AccessDenied, ResourceNotFound: The first
                pipeline failure; the registered handlers turn it into a
                response.
        """
        ext_state: dict[str, Any] = current_app.extensions["sqla_resource"]

        if action is None:
            endpoint = request.endpoint or ""
            action = endpoint.rpartition(".")[2]

        params: dict[str, Any] = {**request.args.to_dict(), **(request.view_args or {})}
        oracle: AuthorizationOracle | None = ext_state["oracle"]

        instance = controller(
            action=action,
            params=params,
            actor=ext_state["actor_provider"](),
            repository=ext_state["repository_provider"](),
            oracle=oracle if oracle is not None else PolicyOracle(),
        )
        instance.before_action()
        return instance
