"""ResourceController — declarative base class for resource-loading controllers."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, ClassVar

from sqla_resource._naming import controller_name, singularize
from sqla_resource._types import AuthorizationOracle, Repository, Scope
from sqla_resource.declaration._macros import iter_declarations
from sqla_resource.declaration._registry import ControllerRegistry
from sqla_resource.exceptions import ConfigurationError
from sqla_resource.policy._oracle import PolicyOracle
from sqla_resource.resolver._context import ResolutionContext
from sqla_resource.resolver._pipeline import PipelineResult, run_pipeline
from sqla_resource.resolver._resource import authorize_resource
from sqla_resource.resolver._scope import resolve_scope

__all__ = ["ResourceController"]


class ResourceController:
    """Base class for controllers that load and authorize resources.

    Subclasses list their declarations in ``rules``; they are applied to a
    per-class :class:`~sqla_resource.declaration.ControllerRegistry` when
    the class is defined.  Resource names derive from the class name
    (``NotesController`` -> ``note`` / ``notes``) unless
    ``resource_name`` / ``resource_accessor_name`` are set.

    One instance serves one request.  Call :meth:`before_action` before
    running the action body; it raises the first failure.

    Example::

        class NotesController(ResourceController):
            rules = (
                load_and_authorize_parent("person", "group", shallow=True),
                load_and_authorize_resource(),
            )

            def resource_params(self):
                return {"title": self.params["title"]}

            def show(self):
                return {"title": self.resource.title}

        controller = NotesController(
            action="show",
            params={"group_id": "1", "id": "7"},
            actor=current_user,
            repository=SQLAlchemyRepository.from_base(session, Base),
        )
        controller.before_action()
        controller.notes()  # group 1's notes
    """

    resource_name: ClassVar[str] = "resource"
    resource_accessor_name: ClassVar[str] = "resources"
    rules: ClassVar[Sequence[Any]] = ()
    _resource_registry: ClassVar[ControllerRegistry]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "resource_accessor_name" not in cls.__dict__:
            cls.resource_accessor_name = controller_name(cls)
        if "resource_name" not in cls.__dict__:
            cls.resource_name = singularize(cls.resource_accessor_name)
        registry = cls._resource_registry.inherit(
            cls,
            resource_name=cls.resource_name,
            resource_accessor_name=cls.resource_accessor_name,
        )
        cls._resource_registry = registry
        for declaration in iter_declarations(cls.__dict__.get("rules", ())):
            declaration.apply(registry)

    def __init__(
        self,
        *,
        action: str,
        params: Mapping[str, Any] | None = None,
        actor: Any = None,
        repository: Repository,
        oracle: AuthorizationOracle | None = None,
    ) -> None:
        self.repository = repository
        self.oracle = oracle if oracle is not None else PolicyOracle()
        self._actor = actor
        self.context = ResolutionContext(
            action=action,
            resource_name=self.resource_name,
            params=dict(params or {}),
            actor=actor,
            controller=type(self).__name__,
        )

    @classmethod
    def resource_registry(cls) -> ControllerRegistry:
        """The rules declared for this controller class."""
        return cls._resource_registry

    @property
    def action(self) -> str:
        return self.context.action

    @property
    def params(self) -> Mapping[str, Any]:
        return self.context.params

    @property
    def resource(self) -> Any | None:
        """The primary resource loaded for this request."""
        return self.context.resource

    @property
    def parent(self) -> Any | None:
        """The first parent resolved for this request."""
        return self.context.parent

    def current_actor(self) -> Any:
        """Return the actor to authorize; override to look it up lazily."""
        return self._actor

    def resource_params(self) -> Mapping[str, Any]:
        """Sanitized attributes assigned to a new resource on ``create``.

        Override in controllers that load resources for ``create``.
        """
        raise ConfigurationError(
            f"{type(self).__name__} must define resource_params() "
            f"to create {self.resource_name!r} resources"
        )

    def _resource_attributes(self, resource_name: str) -> Mapping[str, Any]:
        return self.resource_params()

    def run_pipeline(self) -> PipelineResult:
        """Run the declared stages for this request without raising failures."""
        self.context.actor = self.current_actor()
        return run_pipeline(
            self._resource_registry,
            self.context,
            repository=self.repository,
            oracle=self.oracle,
            attributes=self._resource_attributes,
        )

    def before_action(self) -> PipelineResult:
        """Run the declared stages and raise the first failure.

        Raises:
            ParameterMissing: A required parent id was not supplied.
            AccessDenied: An authorization check failed.
            ResourceNotFound: A requested id does not exist.
            ConfigurationError: The controller is wired incorrectly.
        """
        result = self.run_pipeline()
        result.raise_for_failure()
        return result

    def scope(self, name: str | None = None) -> Scope:
        """Return the scope behind the accessor ``name`` (default: the resource's)."""
        return resolve_scope(
            self._resource_registry,
            self.context,
            name or self.resource_accessor_name,
            repository=self.repository,
        )

    def authorize(self, resource: Any = None, *, permit: str | None = None) -> None:
        """Authorize ``resource`` (default: the loaded resource) for this action.

        Raises:
            AccessDenied: If the oracle refuses.
            ConfigurationError: If there is nothing to authorize.
        """
        self.context.actor = self.current_actor()
        failure = authorize_resource(
            self.context, oracle=self.oracle, resource=resource, permit=permit
        )
        if failure is not None:
            raise failure


ResourceController._resource_registry = ControllerRegistry(
    resource_name=ResourceController.resource_name,
    resource_accessor_name=ResourceController.resource_accessor_name,
    owner=ResourceController,
)
