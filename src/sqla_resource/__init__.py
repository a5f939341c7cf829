"""sqla-resource — declarative resource loading and authorization for controllers.

Controllers declare which parent and primary resources they load and
authorize; a fixed pipeline runs those declarations before each action
against a SQLAlchemy 2.0 repository and an authorization oracle.

Example::

    from sqla_resource import (
        ResourceController,
        load_and_authorize_parent,
        load_and_authorize_resource,
    )

    class NotesController(ResourceController):
        rules = (
            load_and_authorize_parent("person", "group"),
            load_and_authorize_resource(),
        )

    controller = NotesController(
        action="show",
        params={"group_id": "1", "id": "3"},
        actor=current_user,
        repository=SQLAlchemyRepository.from_base(session, Base),
    )
    controller.before_action()
    controller.resource  # Note 3, a child of Group 1
"""

from importlib.metadata import PackageNotFoundError, version

from sqla_resource._checks import authorize, can
from sqla_resource._types import ActorLike, AuthorizationOracle, Repository, Scope
from sqla_resource.config._config import ResourceConfig, configure
from sqla_resource.controller._base import ResourceController
from sqla_resource.declaration._macros import (
    authorize_parent,
    authorize_resource,
    load_and_authorize_parent,
    load_and_authorize_resource,
    load_parent,
    load_resource,
)
from sqla_resource.exceptions import (
    AccessDenied,
    ConfigurationError,
    NoPolicyError,
    ParameterMissing,
    ResourceError,
    ResourceNotFound,
)
from sqla_resource.explain._plan import explain_action
from sqla_resource.policy._decorator import policy
from sqla_resource.policy._oracle import ActorOracle, PolicyOracle
from sqla_resource.policy._registry import PolicyRegistry
from sqla_resource.repository._sqlalchemy import SQLAlchemyRepository
from sqla_resource.resolver._pipeline import PipelineResult

try:
    __version__ = version("sqla-resource")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = [
    "__version__",
    "AccessDenied",
    "ActorLike",
    "ActorOracle",
    "AuthorizationOracle",
    "ConfigurationError",
    "NoPolicyError",
    "ParameterMissing",
    "PipelineResult",
    "PolicyOracle",
    "PolicyRegistry",
    "Repository",
    "ResourceConfig",
    "ResourceController",
    "ResourceError",
    "ResourceNotFound",
    "SQLAlchemyRepository",
    "Scope",
    "authorize",
    "authorize_parent",
    "authorize_resource",
    "can",
    "configure",
    "explain_action",
    "load_and_authorize_parent",
    "load_and_authorize_resource",
    "load_parent",
    "load_resource",
    "policy",
]
