"""Exception hierarchy for sqla-resource."""

from __future__ import annotations

from collections.abc import Iterable

__all__ = [
    "AccessDenied",
    "ConfigurationError",
    "NoPolicyError",
    "ParameterMissing",
    "ResourceError",
    "ResourceNotFound",
]


class ResourceError(Exception):
    """Base exception for all sqla-resource errors."""


class ParameterMissing(ResourceError):  # noqa: N818
    """A required routing or identifier parameter was absent.

    Raised when none of a required parent rule's ``<name>_id`` parameters
    is present, or when parent authorization is required but no parent
    was loaded.

    Attributes:
        params: The parameter names that were expected (may be empty).

    Example::

        try:
            controller.before_action()
        except ParameterMissing as exc:
            print(exc.params)  # ("group_id", "person_id")
    """

    def __init__(self, message: str, *, params: Iterable[str] = ()) -> None:
        self.params = tuple(params)
        super().__init__(message)


class AccessDenied(ResourceError):  # noqa: N818
    """The authorization oracle refused a required check.

    Attributes:
        actor: The actor that was denied.
        action: The verb that was checked (e.g. ``"read"``).
        resource: The resource instance that was checked.
        resource_type: Class name of the resource.

    Example::

        try:
            controller.before_action()
        except AccessDenied as exc:
            log.warning("%r cannot %s %s", exc.actor, exc.action, exc.resource_type)
    """

    def __init__(
        self,
        *,
        actor: object,
        action: str,
        resource: object,
        message: str | None = None,
    ) -> None:
        self.actor = actor
        self.action = action
        self.resource = resource
        self.resource_type = type(resource).__name__
        if message is None:
            message = f"Actor {actor!r} is not authorized to {action} {resource!r}"
        super().__init__(message)


class ResourceNotFound(ResourceError):  # noqa: N818
    """No entity of ``resource_type`` exists for the requested id.

    Raised by repositories.  The resolver never catches it; framework
    integrations translate it into a 404 response.

    Attributes:
        resource_type: The type name or class name that was searched.
        id: The identifier that did not resolve.
    """

    def __init__(self, *, resource_type: str, id: object) -> None:
        self.resource_type = resource_type
        self.id = id
        super().__init__(f"{resource_type} with id {id!r} not found")


class ConfigurationError(ResourceError):
    """Resource loading or authorization was wired up incorrectly.

    Raised at class-definition time for invalid declarations (e.g. a
    parent rule with no candidate names) and at request time when the
    resource or verb to authorize cannot be determined.  It is a
    programmer error, never an access-control decision.
    """


class NoPolicyError(ResourceError):
    """No policy registered for (resource_type, action).

    Raised by :class:`~sqla_resource.policy.PolicyOracle` when configured
    with ``on_missing_policy="raise"`` instead of denying.

    Attributes:
        resource_type: The resource type with no policy.
        action: The action with no policy.
    """

    def __init__(self, *, resource_type: str, action: str) -> None:
        self.resource_type = resource_type
        self.action = action
        super().__init__(f"No policy registered for ({resource_type}, {action!r})")
