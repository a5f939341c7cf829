"""Declaration functions used in a controller's ``rules`` attribute."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from sqla_resource._types import StageName
from sqla_resource.declaration._registry import Actions, ControllerRegistry
from sqla_resource.exceptions import ConfigurationError

__all__ = [
    "Declaration",
    "authorize_parent",
    "authorize_resource",
    "iter_declarations",
    "load_and_authorize_parent",
    "load_and_authorize_resource",
    "load_parent",
    "load_resource",
]


def _options(**options: Any) -> dict[str, Any]:
    return {key: value for key, value in options.items() if value is not None}


@dataclass(frozen=True, slots=True)
class Declaration:
    """One declared pipeline rule, applied to a controller's registry.

    Attributes:
        stage: The pipeline stage the rule belongs to.
        names: Parent candidate names (parent stages only).
        options: Keyword options passed to the registry.
    """

    stage: StageName
    names: tuple[str, ...] = ()
    options: Mapping[str, Any] = field(default_factory=dict)

    def apply(self, registry: ControllerRegistry) -> None:
        if self.stage == "load_parent":
            registry.register_parent_rule(self.names, **self.options)
        elif self.stage == "authorize_parent":
            registry.register_parent_authorization(self.names, **self.options)
        elif self.stage == "load_resource":
            registry.register_resource_rule(**self.options)
        elif self.stage == "authorize_resource":
            registry.register_resource_authorization(**self.options)
        else:
            raise ConfigurationError(f"unknown declaration stage {self.stage!r}")


def load_parent(
    *names: str,
    required: bool | None = None,
    shallow: bool | None = None,
    optional: bool | None = None,
    permit: str | None = None,
    children: str | None = None,
    only: Actions = None,
    exclude: Actions = None,
) -> Declaration:
    """Load the parent resource before matching actions.

    Pass one name for each parent the controller can be nested under.
    For each name, in order, the loader looks for ``<name>_id`` in the
    request parameters; the first one present is fetched from the
    repository and stored under ``name`` in the request context.  Later
    names are not consulted.

    With none present, :class:`~sqla_resource.exceptions.ParameterMissing`
    is returned as the request's failure, unless ``shallow=True`` (or
    ``optional=True``) allows unnested routes.

    A scope accessor named after the resource (``notes`` for
    ``NotesController``), or ``children``, is installed on the controller.
    It returns the loaded parent's children, or the unscoped collection.

    Example::

        class NotesController(ResourceController):
            rules = (load_parent("person", "group", shallow=True),)

    Raises:
        ConfigurationError: If no names are given.
    """
    if not names:
        raise ConfigurationError("load_parent() requires at least one parent name")
    return Declaration(
        "load_parent",
        tuple(names),
        _options(
            required=required,
            shallow=shallow,
            optional=optional,
            permit=permit,
            children=children,
            only=only,
            exclude=exclude,
        ),
    )


def authorize_parent(
    *names: str,
    required: bool | None = None,
    shallow: bool | None = None,
    optional: bool | None = None,
    permit: str | None = None,
    only: Actions = None,
    exclude: Actions = None,
) -> Declaration:
    """Authorize the loaded parent before matching actions.

    Checks ``permit`` (default: the verb of the parent rule, ``"read"``)
    on the first loaded parent among ``names`` (or any loaded parent when
    no names are given).  A missing parent is a ``ParameterMissing``
    failure unless ``shallow=True``/``optional=True``, in which case no
    check is made.

    Example::

        class NotesController(ResourceController):
            rules = (
                load_parent("group"),
                authorize_parent("group", permit="update", only=["create"]),
            )
    """
    return Declaration(
        "authorize_parent",
        tuple(names),
        _options(
            required=required,
            shallow=shallow,
            optional=optional,
            permit=permit,
            only=only,
            exclude=exclude,
        ),
    )


def load_and_authorize_parent(
    *names: str,
    required: bool | None = None,
    shallow: bool | None = None,
    optional: bool | None = None,
    permit: str | None = None,
    children: str | None = None,
    only: Actions = None,
    exclude: Actions = None,
) -> tuple[Declaration, Declaration]:
    """Shorthand for :func:`load_parent` followed by :func:`authorize_parent`."""
    return (
        load_parent(
            *names,
            required=required,
            shallow=shallow,
            optional=optional,
            permit=permit,
            children=children,
            only=only,
            exclude=exclude,
        ),
        authorize_parent(
            *names,
            required=required,
            shallow=shallow,
            optional=optional,
            permit=permit,
            only=only,
            exclude=exclude,
        ),
    )


def load_resource(
    *,
    children: str | None = None,
    only: Actions = None,
    exclude: Actions = None,
) -> Declaration:
    """Load or construct the primary resource before matching actions.

    ``show``, ``edit``, ``update`` and ``destroy`` find the resource by
    its ``id`` parameter through the scope accessor.  ``new`` builds an
    unpersisted resource from the scope; ``create`` also assigns the
    controller's :meth:`~sqla_resource.ResourceController.resource_params`.
    """
    return Declaration(
        "load_resource", (), _options(children=children, only=only, exclude=exclude)
    )


def authorize_resource(
    *,
    permit: str | None = None,
    only: Actions = None,
    exclude: Actions = None,
) -> Declaration:
    """Authorize the primary resource before matching actions.

    The verb comes from the action: ``show`` checks ``read``, ``new`` and
    ``create`` check ``create``, ``edit`` and ``update`` check ``update``,
    ``destroy`` checks ``delete``; any other action is its own verb.
    """
    return Declaration(
        "authorize_resource", (), _options(permit=permit, only=only, exclude=exclude)
    )


def load_and_authorize_resource(
    *,
    children: str | None = None,
    permit: str | None = None,
    only: Actions = None,
    exclude: Actions = None,
) -> tuple[Declaration, Declaration]:
    """Shorthand for :func:`load_resource` followed by :func:`authorize_resource`."""
    return (
        load_resource(children=children, only=only, exclude=exclude),
        authorize_resource(permit=permit, only=only, exclude=exclude),
    )


def iter_declarations(rules: Iterable[Any]) -> Iterator[Declaration]:
    """Flatten a ``rules`` attribute (nested tuples allowed) into declarations.

    Raises:
        ConfigurationError: If an entry is not a declaration.
    """
    for item in rules:
        if isinstance(item, Declaration):
            yield item
        elif isinstance(item, Iterable) and not isinstance(item, (str, bytes)):
            yield from iter_declarations(item)
        else:
            raise ConfigurationError(f"rules entries must be declarations, got {item!r}")
