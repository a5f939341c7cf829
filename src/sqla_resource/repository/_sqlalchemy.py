"""SQLAlchemy 2.0 repository — scopes backed by ``select()`` statements."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import Column, Select, select
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import (
    DeclarativeBase,
    RelationshipDirection,
    RelationshipProperty,
    Session,
    with_parent,
)

from sqla_resource._naming import underscore
from sqla_resource.exceptions import ConfigurationError, ResourceNotFound

__all__ = ["ModelScope", "RelationshipScope", "SQLAlchemyRepository"]


def _pk_column(model: type) -> Column[Any]:
    primary_key = sa_inspect(model).primary_key
    if len(primary_key) != 1:
        raise ConfigurationError(
            f"{model.__name__} must have a single-column primary key to be found by id"
        )
    return primary_key[0]  # type: ignore[return-value]


def _coerce_pk(model: type, value: Any) -> Any:
    """Convert a request parameter to the primary key column's Python type.

    Raises:
        ResourceNotFound: If the value cannot be converted (``"abc"`` for
            an integer key cannot match any row).
    """
    column = _pk_column(model)
    try:
        python_type = column.type.python_type
    except NotImplementedError:
        return value
    if isinstance(value, python_type):
        return value
    try:
        return python_type(value)
    except (TypeError, ValueError) as exc:
        raise ResourceNotFound(resource_type=model.__name__, id=value) from exc


class ModelScope:
    """Every row of one mapped class.

    Example::

        scope = ModelScope(session, Note)
        scope.find("3")  # Note with id 3, or ResourceNotFound
        scope.new()  # transient Note()
    """

    def __init__(self, session: Session, model: type) -> None:
        self.session = session
        self.model = model

    def select(self) -> Select[Any]:
        """The ``SELECT`` behind this scope; compose further filters on it."""
        return select(self.model)

    def all(self) -> list[Any]:
        return list(self.session.execute(self.select()).scalars().all())

    def find(self, id: Any) -> Any:
        """Return the member with primary key ``id``.

        Raises:
            ResourceNotFound: If no member has that key.
        """
        pk = _coerce_pk(self.model, id)
        stmt = self.select().where(_pk_column(self.model) == pk)
        entity = self.session.execute(stmt).scalars().first()
        if entity is None:
            raise ResourceNotFound(resource_type=self.model.__name__, id=id)
        return entity

    def new(self) -> Any:
        """Return a transient instance; it is not added to the session."""
        return self.model()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.model.__name__})"


class RelationshipScope(ModelScope):
    """The members of one relationship collection of a parent instance.

    ``find`` only matches children of ``parent``; ``new`` pre-fills the
    foreign key of one-to-many relationships so the child belongs to
    ``parent`` once it is added and flushed.
    """

    def __init__(
        self,
        session: Session,
        parent: Any,
        relationship: RelationshipProperty[Any],
    ) -> None:
        super().__init__(session, relationship.mapper.class_)
        self.parent = parent
        self.relationship = relationship

    def select(self) -> Select[Any]:
        criterion = with_parent(self.parent, self.relationship.class_attribute)
        return select(self.model).where(criterion)

    def new(self) -> Any:
        entity = self.model()
        if self.relationship.direction is not RelationshipDirection.ONETOMANY:
            return entity
        parent_mapper = sa_inspect(type(self.parent))
        child_mapper = sa_inspect(self.model)
        for local, remote in self.relationship.local_remote_pairs:
            parent_key = parent_mapper.get_property_by_column(local).key
            child_key = child_mapper.get_property_by_column(remote).key
            setattr(entity, child_key, getattr(self.parent, parent_key))
        return entity

    def __repr__(self) -> str:
        return (
            f"RelationshipScope({type(self.parent).__name__}."
            f"{self.relationship.key} -> {self.model.__name__})"
        )


class SQLAlchemyRepository:
    """Repository resolving type names to mapped classes.

    Type names are underscored class names (``BlogPost`` ->
    ``"blog_post"``).  Register models explicitly or collect every class
    of a declarative base with :meth:`from_base`.

    Args:
        session: The session used for every query.
        models: Mapping of type name to mapped class.

    Example::

        repository = SQLAlchemyRepository.from_base(session, Base)
        repository.find("group", "1")
        repository.children(group, "notes").all()
    """

    def __init__(self, session: Session, models: Mapping[str, type] | None = None) -> None:
        self.session = session
        self._models: dict[str, type] = dict(models or {})

    @classmethod
    def from_base(cls, session: Session, base: type[DeclarativeBase]) -> SQLAlchemyRepository:
        """Build a repository registering every class mapped by ``base``."""
        models = {
            underscore(mapper.class_.__name__): mapper.class_ for mapper in base.registry.mappers
        }
        return cls(session, models)

    def register(self, type_name: str, model: type) -> None:
        self._models[type_name] = model

    def model_for(self, type_name: str) -> type:
        try:
            return self._models[type_name]
        except KeyError:
            raise ConfigurationError(f"no model registered for {type_name!r}") from None

    def find(self, type_name: str, id: Any) -> Any:
        return self.scope(type_name).find(id)

    def scope(self, type_name: str) -> ModelScope:
        return ModelScope(self.session, self.model_for(type_name))

    def new(self, type_name: str) -> Any:
        return self.model_for(type_name)()

    def children(self, parent: Any, accessor_name: str) -> RelationshipScope:
        """Scope of ``parent``'s relationship called ``accessor_name``.

        Raises:
            ConfigurationError: If ``parent`` has no such relationship.
        """
        relationships = sa_inspect(type(parent)).relationships
        if accessor_name not in relationships:
            raise ConfigurationError(
                f"{type(parent).__name__} has no relationship {accessor_name!r}"
            )
        return RelationshipScope(self.session, parent, relationships[accessor_name])

    def __repr__(self) -> str:
        return f"SQLAlchemyRepository(models={sorted(self._models)!r})"
