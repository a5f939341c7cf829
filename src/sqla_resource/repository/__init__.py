"""Repositories — persistence backends for resource loading."""

from sqla_resource.repository._sqlalchemy import ModelScope, RelationshipScope, SQLAlchemyRepository

__all__ = ["ModelScope", "RelationshipScope", "SQLAlchemyRepository"]
