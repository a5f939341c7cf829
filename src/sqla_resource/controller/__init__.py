"""Controller base class with declarative resource loading."""

from sqla_resource.controller._base import ResourceController

__all__ = ["ResourceController"]
