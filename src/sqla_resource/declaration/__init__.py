"""Declarations — per-controller rules for loading and authorizing resources."""

from sqla_resource.declaration._accessor import ScopeAccessor
from sqla_resource.declaration._macros import (
    Declaration,
    authorize_parent,
    authorize_resource,
    iter_declarations,
    load_and_authorize_parent,
    load_and_authorize_resource,
    load_parent,
    load_resource,
)
from sqla_resource.declaration._registry import ControllerRegistry
from sqla_resource.declaration._rules import (
    ActionFilter,
    ParentAuthorization,
    ParentRule,
    ResourceAuthorization,
    ResourceRule,
)

__all__ = [
    "ActionFilter",
    "ControllerRegistry",
    "Declaration",
    "ParentAuthorization",
    "ParentRule",
    "ResourceAuthorization",
    "ResourceRule",
    "ScopeAccessor",
    "authorize_parent",
    "authorize_resource",
    "iter_declarations",
    "load_and_authorize_parent",
    "load_and_authorize_resource",
    "load_parent",
    "load_resource",
]
