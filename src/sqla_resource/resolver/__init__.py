"""Resolver — request-time loading and authorization stages."""

from sqla_resource.resolver._actions import ACTION_VERBS, action_verb
from sqla_resource.resolver._context import ResolutionContext
from sqla_resource.resolver._parent import authorize_parent, load_parent
from sqla_resource.resolver._pipeline import PipelineResult, run_pipeline
from sqla_resource.resolver._resource import assign_attributes, authorize_resource, load_resource
from sqla_resource.resolver._scope import resolve_scope

__all__ = [
    "ACTION_VERBS",
    "PipelineResult",
    "ResolutionContext",
    "action_verb",
    "assign_attributes",
    "authorize_parent",
    "authorize_resource",
    "load_parent",
    "load_resource",
    "resolve_scope",
    "run_pipeline",
]
