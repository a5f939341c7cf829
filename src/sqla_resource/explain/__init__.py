"""Explain — inspect which rules run before a controller action."""

from sqla_resource.explain._models import ActionPlan, PlannedStage
from sqla_resource.explain._plan import explain_action

__all__ = ["ActionPlan", "PlannedStage", "explain_action"]
