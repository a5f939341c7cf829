"""Data models for action plans."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

__all__ = ["ActionPlan", "PlannedStage"]


@dataclass(frozen=True, slots=True)
class PlannedStage:
    """One rule that would run for an action.

    Attributes:
        stage: Pipeline stage name (e.g. ``"load_parent"``).
        candidates: Parent names considered (parent stages only).
        required: Whether an absent parent fails the request.
        permit: Verb that would be checked (authorization stages only).
        children: Scope accessor used (loading stages only).
        candidate_permits: ``(parent, verb)`` pairs when the verb depends
            on which parent is resolved (``permit`` is then ``None``).
    """

    stage: str
    candidates: tuple[str, ...] = ()
    required: bool | None = None
    permit: str | None = None
    children: str | None = None
    candidate_permits: tuple[tuple[str, str], ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        return {
            "stage": self.stage,
            "candidates": list(self.candidates),
            "required": self.required,
            "permit": self.permit,
            "children": self.children,
            "candidate_permits": dict(self.candidate_permits),
        }

    def describe(self) -> str:
        parts: list[str] = [self.stage]
        if self.candidates:
            parts.append(f"candidates={list(self.candidates)}")
        if self.required is not None:
            parts.append("required" if self.required else "optional")
        if self.permit is not None:
            parts.append(f"permit={self.permit!r}")
        if self.candidate_permits:
            parts.append(f"permit per resolved parent {dict(self.candidate_permits)!r}")
        if self.children is not None:
            parts.append(f"scope={self.children!r}")
        return " ".join(parts)


@dataclass(frozen=True, slots=True)
class ActionPlan:
    """Everything the pipeline would do before one controller action.

    Attributes:
        controller: Controller class name.
        action: The action being explained.
        resource_name: Slot name of the primary resource.
        stages: Rules that would run, in execution order.
    """

    controller: str
    action: str
    resource_name: str
    stages: list[PlannedStage]

    @property
    def is_empty(self) -> bool:
        return not self.stages

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable dictionary."""
        return {
            "controller": self.controller,
            "action": self.action,
            "resource_name": self.resource_name,
            "stages": [s.to_dict() for s in self.stages],
        }

    def __str__(self) -> str:
        """Return a human-readable multi-line plan."""
        lines: list[str] = [f"Action Plan: {self.controller}.{self.action}"]
        lines.append(f"  Resource: {self.resource_name}")
        if self.is_empty:
            lines.append("  NO STAGES (nothing is loaded or authorized)")
        for index, stage in enumerate(self.stages, start=1):
            lines.append(f"  {index}. {stage.describe()}")
        return "\n".join(lines)
