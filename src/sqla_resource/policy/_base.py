"""PolicyRegistration dataclass — metadata for a registered policy."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

__all__ = ["PolicyFn", "PolicyRegistration"]

# A policy decides whether ``actor`` may act on one resource instance.
PolicyFn = Callable[[Any, Any], bool]


@dataclass(frozen=True, slots=True)
class PolicyRegistration:
    """A single registered policy function with its metadata.

    Attributes:
        resource_type: The model class this policy applies to.
        action: The verb (e.g. ``"read"``, ``"update"``, ``"rotate"``).
        fn: ``fn(actor, resource) -> bool``.
        name: The policy function name (for debugging/logging).
        description: Human-readable description (from docstring).
    """

    resource_type: type
    action: str
    fn: PolicyFn
    name: str
    description: str
