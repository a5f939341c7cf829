"""Rule records produced by controller declarations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqla_resource.exceptions import ConfigurationError

__all__ = [
    "ActionFilter",
    "ParentAuthorization",
    "ParentRule",
    "ResourceAuthorization",
    "ResourceRule",
]


def _action_names(actions: str | Iterable[str]) -> frozenset[str]:
    if isinstance(actions, str):
        return frozenset({actions})
    return frozenset(actions)


@dataclass(frozen=True, slots=True)
class ActionFilter:
    """Which controller actions a rule applies to.

    ``only`` restricts the rule to the listed actions; otherwise every
    action not listed in ``exclude`` matches.

    Example::

        ActionFilter.build(only=["show", "edit"]).applies_to("show")  # True
        ActionFilter.build(exclude="index").applies_to("index")  # False
    """

    only: frozenset[str] | None = None
    exclude: frozenset[str] = frozenset()

    @classmethod
    def build(
        cls,
        *,
        only: str | Iterable[str] | None = None,
        exclude: str | Iterable[str] | None = None,
        default: Iterable[str] | None = None,
    ) -> ActionFilter:
        """Build a filter from declaration options.

        Args:
            only: Actions the rule is limited to.
            exclude: Actions the rule skips.
            default: ``only`` value used when neither option is given.

        Raises:
            ConfigurationError: If both ``only`` and ``exclude`` are given.
        """
        if only is not None and exclude is not None:
            raise ConfigurationError("pass either only= or exclude=, not both")
        if only is None and exclude is None and default is not None:
            only = tuple(default)
        return cls(
            only=_action_names(only) if only is not None else None,
            exclude=_action_names(exclude) if exclude is not None else frozenset(),
        )

    def applies_to(self, action: str) -> bool:
        if self.only is not None:
            return action in self.only
        return action not in self.exclude

    def __str__(self) -> str:
        if self.only is not None:
            return f"only={sorted(self.only)}"
        if self.exclude:
            return f"exclude={sorted(self.exclude)}"
        return "all actions"


@dataclass(frozen=True, slots=True)
class ParentRule:
    """One group of acceptable parents, resolved first-match-wins.

    Attributes:
        candidates: Parent type names in precedence order.
        required: Whether failing to resolve any candidate is an error.
        permit: Verb checked when the resolved parent is authorized.
        children: Name of the scope accessor serving this rule.
        actions: Actions the rule applies to.
    """

    candidates: tuple[str, ...]
    required: bool
    permit: str
    children: str
    actions: ActionFilter

    def id_params(self, suffix: str = "_id") -> tuple[str, ...]:
        """Request parameters that identify each candidate, in order."""
        return tuple(f"{name}{suffix}" for name in self.candidates)


@dataclass(frozen=True, slots=True)
class ParentAuthorization:
    """Authorization check on a loaded parent.

    Attributes:
        candidates: Slots to check; empty means the first resolved parent.
        required: Whether an empty slot is an error.
        permit: Explicit verb, or ``None`` to use the verb of the parent
            rule that declared the slot.
        actions: Actions the check applies to.
    """

    candidates: tuple[str, ...]
    required: bool
    permit: str | None
    actions: ActionFilter


@dataclass(frozen=True, slots=True)
class ResourceRule:
    """Loading of the controller's primary resource."""

    children: str
    actions: ActionFilter


@dataclass(frozen=True, slots=True)
class ResourceAuthorization:
    """Authorization check on the controller's primary resource.

    ``permit`` overrides the verb derived from the action name.
    """

    permit: str | None
    actions: ActionFilter
