"""ResolutionContext — per-request parameters and loaded-entity slots."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

__all__ = ["ResolutionContext"]


@dataclass(slots=True)
class ResolutionContext:
    """State owned by one request while its pipeline runs.

    ``slots`` maps parent candidate names and the primary resource name
    to the loaded entity (or ``None``).  ``resolved_parents`` lists the
    parent slots filled by the loader, in resolution order.

    Attributes:
        action: The controller action being dispatched (e.g. ``"show"``).
        resource_name: Slot name of the primary resource (e.g. ``"note"``).
        params: Route and query parameters of the request.
        actor: The current user/principal.
        controller: Controller name, for diagnostics.

    Example::

        ctx = ResolutionContext(action="show", resource_name="note", params={"id": "3"})
        ctx.param("id")  # "3"
        ctx.resource  # None until load_resource runs
    """

    action: str
    resource_name: str
    params: Mapping[str, Any] = field(default_factory=dict)
    actor: Any = None
    controller: str = ""
    slots: dict[str, Any] = field(default_factory=dict)
    resolved_parents: list[str] = field(default_factory=list)

    def param(self, key: str) -> Any | None:
        """Return the parameter ``key``, or ``None`` when absent or blank."""
        value = self.params.get(key)
        if value is None:
            return None
        if isinstance(value, str) and not value.strip():
            return None
        return value

    def get(self, name: str) -> Any | None:
        return self.slots.get(name)

    def set(self, name: str, value: Any) -> None:
        self.slots[name] = value

    def set_parent(self, name: str, entity: Any) -> None:
        """Fill a parent slot and record it as resolved."""
        self.slots[name] = entity
        if name not in self.resolved_parents:
            self.resolved_parents.append(name)

    def first_loaded(self, names: Iterable[str]) -> tuple[str, Any] | None:
        """Return ``(name, entity)`` for the first populated slot among ``names``."""
        for name in names:
            entity = self.slots.get(name)
            if entity is not None:
                return name, entity
        return None

    @property
    def parent(self) -> Any | None:
        """The first parent resolved for this request, if any."""
        found = self.first_loaded(self.resolved_parents)
        return found[1] if found is not None else None

    @property
    def resource(self) -> Any | None:
        """The primary resource slot."""
        return self.slots.get(self.resource_name)
