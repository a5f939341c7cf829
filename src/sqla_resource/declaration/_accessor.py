"""ScopeAccessor — the synthesized child-collection accessor."""

from __future__ import annotations

from typing import Any

__all__ = ["ScopeAccessor"]


class ScopeAccessor:
    """Descriptor installed on a controller class for each accessor name.

    Reading the attribute on a controller instance returns a zero-argument
    callable producing the scope for ``name``: the children of the first
    loaded parent among ``candidates``, or the unscoped collection.  An
    empty ``candidates`` tuple means every parent candidate the controller
    declares, in declaration order.

    Example::

        class NotesController(ResourceController):
            rules = (load_parent("group", "person", optional=True),)

        NotesController(action="index", ...).notes()  # group.notes, person.notes or all notes
    """

    __slots__ = ("name", "candidates")

    def __init__(self, name: str, candidates: tuple[str, ...] = ()) -> None:
        self.name = name
        self.candidates = candidates

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if instance is None:
            return self
        name = self.name

        def accessor() -> Any:
            return instance.scope(name)

        accessor.__name__ = name
        return accessor

    def __repr__(self) -> str:
        return f"ScopeAccessor({self.name!r}, candidates={self.candidates!r})"
