"""Action name to authorization verb mapping."""

from __future__ import annotations

from types import MappingProxyType

__all__ = ["ACTION_VERBS", "NEW_ACTIONS", "action_verb"]

# Actions missing from this map are their own verb, so a custom
# ``rotate`` action checks ``rotate``.
ACTION_VERBS = MappingProxyType(
    {
        "show": "read",
        "new": "create",
        "create": "create",
        "edit": "update",
        "update": "update",
        "destroy": "delete",
    }
)

# Actions that build an unpersisted resource instead of finding one.
NEW_ACTIONS = frozenset({"new", "create"})


def action_verb(action: str) -> str | None:
    """Return the verb checked for ``action``, or ``None`` for an empty action.

    Example::

        action_verb("edit")  # "update"
        action_verb("rotate")  # "rotate"
    """
    return ACTION_VERBS.get(action) or action or None
