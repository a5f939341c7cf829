"""MockActor and factory functions for testing controllers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

__all__ = ["MockActor", "make_admin", "make_anonymous", "make_user"]


@dataclass(frozen=True, slots=True)
class MockActor:
    """Test actor that satisfies the ``ActorLike`` protocol.

    ``can(action, resource)`` makes it usable with
    :class:`~sqla_resource.policy.ActorOracle`: admins may do anything,
    other roles only the verbs listed in ``allowed``.

    Example::

        actor = MockActor(id=1, allowed=frozenset({"read"}))
        actor.can("read", note)  # True
        actor.can("delete", note)  # False
    """

    id: int | str
    role: str = "viewer"
    allowed: frozenset[str] = field(default_factory=frozenset)

    def can(self, action: str, resource: Any) -> bool:
        return self.role == "admin" or action in self.allowed


def make_admin(id: int | str = 1) -> MockActor:
    """Create an admin ``MockActor`` that is allowed everything.

    Example::

        admin = make_admin()
        assert admin.can("delete", note)
    """
    return MockActor(id=id, role="admin")


def make_user(
    id: int | str = 1,
    role: str = "viewer",
    allowed: frozenset[str] | set[str] | tuple[str, ...] = (),
) -> MockActor:
    """Create a regular user ``MockActor``.

    Args:
        id: The actor's identifier. Defaults to ``1``.
        role: The actor's role. Defaults to ``"viewer"``.
        allowed: Verbs the actor may perform on any resource.

    Example::

        user = make_user(id=5, allowed={"read", "update"})
        assert user.can("update", note)
    """
    return MockActor(id=id, role=role, allowed=frozenset(allowed))


def make_anonymous() -> MockActor:
    """Create an anonymous ``MockActor`` with ``id=0`` that may do nothing."""
    return MockActor(id=0, role="anonymous")
