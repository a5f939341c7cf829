"""sqla-resource testing utilities — actors, oracles, assertions and fixtures.

- **MockActor / factories**: Lightweight actors usable with ``ActorOracle``.
- **RecordingOracle**: Fixed answers plus a log of every check.
- **Assertion helpers**: ``assert_loaded``, ``assert_denied``,
  ``assert_parameter_missing``.
- **Fixtures**: ``policy_registry``, ``resource_config``,
  ``recording_oracle``, ``isolated_resource_state``.

Example::

    from sqla_resource.testing import RecordingOracle, assert_denied

    def test_update_requires_permission(repository):
        oracle = RecordingOracle(deny={"update"})
        controller = NotesController(
            action="update", params={"id": "1"}, repository=repository, oracle=oracle
        )
        assert_denied(controller, action="update")
"""

from sqla_resource.testing._actors import MockActor, make_admin, make_anonymous, make_user
from sqla_resource.testing._assertions import (
    assert_denied,
    assert_loaded,
    assert_parameter_missing,
)
from sqla_resource.testing._fixtures import (
    isolated_resource_state,
    policy_registry,
    recording_oracle,
    resource_config,
)
from sqla_resource.testing._isolation import isolated_resources
from sqla_resource.testing._oracle import OracleCall, RecordingOracle

__all__ = [
    "MockActor",
    "OracleCall",
    "RecordingOracle",
    "assert_denied",
    "assert_loaded",
    "assert_parameter_missing",
    "isolated_resource_state",
    "isolated_resources",
    "make_admin",
    "make_anonymous",
    "make_user",
    "policy_registry",
    "recording_oracle",
    "resource_config",
]
