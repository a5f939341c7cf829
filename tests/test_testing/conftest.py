"""Import fixtures from sqla_resource.testing for test discovery."""

from sqla_resource.testing._fixtures import (
    isolated_resource_state,
    policy_registry,
    recording_oracle,
    resource_config,
)

__all__ = ["isolated_resource_state", "policy_registry", "recording_oracle", "resource_config"]
