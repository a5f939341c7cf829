"""Configuration module for sqla-resource."""

from __future__ import annotations

from sqla_resource.config._config import (
    DEFAULT_RESOURCE_ACTIONS,
    ResourceConfig,
    configure,
    get_global_config,
)

__all__ = ["DEFAULT_RESOURCE_ACTIONS", "ResourceConfig", "configure", "get_global_config"]
