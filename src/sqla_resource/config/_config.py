"""Layered configuration for sqla-resource."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from sqla_resource._types import OnMissingPolicy

__all__ = [
    "DEFAULT_RESOURCE_ACTIONS",
    "ResourceConfig",
    "configure",
    "get_global_config",
    "_reset_global_config",
    "_set_global_config",
]

_VALID_POLICIES: set[str] = {"deny", "raise"}

# Actions that load_resource / authorize_resource apply to when neither
# ``only`` nor ``exclude`` is given.
DEFAULT_RESOURCE_ACTIONS: tuple[str, ...] = ("show", "new", "create", "edit", "update", "destroy")


@dataclass(frozen=True, slots=True)
class ResourceConfig:
    """Layered configuration with merge semantics (global -> controller).

    Attributes:
        default_parent_action: Verb checked on a parent when neither the
            parent authorization nor its parent rule names one.
        resource_actions: Default action filter for resource loading and
            authorization.
        id_param: Request parameter holding the primary resource id.
        parent_param_suffix: Suffix appended to a parent candidate name to
            form its id parameter (``group`` -> ``group_id``).
        on_missing_policy: ``"deny"`` makes ``PolicyOracle`` refuse when no
            policy is registered, ``"raise"`` raises ``NoPolicyError``.
        log_decisions: Emit resolution and authorization decisions on the
            ``sqla_resource`` logger.

    Example::

        config = ResourceConfig(on_missing_policy="raise")
        merged = config.merge(log_decisions=True)
    """

    default_parent_action: str = "read"
    resource_actions: tuple[str, ...] = DEFAULT_RESOURCE_ACTIONS
    id_param: str = "id"
    parent_param_suffix: str = "_id"
    on_missing_policy: OnMissingPolicy = "deny"
    log_decisions: bool = False

    def __post_init__(self) -> None:
        if self.on_missing_policy not in _VALID_POLICIES:
            raise ValueError(
                f"on_missing_policy must be one of {_VALID_POLICIES!r}, "
                f"got {self.on_missing_policy!r}"
            )
        if not self.default_parent_action:
            raise ValueError("default_parent_action must be a non-empty string")
        if not self.id_param:
            raise ValueError("id_param must be a non-empty string")
        if not self.parent_param_suffix:
            raise ValueError("parent_param_suffix must be a non-empty string")
        if isinstance(self.resource_actions, str):
            raise ValueError(
                f"resource_actions must be a sequence of action names, "
                f"got {self.resource_actions!r}"
            )
        # Accept any iterable of names but store a tuple so the config
        # stays hashable.
        object.__setattr__(self, "resource_actions", tuple(self.resource_actions))

    def merge(
        self,
        *,
        default_parent_action: str | None = None,
        resource_actions: Iterable[str] | None = None,
        id_param: str | None = None,
        parent_param_suffix: str | None = None,
        on_missing_policy: OnMissingPolicy | None = None,
        log_decisions: bool | None = None,
    ) -> ResourceConfig:
        """Return a new config with non-None overrides applied.

        Example::

            base = ResourceConfig()
            api_cfg = base.merge(id_param="pk", log_decisions=True)
        """
        return ResourceConfig(
            default_parent_action=(
                default_parent_action
                if default_parent_action is not None
                else self.default_parent_action
            ),
            resource_actions=(
                tuple(resource_actions) if resource_actions is not None else self.resource_actions
            ),
            id_param=id_param if id_param is not None else self.id_param,
            parent_param_suffix=(
                parent_param_suffix if parent_param_suffix is not None else self.parent_param_suffix
            ),
            on_missing_policy=(
                on_missing_policy if on_missing_policy is not None else self.on_missing_policy
            ),
            log_decisions=log_decisions if log_decisions is not None else self.log_decisions,
        )


# ---------------------------------------------------------------------------
# Global configuration singleton
# ---------------------------------------------------------------------------

_global_config = ResourceConfig()


def get_global_config() -> ResourceConfig:
    """Return the current global configuration."""
    return _global_config


def configure(
    *,
    default_parent_action: str | None = None,
    resource_actions: Iterable[str] | None = None,
    id_param: str | None = None,
    parent_param_suffix: str | None = None,
    on_missing_policy: OnMissingPolicy | None = None,
    log_decisions: bool | None = None,
) -> ResourceConfig:
    """Update the global configuration by merging overrides.

    Only non-None values are applied.  Declarations read the config when
    the controller class is defined; request-time settings (``id_param``,
    ``parent_param_suffix``, ``log_decisions``, ``on_missing_policy``) are
    read on every request.

    Returns:
        The updated global ``ResourceConfig``.

    Example::

        configure(on_missing_policy="raise", log_decisions=True)
    """
    global _global_config
    _global_config = _global_config.merge(
        default_parent_action=default_parent_action,
        resource_actions=resource_actions,
        id_param=id_param,
        parent_param_suffix=parent_param_suffix,
        on_missing_policy=on_missing_policy,
        log_decisions=log_decisions,
    )
    return _global_config


def _set_global_config(cfg: ResourceConfig) -> None:
    """Replace global config with an exact snapshot. For testing only."""
    global _global_config
    _global_config = cfg


def _reset_global_config() -> None:
    """Reset global config to defaults. For testing only."""
    global _global_config
    _global_config = ResourceConfig()
