"""ControllerRegistry — per-controller resource loading and authorization rules."""

from __future__ import annotations

from collections.abc import Iterable

from sqla_resource.config._config import ResourceConfig, get_global_config
from sqla_resource.declaration._accessor import ScopeAccessor
from sqla_resource.declaration._rules import (
    ActionFilter,
    ParentAuthorization,
    ParentRule,
    ResourceAuthorization,
    ResourceRule,
)
from sqla_resource.exceptions import ConfigurationError

__all__ = ["ControllerRegistry"]

Actions = str | Iterable[str] | None


def _normalize_required(
    required: bool | None,
    shallow: bool | None,
    optional: bool | None,
) -> bool:
    """Resolve ``required`` from the explicit flag or its shallow/optional negation."""
    not_required_flags = [flag for flag in (shallow, optional) if flag is not None]
    if required is not None:
        if required and any(not_required_flags):
            raise ConfigurationError("required=True contradicts shallow=True/optional=True")
        return required
    if not not_required_flags:
        return True
    return not any(not_required_flags)


def _merge_candidates(existing: tuple[str, ...], added: tuple[str, ...]) -> tuple[str, ...]:
    if not existing or not added:
        return ()
    return existing + tuple(name for name in added if name not in existing)


def _candidate_names(names: Iterable[str], *, declaration: str) -> tuple[str, ...]:
    candidates = tuple(names)
    for name in candidates:
        if not isinstance(name, str) or not name.isidentifier():
            raise ConfigurationError(f"{declaration}: invalid parent name {name!r}")
    if len(set(candidates)) != len(candidates):
        raise ConfigurationError(f"{declaration}: duplicate parent names in {candidates!r}")
    return candidates


class ControllerRegistry:
    """Rules declared by one controller class.

    Written while the controller class is being defined and read-only
    afterwards.  Rules accumulate in declaration order; subclasses get a
    copy through :meth:`inherit`, so declaring on a subclass never touches
    the base class.

    Scope accessors are installed on ``owner`` (when given) the first time
    an accessor name is declared; later declarations of the same name
    extend its parent candidates instead of adding another accessor.

    Example::

        registry = ControllerRegistry(resource_name="note", resource_accessor_name="notes")
        registry.register_parent_rule(["group", "person"], optional=True)
        registry.register_resource_rule()
        [r.candidates for r in registry.parent_rules_for("index")]  # [("group", "person")]
    """

    def __init__(
        self,
        *,
        resource_name: str,
        resource_accessor_name: str,
        owner: type | None = None,
        config: ResourceConfig | None = None,
    ) -> None:
        self.resource_name = resource_name
        self.resource_accessor_name = resource_accessor_name
        self.owner = owner
        self._config = config
        self._parent_rules: list[ParentRule] = []
        self._parent_authorizations: list[ParentAuthorization] = []
        self._resource_rules: list[ResourceRule] = []
        self._resource_authorizations: list[ResourceAuthorization] = []
        self._accessors: dict[str, ScopeAccessor] = {}

    @property
    def config(self) -> ResourceConfig:
        return self._config if self._config is not None else get_global_config()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_parent_rule(
        self,
        candidates: Iterable[str],
        *,
        required: bool | None = None,
        shallow: bool | None = None,
        optional: bool | None = None,
        permit: str | None = None,
        children: str | None = None,
        only: Actions = None,
        exclude: Actions = None,
    ) -> ParentRule:
        """Append a parent rule group.

        Args:
            candidates: Parent type names, in precedence order.
            required: Explicit required flag.
            shallow: ``True`` makes the parent optional.
            optional: Synonym for ``shallow``.
            permit: Verb to check when this parent is authorized.
                Defaults to the configured ``default_parent_action``.
            children: Scope accessor name. Defaults to the plural
                resource name.
            only: Actions the rule is limited to.
            exclude: Actions the rule skips.

        Raises:
            ConfigurationError: If ``candidates`` is empty or invalid, or
                the flags contradict each other.
        """
        names = _candidate_names(candidates, declaration="load_parent")
        if not names:
            raise ConfigurationError("load_parent requires at least one parent name")
        rule = ParentRule(
            candidates=names,
            required=_normalize_required(required, shallow, optional),
            permit=permit or self.config.default_parent_action,
            children=self.resolve_child_accessor_name(children),
            actions=ActionFilter.build(only=only, exclude=exclude),
        )
        self.define_accessor(rule.children, rule.candidates)
        self._parent_rules.append(rule)
        return rule

    def register_parent_authorization(
        self,
        candidates: Iterable[str] = (),
        *,
        required: bool | None = None,
        shallow: bool | None = None,
        optional: bool | None = None,
        permit: str | None = None,
        only: Actions = None,
        exclude: Actions = None,
    ) -> ParentAuthorization:
        """Append a parent authorization check.

        With no ``candidates`` the check applies to whichever parent was
        resolved first.
        """
        rule = ParentAuthorization(
            candidates=_candidate_names(candidates, declaration="authorize_parent"),
            required=_normalize_required(required, shallow, optional),
            permit=permit,
            actions=ActionFilter.build(only=only, exclude=exclude),
        )
        self._parent_authorizations.append(rule)
        return rule

    def register_resource_rule(
        self,
        *,
        children: str | None = None,
        only: Actions = None,
        exclude: Actions = None,
    ) -> ResourceRule:
        """Append primary resource loading.

        Applies to the configured ``resource_actions`` unless ``only`` or
        ``exclude`` is given.
        """
        rule = ResourceRule(
            children=self.resolve_child_accessor_name(children),
            actions=ActionFilter.build(
                only=only, exclude=exclude, default=self.config.resource_actions
            ),
        )
        self.define_accessor(rule.children)
        self._resource_rules.append(rule)
        return rule

    def register_resource_authorization(
        self,
        *,
        permit: str | None = None,
        only: Actions = None,
        exclude: Actions = None,
    ) -> ResourceAuthorization:
        """Append primary resource authorization."""
        rule = ResourceAuthorization(
            permit=permit,
            actions=ActionFilter.build(
                only=only, exclude=exclude, default=self.config.resource_actions
            ),
        )
        self._resource_authorizations.append(rule)
        return rule

    # ------------------------------------------------------------------
    # Scope accessors
    # ------------------------------------------------------------------

    def resolve_child_accessor_name(self, explicit: str | None = None) -> str:
        """Return ``explicit`` or the plural resource name."""
        if explicit is None:
            return self.resource_accessor_name
        if not explicit.isidentifier():
            raise ConfigurationError(f"invalid scope accessor name {explicit!r}")
        return explicit

    def define_accessor(self, name: str, candidates: Iterable[str] = ()) -> bool:
        """Install the scope accessor ``name``, or widen the existing one.

        An accessor scans its parent candidates in declaration order; an
        empty tuple scans every parent the controller declares.  Declaring
        ``name`` again appends the new candidates to the existing scan
        list (or widens it to every parent when either list is empty), so
        a parent resolved by any rule sharing the accessor scopes it.

        Returns:
            ``True`` if a new accessor was installed, ``False`` if the name
            was already defined.

        Raises:
            ConfigurationError: If ``owner`` already has a non-accessor
                attribute called ``name``.
        """
        names = tuple(candidates)
        existing = self._accessors.get(name)
        if existing is not None:
            merged = _merge_candidates(existing.candidates, names)
            if merged != existing.candidates:
                self._install_accessor(ScopeAccessor(name, merged))
            return False
        if self.owner is not None:
            current = getattr(self.owner, name, None)
            if current is not None and not isinstance(current, ScopeAccessor):
                raise ConfigurationError(
                    f"{self.owner.__name__}.{name} already exists; "
                    f"pass children= to choose another scope accessor name"
                )
        self._install_accessor(ScopeAccessor(name, names))
        return True

    def _install_accessor(self, accessor: ScopeAccessor) -> None:
        if self.owner is not None:
            setattr(self.owner, accessor.name, accessor)
        self._accessors[accessor.name] = accessor

    def accessor(self, name: str) -> ScopeAccessor:
        try:
            return self._accessors[name]
        except KeyError:
            raise ConfigurationError(f"no scope accessor named {name!r} is declared") from None

    @property
    def accessors(self) -> dict[str, ScopeAccessor]:
        return dict(self._accessors)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def parent_rules(self) -> tuple[ParentRule, ...]:
        return tuple(self._parent_rules)

    @property
    def parent_authorizations(self) -> tuple[ParentAuthorization, ...]:
        return tuple(self._parent_authorizations)

    @property
    def resource_rules(self) -> tuple[ResourceRule, ...]:
        return tuple(self._resource_rules)

    @property
    def resource_authorizations(self) -> tuple[ResourceAuthorization, ...]:
        return tuple(self._resource_authorizations)

    def parent_rules_for(self, action: str) -> list[ParentRule]:
        return [r for r in self._parent_rules if r.actions.applies_to(action)]

    def parent_authorizations_for(self, action: str) -> list[ParentAuthorization]:
        return [r for r in self._parent_authorizations if r.actions.applies_to(action)]

    def resource_rules_for(self, action: str) -> list[ResourceRule]:
        return [r for r in self._resource_rules if r.actions.applies_to(action)]

    def resource_authorizations_for(self, action: str) -> list[ResourceAuthorization]:
        return [r for r in self._resource_authorizations if r.actions.applies_to(action)]

    def parent_candidates(self) -> tuple[str, ...]:
        """Every declared parent name, in declaration order, without duplicates."""
        seen: dict[str, None] = {}
        for rule in self._parent_rules:
            for name in rule.candidates:
                seen.setdefault(name, None)
        return tuple(seen)

    def parent_rule_for(self, name: str) -> ParentRule | None:
        """Return the first parent rule that lists ``name`` as a candidate."""
        for rule in self._parent_rules:
            if name in rule.candidates:
                return rule
        return None

    # ------------------------------------------------------------------
    # Inheritance
    # ------------------------------------------------------------------

    def inherit(
        self,
        owner: type,
        *,
        resource_name: str,
        resource_accessor_name: str,
    ) -> ControllerRegistry:
        """Return a copy for a subclass; later declarations only affect the copy."""
        child = ControllerRegistry(
            resource_name=resource_name,
            resource_accessor_name=resource_accessor_name,
            owner=owner,
            config=self._config,
        )
        child._parent_rules = list(self._parent_rules)
        child._parent_authorizations = list(self._parent_authorizations)
        child._resource_rules = list(self._resource_rules)
        child._resource_authorizations = list(self._resource_authorizations)
        child._accessors = dict(self._accessors)
        return child

    def __repr__(self) -> str:
        return (
            f"ControllerRegistry(resource_name={self.resource_name!r}, "
            f"parents={len(self._parent_rules)}, "
            f"parent_authorizations={len(self._parent_authorizations)}, "
            f"resources={len(self._resource_rules)}, "
            f"resource_authorizations={len(self._resource_authorizations)})"
        )
