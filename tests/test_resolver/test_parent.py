"""Tests for the parent stages."""

from __future__ import annotations

import pytest

from sqla_resource.config._config import ResourceConfig
from sqla_resource.declaration._registry import ControllerRegistry
from sqla_resource.exceptions import AccessDenied, ParameterMissing, ResourceNotFound
from sqla_resource.resolver._context import ResolutionContext
from sqla_resource.resolver._parent import authorize_parent, load_parent
from sqla_resource.testing._oracle import RecordingOracle
from tests.conftest import Group, Person


def _registry() -> ControllerRegistry:
    return ControllerRegistry(resource_name="note", resource_accessor_name="notes")


def _context(action: str = "index", **params) -> ResolutionContext:
    return ResolutionContext(action=action, resource_name="note", params=params)


class TestLoadParent:
    def test_loads_single_candidate(self, repository, sample_data):
        rule = _registry().register_parent_rule(["group"])
        ctx = _context(group_id="1")

        assert load_parent(ctx, rule, repository=repository) is None
        assert ctx.get("group") is sample_data["groups"][0]
        assert ctx.resolved_parents == ["group"]

    def test_first_present_candidate_wins(self, repository, sample_data):
        rule = _registry().register_parent_rule(["person", "group"])
        ctx = _context(group_id="1", person_id="2")

        load_parent(ctx, rule, repository=repository)

        assert ctx.get("person") is sample_data["people"][1]
        assert ctx.get("group") is None
        assert ctx.resolved_parents == ["person"]

    def test_skips_absent_candidates(self, repository, sample_data):
        rule = _registry().register_parent_rule(["person", "group"])
        ctx = _context(group_id="2")

        load_parent(ctx, rule, repository=repository)

        assert isinstance(ctx.get("group"), Group)
        assert ctx.get("group").id == 2

    def test_blank_param_is_absent(self, repository, sample_data):
        rule = _registry().register_parent_rule(["person", "group"])
        ctx = _context(person_id="", group_id="1")

        load_parent(ctx, rule, repository=repository)

        assert ctx.resolved_parents == ["group"]

    def test_required_without_ids(self, repository):
        rule = _registry().register_parent_rule(["group", "person"])
        failure = load_parent(_context(), rule, repository=repository)

        assert isinstance(failure, ParameterMissing)
        assert failure.params == ("group_id", "person_id")
        assert str(failure) == "must supply one of :group_id, :person_id"

    def test_optional_without_ids(self, repository):
        rule = _registry().register_parent_rule(["group"], shallow=True)
        ctx = _context()

        assert load_parent(ctx, rule, repository=repository) is None
        assert ctx.get("group") is None
        assert ctx.resolved_parents == []

    def test_custom_suffix(self, repository, sample_data):
        rule = _registry().register_parent_rule(["person"])
        ctx = _context(personId="1")

        load_parent(
            ctx, rule, repository=repository, config=ResourceConfig(parent_param_suffix="Id")
        )

        assert isinstance(ctx.get("person"), Person)

    def test_not_found_propagates(self, repository, sample_data):
        rule = _registry().register_parent_rule(["group"])
        with pytest.raises(ResourceNotFound):
            load_parent(_context(group_id="99"), rule, repository=repository)


class TestAuthorizeParent:
    def test_allowed(self, sample_data):
        registry = _registry()
        registry.register_parent_rule(["group"])
        rule = registry.register_parent_authorization(["group"])
        ctx = _context()
        ctx.set_parent("group", sample_data["groups"][0])
        oracle = RecordingOracle()

        assert authorize_parent(ctx, rule, oracle=oracle, registry=registry) is None
        assert oracle.actions == ["read"]
        assert oracle.calls[0].resource is sample_data["groups"][0]

    def test_denied(self, sample_data):
        registry = _registry()
        registry.register_parent_rule(["group"])
        rule = registry.register_parent_authorization(["group"])
        ctx = _context()
        ctx.actor = "bob"
        ctx.set_parent("group", sample_data["groups"][0])

        failure = authorize_parent(
            ctx, rule, oracle=RecordingOracle(default=False), registry=registry
        )

        assert isinstance(failure, AccessDenied)
        assert failure.actor == "bob"
        assert failure.action == "read"

    def test_verb_from_rule(self, sample_data):
        registry = _registry()
        registry.register_parent_rule(["group"], permit="manage")
        rule = registry.register_parent_authorization(["group"], permit="update")
        ctx = _context()
        ctx.set_parent("group", sample_data["groups"][0])
        oracle = RecordingOracle()

        authorize_parent(ctx, rule, oracle=oracle, registry=registry)

        assert oracle.actions == ["update"]

    def test_verb_from_parent_rule(self, sample_data):
        registry = _registry()
        registry.register_parent_rule(["group"], permit="manage")
        rule = registry.register_parent_authorization(["group"])
        ctx = _context()
        ctx.set_parent("group", sample_data["groups"][0])
        oracle = RecordingOracle()

        authorize_parent(ctx, rule, oracle=oracle, registry=registry)

        assert oracle.actions == ["manage"]

    def test_verb_from_config_when_undeclared(self, sample_data):
        registry = _registry()
        rule = registry.register_parent_authorization(["group"])
        ctx = _context()
        ctx.set_parent("group", sample_data["groups"][0])
        oracle = RecordingOracle()

        authorize_parent(
            ctx,
            rule,
            oracle=oracle,
            registry=registry,
            config=ResourceConfig(default_parent_action="view"),
        )

        assert oracle.actions == ["view"]

    def test_without_candidates_uses_first_resolved(self, sample_data):
        registry = _registry()
        registry.register_parent_rule(["person", "group"])
        rule = registry.register_parent_authorization()
        ctx = _context()
        ctx.set_parent("person", sample_data["people"][0])
        oracle = RecordingOracle()

        authorize_parent(ctx, rule, oracle=oracle, registry=registry)

        assert oracle.calls[0].resource is sample_data["people"][0]

    def test_required_missing_parent_skips_oracle(self):
        registry = _registry()
        registry.register_parent_rule(["group", "person"], optional=True)
        rule = registry.register_parent_authorization()
        oracle = RecordingOracle()

        failure = authorize_parent(_context(), rule, oracle=oracle, registry=registry)

        assert isinstance(failure, ParameterMissing)
        assert str(failure) == "parent resource not found"
        assert failure.params == ("group_id", "person_id")
        assert oracle.calls == []

    def test_optional_missing_parent_passes(self):
        registry = _registry()
        rule = registry.register_parent_authorization(["group"], shallow=True)
        oracle = RecordingOracle()

        assert authorize_parent(_context(), rule, oracle=oracle, registry=registry) is None
        assert oracle.calls == []
