"""Tests for ControllerRegistry."""

from __future__ import annotations

import pytest

from sqla_resource.config._config import ResourceConfig
from sqla_resource.declaration._accessor import ScopeAccessor
from sqla_resource.declaration._registry import ControllerRegistry
from sqla_resource.exceptions import ConfigurationError


def _registry(**kwargs) -> ControllerRegistry:
    return ControllerRegistry(resource_name="note", resource_accessor_name="notes", **kwargs)


class TestRegisterParentRule:
    def test_defaults(self):
        registry = _registry()
        rule = registry.register_parent_rule(["group"])
        assert rule.candidates == ("group",)
        assert rule.required is True
        assert rule.permit == "read"
        assert rule.children == "notes"
        assert rule.actions.applies_to("index")

    def test_permit_default_from_config(self):
        registry = _registry(config=ResourceConfig(default_parent_action="view"))
        assert registry.register_parent_rule(["group"]).permit == "view"

    @pytest.mark.parametrize(
        ("options", "required"),
        [
            ({}, True),
            ({"required": True}, True),
            ({"required": False}, False),
            ({"shallow": True}, False),
            ({"optional": True}, False),
            ({"shallow": False}, True),
            ({"required": False, "shallow": True}, False),
        ],
    )
    def test_required_flags(self, options, required):
        assert _registry().register_parent_rule(["group"], **options).required is required

    def test_required_contradicts_shallow(self):
        with pytest.raises(ConfigurationError, match="contradicts"):
            _registry().register_parent_rule(["group"], required=True, shallow=True)

    def test_empty_candidates(self):
        with pytest.raises(ConfigurationError, match="at least one"):
            _registry().register_parent_rule([])

    def test_invalid_name(self):
        with pytest.raises(ConfigurationError, match="invalid parent name"):
            _registry().register_parent_rule(["group-id"])

    def test_duplicate_names(self):
        with pytest.raises(ConfigurationError, match="duplicate"):
            _registry().register_parent_rule(["group", "group"])

    def test_rules_accumulate_in_order(self):
        registry = _registry()
        registry.register_parent_rule(["group", "person"])
        registry.register_parent_rule(["project"], optional=True)
        assert [r.candidates for r in registry.parent_rules] == [
            ("group", "person"),
            ("project",),
        ]

    def test_parent_candidates_deduplicated(self):
        registry = _registry()
        registry.register_parent_rule(["group", "person"])
        registry.register_parent_rule(["person", "project"])
        assert registry.parent_candidates() == ("group", "person", "project")

    def test_parent_rule_for(self):
        registry = _registry()
        first = registry.register_parent_rule(["group"], permit="manage")
        registry.register_parent_rule(["group", "person"])
        assert registry.parent_rule_for("group") is first
        assert registry.parent_rule_for("person").candidates == ("group", "person")
        assert registry.parent_rule_for("project") is None


class TestRegisterOtherRules:
    def test_parent_authorization(self):
        rule = _registry().register_parent_authorization(["group"], shallow=True, permit="manage")
        assert rule.candidates == ("group",)
        assert rule.required is False
        assert rule.permit == "manage"

    def test_parent_authorization_without_candidates(self):
        rule = _registry().register_parent_authorization()
        assert rule.candidates == ()
        assert rule.permit is None
        assert rule.required is True

    def test_resource_rule_default_actions(self):
        rule = _registry().register_resource_rule()
        assert rule.children == "notes"
        for action in ("show", "new", "create", "edit", "update", "destroy"):
            assert rule.actions.applies_to(action)
        assert not rule.actions.applies_to("index")

    def test_resource_rule_custom_actions_from_config(self):
        registry = _registry(config=ResourceConfig(resource_actions=("show", "archive")))
        rule = registry.register_resource_rule()
        assert rule.actions.applies_to("archive")
        assert not rule.actions.applies_to("destroy")

    def test_resource_rule_explicit_only(self):
        rule = _registry().register_resource_rule(only=["index"])
        assert rule.actions.applies_to("index")
        assert not rule.actions.applies_to("show")

    def test_resource_authorization(self):
        rule = _registry().register_resource_authorization(permit="publish", only="update")
        assert rule.permit == "publish"
        assert rule.actions.applies_to("update")
        assert not rule.actions.applies_to("show")

    def test_filtered_queries(self):
        registry = _registry()
        registry.register_parent_rule(["group"], only=["index"])
        registry.register_parent_rule(["person"], exclude=["index"])
        assert [r.candidates for r in registry.parent_rules_for("index")] == [("group",)]
        assert [r.candidates for r in registry.parent_rules_for("show")] == [("person",)]
        registry.register_resource_rule()
        registry.register_resource_authorization()
        registry.register_parent_authorization(only="show")
        assert len(registry.resource_rules_for("show")) == 1
        assert registry.resource_rules_for("index") == []
        assert len(registry.resource_authorizations_for("destroy")) == 1
        assert len(registry.parent_authorizations_for("show")) == 1
        assert registry.parent_authorizations_for("index") == []


class TestAccessors:
    def test_define_once_then_extend(self):
        registry = _registry()
        assert registry.define_accessor("notes", ("group",)) is True
        assert registry.define_accessor("notes", ("person", "group")) is False
        assert list(registry.accessors) == ["notes"]
        assert registry.accessor("notes").candidates == ("group", "person")

    def test_empty_candidates_widen_to_every_parent(self):
        registry = _registry()
        registry.define_accessor("notes", ("group",))
        registry.define_accessor("notes")
        assert registry.accessor("notes").candidates == ()

    def test_parent_rules_share_accessor(self):
        registry = _registry()
        registry.register_parent_rule(["group"])
        registry.register_parent_rule(["person"])
        assert list(registry.accessors) == ["notes"]
        assert registry.accessor("notes").candidates == ("group", "person")
        registry.register_resource_rule()
        assert registry.accessor("notes").candidates == ()

    def test_resource_rule_first_defines_without_candidates(self):
        registry = _registry()
        registry.register_resource_rule()
        registry.register_parent_rule(["group"])
        assert registry.accessor("notes").candidates == ()

    def test_children_option(self):
        registry = _registry()
        registry.register_parent_rule(["group"], children="group_notes")
        assert set(registry.accessors) == {"group_notes"}

    def test_invalid_children_name(self):
        with pytest.raises(ConfigurationError, match="invalid scope accessor"):
            _registry().register_resource_rule(children="not a name")

    def test_unknown_accessor(self):
        with pytest.raises(ConfigurationError, match="no scope accessor"):
            _registry().accessor("notes")

    def test_installs_on_owner(self):
        class Owner:
            pass

        registry = _registry(owner=Owner)
        registry.define_accessor("notes")
        assert isinstance(Owner.__dict__["notes"], ScopeAccessor)

    def test_owner_attribute_collision(self):
        class Owner:
            def notes(self):
                return []

        registry = _registry(owner=Owner)
        with pytest.raises(ConfigurationError, match="already exists"):
            registry.define_accessor("notes")

    def test_extending_replaces_owner_accessor(self):
        class Owner:
            pass

        registry = _registry(owner=Owner)
        registry.define_accessor("notes", ("group",))
        registry.define_accessor("notes", ("person",))
        assert Owner.__dict__["notes"].candidates == ("group", "person")
        assert Owner.__dict__["notes"] is registry.accessor("notes")

    def test_accessors_property_is_copy(self):
        registry = _registry()
        registry.define_accessor("notes")
        registry.accessors.clear()
        assert "notes" in registry.accessors


class TestInherit:
    def test_copy_is_independent(self):
        base = _registry()
        base.register_parent_rule(["group"])

        class Child:
            pass

        child = base.inherit(Child, resource_name="note", resource_accessor_name="notes")
        child.register_parent_rule(["person"])

        assert len(base.parent_rules) == 1
        assert len(child.parent_rules) == 2
        assert child.owner is Child
        assert "notes" in child.accessors
        assert base.accessor("notes").candidates == ("group",)
        assert child.accessor("notes").candidates == ("group", "person")
        assert Child.__dict__["notes"] is child.accessor("notes")

    def test_repr(self):
        registry = _registry()
        registry.register_parent_rule(["group"])
        assert "parents=1" in repr(registry)
        assert "resource_name='note'" in repr(registry)
