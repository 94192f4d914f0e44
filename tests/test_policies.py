"""
Tests for RBAC, ABAC and ReBAC policies.
"""

import asyncio

import pytest

from gatehouse.authz import (
    AttributeBasedPolicy,
    Policy,
    RelationshipBasedPolicy,
    RoleBasedPolicy,
    build_abac_policy,
    build_rbac_policy,
    build_rebac_policy,
)

ACTION_ROLES = {
    "read": ["viewer", "editor", "admin"],
    "write": ["editor", "admin"],
}


def rbac(name="RbacPolicy"):
    return build_rbac_policy(
        required_roles_resolver=lambda resource, action: ACTION_ROLES.get(action, []),
        user_roles_resolver=lambda subject: subject["roles"],
        name=name,
    )


class TestRbacPolicy:
    """Test role-based access control."""

    def test_defaults(self):
        policy = rbac()
        assert isinstance(policy, RoleBasedPolicy)
        assert isinstance(policy, Policy)
        assert policy.name == "RbacPolicy"

    @pytest.mark.asyncio
    async def test_grants_editor_write(self):
        result = await rbac().evaluate_access({"roles": ["editor"]}, {"id": "doc"}, "write", {})
        assert result.is_granted()
        assert result.policy_type == "RbacPolicy"
        assert result.reason == "User has required role"

    @pytest.mark.asyncio
    async def test_denies_without_role(self):
        result = await rbac().evaluate_access({"roles": ["viewer"]}, {"id": "doc"}, "write", {})
        assert not result.is_granted()
        assert result.reason == "User doesn't have required role"

    @pytest.mark.asyncio
    async def test_unknown_action_always_denied(self):
        result = await rbac().evaluate_access({"roles": ["admin"]}, None, "delete", {})
        assert not result.is_granted()

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "required, held, expected",
        [
            (["a"], ["a"], True),
            (["a", "b"], ["b", "c"], True),
            (["a"], ["b"], False),
            ([], ["a"], False),
            (["a"], [], False),
        ],
    )
    async def test_grants_iff_roles_intersect(self, required, held, expected):
        policy = build_rbac_policy(lambda res, act: required, lambda sub: held)
        result = await policy.evaluate_access(None, None, None, None)
        assert result.is_granted() is expected

    @pytest.mark.asyncio
    async def test_async_resolvers_run_in_order(self):
        calls = []

        async def required(resource, action):
            await asyncio.sleep(0)
            calls.append("required")
            return ["admin"]

        async def held(subject):
            calls.append("held")
            return ["admin"]

        result = await build_rbac_policy(required, held).evaluate_access("u", "r", "a", None)
        assert result.is_granted()
        assert calls == ["required", "held"]

    @pytest.mark.asyncio
    async def test_resolver_errors_propagate(self):
        def broken(subject):
            raise LookupError("directory unavailable")

        policy = build_rbac_policy(lambda res, act: ["admin"], broken)
        with pytest.raises(LookupError, match="directory unavailable"):
            await policy.evaluate_access("u", "r", "a", None)

    @pytest.mark.asyncio
    async def test_unhashable_roles_compare_by_value(self):
        policy = build_rbac_policy(
            lambda res, act: [{"role": "admin"}], lambda sub: [{"role": "admin"}]
        )
        result = await policy.evaluate_access("u", "r", "a", None)
        assert result.is_granted()


class TestAbacPolicy:
    """Test attribute-based access control."""

    @pytest.mark.asyncio
    async def test_grants_when_condition_true(self):
        policy = build_abac_policy(
            lambda subject, resource, action, context: resource["public"] or subject["id"] == resource["owner"]
        )
        assert isinstance(policy, AttributeBasedPolicy)
        result = await policy.evaluate_access({"id": "u1"}, {"public": False, "owner": "u1"}, "read", {})
        assert result.is_granted()
        assert result.policy_type == "AbacPolicy"
        assert result.reason == "Condition evaluated to true"

    @pytest.mark.asyncio
    async def test_denies_when_condition_false(self):
        policy = build_abac_policy(lambda *args: False, name="Never")
        result = await policy.evaluate_access("u", "r", "a", {})
        assert not result.is_granted()
        assert result.policy_type == "Never"
        assert result.reason == "Condition evaluated to false"

    @pytest.mark.asyncio
    async def test_condition_receives_context(self):
        async def business_hours(subject, resource, action, context):
            return context["hour"] < 17

        policy = build_abac_policy(business_hours)
        assert (await policy.evaluate_access("u", "r", "a", {"hour": 9})).is_granted()
        assert not (await policy.evaluate_access("u", "r", "a", {"hour": 20})).is_granted()


class TestRebacPolicy:
    """Test relationship-based access control."""

    @pytest.mark.asyncio
    async def test_grants_when_relationship_exists(self):
        seen = []

        def resolver(subject, resource, relationship):
            seen.append(relationship)
            return subject["id"] == resource["owner"]

        policy = build_rebac_policy("owner", resolver)
        assert isinstance(policy, RelationshipBasedPolicy)
        result = await policy.evaluate_access({"id": "u1"}, {"owner": "u1"}, "edit", {})
        assert result.is_granted()
        assert result.reason == "Subject has owner relationship with resource"
        assert seen == ["owner"]

    @pytest.mark.asyncio
    async def test_denies_when_relationship_missing(self):
        policy = build_rebac_policy("member", lambda s, r, rel: False, name="TeamMember")
        result = await policy.evaluate_access("u", "r", "a", None)
        assert not result.is_granted()
        assert result.policy_type == "TeamMember"
        assert result.reason == "Subject does not have member relationship with resource"
        assert policy.relationship == "member"

    def test_policies_are_immutable(self):
        policy = build_rebac_policy("owner", lambda s, r, rel: True)
        with pytest.raises(AttributeError):
            policy.relationship = "viewer"
