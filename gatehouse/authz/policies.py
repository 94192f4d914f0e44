# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Leaf policy kinds for Gatehouse: role-based, attribute-based and
relationship-based access control.

Each policy adapts caller-supplied resolver functions to the ``Policy``
capability. Resolvers may be plain or coroutine functions; exceptions they
raise propagate to the caller of ``evaluate_access``.
"""

from dataclasses import dataclass
from typing import Any
import logging

from ..common.utils import maybe_await
from .results import DeniedResult, GrantedResult, PolicyEvalResult
from .types import (
    Condition, RelationshipResolver, RequiredRolesResolver, UserRolesResolver,
)


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoleBasedPolicy:
    """
    Role-based access control policy.

    Grants access when the subject holds at least one of the roles required
    for the resource/action pair. An empty required-roles list always denies.
    """
    required_roles_resolver: RequiredRolesResolver
    user_roles_resolver: UserRolesResolver
    name: str = "RbacPolicy"

    async def evaluate_access(
        self, subject: Any, resource: Any, action: Any, context: Any = None
    ) -> PolicyEvalResult:
        required_roles = await maybe_await(self.required_roles_resolver(resource, action))
        user_roles = await maybe_await(self.user_roles_resolver(subject))

        # Value equality only, roles need not be hashable.
        user_roles = list(user_roles or [])
        has_role = any(role in user_roles for role in (required_roles or []))

        if has_role:
            return GrantedResult(policy_type=self.name, reason="User has required role")
        return DeniedResult(policy_type=self.name, reason="User doesn't have required role")


@dataclass(frozen=True)
class AttributeBasedPolicy:
    """Attribute-based access control policy backed by a single condition."""
    condition: Condition
    name: str = "AbacPolicy"

    async def evaluate_access(
        self, subject: Any, resource: Any, action: Any, context: Any = None
    ) -> PolicyEvalResult:
        condition_met = await maybe_await(self.condition(subject, resource, action, context))

        if condition_met:
            return GrantedResult(policy_type=self.name, reason="Condition evaluated to true")
        return DeniedResult(policy_type=self.name, reason="Condition evaluated to false")


@dataclass(frozen=True)
class RelationshipBasedPolicy:
    """
    Relationship-based access control policy.

    The relationship label is passed verbatim to the resolver and appears in
    the result reason for both outcomes.
    """
    relationship: str
    resolver: RelationshipResolver
    name: str = "RebacPolicy"

    async def evaluate_access(
        self, subject: Any, resource: Any, action: Any, context: Any = None
    ) -> PolicyEvalResult:
        has_relationship = await maybe_await(
            self.resolver(subject, resource, self.relationship)
        )

        if has_relationship:
            return GrantedResult(
                policy_type=self.name,
                reason=f"Subject has {self.relationship} relationship with resource",
            )
        return DeniedResult(
            policy_type=self.name,
            reason=f"Subject does not have {self.relationship} relationship with resource",
        )


def build_rbac_policy(
    required_roles_resolver: RequiredRolesResolver,
    user_roles_resolver: UserRolesResolver,
    name: str = "RbacPolicy",
) -> RoleBasedPolicy:
    """
    Create a role-based access control policy.

    Args:
        required_roles_resolver: ``(resource, action) -> roles`` required for the action
        user_roles_resolver: ``(subject) -> roles`` held by the subject
        name: Display name used in traces

    Example:
        policy = build_rbac_policy(
            required_roles_resolver=lambda doc, action: ["admin"] if action == "delete" else ["user", "admin"],
            user_roles_resolver=lambda user: user.roles,
        )
    """
    logger.debug(f"Building RBAC policy {name}")
    return RoleBasedPolicy(
        required_roles_resolver=required_roles_resolver,
        user_roles_resolver=user_roles_resolver,
        name=name,
    )


def build_abac_policy(condition: Condition, name: str = "AbacPolicy") -> AttributeBasedPolicy:
    """
    Create an attribute-based access control policy.

    Args:
        condition: ``(subject, resource, action, context) -> bool``
        name: Display name used in traces
    """
    logger.debug(f"Building ABAC policy {name}")
    return AttributeBasedPolicy(condition=condition, name=name)


def build_rebac_policy(
    relationship: str,
    resolver: RelationshipResolver,
    name: str = "RebacPolicy",
) -> RelationshipBasedPolicy:
    """
    Create a relationship-based access control policy.

    Args:
        relationship: Name of the relationship, e.g. "owner" or "member"
        resolver: ``(subject, resource, relationship) -> bool``
        name: Display name used in traces
    """
    logger.debug(f"Building ReBAC policy {name} for relationship {relationship}")
    return RelationshipBasedPolicy(relationship=relationship, resolver=resolver, name=name)
