# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Package authz implements composable access policies and the permission checker.

Policy kinds:
  - RBAC:   build_rbac_policy, grants when subject and action share a role
  - ABAC:   build_abac_policy, grants when a condition over the request holds
  - ReBAC:  build_rebac_policy, grants when a named relationship exists
  - Custom: PolicyBuilder, predicates over subject/resource/action/context

Combinators: build_and_policy, build_or_policy, build_not_policy.
"""

from .types import (
    Effect,
    Allow,
    Deny,
    CombineOp,
    Outcome,
    Policy,
    AccessRequest,
)

from .results import (
    GrantedResult,
    DeniedResult,
    CombinedResult,
    PolicyEvalResult,
    EvalTrace,
    AccessEvaluation,
)

from .policies import (
    RoleBasedPolicy,
    AttributeBasedPolicy,
    RelationshipBasedPolicy,
    build_rbac_policy,
    build_abac_policy,
    build_rebac_policy,
)

from .combinators import (
    AndPolicy,
    OrPolicy,
    NotPolicy,
    build_and_policy,
    build_or_policy,
    build_not_policy,
)

from .builder import (
    PolicyBuilder,
    PredicatePolicy,
)

from .checker import PermissionChecker

__all__ = [
    # Types
    'Effect',
    'Allow',
    'Deny',
    'CombineOp',
    'Outcome',
    'Policy',
    'AccessRequest',

    # Results
    'GrantedResult',
    'DeniedResult',
    'CombinedResult',
    'PolicyEvalResult',
    'EvalTrace',
    'AccessEvaluation',

    # Leaf policies
    'RoleBasedPolicy',
    'AttributeBasedPolicy',
    'RelationshipBasedPolicy',
    'build_rbac_policy',
    'build_abac_policy',
    'build_rebac_policy',

    # Combinators
    'AndPolicy',
    'OrPolicy',
    'NotPolicy',
    'build_and_policy',
    'build_or_policy',
    'build_not_policy',

    # Builder
    'PolicyBuilder',
    'PredicatePolicy',

    # Checker
    'PermissionChecker',
]
