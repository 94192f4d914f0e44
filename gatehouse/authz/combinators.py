# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Logical combinators for Gatehouse policies.

AND and OR evaluate their children strictly left to right and stop at the
first child that decides the outcome; children after that point are never
evaluated. NOT evaluates its child and inverts the outcome, keeping the
child's own result in the trace.
"""

from dataclasses import dataclass
from typing import Any, Iterable, List, Tuple
import logging

from ..common.utils import maybe_await
from ..errors import PolicyConstructionError
from .results import CombinedResult, PolicyEvalResult
from .types import CombineOp, Policy


logger = logging.getLogger(__name__)


def ensure_policy(policy: Any, owner: str) -> Policy:
    """Reject values that cannot act as a policy."""
    if policy is None:
        raise PolicyConstructionError(f"{owner} received None instead of a policy", owner)
    if not callable(getattr(policy, "evaluate_access", None)):
        raise PolicyConstructionError(
            f"{owner} received an object without evaluate_access: {policy!r}", owner
        )
    return policy


def _collect_policies(policies: Iterable[Policy], owner: str) -> Tuple[Policy, ...]:
    if policies is None:
        raise PolicyConstructionError(f"{owner} must have at least one policy", owner)
    collected = tuple(ensure_policy(policy, owner) for policy in policies)
    if not collected:
        raise PolicyConstructionError(f"{owner} must have at least one policy", owner)
    return collected


@dataclass(frozen=True)
class AndPolicy:
    """Grants access only when every child policy grants access."""
    policies: Tuple[Policy, ...]
    name: str = "AndPolicy"

    async def evaluate_access(
        self, subject: Any, resource: Any, action: Any, context: Any = None
    ) -> PolicyEvalResult:
        results: List[PolicyEvalResult] = []
        for policy in self.policies:
            result = await maybe_await(policy.evaluate_access(subject, resource, action, context))
            results.append(result)

            if not result.is_granted():
                logger.debug(
                    f"{self.name}: {result.policy_type} denied, "
                    f"skipping {len(self.policies) - len(results)} remaining"
                )
                return CombinedResult(
                    policy_type=self.name,
                    granted=False,
                    operation=CombineOp.AND,
                    children=results,
                )

        return CombinedResult(
            policy_type=self.name,
            granted=True,
            operation=CombineOp.AND,
            children=results,
        )


@dataclass(frozen=True)
class OrPolicy:
    """Grants access when any child policy grants access."""
    policies: Tuple[Policy, ...]
    name: str = "OrPolicy"

    async def evaluate_access(
        self, subject: Any, resource: Any, action: Any, context: Any = None
    ) -> PolicyEvalResult:
        results: List[PolicyEvalResult] = []
        for policy in self.policies:
            result = await maybe_await(policy.evaluate_access(subject, resource, action, context))
            results.append(result)

            if result.is_granted():
                logger.debug(
                    f"{self.name}: {result.policy_type} granted, "
                    f"skipping {len(self.policies) - len(results)} remaining"
                )
                return CombinedResult(
                    policy_type=self.name,
                    granted=True,
                    operation=CombineOp.OR,
                    children=results,
                )

        return CombinedResult(
            policy_type=self.name,
            granted=False,
            operation=CombineOp.OR,
            children=results,
        )


@dataclass(frozen=True)
class NotPolicy:
    """Inverts the outcome of a single policy."""
    policy: Policy
    name: str = "NotPolicy"

    async def evaluate_access(
        self, subject: Any, resource: Any, action: Any, context: Any = None
    ) -> PolicyEvalResult:
        result = await maybe_await(self.policy.evaluate_access(subject, resource, action, context))
        return CombinedResult(
            policy_type=self.name,
            granted=not result.is_granted(),
            operation=CombineOp.NOT,
            children=[result],
        )


def build_and_policy(policies: Iterable[Policy], name: str = "AndPolicy") -> AndPolicy:
    """
    Create a policy that requires all sub-policies to grant access.

    Raises:
        PolicyConstructionError: If ``policies`` is empty
    """
    return AndPolicy(policies=_collect_policies(policies, name), name=name)


def build_or_policy(policies: Iterable[Policy], name: str = "OrPolicy") -> OrPolicy:
    """
    Create a policy that grants access if any sub-policy grants access.

    Raises:
        PolicyConstructionError: If ``policies`` is empty
    """
    return OrPolicy(policies=_collect_policies(policies, name), name=name)


def build_not_policy(policy: Policy, name: str = "NotPolicy") -> NotPolicy:
    """Create a policy that grants access when ``policy`` would deny it."""
    return NotPolicy(policy=ensure_policy(policy, name), name=name)
