# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Fluent builder for ad-hoc predicate policies.
"""

from dataclasses import dataclass
from typing import Any, Optional, Union
import logging

from ..common.utils import maybe_await
from ..errors import PolicyConstructionError
from .results import DeniedResult, GrantedResult, PolicyEvalResult
from .types import Condition, Effect, Predicate


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PredicatePolicy:
    """
    Policy produced by ``PolicyBuilder``.

    The predicates that were set are ANDed in the order subject, resource,
    action, context, joint condition; unset predicates count as true and the
    first false one stops evaluation.
    """
    name: str
    effect: Effect = Effect.ALLOW
    subject_predicate: Optional[Predicate] = None
    resource_predicate: Optional[Predicate] = None
    action_predicate: Optional[Predicate] = None
    context_predicate: Optional[Predicate] = None
    condition: Optional[Condition] = None

    async def matches(self, subject: Any, resource: Any, action: Any, context: Any = None) -> bool:
        """Evaluate the combined predicate for a request tuple."""
        checks = (
            (self.subject_predicate, (subject,)),
            (self.resource_predicate, (resource,)),
            (self.action_predicate, (action,)),
            (self.context_predicate, (context,)),
            (self.condition, (subject, resource, action, context)),
        )
        for predicate, args in checks:
            if predicate is None:
                continue
            if not await maybe_await(predicate(*args)):
                return False
        return True

    async def evaluate_access(
        self, subject: Any, resource: Any, action: Any, context: Any = None
    ) -> PolicyEvalResult:
        if not await self.matches(subject, resource, action, context):
            return DeniedResult(policy_type=self.name, reason="Policy predicate did not match")

        if self.effect is Effect.ALLOW:
            return GrantedResult(policy_type=self.name, reason="Policy allowed access")
        return DeniedResult(policy_type=self.name, reason="Policy denied access")


class PolicyBuilder:
    """
    A fluent builder for creating custom access policies.

    Example:
        read_only = (
            PolicyBuilder("ReadOnly")
            .actions(lambda action: action == "read")
            .build()
        )
    """

    def __init__(self, name: str):
        if not name:
            raise PolicyConstructionError("PolicyBuilder requires a policy name")
        self._name = name
        self._effect = Effect.ALLOW
        self._subject_predicate: Optional[Predicate] = None
        self._resource_predicate: Optional[Predicate] = None
        self._action_predicate: Optional[Predicate] = None
        self._context_predicate: Optional[Predicate] = None
        self._condition: Optional[Condition] = None

    def effect(self, effect: Union[Effect, str]) -> "PolicyBuilder":
        """
        Set the effect applied when the predicates match.
        Default is ``Effect.ALLOW``.
        """
        try:
            self._effect = Effect(effect)
        except ValueError:
            raise PolicyConstructionError(
                f"Unknown effect: {effect!r}", self._name
            ) from None
        return self

    def subjects(self, predicate: Predicate) -> "PolicyBuilder":
        """
        Add a condition on the subject.

        Example:
            .subjects(lambda user: "admin" in user.roles)
        """
        self._subject_predicate = predicate
        return self

    def resources(self, predicate: Predicate) -> "PolicyBuilder":
        """Add a condition on the resource."""
        self._resource_predicate = predicate
        return self

    def actions(self, predicate: Predicate) -> "PolicyBuilder":
        """Add a condition on the action."""
        self._action_predicate = predicate
        return self

    def context(self, predicate: Predicate) -> "PolicyBuilder":
        """Add a condition on the request context."""
        self._context_predicate = predicate
        return self

    def when(self, condition: Condition) -> "PolicyBuilder":
        """
        Add a condition over the whole request tuple.

        Example:
            .when(lambda subject, resource, action, context: subject.id == resource.owner_id)
        """
        self._condition = condition
        return self

    def build(self) -> PredicatePolicy:
        """Build the policy from the current builder state."""
        logger.debug(f"Building predicate policy {self._name} with effect {self._effect.value}")
        return PredicatePolicy(
            name=self._name,
            effect=self._effect,
            subject_predicate=self._subject_predicate,
            resource_predicate=self._resource_predicate,
            action_predicate=self._action_predicate,
            context_predicate=self._context_predicate,
            condition=self._condition,
        )
