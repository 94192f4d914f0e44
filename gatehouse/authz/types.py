# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Authorization types for Gatehouse.
Defines the policy capability, request tuple, effects and combinator operations.
"""

from dataclasses import dataclass
from enum import Enum
from typing import (
    TYPE_CHECKING, Any, Awaitable, Callable, Dict, Protocol, Sequence, Union,
    runtime_checkable,
)

if TYPE_CHECKING:
    from .results import PolicyEvalResult


class Effect(Enum):
    """Intended effect of a builder policy whose predicate matched."""
    ALLOW = "Allow"
    DENY = "Deny"


# Constants for convenience
Allow = Effect.ALLOW
Deny = Effect.DENY


class CombineOp(str, Enum):
    """Logical operation recorded on a combined result."""
    AND = "AND"
    OR = "OR"
    NOT = "NOT"

    def __str__(self) -> str:
        return self.value


class Outcome(str, Enum):
    """Final outcome of an access evaluation."""
    GRANTED = "Granted"
    DENIED = "Denied"

    def __str__(self) -> str:
        return self.value


@runtime_checkable
class Policy(Protocol):
    """
    Capability shared by every policy kind.

    ``name`` is used for trace legibility only and need not be unique.
    ``evaluate_access`` decides a single request tuple and reports the outcome
    as a result value; a denial is a normal return, never an exception.
    """

    name: str

    async def evaluate_access(
        self, subject: Any, resource: Any, action: Any, context: Any = None
    ) -> "PolicyEvalResult":
        ...


@dataclass(frozen=True)
class AccessRequest:
    """
    Request tuple evaluated by policies and checkers.
    All four values are opaque to the core.
    """
    subject: Any
    resource: Any
    action: Any
    context: Any = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'subject': self.subject,
            'resource': self.resource,
            'action': self.action,
            'context': self.context
        }


# Collaborator signatures. Every one of them may return the value directly or
# an awaitable producing it.
RequiredRolesResolver = Callable[[Any, Any], Union[Sequence[Any], Awaitable[Sequence[Any]]]]
UserRolesResolver = Callable[[Any], Union[Sequence[Any], Awaitable[Sequence[Any]]]]
Condition = Callable[[Any, Any, Any, Any], Union[bool, Awaitable[bool]]]
RelationshipResolver = Callable[[Any, Any, str], Union[bool, Awaitable[bool]]]
Predicate = Callable[[Any], Union[bool, Awaitable[bool]]]
