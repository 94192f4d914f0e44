# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Evaluation results and traces for Gatehouse.

Every policy evaluation yields one of three result shapes:

- ``GrantedResult``: a leaf outcome that grants access
- ``DeniedResult``: a leaf outcome that denies access
- ``CombinedResult``: the outcome of an AND/OR/NOT combination, holding the
  child results it aggregated in evaluation order

Combined results nest, so the result tree mirrors the policy composition tree.
``EvalTrace`` wraps the root of that tree and ``AccessEvaluation`` is the final
decision handed back to callers.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union

from .types import CombineOp, Outcome

GRANTED_GLYPH = "✔"
DENIED_GLYPH = "✘"
NO_TRACE = "No evaluation trace available"


def _indent(text: str, prefix: str = "  ") -> str:
    return "\n".join(prefix + line for line in text.split("\n"))


@dataclass(frozen=True)
class GrantedResult:
    """Leaf result granting access."""
    policy_type: str
    reason: Optional[str] = None

    @property
    def granted(self) -> bool:
        return True

    def is_granted(self) -> bool:
        return True

    def format(self) -> str:
        suffix = f" {self.reason}" if self.reason else ""
        return f"{GRANTED_GLYPH} {self.policy_type} GRANTED{suffix}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'policy_type': self.policy_type,
            'granted': True,
            'reason': self.reason
        }


@dataclass(frozen=True)
class DeniedResult:
    """Leaf result denying access."""
    policy_type: str
    reason: Optional[str] = None

    @property
    def granted(self) -> bool:
        return False

    def is_granted(self) -> bool:
        return False

    def format(self) -> str:
        suffix = f": {self.reason}" if self.reason else ""
        return f"{DENIED_GLYPH} {self.policy_type} DENIED{suffix}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'policy_type': self.policy_type,
            'granted': False,
            'reason': self.reason
        }


@dataclass(frozen=True)
class CombinedResult:
    """
    Result of a logical combination of child results.

    ``granted`` is fixed when the combinator builds the result and is never
    recomputed from ``children``.
    """
    policy_type: str
    granted: bool
    operation: CombineOp
    children: Tuple["PolicyEvalResult", ...] = field(default_factory=tuple)

    def __post_init__(self):
        # Callers may hand over a list; keep the node immutable.
        object.__setattr__(self, "children", tuple(self.children))
        object.__setattr__(self, "operation", CombineOp(self.operation))

    @property
    def reason(self) -> Optional[str]:
        return None

    def is_granted(self) -> bool:
        return self.granted

    def format(self) -> str:
        glyph = GRANTED_GLYPH if self.granted else DENIED_GLYPH
        lines = [f"{glyph} {self.policy_type} ({self.operation.value})"]
        lines.extend(_indent(child.format()) for child in self.children)
        return "\n".join(lines)

    def display(self) -> None:
        """Print the formatted result tree."""
        print(self.format())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'policy_type': self.policy_type,
            'granted': self.granted,
            'operation': self.operation.value,
            'children': [child.to_dict() for child in self.children]
        }


PolicyEvalResult = Union[GrantedResult, DeniedResult, CombinedResult]


@dataclass(frozen=True)
class EvalTrace:
    """Evaluation trace rooted at a single result, or empty."""
    root: Optional[PolicyEvalResult] = None

    def format(self) -> str:
        if self.root is None:
            return NO_TRACE
        return self.root.format()

    def to_dict(self) -> Optional[Dict[str, Any]]:
        return self.root.to_dict() if self.root is not None else None


@dataclass(frozen=True)
class AccessEvaluation:
    """
    Final result of an access evaluation.

    Build instances through ``AccessEvaluation.granted`` or
    ``AccessEvaluation.denied``; the constructor checks that the fields
    required by the outcome are present. A denial carries a reason and no
    policy type, since every configured policy was tried.

    Example:
        result = await checker.evaluate_access(user, document, "edit", {})
        if result.is_granted():
            ...
        else:
            print("Access denied:", result.get_display_trace())
    """
    outcome: Outcome
    trace: EvalTrace
    reason: Optional[str] = None
    policy_type: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "outcome", Outcome(self.outcome))
        if self.outcome is Outcome.DENIED:
            if not self.reason:
                raise ValueError("A denied evaluation requires a reason")
            if self.policy_type is not None:
                raise ValueError("A denied evaluation has no granting policy")
        elif self.policy_type is None:
            raise ValueError("A granted evaluation requires the granting policy type")

    @classmethod
    def granted(
        cls, policy_type: str, trace: EvalTrace, reason: Optional[str] = None
    ) -> "AccessEvaluation":
        return cls(
            outcome=Outcome.GRANTED,
            trace=trace,
            reason=reason,
            policy_type=policy_type,
        )

    @classmethod
    def denied(cls, reason: str, trace: EvalTrace) -> "AccessEvaluation":
        return cls(outcome=Outcome.DENIED, trace=trace, reason=reason)

    def is_granted(self) -> bool:
        """Return whether access was granted."""
        return self.outcome is Outcome.GRANTED

    def get_display_trace(self) -> str:
        """Return the formatted evaluation trace for debugging."""
        trace_text = self.trace.format()
        if trace_text != NO_TRACE:
            return f"\nEvaluation Trace:\n{trace_text}"
        return f"\n({trace_text})"

    def summary(self) -> str:
        """One-line description of the decision."""
        if self.is_granted():
            suffix = f" - {self.reason}" if self.reason else ""
            return f"[GRANTED] by {self.policy_type}{suffix}"
        return f"[DENIED] - {self.reason}"

    def display(self) -> None:
        """Print the decision summary."""
        print(self.summary())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            'outcome': self.outcome.value,
            'reason': self.reason,
            'policy_type': self.policy_type,
            'trace': self.trace.to_dict()
        }
