# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Top-level permission checker for Gatehouse.
Evaluates an ordered list of policies with OR semantics.
"""

from typing import Any, List, Optional, Tuple
import logging

from ..audit.logger import DecisionAuditLogger, DecisionRecord, create_audit_logger
from ..common.utils import maybe_await
from ..core.config import CheckerConfig
from ..errors import AuditError
from .combinators import ensure_policy
from .results import (
    AccessEvaluation, CombinedResult, DeniedResult, EvalTrace, PolicyEvalResult,
)
from .types import AccessRequest, CombineOp, Policy


logger = logging.getLogger(__name__)

NO_POLICIES_REASON = "No policies configured"
ALL_DENIED_REASON = "All policies denied access"


class PermissionChecker:
    """
    Main entry point for evaluating access permissions.

    Policies are evaluated in the order they were added until one grants
    access. Each call works on a snapshot of the policy list taken when the
    call starts, so a policy added while an evaluation is suspended only
    affects later calls.

    Example:
        checker = PermissionChecker()
        checker.add_policy(admin_policy)
        checker.add_policy(owner_policy)
        result = await checker.evaluate_access(user, document, "edit", request_context)
        if result.is_granted():
            ...
    """

    def __init__(
        self,
        config: Optional[CheckerConfig] = None,
        audit_logger: Optional[DecisionAuditLogger] = None,
    ):
        self.config = config or CheckerConfig()
        self.config.validate()
        self._policies: List[Policy] = []

        if audit_logger is None and self.config.audit_enabled:
            audit_logger = create_audit_logger(
                self.config.audit_logger_type,
                max_entries=self.config.audit_max_entries,
                file_path=self.config.audit_file_path,
            )
        self.audit_logger = audit_logger

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def policies(self) -> Tuple[Policy, ...]:
        """Snapshot of the configured policies in evaluation order."""
        return tuple(self._policies)

    def add_policy(self, policy: Policy) -> None:
        """
        Add a policy to the checker.
        Policies are evaluated in the order they're added, with OR semantics.
        """
        self._policies.append(ensure_policy(policy, self.name))
        logger.info(f"{self.name}: added policy {getattr(policy, 'name', policy)!r}")

    async def evaluate_request(self, request: AccessRequest) -> AccessEvaluation:
        """Evaluate an AccessRequest tuple."""
        return await self.evaluate_access(
            request.subject, request.resource, request.action, request.context
        )

    async def evaluate_access(
        self, subject: Any, resource: Any, action: Any, context: Any = None
    ) -> AccessEvaluation:
        """
        Evaluate access based on the configured policies.

        Args:
            subject: The entity requesting access
            resource: The target resource
            action: The action being performed
            context: Additional context that may affect the decision

        Returns:
            AccessEvaluation: The decision with its full evaluation trace
        """
        policies = tuple(self._policies)
        evaluation = await self._evaluate(policies, subject, resource, action, context)

        if self.config.log_decisions:
            logger.info(f"{self.name}: {evaluation.summary()}")
        else:
            logger.debug(f"{self.name}: {evaluation.summary()}")

        if self.audit_logger is not None:
            try:
                await self.audit_logger.log(
                    DecisionRecord.from_evaluation(self.name, evaluation, subject, resource, action)
                )
            except AuditError as e:
                logger.error(f"{self.name}: audit logging failed, decision still returned: {e}")

        return evaluation

    async def _evaluate(
        self,
        policies: Tuple[Policy, ...],
        subject: Any,
        resource: Any,
        action: Any,
        context: Any,
    ) -> AccessEvaluation:
        if not policies:
            if self.config.warn_on_empty:
                logger.warning(NO_POLICIES_REASON)
            result = DeniedResult(policy_type=self.name, reason=NO_POLICIES_REASON)
            return AccessEvaluation.denied(NO_POLICIES_REASON, EvalTrace(result))

        results: List[PolicyEvalResult] = []
        for policy in policies:
            result = await maybe_await(policy.evaluate_access(subject, resource, action, context))
            results.append(result)
            logger.debug(
                f"{self.name}: {result.policy_type} "
                f"{'granted' if result.is_granted() else 'denied'}"
            )

            if result.is_granted():
                combined = CombinedResult(
                    policy_type=self.name,
                    granted=True,
                    operation=CombineOp.OR,
                    children=results,
                )
                return AccessEvaluation.granted(result.policy_type, EvalTrace(combined))

        combined = CombinedResult(
            policy_type=self.name,
            granted=False,
            operation=CombineOp.OR,
            children=results,
        )
        return AccessEvaluation.denied(ALL_DENIED_REASON, EvalTrace(combined))
