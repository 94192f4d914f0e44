# Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
# All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
# See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
# Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.

"""
Error types and error codes for Gatehouse.

Only construction-time misuse, configuration problems and audit sink failures
are raised by the library itself. A denied access request is never an error,
and exceptions raised by user-supplied resolvers propagate unchanged.
"""

from enum import Enum
from typing import Any, Dict, Optional


class ErrorCode(str, Enum):
    """Standard error codes used across Gatehouse."""
    INVALID_POLICY = "invalid_policy"
    CONFIGURATION_ERROR = "configuration_error"
    AUDIT_FAILURE = "audit_failure"
    INTERNAL_ERROR = "internal_error"

    def __str__(self) -> str:
        return self.value


# Error code constants for easy import
INVALID_POLICY = ErrorCode.INVALID_POLICY
CONFIGURATION_ERROR = ErrorCode.CONFIGURATION_ERROR
AUDIT_FAILURE = ErrorCode.AUDIT_FAILURE
INTERNAL_ERROR = ErrorCode.INTERNAL_ERROR


class GatehouseError(Exception):
    """Base exception for all Gatehouse errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            'error': self.error_code.value,
            'message': self.message,
            'details': self.details
        }

        if self.cause:
            result['cause'] = str(self.cause)

        return result

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"


class PolicyConstructionError(GatehouseError, ValueError):
    """Raised when a policy cannot be built from the given arguments."""

    def __init__(
        self,
        message: str,
        policy_name: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, INVALID_POLICY, details)
        self.policy_name = policy_name

        if policy_name:
            self.details['policy_name'] = policy_name


class ConfigurationError(GatehouseError):
    """Raised when there's a configuration error."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, CONFIGURATION_ERROR, details)
        self.config_key = config_key
        self.config_value = config_value

        if config_key:
            self.details['config_key'] = config_key
        if config_value is not None:
            self.details['config_value'] = str(config_value)


class AuditError(GatehouseError):
    """Raised when a decision record cannot be written to the audit sink."""

    def __init__(
        self,
        message: str,
        sink: Optional[str] = None,
        cause: Optional[Exception] = None
    ):
        super().__init__(message, AUDIT_FAILURE, cause=cause)
        self.sink = sink

        if sink:
            self.details['sink'] = sink


__all__ = [
    'ErrorCode',
    'INVALID_POLICY',
    'CONFIGURATION_ERROR',
    'AUDIT_FAILURE',
    'INTERNAL_ERROR',
    'GatehouseError',
    'PolicyConstructionError',
    'ConfigurationError',
    'AuditError',
]
