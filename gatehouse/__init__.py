"""
Gatehouse Python Package

Composable RBAC, ABAC and ReBAC authorization policies with explainable decisions.
"""

__version__ = "0.1.0"
__author__ = "Mauricio Fernandez"
__email__ = "mauricio.fernandez@siemens.com"

from .authz import (
    AccessEvaluation,
    AccessRequest,
    Effect,
    PermissionChecker,
    Policy,
    PolicyBuilder,
    build_abac_policy,
    build_and_policy,
    build_not_policy,
    build_or_policy,
    build_rbac_policy,
    build_rebac_policy,
)
from .core.config import CheckerConfig
from .errors import GatehouseError, PolicyConstructionError

__all__ = [
    "AccessEvaluation",
    "AccessRequest",
    "Effect",
    "PermissionChecker",
    "Policy",
    "PolicyBuilder",
    "build_abac_policy",
    "build_and_policy",
    "build_not_policy",
    "build_or_policy",
    "build_rbac_policy",
    "build_rebac_policy",
    "CheckerConfig",
    "GatehouseError",
    "PolicyConstructionError",
]
