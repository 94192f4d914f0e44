"""
Audit module initialization
"""

from .logger import (
    DecisionRecord,
    DecisionAuditLogger,
    MemoryDecisionLogger,
    FileDecisionLogger,
    create_audit_logger,
)

__all__ = [
    "DecisionRecord",
    "DecisionAuditLogger",
    "MemoryDecisionLogger",
    "FileDecisionLogger",
    "create_audit_logger",
]
