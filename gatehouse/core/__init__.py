"""
Core configuration for Gatehouse.
"""

from .config import CheckerConfig, AUDIT_LOGGER_TYPES

__all__ = ['CheckerConfig', 'AUDIT_LOGGER_TYPES']
