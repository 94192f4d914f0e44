"""
Common utilities for Gatehouse.
"""

from .utils import generate_id, current_timestamp, maybe_await, describe

__all__ = [
    'generate_id',
    'current_timestamp',
    'maybe_await',
    'describe',
]
