"""
Utility helpers for Gatehouse.
"""

from .config import (
    ENV_PREFIX,
    get_config_value,
    get_bool_config,
    get_int_config,
)

__all__ = [
    'ENV_PREFIX',
    'get_config_value',
    'get_bool_config',
    'get_int_config',
]
