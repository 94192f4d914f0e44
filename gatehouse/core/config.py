"""
Configuration module for Gatehouse.

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.
"""

from dataclasses import dataclass

from ..errors import ConfigurationError
from ..util.config import get_bool_config, get_config_value, get_int_config

AUDIT_LOGGER_TYPES = ("memory", "file")


@dataclass
class CheckerConfig:
    """Configuration for a PermissionChecker"""
    name: str = "PermissionChecker"
    warn_on_empty: bool = True
    log_decisions: bool = False
    audit_enabled: bool = False
    audit_logger_type: str = "memory"
    audit_file_path: str = "gatehouse-audit.log"
    audit_max_entries: int = 1000

    @classmethod
    def from_env(cls) -> "CheckerConfig":
        """Create configuration from GATEHOUSE_* environment variables"""
        defaults = cls()
        return cls(
            name=get_config_value("checker_name", defaults.name),
            warn_on_empty=get_bool_config("warn_on_empty", defaults.warn_on_empty),
            log_decisions=get_bool_config("log_decisions", defaults.log_decisions),
            audit_enabled=get_bool_config("audit_enabled", defaults.audit_enabled),
            audit_logger_type=get_config_value(
                "audit_logger_type", defaults.audit_logger_type
            ),
            audit_file_path=get_config_value(
                "audit_file_path", defaults.audit_file_path
            ),
            audit_max_entries=get_int_config(
                "audit_max_entries", defaults.audit_max_entries
            ),
        )

    def validate(self) -> bool:
        """Validate the configuration"""
        if not self.name:
            raise ConfigurationError("name is required", config_key="name")
        if self.audit_logger_type not in AUDIT_LOGGER_TYPES:
            raise ConfigurationError(
                f"audit_logger_type must be one of: {', '.join(AUDIT_LOGGER_TYPES)}",
                config_key="audit_logger_type",
                config_value=self.audit_logger_type,
            )
        if self.audit_logger_type == "file" and not self.audit_file_path:
            raise ConfigurationError(
                "audit_file_path is required for file audit logging",
                config_key="audit_file_path",
            )
        if self.audit_max_entries <= 0:
            raise ConfigurationError(
                "audit_max_entries must be positive",
                config_key="audit_max_entries",
                config_value=self.audit_max_entries,
            )
        return True
