"""
Decision audit logging for Gatehouse.

Copyright (c) 2025 Gimel Foundation and the persons identified as the document authors.
All rights reserved. This file is subject to the Gimel Foundation's Legal Provisions Relating to GiFo Documents.
See http://GimelFoundation.com or https://github.com/Gimel-Foundation for details.
Code Components extracted from GiFo-RfC 0111 must include this license text and are provided without warranty.
"""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional
import asyncio
import json
import logging

import aiofiles

from ..common.utils import current_timestamp, describe, generate_id
from ..errors import AuditError


logger = logging.getLogger(__name__)


@dataclass
class DecisionRecord:
    """A single access decision as written to the audit trail"""
    checker: str
    granted: bool
    reason: Optional[str]
    policy_type: Optional[str]
    subject: str
    resource: str
    action: str
    trace: str
    record_id: str = field(default_factory=lambda: generate_id("dec_"))
    timestamp: datetime = field(default_factory=current_timestamp)

    @classmethod
    def from_evaluation(
        cls, checker: str, evaluation: Any, subject: Any, resource: Any, action: Any
    ) -> "DecisionRecord":
        """Build a record from an AccessEvaluation and its request values"""
        return cls(
            checker=checker,
            granted=evaluation.is_granted(),
            reason=evaluation.reason,
            policy_type=evaluation.policy_type,
            subject=describe(subject),
            resource=describe(resource),
            action=describe(action),
            trace=evaluation.trace.format(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "record_id": self.record_id,
            "timestamp": self.timestamp.isoformat(),
            "checker": self.checker,
            "granted": self.granted,
            "reason": self.reason,
            "policy_type": self.policy_type,
            "subject": self.subject,
            "resource": self.resource,
            "action": self.action,
            "trace": self.trace,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DecisionRecord":
        """Create from dictionary representation."""
        return cls(
            record_id=data["record_id"],
            timestamp=datetime.fromisoformat(data["timestamp"]),
            checker=data["checker"],
            granted=data["granted"],
            reason=data.get("reason"),
            policy_type=data.get("policy_type"),
            subject=data["subject"],
            resource=data["resource"],
            action=data["action"],
            trace=data.get("trace", ""),
        )


def _record_matches(
    record: DecisionRecord,
    granted: Optional[bool],
    policy_type: Optional[str],
    start_time: Optional[datetime],
    end_time: Optional[datetime],
) -> bool:
    if granted is not None and record.granted != granted:
        return False
    if policy_type and record.policy_type != policy_type:
        return False
    if start_time and record.timestamp < start_time:
        return False
    if end_time and record.timestamp > end_time:
        return False
    return True


class DecisionAuditLogger(ABC):
    """Abstract base class for decision audit logging"""

    @abstractmethod
    async def log(self, record: DecisionRecord) -> None:
        """Log a decision record"""
        pass

    @abstractmethod
    async def get_records(
        self,
        granted: Optional[bool] = None,
        policy_type: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> List[DecisionRecord]:
        """Retrieve decision records with optional filtering"""
        pass

    async def close(self) -> None:
        """Close the audit logger and release resources"""
        pass


class MemoryDecisionLogger(DecisionAuditLogger):
    """In-memory audit logger for development and testing"""

    def __init__(self, max_entries: int = 1000):
        self.max_entries = max_entries
        self.records: deque = deque(maxlen=max_entries)
        self._lock = asyncio.Lock()

    async def log(self, record: DecisionRecord) -> None:
        """Log a decision record to memory"""
        async with self._lock:
            self.records.append(record)

    async def get_records(
        self,
        granted: Optional[bool] = None,
        policy_type: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> List[DecisionRecord]:
        """Retrieve decision records with optional filtering"""
        async with self._lock:
            return [
                record for record in self.records
                if _record_matches(record, granted, policy_type, start_time, end_time)
            ]


class FileDecisionLogger(DecisionAuditLogger):
    """File-based audit logger writing one JSON document per line"""

    def __init__(self, file_path: str):
        self.file_path = file_path
        self._lock = asyncio.Lock()

    async def log(self, record: DecisionRecord) -> None:
        """Append a decision record to the audit file"""
        async with self._lock:
            try:
                async with aiofiles.open(self.file_path, "a", encoding="utf-8") as f:
                    await f.write(json.dumps(record.to_dict(), ensure_ascii=False) + "\n")
            except OSError as e:
                logger.error(f"Failed to write audit record to {self.file_path}: {e}")
                raise AuditError(
                    f"Failed to write audit record: {e}", sink=self.file_path, cause=e
                ) from e

    async def get_records(
        self,
        granted: Optional[bool] = None,
        policy_type: Optional[str] = None,
        start_time: Optional[datetime] = None,
        end_time: Optional[datetime] = None,
    ) -> List[DecisionRecord]:
        """Read decision records back from the audit file"""
        records = []

        try:
            async with aiofiles.open(self.file_path, "r", encoding="utf-8") as f:
                async for line in f:
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        record = DecisionRecord.from_dict(json.loads(line))
                    except (json.JSONDecodeError, KeyError, ValueError) as e:
                        logger.warning(f"Skipping malformed audit line in {self.file_path}: {e}")
                        continue

                    if _record_matches(record, granted, policy_type, start_time, end_time):
                        records.append(record)
        except FileNotFoundError:
            return []

        return records


def create_audit_logger(logger_type: str = "memory", **kwargs) -> DecisionAuditLogger:
    """
    Factory function to create decision audit loggers

    Args:
        logger_type: Type of logger ("memory" or "file")
        **kwargs: Additional arguments for the logger

    Returns:
        DecisionAuditLogger instance
    """
    if logger_type == "memory":
        max_entries = kwargs.get("max_entries", 1000)
        return MemoryDecisionLogger(max_entries)
    elif logger_type == "file":
        file_path = kwargs.get("file_path", "gatehouse-audit.log")
        return FileDecisionLogger(file_path)
    else:
        raise ValueError(f"Unknown logger type: {logger_type}")
