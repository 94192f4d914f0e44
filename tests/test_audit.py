"""
Tests for decision audit logging.
"""

from datetime import timedelta

import pytest

from gatehouse import CheckerConfig
from gatehouse.audit import (
    DecisionRecord,
    FileDecisionLogger,
    MemoryDecisionLogger,
    create_audit_logger,
)
from gatehouse.authz import PermissionChecker, PolicyBuilder
from gatehouse.common.utils import current_timestamp
from gatehouse.errors import AuditError


def make_record(granted=True, policy_type="Readers"):
    return DecisionRecord(
        checker="PermissionChecker",
        granted=granted,
        reason=None if granted else "All policies denied access",
        policy_type=policy_type if granted else None,
        subject="'alice'",
        resource="'doc'",
        action="'read'",
        trace="✔ PermissionChecker (OR)",
    )


class TestMemoryDecisionLogger:
    """Test the in-memory audit sink."""

    @pytest.mark.asyncio
    async def test_log_and_filter(self):
        audit = MemoryDecisionLogger()
        await audit.log(make_record(granted=True))
        await audit.log(make_record(granted=False))

        assert len(await audit.get_records()) == 2
        assert len(await audit.get_records(granted=False)) == 1
        assert len(await audit.get_records(policy_type="Readers")) == 1

    @pytest.mark.asyncio
    async def test_time_filters(self):
        audit = MemoryDecisionLogger()
        await audit.log(make_record())
        later = current_timestamp() + timedelta(minutes=1)
        assert await audit.get_records(start_time=later) == []
        assert len(await audit.get_records(end_time=later)) == 1

    @pytest.mark.asyncio
    async def test_bounded_size(self):
        audit = MemoryDecisionLogger(max_entries=2)
        for _ in range(5):
            await audit.log(make_record())
        assert len(await audit.get_records()) == 2


class TestFileDecisionLogger:
    """Test the JSON lines audit sink."""

    @pytest.mark.asyncio
    async def test_round_trip(self, tmp_path):
        audit = FileDecisionLogger(str(tmp_path / "audit.log"))
        record = make_record(granted=False)
        await audit.log(record)
        await audit.log(make_record(granted=True))

        denied = await audit.get_records(granted=False)
        assert len(denied) == 1
        assert denied[0].record_id == record.record_id
        assert denied[0].timestamp == record.timestamp
        assert denied[0].reason == "All policies denied access"

    @pytest.mark.asyncio
    async def test_missing_file_has_no_records(self, tmp_path):
        audit = FileDecisionLogger(str(tmp_path / "missing.log"))
        assert await audit.get_records() == []

    @pytest.mark.asyncio
    async def test_skips_malformed_lines(self, tmp_path):
        path = tmp_path / "audit.log"
        audit = FileDecisionLogger(str(path))
        await audit.log(make_record())
        with open(path, "a", encoding="utf-8") as f:
            f.write("not json\n")
        assert len(await audit.get_records()) == 1

    @pytest.mark.asyncio
    async def test_unwritable_path_raises(self, tmp_path):
        audit = FileDecisionLogger(str(tmp_path / "no-such-dir" / "audit.log"))
        with pytest.raises(AuditError):
            await audit.log(make_record())


class TestCreateAuditLogger:
    """Test the audit logger factory."""

    def test_memory(self):
        audit = create_audit_logger("memory", max_entries=5)
        assert isinstance(audit, MemoryDecisionLogger)
        assert audit.max_entries == 5

    def test_file(self, tmp_path):
        audit = create_audit_logger("file", file_path=str(tmp_path / "a.log"))
        assert isinstance(audit, FileDecisionLogger)

    def test_unknown(self):
        with pytest.raises(ValueError):
            create_audit_logger("kafka")


class TestCheckerAuditing:
    """Test that the checker writes one record per decision."""

    @pytest.mark.asyncio
    async def test_checker_records_decisions(self):
        audit = MemoryDecisionLogger()
        checker = PermissionChecker(audit_logger=audit)

        await checker.evaluate_access("alice", "doc", "read", {})
        checker.add_policy(PolicyBuilder("Readers").actions(lambda a: a == "read").build())
        await checker.evaluate_access("alice", "doc", "read", {})
        await checker.evaluate_access("alice", "doc", "write", {})

        records = await audit.get_records()
        assert [r.granted for r in records] == [False, True, False]
        assert records[0].reason == "No policies configured"
        assert records[1].policy_type == "Readers"
        assert records[1].subject == "'alice'"
        assert "Readers" in records[2].trace

    @pytest.mark.asyncio
    async def test_audit_from_config(self, tmp_path):
        config = CheckerConfig(
            audit_enabled=True,
            audit_logger_type="file",
            audit_file_path=str(tmp_path / "decisions.log"),
        )
        checker = PermissionChecker(config=config)
        assert isinstance(checker.audit_logger, FileDecisionLogger)

        await checker.evaluate_access("alice", "doc", "read", {})
        assert len(await checker.audit_logger.get_records()) == 1

    def test_audit_disabled_by_default(self):
        assert PermissionChecker().audit_logger is None
