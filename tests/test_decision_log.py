"""Tests for the append-only decision log."""

from datetime import datetime, timezone

import pytest

from exitvoice.audit.decision_log import DecisionLog, DecisionRecord
from exitvoice.models.decision import Decision, DecisionReason, Outcome


def _decision(membership_id: str = "MB-1", outcome: Outcome = Outcome.VOICE) -> Decision:
    reason = {
        Outcome.VOICE: DecisionReason.VOICE_USED,
        Outcome.EXIT: DecisionReason.EXIT_TO_ALTERNATIVE,
        Outcome.NO_ACTION: DecisionReason.NOT_DECLINING,
    }[outcome]
    return Decision(membership_id=membership_id, outcome=outcome, reason=reason)


class TestDecisionRecord:
    def test_create_copies_decision_fields(self) -> None:
        ts = datetime(2026, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
        record = DecisionRecord.create("D-1", _decision(), cycle=3, timestamp_utc=ts)
        assert record.record_id == "D-1"
        assert record.membership_id == "MB-1"
        assert record.cycle == 3
        assert record.outcome == Outcome.VOICE
        assert record.reason == DecisionReason.VOICE_USED
        assert record.timestamp_utc == "2026-01-01T12:00:00Z"

    def test_record_is_immutable(self) -> None:
        record = DecisionRecord.create("D-1", _decision())
        with pytest.raises(Exception):
            record.cycle = 9  # type: ignore[misc]


class TestDecisionLog:
    def test_append_and_count(self) -> None:
        log = DecisionLog()
        assert log.count == 0
        assert log.last_record is None
        log.append(DecisionRecord.create(log.next_record_id(), _decision()))
        assert log.count == 1
        assert log.last_record.record_id == "D-000001"

    def test_duplicate_id_rejected(self) -> None:
        log = DecisionLog()
        log.append(DecisionRecord.create("D-1", _decision()))
        with pytest.raises(ValueError, match="Duplicate"):
            log.append(DecisionRecord.create("D-1", _decision()))

    def test_filter_by_outcome_and_membership(self) -> None:
        log = DecisionLog()
        log.append(DecisionRecord.create("D-1", _decision("A", Outcome.VOICE)))
        log.append(DecisionRecord.create("D-2", _decision("B", Outcome.EXIT)))
        log.append(DecisionRecord.create("D-3", _decision("A", Outcome.NO_ACTION)))

        assert [r.record_id for r in log.records(outcome=Outcome.EXIT)] == ["D-2"]
        assert [r.record_id for r in log.records(membership_id="A")] == ["D-1", "D-3"]
        assert log.records(outcome=Outcome.VOICE, membership_id="B") == []

    def test_records_returns_copy(self) -> None:
        log = DecisionLog()
        log.append(DecisionRecord.create("D-1", _decision()))
        log.records().clear()
        assert log.count == 1
