"""Append-only decision log — the record of every evaluation the engine makes.

Every call to DecisionEngine.evaluate() with a log attached appends one
record, including no-action outcomes. Records are immutable once
written and are kept in memory only.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from exitvoice.models.decision import Decision, DecisionReason, Outcome


@dataclass(frozen=True)
class DecisionRecord:
    """A single immutable entry in the decision log."""
    record_id: str
    membership_id: str
    cycle: int
    outcome: Outcome
    reason: DecisionReason
    timestamp_utc: str
    new_current_id: Optional[str] = None

    @staticmethod
    def create(
        record_id: str,
        decision: Decision,
        cycle: int = 0,
        timestamp_utc: Optional[datetime] = None,
    ) -> DecisionRecord:
        ts = timestamp_utc or datetime.now(timezone.utc)
        return DecisionRecord(
            record_id=record_id,
            membership_id=decision.membership_id,
            cycle=cycle,
            outcome=decision.outcome,
            reason=decision.reason,
            timestamp_utc=ts.strftime("%Y-%m-%dT%H:%M:%SZ"),
            new_current_id=decision.new_current_id,
        )


class DecisionLog:
    """Append-only, in-memory decision log.

    Records can only be appended, never modified or removed.
    """

    def __init__(self) -> None:
        self._records: list[DecisionRecord] = []
        self._record_ids: set[str] = set()

    def append(self, record: DecisionRecord) -> None:
        """Append a record.

        Raises ValueError if record_id is a duplicate.
        """
        if record.record_id in self._record_ids:
            raise ValueError(f"Duplicate decision record ID: {record.record_id}")
        self._records.append(record)
        self._record_ids.add(record.record_id)

    def next_record_id(self) -> str:
        return f"D-{len(self._records) + 1:06d}"

    def records(
        self,
        outcome: Optional[Outcome] = None,
        membership_id: Optional[str] = None,
    ) -> list[DecisionRecord]:
        """Return records, optionally filtered by outcome and/or membership."""
        result = list(self._records)
        if outcome is not None:
            result = [r for r in result if r.outcome == outcome]
        if membership_id is not None:
            result = [r for r in result if r.membership_id == membership_id]
        return result

    @property
    def count(self) -> int:
        return len(self._records)

    @property
    def last_record(self) -> Optional[DecisionRecord]:
        return self._records[-1] if self._records else None
