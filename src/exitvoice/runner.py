"""Batch runner — applies the decision engine to a collection of memberships.

Memberships share no state, so each one is evaluated independently in
collection order. A cycle evaluates every membership exactly once.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterable, Optional

from exitvoice.engine.decision_engine import DecisionEngine
from exitvoice.models.decision import Decision, Outcome
from exitvoice.models.membership import Membership

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CycleReport:
    """Decisions produced by one pass over a collection of memberships."""
    cycle: int
    decisions: tuple[Decision, ...] = ()

    @property
    def outcomes(self) -> list[Outcome]:
        return [d.outcome for d in self.decisions]

    @property
    def counts(self) -> dict[Outcome, int]:
        tally = Counter(self.outcomes)
        return {outcome: tally.get(outcome, 0) for outcome in Outcome}

    @property
    def is_stable(self) -> bool:
        """True if no membership acted in this cycle."""
        return all(o == Outcome.NO_ACTION for o in self.outcomes)


class BatchRunner:
    """Runs decision cycles over a collection of memberships.

    Usage:
        runner = BatchRunner(engine, max_cycles=resolver.max_cycles())
        report = runner.run_cycle(memberships)
        reports = runner.run(memberships)  # until stable or max_cycles
    """

    def __init__(
        self,
        engine: Optional[DecisionEngine] = None,
        max_cycles: int = 100,
    ) -> None:
        if max_cycles < 1:
            raise ValueError(f"max_cycles must be >= 1, got {max_cycles}")
        self._engine = engine or DecisionEngine()
        self._max_cycles = max_cycles

    @property
    def engine(self) -> DecisionEngine:
        return self._engine

    def run_cycle(self, memberships: Iterable[Membership], cycle: int = 1) -> CycleReport:
        decisions = [self._engine.evaluate(m, cycle=cycle) for m in memberships]
        report = CycleReport(cycle=cycle, decisions=tuple(decisions))
        logger.info(
            "cycle %d: %d memberships, voice=%d exit=%d no_action=%d",
            cycle, len(decisions),
            report.counts[Outcome.VOICE],
            report.counts[Outcome.EXIT],
            report.counts[Outcome.NO_ACTION],
        )
        return report

    def run(
        self,
        memberships: list[Membership],
        max_cycles: Optional[int] = None,
    ) -> list[CycleReport]:
        """Run cycles until one produces no action, or max_cycles is reached.

        The stable cycle is included in the returned reports.
        """
        limit = max_cycles if max_cycles is not None else self._max_cycles
        reports: list[CycleReport] = []
        for cycle in range(1, limit + 1):
            report = self.run_cycle(memberships, cycle=cycle)
            reports.append(report)
            if report.is_stable:
                break
        else:
            logger.info("stopped after max_cycles=%d without stabilising", limit)
        return reports


@dataclass
class Member:
    """An individual and all of their memberships."""
    member_id: str
    memberships: list[Membership] = field(default_factory=list)

    def check(self, engine: Optional[DecisionEngine] = None) -> list[Outcome]:
        """Evaluate every membership once."""
        return run_batch(self.memberships, engine)


def run_batch(
    memberships: Iterable[Membership],
    engine: Optional[DecisionEngine] = None,
) -> list[Outcome]:
    """Apply one decision cycle to each membership; return outcomes in order."""
    return BatchRunner(engine).run_cycle(memberships).outcomes
