"""Decision engine — picks and applies at most one action per membership per cycle.

Transition, evaluated once per cycle while HOLDING:
1. Not declining → NO_ACTION.
2. Compute tolerance, alternative existence, exit eligibility.
3. Voice eligible:
   a. exit ineligible or decline tolerated → VOICE.
   b. otherwise → NO_ACTION. Exit is NOT attempted: voice preempts
      exit evaluation whenever voice is eligible at all.
4. Exit eligible and decline not tolerated → EXIT.
5. Otherwise → NO_ACTION.

TERMINAL memberships always yield NO_ACTION and are never mutated, so
a batch can keep scanning exhausted memberships.
"""

from __future__ import annotations

import logging
from typing import Optional

from exitvoice.audit.decision_log import DecisionLog, DecisionRecord
from exitvoice.engine.eligibility import ExitContext, VoiceContext, can_use
from exitvoice.engine.executors import apply_exit, apply_voice
from exitvoice.engine.predicates import is_declining, tolerates
from exitvoice.engine.selector import best_alternative_position
from exitvoice.models.decision import Decision, DecisionReason, Outcome
from exitvoice.models.membership import Membership

logger = logging.getLogger(__name__)


class DecisionEngine:
    """Evaluates memberships and applies the chosen action.

    Usage:
        engine = DecisionEngine(decision_log=DecisionLog())
        outcome = engine.decide(membership)
        decision = engine.evaluate(membership, apply=False)  # dry run
    """

    def __init__(self, decision_log: Optional[DecisionLog] = None) -> None:
        self._log = decision_log

    @property
    def decision_log(self) -> Optional[DecisionLog]:
        return self._log

    def decide(self, membership: Membership, cycle: int = 0) -> Outcome:
        """Evaluate and apply; return only the outcome."""
        return self.evaluate(membership, cycle=cycle).outcome

    def evaluate(
        self,
        membership: Membership,
        apply: bool = True,
        cycle: int = 0,
    ) -> Decision:
        """Evaluate one cycle for a membership.

        With apply=False nothing is mutated and nothing is logged; the
        returned decision describes what would happen.
        """
        decision = self._choose(membership, apply)
        logger.debug(
            "cycle=%d membership=%s outcome=%s reason=%s",
            cycle, membership.membership_id,
            decision.outcome.value, decision.reason.value,
        )
        if apply and self._log is not None:
            self._log.append(
                DecisionRecord.create(self._log.next_record_id(), decision, cycle=cycle)
            )
        return decision

    def _choose(self, membership: Membership, apply: bool) -> Decision:
        current = membership.current
        if current is None:
            return Decision(
                membership_id=membership.membership_id,
                outcome=Outcome.NO_ACTION,
                reason=DecisionReason.TERMINAL,
                applied=apply,
            )

        if not is_declining(current, membership.limiters, membership.dimensions):
            return Decision(
                membership_id=membership.membership_id,
                outcome=Outcome.NO_ACTION,
                reason=DecisionReason.NOT_DECLINING,
                applied=apply,
            )

        tolerated = tolerates(
            current, membership.limiters, membership.dimensions, membership.tolerance,
        )
        alternative_position = best_alternative_position(
            membership.pool, membership.limiters, membership.action_budget,
        )
        alternative_exists = alternative_position is not None
        exit_eligible = can_use(
            current, ExitContext.for_membership(membership, alternative_exists),
        )
        voice_eligible = can_use(current, VoiceContext.for_membership(membership))

        def decided(
            outcome: Outcome,
            reason: DecisionReason,
            new_current_id: Optional[str] = membership.current_id,
        ) -> Decision:
            return Decision(
                membership_id=membership.membership_id,
                outcome=outcome,
                reason=reason,
                declining=True,
                tolerated=tolerated,
                alternative_exists=alternative_exists,
                exit_eligible=exit_eligible,
                voice_eligible=voice_eligible,
                new_current_id=new_current_id,
                applied=apply,
            )

        if voice_eligible:
            if not exit_eligible or tolerated:
                if apply:
                    apply_voice(membership)
                return decided(Outcome.VOICE, DecisionReason.VOICE_USED)
            return decided(Outcome.NO_ACTION, DecisionReason.VOICE_PREEMPTS_EXIT)

        if exit_eligible and not tolerated:
            reason = (
                DecisionReason.EXIT_TO_ALTERNATIVE
                if alternative_exists
                else DecisionReason.EXIT_WITHOUT_ALTERNATIVE
            )
            if apply:
                new_current_id = apply_exit(membership)
            elif alternative_exists:
                new_current_id = membership.pool_ids[alternative_position]
            else:
                new_current_id = None
            return decided(Outcome.EXIT, reason, new_current_id)

        if exit_eligible:
            return decided(Outcome.NO_ACTION, DecisionReason.DECLINE_TOLERATED)
        return decided(Outcome.NO_ACTION, DecisionReason.NO_ELIGIBLE_ACTION)


_DEFAULT_ENGINE = DecisionEngine()


def decide(membership: Membership) -> Outcome:
    """Evaluate one cycle for a membership with an unlogged engine."""
    return _DEFAULT_ENGINE.decide(membership)
