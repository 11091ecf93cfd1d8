"""Decision models — the outcome of one evaluation cycle and why it was reached."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class Outcome(str, enum.Enum):
    """The action taken in one evaluation cycle."""
    NO_ACTION = "no_action"
    VOICE = "voice"
    EXIT = "exit"


class DecisionReason(str, enum.Enum):
    """Why the engine produced its outcome."""
    TERMINAL = "terminal"
    NOT_DECLINING = "not_declining"
    VOICE_USED = "voice_used"
    # Voice is eligible but exit is too and decline is intolerable.
    # Exit is not attempted in that case.
    VOICE_PREEMPTS_EXIT = "voice_preempts_exit"
    EXIT_TO_ALTERNATIVE = "exit_to_alternative"
    EXIT_WITHOUT_ALTERNATIVE = "exit_without_alternative"
    DECLINE_TOLERATED = "decline_tolerated"
    NO_ELIGIBLE_ACTION = "no_eligible_action"


@dataclass(frozen=True)
class Decision:
    """Result of evaluating a membership once.

    Predicate fields are only computed when the current organization is
    declining; otherwise they stay False.
    """
    membership_id: str
    outcome: Outcome
    reason: DecisionReason
    declining: bool = False
    tolerated: bool = False
    alternative_exists: bool = False
    exit_eligible: bool = False
    voice_eligible: bool = False
    new_current_id: Optional[str] = None
    applied: bool = True
