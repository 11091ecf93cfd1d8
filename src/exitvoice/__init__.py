"""Exit–voice decision engine.

Models a member's response to decline in an organization: use voice
to improve it from within, exit to an alternative (or simply leave),
or do nothing.
"""

from exitvoice.engine.decision_engine import DecisionEngine, decide
from exitvoice.models import (
    Action,
    ActionBudget,
    ActionCosts,
    ActionPermissions,
    Decision,
    DecisionReason,
    Dimension,
    Limiters,
    Membership,
    MembershipState,
    Organization,
    Outcome,
    Tolerance,
)
from exitvoice.runner import BatchRunner, CycleReport, Member, run_batch

__all__ = [
    "DecisionEngine",
    "decide",
    "Action",
    "ActionBudget",
    "ActionCosts",
    "ActionPermissions",
    "Decision",
    "DecisionReason",
    "Dimension",
    "Limiters",
    "Membership",
    "MembershipState",
    "Organization",
    "Outcome",
    "Tolerance",
    "BatchRunner",
    "CycleReport",
    "Member",
    "run_batch",
]
