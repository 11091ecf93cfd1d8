"""Core data models for the exit–voice decision engine."""

from exitvoice.models.organization import (
    Action,
    ActionBudget,
    ActionCosts,
    ActionPermissions,
    Dimension,
    Limiters,
    Organization,
    Tolerance,
)
from exitvoice.models.membership import Membership, MembershipState
from exitvoice.models.decision import Decision, DecisionReason, Outcome

__all__ = [
    "Action",
    "ActionBudget",
    "ActionCosts",
    "ActionPermissions",
    "Dimension",
    "Limiters",
    "Organization",
    "Tolerance",
    "Membership",
    "MembershipState",
    "Decision",
    "DecisionReason",
    "Outcome",
]
