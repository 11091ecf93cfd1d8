"""Action eligibility — can an action be used against an organization?

Each action has its own context record carrying exactly what that
action needs:
- ExitContext: budget, elastic demand, whether an alternative exists.
- VoiceContext: budget, influence.
- EntryContext: budget. Only used for candidate organizations.

Usage:
    ctx = ExitContext.for_membership(membership, alternative_exists=True)
    if can_use(org, ctx):
        ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from exitvoice.models.membership import Membership
from exitvoice.models.organization import Action, Organization


@runtime_checkable
class ActionContext(Protocol):
    """Context required to evaluate one action."""

    @property
    def action(self) -> Action:
        ...

    def permits(self, org: Organization) -> bool:
        ...


@dataclass(frozen=True)
class ExitContext:
    max_cost: float
    elastic: bool
    alternative_exists: bool

    @property
    def action(self) -> Action:
        return Action.EXIT

    def permits(self, org: Organization) -> bool:
        return (
            org.cost.exit <= self.max_cost
            and org.allows.exit
            and (self.elastic or self.alternative_exists)
        )

    @classmethod
    def for_membership(
        cls, membership: Membership, alternative_exists: bool,
    ) -> ExitContext:
        return cls(
            max_cost=membership.action_budget.exit,
            elastic=membership.elastic,
            alternative_exists=alternative_exists,
        )


@dataclass(frozen=True)
class VoiceContext:
    max_cost: float
    influence: float

    @property
    def action(self) -> Action:
        return Action.VOICE

    def permits(self, org: Organization) -> bool:
        return (
            org.cost.voice <= self.max_cost
            and org.allows.voice
            and self.influence > 0
        )

    @classmethod
    def for_membership(cls, membership: Membership) -> VoiceContext:
        return cls(
            max_cost=membership.action_budget.voice,
            influence=membership.influence,
        )


@dataclass(frozen=True)
class EntryContext:
    max_cost: float

    @property
    def action(self) -> Action:
        return Action.ENTRY

    def permits(self, org: Organization) -> bool:
        return org.cost.entry <= self.max_cost

    @classmethod
    def for_membership(cls, membership: Membership) -> EntryContext:
        return cls(max_cost=membership.action_budget.entry)


def can_use(org: Organization, context: ActionContext) -> bool:
    """Check whether the action described by context is usable on org."""
    return context.permits(org)
