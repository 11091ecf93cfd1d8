"""Alternative selector — finds the cheapest acceptable organization to move to.

A candidate qualifies when:
    cost.entry <= action_budget.entry  and  quality >= limiters.quality

Among qualifying candidates the lowest entry cost wins.
Tie-breaking: earlier pool position first.

Pure computation: the pool is never mutated. The exit executor uses
the returned position to retag the membership's arena.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from exitvoice.engine.eligibility import EntryContext, can_use
from exitvoice.models.organization import ActionBudget, Limiters, Organization


@dataclass(frozen=True)
class ScoredAlternative:
    """A qualifying candidate with its position in the pool."""
    position: int
    organization: Organization

    @property
    def entry_cost(self) -> float:
        return self.organization.cost.entry


def rank_alternatives(
    pool: Sequence[Organization],
    limiters: Limiters,
    action_budget: ActionBudget,
) -> list[ScoredAlternative]:
    """Return all qualifying candidates, best first.

    Sorted by entry cost ascending, then pool position ascending.
    """
    entry = EntryContext(max_cost=action_budget.entry)
    ranked: list[ScoredAlternative] = []
    for position, org in enumerate(pool):
        if not can_use(org, entry):
            continue  # Entry too expensive
        if org.quality < limiters.quality:
            continue
        ranked.append(ScoredAlternative(position=position, organization=org))

    ranked.sort(key=lambda s: (s.entry_cost, s.position))
    return ranked


def best_alternative_position(
    pool: Sequence[Organization],
    limiters: Limiters,
    action_budget: ActionBudget,
) -> Optional[int]:
    """Pool position of the best alternative, or None if none qualifies."""
    ranked = rank_alternatives(pool, limiters, action_budget)
    if not ranked:
        return None
    return ranked[0].position


def best_alternative(
    pool: Sequence[Organization],
    limiters: Limiters,
    action_budget: ActionBudget,
) -> Optional[Organization]:
    """The cheapest acceptable alternative, or None if none qualifies."""
    position = best_alternative_position(pool, limiters, action_budget)
    if position is None:
        return None
    return pool[position]
