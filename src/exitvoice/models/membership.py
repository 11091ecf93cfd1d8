"""Membership models — one member's relationship with an organization.

A membership owns an arena of organizations addressed by stable ids.
"Current" and "pool" are id tags into that arena:
- current_id: the organization currently belonged to, or None.
- pool_ids: candidate organizations, in pool order.

Membership lifecycle: HOLDING → TERMINAL
TERMINAL is entered when the member exits with no acceptable
alternative. It is absorbing: no action is ever produced again.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass, field
from typing import Iterable, Optional

from exitvoice.models.organization import (
    ActionBudget,
    Dimension,
    Limiters,
    Organization,
    Tolerance,
)


class MembershipState(str, enum.Enum):
    """Whether the member still belongs to an organization."""
    HOLDING = "holding"
    TERMINAL = "terminal"


def _new_membership_id() -> str:
    return f"MB-{uuid.uuid4().hex[:8]}"


@dataclass
class Membership:
    """A member's relationship with its current organization and alternatives.

    Use Membership.create() to build one from organizations; the
    constructor expects an already-populated arena.

    Invariants (checked at construction):
    - dimensions holds one or two of QUALITY, PRICE.
    - influence >= 0.
    - every tagged id exists in the arena, and no id is tagged twice.
    """
    organizations: dict[str, Organization]
    current_id: Optional[str]
    pool_ids: list[str]
    dimensions: frozenset[Dimension]
    limiters: Limiters = field(default_factory=Limiters)
    tolerance: Tolerance = field(default_factory=Tolerance)
    action_budget: ActionBudget = field(default_factory=ActionBudget)
    elastic: bool = False
    influence: float = 0
    membership_id: str = field(default_factory=_new_membership_id)

    def __post_init__(self) -> None:
        self.dimensions = frozenset(Dimension(d) for d in self.dimensions)
        if not self.dimensions:
            raise ValueError(
                f"{self.membership_id}: dimensions must contain quality and/or price"
            )
        if self.influence < 0:
            raise ValueError(
                f"{self.membership_id}: influence must be >= 0, got {self.influence}"
            )

        tagged = list(self.pool_ids)
        if self.current_id is not None:
            tagged.append(self.current_id)
        missing = [org_id for org_id in tagged if org_id not in self.organizations]
        if missing:
            raise ValueError(
                f"{self.membership_id}: unknown organization ids {missing}"
            )
        if len(set(tagged)) != len(tagged):
            raise ValueError(
                f"{self.membership_id}: an organization id is tagged more than once"
            )

    @classmethod
    def create(
        cls,
        current: Organization,
        pool: Iterable[Organization] = (),
        dimensions: Iterable[Dimension] = (Dimension.QUALITY,),
        limiters: Optional[Limiters] = None,
        tolerance: Optional[Tolerance] = None,
        action_budget: Optional[ActionBudget] = None,
        elastic: bool = False,
        influence: float = 0,
        membership_id: Optional[str] = None,
    ) -> Membership:
        """Build a membership, assigning arena ids O-0 (current), O-1... (pool)."""
        organizations = {"O-0": current}
        pool_ids: list[str] = []
        for index, org in enumerate(pool, start=1):
            org_id = f"O-{index}"
            organizations[org_id] = org
            pool_ids.append(org_id)

        return cls(
            organizations=organizations,
            current_id="O-0",
            pool_ids=pool_ids,
            dimensions=frozenset(dimensions),
            limiters=limiters or Limiters(),
            tolerance=tolerance or Tolerance(),
            action_budget=action_budget or ActionBudget(),
            elastic=elastic,
            influence=influence,
            membership_id=membership_id or _new_membership_id(),
        )

    @property
    def current(self) -> Optional[Organization]:
        if self.current_id is None:
            return None
        return self.organizations[self.current_id]

    @property
    def pool(self) -> list[Organization]:
        """Candidate organizations in pool order."""
        return [self.organizations[org_id] for org_id in self.pool_ids]

    @property
    def state(self) -> MembershipState:
        if self.current_id is None:
            return MembershipState.TERMINAL
        return MembershipState.HOLDING

    @property
    def is_terminal(self) -> bool:
        return self.state == MembershipState.TERMINAL
