"""Action executors — apply voice or exit to a membership.

These are the only functions that mutate a membership. Each one
touches only that membership's arena and tags.
"""

from __future__ import annotations

import dataclasses
from typing import Optional

from exitvoice.engine.selector import best_alternative_position
from exitvoice.models.membership import Membership


def apply_voice(membership: Membership) -> None:
    """Raise the current organization's quality by the member's influence.

    No cap is applied; repeated calls compound. The engine stops
    choosing voice once decline clears.
    """
    if membership.current_id is None:
        raise ValueError(f"{membership.membership_id}: voice requires a current organization")
    current = membership.organizations[membership.current_id]
    membership.organizations[membership.current_id] = dataclasses.replace(
        current, quality=current.quality + membership.influence,
    )


def apply_exit(membership: Membership) -> Optional[str]:
    """Leave the current organization.

    If an acceptable alternative exists, it becomes current and the
    previous current takes its pool slot (pool size unchanged).
    Otherwise the previous current is appended to the pool and the
    membership becomes terminal.

    Returns the new current id (None when terminal).
    """
    previous_id = membership.current_id
    if previous_id is None:
        raise ValueError(f"{membership.membership_id}: exit requires a current organization")

    position = best_alternative_position(
        membership.pool, membership.limiters, membership.action_budget,
    )
    if position is not None:
        membership.current_id = membership.pool_ids[position]
        membership.pool_ids[position] = previous_id
    else:
        membership.pool_ids.append(previous_id)
        membership.current_id = None
    return membership.current_id
