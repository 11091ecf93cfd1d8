"""Scenario bundles — memberships described in JSON, with expected outcomes.

A scenario file looks like:

    {
      "scenario_id": "voice_monopoly",
      "description": "...",
      "memberships": [
        {
          "membership_id": "MB-1",
          "current": {"quality": 1, "price": 0,
                      "cost": {"exit": 0, "voice": 0, "entry": 0},
                      "allows": {"exit": false, "voice": true}},
          "pool": [],
          "dimensions": ["quality"],
          "limiters": {"quality": 2, "price": 0},
          "tolerance": {"quality": 0, "price": 0},
          "action_budget": {"exit": 1, "voice": 1, "entry": 1},
          "elastic": true,
          "influence": 1,
          "expected_outcomes": ["voice", "no_action"],
          "expected_final": {"current_quality": 2}
        }
      ]
    }

Keys omitted from a membership fall back to the policy's
membership_defaults. expected_outcomes lists one outcome per cycle.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from exitvoice.engine.decision_engine import DecisionEngine
from exitvoice.models.decision import Outcome
from exitvoice.models.membership import Membership
from exitvoice.models.organization import (
    ActionBudget,
    ActionCosts,
    ActionPermissions,
    Dimension,
    Limiters,
    Organization,
    Tolerance,
)


class ScenarioError(ValueError):
    """Raised when a scenario document is malformed."""


@dataclass
class Scenario:
    """A named collection of memberships with their expectations."""
    scenario_id: str
    description: str
    memberships: list[Membership] = field(default_factory=list)
    expected_outcomes: dict[str, list[Outcome]] = field(default_factory=dict)
    expected_final: dict[str, dict[str, Any]] = field(default_factory=dict)


def organization_from_dict(data: dict[str, Any]) -> Organization:
    if "quality" not in data:
        raise ScenarioError(f"organization missing 'quality': {data!r}")
    try:
        return Organization(
            quality=data["quality"],
            price=data.get("price", 0),
            cost=ActionCosts(**data.get("cost", {})),
            allows=ActionPermissions(**data.get("allows", {})),
        )
    except (TypeError, ValueError) as exc:
        raise ScenarioError(f"invalid organization {data!r}: {exc}") from exc


def membership_from_dict(
    data: dict[str, Any],
    defaults: Optional[dict[str, Any]] = None,
) -> Membership:
    """Build a Membership, filling omitted keys from defaults."""
    merged = dict(defaults or {})
    merged.update(data)
    if "current" not in merged:
        raise ScenarioError(f"membership missing 'current': {data!r}")

    try:
        return Membership.create(
            current=organization_from_dict(merged["current"]),
            pool=[organization_from_dict(o) for o in merged.get("pool", [])],
            dimensions=[Dimension(d) for d in merged.get("dimensions", ["quality"])],
            limiters=Limiters(**merged.get("limiters", {})),
            tolerance=Tolerance(**merged.get("tolerance", {})),
            action_budget=ActionBudget(**merged.get("action_budget", {})),
            elastic=bool(merged.get("elastic", False)),
            influence=merged.get("influence", 0),
            membership_id=merged.get("membership_id"),
        )
    except ScenarioError:
        raise
    except (TypeError, ValueError) as exc:
        raise ScenarioError(f"invalid membership {data!r}: {exc}") from exc


def scenario_from_dict(
    data: dict[str, Any],
    defaults: Optional[dict[str, Any]] = None,
) -> Scenario:
    if not isinstance(data, dict):
        raise ScenarioError(f"scenario must be an object, got {type(data).__name__}")
    if "scenario_id" not in data:
        raise ScenarioError("scenario missing 'scenario_id'")
    entries = data.get("memberships")
    if not isinstance(entries, list) or not entries:
        raise ScenarioError(f"{data['scenario_id']}: 'memberships' must be a non-empty list")

    scenario = Scenario(
        scenario_id=data["scenario_id"],
        description=data.get("description", ""),
    )
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ScenarioError(
                f"{scenario.scenario_id}: membership #{index + 1} must be an object, got {entry!r}"
            )
        entry = dict(entry)
        entry.setdefault("membership_id", f"{scenario.scenario_id}-{index + 1}")
        membership = membership_from_dict(entry, defaults)
        if any(m.membership_id == membership.membership_id for m in scenario.memberships):
            raise ScenarioError(
                f"{scenario.scenario_id}: duplicate membership_id {membership.membership_id}"
            )
        scenario.memberships.append(membership)

        if "expected_outcomes" in entry:
            if not isinstance(entry["expected_outcomes"], list):
                raise ScenarioError(
                    f"{membership.membership_id}: expected_outcomes must be a list"
                )
            try:
                scenario.expected_outcomes[membership.membership_id] = [
                    Outcome(o) for o in entry["expected_outcomes"]
                ]
            except (TypeError, ValueError) as exc:
                raise ScenarioError(
                    f"{membership.membership_id}: invalid expected_outcomes: {exc}"
                ) from exc
        if "expected_final" in entry:
            if not isinstance(entry["expected_final"], dict):
                raise ScenarioError(
                    f"{membership.membership_id}: expected_final must be an object"
                )
            scenario.expected_final[membership.membership_id] = dict(entry["expected_final"])
    return scenario


def load_scenario(path: Path, defaults: Optional[dict[str, Any]] = None) -> Scenario:
    """Load a scenario file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ScenarioError: If the document is malformed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Scenario not found: {path}")
    with path.open("r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as exc:
            raise ScenarioError(f"{path.name}: invalid JSON: {exc}") from exc
    return scenario_from_dict(data, defaults)


def verify_scenario(
    scenario: Scenario,
    engine: Optional[DecisionEngine] = None,
) -> list[str]:
    """Run each membership through its expected cycles and compare.

    Mutates the scenario's memberships. Returns errors (empty = pass).
    """
    engine = engine or DecisionEngine()
    errors: list[str] = []

    for membership in scenario.memberships:
        mid = membership.membership_id
        expected = scenario.expected_outcomes.get(mid, [])
        for cycle, want in enumerate(expected, start=1):
            got = engine.decide(membership, cycle=cycle)
            if got != want:
                errors.append(
                    f"{scenario.scenario_id}/{mid} cycle {cycle}: "
                    f"expected {want.value}, got {got.value}"
                )

        final = scenario.expected_final.get(mid, {})
        if "terminal" in final and membership.is_terminal != final["terminal"]:
            errors.append(
                f"{scenario.scenario_id}/{mid}: expected terminal={final['terminal']}, "
                f"got {membership.is_terminal}"
            )
        if "current_quality" in final:
            current = membership.current
            got_quality = current.quality if current is not None else None
            if got_quality != final["current_quality"]:
                errors.append(
                    f"{scenario.scenario_id}/{mid}: expected current quality "
                    f"{final['current_quality']}, got {got_quality}"
                )
        if "pool_size" in final and len(membership.pool_ids) != final["pool_size"]:
            errors.append(
                f"{scenario.scenario_id}/{mid}: expected pool size "
                f"{final['pool_size']}, got {len(membership.pool_ids)}"
            )
    return errors
