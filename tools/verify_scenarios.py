#!/usr/bin/env python3
"""Verify the bundled scenario files against their expected outcomes."""

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from exitvoice.policy.resolver import PolicyResolver
from exitvoice.scenario import ScenarioError, load_scenario, verify_scenario

CONFIG_DIR = ROOT / "config"
SCENARIO_DIR = CONFIG_DIR / "scenarios"


def main() -> int:
    resolver = PolicyResolver.from_config_dir(CONFIG_DIR)
    all_errors: list[str] = []
    paths = sorted(SCENARIO_DIR.glob("*.json"))
    for path in paths:
        try:
            scenario = load_scenario(path, resolver.membership_defaults())
        except ScenarioError as exc:
            all_errors.append(f"{path.name}: {exc}")
            continue
        all_errors.extend(verify_scenario(scenario))

    if all_errors:
        print("Scenario verification failed:")
        for err in all_errors:
            print(f"- {err}")
        return 1

    print(f"Scenario verification passed ({len(paths)} files).")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
