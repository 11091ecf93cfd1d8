"""exitvoice CLI — thin harness around the decision engine.

Usage:
    python -m exitvoice.cli show-policy
    python -m exitvoice.cli run --scenario config/scenarios/elastic_exit.json
    python -m exitvoice.cli run --scenario path/to/scenario.json --cycles 5
    python -m exitvoice.cli verify
    python -m exitvoice.cli verify --scenario-dir path/to/scenarios

The config directory is taken from --config, else EXITVOICE_CONFIG_DIR
(a .env file is honoured), else the repository's config/ directory.
"""

from __future__ import annotations

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from exitvoice.audit.decision_log import DecisionLog
from exitvoice.engine.decision_engine import DecisionEngine
from exitvoice.policy.resolver import PolicyResolver
from exitvoice.runner import BatchRunner
from exitvoice.scenario import ScenarioError, load_scenario, verify_scenario


DEFAULT_CONFIG = Path(__file__).resolve().parents[2] / "config"
CONFIG_ENV_VAR = "EXITVOICE_CONFIG_DIR"

logger = logging.getLogger(__name__)


def _config_dir(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env_dir = os.getenv(CONFIG_ENV_VAR)
    if env_dir:
        return Path(env_dir)
    return DEFAULT_CONFIG


def _load_policy(config_dir: Path) -> Optional[PolicyResolver]:
    try:
        return PolicyResolver.from_config_dir(config_dir)
    except (FileNotFoundError, ValueError) as exc:
        print(f"Failed: {exc}", file=sys.stderr)
        return None


def _make_engine(resolver: PolicyResolver) -> DecisionEngine:
    log = DecisionLog() if resolver.decision_log_enabled() else None
    return DecisionEngine(decision_log=log)


def cmd_show_policy(args: argparse.Namespace) -> int:
    resolver = _load_policy(_config_dir(args))
    if resolver is None:
        return 1
    print(json.dumps(resolver.as_dict(), indent=2))
    return 0


def cmd_run(args: argparse.Namespace) -> int:
    resolver = _load_policy(_config_dir(args))
    if resolver is None:
        return 1
    if args.cycles is not None and args.cycles < 1:
        print(f"Failed: --cycles must be >= 1, got {args.cycles}", file=sys.stderr)
        return 1
    try:
        scenario = load_scenario(args.scenario, resolver.membership_defaults())
    except (FileNotFoundError, ScenarioError) as exc:
        print(f"Failed: {exc}", file=sys.stderr)
        return 1

    engine = _make_engine(resolver)
    runner = BatchRunner(engine, max_cycles=resolver.max_cycles())
    reports = runner.run(scenario.memberships, max_cycles=args.cycles)

    output = {
        "scenario_id": scenario.scenario_id,
        "cycles": [
            {
                "cycle": report.cycle,
                "outcomes": {
                    d.membership_id: d.outcome.value for d in report.decisions
                },
            }
            for report in reports
        ],
        "final": {
            m.membership_id: {
                "state": m.state.value,
                "current_quality": m.current.quality if m.current is not None else None,
                "pool_size": len(m.pool_ids),
            }
            for m in scenario.memberships
        },
    }
    if engine.decision_log is not None:
        output["decisions_logged"] = engine.decision_log.count
    print(json.dumps(output, indent=2))
    return 0


def cmd_verify(args: argparse.Namespace) -> int:
    config_dir = _config_dir(args)
    resolver = _load_policy(config_dir)
    if resolver is None:
        return 1
    scenario_dir = args.scenario_dir or (config_dir / "scenarios")
    paths = sorted(scenario_dir.glob("*.json"))
    if not paths:
        print(f"Failed: no scenarios found in {scenario_dir}", file=sys.stderr)
        return 1

    all_errors: list[str] = []
    for path in paths:
        try:
            scenario = load_scenario(path, resolver.membership_defaults())
        except ScenarioError as exc:
            all_errors.append(f"{path.name}: {exc}")
            continue
        errors = verify_scenario(scenario, _make_engine(resolver))
        logger.info("%s: %s", scenario.scenario_id, "ok" if not errors else "FAILED")
        all_errors.extend(errors)

    if all_errors:
        print(f"Failed: {'; '.join(all_errors)}", file=sys.stderr)
        return 1
    print(f"Verified {len(paths)} scenario(s).")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exitvoice",
        description="Exit–voice decision engine CLI",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help=f"Path to config directory (default: ${CONFIG_ENV_VAR} or config/)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log every decision",
    )
    sub = parser.add_subparsers(dest="command")

    # show-policy
    sub.add_parser("show-policy", help="Print the resolved engine policy")

    # run
    p_run = sub.add_parser("run", help="Run a scenario until stable")
    p_run.add_argument("--scenario", type=Path, required=True, help="Scenario JSON file")
    p_run.add_argument(
        "--cycles", type=int, default=None,
        help="Maximum cycles (default: runner.max_cycles from policy)",
    )

    # verify
    p_verify = sub.add_parser("verify", help="Verify scenario expectations")
    p_verify.add_argument(
        "--scenario-dir", type=Path, default=None,
        help="Directory of scenario files (default: <config>/scenarios)",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "show-policy": cmd_show_policy,
        "run": cmd_run,
        "verify": cmd_verify,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    return handler(args)


if __name__ == "__main__":
    raise SystemExit(main())
