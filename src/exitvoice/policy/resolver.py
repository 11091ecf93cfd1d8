"""Policy resolver — loads and validates engine configuration.

Configuration lives in config/engine_policy.json:
- runner.max_cycles: upper bound on cycles for BatchRunner.run().
- decision_log.enabled: whether the harness attaches a DecisionLog.
- membership_defaults: values the scenario loader applies to
  memberships that omit them.

Usage:
    resolver = PolicyResolver.from_config_dir(Path("config"))
    runner = BatchRunner(engine, max_cycles=resolver.max_cycles())
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from exitvoice.models.organization import Dimension


class PolicyResolver:
    """Read-only access to validated engine policy."""

    POLICY_FILENAME = "engine_policy.json"

    def __init__(self, policy_data: dict[str, Any]) -> None:
        self._data = policy_data
        self._validate()

    @classmethod
    def from_config_dir(cls, config_dir: Path) -> PolicyResolver:
        """Load policy from a config directory.

        Raises:
            FileNotFoundError: If engine_policy.json does not exist.
            ValueError: If the policy is structurally invalid.
        """
        path = config_dir / cls.POLICY_FILENAME
        if not path.exists():
            raise FileNotFoundError(f"Engine policy not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        return cls(data)

    def _validate(self) -> None:
        if "version" not in self._data:
            raise ValueError("Engine policy missing 'version' field")

        runner = self._data.get("runner", {})
        if not isinstance(runner, dict):
            raise ValueError("Engine policy 'runner' must be a dict")
        max_cycles = runner.get("max_cycles", 100)
        if not isinstance(max_cycles, int) or isinstance(max_cycles, bool) or max_cycles < 1:
            raise ValueError(f"runner.max_cycles must be a positive int, got {max_cycles!r}")

        log_cfg = self._data.get("decision_log", {})
        if not isinstance(log_cfg, dict):
            raise ValueError("Engine policy 'decision_log' must be a dict")

        defaults = self._data.get("membership_defaults", {})
        if not isinstance(defaults, dict):
            raise ValueError("Engine policy 'membership_defaults' must be a dict")
        dims = defaults.get("dimensions", ["quality"])
        valid = {d.value for d in Dimension}
        if not dims or any(d not in valid for d in dims):
            raise ValueError(
                f"membership_defaults.dimensions must be a non-empty subset of "
                f"{sorted(valid)}, got {dims!r}"
            )

    @property
    def version(self) -> str:
        return str(self._data["version"])

    def max_cycles(self) -> int:
        return self._data.get("runner", {}).get("max_cycles", 100)

    def decision_log_enabled(self) -> bool:
        return bool(self._data.get("decision_log", {}).get("enabled", True))

    def membership_defaults(self) -> dict[str, Any]:
        """Defaults for omitted membership keys (a copy)."""
        return json.loads(json.dumps(self._data.get("membership_defaults", {})))

    def as_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "runner": {"max_cycles": self.max_cycles()},
            "decision_log": {"enabled": self.decision_log_enabled()},
            "membership_defaults": self.membership_defaults(),
        }
