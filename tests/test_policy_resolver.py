"""Tests for PolicyResolver — loading and validating engine policy."""

import json
from pathlib import Path

import pytest

from exitvoice.policy.resolver import PolicyResolver

CONFIG_DIR = Path(__file__).resolve().parents[1] / "config"


@pytest.fixture
def resolver():
    return PolicyResolver.from_config_dir(CONFIG_DIR)


def _policy(**overrides) -> dict:
    data = {
        "version": "1.0",
        "runner": {"max_cycles": 10},
        "decision_log": {"enabled": False},
        "membership_defaults": {"dimensions": ["quality", "price"]},
    }
    data.update(overrides)
    return data


class TestLoadFromConfigDir:
    def test_bundled_policy_loads(self, resolver) -> None:
        assert resolver.version == "1.0"
        assert resolver.max_cycles() == 100
        assert resolver.decision_log_enabled() is True

    def test_bundled_membership_defaults(self, resolver) -> None:
        defaults = resolver.membership_defaults()
        assert defaults["dimensions"] == ["quality"]
        assert defaults["elastic"] is False
        assert defaults["influence"] == 0

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError, match="Engine policy not found"):
            PolicyResolver.from_config_dir(tmp_path)

    def test_loads_from_custom_dir(self, tmp_path) -> None:
        (tmp_path / "engine_policy.json").write_text(json.dumps(_policy()), encoding="utf-8")
        resolver = PolicyResolver.from_config_dir(tmp_path)
        assert resolver.max_cycles() == 10
        assert resolver.decision_log_enabled() is False


class TestValidation:
    def test_missing_version(self) -> None:
        data = _policy()
        del data["version"]
        with pytest.raises(ValueError, match="version"):
            PolicyResolver(data)

    @pytest.mark.parametrize("bad", [0, -3, "ten", True, 1.5])
    def test_bad_max_cycles(self, bad) -> None:
        with pytest.raises(ValueError, match="max_cycles"):
            PolicyResolver(_policy(runner={"max_cycles": bad}))

    def test_runner_must_be_dict(self) -> None:
        with pytest.raises(ValueError, match="runner"):
            PolicyResolver(_policy(runner=[]))

    def test_empty_default_dimensions(self) -> None:
        with pytest.raises(ValueError, match="dimensions"):
            PolicyResolver(_policy(membership_defaults={"dimensions": []}))

    def test_unknown_default_dimension(self) -> None:
        with pytest.raises(ValueError, match="dimensions"):
            PolicyResolver(_policy(membership_defaults={"dimensions": ["speed"]}))

    def test_sections_optional(self) -> None:
        resolver = PolicyResolver({"version": "2"})
        assert resolver.max_cycles() == 100
        assert resolver.decision_log_enabled() is True
        assert resolver.membership_defaults() == {}


class TestAccessors:
    def test_membership_defaults_is_a_copy(self, resolver) -> None:
        resolver.membership_defaults()["elastic"] = True
        assert resolver.membership_defaults()["elastic"] is False

    def test_as_dict(self) -> None:
        resolver = PolicyResolver(_policy())
        assert resolver.as_dict() == {
            "version": "1.0",
            "runner": {"max_cycles": 10},
            "decision_log": {"enabled": False},
            "membership_defaults": {"dimensions": ["quality", "price"]},
        }
