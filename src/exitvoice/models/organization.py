"""Organization models — quality, price, and per-action costs and permissions.

An organization is described by four fields:
- quality: higher is better.
- price: higher is worse.
- cost: what it costs a member to exit, to use voice, or to enter.
- allows: whether exit and voice are permitted. Entry is always permitted.

All values are non-negative. Organizations are immutable values; the
membership arena replaces an entry when voice raises its quality.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Action(str, enum.Enum):
    """An action a member can take with respect to an organization."""
    EXIT = "exit"
    VOICE = "voice"
    ENTRY = "entry"


class Dimension(str, enum.Enum):
    """A dimension along which decline can be detected."""
    QUALITY = "quality"
    PRICE = "price"


def _require_non_negative(owner: str, **values: float) -> None:
    for name, value in values.items():
        if value < 0:
            raise ValueError(f"{owner}.{name} must be >= 0, got {value}")


@dataclass(frozen=True)
class ActionCosts:
    """Cost of each action, one field per action."""
    exit: float = 0
    voice: float = 0
    entry: float = 0

    def __post_init__(self) -> None:
        _require_non_negative(
            "ActionCosts", exit=self.exit, voice=self.voice, entry=self.entry,
        )


@dataclass(frozen=True)
class ActionPermissions:
    """Whether the organization permits exit and voice."""
    exit: bool = True
    voice: bool = True


@dataclass(frozen=True)
class Organization:
    """An organization a member belongs to, or could enter."""
    quality: float
    price: float = 0
    cost: ActionCosts = field(default_factory=ActionCosts)
    allows: ActionPermissions = field(default_factory=ActionPermissions)

    def __post_init__(self) -> None:
        _require_non_negative("Organization", quality=self.quality, price=self.price)


@dataclass(frozen=True)
class Limiters:
    """Minimum acceptable quality and maximum acceptable price."""
    quality: float = 0
    price: float = 0

    def __post_init__(self) -> None:
        _require_non_negative("Limiters", quality=self.quality, price=self.price)


@dataclass(frozen=True)
class Tolerance:
    """How far quality may fall, and price may rise, past the limiters."""
    quality: float = 0
    price: float = 0

    def __post_init__(self) -> None:
        _require_non_negative("Tolerance", quality=self.quality, price=self.price)


@dataclass(frozen=True)
class ActionBudget:
    """Maximum cost the member can afford for each action."""
    exit: float = 0
    voice: float = 0
    entry: float = 0

    def __post_init__(self) -> None:
        _require_non_negative(
            "ActionBudget", exit=self.exit, voice=self.voice, entry=self.entry,
        )
