from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

UPGRADE_TRACKS: tuple[str, ...] = ("efficiency", "speed", "capacity")


class ToolKind(Enum):
    CLICK = "click"
    PASSIVE = "passive"
    AUTO_CLICK = "autoClick"


@dataclass
class ToolDef:
    """Static definition of a purchasable tool."""

    id: str
    display_name: str = ""
    base_cost: float = 0.0
    increment: float = 0.0
    kind: ToolKind = ToolKind.CLICK
    currency_zone: int = 0

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id


def _empty_tracks() -> dict[str, int]:
    return {track: 0 for track in UPGRADE_TRACKS}


@dataclass
class ToolState:
    """Mutable runtime state for a tool."""

    cost: float = 0.0
    level: int = 0
    currency_zone: int = 0
    upgrades: dict[str, int] = field(default_factory=_empty_tracks)

    @classmethod
    def fresh(cls, tdef: ToolDef) -> ToolState:
        """Level-0 state for a tool, as at first run or after prestige."""
        return cls(cost=tdef.base_cost, level=0, currency_zone=tdef.currency_zone)

    @property
    def upgrade_levels(self) -> int:
        return sum(self.upgrades.values())


@dataclass(frozen=True)
class PurchaseOption:
    """Read-only snapshot of one thing the player could buy right now."""

    kind: str  # "tool", "upgrade" or "zone"
    id: str
    display_name: str
    cost: float
    currency_zone: int
    affordable: bool
    level: int = 0
    track: str | None = None
