from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UpgradeFamily(Enum):
    """Which production figure a prestige upgrade multiplies."""

    CLICK = "click"
    PASSIVE = "passive"
    AUTO = "auto"
    GLOBAL = "global"
    ZONE = "zone"
    YIELD = "yield"


@dataclass(frozen=True)
class PrestigeUpgradeDef:
    """A permanent upgrade bought with prestige points.

    Each level adds ``effect`` to the upgrade's factor; the family multiplier
    is the product of ``1 + level * effect`` over the family's members.
    Level *n* costs ``cost * (n + 1)`` points.
    """

    id: str
    display_name: str
    cost: float
    effect: float
    family: UpgradeFamily
    description: str = ""


@dataclass(frozen=True)
class PrestigeResult:
    """Outcome of a prestige attempt."""

    success: bool
    reward_amount: int = 0
    reason: str = ""
