from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from dustsweeper.prestige import UpgradeFamily
from dustsweeper.tool import ToolKind

if TYPE_CHECKING:
    from dustsweeper.catalog import Catalog
    from dustsweeper.state import ProgressionState


@dataclass(frozen=True)
class ProductionSnapshot:
    """Derived production figures for one state."""

    dust_per_click: float = 1.0
    passive_per_second: float = 0.0
    auto_clicks_per_second: float = 0.0
    total_per_second: float = 0.0
    currency_per_second: dict[int, float] = field(default_factory=dict)
    currency_clicks: dict[int, float] = field(default_factory=dict)


def _add_contribution(
    target: dict[int, float], zone: int, active_zone: int, value: float
) -> None:
    # Output counts toward its own zone and is mirrored into the active zone.
    if not math.isfinite(value) or value <= 0:
        return
    target[zone] = target.get(zone, 0.0) + value
    if zone != active_zone:
        target[active_zone] = target.get(active_zone, 0.0) + value


class ProductionPipeline:
    """Computes production figures from tool levels and prestige upgrades."""

    def __init__(self, catalog: Catalog) -> None:
        self.catalog = catalog

    def family_multiplier(self, state: ProgressionState, family: UpgradeFamily) -> float:
        """Product of (1 + level * effect) over a prestige upgrade family."""
        mult = 1.0
        for pdef in self.catalog.family(family):
            mult *= 1 + state.prestige_upgrade_level(pdef.id) * pdef.effect
        return mult

    def prestige_multiplier(self, state: ProgressionState) -> float:
        """Global gain multiplier from prestige points and the global shop family."""
        p = state.prestige
        base = 1 + p * 0.12
        bonus = math.sqrt(max(p, 0)) * 0.05
        return (base + bonus) * self.family_multiplier(state, UpgradeFamily.GLOBAL)

    def tool_output(self, state: ProgressionState, tool_id: str) -> float:
        tdef = self.catalog.get_tool(tool_id)
        ts = state.tools.get(tool_id)
        if tdef is None or ts is None:
            return 0.0
        bonus = self.catalog.config.upgrade_bonus_per_level
        return ts.level * tdef.increment * (1 + ts.upgrade_levels * bonus)

    def compute(self, state: ProgressionState) -> ProductionSnapshot:
        """Recompute every derived production figure. Pure: reads state only."""
        active = state.current_zone_index

        dpc = 1.0
        passive = 0.0
        auto_clicks = 0.0
        zone_passive: dict[int, float] = {}
        zone_auto: dict[int, float] = {}
        zone_click: dict[int, float] = {}

        for tdef in self.catalog.tools:
            ts = state.tools.get(tdef.id)
            if ts is None:
                continue
            output = self.tool_output(state, tdef.id)
            zone = ts.currency_zone
            if tdef.kind is ToolKind.CLICK:
                dpc += output
                _add_contribution(zone_click, zone, active, output)
            elif tdef.kind is ToolKind.PASSIVE:
                passive += output
                _add_contribution(zone_passive, zone, active, output)
            elif tdef.kind is ToolKind.AUTO_CLICK:
                auto_clicks += output
                _add_contribution(zone_auto, zone, active, output)

        click_mult = self.family_multiplier(state, UpgradeFamily.CLICK)
        passive_mult = self.family_multiplier(state, UpgradeFamily.PASSIVE)
        auto_mult = self.family_multiplier(state, UpgradeFamily.AUTO)
        global_mult = self.family_multiplier(state, UpgradeFamily.GLOBAL)

        # Kind multiplier first, then global.
        dust_per_click = dpc * click_mult * global_mult
        passive_per_second = passive * passive_mult * global_mult
        auto_per_second = auto_clicks * auto_mult * global_mult

        # Per-zone figures use the raw click yield; the global multiplier
        # is applied later when the currency is credited.
        per_zone: dict[int, float] = {}
        for zone in list(zone_passive) + [z for z in zone_auto if z not in zone_passive]:
            per_zone[zone] = (
                zone_passive.get(zone, 0.0) * passive_mult
                + zone_auto.get(zone, 0.0) * dpc * auto_mult
            )

        return ProductionSnapshot(
            dust_per_click=dust_per_click,
            passive_per_second=passive_per_second,
            auto_clicks_per_second=auto_per_second,
            total_per_second=passive_per_second + auto_per_second * dust_per_click,
            currency_per_second=per_zone,
            currency_clicks=zone_click,
        )

    def apply(self, state: ProgressionState, snapshot: ProductionSnapshot) -> None:
        """Write a snapshot's figures into the state's cached fields."""
        state.dust_per_click = snapshot.dust_per_click
        state.passive_per_second = snapshot.passive_per_second
        state.auto_clicks_per_second = snapshot.auto_clicks_per_second
        state.total_per_second = snapshot.total_per_second
        state.currency_per_second = dict(snapshot.currency_per_second)
        state.currency_clicks = dict(snapshot.currency_clicks)
