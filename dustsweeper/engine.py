from __future__ import annotations

import math

from dustsweeper.catalog import Catalog, default_catalog
from dustsweeper.cost_scaling import CostScaling, linear_cost, track_cost
from dustsweeper.errors import InsufficientFunds
from dustsweeper.pipeline import ProductionPipeline
from dustsweeper.prestige import PrestigeResult, PrestigeUpgradeDef, UpgradeFamily
from dustsweeper.state import ProgressionState
from dustsweeper.tool import UPGRADE_TRACKS, PurchaseOption, ToolDef, ToolState
from dustsweeper.zone import ZoneDef


class EconomyEngine:
    """Authoritative economy processor.

    Owns one ProgressionState. Every public operation either applies all of
    its changes or raises before touching the state.
    """

    def __init__(self, catalog: Catalog | None = None) -> None:
        catalog = catalog if catalog is not None else default_catalog()
        errors = catalog.validate()
        if errors:
            raise ValueError(
                "Invalid Catalog:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.catalog = catalog
        self.config = catalog.config
        self.state = ProgressionState(catalog)
        self.pipeline = ProductionPipeline(catalog)
        self.cost_scaling = CostScaling.exponential(self.config.tool_cost_growth)
        self.recalc_production()

    # ── Production ───────────────────────────────────────────────────

    def recalc_production(self) -> None:
        """Recompute all cached production figures from the current state."""
        self.pipeline.apply(self.state, self.pipeline.compute(self.state))

    def apply_elapsed_time(self, delta_seconds: float) -> float:
        """Credit per-second production for *delta_seconds*. Returns the gain."""
        gained = 0.0
        for zone, per_sec in list(self.state.currency_per_second.items()):
            amount = per_sec * delta_seconds
            if amount > 0:
                gained += self.add_currency(zone, amount)
        return gained

    # ── Earning ──────────────────────────────────────────────────────

    def add_currency(self, zone_index: int, amount: float) -> float:
        """Credit *amount* (before multipliers) to a zone. Returns the amount gained."""
        if not math.isfinite(amount) or amount <= 0:
            return 0.0
        gained = self.gain_for(zone_index, amount)
        st = self.state
        st.currencies[zone_index] = st.currencies.get(zone_index, 0.0) + gained
        st.dust += gained
        st.total_dust_earned += gained
        st.lifetime_dust += gained
        return gained

    def add_dust(self, amount: float) -> float:
        """Credit the active zone."""
        return self.add_currency(self.state.current_zone_index, amount)

    def handle_click(self) -> float:
        """One manual click: 1 base unit to the active zone plus tool click power."""
        gained = self.add_currency(self.state.current_zone_index, 1)
        for zone, amount in list(self.state.currency_clicks.items()):
            if amount > 0:
                gained += self.add_currency(zone, amount)
        self.state.total_clicks += 1
        return gained

    # ── Spending ─────────────────────────────────────────────────────

    def buy_tool(self, tool_id: str) -> ToolState:
        """Buy one level of a tool. Raises InsufficientFunds."""
        tdef, ts = self._tool(tool_id)
        balance = self.state.currency(ts.currency_zone)
        if balance < ts.cost:
            raise InsufficientFunds(tdef.display_name, ts.cost, balance, ts.currency_zone)

        self.state.currencies[ts.currency_zone] = balance - ts.cost
        ts.level += 1
        ts.cost = self.cost_scaling.step(ts.cost)
        self.recalc_production()
        return ts

    def upgrade_cost(self, tool_id: str, track: str) -> float:
        tdef, ts = self._tool(tool_id)
        self._check_track(track)
        return track_cost(
            tdef.base_cost, ts.upgrades.get(track, 0), self.config.upgrade_cost_factor
        )

    def buy_upgrade(self, tool_id: str, track: str) -> ToolState:
        """Buy one level of a tool's sub-upgrade track. Raises InsufficientFunds."""
        tdef, ts = self._tool(tool_id)
        cost = self.upgrade_cost(tool_id, track)
        balance = self.state.currency(ts.currency_zone)
        if balance < cost:
            raise InsufficientFunds(
                f"{tdef.display_name} {track}", cost, balance, ts.currency_zone
            )

        self.state.currencies[ts.currency_zone] = balance - cost
        ts.upgrades[track] = ts.upgrades.get(track, 0) + 1
        self.recalc_production()
        return ts

    def next_zone(self) -> ZoneDef | None:
        return self.catalog.get_zone(self.state.current_zone_index + 1)

    def unlock_zone(self) -> ZoneDef | None:
        """Advance to the next zone, paid from the active zone's balance.

        Returns the new zone, or None when already at the last zone.
        Raises InsufficientFunds.
        """
        nxt = self.next_zone()
        if nxt is None:
            return None
        current = self.state.current_zone_index
        balance = self.state.currency(current)
        if balance < nxt.cost:
            raise InsufficientFunds(nxt.name, nxt.cost, balance, current)

        self.state.currencies[current] = balance - nxt.cost
        self.state.current_zone_index = current + 1
        self.state.currencies.setdefault(current + 1, 0.0)
        return nxt

    def prestige_upgrade_cost(self, upgrade_id: str) -> int:
        pdef = self._prestige_upgrade(upgrade_id)
        return int(linear_cost(pdef.cost, self.state.prestige_upgrade_level(upgrade_id)))

    def buy_prestige_upgrade(self, upgrade_id: str) -> int:
        """Buy one level of a prestige upgrade. Returns the new level."""
        pdef = self._prestige_upgrade(upgrade_id)
        cost = self.prestige_upgrade_cost(upgrade_id)
        if self.state.prestige < cost:
            raise InsufficientFunds(pdef.display_name, cost, self.state.prestige)

        self.state.prestige -= cost
        level = self.state.prestige_upgrade_level(upgrade_id) + 1
        self.state.prestige_upgrades[upgrade_id] = level
        self.recalc_production()
        return level

    # ── Prestige ─────────────────────────────────────────────────────

    def prestige_available(self) -> int:
        """Prestige points a reset would grant right now."""
        cfg = self.config
        effective = max(0.0, self.state.lifetime_dust - cfg.prestige_runway)
        base_gain = (effective / cfg.prestige_divisor) ** cfg.prestige_exponent
        gain_mult = self.pipeline.family_multiplier(self.state, UpgradeFamily.YIELD)
        return math.floor(base_gain * gain_mult)

    def prestige_threshold(self, gain: int) -> float:
        """Lifetime dust at which the base prestige gain reaches *gain*."""
        cfg = self.config
        if gain <= 0:
            return cfg.prestige_runway
        return gain ** (1 / cfg.prestige_exponent) * cfg.prestige_divisor + cfg.prestige_runway

    def prestige_progress(self) -> float:
        """Fraction of the way to the next prestige point, in [0, 1]."""
        gain = self.prestige_available()
        current = self.prestige_threshold(gain)
        nxt = self.prestige_threshold(gain + 1)
        progress = (self.state.lifetime_dust - current) / (nxt - current)
        return max(0.0, min(1.0, progress))

    def do_prestige(self) -> PrestigeResult:
        """Reset the run in exchange for prestige points."""
        gain = self.prestige_available()
        if gain <= 0:
            return PrestigeResult(success=False, reason="Earn more dust before prestiging")

        st = self.state
        st.prestige += gain
        st.dust = 0.0
        st.currencies = {i: 0.0 for i in range(len(self.catalog.zones))}
        st.total_dust_earned = 0.0
        st.lifetime_dust = 0.0
        st.total_clicks = 0
        st.current_zone_index = 0
        st.tools = {tdef.id: ToolState.fresh(tdef) for tdef in self.catalog.tools}
        self.recalc_production()
        return PrestigeResult(success=True, reward_amount=gain)

    # ── Queries ──────────────────────────────────────────────────────

    def get_state(self) -> ProgressionState:
        """Return live reference to progression state."""
        return self.state

    def prestige_multiplier(self) -> float:
        return self.pipeline.prestige_multiplier(self.state)

    def achievement_multiplier(self) -> float:
        return self.state.achievement_multiplier or 1.0

    def prestige_title_index(self) -> int:
        """Title earned by the current prestige balance."""
        titles = self.catalog.prestige_titles
        if not titles:
            return 0
        idx = int(self.state.prestige // self.config.prestige_points_per_title)
        return max(0, min(idx, len(titles) - 1))

    def get_purchase_options(self) -> list[PurchaseOption]:
        """Every tool level, upgrade track and the next zone with current costs."""
        st = self.state
        options: list[PurchaseOption] = []
        for tdef in self.catalog.tools:
            ts = st.tools[tdef.id]
            balance = st.currency(ts.currency_zone)
            options.append(
                PurchaseOption(
                    kind="tool",
                    id=tdef.id,
                    display_name=tdef.display_name,
                    cost=ts.cost,
                    currency_zone=ts.currency_zone,
                    affordable=balance >= ts.cost,
                    level=ts.level,
                )
            )
            for track in UPGRADE_TRACKS:
                cost = self.upgrade_cost(tdef.id, track)
                options.append(
                    PurchaseOption(
                        kind="upgrade",
                        id=tdef.id,
                        display_name=f"{tdef.display_name} {track}",
                        cost=cost,
                        currency_zone=ts.currency_zone,
                        affordable=balance >= cost,
                        level=ts.upgrades.get(track, 0),
                        track=track,
                    )
                )
        nxt = self.next_zone()
        if nxt is not None:
            current = st.current_zone_index
            options.append(
                PurchaseOption(
                    kind="zone",
                    id=str(current + 1),
                    display_name=nxt.name,
                    cost=nxt.cost,
                    currency_zone=current,
                    affordable=st.currency(current) >= nxt.cost,
                    level=current + 1,
                )
            )
        return options

    def get_affordable_purchases(self) -> list[PurchaseOption]:
        return [o for o in self.get_purchase_options() if o.affordable]

    def compute_time_to_afford(self, option: PurchaseOption) -> float | None:
        """Seconds until affordable at current rates. None if never."""
        balance = self.state.currency(option.currency_zone)
        if balance >= option.cost:
            return 0.0
        rate = self.state.currency_per_second.get(option.currency_zone, 0.0)
        if rate <= 0:
            return None
        gain_per_unit = self.gain_for(option.currency_zone, 1.0)
        return (option.cost - balance) / (rate * gain_per_unit)

    def gain_for(self, zone_index: int, amount: float) -> float:
        """What add_currency credits for *amount*: all active multipliers applied."""
        zone = self.catalog.get_zone(zone_index)
        zone_bonus = zone.bonus if zone else 0.0
        zone_mult = self.pipeline.family_multiplier(self.state, UpgradeFamily.ZONE)
        return (
            amount
            * self.prestige_multiplier()
            * self.achievement_multiplier()
            * (1 + zone_bonus + (zone_mult - 1))
        )

    # ── Private helpers ──────────────────────────────────────────────

    def _tool(self, tool_id: str) -> tuple[ToolDef, ToolState]:
        tdef = self.catalog.get_tool(tool_id)
        if tdef is None:
            raise KeyError(f"Unknown tool: {tool_id!r}")
        return tdef, self.state.tools[tool_id]

    def _prestige_upgrade(self, upgrade_id: str) -> PrestigeUpgradeDef:
        pdef = self.catalog.get_prestige_upgrade(upgrade_id)
        if pdef is None:
            raise KeyError(f"Unknown prestige upgrade: {upgrade_id!r}")
        return pdef

    @staticmethod
    def _check_track(track: str) -> None:
        if track not in UPGRADE_TRACKS:
            raise KeyError(f"Unknown upgrade track: {track!r}. Expected one of {list(UPGRADE_TRACKS)}")
