from __future__ import annotations

import logging
import math

from dustsweeper.catalog import Catalog
from dustsweeper.metrics import MetricsCollector
from dustsweeper.report import SimulationReport, build_report
from dustsweeper.session import GameSession
from dustsweeper.strategy import Strategy
from dustsweeper.terminal import SimulationContext, TerminalCondition
from dustsweeper.tool import PurchaseOption

logger = logging.getLogger(__name__)

MAX_TICKS = 10_000_000


class Simulation:
    """Headless fixed-step playthrough of the economy, driven by a strategy."""

    def __init__(
        self,
        strategy: Strategy,
        terminal: TerminalCondition,
        tick_resolution: float = 1.0,
        catalog: Catalog | None = None,
    ) -> None:
        if tick_resolution <= 0:
            raise ValueError("tick_resolution must be positive")
        self.strategy = strategy
        self.terminal = terminal
        self.tick_resolution = tick_resolution

        self.context = SimulationContext()
        # Session time is simulated time, so saves and offline math stay deterministic
        self.session = GameSession(catalog, clock=lambda: self.context.time_elapsed)
        self.collector = MetricsCollector(snapshot_interval=tick_resolution)
        self._run_start = 0.0

    @property
    def engine(self):
        return self.session.engine

    def run(self) -> SimulationReport:
        state = self.session.state
        achievements_seen: set[str] = set(state.unlocked_achievements())
        tick_count = 0
        logger.info(
            "Simulation started: %s until %s",
            self.strategy.describe(),
            self.terminal.describe(),
        )

        while not self.terminal.is_met(self.session.state, self.context):
            tick_count += 1
            if tick_count > MAX_TICKS:
                break
            state = self.session.state

            # 1. Advance time
            self.context.time_elapsed += self.tick_resolution
            self.session.tick(self.tick_resolution)
            state.last_update = self.session.now_ms()

            # 2. Process clicks
            for _ in range(self.strategy.get_clicks(state, self.tick_resolution)):
                self.session.click()

            # 3. Evaluate purchases
            affordable = self.engine.get_affordable_purchases()
            for option in self.strategy.decide_purchases(state, affordable):
                if self._purchase(option):
                    self.context.last_purchase_time = self.context.time_elapsed
                    self.context.total_purchases += 1

            # 4. Evaluate prestige
            if self.strategy.should_prestige(state, self.engine.prestige_available()):
                result = self.session.do_prestige()
                if result.success:
                    now = self.context.time_elapsed
                    self.collector.record_prestige(
                        now, result.reward_amount, now - self._run_start
                    )
                    self._run_start = now
                    self.context.prestige_count += 1

            # 5. Check for new achievements
            for aid in sorted(state.unlocked_achievements() - achievements_seen):
                achievements_seen.add(aid)
                self.collector.record_achievement(self.context.time_elapsed, aid)

            # 6. Record metrics
            self.collector.record_tick(state, self.context.time_elapsed)
            self.session.drain_notices()

            # Safety: NaN/Inf detection
            for value in state.currencies.values():
                if math.isnan(value) or math.isinf(value):
                    logger.error("Non-finite balance at %.1fs", self.context.time_elapsed)
                    return self._build_report("Aborted: NaN/Inf detected")

        outcome = (
            "Terminal condition met"
            if self.terminal.is_met(self.session.state, self.context)
            else "Max ticks reached"
        )
        logger.info("Simulation finished: %s at %.1fs", outcome, self.context.time_elapsed)
        return self._build_report(outcome)

    def _purchase(self, option: PurchaseOption) -> bool:
        now = self.context.time_elapsed
        if option.kind == "tool":
            ok = self.session.buy_tool(option.id)
        elif option.kind == "upgrade":
            ok = self.session.buy_upgrade(option.id, option.track)
        elif option.kind == "zone":
            ok = self.session.unlock_zone()
            if ok:
                self.collector.record_zone_unlock(now, self.session.state.current_zone_index)
        else:
            raise ValueError(f"Unknown purchase kind: {option.kind!r}")
        if ok:
            self.collector.record_purchase(
                now, option.kind, option.id, option.cost, option.currency_zone, option.track
            )
        return ok

    def _build_report(self, outcome: str) -> SimulationReport:
        state = self.session.state
        return build_report(
            collector=self.collector,
            strategy_description=self.strategy.describe(),
            terminal_description=self.terminal.describe(),
            outcome=outcome,
            total_time=self.context.time_elapsed,
            final_prestige=state.prestige,
            final_lifetime_dust=state.lifetime_dust,
            final_zone_index=state.current_zone_index,
        )
