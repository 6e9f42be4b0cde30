from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dustsweeper.catalog import Catalog
    from dustsweeper.report import SimulationReport
    from dustsweeper.state import ProgressionState


def format_number(val: float, decimals: int = 0) -> str:
    """Compact display form: 1.23B, 4.56M, 7.8k, else fixed decimals."""
    if val >= 1e9:
        return f"{val / 1e9:.2f}B"
    if val >= 1e6:
        return f"{val / 1e6:.2f}M"
    if val >= 1e3:
        return f"{val / 1e3:.1f}k"
    return f"{val:.{decimals}f}"


def format_state(state: ProgressionState, catalog: Catalog) -> str:
    """Format a progression snapshot for console output."""
    lines: list[str] = []
    zone = catalog.zones[state.current_zone_index]
    titles = catalog.prestige_titles
    title = titles[min(state.prestige_title_index, len(titles) - 1)] if titles else ""

    lines.append("=" * 30 + f" {catalog.config.name} " + "=" * 30)
    lines.append(f"Zone: {zone.name} ({state.current_zone_index + 1}/{len(catalog.zones)})")
    lines.append(f"Prestige: {format_number(state.prestige)} [{title}]")
    lines.append(f"Lifetime dust: {format_number(state.lifetime_dust)}")
    lines.append(f"Clicks: {state.total_clicks}")
    lines.append("")

    lines.append("RATES:")
    lines.append(f"  Per click: {format_number(state.dust_per_click, 1)}")
    lines.append(f"  Passive/sec: {format_number(state.passive_per_second, 1)}")
    lines.append(f"  Auto clicks/sec: {format_number(state.auto_clicks_per_second, 1)}")
    lines.append(f"  Total/sec: {format_number(state.total_per_second, 1)}")
    lines.append("")

    lines.append("CURRENCIES:")
    for idx, zdef in enumerate(catalog.zones):
        if idx > state.current_zone_index and not state.currency(idx):
            continue
        rate = state.currency_per_second.get(idx, 0.0)
        lines.append(
            f"  {zdef.currency:.<20s} {format_number(state.currency(idx), 1):>10s}"
            f"  (+{format_number(rate, 1)}/s)"
        )

    owned = [(tid, ts) for tid, ts in state.tools.items() if ts.level > 0]
    if owned:
        lines.append("")
        lines.append("TOOLS:")
        for tid, ts in owned:
            tdef = catalog.get_tool(tid)
            name = tdef.display_name if tdef else tid
            lines.append(f"  {name:.<24s} Lv.{ts.level}  next {format_number(ts.cost)}")

    return "\n".join(lines)


def format_text_report(report: SimulationReport) -> str:
    """Format a simulation report for console output."""
    lines: list[str] = []

    lines.append("=" * 40 + " Dust Sweeper Simulation Report " + "=" * 40)
    lines.append(f"Strategy: {report.strategy_description}")
    lines.append(f"Terminal: {report.terminal_description}")
    lines.append(f"Result: {report.outcome} at {report.total_time:.1f}s")
    lines.append("")

    if report.achievements:
        lines.append("ACHIEVEMENTS:")
        for a in report.achievements:
            lines.append(f"  * {a.achievement_id:.<30s} {a.time:.1f}s")
        lines.append("")

    lines.append("PURCHASES:")
    lines.append(f"  Total: {len(report.purchases)}")
    lines.append(f"  Rate: {report.purchases_per_minute:.1f}/min")
    lines.append(f"  Max gap: {report.max_purchase_gap:.1f}s")
    lines.append(f"  Mean gap: {report.mean_purchase_gap:.1f}s")
    if report.purchases_by_kind:
        kinds = ", ".join(f"{k} {n}" for k, n in sorted(report.purchases_by_kind.items()))
        lines.append(f"  By kind: {kinds}")
    lines.append("")

    if report.zone_unlocks:
        lines.append("ZONES:")
        for z in report.zone_unlocks:
            lines.append(f"  -> zone {z.zone_index} at {z.time:.1f}s")
        lines.append("")

    if report.prestiges:
        lines.append("PRESTIGES:")
        for p in report.prestiges:
            lines.append(f"  +{p.reward_amount} at {p.time:.1f}s (run {p.run_duration:.1f}s)")
        lines.append(f"  Rate: {report.prestige_per_hour:.2f}/h")
        lines.append("")

    lines.append(f"Final prestige points: {format_number(report.final_prestige)}")
    lines.append(f"Final lifetime dust: {format_number(report.final_lifetime_dust)}")
    return "\n".join(lines)
