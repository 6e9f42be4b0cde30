from __future__ import annotations

import argparse
import logging
import sys

from dustsweeper.catalog import default_catalog
from dustsweeper.formatting import format_state, format_text_report
from dustsweeper.simulation import Simulation
from dustsweeper.strategy import STRATEGY_REGISTRY, ClickProfile, Strategy
from dustsweeper.terminal import Terminal, TerminalCondition

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dustsweeper",
        description="Galactic Dust Sweeper: economy engine and balance simulation CLI",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    sub = parser.add_subparsers(dest="command")

    sim = sub.add_parser("simulate", help="Run a headless balance simulation")
    sim.add_argument(
        "--strategy",
        default="greedy_cheapest",
        choices=sorted(STRATEGY_REGISTRY),
        help="Strategy to use (default: greedy_cheapest)",
    )
    sim.add_argument("--cps", type=float, default=0.0, help="Clicks per second")
    sim.add_argument(
        "--prestige-at",
        type=int,
        default=None,
        help="Prestige whenever a reset would grant at least this many points",
    )
    sim.add_argument(
        "--tick-resolution", type=float, default=1.0, help="Seconds per tick"
    )
    sim.add_argument(
        "--terminal-time", type=float, default=3600, help="Max simulation time (s)"
    )
    sim.add_argument("--terminal-zone", type=int, default=None, help="Stop on reaching zone index")
    sim.add_argument("--terminal-prestige", type=int, default=None, help="Stop at this many prestige points")
    sim.add_argument("--export-csv", default=None, help="CSV export path prefix")
    sim.add_argument("--export-json", default=None, help="JSON export path")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")

    status = sub.add_parser("status", help="Show a saved game")
    status.add_argument("--save", required=True, help="JSON save file")

    sub.add_parser("catalog", help="List zones, tools, prestige upgrades and achievements")

    return parser


def build_strategy(name: str, cps: float, prestige_at: int | None) -> Strategy:
    click_profile = ClickProfile(clicks_per_second=cps) if cps > 0 else None
    return STRATEGY_REGISTRY[name](click_profile=click_profile, prestige_at=prestige_at)


def build_terminal(args: argparse.Namespace) -> TerminalCondition:
    conditions = [Terminal.time(args.terminal_time)]
    if args.terminal_zone is not None:
        conditions.append(Terminal.zone(args.terminal_zone))
    if args.terminal_prestige is not None:
        conditions.append(Terminal.prestige(">=", args.terminal_prestige))
    if len(conditions) == 1:
        return conditions[0]
    return Terminal.any(*conditions)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "simulate":
        _simulate(args)
    elif args.command == "status":
        _status(args)
    elif args.command == "catalog":
        _catalog()


def _simulate(args: argparse.Namespace) -> None:
    sim = Simulation(
        strategy=build_strategy(args.strategy, args.cps, args.prestige_at),
        terminal=build_terminal(args),
        tick_resolution=args.tick_resolution,
    )
    report = sim.run()
    print(format_text_report(report))

    if args.export_csv:
        from dustsweeper.export import export_csv
        export_csv(report, args.export_csv)
        print(f"\nCSV exported to {args.export_csv}_*.csv")

    if args.export_json:
        from dustsweeper.export import export_json
        export_json(report, args.export_json)
        print(f"\nJSON exported to {args.export_json}")

    if args.plot:
        from dustsweeper.visualization import plot_simulation
        plot_simulation(report, args.plot)
        print(f"\nPlot saved to {args.plot}")


def _status(args: argparse.Namespace) -> None:
    from dustsweeper.persistence import JsonFileStore
    from dustsweeper.session import GameSession

    session = GameSession(store=JsonFileStore(args.save))
    result = session.load()
    if result is None:
        print(f"Error: could not read save {args.save!r}")
        sys.exit(1)
    if not result.found:
        print(f"No save found in {args.save!r}")
        sys.exit(1)
    print(format_state(session.state, session.catalog))
    for notice in session.drain_notices():
        print(f"[{notice.level}] {notice.message}")


def _catalog() -> None:
    from dustsweeper.achievement import describe_reward
    from dustsweeper.formatting import format_number

    catalog = default_catalog()
    print("ZONES:")
    for i, z in enumerate(catalog.zones):
        print(f"  {i}. {z.name:.<28s} cost {format_number(z.cost):>8s}  bonus {z.bonus:.0%}")
    print("\nTOOLS:")
    for t in catalog.tools:
        print(
            f"  {t.id:<18s} {t.display_name:.<28s} {t.kind.value:<10s}"
            f" base {format_number(t.base_cost):>8s}  zone {t.currency_zone}"
        )
    print("\nPRESTIGE UPGRADES:")
    for p in catalog.prestige_upgrades:
        print(f"  {p.id:<18s} {p.display_name:.<28s} {p.cost:>4g} pts  {p.description}")
    print("\nACHIEVEMENTS:")
    for a in catalog.achievements:
        print(f"  {a.id:<22s} {a.description:<40s} {describe_reward(a.reward)}")
