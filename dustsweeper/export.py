from __future__ import annotations

import csv
import json
from dataclasses import asdict
from pathlib import Path
from typing import Iterable

from dustsweeper.report import SimulationReport


def _write_csv(path: str, header: list[str], rows: Iterable[list]) -> None:
    with open(path, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)


def export_csv(report: SimulationReport, path: str | Path) -> None:
    """Write ``{path}_currencies.csv``, ``{path}_purchases.csv`` and ``{path}_achievements.csv``."""
    base = str(path)
    _write_csv(
        f"{base}_currencies.csv",
        ["time", "zone_index", "value", "rate"],
        ([s.time, s.zone_index, s.value, s.rate] for s in report.currency_snapshots),
    )
    _write_csv(
        f"{base}_purchases.csv",
        ["time", "kind", "item_id", "track", "cost_paid", "currency_zone"],
        (
            [p.time, p.kind, p.item_id, p.track or "", p.cost_paid, p.currency_zone]
            for p in report.purchases
        ),
    )
    _write_csv(
        f"{base}_achievements.csv",
        ["time", "achievement_id"],
        ([a.time, a.achievement_id] for a in report.achievements),
    )


def export_json(report: SimulationReport, path: str | Path) -> None:
    """Summary figures plus every discrete event; snapshots stay in the CSV export."""
    data = {
        "strategy": report.strategy_description,
        "terminal": report.terminal_description,
        "outcome": report.outcome,
        "total_time": report.total_time,
        "final": {
            "prestige": report.final_prestige,
            "lifetime_dust": report.final_lifetime_dust,
            "zone_index": report.final_zone_index,
        },
        "pacing": {
            "purchase_count": len(report.purchases),
            "purchases_per_minute": report.purchases_per_minute,
            "max_purchase_gap": report.max_purchase_gap,
            "mean_purchase_gap": report.mean_purchase_gap,
            "purchases_by_kind": report.purchases_by_kind,
            "prestige_per_hour": report.prestige_per_hour,
            "achievement_times": report.achievement_times,
            "zone_times": {str(z): t for z, t in report.zone_times.items()},
        },
        "zone_unlocks": [asdict(z) for z in report.zone_unlocks],
        "prestiges": [asdict(p) for p in report.prestiges],
        "purchases": [asdict(p) for p in report.purchases],
    }
    with open(str(path), "w") as f:
        json.dump(data, f, indent=2)
