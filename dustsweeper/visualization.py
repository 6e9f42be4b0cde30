from __future__ import annotations

from collections import defaultdict

from dustsweeper.report import SimulationReport


def _total_balance(report: SimulationReport) -> tuple[list[float], list[float]]:
    totals: dict[float, float] = defaultdict(float)
    for snap in report.currency_snapshots:
        totals[snap.time] += snap.value
    times = sorted(totals)
    return times, [totals[t] for t in times]


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Four panels: balances, zone rates, cumulative purchases, achievement timeline.

    Requires matplotlib (the ``viz`` extra). Shows the figure when no
    *output_path* is given.
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install dustsweeper[viz]"
        )

    fig, ((ax_bal, ax_rate), (ax_buy, ax_ach)) = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f"Dust Sweeper: {report.strategy_description} ({report.outcome})", fontsize=13)

    times, totals = _total_balance(report)
    if times:
        ax_bal.plot(times, [max(v, 1e-10) for v in totals], color="tab:blue")
        ax_bal.set_yscale("log")
    for event in report.zone_unlocks:
        ax_bal.axvline(event.time, color="tab:green", linestyle="--", alpha=0.6)
        ax_bal.annotate(f"Z{event.zone_index}", (event.time, 1), fontsize=7, color="tab:green")
    for event in report.prestiges:
        ax_bal.axvline(event.time, color="tab:purple", linestyle=":", alpha=0.6)
    ax_bal.set_title("Total balance (zones, prestiges)")
    ax_bal.set_xlabel("Time (s)")

    zones = sorted({s.zone_index for s in report.currency_snapshots})
    rate_rows = []
    labels = []
    for idx in zones:
        series = report.rate_series(idx)
        if series and any(rate > 0 for _, rate in series):
            rate_rows.append([rate for _, rate in series])
            labels.append(f"zone {idx}")
    if rate_rows:
        rate_times = [t for t, _ in report.rate_series(zones[0])]
        ax_rate.stackplot(rate_times, rate_rows, labels=labels, alpha=0.8)
        ax_rate.legend(fontsize=7, loc="upper left")
    ax_rate.set_title("Per-second production by zone")
    ax_rate.set_xlabel("Time (s)")

    by_kind: dict[str, list[float]] = defaultdict(list)
    for p in report.purchases:
        by_kind[p.kind].append(p.time)
    for kind, kind_times in sorted(by_kind.items()):
        ax_buy.step(kind_times, list(range(1, len(kind_times) + 1)), where="post", label=kind)
    if by_kind:
        ax_buy.legend(fontsize=8)
    ax_buy.set_title("Cumulative purchases")
    ax_buy.set_xlabel("Time (s)")

    for row, event in enumerate(report.achievements):
        ax_ach.scatter(event.time, row, s=14, color="tab:orange")
        ax_ach.annotate(event.achievement_id, (event.time, row), fontsize=6,
                        xytext=(4, -2), textcoords="offset points")
    ax_ach.set_yticks([])
    ax_ach.set_title("Achievements")
    ax_ach.set_xlabel("Time (s)")

    for ax in (ax_bal, ax_rate, ax_buy, ax_ach):
        ax.grid(True, alpha=0.3)
    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()
