"""Tests for metrics and report modules."""
import pytest

from dustsweeper.catalog import default_catalog
from dustsweeper.metrics import MetricsCollector
from dustsweeper.report import build_report
from dustsweeper.state import ProgressionState


def test_snapshot_interval():
    state = ProgressionState(default_catalog())
    collector = MetricsCollector(snapshot_interval=10.0)
    for t in range(0, 31):
        collector.record_tick(state, float(t))
    times = sorted({s.time for s in collector.currency_snapshots})
    assert times == [0.0, 10.0, 20.0, 30.0]


def test_build_report_purchase_gaps():
    collector = MetricsCollector()
    collector.record_purchase(2.0, "tool", "basic", 20, 0)
    collector.record_purchase(5.0, "upgrade", "basic", 12, 0, track="speed")
    collector.record_purchase(9.0, "zone", "1", 1000, 0)
    report = build_report(collector, "s", "t", "done", total_time=60.0)
    assert report.purchase_gaps == [2.0, 3.0, 4.0]
    assert report.max_purchase_gap == 4.0
    assert report.mean_purchase_gap == pytest.approx(3.0)
    assert report.purchases_per_minute == pytest.approx(3.0)


def test_build_report_empty():
    report = build_report(MetricsCollector(), "s", "t", "done", total_time=0.0)
    assert report.purchase_gaps == []
    assert report.max_purchase_gap == 0.0
    assert report.purchases_per_minute == 0.0


def test_achievement_and_event_records():
    collector = MetricsCollector()
    collector.record_achievement(1.0, "first_dust")
    collector.record_zone_unlock(40.0, 1)
    collector.record_prestige(90.0, 2, 90.0)
    report = build_report(
        collector, "s", "t", "done", 100.0,
        final_prestige=2, final_lifetime_dust=10.0, final_zone_index=0,
    )
    assert report.achievement_time("first_dust") == 1.0
    assert report.achievement_time("ten_k") is None
    assert report.zone_unlocks[0].zone_index == 1
    assert report.prestiges[0].reward_amount == 2
    assert report.final_prestige == 2


def test_zone_times_and_kind_counts():
    collector = MetricsCollector()
    collector.record_zone_unlock(40.0, 1)
    collector.record_zone_unlock(90.0, 2)
    collector.record_purchase(40.0, "zone", "1", 1000, 0)
    collector.record_purchase(50.0, "tool", "basic", 20, 0)
    collector.record_purchase(60.0, "tool", "laser", 200, 0)
    collector.record_prestige(1800.0, 3, 1800.0)
    report = build_report(collector, "s", "t", "done", total_time=3600.0)
    assert report.zone_time(1) == 40.0
    assert report.zone_time(5) is None
    assert report.purchases_by_kind == {"zone": 1, "tool": 2}
    assert report.prestige_per_hour == pytest.approx(3.0)
