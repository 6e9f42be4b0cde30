"""Tests for cli and export modules."""
import json

from dustsweeper.cli import build_parser, build_strategy, build_terminal, main
from dustsweeper.export import export_csv, export_json
from dustsweeper.persistence import JsonFileStore
from dustsweeper.session import GameSession
from dustsweeper.simulation import Simulation
from dustsweeper.strategy import STRATEGY_REGISTRY, ClickProfile, GreedyCheapest, ToolsOnly
from dustsweeper.terminal import Terminal


def test_catalog_command(capsys):
    main(["catalog"])
    out = capsys.readouterr().out
    assert "Planet A" in out
    assert "Basic Sweeper" in out
    assert "Galactic Focus" in out
    assert "First Sweep" not in out
    assert "+50 dust" in out


def test_simulate_command(capsys, tmp_path):
    json_path = tmp_path / "report.json"
    main(["simulate", "--cps", "3", "--terminal-time", "60", "--export-json", str(json_path)])
    out = capsys.readouterr().out
    assert "Simulation Report" in out
    assert "GreedyCheapest (3.0 CPS)" in out
    data = json.loads(json_path.read_text())
    assert data["total_time"] == 60.0
    assert data["pacing"]["purchase_count"] > 0


def test_status_command(capsys, tmp_path):
    path = tmp_path / "save.json"
    session = GameSession(store=JsonFileStore(path))
    session.click()
    session.save()
    main(["status", "--save", str(path)])
    out = capsys.readouterr().out
    assert "Zone: Planet A" in out
    assert "Clicks: 1" in out


def test_build_terminal():
    args = build_parser().parse_args(["simulate", "--terminal-time", "10", "--terminal-zone", "2"])
    assert build_terminal(args).describe() == "time(10.0) OR zone(2)"


def test_strategy_choices_come_from_registry():
    parser = build_parser()
    for name in STRATEGY_REGISTRY:
        assert parser.parse_args(["simulate", "--strategy", name]).strategy == name
    strategy = build_strategy("tools_only", 2.0, 3)
    assert isinstance(strategy, ToolsOnly)
    assert strategy.prestige_at == 3
    assert strategy.click_profile.clicks_per_second == 2.0


def test_export_csv(tmp_path):
    report = Simulation(
        strategy=GreedyCheapest(ClickProfile(5)),
        terminal=Terminal.time(30),
    ).run()
    base = tmp_path / "run"
    export_csv(report, base)
    purchases = (tmp_path / "run_purchases.csv").read_text().splitlines()
    assert purchases[0] == "time,kind,item_id,track,cost_paid,currency_zone"
    assert len(purchases) == len(report.purchases) + 1
    currencies = (tmp_path / "run_currencies.csv").read_text().splitlines()
    assert currencies[0] == "time,zone_index,value,rate"
    assert (tmp_path / "run_achievements.csv").exists()


def test_export_json(tmp_path):
    report = Simulation(strategy=GreedyCheapest(), terminal=Terminal.time(5)).run()
    path = tmp_path / "out.json"
    export_json(report, path)
    data = json.loads(path.read_text())
    assert data["outcome"] == "Terminal condition met"
    assert data["purchases"] == []
