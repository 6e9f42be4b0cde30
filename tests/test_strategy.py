"""Tests for strategy module."""
from dustsweeper.catalog import default_catalog
from dustsweeper.requirement import Req
from dustsweeper.state import ProgressionState
from dustsweeper.strategy import ClickProfile, CustomStrategy, GreedyCheapest, ToolsOnly
from dustsweeper.tool import PurchaseOption


def _option(kind: str, id: str, cost: float, track: str | None = None) -> PurchaseOption:
    return PurchaseOption(kind, id, id, cost, 0, True, track=track)


_OPTIONS = [
    _option("tool", "laser", 200),
    _option("upgrade", "basic", 12, "speed"),
    _option("zone", "1", 1000),
    _option("tool", "basic", 20),
]


def _state() -> ProgressionState:
    return ProgressionState(default_catalog())


def test_click_profile():
    profile = ClickProfile(clicks_per_second=2.5)
    assert profile.get_clicks(_state(), 1.0) == 2
    assert profile.get_clicks(_state(), 2.0) == 5


def test_click_profile_active_until():
    profile = ClickProfile(clicks_per_second=10, active_until=Req.prestige(">=", 1))
    state = _state()
    assert profile.get_clicks(state, 1.0) == 10
    state.prestige = 1
    assert profile.get_clicks(state, 1.0) == 0


def test_greedy_cheapest_orders_by_cost():
    picks = GreedyCheapest().decide_purchases(_state(), _OPTIONS)
    assert [p.cost for p in picks] == [12, 20, 200, 1000]


def test_greedy_cheapest_filters():
    strategy = GreedyCheapest(include_upgrades=False, unlock_zones=False)
    picks = strategy.decide_purchases(_state(), _OPTIONS)
    assert [p.id for p in picks] == ["basic", "laser"]


def test_tools_only():
    picks = ToolsOnly().decide_purchases(_state(), _OPTIONS)
    assert all(p.kind != "upgrade" for p in picks)
    assert any(p.kind == "zone" for p in picks)


def test_greedy_prestige_threshold():
    assert not GreedyCheapest().should_prestige(_state(), 100)
    strategy = GreedyCheapest(prestige_at=3)
    assert not strategy.should_prestige(_state(), 2)
    assert strategy.should_prestige(_state(), 3)


def test_greedy_clicks():
    assert GreedyCheapest().get_clicks(_state(), 1.0) == 0
    assert GreedyCheapest(ClickProfile(4)).get_clicks(_state(), 1.0) == 4


def test_describe():
    assert GreedyCheapest().describe() == "GreedyCheapest"
    assert GreedyCheapest(ClickProfile(5), prestige_at=2).describe() == "GreedyCheapest (5 CPS) prestige@2"
    assert ToolsOnly(ClickProfile(5)).describe() == "ToolsOnly (5 CPS)"


def test_custom_strategy_defaults():
    strategy = CustomStrategy()
    assert strategy.decide_purchases(_state(), _OPTIONS) == []
    assert strategy.get_clicks(_state(), 1.0) == 0
    assert not strategy.should_prestige(_state(), 10)
    assert strategy.describe() == "Custom"


def test_custom_strategy_callables():
    strategy = CustomStrategy(
        decide_fn=lambda state, options: options[:1],
        clicks_fn=lambda state, duration: 7,
        prestige_fn=lambda state, available: True,
        name="Mine",
    )
    assert strategy.decide_purchases(_state(), _OPTIONS) == _OPTIONS[:1]
    assert strategy.get_clicks(_state(), 1.0) == 7
    assert strategy.should_prestige(_state(), 0)
