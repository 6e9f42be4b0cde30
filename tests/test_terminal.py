"""Tests for terminal module."""
from dustsweeper.catalog import default_catalog
from dustsweeper.state import ProgressionState
from dustsweeper.terminal import SimulationContext, Terminal


def _state() -> ProgressionState:
    state = ProgressionState(default_catalog())
    state.current_zone_index = 2
    state.prestige = 4
    state.achievements["first_dust"] = True
    return state


def test_time():
    ctx = SimulationContext(time_elapsed=59)
    assert not Terminal.time(60).is_met(_state(), ctx)
    ctx.time_elapsed = 60
    assert Terminal.time(60).is_met(_state(), ctx)


def test_zone():
    ctx = SimulationContext()
    assert Terminal.zone(2).is_met(_state(), ctx)
    assert not Terminal.zone(3).is_met(_state(), ctx)


def test_prestige():
    ctx = SimulationContext()
    assert Terminal.prestige(">=", 4).is_met(_state(), ctx)
    assert not Terminal.prestige(">", 4).is_met(_state(), ctx)


def test_achievement():
    ctx = SimulationContext()
    assert Terminal.achievement("first_dust").is_met(_state(), ctx)
    assert not Terminal.achievement("ten_k").is_met(_state(), ctx)


def test_stall():
    ctx = SimulationContext(time_elapsed=700, last_purchase_time=50)
    assert Terminal.stall(600).is_met(_state(), ctx)
    ctx.last_purchase_time = 200
    assert not Terminal.stall(600).is_met(_state(), ctx)


def test_composites_and_descriptions():
    ctx = SimulationContext(time_elapsed=10)
    either = Terminal.any(Terminal.time(5), Terminal.zone(7))
    both = Terminal.all(Terminal.time(5), Terminal.zone(7))
    assert either.is_met(_state(), ctx)
    assert not both.is_met(_state(), ctx)
    assert either.describe() == "time(5) OR zone(7)"
    assert both.describe() == "time(5) AND zone(7)"
    assert Terminal.prestige(">=", 3).describe() == 'prestige(">=", 3)'
