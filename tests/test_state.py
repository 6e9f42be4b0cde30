"""Tests for state module."""
from dustsweeper.catalog import default_catalog
from dustsweeper.state import ProgressionState


def test_fresh_state():
    catalog = default_catalog()
    state = ProgressionState(catalog)
    assert state.dust == 0
    assert state.prestige == 0
    assert state.current_zone_index == 0
    assert state.achievement_multiplier == 1.0
    assert state.dust_per_click == 1.0
    assert state.bgm_on is False
    assert state.click_sound_on is True
    assert set(state.currencies) == set(range(len(catalog.zones)))
    assert all(v == 0.0 for v in state.currencies.values())


def test_fresh_tools_use_catalog_costs():
    catalog = default_catalog()
    state = ProgressionState(catalog)
    basic = state.tools["basic"]
    assert basic.cost == 20
    assert basic.level == 0
    assert basic.currency_zone == 0
    assert basic.upgrades == {"efficiency": 0, "speed": 0, "capacity": 0}
    assert state.tools["solarArray"].currency_zone == 1


def test_queries():
    state = ProgressionState(default_catalog())
    state.currencies[2] = 40.0
    state.tools["basic"].level = 3
    state.tools["laser"].level = 1
    state.prestige_upgrades["clickBoost"] = 2
    state.achievements["first_dust"] = True
    state.achievements["hundred_dust"] = False

    assert state.currency(2) == 40.0
    assert state.currency(99) == 0.0
    assert state.tool_level("basic") == 3
    assert state.tool_level("nope") == 0
    assert state.total_tool_levels() == 4
    assert state.prestige_upgrade_level("clickBoost") == 2
    assert state.prestige_upgrade_level("tapSurge") == 0
    assert state.has_achievement("first_dust")
    assert not state.has_achievement("hundred_dust")
    assert state.unlocked_achievements() == {"first_dust"}


def test_tool_states_are_independent():
    state = ProgressionState(default_catalog())
    state.tools["basic"].upgrades["speed"] = 4
    assert state.tools["laser"].upgrades["speed"] == 0
