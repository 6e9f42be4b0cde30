"""Tests for pipeline module."""
import pytest

from dustsweeper.catalog import default_catalog
from dustsweeper.pipeline import ProductionPipeline
from dustsweeper.prestige import UpgradeFamily
from dustsweeper.state import ProgressionState


def _setup() -> tuple[ProductionPipeline, ProgressionState]:
    catalog = default_catalog()
    return ProductionPipeline(catalog), ProgressionState(catalog)


def _recalc(pipeline: ProductionPipeline, state: ProgressionState) -> None:
    pipeline.apply(state, pipeline.compute(state))


def test_fresh_state_has_base_click_only():
    pipeline, state = _setup()
    snap = pipeline.compute(state)
    assert snap.dust_per_click == 1.0
    assert snap.passive_per_second == 0.0
    assert snap.total_per_second == 0.0
    assert snap.currency_per_second == {}
    assert snap.currency_clicks == {}


def test_click_tools_add_to_click_power():
    pipeline, state = _setup()
    state.tools["basic"].level = 3
    _recalc(pipeline, state)
    assert state.dust_per_click == 4.0
    assert state.currency_clicks == {0: 3.0}


def test_upgrade_tracks_boost_output():
    pipeline, state = _setup()
    state.tools["basic"].level = 2
    state.tools["basic"].upgrades["efficiency"] = 1
    state.tools["basic"].upgrades["speed"] = 1
    assert pipeline.tool_output(state, "basic") == pytest.approx(2.48)
    assert pipeline.tool_output(state, "unknown") == 0.0


def test_passive_output_mirrors_into_active_zone():
    pipeline, state = _setup()
    state.tools["solarArray"].level = 1
    _recalc(pipeline, state)
    assert state.currency_per_second == {1: 150.0, 0: 150.0}
    assert state.passive_per_second == 150.0
    assert state.total_per_second == 150.0


def test_no_mirroring_when_tool_zone_is_active():
    pipeline, state = _setup()
    state.current_zone_index = 1
    state.tools["solarArray"].level = 1
    _recalc(pipeline, state)
    assert state.currency_per_second == {1: 150.0}


def test_auto_clicks_use_click_yield():
    pipeline, state = _setup()
    state.tools["autoClicker"].level = 2
    state.tools["basic"].level = 1
    _recalc(pipeline, state)
    assert state.auto_clicks_per_second == 2.0
    assert state.dust_per_click == 2.0
    assert state.currency_per_second == {0: 4.0}
    assert state.total_per_second == 4.0


def test_family_multiplier_is_product():
    pipeline, state = _setup()
    state.prestige_upgrades["clickBoost"] = 2
    state.prestige_upgrades["tapSurge"] = 1
    mult = pipeline.family_multiplier(state, UpgradeFamily.CLICK)
    assert mult == pytest.approx(1.3 * 1.18)
    assert pipeline.family_multiplier(state, UpgradeFamily.PASSIVE) == 1.0


def test_prestige_multiplier():
    pipeline, state = _setup()
    assert pipeline.prestige_multiplier(state) == 1.0
    state.prestige = 4
    assert pipeline.prestige_multiplier(state) == pytest.approx(1.58)
    state.prestige_upgrades["globalBoost"] = 1
    state.prestige_upgrades["macroEconomy"] = 1
    assert pipeline.prestige_multiplier(state) == pytest.approx(1.58 * 1.1 * 1.08)


def test_global_family_scales_click_power():
    pipeline, state = _setup()
    state.prestige_upgrades["globalBoost"] = 2
    _recalc(pipeline, state)
    assert state.dust_per_click == pytest.approx(1.2)


def test_compute_does_not_mutate_state():
    pipeline, state = _setup()
    state.tools["solarArray"].level = 1
    snap = pipeline.compute(state)
    assert snap.passive_per_second == 150.0
    assert state.passive_per_second == 0.0
    assert state.currency_per_second == {}


def test_recalc_is_idempotent():
    pipeline, state = _setup()
    state.tools["autoClicker"].level = 1
    state.tools["solarArray"].level = 2
    _recalc(pipeline, state)
    first = dict(state.currency_per_second)
    _recalc(pipeline, state)
    assert state.currency_per_second == first
