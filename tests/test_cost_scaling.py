"""Tests for cost_scaling module."""
import pytest

from dustsweeper.cost_scaling import CostScaling, linear_cost, track_cost


def test_fixed():
    cs = CostScaling.fixed()
    assert cs.step(100.0) == 100.0
    assert cs.compute(100.0, 10) == 100.0


def test_exponential_rounds_up_each_step():
    cs = CostScaling.exponential(1.18)
    assert cs.step(20.0) == 24.0
    # 24 * 1.18 = 28.32
    assert cs.compute(20.0, 2) == 29.0


def test_exponential_default_rate():
    cs = CostScaling.exponential()
    assert cs.step(100.0) == 118.0


def test_compute_zero_purchases():
    cs = CostScaling.exponential()
    assert cs.compute(500.0, 0) == 500.0


def test_exponential_compounds_from_rounded_cost():
    cs = CostScaling.exponential(1.5)
    # 3 -> ceil(4.5)=5 -> ceil(7.5)=8; never rebuilt from the base
    assert cs.compute(3.0, 2) == 8.0


def test_custom():
    cs = CostScaling.custom(lambda cost: cost + 10)
    assert cs.compute(5.0, 3) == 35.0


def test_track_cost():
    assert track_cost(20, 0) == 12.0
    assert track_cost(20, 1) == 24.0
    assert track_cost(200, 2) == 360.0


def test_linear_cost():
    assert linear_cost(3, 0) == 3
    assert linear_cost(3, 2) == 9
