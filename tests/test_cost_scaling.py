"""Tests for cost_scaling module."""
import math

import pytest

from conspiracyengine.cost_scaling import CostScaling


def test_fixed():
    cs = CostScaling.fixed()
    assert cs.compute(100.0, 0) == 100.0
    assert cs.compute(100.0, 10) == 100.0
    assert cs.bulk(100.0, 3, 4) == 400.0


def test_exponential():
    cs = CostScaling.exponential(2.0)
    assert cs.compute(100.0, 0) == 100.0
    assert cs.compute(100.0, 1) == 200.0
    assert cs.compute(100.0, 3) == 800.0


def test_exponential_default_rate():
    cs = CostScaling.exponential()
    assert cs.compute(100.0, 1) == pytest.approx(115.0)


def test_rate_below_one_rejected():
    with pytest.raises(ValueError):
        CostScaling(0.9)


def test_cost_strictly_increasing():
    cs = CostScaling.exponential(1.15)
    for owned in range(200):
        assert cs.compute(15.0, owned + 1) > cs.compute(15.0, owned)


@pytest.mark.parametrize("owned", [0, 7, 42])
def test_bulk_matches_sum_of_unit_prices(owned):
    cs = CostScaling.exponential(1.15)
    for k in range(1, 101):
        assert cs.bulk(15.0, owned, k) == pytest.approx(cs.summed(15.0, owned, k), rel=1e-9)


def test_bulk_edge_counts():
    cs = CostScaling.exponential(1.15)
    assert cs.bulk(15.0, 5, 0) == 0.0
    assert cs.bulk(15.0, 5, 1) == cs.compute(15.0, 5)
    with pytest.raises(ValueError):
        cs.bulk(15.0, 5, -1)


def test_prices_past_float_range_are_infinite():
    cs = CostScaling.exponential(1.15)
    assert cs.compute(15.0, 6000) == math.inf
    assert cs.bulk(15.0, 0, 10_000) == math.inf
    assert cs.bulk(15.0, 6000, 5) == math.inf
    assert cs.max_affordable(15.0, 6000, 1e300) == 0


class TestMaxAffordable:
    def test_too_poor(self):
        cs = CostScaling.exponential(1.15)
        assert cs.max_affordable(15.0, 0, 14.99) == 0

    def test_exact_single(self):
        cs = CostScaling.exponential(1.15)
        assert cs.max_affordable(15.0, 0, 15.0) == 1

    @pytest.mark.parametrize("budget", [15.0, 100.0, 1234.5, 1e6, 3.7e9])
    @pytest.mark.parametrize("owned", [0, 10, 55])
    def test_bounds(self, budget, owned):
        cs = CostScaling.exponential(1.15)
        n = cs.max_affordable(15.0, owned, budget)
        if n > 0:
            assert cs.bulk(15.0, owned, n) <= budget
        assert cs.bulk(15.0, owned, n + 1) > budget

    def test_fixed_rate(self):
        cs = CostScaling.fixed()
        assert cs.max_affordable(10.0, 0, 95.0) == 9

    def test_nan_budget_buys_nothing(self):
        cs = CostScaling.exponential(1.15)
        assert cs.max_affordable(15.0, 0, math.nan) == 0

    def test_infinite_budget_rejected(self):
        cs = CostScaling.exponential(1.15)
        with pytest.raises(ValueError):
            cs.max_affordable(15.0, 0, math.inf)
