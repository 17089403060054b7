"""Tests for click module."""
import random

import pytest

from conspiracyengine.catalog import ContentCatalog
from conspiracyengine.click import ClickResolver
from conspiracyengine.config import EngineConfig
from conspiracyengine.effect import Modifier
from conspiracyengine.generator import GeneratorDef
from conspiracyengine.ledger import ResourceLedger
from conspiracyengine.pipeline import MultiplierPipeline
from conspiracyengine.state import GameState
from conspiracyengine.upgrade import UpgradeDef


class FixedRandom(random.Random):
    """random() always returns *value*; uniform() returns its lower bound."""

    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value

    def uniform(self, a: float, b: float) -> float:
        return a


def _make_catalog() -> ContentCatalog:
    return ContentCatalog(
        generators=[GeneratorDef("blog", base_cost=100, base_production=100)],
        upgrades=[
            UpgradeDef("lucky", effects=[Modifier.crit_chance(0.5)]),
            UpgradeDef("harder", effects=[Modifier.crit_damage(2.0)]),
            UpgradeDef("fast_combo", effects=[Modifier.combo_fill(2.0)]),
        ],
    )


def _make_resolver(
    rng_value: float = 0.99, config: EngineConfig | None = None
) -> tuple[ClickResolver, ResourceLedger]:
    catalog = _make_catalog()
    config = config or EngineConfig()
    pipeline = MultiplierPipeline(catalog, config)
    resolver = ClickResolver(pipeline, config, FixedRandom(rng_value))
    return resolver, ResourceLedger(GameState(), strict=True)


def test_single_click_yields_exactly_one():
    resolver, ledger = _make_resolver()
    result = resolver.resolve(ledger, now=0.0)
    assert result.power == 1.0
    assert not result.is_critical
    assert result.combo_burst is None
    assert ledger.state.evidence == 1.0
    assert ledger.state.total_clicks == 1
    assert ledger.state.today_clicks == 1


def test_click_scales_with_eps_and_external_multiplier():
    resolver, ledger = _make_resolver()
    ledger.state.generator_counts["blog"] = 2
    # (1 + 200 * 0.01) * 3
    result = resolver.resolve(ledger, now=0.0, external_multiplier=3.0)
    assert result.power == pytest.approx(9.0)


def test_golden_eye_multiplies_click():
    resolver, ledger = _make_resolver()
    ledger.state.golden_eye_active = True
    ledger.state.golden_eye_end_time = 10.0
    assert resolver.resolve(ledger, now=5.0).power == pytest.approx(5.0)


def test_no_crit_without_chance():
    resolver, ledger = _make_resolver(rng_value=0.0)
    assert not resolver.resolve(ledger, now=0.0).is_critical


def test_critical_hit():
    resolver, ledger = _make_resolver(rng_value=0.1)
    ledger.state.purchased_upgrades |= {"lucky", "harder"}
    result = resolver.resolve(ledger, now=0.0)
    assert result.is_critical
    # base 1 * crit 5 (lower bound) * damage 2
    assert result.power == pytest.approx(10.0)
    assert ledger.state.critical_clicks == 1
    assert ledger.state.today_critical_hits == 1


def test_crit_roll_misses():
    resolver, ledger = _make_resolver(rng_value=0.6)
    ledger.state.purchased_upgrades.add("lucky")
    assert not resolver.resolve(ledger, now=0.0).is_critical


class TestCombo:
    def test_burst_on_thirteenth_click(self):
        resolver, ledger = _make_resolver()
        for i in range(12):
            assert resolver.resolve(ledger, now=i * 0.1).combo_burst is None
        result = resolver.resolve(ledger, now=1.2)
        assert result.combo_burst == pytest.approx(10.0)
        s = ledger.state
        assert s.combo_meter == 0.0
        assert s.combo_clicks == 0
        assert s.today_combos == 1
        assert s.evidence == pytest.approx(13.0 + 10.0)

    def test_burst_includes_eps(self):
        resolver, ledger = _make_resolver()
        ledger.state.generator_counts["blog"] = 1
        ledger.state.combo_meter = 0.95
        result = resolver.resolve(ledger, now=0.0)
        # 10 clicks of base power + 10 seconds of EPS
        assert result.combo_burst == pytest.approx(10 * 1.0 + 10 * 100.0)

    def test_fill_multiplier(self):
        resolver, ledger = _make_resolver()
        ledger.state.purchased_upgrades.add("fast_combo")
        resolver.resolve(ledger, now=0.0)
        assert ledger.state.combo_meter == pytest.approx(0.16)

    def test_auto_clicks_skip_combo(self):
        resolver, ledger = _make_resolver()
        result = resolver.resolve(ledger, now=0.0, is_auto=True)
        assert result.power == 1.0
        assert ledger.state.combo_meter == 0.0
        assert ledger.state.combo_clicks == 0

    def test_decay_after_grace(self):
        resolver, ledger = _make_resolver()
        s = ledger.state
        s.combo_meter = 0.5
        s.combo_clicks = 6
        s.last_click_time = 10.0
        resolver.decay_combo(ledger, now=10.4, delta=1.0)
        assert s.combo_meter == 0.5
        resolver.decay_combo(ledger, now=11.0, delta=1.0)
        assert s.combo_meter == pytest.approx(0.35)
        assert s.combo_clicks == 6
        resolver.decay_combo(ledger, now=12.5, delta=1.0)
        assert s.combo_meter == pytest.approx(0.2)
        assert s.combo_clicks == 0

    def test_decay_floors_at_zero(self):
        resolver, ledger = _make_resolver()
        ledger.state.combo_meter = 0.1
        resolver.decay_combo(ledger, now=100.0, delta=5.0)
        assert ledger.state.combo_meter == 0.0
