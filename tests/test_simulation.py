"""Tests for simulation module."""
import csv
import json

import pytest

from conspiracyengine.achievement import AchievementDef, AchievementType
from conspiracyengine.catalog import ContentCatalog
from conspiracyengine.effect import Modifier
from conspiracyengine.engine import GameEngine
from conspiracyengine.export import export_csv, export_json
from conspiracyengine.formatting import format_text_report
from conspiracyengine.generator import GeneratorDef
from conspiracyengine.metrics import MetricsCollector
from conspiracyengine.report import build_report
from conspiracyengine.requirement import Req
from conspiracyengine.simulation import DEFAULT_START_TIME, ManualClock, Simulation
from conspiracyengine.state import GameState
from conspiracyengine.strategy import (
    STRATEGY_REGISTRY,
    BestValue,
    ClickProfile,
    GreedyCheapest,
    PurchaseOption,
    income,
    income_gain,
)
from conspiracyengine.upgrade import Currency, UpgradeDef


def _simple_catalog() -> ContentCatalog:
    return ContentCatalog(
        generators=[
            GeneratorDef("string", base_cost=15, base_production=1),
            GeneratorDef("blog", base_cost=100, base_production=10),
        ],
        upgrades=[
            UpgradeDef("string_x2", cost=200, effects=[Modifier.generator("string", 2.0)],
                       requirements=[Req.owns("string", 5)]),
            UpgradeDef("foil_click", cost=1, currency=Currency.TINFOIL,
                       effects=[Modifier.click_mult(2.0)]),
        ],
        achievements=[
            AchievementDef("evidence_100", AchievementType.TOTAL_EVIDENCE, 100, tinfoil_reward=1),
        ],
    )


def _run(duration: float = 300.0, seed: int = 42, **kwargs):
    strategy = GreedyCheapest(click_profile=ClickProfile(cps=5.0))
    sim = Simulation(_simple_catalog(), strategy, duration=duration, seed=seed, **kwargs)
    return sim.run()


# ── Simulation loop ──────────────────────────────────────────────────


def test_runs_for_duration():
    report = _run()
    assert report.outcome == "Duration reached"
    assert report.total_time == pytest.approx(300.0)
    assert len(report.purchases) > 0
    assert report.generator_counts["string"] > 0
    assert report.total_clicks == 1500
    assert "evidence_100" in report.achievement_times


def test_tinfoil_upgrade_bought_once_affordable():
    report = _run()
    bought = [p for p in report.purchases if p.item_id == "foil_click"]
    assert len(bought) == 1
    assert bought[0].kind == "tinfoil_upgrade"
    assert bought[0].time >= report.achievement_times["evidence_100"]


def test_deterministic_with_seed():
    a = _run(seed=7)
    b = _run(seed=7)
    assert a.final_total_evidence == b.final_total_evidence
    assert [p.item_id for p in a.purchases] == [p.item_id for p in b.purchases]


def test_target_evidence():
    report = _run(duration=10_000, target_evidence=500)
    assert report.outcome == "Target evidence reached"
    assert report.final_total_evidence >= 500
    assert report.total_time < 10_000


def test_invalid_tick_resolution():
    with pytest.raises(ValueError):
        Simulation(_simple_catalog(), GreedyCheapest(), tick_resolution=0)


def test_tick_resolution_scales_snapshots():
    report = _run(duration=60, tick_resolution=5.0)
    assert len(report.resource_snapshots) == 12
    assert report.resource_snapshots[0].time == 5.0


def test_idle_strategy_never_buys_without_income():
    sim = Simulation(_simple_catalog(), GreedyCheapest(), duration=60, seed=1)
    report = sim.run()
    assert report.purchases == []
    assert report.final_total_evidence == 0.0


def test_purchase_options():
    sim = Simulation(_simple_catalog(), GreedyCheapest(), seed=1)
    assert sim.purchase_options() == []
    sim.engine.state.evidence = 100.0
    sim.engine.state.tinfoil = 1
    kinds = {(o.kind, o.item_id) for o in sim.purchase_options()}
    assert kinds == {
        ("generator", "string"),
        ("generator", "blog"),
        ("tinfoil_upgrade", "foil_click"),
    }


def test_manual_clock():
    clock = ManualClock()
    assert clock() == DEFAULT_START_TIME
    clock.advance(2.5)
    assert clock.now == DEFAULT_START_TIME + 2.5


# ── Strategies ───────────────────────────────────────────────────────


def test_click_profile_carries_fractions():
    profile = ClickProfile(cps=0.5)
    state = GameState()
    assert [profile.get_clicks(state, 1.0) for _ in range(4)] == [0, 1, 0, 1]


def test_click_profile_active_until():
    profile = ClickProfile(cps=10, active_until=Req.total_evidence(">=", 100))
    state = GameState()
    assert profile.get_clicks(state, 1.0) == 10
    state.total_evidence_earned = 100
    assert profile.get_clicks(state, 1.0) == 0


def test_greedy_cheapest_order():
    options = [
        PurchaseOption("generator", "blog", 100),
        PurchaseOption("tinfoil_upgrade", "b", 5),
        PurchaseOption("generator", "string", 15),
        PurchaseOption("tinfoil_upgrade", "a", 2),
    ]
    ordered = GreedyCheapest().decide_purchases(None, options)
    assert [o.item_id for o in ordered] == ["a", "b", "string", "blog"]


def _engine() -> GameEngine:
    engine = GameEngine(_simple_catalog(), clock=ManualClock())
    engine.new_game()
    return engine


def test_best_value_prefers_income_per_cost():
    engine = _engine()
    options = [
        PurchaseOption("generator", "string", 15),
        PurchaseOption("generator", "blog", 100),
    ]
    ordered = BestValue().decide_purchases(engine, options)
    assert [o.item_id for o in ordered] == ["blog", "string"]


def test_income_counts_clicks():
    engine = _engine()
    engine.state.generator_counts["blog"] = 1
    assert income(engine, 0) == pytest.approx(10.0)
    assert income(engine, 2) == pytest.approx(10.0 + 2 * (1.0 + 10.0 * 0.01))


def test_income_gain_leaves_state_untouched():
    engine = _engine()
    engine.state.generator_counts["string"] = 5
    counts = engine.state.generator_counts
    upgrades = engine.state.purchased_upgrades
    gain = income_gain(engine, PurchaseOption("upgrade", "string_x2", 200), 0)
    assert gain == pytest.approx(5.0)
    assert income_gain(engine, PurchaseOption("generator", "blog", 100), 0) == pytest.approx(10.0)
    gain = income_gain(engine, PurchaseOption("tinfoil_upgrade", "foil_click", 1), 1)
    assert gain == pytest.approx(1.0)
    assert engine.state.generator_counts is counts
    assert counts == {"string": 5}
    assert engine.state.purchased_upgrades is upgrades
    assert upgrades == set()
    assert engine.state.purchased_tinfoil_upgrades == set()


def test_describe():
    assert GreedyCheapest().describe() == "GreedyCheapest"
    assert BestValue(click_profile=ClickProfile(cps=2)).describe() == "BestValue (2 CPS)"


def test_should_prestige():
    engine = _engine()
    strategy = GreedyCheapest(prestige_mode="first_opportunity", min_tokens=3)
    assert not strategy.should_prestige(engine)
    engine.ledger.credit_evidence(1e12)
    assert strategy.should_prestige(engine)
    assert not GreedyCheapest().should_prestige(engine)


def test_registry():
    assert set(STRATEGY_REGISTRY) == {"greedy_cheapest", "best_value"}


# ── Reports ──────────────────────────────────────────────────────────


def test_build_report_gaps():
    collector = MetricsCollector()
    state = GameState()
    for t in (5.0, 15.0, 18.0):
        collector.record_purchase(state, t, "generator", "string", 15)
    report = build_report(collector, "test", "Duration reached", 60.0, final_evidence=1.0)
    assert report.purchase_gaps == [5.0, 10.0, 3.0]
    assert report.max_purchase_gap == 10.0
    assert report.mean_purchase_gap == pytest.approx(6.0)
    assert report.purchases_per_minute == pytest.approx(3.0)
    assert report.first_purchase_times == {"string": 5.0}
    assert report.final_evidence == 1.0


def test_collector_respects_interval():
    collector = MetricsCollector(snapshot_interval=10.0)
    state = GameState()
    for t in range(1, 31):
        collector.record_tick(state, float(t), 0.0)
    assert [s.time for s in collector.resource_snapshots] == [9.0, 19.0, 29.0]


def test_text_report():
    text = format_text_report(_run(duration=60))
    assert "Conspiracy Engine Simulation Report" in text
    assert "GreedyCheapest (5 CPS)" in text
    assert "Duration reached" in text
    assert "GENERATORS:" in text


def test_export_csv(tmp_path):
    report = _run(duration=60)
    base = tmp_path / "run"
    export_csv(report, base)
    with open(f"{base}_resources.csv", newline="") as f:
        rows = list(csv.reader(f))
    assert rows[0][:3] == ["time", "evidence", "total_evidence"]
    assert len(rows) == len(report.resource_snapshots) + 1
    assert (tmp_path / "run_purchases.csv").exists()
    assert (tmp_path / "run_achievements.csv").exists()


def test_export_json(tmp_path):
    report = _run(duration=60)
    path = tmp_path / "report.json"
    export_json(report, path)
    data = json.loads(path.read_text())
    assert data["outcome"] == "Duration reached"
    assert data["purchase_count"] == len(report.purchases)
    assert data["generator_counts"] == report.generator_counts


def test_plot(tmp_path):
    pytest.importorskip("matplotlib")
    import matplotlib

    matplotlib.use("Agg")
    from conspiracyengine.visualization import plot_simulation

    path = tmp_path / "plot.png"
    plot_simulation(_run(duration=60), str(path))
    assert path.exists()
