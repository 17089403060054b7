"""Tests for quest module."""
import random

import pytest

from conspiracyengine.catalog import ContentCatalog
from conspiracyengine.effect import Modifier
from conspiracyengine.generator import GeneratorDef
from conspiracyengine.ledger import ResourceLedger
from conspiracyengine.pipeline import MultiplierPipeline
from conspiracyengine.quest import QuestDef, QuestRisk, QuestScheduler, QuestStatus
from conspiracyengine.requirement import Req
from conspiracyengine.state import GameState
from conspiracyengine.upgrade import MatrixUpgradeDef, SkillDef, UpgradeDef


class FixedRandom(random.Random):
    def __init__(self, value: float) -> None:
        super().__init__(0)
        self.value = value

    def random(self) -> float:
        return self.value


def _make_catalog() -> ContentCatalog:
    return ContentCatalog(
        generators=[GeneratorDef("blog", base_cost=100, base_production=10, believer_bonus=1)],
        quests=[
            QuestDef("recon", risk=QuestRisk.LOW, believers_required=20, duration_seconds=120,
                     success_chance=0.9, evidence_multiplier=100, tinfoil_reward=2,
                     believer_reward=10),
            QuestDef("extract", risk=QuestRisk.MEDIUM, believers_required=50,
                     duration_seconds=300, success_chance=0.7, evidence_reward=500,
                     evidence_multiplier=0, tinfoil_reward=12),
            QuestDef("raid", risk=QuestRisk.HIGH, believers_required=100, duration_seconds=600,
                     success_chance=0.38, evidence_multiplier=8000, tinfoil_reward=150),
            QuestDef("locked", believers_required=1, requirements=[Req.owns("blog", 50)]),
        ],
        upgrades=[
            UpgradeDef("luck", effects=[Modifier.quest_success(0.5)]),
            UpgradeDef("curse", effects=[Modifier.quest_success(-2.0)]),
            UpgradeDef("fast", effects=[Modifier.quest_duration(0.5)]),
            UpgradeDef("rich", effects=[Modifier.quest_reward(2.0)]),
        ],
        skills=[SkillDef("mind_control", effects=[Modifier.quest_always_succeeds()])],
        matrix_upgrades=[MatrixUpgradeDef("oracle", effects=[Modifier.protect_believers()])],
    )


def _make_scheduler(
    rng_value: float = 0.0, believers: float = 1000.0
) -> tuple[QuestScheduler, ResourceLedger]:
    catalog = _make_catalog()
    pipeline = MultiplierPipeline(catalog)
    scheduler = QuestScheduler(catalog, pipeline, rng=FixedRandom(rng_value))
    ledger = ResourceLedger(GameState(), strict=True)
    ledger.set_recruited_believers(believers)
    return scheduler, ledger


def test_start_reserves_believers():
    scheduler, ledger = _make_scheduler()
    assert scheduler.start(ledger, "recon", now=1000.0)
    s = ledger.state
    assert s.available_believers == 980.0
    assert s.believers == 1000.0
    assert len(s.active_quests) == 1
    assert s.active_quests[0].end_time == 1120.0
    assert scheduler.status(s, "recon") is QuestStatus.RUNNING


def test_start_rejections_do_not_mutate():
    scheduler, ledger = _make_scheduler(believers=30.0)
    assert not scheduler.start(ledger, "extract", now=0.0)
    assert not scheduler.start(ledger, "unknown", now=0.0)
    assert not scheduler.start(ledger, "locked", now=0.0)
    assert ledger.state.available_believers == 30.0
    assert ledger.state.active_quests == []


def test_same_quest_cannot_run_twice():
    scheduler, ledger = _make_scheduler()
    assert scheduler.start(ledger, "recon", now=0.0)
    assert not scheduler.start(ledger, "recon", now=1.0)


def test_not_resolved_before_deadline():
    scheduler, ledger = _make_scheduler()
    scheduler.start(ledger, "recon", now=0.0)
    assert scheduler.resolve_due(ledger, now=119.9) == []
    assert len(ledger.state.active_quests) == 1


def test_success_pays_and_returns_believers():
    scheduler, ledger = _make_scheduler(rng_value=0.0)
    ledger.state.generator_counts["blog"] = 2  # 20 EPS
    scheduler.start(ledger, "recon", now=0.0)
    [outcome] = scheduler.resolve_due(ledger, now=120.0)
    s = ledger.state
    assert outcome.status is QuestStatus.SUCCEEDED
    assert outcome.success
    assert outcome.evidence == pytest.approx(100 * 20.0)
    assert s.evidence == pytest.approx(2000.0)
    assert s.tinfoil == 2
    assert s.bonus_believers == 10.0
    assert s.believers == 1010.0
    assert s.available_believers == 1010.0
    assert s.quests_completed == 1
    assert s.today_quests_completed == 1
    assert s.active_quests == []


def test_low_risk_failure_pays_partial():
    scheduler, ledger = _make_scheduler(rng_value=0.99)
    ledger.state.generator_counts["blog"] = 1
    scheduler.start(ledger, "recon", now=0.0)
    [outcome] = scheduler.resolve_due(ledger, now=200.0)
    assert outcome.status is QuestStatus.FAILED
    assert outcome.evidence == pytest.approx(100 * 10.0 * 0.25)
    assert ledger.state.available_believers == 1000.0
    assert ledger.state.quests_failed == 1


def test_medium_risk_failure_returns_believers_only():
    scheduler, ledger = _make_scheduler(rng_value=0.99)
    scheduler.start(ledger, "extract", now=0.0)
    [outcome] = scheduler.resolve_due(ledger, now=300.0)
    assert not outcome.success
    assert outcome.evidence == 0.0
    assert ledger.state.evidence == 0.0
    assert ledger.state.available_believers == 1000.0


def test_high_risk_failure_loses_believers_permanently():
    scheduler, ledger = _make_scheduler(rng_value=0.99, believers=100.0)
    assert scheduler.start(ledger, "raid", now=0.0)
    assert ledger.state.available_believers == 0.0
    [outcome] = scheduler.resolve_due(ledger, now=600.0)
    s = ledger.state
    assert outcome.believers_lost == 100.0
    assert s.believers_lost == 100.0
    assert s.believers == 0.0
    # Recruitment recomputation keeps the loss
    ledger.set_recruited_believers(100.0)
    assert s.believers == 0.0
    assert s.available_believers == 0.0


def test_high_risk_failure_with_protection():
    scheduler, ledger = _make_scheduler(rng_value=0.99, believers=100.0)
    ledger.state.purchased_matrix_upgrades.add("oracle")
    scheduler.start(ledger, "raid", now=0.0)
    [outcome] = scheduler.resolve_due(ledger, now=600.0)
    assert outcome.believers_lost == 0.0
    assert ledger.state.available_believers == 100.0


def test_resolution_order_by_deadline():
    scheduler, ledger = _make_scheduler()
    scheduler.start(ledger, "raid", now=0.0)
    scheduler.start(ledger, "recon", now=0.0)
    scheduler.start(ledger, "extract", now=0.0)
    outcomes = scheduler.resolve_due(ledger, now=10_000.0)
    assert [o.quest_id for o in outcomes] == ["recon", "extract", "raid"]


def test_duration_and_reward_modifiers():
    scheduler, ledger = _make_scheduler()
    s = ledger.state
    s.purchased_upgrades |= {"fast", "rich"}
    extract = scheduler.catalog.quests.get("extract")
    assert scheduler.duration(s, extract) == 150.0
    assert scheduler.reward(s, extract) == pytest.approx(1000.0)


class TestSuccessProbability:
    def test_base(self):
        scheduler, ledger = _make_scheduler()
        raid = scheduler.catalog.quests.get("raid")
        assert scheduler.success_probability(ledger.state, raid) == pytest.approx(0.38)

    def test_capped(self):
        scheduler, ledger = _make_scheduler()
        ledger.state.purchased_upgrades.add("luck")
        for q in scheduler.catalog.quests:
            assert 0.0 <= scheduler.success_probability(ledger.state, q) <= 0.95
        recon = scheduler.catalog.quests.get("recon")
        assert scheduler.success_probability(ledger.state, recon) == 0.95

    def test_floored(self):
        scheduler, ledger = _make_scheduler()
        ledger.state.purchased_upgrades.add("curse")
        raid = scheduler.catalog.quests.get("raid")
        assert scheduler.success_probability(ledger.state, raid) == 0.0

    def test_always_succeeds_override(self):
        scheduler, ledger = _make_scheduler(rng_value=0.99)
        ledger.state.unlocked_skills.add("mind_control")
        raid = scheduler.catalog.quests.get("raid")
        assert scheduler.success_probability(ledger.state, raid) == 1.0
        scheduler.start(ledger, "raid", now=0.0)
        [outcome] = scheduler.resolve_due(ledger, now=600.0)
        assert outcome.success
