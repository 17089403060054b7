"""Tests for MCP server tool functions."""

import pytest

from conspiracyengine.achievement import AchievementDef, AchievementType
from conspiracyengine.catalog import ContentCatalog
from conspiracyengine.daily import ChallengeTemplate, ChallengeType
from conspiracyengine.effect import Modifier
from conspiracyengine.generator import GeneratorDef
from conspiracyengine.quest import QuestDef, QuestRisk
from conspiracyengine.requirement import Req
from conspiracyengine.upgrade import (
    ConspiracyDef,
    Currency,
    MatrixUpgradeDef,
    PrestigeUpgradeDef,
    SkillDef,
    UpgradeDef,
)

from conspiracyengine.mcp.server import (
    _GameHolder,
    _tool_ascend,
    _tool_break_matrix,
    _tool_claim_daily,
    _tool_click,
    _tool_get_available_purchases,
    _tool_get_game_info,
    _tool_get_game_state,
    _tool_intent,
    _tool_new_game,
    _tool_purchase_generator,
    _tool_purchase_max,
    _tool_wait,
)


def _make_test_catalog() -> ContentCatalog:
    """A small but complete catalog for testing."""
    return ContentCatalog(
        generators=[
            GeneratorDef("string", "Red String", base_cost=15, base_production=1),
            GeneratorDef("blog", "Blog", base_cost=100, base_production=10, believer_bonus=5),
        ],
        upgrades=[
            UpgradeDef("string_x2", "Better String", cost=50,
                       effects=[Modifier.generator("string", 2.0)],
                       requirements=[Req.owns("string")]),
            UpgradeDef("foil_click", "Foil Hat", cost=1, currency=Currency.TINFOIL,
                       effects=[Modifier.click_mult(2.0)]),
        ],
        conspiracies=[ConspiracyDef("moon", "Moon Landing", evidence_cost=100, tinfoil_reward=2)],
        quests=[
            QuestDef("recon", "Recon", risk=QuestRisk.LOW, believers_required=5,
                     duration_seconds=10, success_chance=0.9, evidence_reward=20,
                     evidence_multiplier=0),
        ],
        achievements=[
            AchievementDef("clicks_1", AchievementType.TOTAL_CLICKS, 1, tinfoil_reward=1),
        ],
        skills=[SkillDef("basics", cost=1)],
        prestige_upgrades=[PrestigeUpgradeDef("pyramid", token_cost=1)],
        matrix_upgrades=[MatrixUpgradeDef("zion", glitch_cost=1)],
        challenge_templates=[
            ChallengeTemplate("clicks_5", "Clicks", "Click 5 times", ChallengeType.CLICK_COUNT, 5, 2),
        ],
    )


@pytest.fixture
def holder():
    return _GameHolder.create(_make_test_catalog(), seed=42)


# ── Info and state ───────────────────────────────────────────────────


def test_get_game_info(holder):
    info = _tool_get_game_info(holder)
    assert [g["id"] for g in info["generators"]] == ["string", "blog"]
    assert [u["currency"] for u in info["upgrades"]] == ["evidence", "tinfoil"]
    assert info["conspiracies"][0]["evidence_cost"] == 100
    assert info["quests"][0]["risk"] == "LOW"
    assert info["illuminati_upgrades"][0]["token_cost"] == 1
    assert info["matrix_upgrades"][0]["glitch_cost"] == 1


def test_initial_state(holder):
    state = _tool_get_game_state(holder)
    assert state["evidence"] == 0
    assert state["eps"] == 0
    assert state["generator_counts"] == {}
    assert state["active_quests"] == []
    assert [c["id"] for c in state["daily_challenges"]] == ["clicks_5"]
    assert not state["can_ascend"]
    assert state["rank"] == "Uninitiated"


def test_available_purchases(holder):
    result = _tool_get_available_purchases(holder)
    gens = {g["id"]: g for g in result["generators"]}
    assert gens["string"]["cost"] == 15
    assert not gens["string"]["affordable"]
    assert gens["string"]["max_affordable"] == 0
    # string_x2 is hidden until a string is owned
    assert [u["id"] for u in result["upgrades"]] == ["foil_click"]
    assert result["upgrades"][0]["affordable"] is False


# ── Clicks ───────────────────────────────────────────────────────────


def test_click(holder):
    result = _tool_click(holder, 10)
    assert result["clicks"] == 10
    assert result["critical_hits"] == 0
    assert result["total_earned"] == 10.0
    assert result["new_balance"] == 10.0
    assert result["new_achievements"] == ["clicks_1"]
    assert result["daily_challenges_completed"] == ["clicks_5"]


def test_click_notifications_are_reported_once(holder):
    _tool_click(holder, 1)
    assert "new_achievements" not in _tool_click(holder, 1)


def test_click_limits(holder):
    assert "error" in _tool_click(holder, 0)
    assert "error" in _tool_click(holder, 1001)


# ── Purchases ────────────────────────────────────────────────────────


def test_purchase_generator(holder):
    assert _tool_purchase_generator(holder, "string")["success"] is False
    _tool_click(holder, 20)
    result = _tool_purchase_generator(holder, "string")
    assert result["success"]
    assert result["new_count"] == 1


def test_purchase_generator_errors(holder):
    assert "error" in _tool_purchase_generator(holder, "nope")
    assert "error" in _tool_purchase_generator(holder, "string", 0)


def test_purchase_max(holder):
    holder.engine.state.evidence = 100.0
    result = _tool_purchase_max(holder, "string")
    assert result["success"]
    assert result["bought"] == 4
    assert "error" in _tool_purchase_max(holder, "nope")


def test_upgrade_intent(holder):
    holder.engine.state.evidence = 200.0
    assert _tool_intent(holder, "upgrade", "string_x2")["success"] is False
    _tool_purchase_generator(holder, "string")
    assert _tool_intent(holder, "upgrade", "string_x2")["success"]


def test_intent_unknown_ids(holder):
    assert _tool_intent(holder, "upgrade", "nope") == {"error": "Unknown upgrade: 'nope'"}
    assert _tool_intent(holder, "illuminati_upgrade", "x") == {
        "error": "Unknown illuminati upgrade: 'x'"
    }


def test_intent_failure_reason(holder):
    result = _tool_intent(holder, "conspiracy", "moon")
    assert result["success"] is False
    assert "reason" in result


def test_prove_conspiracy(holder):
    holder.engine.ledger.credit_evidence(100.0)
    result = _tool_intent(holder, "conspiracy", "moon")
    assert result["success"]
    assert "Conspiracy proven: Moon Landing" in result["messages"]
    assert _tool_get_game_state(holder)["rank"] == "Curious Mind of the Truth Seekers"
    assert holder.engine.state.tinfoil == 2


# ── Time ─────────────────────────────────────────────────────────────


def test_wait_produces(holder):
    holder.engine.state.evidence = 100.0
    _tool_purchase_generator(holder, "blog")
    result = _tool_wait(holder, 10)
    assert result["waited"] == 10
    assert result["evidence"] == pytest.approx(100.0)
    assert result["eps"] == pytest.approx(10.0)


def test_wait_limits(holder):
    assert "error" in _tool_wait(holder, 0)
    assert "error" in _tool_wait(holder, 86401)


def test_quest_through_wait(holder):
    holder.engine.state.evidence = 100.0
    _tool_purchase_generator(holder, "blog")
    assert _tool_intent(holder, "quest", "recon")["success"]
    state = _tool_get_game_state(holder)
    assert state["active_quests"] == [{"quest_id": "recon", "remaining": 10.0}]
    result = _tool_wait(holder, 10)
    [quest] = result["quests_completed"]
    assert quest["quest_id"] == "recon"
    assert _tool_get_game_state(holder)["active_quests"] == []


# ── Prestige and challenges ──────────────────────────────────────────


def test_ascend(holder):
    failed = _tool_ascend(holder)
    assert failed["success"] is False
    assert failed["reason"]

    holder.engine.ledger.credit_evidence(1e12)
    result = _tool_ascend(holder)
    assert result["success"]
    assert result["tokens_gained"] == 3
    assert "generator_counts" in result["fields_reset"]
    assert _tool_intent(holder, "illuminati_upgrade", "pyramid")["success"]
    assert _tool_intent(holder, "skill", "basics")["success"]


def test_break_matrix(holder):
    assert _tool_break_matrix(holder)["success"] is False
    state = holder.engine.state
    state.times_ascended = 5
    holder.engine.ledger.credit_tokens(100)
    result = _tool_break_matrix(holder)
    assert result == {"success": True, "glitch_tokens_gained": 10}
    assert _tool_intent(holder, "matrix_upgrade", "zion")["success"]


def test_claim_daily(holder):
    assert _tool_claim_daily(holder, "clicks_5")["success"] is False
    _tool_click(holder, 5)
    result = _tool_claim_daily(holder, "clicks_5")
    assert result["success"]
    assert result["tinfoil"] == 3  # 1 from clicks_1 + 2 from the challenge


def test_new_game(holder):
    _tool_click(holder, 5)
    assert _tool_new_game(holder)["success"]
    state = _tool_get_game_state(holder)
    assert state["evidence"] == 0
    assert holder.take_notifications() == {}
