"""MCP server wrapping GameEngine for interactive AI playtesting."""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any

from mcp.server.fastmcp import FastMCP

from conspiracyengine.catalog import ContentCatalog
from conspiracyengine.engine import GameEngine
from conspiracyengine.events import (
    AchievementUnlocked,
    DailyChallengeCompleted,
    Event,
    FlavorMessage,
    QuestCompleted,
)
from conspiracyengine.simulation import ManualClock
from conspiracyengine.upgrade import Currency

# Maximum seconds per wait() call (24 hours)
_MAX_WAIT = 86400
# Maximum clicks per click() call
_MAX_CLICKS = 1000


@dataclass
class _GameHolder:
    """Holds the catalog, the engine and the notifications since the last read."""

    catalog: ContentCatalog
    clock: ManualClock
    engine: GameEngine
    _pending: list[Event] = field(default_factory=list)

    @classmethod
    def create(cls, catalog: ContentCatalog, seed: int | None = None) -> _GameHolder:
        clock = ManualClock()
        engine = GameEngine(catalog, clock=clock, rng=random.Random(seed))
        holder = cls(catalog=catalog, clock=clock, engine=engine)
        engine.subscribe(holder._pending.append)
        engine.new_game()
        return holder

    def take_notifications(self) -> dict[str, Any]:
        """Summarize and clear the events gathered since the last call."""
        events = list(self._pending)
        self._pending.clear()
        result: dict[str, Any] = {}
        achievements = [e.achievement.id for e in events if isinstance(e, AchievementUnlocked)]
        quests = [
            {
                "quest_id": e.quest_id,
                "success": e.success,
                "evidence": round(e.evidence, 2),
                "tinfoil": e.tinfoil,
            }
            for e in events
            if isinstance(e, QuestCompleted)
        ]
        challenges = [e.challenge.id for e in events if isinstance(e, DailyChallengeCompleted)]
        messages = [e.text for e in events if isinstance(e, FlavorMessage)]
        if achievements:
            result["new_achievements"] = achievements
        if quests:
            result["quests_completed"] = quests
        if challenges:
            result["daily_challenges_completed"] = challenges
        if messages:
            result["messages"] = messages
        return result


# ── Tool logic functions (testable without MCP protocol) ────────────


def _tool_get_game_info(holder: _GameHolder) -> dict[str, Any]:
    cat = holder.catalog
    return {
        "generators": [
            {"id": g.id, "display_name": g.display_name, "base_cost": g.base_cost,
             "base_production": g.base_production}
            for g in cat.generators
        ],
        "upgrades": [
            {"id": u.id, "display_name": u.display_name, "description": u.description,
             "cost": u.cost, "currency": u.currency.value}
            for u in cat.upgrades
        ],
        "conspiracies": [
            {"id": c.id, "display_name": c.display_name, "evidence_cost": c.evidence_cost}
            for c in cat.conspiracies
        ],
        "quests": [
            {"id": q.id, "display_name": q.display_name, "risk": q.risk.name,
             "believers_required": q.believers_required,
             "duration_seconds": q.duration_seconds}
            for q in cat.quests
        ],
        "skills": [
            {"id": s.id, "display_name": s.display_name, "cost": s.cost,
             "required_skill": s.required_skill}
            for s in cat.skills
        ],
        "illuminati_upgrades": [
            {"id": p.id, "display_name": p.display_name, "token_cost": p.token_cost}
            for p in cat.prestige_upgrades
        ],
        "matrix_upgrades": [
            {"id": m.id, "display_name": m.display_name, "glitch_cost": m.glitch_cost}
            for m in cat.matrix_upgrades
        ],
    }


def _tool_get_game_state(holder: _GameHolder) -> dict[str, Any]:
    snap = holder.engine.snapshot()
    now = holder.clock()
    return {
        "evidence": round(snap.evidence, 2),
        "total_evidence_earned": round(snap.total_evidence_earned, 2),
        "eps": round(snap.eps, 4),
        "click_power": round(snap.click_power, 4),
        "tinfoil": snap.tinfoil,
        "illuminati_tokens": snap.illuminati_tokens,
        "glitch_tokens": snap.glitch_tokens,
        "believers": round(snap.believers, 2),
        "available_believers": round(snap.available_believers, 2),
        "generator_counts": snap.generator_counts,
        "active_quests": [
            {"quest_id": q.quest_id, "remaining": round(q.remaining(now), 1)}
            for q in snap.active_quests
        ],
        "daily_challenges": [
            {"id": c.id, "name": c.name, "progress": c.progress, "target": c.target,
             "completed": c.completed, "claimed": c.claimed}
            for c in snap.daily_challenges
        ],
        "combo_meter": round(snap.combo_meter, 3),
        "golden_eye_active": snap.golden_eye_active,
        "times_ascended": snap.times_ascended,
        "pending_tokens": snap.pending_tokens,
        "can_ascend": snap.can_ascend,
        "can_break_matrix": snap.can_break_matrix,
        "skill_points": snap.skill_points,
        "rank": snap.rank.describe(),
        "play_time": round(snap.play_time, 1),
    }


def _tool_get_available_purchases(holder: _GameHolder) -> dict[str, Any]:
    engine = holder.engine
    state = engine.state
    generators = []
    for g in holder.catalog.generators:
        cost = engine.market.cost(state, g.id)
        generators.append({
            "id": g.id,
            "count": state.generator_count(g.id),
            "cost": round(cost, 2),
            "affordable": cost <= state.evidence,
            "max_affordable": engine.market.buy_max(state, g.id),
        })
    upgrades = []
    for u in holder.catalog.upgrades:
        owned = (
            state.purchased_upgrades
            if u.currency is Currency.EVIDENCE
            else state.purchased_tinfoil_upgrades
        )
        if u.id in owned or not all(r.evaluate(state) for r in u.requirements):
            continue
        balance = state.evidence if u.currency is Currency.EVIDENCE else state.tinfoil
        upgrades.append({
            "id": u.id,
            "cost": u.cost,
            "currency": u.currency.value,
            "affordable": u.cost <= balance,
        })
    return {"generators": generators, "upgrades": upgrades}


def _tool_purchase_generator(
    holder: _GameHolder, generator_id: str, count: int = 1
) -> dict[str, Any]:
    if generator_id not in holder.catalog.generators:
        return {"error": f"Unknown generator: {generator_id!r}"}
    if count < 1:
        return {"error": "Count must be at least 1"}
    if not holder.engine.purchase_generators(generator_id, count):
        return {"success": False, "reason": "Cannot afford"}
    return {
        "success": True,
        "generator_id": generator_id,
        "new_count": holder.engine.state.generator_count(generator_id),
    }


def _tool_purchase_max(holder: _GameHolder, generator_id: str) -> dict[str, Any]:
    if generator_id not in holder.catalog.generators:
        return {"error": f"Unknown generator: {generator_id!r}"}
    bought = holder.engine.purchase_max_generators(generator_id)
    return {
        "success": bought > 0,
        "bought": bought,
        "new_count": holder.engine.state.generator_count(generator_id),
    }


def _tool_intent(holder: _GameHolder, kind: str, item_id: str) -> dict[str, Any]:
    """Run a yes/no purchase intent by name."""
    engine = holder.engine
    actions = {
        "upgrade": (holder.catalog.upgrades, engine.purchase_upgrade),
        "conspiracy": (holder.catalog.conspiracies, engine.prove_conspiracy),
        "skill": (holder.catalog.skills, engine.unlock_skill),
        "illuminati_upgrade": (holder.catalog.prestige_upgrades, engine.purchase_illuminati_upgrade),
        "matrix_upgrade": (holder.catalog.matrix_upgrades, engine.purchase_matrix_upgrade),
        "quest": (holder.catalog.quests, engine.start_quest),
    }
    table, action = actions[kind]
    if item_id not in table:
        return {"error": f"Unknown {kind.replace('_', ' ')}: {item_id!r}"}
    success = action(item_id)
    result: dict[str, Any] = {"success": success}
    if not success:
        result["reason"] = "Requirements not met or cannot afford"
    result.update(holder.take_notifications())
    return result


def _tool_click(holder: _GameHolder, count: int = 1) -> dict[str, Any]:
    if count < 1:
        return {"error": "Count must be at least 1"}
    if count > _MAX_CLICKS:
        return {"error": f"Count cannot exceed {_MAX_CLICKS}"}

    total = 0.0
    crits = 0
    for _ in range(count):
        result = holder.engine.process_click()
        total += result.power + (result.combo_burst or 0.0)
        crits += result.is_critical
    out: dict[str, Any] = {
        "clicks": count,
        "critical_hits": crits,
        "total_earned": round(total, 2),
        "new_balance": round(holder.engine.state.evidence, 2),
    }
    out.update(holder.take_notifications())
    return out


def _tool_wait(holder: _GameHolder, seconds: float) -> dict[str, Any]:
    if seconds <= 0:
        return {"error": "Seconds must be positive"}
    if seconds > _MAX_WAIT:
        return {"error": f"Cannot wait more than {_MAX_WAIT} seconds (24h) per call"}

    # Subdivide into 1-second ticks
    remaining = seconds
    while remaining > 0:
        dt = min(1.0, remaining)
        holder.clock.advance(dt)
        holder.engine.tick(dt)
        remaining -= dt

    state = holder.engine.state
    result: dict[str, Any] = {
        "waited": seconds,
        "evidence": round(state.evidence, 2),
        "eps": round(holder.engine.pipeline.eps(state), 4),
        "tinfoil": state.tinfoil,
    }
    result.update(holder.take_notifications())
    return result


def _tool_ascend(holder: _GameHolder) -> dict[str, Any]:
    result = holder.engine.perform_prestige()
    if not result.success:
        return {"success": False, "reason": result.reason}
    return {
        "success": True,
        "tokens_gained": result.reward_amount,
        "evidence_retained": round(result.evidence_retained, 2),
        "fields_reset": list(result.fields_reset),
    }


def _tool_break_matrix(holder: _GameHolder) -> dict[str, Any]:
    engine = holder.engine
    before = engine.state.glitch_tokens
    if not engine.break_matrix():
        return {"success": False, "reason": "Matrix break requirements not met"}
    return {"success": True, "glitch_tokens_gained": engine.state.glitch_tokens - before}


def _tool_claim_daily(holder: _GameHolder, challenge_id: str) -> dict[str, Any]:
    if not holder.engine.claim_daily_challenge(challenge_id):
        return {"success": False, "reason": "Not completed, already claimed, or unknown"}
    return {"success": True, "tinfoil": holder.engine.state.tinfoil}


def _tool_new_game(holder: _GameHolder) -> dict[str, Any]:
    holder.engine.new_game()
    holder._pending.clear()
    return {"success": True, "message": "Game reset to initial state"}


# ── Server factory ──────────────────────────────────────────────────


def create_server(catalog: ContentCatalog, seed: int | None = None) -> FastMCP:
    """Create an MCP server wrapping a GameEngine for the given catalog."""
    holder = _GameHolder.create(catalog, seed)

    mcp = FastMCP(name="Conspiracy Engine")

    @mcp.tool()
    def get_game_info() -> dict[str, Any]:
        """Get static content: generators, upgrades, conspiracies, quests, skills, prestige shops."""
        return _tool_get_game_info(holder)

    @mcp.tool()
    def get_game_state() -> dict[str, Any]:
        """Get the current snapshot: balances, EPS, believers, quests, daily challenges."""
        return _tool_get_game_state(holder)

    @mcp.tool()
    def get_available_purchases() -> dict[str, Any]:
        """List generator prices and the shop upgrades whose requirements are met."""
        return _tool_get_available_purchases(holder)

    @mcp.tool()
    def purchase_generator(generator_id: str, count: int = 1) -> dict[str, Any]:
        """Buy exactly COUNT units of a generator at the bulk price, or nothing."""
        return _tool_purchase_generator(holder, generator_id, count)

    @mcp.tool()
    def purchase_max(generator_id: str) -> dict[str, Any]:
        """Buy as many units of a generator as evidence allows."""
        return _tool_purchase_max(holder, generator_id)

    @mcp.tool()
    def purchase_upgrade(upgrade_id: str) -> dict[str, Any]:
        """Buy an evidence or tinfoil shop upgrade."""
        return _tool_intent(holder, "upgrade", upgrade_id)

    @mcp.tool()
    def prove_conspiracy(conspiracy_id: str) -> dict[str, Any]:
        """Prove a conspiracy once lifetime evidence covers its cost."""
        return _tool_intent(holder, "conspiracy", conspiracy_id)

    @mcp.tool()
    def unlock_skill(skill_id: str) -> dict[str, Any]:
        """Spend skill points on a skill tree node."""
        return _tool_intent(holder, "skill", skill_id)

    @mcp.tool()
    def purchase_illuminati_upgrade(upgrade_id: str) -> dict[str, Any]:
        """Spend Illuminati tokens on a permanent upgrade."""
        return _tool_intent(holder, "illuminati_upgrade", upgrade_id)

    @mcp.tool()
    def purchase_matrix_upgrade(upgrade_id: str) -> dict[str, Any]:
        """Spend glitch tokens on a Matrix upgrade."""
        return _tool_intent(holder, "matrix_upgrade", upgrade_id)

    @mcp.tool()
    def start_quest(quest_id: str) -> dict[str, Any]:
        """Send believers on a quest."""
        return _tool_intent(holder, "quest", quest_id)

    @mcp.tool()
    def click(count: int = 1) -> dict[str, Any]:
        """Click N times (max 1000). Returns evidence earned and critical hits."""
        return _tool_click(holder, count)

    @mcp.tool()
    def wait(seconds: float) -> dict[str, Any]:
        """Advance game time by the given seconds (max 86400). Time is subdivided into 1s ticks."""
        return _tool_wait(holder, seconds)

    @mcp.tool()
    def ascend() -> dict[str, Any]:
        """Perform an Illuminati Ascension."""
        return _tool_ascend(holder)

    @mcp.tool()
    def break_matrix() -> dict[str, Any]:
        """Perform a Matrix Break."""
        return _tool_break_matrix(holder)

    @mcp.tool()
    def claim_daily_challenge(challenge_id: str) -> dict[str, Any]:
        """Claim the tinfoil reward of a completed daily challenge."""
        return _tool_claim_daily(holder, challenge_id)

    @mcp.tool()
    def new_game() -> dict[str, Any]:
        """Reset the game to initial state."""
        return _tool_new_game(holder)

    return mcp
