from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from conspiracyengine.config import (
    GLITCH_TOKEN_SCALING,
    MATRIX_ASCENSION_REQUIREMENT,
    MATRIX_TOKEN_REQUIREMENT,
    PRESTIGE_THRESHOLD,
    TOKEN_POWER,
    TOKEN_SCALING,
)

if TYPE_CHECKING:
    from conspiracyengine.catalog import ContentCatalog
    from conspiracyengine.ledger import ResourceLedger
    from conspiracyengine.pipeline import MultiplierPipeline
    from conspiracyengine.state import GameState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PrestigeLayerDef:
    """A reset tier and the GameState fields it restores to new-game values."""

    id: str
    display_name: str
    reset_fields: tuple[str, ...]


ASCENSION = PrestigeLayerDef(
    id="ascension",
    display_name="Illuminati Ascension",
    reset_fields=(
        "evidence",
        "generator_counts",
        "purchased_upgrades",
        "purchased_tinfoil_upgrades",
        "proven_conspiracies",
        "active_quests",
        "believers",
        "available_believers",
        "bonus_believers",
        "believers_lost",
        "combo_meter",
        "combo_clicks",
        "auto_click_progress",
        "tinfoil",
    ),
)

MATRIX_BREAK = PrestigeLayerDef(
    id="matrix_break",
    display_name="Break the Matrix",
    reset_fields=ASCENSION.reset_fields
    + (
        "illuminati_tokens",
        "purchased_illuminati_upgrades",
        "times_ascended",
    ),
)


@dataclass(frozen=True)
class PrestigeResult:
    """Outcome of a prestige attempt."""

    success: bool
    layer: str = ""
    reward_amount: int = 0
    fields_reset: tuple[str, ...] = ()
    evidence_retained: float = 0.0
    reason: str = ""


def tokens_for(total_evidence: float) -> int:
    """Lifetime Illuminati token yield for a lifetime evidence total."""
    if total_evidence <= 0:
        return 0
    return int(math.floor((total_evidence / TOKEN_SCALING) ** TOKEN_POWER))


class PrestigeLadder:
    """Illuminati Ascension, Matrix Break, and the shops they fund."""

    def __init__(self, catalog: ContentCatalog, pipeline: MultiplierPipeline) -> None:
        self.catalog = catalog
        self.pipeline = pipeline

    # ── Illuminati Ascension ─────────────────────────────────────────

    def pending_tokens(self, state: GameState) -> int:
        """Tokens an ascension would grant now.

        Yield is measured against lifetime evidence, so tokens already
        granted for the same evidence are never granted twice.
        """
        earned = tokens_for(state.total_evidence_earned)
        return max(0, earned - state.total_illuminati_tokens_earned)

    def can_ascend(self, state: GameState) -> bool:
        return (
            state.total_evidence_earned >= PRESTIGE_THRESHOLD
            and self.pending_tokens(state) >= 1
        )

    def ascend(self, ledger: ResourceLedger) -> PrestigeResult:
        state = ledger.state
        if state.total_evidence_earned < PRESTIGE_THRESHOLD:
            return PrestigeResult(
                success=False,
                layer=ASCENSION.id,
                reason=f"Need {PRESTIGE_THRESHOLD:g} lifetime evidence",
            )
        reward = self.pending_tokens(state)
        if reward < 1:
            return PrestigeResult(
                success=False, layer=ASCENSION.id, reason="No new tokens to claim"
            )

        retained = state.evidence * self.pipeline.evidence_retained_fraction(state)
        state.reset_fields(ASCENSION.reset_fields)
        ledger.retain_evidence(retained)
        ledger.credit_tokens(reward)
        state.times_ascended += 1
        logger.info(
            "Ascended (#%d): +%d Illuminati tokens, %.2f evidence retained",
            state.times_ascended,
            reward,
            retained,
        )
        return PrestigeResult(
            success=True,
            layer=ASCENSION.id,
            reward_amount=reward,
            fields_reset=ASCENSION.reset_fields,
            evidence_retained=retained,
        )

    def purchase_illuminati_upgrade(self, ledger: ResourceLedger, upgrade_id: str) -> bool:
        state = ledger.state
        udef = self.catalog.prestige_upgrades.get(upgrade_id)
        if udef is None or upgrade_id in state.purchased_illuminati_upgrades:
            return False
        if not ledger.spend_tokens(udef.token_cost):
            return False
        state.purchased_illuminati_upgrades.add(upgrade_id)
        return True

    # ── Matrix Break ─────────────────────────────────────────────────

    def tokens_spent(self, state: GameState) -> int:
        return sum(
            u.token_cost
            for u in self.catalog.prestige_upgrades
            if u.id in state.purchased_illuminati_upgrades
        )

    def glitch_tokens_for(self, state: GameState) -> int:
        return (self.tokens_spent(state) + state.illuminati_tokens) // GLITCH_TOKEN_SCALING

    def can_break_matrix(self, state: GameState) -> bool:
        return (
            state.times_ascended >= MATRIX_ASCENSION_REQUIREMENT
            and state.total_illuminati_tokens_earned >= MATRIX_TOKEN_REQUIREMENT
        )

    def break_matrix(self, ledger: ResourceLedger) -> PrestigeResult:
        state = ledger.state
        if not self.can_break_matrix(state):
            return PrestigeResult(
                success=False,
                layer=MATRIX_BREAK.id,
                reason=(
                    f"Need {MATRIX_ASCENSION_REQUIREMENT} ascensions and "
                    f"{MATRIX_TOKEN_REQUIREMENT} lifetime tokens"
                ),
            )
        reward = self.glitch_tokens_for(state)
        state.reset_fields(MATRIX_BREAK.reset_fields)
        ledger.credit_glitch(reward)
        state.times_matrix_broken += 1
        logger.info(
            "Matrix broken (#%d): +%d glitch tokens", state.times_matrix_broken, reward
        )
        return PrestigeResult(
            success=True,
            layer=MATRIX_BREAK.id,
            reward_amount=reward,
            fields_reset=MATRIX_BREAK.reset_fields,
        )

    def purchase_matrix_upgrade(self, ledger: ResourceLedger, upgrade_id: str) -> bool:
        state = ledger.state
        udef = self.catalog.matrix_upgrades.get(upgrade_id)
        if udef is None or upgrade_id in state.purchased_matrix_upgrades:
            return False
        if not ledger.spend_glitch(udef.glitch_cost):
            return False
        state.purchased_matrix_upgrades.add(upgrade_id)
        return True

    # ── Skill tree ───────────────────────────────────────────────────

    def total_skill_points(self, state: GameState) -> int:
        """One point per ten unlocked achievements plus one per ascension."""
        return len(state.unlocked_achievements) // 10 + state.times_ascended

    def available_skill_points(self, state: GameState) -> int:
        spent = sum(s.cost for s in self.catalog.skills if s.id in state.unlocked_skills)
        return max(0, self.total_skill_points(state) - spent)

    def can_unlock_skill(self, state: GameState, skill_id: str) -> bool:
        sdef = self.catalog.skills.get(skill_id)
        if sdef is None or skill_id in state.unlocked_skills:
            return False
        if sdef.required_skill is not None and sdef.required_skill not in state.unlocked_skills:
            return False
        return self.available_skill_points(state) >= sdef.cost

    def unlock_skill(self, state: GameState, skill_id: str) -> bool:
        if not self.can_unlock_skill(state, skill_id):
            return False
        state.unlocked_skills.add(skill_id)
        return True
