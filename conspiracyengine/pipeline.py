from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from conspiracyengine._types import Timestamp
from conspiracyengine.config import EngineConfig
from conspiracyengine.effect import ModifierDef, ModifierType

if TYPE_CHECKING:
    from conspiracyengine.catalog import ContentCatalog
    from conspiracyengine.state import GameState


@dataclass(frozen=True)
class MultiplierBreakdown:
    """Every composite multiplier at one instant, for display."""

    click_flat: float
    click_multiplier: float
    eps_fraction_per_click: float
    base_eps: float
    global_multiplier: float
    eps: float
    click_power: float
    believer_multiplier: float
    quest_success_bonus: float
    quest_duration_multiplier: float
    quest_reward_multiplier: float
    crit_chance: float
    crit_damage_multiplier: float
    combo_fill_multiplier: float
    auto_click_rate: float
    golden_eye_multiplier: float


class MultiplierPipeline:
    """Folds active modifiers into composite multipliers.

    Every method is a pure function of (state, catalog, now). Sources are
    visited in catalog order: shop upgrades, proven conspiracies, unlocked
    achievements, skills, Illuminati upgrades, then Matrix upgrades.
    Additive modifiers are summed and multiplicative ones multiplied.
    """

    def __init__(self, catalog: ContentCatalog, config: EngineConfig | None = None) -> None:
        self.catalog = catalog
        self.config = config or EngineConfig()

    # ── Folding ──────────────────────────────────────────────────────

    def active_modifiers(self, state: GameState) -> Iterator[ModifierDef]:
        c = self.catalog
        for u in c.upgrades:
            if u.id in state.purchased_upgrades or u.id in state.purchased_tinfoil_upgrades:
                yield from u.effects
        for cons in c.conspiracies:
            if cons.id in state.proven_conspiracies:
                yield from cons.effects
        for a in c.achievements:
            if a.id in state.unlocked_achievements:
                yield from a.effects
        for sk in c.skills:
            if sk.id in state.unlocked_skills:
                yield from sk.effects
        for p in c.prestige_upgrades:
            if p.id in state.purchased_illuminati_upgrades:
                yield from p.effects
        for m in c.matrix_upgrades:
            if m.id in state.purchased_matrix_upgrades:
                yield from m.effects

    def _sum(self, state: GameState, mtype: ModifierType, target: str | None = None) -> float:
        total = 0.0
        for mod in self.active_modifiers(state):
            if mod.type is mtype and (target is None or mod.applies_to(target)):
                total += mod.resolve(state)
        return total

    def _product(self, state: GameState, mtype: ModifierType, target: str | None = None) -> float:
        total = 1.0
        for mod in self.active_modifiers(state):
            if mod.type is mtype and (target is None or mod.applies_to(target)):
                total *= mod.resolve(state)
        return total

    def _flag(self, state: GameState, mtype: ModifierType) -> bool:
        return any(mod.type is mtype for mod in self.active_modifiers(state))

    # ── Clicks ───────────────────────────────────────────────────────

    def click_flat(self, state: GameState) -> float:
        return self.config.base_click_power + self._sum(state, ModifierType.CLICK_FLAT)

    def click_multiplier(self, state: GameState) -> float:
        return self._product(state, ModifierType.CLICK_MULT)

    def base_click_power(self, state: GameState) -> float:
        return self.click_flat(state) * self.click_multiplier(state)

    def eps_fraction_per_click(self, state: GameState) -> float:
        return self.config.eps_fraction_per_click + self._sum(state, ModifierType.EPS_TO_CLICK)

    def crit_chance(self, state: GameState) -> float:
        return min(1.0, max(0.0, self._sum(state, ModifierType.CRIT_CHANCE)))

    def crit_damage_multiplier(self, state: GameState) -> float:
        return self._product(state, ModifierType.CRIT_DAMAGE)

    def combo_fill_multiplier(self, state: GameState) -> float:
        return self._product(state, ModifierType.COMBO_FILL)

    def auto_click_rate(self, state: GameState) -> float:
        rate = self._sum(state, ModifierType.AUTO_CLICK)
        return min(max(rate, 0.0), self.config.max_auto_click_rate)

    def golden_eye_multiplier(self, state: GameState, now: Timestamp) -> float:
        if state.golden_eye_active and now < state.golden_eye_end_time:
            return self.config.golden_eye_factor
        return 1.0

    # ── Production ───────────────────────────────────────────────────

    def generator_multiplier(self, state: GameState, generator_id: str) -> float:
        return self._product(state, ModifierType.GENERATOR_MULT, generator_id)

    def global_multiplier(self, state: GameState) -> float:
        return self._product(state, ModifierType.GLOBAL_MULT)

    def generator_production(self, state: GameState, generator_id: str) -> float:
        """Output of one generator type before the global multiplier."""
        gdef = self.catalog.generators.get(generator_id)
        if gdef is None:
            return 0.0
        count = state.generator_count(generator_id)
        if count <= 0:
            return 0.0
        return gdef.base_production * count * self.generator_multiplier(state, generator_id)

    def base_eps(self, state: GameState) -> float:
        total = 0.0
        for gdef in self.catalog.generators:
            total += self.generator_production(state, gdef.id)
        return total

    def eps(self, state: GameState) -> float:
        return self.base_eps(state) * self.global_multiplier(state)

    def cost_multiplier(self, state: GameState, generator_id: str) -> float:
        return self._product(state, ModifierType.COST_MULT, generator_id)

    # ── Believers and quests ─────────────────────────────────────────

    def believer_multiplier(self, state: GameState) -> float:
        return self._product(state, ModifierType.BELIEVER_MULT)

    def recruited_believers(self, state: GameState) -> float:
        total = 0.0
        for gdef in self.catalog.generators:
            total += gdef.believer_bonus * state.generator_count(gdef.id)
        return total * self.believer_multiplier(state)

    def quest_success_bonus(self, state: GameState) -> float:
        return self._sum(state, ModifierType.QUEST_SUCCESS)

    def quest_always_succeeds(self, state: GameState) -> bool:
        return self._flag(state, ModifierType.QUEST_ALWAYS_SUCCEEDS)

    def quest_duration_multiplier(self, state: GameState) -> float:
        return self._product(state, ModifierType.QUEST_DURATION)

    def quest_reward_multiplier(self, state: GameState) -> float:
        return self._product(state, ModifierType.QUEST_REWARD)

    def protects_believers(self, state: GameState) -> bool:
        return self._flag(state, ModifierType.PROTECT_BELIEVERS)

    # ── Prestige-tier effects ────────────────────────────────────────

    def evidence_retained_fraction(self, state: GameState) -> float:
        return min(1.0, max(0.0, self._sum(state, ModifierType.RETAIN_EVIDENCE)))

    def passive_tinfoil_per_minute(self, state: GameState) -> float:
        return max(0.0, self._sum(state, ModifierType.PASSIVE_TINFOIL))

    # ── Breakdown ────────────────────────────────────────────────────

    def breakdown(self, state: GameState, now: Timestamp) -> MultiplierBreakdown:
        base_eps = self.base_eps(state)
        global_mult = self.global_multiplier(state)
        eps = base_eps * global_mult
        golden = self.golden_eye_multiplier(state, now)
        click_flat = self.click_flat(state)
        click_mult = self.click_multiplier(state)
        fraction = self.eps_fraction_per_click(state)
        return MultiplierBreakdown(
            click_flat=click_flat,
            click_multiplier=click_mult,
            eps_fraction_per_click=fraction,
            base_eps=base_eps,
            global_multiplier=global_mult,
            eps=eps,
            click_power=(click_flat * click_mult + eps * fraction) * golden,
            believer_multiplier=self.believer_multiplier(state),
            quest_success_bonus=self.quest_success_bonus(state),
            quest_duration_multiplier=self.quest_duration_multiplier(state),
            quest_reward_multiplier=self.quest_reward_multiplier(state),
            crit_chance=self.crit_chance(state),
            crit_damage_multiplier=self.crit_damage_multiplier(state),
            combo_fill_multiplier=self.combo_fill_multiplier(state),
            auto_click_rate=self.auto_click_rate(state),
            golden_eye_multiplier=golden,
        )
