from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING

from conspiracyengine._types import DynamicFloat, resolve_value

if TYPE_CHECKING:
    from conspiracyengine.state import GameState


class ModifierType(Enum):
    CLICK_FLAT = auto()
    CLICK_MULT = auto()
    EPS_TO_CLICK = auto()
    GENERATOR_MULT = auto()
    GLOBAL_MULT = auto()
    BELIEVER_MULT = auto()
    QUEST_SUCCESS = auto()
    QUEST_DURATION = auto()
    QUEST_REWARD = auto()
    CRIT_CHANCE = auto()
    CRIT_DAMAGE = auto()
    COST_MULT = auto()
    COMBO_FILL = auto()
    AUTO_CLICK = auto()
    PASSIVE_TINFOIL = auto()
    RETAIN_EVIDENCE = auto()
    QUEST_ALWAYS_SUCCEEDS = auto()
    PROTECT_BELIEVERS = auto()


class ModifierFold(Enum):
    """How values of one modifier type combine."""

    ADD = auto()
    MULTIPLY = auto()
    FLAG = auto()


MODIFIER_FOLD: dict[ModifierType, ModifierFold] = {
    ModifierType.CLICK_FLAT: ModifierFold.ADD,
    ModifierType.CLICK_MULT: ModifierFold.MULTIPLY,
    ModifierType.EPS_TO_CLICK: ModifierFold.ADD,
    ModifierType.GENERATOR_MULT: ModifierFold.MULTIPLY,
    ModifierType.GLOBAL_MULT: ModifierFold.MULTIPLY,
    ModifierType.BELIEVER_MULT: ModifierFold.MULTIPLY,
    ModifierType.QUEST_SUCCESS: ModifierFold.ADD,
    ModifierType.QUEST_DURATION: ModifierFold.MULTIPLY,
    ModifierType.QUEST_REWARD: ModifierFold.MULTIPLY,
    ModifierType.CRIT_CHANCE: ModifierFold.ADD,
    ModifierType.CRIT_DAMAGE: ModifierFold.MULTIPLY,
    ModifierType.COST_MULT: ModifierFold.MULTIPLY,
    ModifierType.COMBO_FILL: ModifierFold.MULTIPLY,
    ModifierType.AUTO_CLICK: ModifierFold.ADD,
    ModifierType.PASSIVE_TINFOIL: ModifierFold.ADD,
    ModifierType.RETAIN_EVIDENCE: ModifierFold.ADD,
    ModifierType.QUEST_ALWAYS_SUCCEEDS: ModifierFold.FLAG,
    ModifierType.PROTECT_BELIEVERS: ModifierFold.FLAG,
}

# Modifier types whose target names a generator (empty target = every generator).
TARGETED_TYPES = frozenset({ModifierType.GENERATOR_MULT, ModifierType.COST_MULT})


@dataclass(frozen=True)
class ModifierDef:
    """One typed contribution to a multiplier category."""

    type: ModifierType
    value: DynamicFloat = 1.0
    target: str = ""

    @property
    def fold(self) -> ModifierFold:
        return MODIFIER_FOLD[self.type]

    def resolve(self, state: GameState) -> float:
        return resolve_value(self.value, state)

    def applies_to(self, generator_id: str) -> bool:
        return not self.target or self.target == generator_id


class Modifier:
    """Convenience constructors for the modifier kinds content uses."""

    @staticmethod
    def click_flat(value: float) -> ModifierDef:
        return ModifierDef(ModifierType.CLICK_FLAT, value)

    @staticmethod
    def click_mult(value: DynamicFloat) -> ModifierDef:
        return ModifierDef(ModifierType.CLICK_MULT, value)

    @staticmethod
    def eps_to_click(fraction: float) -> ModifierDef:
        return ModifierDef(ModifierType.EPS_TO_CLICK, fraction)

    @staticmethod
    def generator(generator_id: str, value: float) -> ModifierDef:
        return ModifierDef(ModifierType.GENERATOR_MULT, value, target=generator_id)

    @staticmethod
    def all_generators(value: float) -> ModifierDef:
        return ModifierDef(ModifierType.GENERATOR_MULT, value)

    @staticmethod
    def global_eps(value: DynamicFloat) -> ModifierDef:
        return ModifierDef(ModifierType.GLOBAL_MULT, value)

    @staticmethod
    def believers(value: float) -> ModifierDef:
        return ModifierDef(ModifierType.BELIEVER_MULT, value)

    @staticmethod
    def quest_success(bonus: float) -> ModifierDef:
        return ModifierDef(ModifierType.QUEST_SUCCESS, bonus)

    @staticmethod
    def quest_duration(value: float) -> ModifierDef:
        return ModifierDef(ModifierType.QUEST_DURATION, value)

    @staticmethod
    def quest_reward(value: float) -> ModifierDef:
        return ModifierDef(ModifierType.QUEST_REWARD, value)

    @staticmethod
    def crit_chance(bonus: float) -> ModifierDef:
        return ModifierDef(ModifierType.CRIT_CHANCE, bonus)

    @staticmethod
    def crit_damage(value: float) -> ModifierDef:
        return ModifierDef(ModifierType.CRIT_DAMAGE, value)

    @staticmethod
    def cost(value: float, generator_id: str = "") -> ModifierDef:
        return ModifierDef(ModifierType.COST_MULT, value, target=generator_id)

    @staticmethod
    def combo_fill(value: float) -> ModifierDef:
        return ModifierDef(ModifierType.COMBO_FILL, value)

    @staticmethod
    def auto_click(clicks_per_second: float) -> ModifierDef:
        return ModifierDef(ModifierType.AUTO_CLICK, clicks_per_second)

    @staticmethod
    def passive_tinfoil(per_minute: float) -> ModifierDef:
        return ModifierDef(ModifierType.PASSIVE_TINFOIL, per_minute)

    @staticmethod
    def retain_evidence(fraction: float) -> ModifierDef:
        return ModifierDef(ModifierType.RETAIN_EVIDENCE, fraction)

    @staticmethod
    def quest_always_succeeds() -> ModifierDef:
        return ModifierDef(ModifierType.QUEST_ALWAYS_SUCCEEDS)

    @staticmethod
    def protect_believers() -> ModifierDef:
        return ModifierDef(ModifierType.PROTECT_BELIEVERS)

    @staticmethod
    def per_token_eps(per_token: float) -> ModifierDef:
        """Global multiplier of 1 + per_token for every Illuminati token held."""
        _per_token = per_token

        def _value(state: GameState) -> float:
            return 1.0 + state.illuminati_tokens * _per_token

        return ModifierDef(ModifierType.GLOBAL_MULT, _value)
