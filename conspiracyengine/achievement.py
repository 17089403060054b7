from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from conspiracyengine.effect import ModifierDef

if TYPE_CHECKING:
    from conspiracyengine.catalog import ContentCatalog
    from conspiracyengine.ledger import ResourceLedger
    from conspiracyengine.state import GameState

logger = logging.getLogger(__name__)


class AchievementType(Enum):
    TOTAL_EVIDENCE = auto()
    TOTAL_CLICKS = auto()
    GENERATOR_OWNED = auto()
    TOTAL_GENERATORS = auto()
    CONSPIRACIES_PROVEN = auto()
    PLAY_TIME = auto()
    TIMES_ASCENDED = auto()
    TIMES_MATRIX_BROKEN = auto()
    QUESTS_COMPLETED = auto()
    TOTAL_TINFOIL = auto()
    CRITICAL_CLICKS = auto()
    TOTAL_TOKENS_EARNED = auto()


@dataclass
class AchievementDef:
    """One-time unlock fired when a counter reaches ``threshold``.

    ``target`` names the generator for GENERATOR_OWNED achievements.
    ``effects`` are permanent modifiers active once unlocked.
    """

    id: str
    type: AchievementType
    threshold: float
    display_name: str = ""
    description: str = ""
    target: str = ""
    tinfoil_reward: int = 0
    effects: list[ModifierDef] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id


def counter_value(state: GameState, achievement: AchievementDef) -> float:
    """Current value of the counter an achievement watches."""
    atype = achievement.type
    if atype is AchievementType.TOTAL_EVIDENCE:
        return state.total_evidence_earned
    elif atype is AchievementType.TOTAL_CLICKS:
        return state.total_clicks
    elif atype is AchievementType.GENERATOR_OWNED:
        return state.generator_count(achievement.target)
    elif atype is AchievementType.TOTAL_GENERATORS:
        return state.total_generators()
    elif atype is AchievementType.CONSPIRACIES_PROVEN:
        return len(state.proven_conspiracies)
    elif atype is AchievementType.PLAY_TIME:
        return state.total_play_time_seconds
    elif atype is AchievementType.TIMES_ASCENDED:
        return state.times_ascended
    elif atype is AchievementType.TIMES_MATRIX_BROKEN:
        return state.times_matrix_broken
    elif atype is AchievementType.QUESTS_COMPLETED:
        return state.quests_completed
    elif atype is AchievementType.TOTAL_TINFOIL:
        return state.tinfoil
    elif atype is AchievementType.CRITICAL_CLICKS:
        return state.critical_clicks
    elif atype is AchievementType.TOTAL_TOKENS_EARNED:
        return state.total_illuminati_tokens_earned
    raise ValueError(f"Unhandled achievement type: {atype!r}")


class AchievementTracker:
    """Unlocks achievements whose thresholds have been reached."""

    def __init__(self, catalog: ContentCatalog) -> None:
        # Same-counter achievements are visited in ascending threshold order.
        self._ordered = sorted(
            catalog.achievements,
            key=lambda a: (a.type.value, a.target, a.threshold),
        )

    def progress(self, state: GameState, achievement: AchievementDef) -> float:
        """Fraction of the way to unlocking, in [0, 1]."""
        if achievement.threshold <= 0:
            return 1.0
        return min(1.0, counter_value(state, achievement) / achievement.threshold)

    def check(self, state: GameState, ledger: ResourceLedger) -> list[AchievementDef]:
        """Unlock every newly reached achievement and pay its tinfoil reward.

        Already-unlocked achievements are skipped, so calling this again
        without state changes returns an empty list.
        """
        unlocked: list[AchievementDef] = []
        for achievement in self._ordered:
            if achievement.id in state.unlocked_achievements:
                continue
            if counter_value(state, achievement) < achievement.threshold:
                continue
            state.unlocked_achievements.add(achievement.id)
            if achievement.tinfoil_reward:
                ledger.credit_tinfoil(achievement.tinfoil_reward)
            logger.debug("Achievement unlocked: %s", achievement.id)
            unlocked.append(achievement)
        return unlocked
