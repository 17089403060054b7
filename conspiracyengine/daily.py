from __future__ import annotations

import datetime
import logging
import random
from dataclasses import asdict, dataclass
from enum import Enum, auto
from typing import TYPE_CHECKING, Any, Sequence

from conspiracyengine.config import DAILY_CHALLENGE_COUNT

if TYPE_CHECKING:
    from conspiracyengine.state import GameState

logger = logging.getLogger(__name__)


class ChallengeType(Enum):
    COLLECT_EVIDENCE = auto()
    CLICK_COUNT = auto()
    COMPLETE_QUESTS = auto()
    CRITICAL_HITS = auto()
    COMBO_COUNT = auto()


@dataclass(frozen=True)
class ChallengeTemplate:
    """Static daily challenge with a fixed target."""

    id: str
    name: str
    description: str
    type: ChallengeType
    target: float
    tinfoil_reward: int


@dataclass
class StoredChallenge:
    """Today's instance of a template, with its progress flags."""

    id: str
    name: str
    description: str
    type: ChallengeType
    target: float
    tinfoil_reward: int
    progress: float = 0.0
    completed: bool = False
    claimed: bool = False

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["type"] = self.type.name
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> StoredChallenge:
        fields = dict(data)
        fields["type"] = ChallengeType[fields["type"]]
        return cls(**fields)


def date_seed(date: datetime.date) -> int:
    return date.year * 10000 + date.month * 100 + date.day


def today_counter(state: GameState, ctype: ChallengeType) -> float:
    """The per-day statistic a challenge type measures."""
    if ctype is ChallengeType.COLLECT_EVIDENCE:
        return state.today_evidence
    elif ctype is ChallengeType.CLICK_COUNT:
        return state.today_clicks
    elif ctype is ChallengeType.COMPLETE_QUESTS:
        return state.today_quests_completed
    elif ctype is ChallengeType.CRITICAL_HITS:
        return state.today_critical_hits
    elif ctype is ChallengeType.COMBO_COUNT:
        return state.today_combos
    raise ValueError(f"Unhandled challenge type: {ctype!r}")


_TODAY_FIELDS = (
    "today_clicks",
    "today_evidence",
    "today_quests_completed",
    "today_critical_hits",
    "today_combos",
)


class DailyChallengeGenerator:
    """Picks the same challenges for a given calendar date everywhere."""

    def __init__(
        self,
        templates: Sequence[ChallengeTemplate],
        count: int = DAILY_CHALLENGE_COUNT,
    ) -> None:
        self.templates = tuple(templates)
        self.count = count

    def generate(self, date: datetime.date) -> list[StoredChallenge]:
        pool = list(self.templates)
        random.Random(date_seed(date)).shuffle(pool)
        return [
            StoredChallenge(
                id=t.id,
                name=t.name,
                description=t.description,
                type=t.type,
                target=t.target,
                tinfoil_reward=t.tinfoil_reward,
            )
            for t in pool[: self.count]
        ]

    def ensure_current(self, state: GameState, date: datetime.date) -> bool:
        """Roll the challenge set over when *date* is a new day.

        Returns True if the challenges were regenerated.
        """
        if state.daily_challenge_date == date:
            return False
        state.daily_challenges = self.generate(date)
        state.daily_challenge_date = date
        state.reset_fields(_TODAY_FIELDS)
        logger.debug(
            "Daily challenges for %s: %s",
            date.isoformat(),
            [c.id for c in state.daily_challenges],
        )
        return True

    def update_progress(self, state: GameState) -> list[StoredChallenge]:
        """Copy today's counters into progress. Returns newly completed challenges."""
        completed: list[StoredChallenge] = []
        for challenge in state.daily_challenges:
            if challenge.completed:
                continue
            challenge.progress = min(
                today_counter(state, challenge.type), challenge.target
            )
            if challenge.progress >= challenge.target:
                challenge.completed = True
                completed.append(challenge)
        return completed

    def claim(self, state: GameState, challenge_id: str) -> StoredChallenge | None:
        """Mark a completed challenge claimed. None if it cannot be claimed."""
        for challenge in state.daily_challenges:
            if challenge.id != challenge_id:
                continue
            if not challenge.completed or challenge.claimed:
                return None
            challenge.claimed = True
            return challenge
        return None
