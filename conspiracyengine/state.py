from __future__ import annotations

import datetime
from dataclasses import asdict, dataclass
from typing import Any

from conspiracyengine._types import Timestamp
from conspiracyengine.daily import StoredChallenge

SAVE_VERSION = 1


@dataclass
class ActiveQuest:
    """A quest in flight. ``end_time`` is an absolute deadline."""

    quest_id: str
    start_time: Timestamp
    end_time: Timestamp
    believers_sent: float

    def is_due(self, now: Timestamp) -> bool:
        return now >= self.end_time

    def progress(self, now: Timestamp) -> float:
        span = self.end_time - self.start_time
        if span <= 0:
            return 1.0
        return min(1.0, max(0.0, (now - self.start_time) / span))

    def remaining(self, now: Timestamp) -> float:
        return max(0.0, self.end_time - now)


# Attributes stored verbatim by to_dict/from_dict.
_SCALARS = (
    "evidence",
    "total_evidence_earned",
    "tinfoil",
    "illuminati_tokens",
    "glitch_tokens",
    "total_illuminati_tokens_earned",
    "believers",
    "available_believers",
    "bonus_believers",
    "believers_lost",
    "combo_meter",
    "combo_clicks",
    "last_click_time",
    "total_clicks",
    "critical_clicks",
    "auto_click_progress",
    "tinfoil_progress",
    "times_ascended",
    "times_matrix_broken",
    "total_play_time_seconds",
    "quests_completed",
    "quests_failed",
    "golden_eye_active",
    "golden_eye_end_time",
    "today_clicks",
    "today_evidence",
    "today_quests_completed",
    "today_critical_hits",
    "today_combos",
    "last_save_time",
)

_ID_SETS = (
    "purchased_upgrades",
    "purchased_tinfoil_upgrades",
    "purchased_illuminati_upgrades",
    "purchased_matrix_upgrades",
    "unlocked_skills",
    "proven_conspiracies",
    "unlocked_achievements",
)


class GameState:
    """Mutable aggregate holding one save slot's worth of game state."""

    def __init__(self) -> None:
        # Balances
        self.evidence: float = 0.0
        self.total_evidence_earned: float = 0.0
        self.tinfoil: int = 0
        self.illuminati_tokens: int = 0
        self.glitch_tokens: int = 0
        self.total_illuminati_tokens_earned: int = 0

        # Believers
        self.believers: float = 0.0
        self.available_believers: float = 0.0
        self.bonus_believers: float = 0.0
        self.believers_lost: float = 0.0

        self.generator_counts: dict[str, int] = {}

        self.purchased_upgrades: set[str] = set()
        self.purchased_tinfoil_upgrades: set[str] = set()
        self.purchased_illuminati_upgrades: set[str] = set()
        self.purchased_matrix_upgrades: set[str] = set()
        self.unlocked_skills: set[str] = set()
        self.proven_conspiracies: set[str] = set()
        self.unlocked_achievements: set[str] = set()

        self.active_quests: list[ActiveQuest] = []

        # Daily challenges
        self.daily_challenges: list[StoredChallenge] = []
        self.daily_challenge_date: datetime.date | None = None
        self.today_clicks: int = 0
        self.today_evidence: float = 0.0
        self.today_quests_completed: int = 0
        self.today_critical_hits: int = 0
        self.today_combos: int = 0

        # Clicking
        self.combo_meter: float = 0.0
        self.combo_clicks: int = 0
        self.last_click_time: Timestamp = 0.0
        self.total_clicks: int = 0
        self.critical_clicks: int = 0
        self.auto_click_progress: float = 0.0
        self.tinfoil_progress: float = 0.0

        # Prestige and statistics
        self.times_ascended: int = 0
        self.times_matrix_broken: int = 0
        self.total_play_time_seconds: float = 0.0
        self.quests_completed: int = 0
        self.quests_failed: int = 0

        self.golden_eye_active: bool = False
        self.golden_eye_end_time: Timestamp = 0.0

        self.last_save_time: Timestamp = 0.0

    # ── Queries ──────────────────────────────────────────────────────

    def generator_count(self, id: str) -> int:
        return self.generator_counts.get(id, 0)

    def total_generators(self) -> int:
        return sum(self.generator_counts.values())

    def committed_believers(self) -> float:
        return sum(q.believers_sent for q in self.active_quests)

    # ── Resets ───────────────────────────────────────────────────────

    def reset_fields(self, names: tuple[str, ...]) -> None:
        """Restore the named attributes to their new-game values."""
        fresh = GameState()
        for name in names:
            if not hasattr(fresh, name):
                raise ValueError(f"GameState has no field {name!r}")
            setattr(self, name, getattr(fresh, name))

    # ── Serialization ────────────────────────────────────────────────

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"version": SAVE_VERSION}
        for name in _SCALARS:
            data[name] = getattr(self, name)
        for name in _ID_SETS:
            data[name] = sorted(getattr(self, name))
        data["generator_counts"] = dict(self.generator_counts)
        data["active_quests"] = [asdict(q) for q in self.active_quests]
        data["daily_challenges"] = [c.to_dict() for c in self.daily_challenges]
        data["daily_challenge_date"] = (
            self.daily_challenge_date.isoformat() if self.daily_challenge_date else None
        )
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GameState:
        """Rebuild a state from :meth:`to_dict` output.

        Raises KeyError, TypeError or ValueError when *data* does not have
        the expected shape.
        """
        if data.get("version") != SAVE_VERSION:
            raise ValueError(f"Unsupported save version: {data.get('version')!r}")
        state = cls()
        for name in _SCALARS:
            default = getattr(state, name)
            value = data[name]
            if isinstance(default, bool):
                value = bool(value)
            elif isinstance(default, int):
                value = int(value)
            elif isinstance(default, float):
                value = float(value)
            setattr(state, name, value)
        for name in _ID_SETS:
            setattr(state, name, {str(i) for i in data[name]})
        state.generator_counts = {
            str(k): int(v) for k, v in data["generator_counts"].items()
        }
        state.active_quests = [ActiveQuest(**q) for q in data["active_quests"]]
        state.daily_challenges = [
            StoredChallenge.from_dict(c) for c in data["daily_challenges"]
        ]
        raw_date = data["daily_challenge_date"]
        state.daily_challenge_date = (
            datetime.date.fromisoformat(raw_date) if raw_date else None
        )
        return state
