from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from conspiracyengine.state import GameState


@dataclass
class ResourceSnapshot:
    time: float
    evidence: float
    total_evidence: float
    eps: float
    tinfoil: int
    believers: float
    illuminati_tokens: int


@dataclass
class GeneratorSnapshot:
    time: float
    generator_id: str
    count: int


@dataclass
class PurchaseEvent:
    time: float
    kind: str  # "generator", "upgrade" or "conspiracy"
    item_id: str
    cost: float
    evidence_after: float


@dataclass
class AchievementEvent:
    time: float
    achievement_id: str


@dataclass
class PrestigeEvent:
    time: float
    layer: str
    reward: int
    run_duration: float


class MetricsCollector:
    """Collects simulation metrics at configurable intervals."""

    def __init__(self, snapshot_interval: float = 1.0) -> None:
        self.snapshot_interval = snapshot_interval
        self._last_snapshot_time: float = -1.0

        self.resource_snapshots: list[ResourceSnapshot] = []
        self.generator_snapshots: list[GeneratorSnapshot] = []
        self.purchases: list[PurchaseEvent] = []
        self.achievements: list[AchievementEvent] = []
        self.prestiges: list[PrestigeEvent] = []

    def record_tick(self, state: GameState, elapsed: float, eps: float) -> None:
        """Record a snapshot if enough simulated time has passed."""
        if elapsed - self._last_snapshot_time >= self.snapshot_interval:
            self._take_snapshot(state, elapsed, eps)
            self._last_snapshot_time = elapsed

    def record_purchase(
        self, state: GameState, elapsed: float, kind: str, item_id: str, cost: float
    ) -> None:
        self.purchases.append(
            PurchaseEvent(
                time=elapsed,
                kind=kind,
                item_id=item_id,
                cost=cost,
                evidence_after=state.evidence,
            )
        )

    def record_achievement(self, elapsed: float, achievement_id: str) -> None:
        self.achievements.append(AchievementEvent(time=elapsed, achievement_id=achievement_id))

    def record_prestige(
        self, elapsed: float, layer: str, reward: int, run_duration: float
    ) -> None:
        self.prestiges.append(
            PrestigeEvent(time=elapsed, layer=layer, reward=reward, run_duration=run_duration)
        )

    def _take_snapshot(self, state: GameState, elapsed: float, eps: float) -> None:
        self.resource_snapshots.append(
            ResourceSnapshot(
                time=elapsed,
                evidence=state.evidence,
                total_evidence=state.total_evidence_earned,
                eps=eps,
                tinfoil=state.tinfoil,
                believers=state.believers,
                illuminati_tokens=state.illuminati_tokens,
            )
        )
        for gen_id, count in state.generator_counts.items():
            self.generator_snapshots.append(
                GeneratorSnapshot(time=elapsed, generator_id=gen_id, count=count)
            )
