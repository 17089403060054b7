from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from conspiracyengine._types import Timestamp
from conspiracyengine.config import EngineConfig
from conspiracyengine.quest import QuestOutcome

if TYPE_CHECKING:
    from conspiracyengine.ledger import ResourceLedger
    from conspiracyengine.pipeline import MultiplierPipeline
    from conspiracyengine.quest import QuestScheduler

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OfflineReport:
    """What happened while the game was closed."""

    elapsed: float = 0.0
    evidence: float = 0.0
    tinfoil: int = 0
    quests: list[QuestOutcome] = field(default_factory=list)


class OfflineReconciler:
    """Applies the real time between the last save and now."""

    def __init__(
        self,
        pipeline: MultiplierPipeline,
        scheduler: QuestScheduler,
        config: EngineConfig | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.scheduler = scheduler
        self.config = config or EngineConfig()

    def elapsed(self, last_save: Timestamp, now: Timestamp) -> float:
        if last_save <= 0:
            return 0.0
        elapsed = max(0.0, now - last_save)
        cap = self.config.offline_cap_seconds
        if cap is not None:
            elapsed = min(elapsed, cap)
        return elapsed

    def reconcile(self, ledger: ResourceLedger, now: Timestamp) -> OfflineReport:
        state = ledger.state
        elapsed = self.elapsed(state.last_save_time, now)

        evidence = elapsed * self.pipeline.eps(state) * self.config.offline_rate
        ledger.credit_evidence(evidence)
        tinfoil = ledger.accrue_tinfoil(
            self.pipeline.passive_tinfoil_per_minute(state) * elapsed / 60.0
        )

        # Quest deadlines are absolute, so the live resolution path applies as-is.
        quests = self.scheduler.resolve_due(ledger, now)

        if elapsed > 0 or quests:
            logger.info(
                "Offline for %.0fs: +%.2f evidence, +%d tinfoil, %d quests resolved",
                elapsed,
                evidence,
                tinfoil,
                len(quests),
            )
        return OfflineReport(elapsed=elapsed, evidence=evidence, tinfoil=tinfoil, quests=quests)
