from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from conspiracyengine._types import Timestamp
from conspiracyengine.config import EngineConfig
from conspiracyengine.requirement import Requirement
from conspiracyengine.state import ActiveQuest, GameState

if TYPE_CHECKING:
    from conspiracyengine.catalog import ContentCatalog
    from conspiracyengine.ledger import ResourceLedger
    from conspiracyengine.pipeline import MultiplierPipeline

logger = logging.getLogger(__name__)


class QuestRisk(Enum):
    LOW = auto()  # believers always return, partial reward on failure
    MEDIUM = auto()  # believers always return, nothing on failure
    HIGH = auto()  # believers lost on failure


class QuestStatus(Enum):
    """AVAILABLE -> RUNNING -> SUCCEEDED | FAILED, then removed."""

    AVAILABLE = auto()
    RUNNING = auto()
    SUCCEEDED = auto()
    FAILED = auto()


@dataclass
class QuestDef:
    """Static definition of a timed quest that commits believers."""

    id: str
    display_name: str = ""
    description: str = ""
    risk: QuestRisk = QuestRisk.LOW
    believers_required: float = 0.0
    duration_seconds: float = 60.0
    success_chance: float = 0.5
    evidence_reward: float = 0.0
    evidence_multiplier: float = 1.0
    tinfoil_reward: int = 0
    believer_reward: float = 0.0
    fail_evidence_multiplier: float = 0.25
    requirements: list[Requirement] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id


@dataclass(frozen=True)
class QuestOutcome:
    """How one quest resolved."""

    quest_id: str
    status: QuestStatus
    evidence: float = 0.0
    tinfoil: int = 0
    believers_lost: float = 0.0

    @property
    def success(self) -> bool:
        return self.status is QuestStatus.SUCCEEDED


class QuestScheduler:
    """Runs quests as independent deadline-driven state machines."""

    def __init__(
        self,
        catalog: ContentCatalog,
        pipeline: MultiplierPipeline,
        config: EngineConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.catalog = catalog
        self.pipeline = pipeline
        self.config = config or EngineConfig()
        self.rng = rng or random.Random()

    # ── Queries ──────────────────────────────────────────────────────

    def status(self, state: GameState, quest_id: str) -> QuestStatus:
        if any(q.quest_id == quest_id for q in state.active_quests):
            return QuestStatus.RUNNING
        return QuestStatus.AVAILABLE

    def can_start(self, state: GameState, quest_id: str) -> bool:
        qdef = self.catalog.quests.get(quest_id)
        if qdef is None:
            return False
        if self.status(state, quest_id) is QuestStatus.RUNNING:
            return False
        if not all(r.evaluate(state) for r in qdef.requirements):
            return False
        return state.available_believers >= qdef.believers_required

    def success_probability(self, state: GameState, qdef: QuestDef) -> float:
        """Chance of success, capped unless an always-succeed effect is active."""
        if self.pipeline.quest_always_succeeds(state):
            return 1.0
        chance = qdef.success_chance + self.pipeline.quest_success_bonus(state)
        return min(max(chance, 0.0), self.config.quest_success_cap)

    def duration(self, state: GameState, qdef: QuestDef) -> float:
        return max(0.0, qdef.duration_seconds * self.pipeline.quest_duration_multiplier(state))

    def reward(self, state: GameState, qdef: QuestDef) -> float:
        """Evidence paid on success at the current EPS."""
        base = qdef.evidence_reward + qdef.evidence_multiplier * self.pipeline.eps(state)
        return base * self.pipeline.quest_reward_multiplier(state)

    # ── Transitions ──────────────────────────────────────────────────

    def start(self, ledger: ResourceLedger, quest_id: str, now: Timestamp) -> bool:
        """AVAILABLE -> RUNNING. Returns False without mutating on a shortfall."""
        state = ledger.state
        if not self.can_start(state, quest_id):
            return False
        qdef = self.catalog.quests.get(quest_id)
        if not ledger.reserve_believers(qdef.believers_required):
            return False
        state.active_quests.append(
            ActiveQuest(
                quest_id=quest_id,
                start_time=now,
                end_time=now + self.duration(state, qdef),
                believers_sent=qdef.believers_required,
            )
        )
        logger.debug("Quest %s started, %.0f believers sent", quest_id, qdef.believers_required)
        return True

    def resolve_due(self, ledger: ResourceLedger, now: Timestamp) -> list[QuestOutcome]:
        """Resolve every quest whose deadline has passed, earliest first."""
        state = ledger.state
        due = sorted(
            (q for q in state.active_quests if q.is_due(now)),
            key=lambda q: q.end_time,
        )
        outcomes: list[QuestOutcome] = []
        for active in due:
            state.active_quests.remove(active)
            outcomes.append(self._resolve(ledger, active))
        return outcomes

    def _resolve(self, ledger: ResourceLedger, active: ActiveQuest) -> QuestOutcome:
        state = ledger.state
        qdef = self.catalog.quests.get(active.quest_id)
        if qdef is None:
            # Content removed since the quest started; hand the believers back.
            ledger.release_believers(active.believers_sent)
            return QuestOutcome(active.quest_id, QuestStatus.FAILED)

        success = self.rng.random() < self.success_probability(state, qdef)
        if success:
            evidence = self.reward(state, qdef)
            ledger.credit_evidence(evidence)
            ledger.credit_tinfoil(qdef.tinfoil_reward)
            ledger.release_believers(active.believers_sent)
            if qdef.believer_reward > 0:
                ledger.add_bonus_believers(
                    qdef.believer_reward * self.pipeline.quest_reward_multiplier(state)
                )
            state.quests_completed += 1
            state.today_quests_completed += 1
            logger.debug("Quest %s succeeded: %.2f evidence", qdef.id, evidence)
            return QuestOutcome(
                qdef.id, QuestStatus.SUCCEEDED, evidence=evidence, tinfoil=qdef.tinfoil_reward
            )

        state.quests_failed += 1
        evidence = 0.0
        lost = 0.0
        if qdef.risk is QuestRisk.LOW:
            evidence = self.reward(state, qdef) * qdef.fail_evidence_multiplier
            ledger.credit_evidence(evidence)
            ledger.release_believers(active.believers_sent)
        elif qdef.risk is QuestRisk.MEDIUM:
            ledger.release_believers(active.believers_sent)
        elif qdef.risk is QuestRisk.HIGH:
            if self.pipeline.protects_believers(state):
                ledger.release_believers(active.believers_sent)
            else:
                lost = active.believers_sent
                ledger.forfeit_believers(lost)
        logger.debug("Quest %s failed (%s risk), %.0f believers lost", qdef.id, qdef.risk.name, lost)
        return QuestOutcome(qdef.id, QuestStatus.FAILED, evidence=evidence, believers_lost=lost)
