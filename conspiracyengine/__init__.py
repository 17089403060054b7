# conspiracyengine: Conspiracy Clicker idle-game engine & balance simulation

from conspiracyengine._types import DynamicFloat, Timestamp, resolve_value, compare
from conspiracyengine.config import EngineConfig
from conspiracyengine.requirement import Requirement, Req
from conspiracyengine.cost_scaling import CostScaling
from conspiracyengine.effect import ModifierType, ModifierFold, ModifierDef, Modifier
from conspiracyengine.generator import GeneratorDef
from conspiracyengine.upgrade import (
    Currency,
    UpgradeDef,
    ConspiracyDef,
    SkillDef,
    PrestigeUpgradeDef,
    MatrixUpgradeDef,
)
from conspiracyengine.quest import QuestDef, QuestRisk, QuestStatus, QuestOutcome, QuestScheduler
from conspiracyengine.achievement import AchievementDef, AchievementType, AchievementTracker
from conspiracyengine.daily import (
    ChallengeTemplate,
    ChallengeType,
    StoredChallenge,
    DailyChallengeGenerator,
)
from conspiracyengine.catalog import ContentCatalog, Table
from conspiracyengine.state import GameState, ActiveQuest
from conspiracyengine.ledger import ResourceLedger, InvariantViolation
from conspiracyengine.pipeline import MultiplierPipeline, MultiplierBreakdown
from conspiracyengine.market import GeneratorMarket
from conspiracyengine.click import ClickResolver, ClickResult
from conspiracyengine.prestige import PrestigeLayerDef, PrestigeResult, PrestigeLadder
from conspiracyengine.rank import SocietyRank, rank_for, next_rank
from conspiracyengine.offline import OfflineReconciler, OfflineReport
from conspiracyengine.events import EventBus, EngineListener
from conspiracyengine.persistence import (
    PersistenceAdapter,
    JsonSlotStore,
    MemorySlotStore,
    SlotInfo,
)
from conspiracyengine.engine import GameEngine, EngineSnapshot
from conspiracyengine.strategy import Strategy, ClickProfile, GreedyCheapest, BestValue
from conspiracyengine.metrics import MetricsCollector
from conspiracyengine.simulation import Simulation, ManualClock
from conspiracyengine.report import SimulationReport, build_report
from conspiracyengine.formatting import (
    format_number,
    format_per_second,
    format_duration,
    format_text_report,
)

__all__ = [
    # Types
    "DynamicFloat",
    "Timestamp",
    "resolve_value",
    "compare",
    # Config
    "EngineConfig",
    # Requirements
    "Requirement",
    "Req",
    # Cost
    "CostScaling",
    # Modifiers
    "ModifierType",
    "ModifierFold",
    "ModifierDef",
    "Modifier",
    # Content
    "GeneratorDef",
    "Currency",
    "UpgradeDef",
    "ConspiracyDef",
    "SkillDef",
    "PrestigeUpgradeDef",
    "MatrixUpgradeDef",
    "QuestDef",
    "QuestRisk",
    "AchievementDef",
    "AchievementType",
    "ChallengeTemplate",
    "ChallengeType",
    "ContentCatalog",
    "Table",
    "SocietyRank",
    "rank_for",
    "next_rank",
    # State
    "GameState",
    "ActiveQuest",
    "StoredChallenge",
    # Components
    "ResourceLedger",
    "InvariantViolation",
    "MultiplierPipeline",
    "MultiplierBreakdown",
    "GeneratorMarket",
    "ClickResolver",
    "ClickResult",
    "QuestStatus",
    "QuestOutcome",
    "QuestScheduler",
    "AchievementTracker",
    "DailyChallengeGenerator",
    "PrestigeLayerDef",
    "PrestigeResult",
    "PrestigeLadder",
    "OfflineReconciler",
    "OfflineReport",
    # Notifications
    "EventBus",
    "EngineListener",
    # Persistence
    "PersistenceAdapter",
    "JsonSlotStore",
    "MemorySlotStore",
    "SlotInfo",
    # Engine
    "GameEngine",
    "EngineSnapshot",
    # Simulation
    "Strategy",
    "ClickProfile",
    "GreedyCheapest",
    "BestValue",
    "MetricsCollector",
    "Simulation",
    "ManualClock",
    "SimulationReport",
    "build_report",
    # Formatting
    "format_number",
    "format_per_second",
    "format_duration",
    "format_text_report",
]
