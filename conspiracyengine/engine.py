from __future__ import annotations

import datetime
import logging
import random
import threading
import time
from dataclasses import dataclass
from typing import Callable

from conspiracyengine._types import Clock, Timestamp
from conspiracyengine.achievement import AchievementTracker
from conspiracyengine.catalog import ContentCatalog
from conspiracyengine.click import ClickResolver, ClickResult
from conspiracyengine.config import EngineConfig
from conspiracyengine.daily import DailyChallengeGenerator, StoredChallenge
from conspiracyengine.events import (
    AchievementUnlocked,
    ClickProcessed,
    ComboBurst,
    DailyChallengeCompleted,
    Event,
    EventBus,
    FlavorMessage,
    GoldenEyeEnded,
    GoldenEyeStarted,
    PrestigeAvailable,
    PrestigeCompleted,
    QuestCompleted,
    TickEvent,
)
from conspiracyengine.formatting import format_duration, format_number
from conspiracyengine.ledger import ResourceLedger
from conspiracyengine.market import GeneratorMarket
from conspiracyengine.offline import OfflineReconciler, OfflineReport
from conspiracyengine.persistence import PersistenceAdapter, check_slot
from conspiracyengine.pipeline import MultiplierPipeline
from conspiracyengine.prestige import PrestigeLadder, PrestigeResult
from conspiracyengine.quest import QuestOutcome, QuestScheduler
from conspiracyengine.rank import SocietyRank, rank_for
from conspiracyengine.state import ActiveQuest, GameState
from conspiracyengine.upgrade import Currency

logger = logging.getLogger(__name__)

# Offline gains shorter than this are applied silently.
_OFFLINE_MESSAGE_SECONDS = 60.0


@dataclass(frozen=True)
class EngineSnapshot:
    """Read-only view of the game for rendering."""

    evidence: float
    total_evidence_earned: float
    eps: float
    click_power: float
    tinfoil: int
    illuminati_tokens: int
    glitch_tokens: int
    believers: float
    available_believers: float
    generator_counts: dict[str, int]
    active_quests: tuple[ActiveQuest, ...]
    daily_challenges: tuple[StoredChallenge, ...]
    combo_meter: float
    golden_eye_active: bool
    total_clicks: int
    critical_clicks: int
    times_ascended: int
    times_matrix_broken: int
    pending_tokens: int
    can_ascend: bool
    can_break_matrix: bool
    skill_points: int
    play_time: float
    rank: SocietyRank


class GameEngine:
    """Owns one GameState and applies ticks and player intents to it.

    Every public method takes the engine lock, so an intent never runs
    concurrently with a tick. Notifications go out through ``events`` on
    the calling thread.
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        config: EngineConfig | None = None,
        persistence: PersistenceAdapter | None = None,
        clock: Clock = time.time,
        rng: random.Random | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        errors = self.config.validate() + catalog.validate()
        if errors:
            raise ValueError(
                "Invalid engine setup:\n" + "\n".join(f"  - {e}" for e in errors)
            )

        self.catalog = catalog
        self.persistence = persistence
        self.clock = clock
        self.rng = rng or random.Random()

        self.pipeline = MultiplierPipeline(catalog, self.config)
        self.market = GeneratorMarket(catalog, self.pipeline)
        self.clicks = ClickResolver(self.pipeline, self.config, self.rng)
        self.quests = QuestScheduler(catalog, self.pipeline, self.config, self.rng)
        self.achievements = AchievementTracker(catalog)
        self.prestige = PrestigeLadder(catalog, self.pipeline)
        self.daily = DailyChallengeGenerator(catalog.challenge_templates.all())
        self.offline = OfflineReconciler(self.pipeline, self.quests, self.config)
        self.events = EventBus()

        self._lock = threading.RLock()
        self.slot: int | None = None
        self._last_tick: Timestamp | None = None
        self._prestige_notified = False
        self._attach(GameState())

    # ── Lifecycle ────────────────────────────────────────────────────

    def new_game(self, slot: int | None = None) -> None:
        """Start a fresh game, optionally bound to a save slot."""
        if slot is not None:
            check_slot(slot)
        with self._lock:
            now = self.clock()
            state = GameState()
            state.last_save_time = now
            self._attach(state)
            self.slot = slot
            self.daily.ensure_current(state, self._date(now))
            logger.info("New game started (slot %s)", slot)

    def continue_game(self, slot: int) -> OfflineReport | None:
        """Load *slot* and apply offline progress.

        Returns None when there is no usable save; the caller decides
        whether to start a new game instead.
        """
        check_slot(slot)
        if self.persistence is None:
            return None
        with self._lock:
            state = self.persistence.load(slot)
            if state is None:
                logger.info("No usable save in slot %d", slot)
                return None
            self._attach(state)
            self.slot = slot
            now = self.clock()
            if self.daily.ensure_current(state, self._date(now)):
                self._emit(FlavorMessage("New daily challenges are available."))
            report = self.offline.reconcile(self.ledger, now)
            for outcome in report.quests:
                self._emit_quest(outcome)
            if report.elapsed >= _OFFLINE_MESSAGE_SECONDS and report.evidence > 0:
                self._emit(
                    FlavorMessage(
                        f"While you were gone ({format_duration(report.elapsed)}), "
                        f"you gathered {format_number(report.evidence)} evidence!"
                    )
                )
            self._refresh_believers()
            self._check_progress()
            logger.info("Loaded slot %d", slot)
            return report

    def save(self) -> bool:
        """Write the state to its slot. False when no slot or adapter is set."""
        with self._lock:
            if self.persistence is None or self.slot is None:
                return False
            self.state.last_save_time = self.clock()
            self.persistence.save(self.slot, self.state)
            logger.info("Saved slot %d", self.slot)
            return True

    def run_forever(
        self, stop: threading.Event, autosave_interval: float = 30.0
    ) -> None:
        """Tick at ``config.tick_interval`` until *stop* is set, then save."""
        last_save = time.monotonic()
        while not stop.wait(self.config.tick_interval):
            self.tick()
            if time.monotonic() - last_save >= autosave_interval:
                self.save()
                last_save = time.monotonic()
        self.save()

    # ── Core loop ────────────────────────────────────────────────────

    def tick(self, delta: float | None = None) -> None:
        """Advance the game. *delta* defaults to the wall time since the last tick."""
        with self._lock:
            now = self.clock()
            if delta is None:
                if self._last_tick is None:
                    delta = self.config.tick_interval
                else:
                    delta = now - self._last_tick
            delta = max(0.0, delta)
            self._last_tick = now
            state = self.state

            # Production
            self.ledger.credit_evidence(self.pipeline.eps(state) * delta)
            self.ledger.accrue_tinfoil(
                self.pipeline.passive_tinfoil_per_minute(state) * delta / 60.0
            )
            state.total_play_time_seconds += delta

            self._refresh_believers()
            self.clicks.decay_combo(self.ledger, now, delta)
            self._process_auto_clicks(now, delta)

            for outcome in self.quests.resolve_due(self.ledger, now):
                self._emit_quest(outcome)

            self._update_golden_eye(now)

            if self.daily.ensure_current(state, self._date(now)):
                self._emit(FlavorMessage("New daily challenges are available."))
            self._check_progress()

            if self.prestige.can_ascend(state):
                if not self._prestige_notified:
                    self._prestige_notified = True
                    self._emit(PrestigeAvailable(self.prestige.pending_tokens(state)))
            else:
                self._prestige_notified = False

            self.ledger.check_invariants()
            self._emit(TickEvent(delta))

    # ── Player actions ───────────────────────────────────────────────

    def process_click(self, external_multiplier: float = 1.0) -> ClickResult:
        with self._lock:
            now = self.clock()
            result = self.clicks.resolve(self.ledger, now, external_multiplier)
            self._emit_click(result)
            self._check_progress()
            return result

    def purchase_generator(self, generator_id: str) -> bool:
        return self.purchase_generators(generator_id, 1)

    def purchase_generators(self, generator_id: str, n: int) -> bool:
        """Buy exactly *n* units at the closed-form bulk price, or nothing."""
        with self._lock:
            if not self.market.purchase_many(self.ledger, generator_id, n):
                return False
            self._after_purchase()
            return True

    def purchase_max_generators(self, generator_id: str) -> int:
        with self._lock:
            bought = self.market.purchase_max(self.ledger, generator_id)
            if bought:
                self._after_purchase()
            return bought

    def purchase_upgrade(self, upgrade_id: str) -> bool:
        """Buy an evidence or tinfoil shop upgrade."""
        with self._lock:
            state = self.state
            udef = self.catalog.upgrades.get(upgrade_id)
            if udef is None:
                return False
            owned = (
                state.purchased_upgrades
                if udef.currency is Currency.EVIDENCE
                else state.purchased_tinfoil_upgrades
            )
            if upgrade_id in owned:
                return False
            if not all(r.evaluate(state) for r in udef.requirements):
                return False
            if udef.currency is Currency.EVIDENCE:
                paid = self.ledger.spend_evidence(udef.cost)
            else:
                paid = self.ledger.spend_tinfoil(int(udef.cost))
            if not paid:
                return False
            owned.add(upgrade_id)
            self._after_purchase()
            return True

    def prove_conspiracy(self, conspiracy_id: str) -> bool:
        """Prove a conspiracy once lifetime evidence covers it. Spends nothing."""
        with self._lock:
            state = self.state
            cdef = self.catalog.conspiracies.get(conspiracy_id)
            if cdef is None or conspiracy_id in state.proven_conspiracies:
                return False
            if state.total_evidence_earned < cdef.evidence_cost:
                return False
            if not all(r.evaluate(state) for r in cdef.requirements):
                return False
            before = rank_for(len(state.proven_conspiracies))
            state.proven_conspiracies.add(conspiracy_id)
            self.ledger.credit_tinfoil(cdef.tinfoil_reward)
            self._emit(FlavorMessage(f"Conspiracy proven: {cdef.display_name}"))
            rank = rank_for(len(state.proven_conspiracies))
            if rank is not before:
                self._emit(FlavorMessage(f"Rank up! You are now {rank.describe()}!"))
            self._after_purchase()
            return True

    def unlock_skill(self, skill_id: str) -> bool:
        with self._lock:
            if not self.prestige.unlock_skill(self.state, skill_id):
                return False
            self._after_purchase()
            return True

    def purchase_illuminati_upgrade(self, upgrade_id: str) -> bool:
        with self._lock:
            if not self.prestige.purchase_illuminati_upgrade(self.ledger, upgrade_id):
                return False
            self._after_purchase()
            return True

    def purchase_matrix_upgrade(self, upgrade_id: str) -> bool:
        with self._lock:
            if not self.prestige.purchase_matrix_upgrade(self.ledger, upgrade_id):
                return False
            self._after_purchase()
            return True

    def start_quest(self, quest_id: str) -> bool:
        with self._lock:
            return self.quests.start(self.ledger, quest_id, self.clock())

    def perform_prestige(self) -> PrestigeResult:
        """Illuminati Ascension."""
        with self._lock:
            result = self.prestige.ascend(self.ledger)
            if result.success:
                self._after_prestige(result)
            return result

    def break_matrix(self) -> bool:
        with self._lock:
            result = self.prestige.break_matrix(self.ledger)
            if result.success:
                self._after_prestige(result)
            return result.success

    def claim_daily_challenge(self, challenge_id: str) -> bool:
        with self._lock:
            challenge = self.daily.claim(self.state, challenge_id)
            if challenge is None:
                return False
            self.ledger.credit_tinfoil(challenge.tinfoil_reward)
            return True

    # ── Queries ──────────────────────────────────────────────────────

    def subscribe(self, fn: Callable[[Event], None]) -> Callable[[], None]:
        return self.events.subscribe(fn)

    def snapshot(self) -> EngineSnapshot:
        with self._lock:
            s = self.state
            now = self.clock()
            breakdown = self.pipeline.breakdown(s, now)
            return EngineSnapshot(
                evidence=s.evidence,
                total_evidence_earned=s.total_evidence_earned,
                eps=breakdown.eps,
                click_power=breakdown.click_power,
                tinfoil=s.tinfoil,
                illuminati_tokens=s.illuminati_tokens,
                glitch_tokens=s.glitch_tokens,
                believers=s.believers,
                available_believers=s.available_believers,
                generator_counts=dict(s.generator_counts),
                active_quests=tuple(
                    ActiveQuest(q.quest_id, q.start_time, q.end_time, q.believers_sent)
                    for q in s.active_quests
                ),
                daily_challenges=tuple(
                    StoredChallenge.from_dict(c.to_dict()) for c in s.daily_challenges
                ),
                combo_meter=s.combo_meter,
                golden_eye_active=breakdown.golden_eye_multiplier > 1.0,
                total_clicks=s.total_clicks,
                critical_clicks=s.critical_clicks,
                times_ascended=s.times_ascended,
                times_matrix_broken=s.times_matrix_broken,
                pending_tokens=self.prestige.pending_tokens(s),
                can_ascend=self.prestige.can_ascend(s),
                can_break_matrix=self.prestige.can_break_matrix(s),
                skill_points=self.prestige.available_skill_points(s),
                play_time=s.total_play_time_seconds,
                rank=rank_for(len(s.proven_conspiracies)),
            )

    # ── Private helpers ──────────────────────────────────────────────

    def _attach(self, state: GameState) -> None:
        self.state = state
        self.ledger = ResourceLedger(state, strict=self.config.strict_invariants)
        self._prestige_notified = False
        self._last_tick = None
        self._refresh_believers()

    def _date(self, now: Timestamp) -> datetime.date:
        return datetime.date.fromtimestamp(now)

    def _emit(self, event: Event) -> None:
        self.events.emit(event)

    def _emit_click(self, result: ClickResult) -> None:
        self._emit(ClickProcessed(result.power, result.is_critical))
        if result.combo_burst is not None:
            self._emit(ComboBurst(result.combo_burst))

    def _emit_quest(self, outcome: QuestOutcome) -> None:
        self._emit(
            QuestCompleted(outcome.quest_id, outcome.success, outcome.evidence, outcome.tinfoil)
        )

    def _refresh_believers(self) -> None:
        self.ledger.set_recruited_believers(self.pipeline.recruited_believers(self.state))

    def _process_auto_clicks(self, now: Timestamp, delta: float) -> None:
        rate = self.pipeline.auto_click_rate(self.state)
        if rate <= 0:
            return
        self.state.auto_click_progress += rate * delta
        while self.state.auto_click_progress >= 1.0:
            self.state.auto_click_progress -= 1.0
            self._emit_click(self.clicks.resolve(self.ledger, now, is_auto=True))

    def _update_golden_eye(self, now: Timestamp) -> None:
        state = self.state
        if state.golden_eye_active:
            if now >= state.golden_eye_end_time:
                state.golden_eye_active = False
                self._emit(GoldenEyeEnded())
            return
        if not state.proven_conspiracies:
            return
        if self.rng.random() < self.config.golden_eye_spawn_chance:
            state.golden_eye_active = True
            state.golden_eye_end_time = now + self.config.golden_eye_duration
            self._emit(GoldenEyeStarted(state.golden_eye_end_time))

    def _check_progress(self) -> None:
        for challenge in self.daily.update_progress(self.state):
            self._emit(DailyChallengeCompleted(challenge))
        for achievement in self.achievements.check(self.state, self.ledger):
            self._emit(AchievementUnlocked(achievement))

    def _after_purchase(self) -> None:
        self._refresh_believers()
        self._check_progress()

    def _after_prestige(self, result: PrestigeResult) -> None:
        self._prestige_notified = False
        self._refresh_believers()
        self._emit(PrestigeCompleted(result.layer, result.reward_amount))
        self._check_progress()
        self.save()
