from __future__ import annotations

import logging
import math
import random

from conspiracyengine.catalog import ContentCatalog
from conspiracyengine.config import EngineConfig
from conspiracyengine.engine import GameEngine
from conspiracyengine.events import AchievementUnlocked, Event, PrestigeCompleted
from conspiracyengine.metrics import MetricsCollector
from conspiracyengine.report import SimulationReport, build_report
from conspiracyengine.strategy import PurchaseOption, Strategy
from conspiracyengine.upgrade import Currency

logger = logging.getLogger(__name__)

MAX_TICKS = 10_000_000
# Guards the buy loop against content with zero-cost items.
MAX_PURCHASES_PER_TICK = 10_000
# 2025-01-15 00:00:00 UTC
DEFAULT_START_TIME = 1_736_899_200.0


class ManualClock:
    """Clock callable the simulation advances by hand."""

    def __init__(self, start: float = DEFAULT_START_TIME) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Simulation:
    """Orchestrates a headless playthrough of a content catalog."""

    def __init__(
        self,
        catalog: ContentCatalog,
        strategy: Strategy,
        duration: float = 3600.0,
        tick_resolution: float = 1.0,
        seed: int | None = None,
        config: EngineConfig | None = None,
        target_evidence: float | None = None,
        start_time: float = DEFAULT_START_TIME,
    ) -> None:
        if tick_resolution <= 0:
            raise ValueError(f"tick_resolution must be positive, got {tick_resolution}")
        self.catalog = catalog
        self.strategy = strategy
        self.duration = duration
        self.tick_resolution = tick_resolution
        self.target_evidence = target_evidence

        self.clock = ManualClock(start_time)
        self.rng = random.Random(seed)
        self.engine = GameEngine(catalog, config, clock=self.clock, rng=self.rng)
        self.engine.new_game()
        self.collector = MetricsCollector(snapshot_interval=tick_resolution)

        self.elapsed = 0.0
        self._run_start = 0.0
        self.engine.subscribe(self._on_event)

    def _on_event(self, event: Event) -> None:
        if isinstance(event, AchievementUnlocked):
            self.collector.record_achievement(self.elapsed, event.achievement.id)
        elif isinstance(event, PrestigeCompleted):
            self.collector.record_prestige(
                self.elapsed, event.layer, event.reward, self.elapsed - self._run_start
            )
            self._run_start = self.elapsed

    # ── Main loop ────────────────────────────────────────────────────

    def run(self) -> SimulationReport:
        engine = self.engine
        tick_count = 0

        while not self._target_reached():
            if self.elapsed >= self.duration:
                return self._build_report("Duration reached")
            tick_count += 1
            if tick_count > MAX_TICKS:
                return self._build_report("Max ticks reached")

            # 1. Advance time
            self.clock.advance(self.tick_resolution)
            self.elapsed += self.tick_resolution
            engine.tick(self.tick_resolution)

            # 2. Clicks
            for _ in range(self.strategy.get_clicks(engine.state, self.tick_resolution)):
                engine.process_click()

            # 3. Free unlocks, quests and purchases
            self._prove_conspiracies()
            if self.strategy.run_quests:
                self._start_quests()
            self._make_purchases()

            # 4. Prestige
            if self.strategy.should_prestige(engine) and engine.prestige.can_ascend(engine.state):
                engine.perform_prestige()

            # 5. Record metrics
            state = engine.state
            self.collector.record_tick(state, self.elapsed, engine.pipeline.eps(state))

            if not math.isfinite(state.evidence) or not math.isfinite(state.total_evidence_earned):
                logger.warning("Simulation aborted at %.1fs: non-finite evidence", self.elapsed)
                return self._build_report("Aborted: NaN/Inf detected")

        return self._build_report("Target evidence reached")

    def _target_reached(self) -> bool:
        return (
            self.target_evidence is not None
            and self.engine.state.total_evidence_earned >= self.target_evidence
        )

    # ── Decisions ────────────────────────────────────────────────────

    def purchase_options(self) -> list[PurchaseOption]:
        """Every generator and shop upgrade affordable right now."""
        engine = self.engine
        state = engine.state
        options: list[PurchaseOption] = []
        for gdef in self.catalog.generators:
            cost = engine.market.cost(state, gdef.id)
            if cost is not None and cost <= state.evidence:
                options.append(PurchaseOption("generator", gdef.id, cost))
        for udef in self.catalog.upgrades:
            if udef.currency is Currency.EVIDENCE:
                if udef.id in state.purchased_upgrades or udef.cost > state.evidence:
                    continue
                kind = "upgrade"
            else:
                if udef.id in state.purchased_tinfoil_upgrades or udef.cost > state.tinfoil:
                    continue
                kind = "tinfoil_upgrade"
            if all(r.evaluate(state) for r in udef.requirements):
                options.append(PurchaseOption(kind, udef.id, udef.cost))
        return options

    def _make_purchases(self) -> None:
        engine = self.engine
        for _ in range(MAX_PURCHASES_PER_TICK):
            options = self.purchase_options()
            if not options:
                return
            bought = False
            for option in self.strategy.decide_purchases(engine, options):
                if option.kind == "generator":
                    bought = engine.purchase_generator(option.item_id)
                else:
                    bought = engine.purchase_upgrade(option.item_id)
                if bought:
                    self.collector.record_purchase(
                        engine.state, self.elapsed, option.kind, option.item_id, option.cost
                    )
                    break
            if not bought:
                return

    def _prove_conspiracies(self) -> None:
        engine = self.engine
        for cdef in self.catalog.conspiracies:
            if engine.prove_conspiracy(cdef.id):
                self.collector.record_purchase(
                    engine.state, self.elapsed, "conspiracy", cdef.id, 0.0
                )

    def _start_quests(self) -> None:
        for qdef in self.catalog.quests:
            self.engine.start_quest(qdef.id)

    def _build_report(self, outcome: str) -> SimulationReport:
        state = self.engine.state
        return build_report(
            collector=self.collector,
            strategy_description=self.strategy.describe(),
            outcome=outcome,
            total_time=self.elapsed,
            final_evidence=state.evidence,
            final_total_evidence=state.total_evidence_earned,
            final_eps=self.engine.pipeline.eps(state),
            final_tinfoil=state.tinfoil,
            total_clicks=state.total_clicks,
            critical_clicks=state.critical_clicks,
            generator_counts=dict(state.generator_counts),
        )
