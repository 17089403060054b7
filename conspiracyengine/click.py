from __future__ import annotations

import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from conspiracyengine._types import Timestamp
from conspiracyengine.config import EngineConfig

if TYPE_CHECKING:
    from conspiracyengine.ledger import ResourceLedger
    from conspiracyengine.pipeline import MultiplierPipeline


@dataclass(frozen=True)
class ClickResult:
    """Outcome of one click. ``combo_burst`` is the burst payout, or None."""

    power: float
    is_critical: bool = False
    combo_burst: float | None = None


class ClickResolver:
    """Turns a click into evidence, a critical roll, and combo progress."""

    def __init__(
        self,
        pipeline: MultiplierPipeline,
        config: EngineConfig | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.pipeline = pipeline
        self.config = config or EngineConfig()
        self.rng = rng or random.Random()

    def resolve(
        self,
        ledger: ResourceLedger,
        now: Timestamp,
        external_multiplier: float = 1.0,
        is_auto: bool = False,
    ) -> ClickResult:
        state = ledger.state
        eps = self.pipeline.eps(state)
        base_power = self.pipeline.base_click_power(state)
        eps_bonus = eps * self.pipeline.eps_fraction_per_click(state)
        golden = self.pipeline.golden_eye_multiplier(state, now)

        power = (base_power + eps_bonus) * external_multiplier * golden

        # Critical roll
        is_critical = False
        crit_chance = self.pipeline.crit_chance(state)
        if crit_chance > 0 and self.rng.random() < crit_chance:
            crit = self.rng.uniform(self.config.crit_multiplier_min, self.config.crit_multiplier_max)
            power *= crit * self.pipeline.crit_damage_multiplier(state)
            is_critical = True
            state.critical_clicks += 1
            state.today_critical_hits += 1

        ledger.credit_evidence(power)
        state.total_clicks += 1
        state.today_clicks += 1

        burst = None
        if not is_auto:
            burst = self._advance_combo(ledger, now, base_power, eps, golden)

        return ClickResult(power=power, is_critical=is_critical, combo_burst=burst)

    def _advance_combo(
        self,
        ledger: ResourceLedger,
        now: Timestamp,
        base_power: float,
        eps: float,
        golden: float,
    ) -> float | None:
        state = ledger.state
        state.last_click_time = now
        state.combo_clicks += 1
        fill = self.config.combo_fill_per_click * self.pipeline.combo_fill_multiplier(state)
        state.combo_meter = min(1.0, state.combo_meter + fill)
        if state.combo_meter < 1.0:
            return None

        cfg = self.config
        burst = (cfg.combo_burst_clicks * base_power + cfg.combo_burst_eps_seconds * eps) * golden
        ledger.credit_evidence(burst)
        state.combo_meter = 0.0
        state.combo_clicks = 0
        state.today_combos += 1
        return burst

    def decay_combo(self, ledger: ResourceLedger, now: Timestamp, delta: float) -> None:
        """Drain the combo meter while no manual click has happened recently."""
        state = ledger.state
        idle = now - state.last_click_time
        if idle <= self.config.combo_idle_grace_seconds:
            return
        state.combo_meter = max(0.0, state.combo_meter - self.config.combo_decay_per_second * delta)
        if idle > self.config.combo_reset_seconds:
            state.combo_clicks = 0
