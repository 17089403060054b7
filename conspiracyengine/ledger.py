from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from conspiracyengine._types import non_negative

if TYPE_CHECKING:
    from conspiracyengine.state import GameState

logger = logging.getLogger(__name__)

# Float slack allowed before available believers count as exceeding believers.
_BELIEVER_EPSILON = 1e-9


class InvariantViolation(AssertionError):
    """Raised when game state breaks an invariant in strict mode."""


class ResourceLedger:
    """Sole writer of the numeric balances in a GameState.

    Spends are check-then-mutate: they return False and leave the state
    untouched when the balance is short.
    """

    def __init__(self, state: GameState, strict: bool = False) -> None:
        self.state = state
        self.strict = strict

    # ── Evidence ─────────────────────────────────────────────────────

    def credit_evidence(self, amount: float) -> None:
        if not amount > 0:
            return
        s = self.state
        s.evidence += amount
        s.total_evidence_earned += amount
        s.today_evidence += amount

    def can_afford(self, amount: float) -> bool:
        return self.state.evidence >= amount

    def spend_evidence(self, amount: float) -> bool:
        if amount < 0:
            raise ValueError(f"Cannot spend a negative amount: {amount}")
        if self.state.evidence < amount:
            return False
        self.state.evidence = non_negative(self.state.evidence - amount)
        return True

    def retain_evidence(self, amount: float) -> None:
        """Set the run balance directly, used when a reset keeps a fraction."""
        self.state.evidence = non_negative(amount)

    # ── Integer currencies ───────────────────────────────────────────

    def credit_tinfoil(self, amount: int) -> None:
        if amount > 0:
            self.state.tinfoil += int(amount)

    def accrue_tinfoil(self, amount: float) -> int:
        """Add fractional tinfoil; whole units are credited as they complete."""
        s = self.state
        s.tinfoil_progress += max(0.0, amount)
        whole = int(s.tinfoil_progress)
        if whole:
            s.tinfoil_progress -= whole
            s.tinfoil += whole
        return whole

    def spend_tinfoil(self, amount: int) -> bool:
        if amount < 0:
            raise ValueError(f"Cannot spend a negative amount: {amount}")
        if self.state.tinfoil < amount:
            return False
        self.state.tinfoil -= int(amount)
        return True

    def credit_tokens(self, amount: int) -> None:
        if amount > 0:
            self.state.illuminati_tokens += int(amount)
            self.state.total_illuminati_tokens_earned += int(amount)

    def spend_tokens(self, amount: int) -> bool:
        if amount < 0:
            raise ValueError(f"Cannot spend a negative amount: {amount}")
        if self.state.illuminati_tokens < amount:
            return False
        self.state.illuminati_tokens -= int(amount)
        return True

    def credit_glitch(self, amount: int) -> None:
        if amount > 0:
            self.state.glitch_tokens += int(amount)

    def spend_glitch(self, amount: int) -> bool:
        if amount < 0:
            raise ValueError(f"Cannot spend a negative amount: {amount}")
        if self.state.glitch_tokens < amount:
            return False
        self.state.glitch_tokens -= int(amount)
        return True

    # ── Believers ────────────────────────────────────────────────────

    def set_recruited_believers(self, recruited: float) -> None:
        """Recompute believer totals from generator recruitment."""
        s = self.state
        s.believers = non_negative(recruited + s.bonus_believers - s.believers_lost)
        s.available_believers = non_negative(s.believers - s.committed_believers())

    def reserve_believers(self, amount: float) -> bool:
        s = self.state
        if s.available_believers < amount:
            return False
        s.available_believers = non_negative(s.available_believers - amount)
        return True

    def release_believers(self, amount: float) -> None:
        s = self.state
        s.available_believers = min(s.believers, s.available_believers + amount)

    def forfeit_believers(self, amount: float) -> None:
        """Lose believers sent on a quest; they never come back."""
        s = self.state
        s.believers = non_negative(s.believers - amount)
        s.believers_lost += amount
        s.available_believers = min(s.available_believers, s.believers)

    def add_bonus_believers(self, amount: float) -> None:
        if amount > 0:
            self.state.bonus_believers += amount
            self.state.believers += amount
            self.state.available_believers += amount

    # ── Invariants ───────────────────────────────────────────────────

    def check_invariants(self) -> list[str]:
        """Find broken invariants; raise in strict mode, otherwise clamp them.

        Returns the list of problems found.
        """
        s = self.state
        problems: list[str] = []

        for name in ("evidence", "total_evidence_earned", "believers", "available_believers"):
            if getattr(s, name) < 0:
                problems.append(f"{name} is negative: {getattr(s, name)}")
        for name in ("tinfoil", "illuminati_tokens", "glitch_tokens"):
            if getattr(s, name) < 0:
                problems.append(f"{name} is negative: {getattr(s, name)}")
        if s.available_believers > s.believers + _BELIEVER_EPSILON:
            problems.append(
                f"available_believers ({s.available_believers}) exceeds "
                f"believers ({s.believers})"
            )
        if not 0.0 <= s.combo_meter <= 1.0:
            problems.append(f"combo_meter out of range: {s.combo_meter}")
        for gen_id, count in s.generator_counts.items():
            if count < 0:
                problems.append(f"generator {gen_id!r} has negative count {count}")

        if not problems:
            return problems
        if self.strict:
            raise InvariantViolation("; ".join(problems))

        for problem in problems:
            logger.warning("Clamping broken invariant: %s", problem)
        s.evidence = non_negative(s.evidence)
        s.total_evidence_earned = non_negative(s.total_evidence_earned)
        s.tinfoil = max(0, s.tinfoil)
        s.illuminati_tokens = max(0, s.illuminati_tokens)
        s.glitch_tokens = max(0, s.glitch_tokens)
        s.believers = non_negative(s.believers)
        s.available_believers = min(non_negative(s.available_believers), s.believers)
        s.combo_meter = min(1.0, non_negative(s.combo_meter))
        for gen_id, count in s.generator_counts.items():
            if count < 0:
                s.generator_counts[gen_id] = 0
        return problems
