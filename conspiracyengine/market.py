from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from conspiracyengine.catalog import ContentCatalog
    from conspiracyengine.ledger import ResourceLedger
    from conspiracyengine.pipeline import MultiplierPipeline
    from conspiracyengine.state import GameState


class GeneratorMarket:
    """Generator prices, bulk purchases, and per-generator output."""

    def __init__(self, catalog: ContentCatalog, pipeline: MultiplierPipeline) -> None:
        self.catalog = catalog
        self.pipeline = pipeline

    def _effective_base(self, state: GameState, generator_id: str) -> float | None:
        gdef = self.catalog.generators.get(generator_id)
        if gdef is None:
            return None
        return gdef.base_cost * self.pipeline.cost_multiplier(state, generator_id)

    # ── Queries ──────────────────────────────────────────────────────

    def cost(self, state: GameState, generator_id: str, owned: int | None = None) -> float | None:
        """Price of the next unit. None for an unknown generator."""
        base = self._effective_base(state, generator_id)
        if base is None:
            return None
        if owned is None:
            owned = state.generator_count(generator_id)
        gdef = self.catalog.generators.get(generator_id)
        return gdef.scaling.compute(base, owned)

    def bulk_cost(
        self, state: GameState, generator_id: str, n: int, owned: int | None = None
    ) -> float | None:
        """Price of the next *n* units as one closed-form sum."""
        base = self._effective_base(state, generator_id)
        if base is None:
            return None
        if owned is None:
            owned = state.generator_count(generator_id)
        gdef = self.catalog.generators.get(generator_id)
        return gdef.scaling.bulk(base, owned, n)

    def buy_max(self, state: GameState, generator_id: str, budget: float | None = None) -> int:
        """How many units *budget* (default: current evidence) can buy."""
        base = self._effective_base(state, generator_id)
        if base is None:
            return 0
        if budget is None:
            budget = state.evidence
        gdef = self.catalog.generators.get(generator_id)
        return gdef.scaling.max_affordable(base, state.generator_count(generator_id), budget)

    def production(self, state: GameState, generator_id: str) -> float:
        """Evidence per second from one generator type, all multipliers applied."""
        per_type = self.pipeline.generator_production(state, generator_id)
        return per_type * self.pipeline.global_multiplier(state)

    # ── Purchases ────────────────────────────────────────────────────

    def purchase(self, ledger: ResourceLedger, generator_id: str) -> bool:
        """Buy one unit. Returns True on success."""
        return self.purchase_many(ledger, generator_id, 1)

    def purchase_many(self, ledger: ResourceLedger, generator_id: str, n: int) -> bool:
        """Buy exactly *n* units or nothing."""
        if n < 0:
            raise ValueError(f"purchase count must be non-negative, got {n}")
        if n == 0:
            return False
        state = ledger.state
        price = self.bulk_cost(state, generator_id, n)
        if price is None:
            return False
        if not ledger.spend_evidence(price):
            return False
        state.generator_counts[generator_id] = state.generator_count(generator_id) + n
        return True

    def purchase_max(self, ledger: ResourceLedger, generator_id: str) -> int:
        """Buy as many units as evidence allows. Returns the number bought."""
        n = self.buy_max(ledger.state, generator_id)
        if n <= 0:
            return 0
        if not self.purchase_many(ledger, generator_id, n):
            return 0
        return n
