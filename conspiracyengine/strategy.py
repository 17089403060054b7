from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from conspiracyengine.requirement import Requirement

if TYPE_CHECKING:
    from conspiracyengine.engine import GameEngine
    from conspiracyengine.state import GameState


@dataclass(frozen=True)
class PurchaseOption:
    """Something the simulator could buy right now."""

    kind: str  # "generator", "upgrade" or "tinfoil_upgrade"
    item_id: str
    cost: float


@dataclass
class ClickProfile:
    """Configures manual clicking for strategies.

    Fractional clicks carry over between ticks so a rate below one click
    per tick still clicks at the right average pace.
    """

    cps: float = 0.0
    active_until: Requirement | None = None
    _carry: float = field(default=0.0, init=False, repr=False)

    def get_clicks(self, state: GameState, duration: float) -> int:
        if self.cps <= 0:
            return 0
        if self.active_until is not None and self.active_until.evaluate(state):
            return 0
        self._carry += self.cps * duration
        clicks = int(self._carry)
        self._carry -= clicks
        return clicks


def income(engine: GameEngine, cps: float, state: GameState | None = None) -> float:
    """Evidence per second from production plus *cps* manual clicks."""
    if state is None:
        state = engine.state
    pipeline = engine.pipeline
    eps = pipeline.eps(state)
    click = pipeline.base_click_power(state) + eps * pipeline.eps_fraction_per_click(state)
    return eps + cps * click


def income_gain(engine: GameEngine, option: PurchaseOption, cps: float) -> float:
    """How much :func:`income` would rise if *option* were owned.

    Evaluated on a shallow copy; the engine's state is left untouched.
    """
    state = engine.state
    trial = copy.copy(state)
    if option.kind == "generator":
        trial.generator_counts = dict(state.generator_counts)
        trial.generator_counts[option.item_id] = state.generator_count(option.item_id) + 1
    elif option.kind == "upgrade":
        trial.purchased_upgrades = state.purchased_upgrades | {option.item_id}
    else:
        trial.purchased_tinfoil_upgrades = state.purchased_tinfoil_upgrades | {option.item_id}
    return income(engine, cps, trial) - income(engine, cps, state)


class Strategy(ABC):
    """Base class for simulation strategies."""

    def __init__(
        self,
        click_profile: ClickProfile | None = None,
        prestige_mode: str = "never",
        min_tokens: int = 1,
        run_quests: bool = False,
    ) -> None:
        self.click_profile = click_profile
        self.prestige_mode = prestige_mode  # "never" or "first_opportunity"
        self.min_tokens = min_tokens
        self.run_quests = run_quests

    @property
    def cps(self) -> float:
        return self.click_profile.cps if self.click_profile else 0.0

    @abstractmethod
    def decide_purchases(
        self, engine: GameEngine, options: list[PurchaseOption]
    ) -> list[PurchaseOption]:
        """Return the options to try, most wanted first."""
        ...

    def get_clicks(self, state: GameState, duration: float) -> int:
        if self.click_profile:
            return self.click_profile.get_clicks(state, duration)
        return 0

    def should_prestige(self, engine: GameEngine) -> bool:
        if self.prestige_mode != "first_opportunity":
            return False
        return engine.prestige.pending_tokens(engine.state) >= self.min_tokens

    @abstractmethod
    def describe(self) -> str: ...

    def _describe_clicks(self, name: str) -> str:
        if self.cps > 0:
            return f"{name} ({self.cps:g} CPS)"
        return name


def _tinfoil_first(options: list[PurchaseOption]) -> list[PurchaseOption]:
    # Tinfoil has no other use, so tinfoil upgrades never compete with evidence.
    return sorted(
        (o for o in options if o.kind == "tinfoil_upgrade"), key=lambda o: o.cost
    )


class GreedyCheapest(Strategy):
    """Buy the cheapest affordable item first."""

    def decide_purchases(
        self, engine: GameEngine, options: list[PurchaseOption]
    ) -> list[PurchaseOption]:
        evidence = sorted(
            (o for o in options if o.kind != "tinfoil_upgrade"), key=lambda o: o.cost
        )
        return _tinfoil_first(options) + evidence

    def describe(self) -> str:
        return self._describe_clicks("GreedyCheapest")


class BestValue(Strategy):
    """Buy the item with the best income gained per evidence spent."""

    def decide_purchases(
        self, engine: GameEngine, options: list[PurchaseOption]
    ) -> list[PurchaseOption]:
        scored: list[tuple[float, PurchaseOption]] = []
        for option in options:
            if option.kind == "tinfoil_upgrade":
                continue
            gain = income_gain(engine, option, self.cps)
            value = gain / option.cost if option.cost > 0 else float("inf")
            scored.append((value, option))
        scored.sort(key=lambda pair: -pair[0])
        return _tinfoil_first(options) + [o for _, o in scored]

    def describe(self) -> str:
        return self._describe_clicks("BestValue")


STRATEGY_REGISTRY: dict[str, type[Strategy]] = {
    "greedy_cheapest": GreedyCheapest,
    "best_value": BestValue,
}
