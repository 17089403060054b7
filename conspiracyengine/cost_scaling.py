from __future__ import annotations

import math

# Above this many units the naive re-sum is skipped; the closed form alone decides.
_RESUM_LIMIT = 1000


class CostScaling:
    """Geometric cost curve: the unit price is ``base * rate ** owned``."""

    def __init__(self, rate: float = 1.15) -> None:
        if rate < 1.0:
            raise ValueError(f"cost rate must be >= 1, got {rate}")
        self.rate = rate

    @classmethod
    def fixed(cls) -> CostScaling:
        """Cost never changes."""
        return cls(1.0)

    @classmethod
    def exponential(cls, growth_rate: float = 1.15) -> CostScaling:
        """Cost = base * growth_rate^count."""
        return cls(growth_rate)

    def compute(self, base_cost: float, owned: int) -> float:
        return base_cost * self._power(owned)

    def _power(self, exponent: int) -> float:
        # Prices past the float range are unaffordable, not an error.
        try:
            return self.rate ** exponent
        except OverflowError:
            return math.inf

    def bulk(self, base_cost: float, owned: int, n: int) -> float:
        """Closed-form price of the next *n* units after *owned*."""
        if n < 0:
            raise ValueError(f"purchase count must be non-negative, got {n}")
        if n == 0:
            return 0.0
        if n == 1:
            return self.compute(base_cost, owned)
        if self.rate == 1.0:
            return base_cost * n
        r = self.rate
        return base_cost * self._power(owned) * (self._power(n) - 1.0) / (r - 1.0)

    def summed(self, base_cost: float, owned: int, n: int) -> float:
        """Price of the next *n* units, one unit at a time."""
        return math.fsum(self.compute(base_cost, owned + i) for i in range(n))

    def max_affordable(self, base_cost: float, owned: int, budget: float) -> int:
        """Largest n whose bulk price fits in *budget*."""
        if base_cost <= 0:
            raise ValueError(f"base cost must be positive, got {base_cost}")
        if not budget >= self.compute(base_cost, owned):
            return 0
        if math.isinf(budget):
            raise ValueError("budget must be finite")

        first = self.compute(base_cost, owned)
        if self.rate == 1.0:
            n = int(budget // base_cost)
        else:
            n = int(math.log(budget * (self.rate - 1.0) / first + 1.0, self.rate))
        n = max(n, 1)

        # The logarithm estimate can land one off either way.
        while n > 0 and not self._fits(base_cost, owned, n, budget):
            n -= 1
        while self._fits(base_cost, owned, n + 1, budget):
            n += 1
        return n

    def _fits(self, base_cost: float, owned: int, n: int, budget: float) -> bool:
        if self.bulk(base_cost, owned, n) > budget:
            return False
        if n <= _RESUM_LIMIT:
            return self.summed(base_cost, owned, n) <= budget
        return True
