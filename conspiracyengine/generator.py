from __future__ import annotations

from dataclasses import dataclass, field

from conspiracyengine.cost_scaling import CostScaling


@dataclass
class GeneratorDef:
    """Static definition of an evidence generator."""

    id: str
    display_name: str = ""
    base_cost: float = 0.0
    base_production: float = 0.0
    cost_multiplier: float = 1.15
    believer_bonus: float = 0.0
    flavor_text: str = ""
    scaling: CostScaling = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id
        self.scaling = CostScaling.exponential(self.cost_multiplier)
