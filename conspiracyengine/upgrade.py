from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from conspiracyengine.effect import ModifierDef
from conspiracyengine.requirement import Requirement


class Currency(Enum):
    """What an upgrade in the run-scoped shops is paid with."""

    EVIDENCE = "evidence"
    TINFOIL = "tinfoil"


@dataclass
class UpgradeDef:
    """One-time purchase from the evidence or tinfoil shop."""

    id: str
    display_name: str = ""
    description: str = ""
    cost: float = 0.0
    currency: Currency = Currency.EVIDENCE
    effects: list[ModifierDef] = field(default_factory=list)
    requirements: list[Requirement] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id


@dataclass
class ConspiracyDef:
    """A theory that is proven once enough lifetime evidence is gathered.

    Proving spends nothing; it pays a one-time tinfoil reward and keeps its
    effects active until the next ascension.
    """

    id: str
    display_name: str = ""
    description: str = ""
    evidence_cost: float = 0.0
    tinfoil_reward: int = 0
    effects: list[ModifierDef] = field(default_factory=list)
    requirements: list[Requirement] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id


@dataclass
class SkillDef:
    """Skill tree node bought with skill points. Survives ascension."""

    id: str
    display_name: str = ""
    description: str = ""
    cost: int = 1
    required_skill: str | None = None
    effects: list[ModifierDef] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id


@dataclass
class PrestigeUpgradeDef:
    """Illuminati shop entry, paid with Illuminati tokens."""

    id: str
    display_name: str = ""
    description: str = ""
    token_cost: int = 1
    effects: list[ModifierDef] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id


@dataclass
class MatrixUpgradeDef:
    """Matrix shop entry, paid with glitch tokens."""

    id: str
    display_name: str = ""
    description: str = ""
    glitch_cost: int = 1
    effects: list[ModifierDef] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.display_name:
            self.display_name = self.id
