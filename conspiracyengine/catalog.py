from __future__ import annotations

from types import MappingProxyType
from typing import Generic, Iterable, Iterator, Protocol, Sequence, TypeVar

from conspiracyengine.achievement import AchievementDef, AchievementType
from conspiracyengine.daily import ChallengeTemplate
from conspiracyengine.effect import TARGETED_TYPES, ModifierDef
from conspiracyengine.generator import GeneratorDef
from conspiracyengine.quest import QuestDef
from conspiracyengine.upgrade import (
    ConspiracyDef,
    MatrixUpgradeDef,
    PrestigeUpgradeDef,
    SkillDef,
    UpgradeDef,
)


class _HasId(Protocol):
    id: str


T = TypeVar("T", bound=_HasId)


class Table(Generic[T]):
    """Read-only, id-indexed sequence of definitions in declaration order."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: tuple[T, ...] = tuple(items)
        self._by_id = MappingProxyType({item.id: item for item in self._items})

    def get(self, id: str) -> T | None:
        return self._by_id.get(id)

    def all(self) -> tuple[T, ...]:
        return self._items

    def ids(self) -> list[str]:
        return [item.id for item in self._items]

    def duplicates(self) -> list[str]:
        seen: set[str] = set()
        dupes: list[str] = []
        for item in self._items:
            if item.id in seen:
                dupes.append(item.id)
            seen.add(item.id)
        return dupes

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, id: object) -> bool:
        return id in self._by_id


class ContentCatalog:
    """Static game content, built once and shared by reference."""

    def __init__(
        self,
        generators: Sequence[GeneratorDef] = (),
        upgrades: Sequence[UpgradeDef] = (),
        conspiracies: Sequence[ConspiracyDef] = (),
        quests: Sequence[QuestDef] = (),
        achievements: Sequence[AchievementDef] = (),
        prestige_upgrades: Sequence[PrestigeUpgradeDef] = (),
        matrix_upgrades: Sequence[MatrixUpgradeDef] = (),
        skills: Sequence[SkillDef] = (),
        challenge_templates: Sequence[ChallengeTemplate] = (),
    ) -> None:
        self.generators: Table[GeneratorDef] = Table(generators)
        self.upgrades: Table[UpgradeDef] = Table(upgrades)
        self.conspiracies: Table[ConspiracyDef] = Table(conspiracies)
        self.quests: Table[QuestDef] = Table(quests)
        self.achievements: Table[AchievementDef] = Table(achievements)
        self.prestige_upgrades: Table[PrestigeUpgradeDef] = Table(prestige_upgrades)
        self.matrix_upgrades: Table[MatrixUpgradeDef] = Table(matrix_upgrades)
        self.skills: Table[SkillDef] = Table(skills)
        self.challenge_templates: Table[ChallengeTemplate] = Table(challenge_templates)

    def tables(self) -> dict[str, Table]:
        return {
            "generator": self.generators,
            "upgrade": self.upgrades,
            "conspiracy": self.conspiracies,
            "quest": self.quests,
            "achievement": self.achievements,
            "prestige upgrade": self.prestige_upgrades,
            "matrix upgrade": self.matrix_upgrades,
            "skill": self.skills,
            "challenge template": self.challenge_templates,
        }

    def validate(self) -> list[str]:
        """Check for common content errors. Returns list of error messages."""
        errors: list[str] = []

        for kind, table in self.tables().items():
            for dupe in table.duplicates():
                errors.append(f"Duplicate {kind} ID: {dupe!r}")

        for g in self.generators:
            if g.base_cost <= 0:
                errors.append(f"Generator {g.id!r} must have a positive base_cost")
            if g.base_production < 0:
                errors.append(f"Generator {g.id!r} has negative base_production")

        def check_effects(owner: str, effects: list[ModifierDef]) -> None:
            for eff in effects:
                if eff.type in TARGETED_TYPES and eff.target:
                    if eff.target not in self.generators:
                        errors.append(
                            f"{owner} has effect targeting unknown generator {eff.target!r}"
                        )

        for u in self.upgrades:
            check_effects(f"Upgrade {u.id!r}", u.effects)
            if u.cost < 0:
                errors.append(f"Upgrade {u.id!r} has negative cost")
        for c in self.conspiracies:
            check_effects(f"Conspiracy {c.id!r}", c.effects)
        for a in self.achievements:
            check_effects(f"Achievement {a.id!r}", a.effects)
            if a.type is AchievementType.GENERATOR_OWNED and a.target not in self.generators:
                errors.append(
                    f"Achievement {a.id!r} targets unknown generator {a.target!r}"
                )
        for p in self.prestige_upgrades:
            check_effects(f"Prestige upgrade {p.id!r}", p.effects)
        for m in self.matrix_upgrades:
            check_effects(f"Matrix upgrade {m.id!r}", m.effects)
        for s in self.skills:
            check_effects(f"Skill {s.id!r}", s.effects)
            if s.required_skill is not None and s.required_skill not in self.skills:
                errors.append(
                    f"Skill {s.id!r} requires unknown skill {s.required_skill!r}"
                )

        for q in self.quests:
            if not 0.0 <= q.success_chance <= 1.0:
                errors.append(f"Quest {q.id!r} success_chance must be in [0, 1]")
            if q.duration_seconds < 0:
                errors.append(f"Quest {q.id!r} has negative duration")
            if q.believers_required < 0:
                errors.append(f"Quest {q.id!r} has negative believers_required")

        return errors
