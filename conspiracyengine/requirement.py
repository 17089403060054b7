from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Callable

from conspiracyengine._types import compare

if TYPE_CHECKING:
    from conspiracyengine.state import GameState


class Requirement(ABC):
    """Unlock condition evaluated against the current game state."""

    @abstractmethod
    def evaluate(self, state: GameState) -> bool: ...

    def __and__(self, other: Requirement) -> Requirement:
        return _AllRequirement([self, other])

    def __or__(self, other: Requirement) -> Requirement:
        return _AnyRequirement([self, other])


# ── Private implementations ──────────────────────────────────────────


class _TotalEvidenceRequirement(Requirement):
    def __init__(self, op: str, threshold: float) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: GameState) -> bool:
        return compare(state.total_evidence_earned, self.op, self.threshold)


class _GeneratorCountRequirement(Requirement):
    def __init__(self, generator_id: str, op: str, threshold: int) -> None:
        self.generator_id = generator_id
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: GameState) -> bool:
        return compare(state.generator_count(self.generator_id), self.op, self.threshold)


class _AscensionsRequirement(Requirement):
    def __init__(self, op: str, threshold: int) -> None:
        self.op = op
        self.threshold = threshold

    def evaluate(self, state: GameState) -> bool:
        return compare(state.times_ascended, self.op, self.threshold)


class _ConspiracyRequirement(Requirement):
    def __init__(self, conspiracy_id: str) -> None:
        self.conspiracy_id = conspiracy_id

    def evaluate(self, state: GameState) -> bool:
        return self.conspiracy_id in state.proven_conspiracies


class _AllRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: GameState) -> bool:
        return all(r.evaluate(state) for r in self.reqs)


class _AnyRequirement(Requirement):
    def __init__(self, reqs: list[Requirement]) -> None:
        self.reqs = reqs

    def evaluate(self, state: GameState) -> bool:
        return any(r.evaluate(state) for r in self.reqs)


class _CustomRequirement(Requirement):
    def __init__(self, fn: Callable[[GameState], bool]) -> None:
        self.fn = fn

    def evaluate(self, state: GameState) -> bool:
        return self.fn(state)


# ── Public factory ───────────────────────────────────────────────────


class Req:
    """Factory for built-in requirement types."""

    @staticmethod
    def total_evidence(op: str, threshold: float) -> Requirement:
        return _TotalEvidenceRequirement(op, threshold)

    @staticmethod
    def owns(generator_id: str, count: int = 1) -> Requirement:
        return _GeneratorCountRequirement(generator_id, ">=", count)

    @staticmethod
    def count(generator_id: str, op: str, threshold: int) -> Requirement:
        return _GeneratorCountRequirement(generator_id, op, threshold)

    @staticmethod
    def ascensions(op: str, threshold: int) -> Requirement:
        return _AscensionsRequirement(op, threshold)

    @staticmethod
    def proven(conspiracy_id: str) -> Requirement:
        return _ConspiracyRequirement(conspiracy_id)

    @staticmethod
    def all(*reqs: Requirement) -> Requirement:
        return _AllRequirement(list(reqs))

    @staticmethod
    def any(*reqs: Requirement) -> Requirement:
        return _AnyRequirement(list(reqs))

    @staticmethod
    def custom(fn: Callable[[GameState], bool]) -> Requirement:
        return _CustomRequirement(fn)
