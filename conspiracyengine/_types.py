from __future__ import annotations

import operator
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from conspiracyengine.state import GameState

GeneratorId = str
UpgradeId = str
QuestId = str
AchievementId = str

# Seconds since the epoch.
Timestamp = float
Clock = Callable[[], Timestamp]

DynamicFloat = float | Callable[['GameState'], float]

_OPS: dict[str, Callable[[float, float], bool]] = {
    ">=": operator.ge,
    "<=": operator.le,
    ">": operator.gt,
    "<": operator.lt,
    "==": operator.eq,
    "!=": operator.ne,
}


def resolve_value(value: DynamicFloat, state: GameState) -> float:
    """Resolve a literal float or a callable that takes GameState."""
    if callable(value):
        return value(state)
    return value


def compare(left: float, op: str, right: float) -> bool:
    """Compare two values using a string operator."""
    fn = _OPS.get(op)
    if fn is None:
        raise ValueError(f"Unknown operator: {op!r}. Expected one of {list(_OPS)}")
    return fn(left, right)


def non_negative(value: float) -> float:
    """Floor a balance at zero; also absorbs -0.0 and tiny negative drift."""
    if value > 0.0:
        return value
    return 0.0
