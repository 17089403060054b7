from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Callable, Union

from conspiracyengine.achievement import AchievementDef
from conspiracyengine.daily import StoredChallenge


# ── Notifications ────────────────────────────────────────────────────


@dataclass(frozen=True)
class TickEvent:
    delta: float


@dataclass(frozen=True)
class FlavorMessage:
    text: str


@dataclass(frozen=True)
class AchievementUnlocked:
    achievement: AchievementDef


@dataclass(frozen=True)
class ClickProcessed:
    power: float
    is_critical: bool


@dataclass(frozen=True)
class ComboBurst:
    amount: float


@dataclass(frozen=True)
class QuestCompleted:
    quest_id: str
    success: bool
    evidence: float
    tinfoil: int


@dataclass(frozen=True)
class GoldenEyeStarted:
    end_time: float


@dataclass(frozen=True)
class GoldenEyeEnded:
    pass


@dataclass(frozen=True)
class PrestigeAvailable:
    pending_tokens: int


@dataclass(frozen=True)
class PrestigeCompleted:
    layer: str
    reward: int


@dataclass(frozen=True)
class DailyChallengeCompleted:
    challenge: StoredChallenge


Event = Union[
    TickEvent,
    FlavorMessage,
    AchievementUnlocked,
    ClickProcessed,
    ComboBurst,
    QuestCompleted,
    GoldenEyeStarted,
    GoldenEyeEnded,
    PrestigeAvailable,
    PrestigeCompleted,
    DailyChallengeCompleted,
]

Subscriber = Callable[[Event], None]


class EventBus:
    """Ordered outbound channel from the engine.

    Subscribers are called synchronously in emission order on the thread
    that drives the engine. Events are also queued so a presentation
    layer can poll with :meth:`drain` instead of subscribing.
    """

    def __init__(self, max_queue: int | None = 10_000) -> None:
        self._subscribers: list[Subscriber] = []
        self._queue: deque[Event] = deque(maxlen=max_queue)

    def subscribe(self, fn: Subscriber) -> Callable[[], None]:
        """Register *fn*. Returns a callable that unsubscribes it."""
        self._subscribers.append(fn)
        return lambda: self.unsubscribe(fn)

    def unsubscribe(self, fn: Subscriber) -> None:
        if fn in self._subscribers:
            self._subscribers.remove(fn)

    def emit(self, event: Event) -> None:
        self._queue.append(event)
        for fn in list(self._subscribers):
            fn(event)

    def drain(self) -> list[Event]:
        """Remove and return every queued event, oldest first."""
        events = list(self._queue)
        self._queue.clear()
        return events


class EngineListener:
    """Callback-style adapter: override the ``on_*`` hooks you need.

    Register with ``bus.subscribe(listener.dispatch)``.
    """

    def on_tick(self, event: TickEvent) -> None: ...

    def on_flavor_message(self, text: str) -> None: ...

    def on_achievement_unlocked(self, achievement: AchievementDef) -> None: ...

    def on_click_processed(self, power: float, is_critical: bool) -> None: ...

    def on_combo_burst(self, amount: float) -> None: ...

    def on_quest_complete(
        self, quest_id: str, success: bool, evidence: float, tinfoil: int
    ) -> None: ...

    def on_golden_eye_start(self) -> None: ...

    def on_golden_eye_end(self) -> None: ...

    def on_prestige_available(self) -> None: ...

    def on_prestige_complete(self) -> None: ...

    def on_daily_challenge_complete(self, challenge: StoredChallenge) -> None: ...

    def dispatch(self, event: Event) -> None:
        if isinstance(event, TickEvent):
            self.on_tick(event)
        elif isinstance(event, FlavorMessage):
            self.on_flavor_message(event.text)
        elif isinstance(event, AchievementUnlocked):
            self.on_achievement_unlocked(event.achievement)
        elif isinstance(event, ClickProcessed):
            self.on_click_processed(event.power, event.is_critical)
        elif isinstance(event, ComboBurst):
            self.on_combo_burst(event.amount)
        elif isinstance(event, QuestCompleted):
            self.on_quest_complete(event.quest_id, event.success, event.evidence, event.tinfoil)
        elif isinstance(event, GoldenEyeStarted):
            self.on_golden_eye_start()
        elif isinstance(event, GoldenEyeEnded):
            self.on_golden_eye_end()
        elif isinstance(event, PrestigeAvailable):
            self.on_prestige_available()
        elif isinstance(event, PrestigeCompleted):
            self.on_prestige_complete()
        elif isinstance(event, DailyChallengeCompleted):
            self.on_daily_challenge_complete(event.challenge)
