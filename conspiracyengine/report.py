from __future__ import annotations

from dataclasses import dataclass, field

from conspiracyengine.metrics import (
    AchievementEvent,
    MetricsCollector,
    PrestigeEvent,
    PurchaseEvent,
    ResourceSnapshot,
)


@dataclass
class SimulationReport:
    """Container for simulation results and derived metrics."""

    strategy_description: str = ""
    outcome: str = ""
    total_time: float = 0.0

    # Final state
    final_evidence: float = 0.0
    final_total_evidence: float = 0.0
    final_eps: float = 0.0
    final_tinfoil: int = 0
    total_clicks: int = 0
    critical_clicks: int = 0
    generator_counts: dict[str, int] = field(default_factory=dict)

    # Raw metrics
    resource_snapshots: list[ResourceSnapshot] = field(default_factory=list)
    purchases: list[PurchaseEvent] = field(default_factory=list)
    achievements: list[AchievementEvent] = field(default_factory=list)
    prestiges: list[PrestigeEvent] = field(default_factory=list)

    # Derived metrics
    achievement_times: dict[str, float] = field(default_factory=dict)
    first_purchase_times: dict[str, float] = field(default_factory=dict)
    purchase_gaps: list[float] = field(default_factory=list)
    max_purchase_gap: float = 0.0
    mean_purchase_gap: float = 0.0
    purchases_per_minute: float = 0.0

    def achievement_time(self, achievement_id: str) -> float | None:
        return self.achievement_times.get(achievement_id)

    def evidence_series(self) -> list[tuple[float, float]]:
        """Return (time, lifetime evidence) pairs."""
        return [(s.time, s.total_evidence) for s in self.resource_snapshots]

    def eps_series(self) -> list[tuple[float, float]]:
        return [(s.time, s.eps) for s in self.resource_snapshots]


def build_report(
    collector: MetricsCollector,
    strategy_description: str,
    outcome: str,
    total_time: float,
    **final: object,
) -> SimulationReport:
    """Build a SimulationReport from collected metrics.

    *final* holds the end-of-run fields (``final_evidence``,
    ``generator_counts`` and so on).
    """
    achievement_times = {a.achievement_id: a.time for a in collector.achievements}

    first_purchase_times: dict[str, float] = {}
    for p in collector.purchases:
        first_purchase_times.setdefault(p.item_id, p.time)

    purchase_gaps: list[float] = []
    purchase_times = sorted(p.time for p in collector.purchases)
    if purchase_times:
        purchase_gaps.append(purchase_times[0])
        for i in range(1, len(purchase_times)):
            purchase_gaps.append(purchase_times[i] - purchase_times[i - 1])

    max_gap = max(purchase_gaps) if purchase_gaps else 0.0
    mean_gap = (sum(purchase_gaps) / len(purchase_gaps)) if purchase_gaps else 0.0
    ppm = (len(collector.purchases) / total_time * 60.0) if total_time > 0 else 0.0

    return SimulationReport(
        strategy_description=strategy_description,
        outcome=outcome,
        total_time=total_time,
        resource_snapshots=collector.resource_snapshots,
        purchases=collector.purchases,
        achievements=collector.achievements,
        prestiges=collector.prestiges,
        achievement_times=achievement_times,
        first_purchase_times=first_purchase_times,
        purchase_gaps=purchase_gaps,
        max_purchase_gap=max_gap,
        mean_purchase_gap=mean_gap,
        purchases_per_minute=ppm,
        **final,  # type: ignore[arg-type]
    )
