from __future__ import annotations

import csv
import json
from pathlib import Path

from conspiracyengine.report import SimulationReport


def export_csv(report: SimulationReport, path: str | Path) -> None:
    """Export simulation data as CSV files.

    Creates three files:
      - {path}_resources.csv
      - {path}_purchases.csv
      - {path}_achievements.csv
    """
    base = str(path)

    with open(f"{base}_resources.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(
            ["time", "evidence", "total_evidence", "eps", "tinfoil", "believers", "illuminati_tokens"]
        )
        for s in report.resource_snapshots:
            writer.writerow(
                [s.time, s.evidence, s.total_evidence, s.eps, s.tinfoil, s.believers, s.illuminati_tokens]
            )

    with open(f"{base}_purchases.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "kind", "item_id", "cost", "evidence_after"])
        for p in report.purchases:
            writer.writerow([p.time, p.kind, p.item_id, p.cost, p.evidence_after])

    with open(f"{base}_achievements.csv", "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["time", "achievement_id"])
        for a in report.achievements:
            writer.writerow([a.time, a.achievement_id])


def export_json(report: SimulationReport, path: str | Path) -> None:
    """Export the full simulation report as JSON."""
    data = {
        "strategy": report.strategy_description,
        "outcome": report.outcome,
        "total_time": report.total_time,
        "final_evidence": report.final_evidence,
        "final_total_evidence": report.final_total_evidence,
        "final_eps": report.final_eps,
        "final_tinfoil": report.final_tinfoil,
        "total_clicks": report.total_clicks,
        "critical_clicks": report.critical_clicks,
        "generator_counts": report.generator_counts,
        "achievement_times": report.achievement_times,
        "first_purchase_times": report.first_purchase_times,
        "purchase_count": len(report.purchases),
        "purchases_per_minute": report.purchases_per_minute,
        "max_purchase_gap": report.max_purchase_gap,
        "mean_purchase_gap": report.mean_purchase_gap,
        "prestiges": [
            {
                "time": p.time,
                "layer": p.layer,
                "reward": p.reward,
                "run_duration": p.run_duration,
            }
            for p in report.prestiges
        ],
        "purchases": [
            {"time": p.time, "kind": p.kind, "item_id": p.item_id, "cost": p.cost}
            for p in report.purchases
        ],
    }
    with open(str(path), "w") as f:
        json.dump(data, f, indent=2)
