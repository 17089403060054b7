from __future__ import annotations

from conspiracyengine.report import SimulationReport


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Generate a 4-panel matplotlib visualization of simulation results.

    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install conspiracyengine[viz]"
        )

    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(
        f"Conspiracy Engine Simulation: {report.strategy_description}",
        fontsize=14,
    )

    # 1. Lifetime evidence (log scale)
    ax1 = axes[0][0]
    series = report.evidence_series()
    if series:
        times, values = zip(*series)
        ax1.plot(times, [max(v, 1e-10) for v in values], label="total evidence")
    ax1.set_yscale("log")
    ax1.set_xlabel("Time (s)")
    ax1.set_ylabel("Evidence")
    ax1.set_title("Lifetime Evidence")
    ax1.grid(True, alpha=0.3)

    # 2. Production rate
    ax2 = axes[0][1]
    series = report.eps_series()
    if series:
        times, rates = zip(*series)
        ax2.plot(times, rates, color="tab:green")
    ax2.set_xlabel("Time (s)")
    ax2.set_ylabel("Evidence/sec")
    ax2.set_title("Production Rate")
    ax2.grid(True, alpha=0.3)

    # 3. Purchase timeline
    ax3 = axes[1][0]
    if report.purchases:
        times = [p.time for p in report.purchases]
        items = [p.item_id for p in report.purchases]
        item_ids = sorted(set(items))
        y_map = {item: i for i, item in enumerate(item_ids)}
        ax3.scatter(times, [y_map[i] for i in items], s=10, alpha=0.6)
        ax3.set_yticks(range(len(item_ids)))
        ax3.set_yticklabels(item_ids, fontsize=7)
        ax3.set_xlabel("Time (s)")
        ax3.set_title("Purchase Timeline")
        ax3.grid(True, alpha=0.3)

    # 4. Purchase gap histogram
    ax4 = axes[1][1]
    if report.purchase_gaps:
        ax4.hist(report.purchase_gaps, bins=min(30, len(report.purchase_gaps)), alpha=0.7)
        ax4.axvline(
            report.mean_purchase_gap,
            color="red",
            linestyle="--",
            label=f"Mean: {report.mean_purchase_gap:.1f}s",
        )
        ax4.set_xlabel("Gap (s)")
        ax4.set_ylabel("Count")
        ax4.set_title("Purchase Gap Distribution")
        ax4.legend()
        ax4.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150)
    else:
        plt.show()
