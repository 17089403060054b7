from __future__ import annotations

import math
import sys

from conspiracyengine.report import SimulationReport

# Largest first; values at or above the last threshold fall through to
# scientific notation.
_SUFFIXES = (
    (1e15, "Q"),
    (1e12, "T"),
    (1e9, "B"),
    (1e6, "M"),
    (1e3, "K"),
)
_SCIENTIFIC_THRESHOLD = 1e18


def format_number(value: float) -> str:
    """Render a game quantity with a K/M/B/T/Q suffix.

    Below 10 one decimal is kept, below 1000 the value is floored to an
    integer. Huge and non-finite values use scientific notation.
    """
    if math.isnan(value):
        return "NaN"
    if value < 0:
        return "-" + format_number(-value)
    if math.isinf(value):
        value = sys.float_info.max
    if value >= _SCIENTIFIC_THRESHOLD:
        return f"{value:.2e}"
    if value < 1000:
        if value < 10:
            return f"{value:.1f}"
        return str(math.floor(value))
    for threshold, suffix in _SUFFIXES:
        if value >= threshold:
            scaled = value / threshold
            if scaled < 10:
                return f"{scaled:.2f}{suffix}"
            if scaled < 100:
                return f"{scaled:.1f}{suffix}"
            return f"{scaled:.0f}{suffix}"
    return str(math.floor(value))


def format_per_second(value: float) -> str:
    return f"{format_number(value)}/sec"


def format_duration(seconds: float) -> str:
    """``3725`` -> ``"1h 2m"``, ``95`` -> ``"1m 35s"``, ``42`` -> ``"42s"``."""
    total = max(0, int(seconds))
    hours, rest = divmod(total, 3600)
    minutes, secs = divmod(rest, 60)
    if hours:
        return f"{hours}h {minutes}m"
    if minutes:
        return f"{minutes}m {secs}s"
    return f"{secs}s"


def format_text_report(report: SimulationReport) -> str:
    """Format a simulation report for console output."""
    lines: list[str] = []

    lines.append("=" * 30 + " Conspiracy Engine Simulation Report " + "=" * 30)
    lines.append(f"Strategy: {report.strategy_description}")
    lines.append(f"Result: {report.outcome} at {format_duration(report.total_time)}")
    lines.append("")

    lines.append("RESOURCES:")
    lines.append(f"  Evidence: {format_number(report.final_evidence)}")
    lines.append(f"  Lifetime evidence: {format_number(report.final_total_evidence)}")
    lines.append(f"  Production: {format_per_second(report.final_eps)}")
    lines.append(f"  Tinfoil: {report.final_tinfoil}")
    lines.append(f"  Clicks: {report.total_clicks} ({report.critical_clicks} critical)")
    lines.append("")

    if report.achievements:
        lines.append("ACHIEVEMENTS:")
        for a in report.achievements:
            lines.append(f"  * {a.achievement_id:.<30s} {format_duration(a.time)}")
        lines.append("")

    if report.generator_counts:
        lines.append("GENERATORS:")
        for gen_id, count in report.generator_counts.items():
            first = report.first_purchase_times.get(gen_id)
            when = f"first at {format_duration(first)}" if first is not None else ""
            lines.append(f"  {gen_id:.<30s} {count:>5d}  {when}".rstrip())
        lines.append("")

    lines.append("PURCHASES:")
    lines.append(f"  Total: {len(report.purchases)}")
    lines.append(f"  Rate: {report.purchases_per_minute:.1f}/min")
    lines.append(f"  Max gap: {report.max_purchase_gap:.1f}s")
    lines.append(f"  Mean gap: {report.mean_purchase_gap:.1f}s")

    if report.prestiges:
        lines.append("")
        lines.append("PRESTIGE:")
        for p in report.prestiges:
            lines.append(
                f"  {p.layer} at {format_duration(p.time)}: +{p.reward} "
                f"(run of {format_duration(p.run_duration)})"
            )

    return "\n".join(lines)
