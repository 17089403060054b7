from __future__ import annotations

import argparse
import importlib
import logging
import sys

from conspiracyengine.catalog import ContentCatalog
from conspiracyengine.formatting import format_duration, format_number, format_text_report
from conspiracyengine.persistence import JsonSlotStore
from conspiracyengine.simulation import Simulation
from conspiracyengine.strategy import STRATEGY_REGISTRY, ClickProfile, Strategy

DEFAULT_CONTENT = "conspiracyengine.content"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="conspiracyengine",
        description="Conspiracy Engine: idle game simulation and save tools",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    sub = parser.add_subparsers(dest="command")

    sim = sub.add_parser("simulate", help="Run a headless balance simulation")
    sim.add_argument(
        "--content",
        default=DEFAULT_CONTENT,
        help=f"Python module with define_catalog() (default: {DEFAULT_CONTENT})",
    )
    sim.add_argument(
        "--strategy",
        default="greedy_cheapest",
        choices=sorted(STRATEGY_REGISTRY),
        help="Strategy to use (default: greedy_cheapest)",
    )
    sim.add_argument("--cps", type=float, default=0.0, help="Manual clicks per second")
    sim.add_argument(
        "--tick-resolution", type=float, default=1.0, help="Seconds per tick"
    )
    sim.add_argument("--seed", type=int, default=None, help="Random seed")
    sim.add_argument(
        "--duration", type=float, default=3600, help="Simulated time in seconds"
    )
    sim.add_argument(
        "--target-evidence",
        type=float,
        default=None,
        help="Stop once lifetime evidence reaches this amount",
    )
    sim.add_argument(
        "--prestige",
        default="never",
        choices=["never", "first_opportunity"],
        help="When to ascend (default: never)",
    )
    sim.add_argument(
        "--quests", action="store_true", help="Start every quest the believers allow"
    )
    sim.add_argument("--export-csv", default=None, help="CSV export path prefix")
    sim.add_argument("--export-json", default=None, help="JSON export path")
    sim.add_argument("--plot", default=None, help="Plot output path (PNG)")

    slots = sub.add_parser("slots", help="List save slots")
    slots.add_argument("--save-dir", required=True, help="Directory holding slot files")

    return parser


def load_catalog(module_path: str) -> ContentCatalog:
    """Import module and call define_catalog()."""
    mod = importlib.import_module(module_path)
    if not hasattr(mod, "define_catalog"):
        print(f"Error: module {module_path!r} has no define_catalog() function")
        sys.exit(1)
    return mod.define_catalog()


def build_strategy(name: str, cps: float, prestige_mode: str, run_quests: bool) -> Strategy:
    click_profile = ClickProfile(cps=cps) if cps > 0 else None
    cls = STRATEGY_REGISTRY.get(name, STRATEGY_REGISTRY["greedy_cheapest"])
    return cls(click_profile=click_profile, prestige_mode=prestige_mode, run_quests=run_quests)


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "simulate":
        _simulate(args)
    elif args.command == "slots":
        _list_slots(args)


def _simulate(args: argparse.Namespace) -> None:
    catalog = load_catalog(args.content)
    strategy = build_strategy(args.strategy, args.cps, args.prestige, args.quests)

    sim = Simulation(
        catalog=catalog,
        strategy=strategy,
        duration=args.duration,
        tick_resolution=args.tick_resolution,
        seed=args.seed,
        target_evidence=args.target_evidence,
    )
    report = sim.run()
    print(format_text_report(report))

    if args.export_csv:
        from conspiracyengine.export import export_csv
        export_csv(report, args.export_csv)
        print(f"\nCSV exported to {args.export_csv}_*.csv")

    if args.export_json:
        from conspiracyengine.export import export_json
        export_json(report, args.export_json)
        print(f"\nJSON exported to {args.export_json}")

    if args.plot:
        from conspiracyengine.visualization import plot_simulation
        plot_simulation(report, args.plot)
        print(f"\nPlot saved to {args.plot}")


def _list_slots(args: argparse.Namespace) -> None:
    store = JsonSlotStore(args.save_dir)
    for info in store.list_slot_info():
        if not info.exists:
            print(f"Slot {info.slot}: empty")
            continue
        print(
            f"Slot {info.slot}: {format_number(info.total_evidence)} evidence, "
            f"{info.ascension_count} ascensions, "
            f"played {format_duration(info.playtime)}"
        )


if __name__ == "__main__":
    main()
