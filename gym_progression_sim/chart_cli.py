"""CLI entry point for chart generation."""

import sys
from pathlib import Path

from gym_progression_sim.charts import plot_costs, plot_stat_breakdown, plot_trajectory
from gym_progression_sim.comparison import run_comparison, variant_states
from gym_progression_sim.config import (
    build_base_section,
    build_states,
    initial_stats,
    parse_args,
    parse_gym,
    parse_prices,
    parse_start_date,
    total_days,
)
from gym_progression_sim.errors import SimulationError


def _add_args(parser):
    parser.add_argument(
        "--output", type=Path, default=Path("reports/charts"),
        help="output directory (default: reports/charts)",
    )
    parser.add_argument(
        "--name", type=str, default="",
        help="suffix for output file names (e.g. q1 -> trajectory-q1.png)",
    )
    parser.add_argument(
        "--variants", action="store_true",
        help="chart the built-in variants of the base plan instead of [[states]]",
    )


def main():
    r, config_file, args = parse_args("Gym progression chart generation", _add_args)
    try:
        base = build_base_section(r, config_file)
        days = total_days(r)
        states = variant_states(base, days) if args.variants else build_states(base, config_file, days)
        starting_gym = parse_gym(r["starting_gym"])
        start_date = parse_start_date(r["start_date"])
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        raise SystemExit(1)

    print(f"Simulating {len(states)} states over {days} days...", file=sys.stderr)
    all_results = run_comparison(
        states,
        initial_stats=initial_stats(r),
        total_days=days,
        starting_gym_index=starting_gym,
        lock_gym=bool(r["lock_gym"]),
        start_date=start_date,
        prices=parse_prices(config_file),
    )
    valid = {}
    for name, result in all_results.items():
        if isinstance(result, SimulationError):
            print(f"  {name}: {result} (skipped)", file=sys.stderr)
        else:
            valid[name] = result
    if not valid:
        print("  No valid results", file=sys.stderr)
        raise SystemExit(1)

    path = plot_trajectory(valid, args.output, name=args.name)
    print(f"  -> {path}", file=sys.stderr)
    path = plot_stat_breakdown(valid, args.output, name=args.name)
    print(f"  -> {path}", file=sys.stderr)
    path = plot_costs(valid, args.output, name=args.name)
    if path is not None:
        print(f"  -> {path}", file=sys.stderr)
    print("Done", file=sys.stderr)


if __name__ == "__main__":
    main()
