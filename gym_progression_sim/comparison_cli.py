"""CLI entry point for comparing training plans side by side."""

import sys

from gym_progression_sim.cli import format_money, format_stat
from gym_progression_sim.comparison import VARIANTS, run_comparison, variant_states
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
from gym_progression_sim.params import STATS


def _add_args(parser):
    parser.add_argument(
        "--variants", action="store_true",
        help=f"compare built-in variants of the base plan ({', '.join(VARIANTS)}) instead of [[states]]",
    )


def _cell(result, fn, width: int = 16) -> str:
    if isinstance(result, SimulationError):
        return f"{'---':>{width}}"
    return f"{fn(result):>{width}}"


def print_comparison(all_results: dict):
    names = list(all_results)
    width = max(16, *(len(n) + 1 for n in names))
    print("=" * (14 + (width + 1) * len(names)))
    print(f"{'':<14}" + " ".join(f"{n:>{width}}" for n in names))
    print("-" * (14 + (width + 1) * len(names)))
    for stat in STATS:
        print(f"{stat.capitalize():<14}" + " ".join(
            _cell(r, lambda res, s=stat: format_stat(res.final_stats.get(s)), width) for r in all_results.values()
        ))
    print(f"{'Total':<14}" + " ".join(
        _cell(r, lambda res: format_stat(res.final_stats.total()), width) for r in all_results.values()
    ))
    print(f"{'Gain':<14}" + " ".join(
        _cell(r, lambda res: format_stat(res.total_gains.total()), width) for r in all_results.values()
    ))
    print(f"{'Final gym':<14}" + " ".join(
        _cell(r, lambda res: res.snapshots[-1].gym_name, width) for r in all_results.values()
    ))
    if any(not isinstance(r, SimulationError) and r.costs is not None for r in all_results.values()):
        print(f"{'Net cost':<14}" + " ".join(
            _cell(r, lambda res: format_money(res.costs.net_cost) if res.costs else "---", width)
            for r in all_results.values()
        ))
    print("-" * (14 + (width + 1) * len(names)))
    best = max(
        (n for n, r in all_results.items() if not isinstance(r, SimulationError)),
        key=lambda n: all_results[n].final_stats.total(),
        default=None,
    )
    if best is not None:
        print(f"Highest total: {best}")
    for name, r in all_results.items():
        if isinstance(r, SimulationError):
            print(f"  {name}: {r}", file=sys.stderr)


def main():
    r, config_file, args = parse_args("Gym training plan comparison", _add_args)
    try:
        base = build_base_section(r, config_file)
        days = total_days(r)
        if args.variants:
            states = variant_states(base, days)
        else:
            states = build_states(base, config_file, days)
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
    print_comparison(all_results)
    if all(isinstance(res, SimulationError) for res in all_results.values()):
        raise SystemExit(1)


if __name__ == "__main__":
    main()
