"""CLI entry point for a single training projection."""

import sys

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
from gym_progression_sim.costs import CostSummary
from gym_progression_sim.errors import SimulationError
from gym_progression_sim.gyms import gym_at
from gym_progression_sim.params import STATS, TrainingSection
from gym_progression_sim.simulation import SimulationConfig, SimulationResult, simulate

COST_LABELS = {
    "edvd": "eDVD jumps",
    "stacked_candy": "Stacked candy jumps",
    "candy": "Candy jumps",
    "energy_drink": "Energy drinks",
    "refill_coupon": "Refill coupons",
    "xanax": "Daily xanax",
    "points_refill": "Points refill",
    "island": "Island",
}


def format_stat(v: float) -> str:
    """Compact stat display: 1.23m, 45.6k, 980."""
    if abs(v) >= 1_000_000_000:
        return f"{v / 1_000_000_000:.2f}b"
    if abs(v) >= 1_000_000:
        return f"{v / 1_000_000:.2f}m"
    if abs(v) >= 1_000:
        return f"{v / 1_000:.1f}k"
    return f"{v:.0f}"


def format_money(v: float) -> str:
    return f"${v:,.0f}"


def _print_header(config: SimulationConfig, section: TrainingSection):
    e = section.energy
    print("=" * 80)
    print(f"Gym progression ({config.total_days} days, from {gym_at(config.starting_gym_index, config.catalog).display_name}"
          f"{', locked' if config.lock_gym else ''})")
    print("  Initial stats: " + " / ".join(f"{s[:3].upper()} {format_stat(config.initial_stats.get(s))}" for s in STATS))
    if e.manual_energy is not None:
        print(f"  Energy: {e.manual_energy:.0f}/day (manual)")
    else:
        print(f"  Energy: {e.hours_played_per_day:g}h/day, {e.stimulants_per_day} xanax, "
              f"refill {'on' if e.daily_refill else 'off'}, {e.max_energy:.0f} bar")
    print(f"  Happy: {section.happy:.0f} / Company: {section.company.name} / Drift: {section.drift_percent:g}%")
    weights = "/".join(f"{w:g}" for w in section.weights.values())
    print(f"  Weights (str/spd/def/dex): {weights}")
    if config.start_date is not None:
        print(f"  Start date: {config.start_date.isoformat()}")
    print("=" * 80)


def _print_final_stats(result: SimulationResult):
    gains = result.total_gains
    print("\n[Final stats]")
    print("-" * 60)
    print(f"{'Stat':<12} {'Initial':>14} {'Final':>14} {'Gain':>14}")
    print("-" * 60)
    for stat in STATS:
        print(f"{stat.capitalize():<12} "
              f"{format_stat(result.initial_stats.get(stat)):>14} "
              f"{format_stat(result.final_stats.get(stat)):>14} "
              f"{format_stat(gains.get(stat)):>14}")
    print("-" * 60)
    print(f"{'Total':<12} "
          f"{format_stat(result.initial_stats.total()):>14} "
          f"{format_stat(result.final_stats.total()):>14} "
          f"{format_stat(gains.total()):>14}")


def _print_jumps(result: SimulationResult):
    if not result.jump_summaries:
        return
    print("\n[Jumps]")
    for name, summary in result.jump_summaries.items():
        avg = summary.average_gains.total()
        print(f"  {name:<15} {summary.jumps:>4}x  total {format_stat(summary.gains.total()):>10}"
              f"  avg {format_stat(avg):>10}")


def print_costs(costs: CostSummary | None, indent: str = "  "):
    if costs is None:
        return
    print("\n[Costs]")
    for key, line in costs.lines().items():
        print(f"{indent}{COST_LABELS[key]:<22} {line.uses:>5} x {format_money(line.unit_cost):>16}"
              f" = {format_money(line.total):>18}")
    if costs.loss_revive_income is not None:
        income = "-" + format_money(costs.total_income)
        print(f"{indent}{'Loss/revive income':<22} {income:>45}")
    print(f"{indent}{'Net cost':<22} {format_money(costs.net_cost):>45}")


def _print_monthly_log(result: SimulationResult):
    print("\n[Monthly log]")
    print("-" * 80)
    print(f"{'Day':>5} {'Gym':<22} " + " ".join(f"{s[:3].upper():>9}" for s in STATS) + f" {'Energy':>8}")
    print("-" * 80)
    for snap in result.snapshots:
        if snap.day % 30 != 0 and snap.day != len(result.snapshots):
            continue
        print(f"{snap.day:>5} {snap.gym_name:<22} "
              + " ".join(f"{format_stat(snap.stats.get(s)):>9}" for s in STATS)
              + f" {snap.energy:>8.0f}")
    print("-" * 80)


def report_error(error: SimulationError):
    print(f"Invalid configuration: {error}", file=sys.stderr)


def main():
    """Run one projection and print its summary."""
    r, config_file, _ = parse_args("Gym training progression simulator")
    try:
        base = build_base_section(r, config_file)
        days = total_days(r)
        states = build_states(base, config_file, days)
        state = states[0]
        config = SimulationConfig(
            sections=state.sections,
            initial_stats=initial_stats(r),
            starting_gym_index=(
                parse_gym(r["starting_gym"]) if state.starting_gym_index is None else state.starting_gym_index
            ),
            lock_gym=bool(r["lock_gym"]) if state.lock_gym is None else state.lock_gym,
            total_days=days,
            start_date=parse_start_date(r["start_date"]),
            prices=parse_prices(config_file),
        )
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        raise SystemExit(1)

    if len(states) > 1:
        print(f"{len(states)} states in config; showing {state.name!r} (use gym-sim-compare for all)",
              file=sys.stderr)

    result = simulate(config)
    if isinstance(result, SimulationError):
        report_error(result)
        raise SystemExit(1)

    _print_header(config, config.sections[0])
    _print_final_stats(result)
    print(f"\nFinal gym: {gym_at(result.final_gym_index, config.catalog).display_name}"
          f" ({result.final_energy_spent:,.0f} gym energy)")
    _print_jumps(result)
    print_costs(result.costs)
    _print_monthly_log(result)


if __name__ == "__main__":
    main()
