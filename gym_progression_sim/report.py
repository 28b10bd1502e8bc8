"""Template-based report generator.

Builds a ReportContext from comparison results and renders a Markdown report
using Python f-strings, plus a CSV export of the per-state summary.
"""

from __future__ import annotations

import argparse
import csv
import sys
from dataclasses import dataclass, field
from pathlib import Path

from gym_progression_sim.charts import plot_costs, plot_stat_breakdown, plot_trajectory
from gym_progression_sim.cli import COST_LABELS, format_money, format_stat
from gym_progression_sim.comparison import ComparisonState, run_comparison, variant_states
from gym_progression_sim.config import (
    DEFAULTS,
    build_base_section,
    build_states,
    initial_stats,
    load_config,
    parse_gym,
    parse_prices,
    parse_start_date,
    resolve,
    total_days,
)
from gym_progression_sim.costs import COST_KEYS
from gym_progression_sim.errors import SimulationError
from gym_progression_sim.gyms import gym_at, total_gyms
from gym_progression_sim.params import STATS, PlayerStats, TrainingSection
from gym_progression_sim.simulation import SimulationResult

# ---------------------------------------------------------------------------
# Format helpers
# ---------------------------------------------------------------------------

def fmt_cost(line) -> str:
    if line is None:
        return "---"
    return format_money(line.total)


def fmt_gain_pct(result: SimulationResult) -> str:
    initial = result.initial_stats.total()
    if initial <= 0:
        return "---"
    return f"+{result.total_gains.total() / initial * 100:.1f}%"


# ---------------------------------------------------------------------------
# ReportContext
# ---------------------------------------------------------------------------

@dataclass
class ReportContext:
    # Input parameters
    r: dict
    total_days: int
    base: TrainingSection
    initial_stats: PlayerStats
    states: list[ComparisonState]

    # Simulation results
    results: dict[str, SimulationResult | SimulationError]

    # Chart paths (relative to the report)
    chart_paths: dict[str, Path] = field(default_factory=dict)

    @property
    def valid(self) -> dict[str, SimulationResult]:
        return {n: r for n, r in self.results.items() if not isinstance(r, SimulationError)}


# ---------------------------------------------------------------------------
# build_report_context
# ---------------------------------------------------------------------------

def _resolve_config(config_path: Path | None) -> tuple[dict, dict]:
    """Load and resolve config without CLI args."""
    config = load_config(config_path)
    ns = argparse.Namespace(**{k: None for k in DEFAULTS})
    return resolve(ns, config), config


def build_report_context(
    config_path: Path | None,
    name: str = "",
    variants: bool = False,
    chart_dir: Path | None = Path("reports/charts"),
) -> ReportContext:
    """Run all comparison states and build a complete report context.

    Raises ValueError for configuration the parsers reject. Validation errors
    from the simulator are kept per state in `results`.
    """
    r, config = _resolve_config(config_path)
    base = build_base_section(r, config)
    days = total_days(r)
    states = variant_states(base, days) if variants else build_states(base, config, days)
    stats = initial_stats(r)

    print(f"Simulating {len(states)} states over {days} days...", file=sys.stderr)
    results = run_comparison(
        states,
        initial_stats=stats,
        total_days=days,
        starting_gym_index=parse_gym(r["starting_gym"]),
        lock_gym=bool(r["lock_gym"]),
        start_date=parse_start_date(r["start_date"]),
        prices=parse_prices(config),
    )
    ctx = ReportContext(r=r, total_days=days, base=base, initial_stats=stats, states=states, results=results)

    if chart_dir is not None and ctx.valid:
        print("Generating charts...", file=sys.stderr)
        ctx.chart_paths["trajectory"] = plot_trajectory(ctx.valid, chart_dir, name=name)
        ctx.chart_paths["stats"] = plot_stat_breakdown(ctx.valid, chart_dir, name=name)
        costs = plot_costs(ctx.valid, chart_dir, name=name)
        if costs is not None:
            ctx.chart_paths["costs"] = costs
    return ctx


# ---------------------------------------------------------------------------
# Section renderers
# ---------------------------------------------------------------------------

def _render_title(ctx: ReportContext) -> str:
    return f"# Gym training projection: {len(ctx.states)} plans over {ctx.total_days} days\n\n---"


def _render_inputs(ctx: ReportContext) -> str:
    b = ctx.base
    e = b.energy
    lines = ["\n## Inputs\n", "| Item | Value |", "|---|---|"]
    lines.append("| Initial stats | " + " / ".join(
        f"{s[:3].upper()} {format_stat(ctx.initial_stats.get(s))}" for s in STATS
    ) + " |")
    idx = parse_gym(ctx.r["starting_gym"])
    gym_name = gym_at(idx).display_name if 0 <= idx < total_gyms() else f"#{idx}"
    lines.append(f"| Starting gym | {gym_name}"
                 f"{' (locked)' if ctx.r['lock_gym'] else ''} |")
    if e.manual_energy is not None:
        lines.append(f"| Energy | {e.manual_energy:.0f}/day (manual) |")
    else:
        lines.append(f"| Energy | {e.hours_played_per_day:g}h/day, {e.stimulants_per_day} xanax, "
                     f"refill {'on' if e.daily_refill else 'off'}, {e.max_energy:.0f} bar |")
    lines.append(f"| Happy | {b.happy:.0f} |")
    lines.append(f"| Weights (str/spd/def/dex) | {'/'.join(f'{w:g}' for w in b.weights.values())} |")
    lines.append(f"| Company | {b.company.name} |")
    if ctx.r["start_date"]:
        lines.append(f"| Start date | {ctx.r['start_date']} |")
    return "\n".join(lines)


def _render_summary(ctx: ReportContext) -> str:
    names = list(ctx.results)
    lines = ["\n## Final stats\n"]
    lines.append("| | " + " | ".join(names) + " |")
    lines.append("|---|" + "---:|" * len(names))

    def row(label, fn):
        cells = ["---" if isinstance(res, SimulationError) else fn(res) for res in ctx.results.values()]
        lines.append(f"| {label} | " + " | ".join(cells) + " |")

    for stat in STATS:
        row(stat.capitalize(), lambda res, s=stat: format_stat(res.final_stats.get(s)))
    row("**Total**", lambda res: f"**{format_stat(res.final_stats.total())}**")
    row("Gain", fmt_gain_pct)
    row("Final gym", lambda res: res.snapshots[-1].gym_name)

    errors = {n: res for n, res in ctx.results.items() if isinstance(res, SimulationError)}
    if errors:
        lines.append("")
        lines.append("> **Plans that failed validation:**")
        for n, err in errors.items():
            lines.append(f"> - {n}: {err}")
    return "\n".join(lines)


def _render_jumps(ctx: ReportContext) -> str:
    rows = []
    for n, res in ctx.valid.items():
        for kind, summary in res.jump_summaries.items():
            rows.append(f"| {n} | {kind} | {summary.jumps} | {format_stat(summary.gains.total())} "
                        f"| {format_stat(summary.average_gains.total())} |")
        if res.diabetes_day_gains:
            dd_total = sum(g.total() for g in res.diabetes_day_gains)
            rows.append(f"| {n} | diabetes_day | {len(res.diabetes_day_gains)} | {format_stat(dd_total)} "
                        f"| {format_stat(dd_total / len(res.diabetes_day_gains))} |")
    if not rows:
        return ""
    lines = ["\n## Happy jumps\n", "| Plan | Jump | Count | Total gain | Average gain |", "|---|---|---:|---:|---:|"]
    return "\n".join(lines + rows)


def _render_costs(ctx: ReportContext) -> str:
    priced = {n: res for n, res in ctx.valid.items() if res.costs is not None}
    if not priced:
        return ""
    names = list(priced)
    lines = ["\n## Cost estimate\n"]
    lines.append("| | " + " | ".join(names) + " |")
    lines.append("|---|" + "---:|" * len(names))
    for key in COST_KEYS:
        cells = [fmt_cost(getattr(priced[n].costs, key)) for n in names]
        if all(c == "---" for c in cells):
            continue
        lines.append(f"| {COST_LABELS[key]} | " + " | ".join(cells) + " |")
    income = [priced[n].costs.loss_revive_income for n in names]
    if any(i is not None for i in income):
        lines.append("| Loss/revive income | " + " | ".join(
            "---" if i is None else "-" + format_money(i.total) for i in income
        ) + " |")
    lines.append("| **Net cost** | " + " | ".join(
        f"**{format_money(priced[n].costs.net_cost)}**" for n in names
    ) + " |")
    lines.append("")
    lines.append("Lines shown as --- had no price in `[prices]` or were never used.")
    return "\n".join(lines)


def _render_charts(ctx: ReportContext, report_dir: Path) -> str:
    if not ctx.chart_paths:
        return ""
    titles = {"trajectory": "Total stats", "stats": "Per-stat progression", "costs": "Costs"}
    lines = ["\n## Charts\n"]
    for key, path in ctx.chart_paths.items():
        try:
            rel = path.relative_to(report_dir)
        except ValueError:
            rel = path
        lines.append(f"![{titles[key]}]({rel.as_posix()})\n")
    return "\n".join(lines)


def render_report(ctx: ReportContext, report_dir: Path = Path("reports")) -> str:
    parts = [
        _render_title(ctx),
        _render_inputs(ctx),
        _render_summary(ctx),
        _render_jumps(ctx),
        _render_costs(ctx),
        _render_charts(ctx, report_dir),
    ]
    return "\n".join(p for p in parts if p) + "\n"


# ---------------------------------------------------------------------------
# CSV export
# ---------------------------------------------------------------------------

CSV_COLUMNS = (
    ["state"]
    + [f"initial_{s}" for s in STATS]
    + [f"final_{s}" for s in STATS]
    + [f"gain_{s}" for s in STATS]
    + ["final_gym"]
    + [f"cost_{k}" for k in COST_KEYS]
    + ["loss_revive_income", "net_cost", "error"]
)


def summary_rows(results: dict[str, SimulationResult | SimulationError]) -> list[dict]:
    """One flat row per state; failed states carry only the error text."""
    rows = []
    for n, res in results.items():
        row = {c: "" for c in CSV_COLUMNS}
        row["state"] = n
        if isinstance(res, SimulationError):
            row["error"] = str(res)
            rows.append(row)
            continue
        gains = res.total_gains
        for s in STATS:
            row[f"initial_{s}"] = round(res.initial_stats.get(s), 2)
            row[f"final_{s}"] = round(res.final_stats.get(s), 2)
            row[f"gain_{s}"] = round(gains.get(s), 2)
        row["final_gym"] = res.snapshots[-1].gym_name
        if res.costs is not None:
            for k in COST_KEYS:
                line = getattr(res.costs, k)
                row[f"cost_{k}"] = "" if line is None else round(line.total, 2)
            if res.costs.loss_revive_income is not None:
                row["loss_revive_income"] = round(res.costs.loss_revive_income.total, 2)
            row["net_cost"] = round(res.costs.net_cost, 2)
        rows.append(row)
    return rows


def write_csv(results: dict[str, SimulationResult | SimulationError], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        writer.writerows(summary_rows(results))
    return path
