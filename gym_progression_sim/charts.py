"""Chart generation for training simulation results."""

from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import matplotlib.ticker as ticker

from gym_progression_sim.cli import COST_LABELS, format_stat
from gym_progression_sim.params import STATS
from gym_progression_sim.simulation import SimulationResult

STAT_COLORS = {
    "strength": "#d62728",   # red
    "speed": "#2ca02c",      # green
    "defense": "#1f77b4",    # blue
    "dexterity": "#ff7f0e",  # orange
}

STATE_COLORS = ["#1f77b4", "#2ca02c", "#ff7f0e", "#d62728", "#9467bd", "#8c564b"]

DEFAULT_COLOR = "#7f7f7f"


def _format_stat_axis(ax: plt.Axes):
    ax.yaxis.set_major_formatter(ticker.FuncFormatter(lambda x, _: format_stat(x)))


def _save(fig, output_path: Path, stem: str, name: str) -> Path:
    output_path.mkdir(parents=True, exist_ok=True)
    suffix = f"-{name}" if name else ""
    filepath = output_path / f"{stem}{suffix}.png"
    fig.tight_layout()
    fig.savefig(filepath, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return filepath


def plot_trajectory(
    results: dict[str, SimulationResult], output_path: Path, name: str = "",
) -> Path:
    """Generate a line chart of total battle stats per state.

    Args:
        results: state name -> SimulationResult.
        output_path: directory to save the PNG.
        name: optional suffix for the output filename (e.g. "q1" -> "trajectory-q1.png").

    Returns:
        Path to the generated PNG file.
    """
    if not results:
        raise ValueError("No results for trajectory chart")

    fig, ax = plt.subplots(figsize=(14, 8))
    for i, (sname, result) in enumerate(results.items()):
        days = [snap.day for snap in result.snapshots]
        totals = [snap.stats.total() for snap in result.snapshots]
        color = STATE_COLORS[i] if i < len(STATE_COLORS) else DEFAULT_COLOR
        ax.plot(days, totals, label=sname, color=color, linewidth=2)
        # Section changes, except the end of the run
        for boundary in result.section_boundaries[:-1]:
            ax.axvline(boundary, color=color, linewidth=0.8, linestyle=":", alpha=0.5)

    ax.set_xlabel("Day")
    ax.set_ylabel("Total battle stats")
    ax.set_title("Battle stat progression")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)
    _format_stat_axis(ax)
    return _save(fig, output_path, "trajectory", name)


def plot_stat_breakdown(
    results: dict[str, SimulationResult], output_path: Path, name: str = "",
) -> Path:
    """One panel per state with each stat's trajectory and the gym in use."""
    if not results:
        raise ValueError("No results for stat breakdown chart")

    cols = 2
    n = len(results)
    rows = (n + 1) // 2
    fig, axes = plt.subplots(rows, cols, figsize=(14, 6 * rows))
    if rows == 1:
        axes = [axes]

    for idx, (sname, result) in enumerate(results.items()):
        row, col = divmod(idx, cols)
        ax = axes[row][col]
        days = [snap.day for snap in result.snapshots]
        for stat in STATS:
            ax.plot(days, [snap.stats.get(stat) for snap in result.snapshots],
                    label=stat.capitalize(), color=STAT_COLORS[stat], linewidth=1.8)

        # Mark gym changes
        prev = result.snapshots[0].gym_index if result.snapshots else None
        for snap in result.snapshots[1:]:
            if snap.gym_index != prev:
                ax.axvline(snap.day, color="#888888", linewidth=0.7, linestyle=":", alpha=0.4)
                prev = snap.gym_index

        ax.set_title(sname)
        ax.set_xlabel("Day")
        ax.set_ylabel("Stat")
        ax.legend(loc="upper left", fontsize=9)
        ax.grid(True, alpha=0.3)
        _format_stat_axis(ax)

    for idx in range(n, rows * cols):
        row, col = divmod(idx, cols)
        axes[row][col].set_visible(False)

    fig.suptitle("Per-stat progression (dotted lines: gym changes)", fontsize=14, y=1.01)
    return _save(fig, output_path, "stats", name)


def plot_costs(
    results: dict[str, SimulationResult], output_path: Path, name: str = "",
) -> Path | None:
    """Stacked bar chart of cost lines per state. Returns None when no state has costs."""
    priced = {n: r for n, r in results.items() if r.costs is not None}
    if not priced:
        return None

    fig, ax = plt.subplots(figsize=(12, 7))
    names = list(priced)
    bottoms = [0.0] * len(names)
    for i, (key, label) in enumerate(COST_LABELS.items()):
        totals = []
        for sname in names:
            line = priced[sname].costs.lines().get(key)
            totals.append(line.total if line is not None else 0.0)
        if not any(totals):
            continue
        color = STATE_COLORS[i] if i < len(STATE_COLORS) else DEFAULT_COLOR
        ax.bar(names, totals, bottom=bottoms, label=label, color=color, alpha=0.8)
        bottoms = [b + t for b, t in zip(bottoms, totals)]

    net = [priced[s].costs.net_cost for s in names]
    ax.scatter(names, net, color="black", marker="D", zorder=5, label="Net cost")
    ax.set_ylabel("Cost ($)")
    ax.set_title("Training cost breakdown")
    ax.yaxis.set_major_formatter(ticker.FuncFormatter(lambda x, _: f"${format_stat(x)}"))
    ax.axhline(0, color="black", linewidth=1.0)
    ax.grid(True, axis="y", alpha=0.3)
    ax.legend(loc="upper left", fontsize=9)
    return _save(fig, output_path, "costs", name)
