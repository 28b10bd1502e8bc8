"""Tests for report rendering, CSV export and charts."""

import csv

import pytest
from gym_progression_sim import PlayerStats, TrainingSection, run_comparison, variant_states
from gym_progression_sim.charts import plot_costs, plot_stat_breakdown, plot_trajectory
from gym_progression_sim.errors import ConfigurationError
from gym_progression_sim.report import (
    CSV_COLUMNS,
    build_report_context,
    render_report,
    summary_rows,
    write_csv,
)

CONFIG = """\
months = 1

[prices]
206 = 800000

[[states]]
name = "Plain"

[[states]]
name = "Gym company"
company = "fitness_center"
"""


class TestReport:
    """Markdown report and CSV export."""

    @pytest.fixture
    def ctx(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(CONFIG, encoding="utf-8")
        return build_report_context(path, chart_dir=None)

    def test_states_run(self, ctx):
        assert list(ctx.results) == ["Plain", "Gym company"]
        assert ctx.total_days == 30

    def test_render(self, ctx):
        md = render_report(ctx)
        assert md.startswith("# Gym training projection: 2 plans over 30 days")
        assert "| Strength |" in md
        assert "## Cost estimate" in md
        assert "Daily xanax" in md
        assert "## Charts" not in md

    def test_render_lists_failed_states(self, ctx):
        ctx.results["Broken"] = ConfigurationError("weights must be non-negative", 1, 30)
        md = render_report(ctx)
        assert "Broken: weights must be non-negative (days 1-30)" in md

    def test_csv(self, ctx, tmp_path):
        path = write_csv(ctx.results, tmp_path / "out" / "summary.csv")
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [r["state"] for r in rows] == ["Plain", "Gym company"]
        assert float(rows[0]["initial_strength"]) == 1000
        assert float(rows[1]["final_strength"]) > float(rows[0]["final_strength"])
        assert float(rows[0]["cost_xanax"]) == pytest.approx(30 * 3 * 800000)
        assert rows[0]["cost_edvd"] == ""

    def test_summary_row_for_error(self):
        rows = summary_rows({"bad": ConfigurationError("nope")})
        assert rows[0]["error"] == "nope"
        assert rows[0]["final_strength"] == ""
        assert list(rows[0]) == CSV_COLUMNS


class TestCharts:
    """Chart files written by the matplotlib renderers."""

    def setup_method(self):
        self.results = run_comparison(
            variant_states(TrainingSection(), 30)[:2],
            initial_stats=PlayerStats.uniform(1000),
            total_days=30,
        )

    def test_trajectory(self, tmp_path):
        path = plot_trajectory(self.results, tmp_path, name="t")
        assert path.name == "trajectory-t.png"
        assert path.exists()

    def test_stat_breakdown_single_state(self, tmp_path):
        one = dict(list(self.results.items())[:1])
        assert plot_stat_breakdown(one, tmp_path).exists()

    def test_costs_without_prices(self, tmp_path):
        assert plot_costs(self.results, tmp_path) is None

    def test_empty_results(self, tmp_path):
        with pytest.raises(ValueError, match="No results"):
            plot_trajectory({}, tmp_path)
