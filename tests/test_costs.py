"""Tests for cost and income accounting."""

import pytest
from gym_progression_sim import (
    CandyJump,
    EdvdJump,
    EnergyPolicy,
    LossReviveConfig,
    SimulationConfig,
    TrainingSection,
    simulate,
)
from gym_progression_sim.costs import CostLine, CostSummary
from gym_progression_sim.params import (
    CANDY_ECSTASY_ID,
    DVD_ID,
    ECSTASY_ID,
    POINTS_ID,
    XANAX_ID,
)

PRICES = {
    POINTS_ID: 40_000,
    XANAX_ID: 800_000,
    ECSTASY_ID: 50_000,
    DVD_ID: 4_000_000,
}


def _run(days=14, prices=PRICES, **section_kwargs):
    section = TrainingSection(start_day=1, end_day=days, **section_kwargs)
    return simulate(SimulationConfig(sections=(section,), total_days=days, prices=prices))


class TestCostSummary:
    def test_net_cost(self):
        s = CostSummary(
            xanax=CostLine(10, 100.0, 1000.0),
            island=CostLine(10, 50.0, 500.0),
            loss_revive_income=CostLine(1, 300.0, 300.0),
        )
        assert s.total_cost == 1500
        assert s.total_income == 300
        assert s.net_cost == 1200

    def test_lines_skip_missing(self):
        s = CostSummary(xanax=CostLine(1, 1.0, 1.0))
        assert list(s.lines()) == ["xanax"]


class TestLedger:
    """CostLedger totals over a simulated run."""

    def setup_method(self):
        self.result = _run(
            edvd=EdvdJump(enabled=True, frequency_days=7),
            island_cost_per_day=1000,
            loss_revive=LossReviveConfig(enabled=True, days_between=7, price_per_unit=10_000_000),
        )
        self.costs = self.result.costs

    def test_edvd_jumps(self):
        per_jump = 4_000_000 + 4 * 800_000 + 50_000
        assert self.costs.edvd.uses == 2
        assert self.costs.edvd.total == pytest.approx(2 * per_jump)
        assert self.costs.edvd.unit_cost == pytest.approx(per_jump)

    def test_daily_xanax(self):
        assert self.costs.xanax.uses == 14
        assert self.costs.xanax.total == pytest.approx(14 * 3 * 800_000)

    def test_points_refill(self):
        assert self.costs.points_refill.total == pytest.approx(14 * 30 * 40_000)

    def test_island(self):
        assert self.costs.island.total == pytest.approx(14_000)

    def test_loss_revive_income(self):
        assert self.costs.loss_revive_income.uses == 2
        assert self.costs.total_income == pytest.approx(20_000_000)

    def test_net(self):
        expected = (
            self.costs.edvd.total + self.costs.xanax.total
            + self.costs.points_refill.total + self.costs.island.total - 20_000_000
        )
        assert self.costs.net_cost == pytest.approx(expected)

    def test_unused_families_missing(self):
        assert self.costs.candy is None
        assert self.costs.stacked_candy is None


class TestMissingPrices:
    """Lines without a known price drop out of the summary."""

    def test_missing_price_drops_line(self):
        prices = {k: v for k, v in PRICES.items() if k != ECSTASY_ID}
        costs = _run(prices=prices, edvd=EdvdJump(enabled=True)).costs
        assert costs.edvd is None
        assert costs.xanax is not None

    def test_candy_without_candy_price(self):
        costs = _run(candy=CandyJump(enabled=True, drug="ecstasy")).costs
        assert costs.candy is None

    def test_candy_priced(self):
        prices = {**PRICES, 310: 1_000, CANDY_ECSTASY_ID: 20_000}
        costs = _run(days=10, prices=prices, candy=CandyJump(enabled=True, drug="ecstasy")).costs
        assert costs.candy.uses == 10
        assert costs.candy.unit_cost == pytest.approx(48 * 1_000 + 20_000)

    def test_manual_energy_not_charged_for_xanax(self):
        costs = _run(energy=EnergyPolicy(manual_energy=1000)).costs
        assert costs.xanax is None
        assert costs.points_refill is None

    def test_skipped_days_not_charged(self):
        costs = _run(days=30, energy=EnergyPolicy(days_skipped_per_month=10)).costs
        assert costs.xanax.uses == 20
