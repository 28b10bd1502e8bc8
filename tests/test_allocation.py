"""Tests for splitting daily energy across stats."""

import pytest
from gym_progression_sim import PerkPercentages, StatWeights, allocate
from gym_progression_sim.allocation import best_stat, proportional_split
from gym_progression_sim.params import StatBlock


class TestProportionalSplit:
    """proportional_split() keeps the weight ratio."""

    def test_ratio(self):
        split = proportional_split(100, StatWeights(3, 1, 0, 0))
        assert split.values() == pytest.approx((75, 25, 0, 0))

    def test_unnormalized_weights(self):
        split = proportional_split(400, StatWeights(10, 10, 10, 10))
        assert split.values() == pytest.approx((100, 100, 100, 100))

    def test_zero_energy(self):
        assert proportional_split(0, StatWeights.uniform(1)).total() == 0

    def test_zero_weights(self):
        assert proportional_split(100, StatWeights()).total() == 0


class TestBestStat:
    """best_stat() ranking and tie-breaks."""

    def test_tie_goes_to_first_stat(self):
        assert best_stat(StatWeights.uniform(1), PerkPercentages.uniform(2)) == "strength"

    def test_tie_goes_to_larger_weight(self):
        assert best_stat(StatWeights(1, 2, 1, 1), PerkPercentages.uniform(2)) == "speed"

    def test_perks_win_over_weight(self):
        perks = PerkPercentages.flat(defense=10)
        assert best_stat(StatWeights(1, 2, 1, 1), perks) == "defense"

    def test_gym_dots_count(self):
        efficiency = StatBlock(2, 2, 2, 2.4)
        assert best_stat(StatWeights.uniform(1), PerkPercentages(), efficiency) == "dexterity"

    def test_unweighted_stat_never_best(self):
        perks = PerkPercentages.flat(strength=50)
        assert best_stat(StatWeights(0, 1, 1, 1), perks) == "speed"


class TestAllocate:
    """Drift blending and the balance-after-gym switch."""

    def setup_method(self):
        self.weights = StatWeights.uniform(1)
        self.perks = PerkPercentages.uniform(2)

    def test_no_drift_is_ratio(self):
        split = allocate(100, self.weights, self.perks, 0, False, 0, -1)
        assert split.values() == pytest.approx((25, 25, 25, 25))

    def test_full_drift_all_on_best(self):
        split = allocate(100, self.weights, self.perks, 100, False, 0, -1)
        assert split.values() == pytest.approx((100, 0, 0, 0))

    def test_half_drift_blends(self):
        split = allocate(100, self.weights, self.perks, 50, False, 0, -1)
        assert split.values() == pytest.approx((62.5, 12.5, 12.5, 12.5))

    def test_energy_conserved(self):
        split = allocate(1530, StatWeights(3.57, 1, 2.86, 2.86), self.perks, 35, False, 5, -1)
        assert split.total() == pytest.approx(1530)

    def test_ignore_perks_forces_ratio(self):
        split = allocate(100, self.weights, self.perks, 100, True, 0, -1)
        assert split.values() == pytest.approx((25, 25, 25, 25))

    def test_balanced_after_milestone_gym(self):
        split = allocate(100, self.weights, self.perks, 100, False, 19, 19)
        assert split.values() == pytest.approx((25, 25, 25, 25))

    def test_drift_before_milestone_gym(self):
        split = allocate(100, self.weights, self.perks, 100, False, 18, 19)
        assert split.get("strength") == pytest.approx(100)

    def test_negative_milestone_never_rebalances(self):
        split = allocate(100, self.weights, self.perks, 100, False, 23, -1)
        assert split.get("strength") == pytest.approx(100)
