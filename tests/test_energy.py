"""Tests for the daily energy budget."""

import pytest
from gym_progression_sim import EnergyPolicy, daily_energy, natural_energy, regen_per_hour
from gym_progression_sim.energy import (
    is_skipped_day,
    post_jump_energy,
    skipped_days,
    stacking_day_energy,
)


class TestNaturalEnergy:
    """Regeneration while logged in plus the overnight bar."""

    def test_regen_rates(self):
        assert regen_per_hour(100) == 20
        assert regen_per_hour(150) == 30

    def test_sixteen_hours_subscriber(self):
        """Overnight bar capped at 150, plus 16h of 30/h."""
        assert natural_energy(16, 150) == 150 + 480

    def test_sixteen_hours_non_subscriber(self):
        assert natural_energy(16, 100) == 100 + 320

    def test_short_session_bar_not_full_overnight(self):
        # 20h away at 30/h would overflow the bar
        assert natural_energy(4, 150) == 150 + 120

    def test_all_day(self):
        assert natural_energy(24, 150) == 720

    def test_zero_hours(self):
        assert natural_energy(0, 150) == 0.0


class TestDailyEnergy:
    """Formula energy per regular day."""

    def test_default_policy(self):
        """630 natural + 3 xanax + one refill."""
        assert daily_energy(EnergyPolicy()) == 630 + 750 + 150

    def test_company_bonus(self):
        assert daily_energy(EnergyPolicy(), bonus_energy=50) == 1580

    def test_manual_energy_bypasses_formula(self):
        policy = EnergyPolicy(manual_energy=500, stimulants_per_day=3)
        assert daily_energy(policy, bonus_energy=50) == 500

    def test_nothing(self):
        policy = EnergyPolicy(hours_played_per_day=0, stimulants_per_day=0, daily_refill=False)
        assert daily_energy(policy) == 0.0


class TestJumpDays:
    """Energy on stacking days and the day after a jump."""

    def test_stacking_day(self):
        assert stacking_day_energy(EnergyPolicy()) == 150 + 150

    def test_stacking_day_without_refill(self):
        assert stacking_day_energy(EnergyPolicy(daily_refill=False)) == 150

    def test_post_jump(self):
        assert post_jump_energy(EnergyPolicy()) == 360 + 250

    def test_post_jump_without_full_stimulants(self):
        assert post_jump_energy(EnergyPolicy(stimulants_per_day=2, max_energy=100)) == 240


class TestSkippedDays:
    def test_none(self):
        assert skipped_days(0) == frozenset()

    def test_spread_across_month(self):
        assert skipped_days(3) == frozenset({0, 10, 20})

    def test_whole_month(self):
        assert len(skipped_days(30)) == 30

    @pytest.mark.parametrize("day,expected", [(1, True), (2, False), (11, True), (31, True), (32, False)])
    def test_is_skipped_day(self, day, expected):
        assert is_skipped_day(day, 3) is expected
