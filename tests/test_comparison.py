"""Tests for comparison states."""

from gym_progression_sim import (
    ComparisonState,
    PlayerStats,
    SimulationError,
    SimulationResult,
    StatWeights,
    TrainingSection,
    run_comparison,
    variant_states,
)
from gym_progression_sim.comparison import VARIANTS


class TestVariantStates:
    """Built-in what-if variants as comparison states."""

    def test_one_state_per_variant(self):
        states = variant_states(TrainingSection(), 60)
        assert [s.name for s in states] == list(VARIANTS)
        for state in states:
            assert len(state.sections) == 1
            assert (state.sections[0].start_day, state.sections[0].end_day) == (1, 60)

    def test_custom_variants(self):
        states = variant_states(TrainingSection(), 30, {"Happy": {"happy": 8000}})
        assert states[0].sections[0].happy == 8000


class TestRunComparison:
    """Several states with shared inputs, one result or error each."""

    def setup_method(self):
        self.results = run_comparison(
            variant_states(TrainingSection(), 60),
            initial_stats=PlayerStats.uniform(1000),
            total_days=60,
        )

    def test_all_states_run(self):
        assert list(self.results) == list(VARIANTS)
        assert all(isinstance(r, SimulationResult) for r in self.results.values())

    def test_fitness_center_beats_baseline(self):
        assert (self.results["Fitness center"].final_stats.total()
                > self.results["Baseline"].final_stats.total())

    def test_music_store_unlocks_sooner(self):
        assert (self.results["Music store"].final_gym_index
                >= self.results["Baseline"].final_gym_index)

    def test_invalid_state_does_not_stop_others(self):
        states = [
            ComparisonState("ok", (TrainingSection(end_day=30),)),
            ComparisonState("bad", (TrainingSection(end_day=30, weights=StatWeights()),)),
        ]
        results = run_comparison(states, PlayerStats.uniform(1000), 30)
        assert isinstance(results["ok"], SimulationResult)
        assert isinstance(results["bad"], SimulationError)

    def test_state_overrides_shared_gym(self):
        states = [
            ComparisonState("shared", (TrainingSection(end_day=30),)),
            ComparisonState("locked", (TrainingSection(end_day=30),), starting_gym_index=23, lock_gym=True),
        ]
        results = run_comparison(states, PlayerStats.uniform(1000), 30)
        assert 0 < results["shared"].final_gym_index < 23
        assert {s.gym_index for s in results["locked"].snapshots} == {23}
