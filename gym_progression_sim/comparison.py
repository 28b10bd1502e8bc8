"""Comparison states and multi-state execution."""

import dataclasses
from dataclasses import dataclass
from datetime import date

from gym_progression_sim.costs import PriceTable
from gym_progression_sim.errors import SimulationError
from gym_progression_sim.params import (
    CandyJump,
    EdvdJump,
    PlayerStats,
    TrainingSection,
    company_benefit,
)
from gym_progression_sim.simulation import SimulationConfig, SimulationResult, simulate


@dataclass(frozen=True)
class ComparisonState:
    """A named training plan. None overrides fall back to the shared run inputs."""

    name: str
    sections: tuple[TrainingSection, ...]
    starting_gym_index: int | None = None
    lock_gym: bool | None = None


# What-if variants applied over one base section
VARIANTS = {
    "Baseline": {},
    "Weekly eDVD": {
        "edvd": EdvdJump(enabled=True, frequency_days=7),
    },
    "Daily candy": {
        "candy": CandyJump(enabled=True, drug="ecstasy"),
    },
    "Music store": {
        "company": company_benefit("music_store"),
    },
    "Fitness center": {
        "company": company_benefit("fitness_center"),
    },
}


def variant_states(
    base: TrainingSection,
    total_days: int,
    variants: dict[str, dict] | None = None,
) -> list[ComparisonState]:
    """One single-section state per variant, each spanning the whole run."""
    if variants is None:
        variants = VARIANTS
    states = []
    for name, overrides in variants.items():
        section = dataclasses.replace(base, start_day=1, end_day=total_days, name=name, **overrides)
        states.append(ComparisonState(name=name, sections=(section,)))
    return states


def run_comparison(
    states: list[ComparisonState],
    initial_stats: PlayerStats,
    total_days: int,
    starting_gym_index: int = 0,
    lock_gym: bool = False,
    start_date: date | None = None,
    prices: PriceTable | None = None,
) -> dict[str, SimulationResult | SimulationError]:
    """Simulate every state with shared inputs. Each state gets its own result or error."""
    all_results = {}
    for state in states:
        config = SimulationConfig(
            sections=state.sections,
            initial_stats=initial_stats,
            starting_gym_index=(
                starting_gym_index if state.starting_gym_index is None else state.starting_gym_index
            ),
            lock_gym=lock_gym if state.lock_gym is None else state.lock_gym,
            total_days=total_days,
            start_date=start_date,
            prices=prices,
        )
        all_results[state.name] = simulate(config)
    return all_results
