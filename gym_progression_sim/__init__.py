"""Gym Training Progression Simulator Package."""

from gym_progression_sim.params import (
    STATS,
    PlayerStats,
    StatWeights,
    PerkPercentages,
    CompanyBenefit,
    company_benefit,
    combine_perks,
    Indefinite,
    Count,
    StatTarget,
    EdvdJump,
    StackedCandyJump,
    CandyJump,
    EnergyDrinkJump,
    RefillCouponJump,
    LossReviveConfig,
    DiabetesDayConfig,
    EnergyPolicy,
    TrainingSection,
)
from gym_progression_sim.gyms import GYMS, Gym, gym_at, total_gyms, find_gym
from gym_progression_sim.gains import (
    HappinessCurve,
    PiecewiseHappinessCurve,
    LogHappinessCurve,
    DEFAULT_HAPPINESS_CURVE,
    gain_for_energy,
)
from gym_progression_sim.energy import daily_energy, natural_energy, regen_per_hour
from gym_progression_sim.allocation import allocate
from gym_progression_sim.progression import GymProgress
from gym_progression_sim.events import EventScheduler, DayPlan, Session
from gym_progression_sim.sections import validate_sections, config_for_day, segments_to_sections
from gym_progression_sim.errors import SimulationError, ConfigurationError, SectionCoverageError
from gym_progression_sim.simulation import (
    SimulationConfig,
    SimulationResult,
    DailySnapshot,
    simulate,
    validate_config,
    MIN_TOTAL_DAYS,
    MAX_TOTAL_DAYS,
)
from gym_progression_sim.costs import CostSummary, CostLine
from gym_progression_sim.comparison import ComparisonState, run_comparison, variant_states
from gym_progression_sim.presets import preset_weights

__all__ = [
    "STATS",
    "PlayerStats",
    "StatWeights",
    "PerkPercentages",
    "CompanyBenefit",
    "company_benefit",
    "combine_perks",
    "Indefinite",
    "Count",
    "StatTarget",
    "EdvdJump",
    "StackedCandyJump",
    "CandyJump",
    "EnergyDrinkJump",
    "RefillCouponJump",
    "LossReviveConfig",
    "DiabetesDayConfig",
    "EnergyPolicy",
    "TrainingSection",
    "GYMS",
    "Gym",
    "gym_at",
    "total_gyms",
    "find_gym",
    "HappinessCurve",
    "PiecewiseHappinessCurve",
    "LogHappinessCurve",
    "DEFAULT_HAPPINESS_CURVE",
    "gain_for_energy",
    "daily_energy",
    "natural_energy",
    "regen_per_hour",
    "allocate",
    "GymProgress",
    "EventScheduler",
    "DayPlan",
    "Session",
    "validate_sections",
    "config_for_day",
    "segments_to_sections",
    "SimulationError",
    "ConfigurationError",
    "SectionCoverageError",
    "SimulationConfig",
    "SimulationResult",
    "DailySnapshot",
    "simulate",
    "validate_config",
    "MIN_TOTAL_DAYS",
    "MAX_TOTAL_DAYS",
    "CostSummary",
    "CostLine",
    "ComparisonState",
    "run_comparison",
    "variant_states",
    "preset_weights",
]
