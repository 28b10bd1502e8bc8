"""Day-by-day training simulation."""

from dataclasses import dataclass, field
from datetime import date

from gym_progression_sim.allocation import allocate
from gym_progression_sim.costs import CostLedger, CostSummary, PriceTable
from gym_progression_sim.errors import ConfigurationError, SimulationError
from gym_progression_sim.events import DayPlan, EventScheduler, Session
from gym_progression_sim.gains import DEFAULT_HAPPINESS_CURVE, HappinessCurve, gain_for_energy
from gym_progression_sim.gyms import GYMS, Gym
from gym_progression_sim.params import (
    CANDY_HAPPINESS,
    ENERGY_ITEMS,
    STATS,
    Count,
    PlayerStats,
    StatBlock,
    StatTarget,
    StatWeights,
    TrainingSection,
)
from gym_progression_sim.progression import GymProgress
from gym_progression_sim.sections import config_for_day, validate_sections

MIN_TOTAL_DAYS = 1
MAX_TOTAL_DAYS = 1080  # 36 months of 30 days
DRUGS = ("none", "xanax", "ecstasy")


@dataclass(frozen=True)
class SimulationConfig:
    """Everything one run needs, fixed for the duration of the call."""

    sections: tuple[TrainingSection, ...]
    initial_stats: PlayerStats = field(default_factory=lambda: PlayerStats.uniform(1000.0))
    starting_gym_index: int = 0
    lock_gym: bool = False
    total_days: int = 360
    start_date: date | None = None  # enables Diabetes Day
    prices: PriceTable | None = None  # enables cost accounting
    catalog: tuple[Gym, ...] = GYMS
    happiness_curve: HappinessCurve = DEFAULT_HAPPINESS_CURVE


@dataclass(frozen=True)
class DailySnapshot:
    day: int
    stats: PlayerStats  # end of day
    gym_index: int
    gym_name: str
    energy: float  # available after loss/revive
    trained: StatBlock  # energy per stat
    happiness: float
    jumps: tuple[str, ...] = ()
    multipliers: StatBlock = field(default_factory=lambda: StatBlock.uniform(1.0))
    notes: tuple[str, ...] = ()


@dataclass
class JumpSummary:
    jumps: int = 0
    gains: StatBlock = field(default_factory=StatBlock)

    @property
    def average_gains(self) -> StatBlock:
        if self.jumps == 0:
            return StatBlock()
        return StatBlock(*(v / self.jumps for v in self.gains.values()))


@dataclass
class SimulationResult:
    initial_stats: PlayerStats
    final_stats: PlayerStats
    snapshots: list[DailySnapshot]
    section_boundaries: list[int]  # last day of each section
    final_energy_spent: float
    final_gym_index: int
    jump_summaries: dict[str, JumpSummary] = field(default_factory=dict)
    diabetes_day_gains: list[StatBlock] = field(default_factory=list)
    costs: CostSummary | None = None

    @property
    def total_gains(self) -> StatBlock:
        return StatBlock(*(f - i for f, i in zip(self.final_stats.values(), self.initial_stats.values())))


def _validate_section(s: TrainingSection) -> list[ConfigurationError]:
    label = s.name or f"days {s.start_day}-{s.end_day}"
    errors = []

    def err(msg: str):
        errors.append(ConfigurationError(f"{label}: {msg}", s.start_day, s.end_day))

    if any(w < 0 for w in s.weights.values()):
        err("stat weights must be non-negative")
    elif s.weights.total() <= 0:
        err("at least one stat weight must be greater than zero")
    if any(p < 0 for stat in STATS for p in s.perks.sources(stat)):
        err("perk percentages must be non-negative")
    if s.happy < 0:
        err(f"happy must be non-negative, got {s.happy}")
    if not 0 <= s.drift_percent <= 100:
        err(f"drift must be between 0 and 100, got {s.drift_percent}")
    if s.island_cost_per_day < 0:
        err("island cost must be non-negative")

    e = s.energy
    if e.max_energy <= 0:
        err(f"max energy must be positive, got {e.max_energy}")
    if e.manual_energy is not None and e.manual_energy < 0:
        err(f"manual energy must be non-negative, got {e.manual_energy}")
    if not 0 <= e.days_skipped_per_month <= 30:
        err(f"days skipped per month must be between 0 and 30, got {e.days_skipped_per_month}")

    c = s.company
    if c.gym_unlock_speed_multiplier <= 0 or c.gym_gain_multiplier < 0:
        err(f"invalid company benefit multipliers for {c.name}")
    if c.bonus_energy_per_day < 0:
        err(f"company bonus energy must be non-negative for {c.name}")

    for name, jump in s.jump_families().items():
        if not jump.enabled:
            continue
        if jump.frequency_days < 1:
            err(f"{name} frequency must be at least 1 day, got {jump.frequency_days}")
        if jump.quantity < 0:
            err(f"{name} quantity must be non-negative")
        if jump.faction_bonus_percent < 0 or jump.gain_multiplier < 0:
            err(f"{name} bonuses must be non-negative")
        term = jump.termination
        if isinstance(term, Count) and term.n < 0:
            err(f"{name} jump count must be non-negative, got {term.n}")
        if isinstance(term, StatTarget) and term.stat is not None and term.stat not in STATS:
            err(f"{name} target stat must be one of {', '.join(STATS)}, got {term.stat!r}")
    if s.candy.enabled and s.candy.item_id not in CANDY_HAPPINESS:
        err(f"unknown candy item {s.candy.item_id}")
    if s.candy.enabled and s.candy.drug not in DRUGS:
        err(f"candy drug must be one of {', '.join(DRUGS)}, got {s.candy.drug!r}")
    if s.stacked_candy.enabled and s.stacked_candy.item_id not in CANDY_HAPPINESS:
        err(f"unknown candy item {s.stacked_candy.item_id}")
    if s.energy_drink.enabled and s.energy_drink.item_id not in ENERGY_ITEMS:
        err(f"unknown energy item {s.energy_drink.item_id}")

    lr = s.loss_revive
    if lr.enabled:
        if lr.days_between < 1:
            err(f"loss/revive days between must be at least 1, got {lr.days_between}")
        if lr.number_per_day < 0 or lr.energy_cost < 0 or lr.price_per_unit < 0:
            err("loss/revive inputs must be non-negative")

    dd = s.diabetes_day
    if dd.enabled:
        if dd.number_of_jumps not in (1, 2):
            err(f"Diabetes Day jumps must be 1 or 2, got {dd.number_of_jumps}")
        if not (0 <= dd.green_eggs <= 2 and 0 <= dd.refill_coupons <= 2):
            err("Diabetes Day eggs and coupons must be between 0 and 2")
    return errors


def validate_config(config: SimulationConfig) -> list[SimulationError]:
    """Validate a run before any simulation work. Returns list of errors."""
    errors: list[SimulationError] = []
    n = config.total_days
    if not MIN_TOTAL_DAYS <= n <= MAX_TOTAL_DAYS:
        errors.append(ConfigurationError(
            f"total days must be between {MIN_TOTAL_DAYS} and {MAX_TOTAL_DAYS}, got {n}"
        ))
        return errors

    idx = config.starting_gym_index
    if not 0 <= idx < len(config.catalog):
        errors.append(ConfigurationError(
            f"starting gym index must be between 0 and {len(config.catalog) - 1}, got {idx}"
        ))
    elif not config.lock_gym and config.catalog[idx].is_specialty:
        errors.append(ConfigurationError(
            f"auto-upgrade cannot start from specialty gym {config.catalog[idx].display_name}"
        ))
    for stat in STATS:
        if config.initial_stats.get(stat) < 0:
            errors.append(ConfigurationError(f"initial {stat} must be non-negative"))

    errors.extend(validate_sections(list(config.sections), n))
    for section in config.sections:
        errors.extend(_validate_section(section))
    return errors


def _train_session(
    session: Session,
    section: TrainingSection,
    stats: PlayerStats,
    progress: GymProgress,
    catalog: tuple[Gym, ...],
    curve: HappinessCurve,
) -> tuple[StatBlock, StatBlock]:
    """Allocate one session's energy and compute gains. Returns (energy split, gains)."""
    unlock = section.company.gym_unlock_speed_multiplier
    gyms = {stat: progress.gym_for(stat, stats, catalog, unlock) for stat in STATS}
    trainable = {s for s in STATS if gyms[s] is not None and session.trains(s)}
    weights = section.weights.only(trainable)
    if weights.total() <= 0 and session.stats is not None:
        # a stat target names a stat the ratio never trains
        weights = StatWeights.uniform(1.0).only(trainable)
    efficiency = StatBlock(*(gyms[s].dots.get(s) if s in trainable else 0.0 for s in STATS))
    split = allocate(
        session.energy,
        weights,
        section.perks,
        section.drift_percent,
        section.ignore_perks_for_selection,
        progress.index,
        section.balance_after_gym_index,
        efficiency,
    )
    gains = StatBlock(*(
        gain_for_energy(split.get(s), gyms[s], s, session.happiness, section.perks,
                        section.company, session.multiplier, curve)
        if split.get(s) > 0 else 0.0
        for s in STATS
    ))
    return split, gains


def _summarize(summaries: dict[str, JumpSummary], plan: DayPlan,
               session_gains: list[tuple[Session, StatBlock]]) -> None:
    for jump in plan.jumps:
        summary = summaries.setdefault(jump, JumpSummary())
        summary.jumps += 1
    for session, gains in session_gains:
        if session.kind in summaries and session.kind in plan.jumps:
            summaries[session.kind].gains = summaries[session.kind].gains.plus(gains)


def simulate(config: SimulationConfig) -> SimulationResult | SimulationError:
    """Run the whole horizon. Returns the first validation error instead of a result."""
    errors = validate_config(config)
    if errors:
        return errors[0]

    catalog = config.catalog
    sections = sorted(config.sections, key=lambda s: s.start_day)
    stats = PlayerStats(*config.initial_stats.values())
    progress = GymProgress.start(config.starting_gym_index, config.lock_gym, catalog)
    ledger = CostLedger(config.prices) if config.prices is not None else None

    snapshots: list[DailySnapshot] = []
    summaries: dict[str, JumpSummary] = {}
    diabetes_day_gains: list[StatBlock] = []
    current: TrainingSection | None = None
    scheduler: EventScheduler | None = None

    for day in range(1, config.total_days + 1):
        section = config_for_day(sections, day)
        if section is not current:
            current = section
            scheduler = EventScheduler(section, config.start_date, config.total_days)
        plan = scheduler.plan_day(day - section.start_day + 1, day, stats)

        trained = StatBlock()
        day_gains = StatBlock()
        session_gains = []
        for session in plan.sessions:
            split, gains = _train_session(session, section, stats, progress, catalog,
                                          config.happiness_curve)
            progress.record(split.total())
            trained = trained.plus(split)
            day_gains = day_gains.plus(gains)
            session_gains.append((session, gains))
            if session.kind == "diabetes_day":
                diabetes_day_gains.append(gains)
        stats = stats.plus(day_gains)
        _summarize(summaries, plan, session_gains)

        progress.advance(catalog, section.company.gym_unlock_speed_multiplier)
        snapshots.append(DailySnapshot(
            day=day,
            stats=stats,
            gym_index=progress.index,
            gym_name=progress.current(catalog).display_name,
            energy=plan.energy,
            trained=trained,
            happiness=plan.happiness,
            jumps=tuple(plan.jumps),
            multipliers=StatBlock(*plan.multipliers().values()),
            notes=tuple(plan.notes),
        ))
        if ledger is not None:
            ledger.record_day(section, plan)

    return SimulationResult(
        initial_stats=config.initial_stats,
        final_stats=stats,
        snapshots=snapshots,
        section_boundaries=[s.end_day for s in sections],
        final_energy_spent=progress.energy_spent,
        final_gym_index=progress.index,
        jump_summaries=summaries,
        diabetes_day_gains=diabetes_day_gains,
        costs=ledger.summary() if ledger is not None else None,
    )
