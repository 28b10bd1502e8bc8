"""Daily event scheduling: jumps, energy items, loss/revive and Diabetes Day."""

from dataclasses import dataclass, field
from datetime import date, timedelta

from gym_progression_sim.energy import (
    JUMP_ENERGY,
    daily_energy,
    is_skipped_day,
    post_jump_energy,
    stacking_day_energy,
)
from gym_progression_sim.params import (
    CANDY_HAPPINESS,
    ENERGY_ITEMS,
    HAPPY_CAP,
    STATS,
    XANAX_ENERGY,
    Count,
    JumpConfig,
    PlayerStats,
    StatTarget,
    StatWeights,
    TrainingSection,
)

DVD_HAPPINESS = 2500
DVD_HAPPINESS_ADULT_NOVELTIES = 5000
GREEN_EGG_ENERGY = 500
SEASONAL_MAIL_ENERGY = 250
LOGO_CLICK_ENERGY = 50

# (month, day) of the Diabetes Day jumps; a single jump uses the last date only
DIABETES_DAY_DATES = ((11, 13), (11, 15))

FULL_JUMPS = ("edvd", "stacked_candy")  # priority order after Diabetes Day


@dataclass(frozen=True)
class Session:
    """Energy trained at one happiness level.

    `stats`, when set, restricts training to those stats.
    """

    kind: str
    energy: float
    happiness: float
    multiplier: float = 1.0
    stats: frozenset[str] | None = None

    def trains(self, stat: str) -> bool:
        return self.stats is None or stat in self.stats


@dataclass
class DayPlan:
    sessions: list[Session] = field(default_factory=list)
    jumps: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    skipped: bool = False
    loss_revive_units: int = 0
    diabetes_day_jump: int | None = None  # 0 = first jump of the year

    @property
    def energy(self) -> float:
        return sum(s.energy for s in self.sessions)

    @property
    def happiness(self) -> float:
        """Happiness of the day's regular training."""
        for s in self.sessions:
            if s.kind == "regular":
                return s.happiness
        return self.sessions[0].happiness if self.sessions else 0.0

    def multipliers(self) -> dict[str, float]:
        """Highest temporary multiplier reaching each stat today."""
        result = {}
        for stat in STATS:
            values = [s.multiplier for s in self.sessions if s.energy > 0 and s.trains(stat)]
            result[stat] = max(values, default=1.0)
        return result


@dataclass
class JumpTracker:
    performed: int = 0
    exhausted: bool = False


def diabetes_day_jumps(start_date: date, total_days: int, number_of_jumps: int) -> dict[int, int]:
    """Map simulation day -> jump number (0 = first) for every Diabetes Day in range."""
    dates = DIABETES_DAY_DATES if number_of_jumps >= 2 else DIABETES_DAY_DATES[-1:]
    jumps = {}
    for day in range(1, total_days + 1):
        today = start_date + timedelta(days=day - 1)
        for n, (month, dom) in enumerate(dates):
            if today.month == month and today.day == dom:
                jumps[day] = n
    return jumps


def _target_reached(target: StatTarget, stats: PlayerStats, weights: StatWeights) -> bool:
    if target.stat is not None:
        return stats.get(target.stat) >= target.value
    weighted = [s for s in STATS if weights.get(s) > 0]
    return all(stats.get(s) >= target.value for s in weighted)


def _target_stats(target: StatTarget, stats: PlayerStats, weights: StatWeights) -> frozenset[str]:
    if target.stat is not None:
        return frozenset({target.stat})
    return frozenset(s for s in STATS if weights.get(s) > 0 and stats.get(s) < target.value)


class EventScheduler:
    """Plans each day of one section. Jump counters start fresh per section."""

    def __init__(self, section: TrainingSection, start_date: date | None = None,
                 total_days: int | None = None):
        self.section = section
        self.trackers = {name: JumpTracker() for name in section.jump_families()}
        self.diabetes_days: dict[int, int] = {}
        dd = section.diabetes_day
        if dd.enabled and start_date is not None:
            horizon = total_days if total_days is not None else section.end_day
            self.diabetes_days = {
                day: n
                for day, n in diabetes_day_jumps(start_date, horizon, dd.number_of_jumps).items()
                if section.start_day <= day <= section.end_day
            }

    # --- family state -------------------------------------------------------

    def _scheduled(self, name: str, section_day: int) -> bool:
        config = self.section.jump_families()[name]
        if not config.enabled or config.frequency_days < 1:
            return False
        return (section_day - 1) % config.frequency_days == 0

    def _active(self, name: str, stats: PlayerStats) -> bool:
        """Check termination; once met the family stays off for the section."""
        tracker = self.trackers[name]
        if tracker.exhausted:
            return False
        config = self.section.jump_families()[name]
        term = config.termination
        if isinstance(term, Count) and tracker.performed >= term.n:
            tracker.exhausted = True
        elif isinstance(term, StatTarget) and _target_reached(term, stats, self.section.weights):
            tracker.exhausted = True
        return not tracker.exhausted

    def _fires(self, name: str, section_day: int, stats: PlayerStats) -> bool:
        return self._scheduled(name, section_day) and self._active(name, stats)

    def _consume(self, name: str) -> None:
        tracker = self.trackers[name]
        tracker.performed += 1
        term = self.section.jump_families()[name].termination
        if isinstance(term, Count) and tracker.performed >= term.n:
            tracker.exhausted = True

    def _restriction(self, config: JumpConfig, stats: PlayerStats) -> frozenset[str] | None:
        if isinstance(config.termination, StatTarget):
            return _target_stats(config.termination, stats, self.section.weights)
        return None

    def _full_jump_tomorrow(self, section_day: int, day: int, stats: PlayerStats) -> bool:
        if section_day >= self.section.days:
            return False
        if is_skipped_day(day + 1, self.section.energy.days_skipped_per_month):
            return False
        if day + 1 in self.diabetes_days:
            return True
        for name in FULL_JUMPS:
            if self._scheduled(name, section_day + 1) and self._active(name, stats):
                return True
        return False

    # --- payloads -----------------------------------------------------------

    def _jump_happiness(self, name: str) -> float:
        s = self.section
        if name == "edvd":
            per_dvd = DVD_HAPPINESS_ADULT_NOVELTIES if s.edvd.adult_novelties else DVD_HAPPINESS
            return (s.happy + per_dvd * s.edvd.quantity) * 2
        if name == "stacked_candy":
            c = s.stacked_candy
            candy = CANDY_HAPPINESS[c.item_id] * (1 + c.faction_bonus_percent / 100)
            return (s.happy + candy * c.quantity) * 2
        c = s.candy
        candy = CANDY_HAPPINESS[c.item_id] * (1 + c.faction_bonus_percent / 100)
        happy = s.happy + candy * c.quantity
        return happy * 2 if c.drug == "ecstasy" else happy

    def _diabetes_day_energy(self, jump: int) -> float:
        dd = self.section.diabetes_day
        items = (["egg"] * min(dd.green_eggs, 2) + ["coupon"] * min(dd.refill_coupons, 2))[:2]
        energy = JUMP_ENERGY
        if jump < len(items):
            energy += GREEN_EGG_ENERGY if items[jump] == "egg" else self.section.energy.max_energy
        if jump == 0 and dd.seasonal_mail:
            energy += SEASONAL_MAIL_ENERGY
        if jump == 1 and dd.logo_click:
            energy += LOGO_CLICK_ENERGY
        return energy

    def _item_energy(self, name: str) -> float:
        s = self.section
        if name == "energy_drink":
            c = s.energy_drink
            per_item = ENERGY_ITEMS[c.item_id]
        else:
            c = s.refill_coupon
            per_item = s.energy.max_energy
        return per_item * c.quantity * (1 + c.faction_bonus_percent / 100)

    # --- planning -----------------------------------------------------------

    def plan_day(self, section_day: int, day: int, stats: PlayerStats) -> DayPlan:
        """Sessions for one day. `section_day` is 1 on the section's first day."""
        s = self.section
        policy = s.energy
        plan = DayPlan()
        if is_skipped_day(day, policy.days_skipped_per_month):
            plan.skipped = True
            plan.notes.append("Skipped day (no energy)")
            return plan

        bonus = s.company.bonus_energy_per_day
        manual = policy.manual_energy is not None
        total = daily_energy(policy, bonus)

        full = None
        if day in self.diabetes_days:
            full = "diabetes_day"
        else:
            full = next((n for n in FULL_JUMPS if self._fires(n, section_day, stats)), None)

        if full is not None:
            if full == "diabetes_day":
                jump = self.diabetes_days[day]
                plan.diabetes_day_jump = jump
                boosted = Session(full, self._diabetes_day_energy(jump), HAPPY_CAP)
                plan.notes.append(f"Diabetes Day jump {jump + 1}")
            else:
                config = s.jump_families()[full]
                self._consume(full)
                boosted = Session(full, JUMP_ENERGY, self._jump_happiness(full),
                                  config.gain_multiplier, self._restriction(config, stats))
                plan.notes.append(f"{full} jump #{self.trackers[full].performed}")
            plan.jumps.append(full)
            if manual:
                energy = min(boosted.energy, total)
                plan.sessions.append(Session(boosted.kind, energy, boosted.happiness,
                                             boosted.multiplier, boosted.stats))
                plan.sessions.append(Session("regular", total - energy, s.happy))
            else:
                plan.sessions.append(boosted)
                plan.sessions.append(Session("regular", post_jump_energy(policy) + bonus, s.happy))
            self._apply_loss_revive(plan, section_day)
            return plan

        if not manual and self._full_jump_tomorrow(section_day, day, stats):
            plan.sessions.append(Session("regular", stacking_day_energy(policy) + bonus, s.happy))
            plan.notes.append("Stacking energy for tomorrow's jump")
            self._apply_loss_revive(plan, section_day)
            return plan

        candy_today = self._fires("candy", section_day, stats)
        if candy_today:
            c = s.candy
            self._consume("candy")
            plan.jumps.append("candy")
            if c.drug == "xanax" and not c.drug_already_included:
                total += XANAX_ENERGY
            if c.use_point_refill and not policy.daily_refill:
                total += policy.max_energy
            candy_energy = policy.max_energy
            if c.use_point_refill:
                candy_energy += policy.max_energy
            if c.drug == "xanax":
                candy_energy += XANAX_ENERGY
            candy_energy = min(candy_energy, total)
            candy_happy = self._jump_happiness("candy")
            plan.sessions.append(Session("candy", candy_energy, candy_happy,
                                         c.gain_multiplier, self._restriction(c, stats)))
            total -= candy_energy
        item_happy = plan.sessions[0].happiness if candy_today else s.happy
        for name in ("energy_drink", "refill_coupon"):
            if self._fires(name, section_day, stats):
                config = s.jump_families()[name]
                self._consume(name)
                plan.jumps.append(name)
                plan.sessions.append(Session(name, self._item_energy(name), item_happy,
                                             config.gain_multiplier, self._restriction(config, stats)))
        plan.sessions.append(Session("regular", total, s.happy))
        self._apply_loss_revive(plan, section_day)
        return plan

    def _apply_loss_revive(self, plan: DayPlan, section_day: int) -> None:
        """Spend loss/revive energy, regular sessions first, never below zero."""
        lr = self.section.loss_revive
        if not lr.enabled or lr.days_between < 1 or (section_day - 1) % lr.days_between != 0:
            return
        cost = lr.number_per_day * lr.energy_cost
        plan.loss_revive_units = lr.number_per_day
        plan.notes.append(f"Loss/revive: {lr.number_per_day} x {lr.energy_cost:g} energy")
        order = sorted(range(len(plan.sessions)), key=lambda i: plan.sessions[i].kind != "regular")
        for i in order:
            if cost <= 0:
                break
            session = plan.sessions[i]
            used = min(session.energy, cost)
            plan.sessions[i] = Session(session.kind, session.energy - used, session.happiness,
                                       session.multiplier, session.stats)
            cost -= used
