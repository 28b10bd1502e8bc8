"""Daily energy budget from play time, stimulants, refills and company bonus."""

from gym_progression_sim.params import MAX_ENERGY_ALTERNATIVE, XANAX_ENERGY, EnergyPolicy

DAYS_PER_MONTH = 30
JUMP_ENERGY = 1150  # energy trained at boosted happiness on a full jump
STACK_HOURS = 8  # hours of regen spent on the day before a jump
POST_JUMP_HOURS = 12  # regen left after a jump's cooldowns


def regen_per_hour(max_energy: float) -> float:
    """Non-subscribers (100 bar) regen 20/h, subscribers 30/h."""
    return 20 if max_energy <= MAX_ENERGY_ALTERNATIVE else 30


def natural_energy(hours_played: float, max_energy: float) -> float:
    """Energy from regeneration: the overnight bar plus what regens while playing."""
    hours = min(max(hours_played, 0.0), 24.0)
    if hours == 0:
        return 0.0
    rate = regen_per_hour(max_energy)
    if hours >= 24:
        return 24 * rate
    return min(max_energy, (24 - hours) * rate) + hours * rate


def daily_energy(policy: EnergyPolicy, bonus_energy: float = 0.0) -> float:
    """Total energy available on a normal day."""
    if policy.manual_energy is not None:
        return max(policy.manual_energy, 0.0)
    energy = natural_energy(policy.hours_played_per_day, policy.max_energy)
    energy += max(policy.stimulants_per_day, 0) * XANAX_ENERGY
    if policy.daily_refill:
        energy += policy.max_energy
    return energy + max(bonus_energy, 0.0)


def stacking_day_energy(policy: EnergyPolicy) -> float:
    """Energy trained on the day before a full jump; the rest is stacked."""
    rate = regen_per_hour(policy.max_energy)
    energy = min(policy.max_energy, STACK_HOURS * rate)
    if policy.daily_refill:
        energy += policy.max_energy
    return energy


def post_jump_energy(policy: EnergyPolicy) -> float:
    """Normal-happiness energy trained after a full jump."""
    energy = POST_JUMP_HOURS * regen_per_hour(policy.max_energy)
    if policy.stimulants_per_day >= 3:
        energy += XANAX_ENERGY
    return energy


def skipped_days(days_per_month: int) -> frozenset[int]:
    """Day offsets (0-29) inside each 30-day month with no training."""
    n = min(max(days_per_month, 0), DAYS_PER_MONTH)
    if n == 0:
        return frozenset()
    return frozenset(min(round(i * DAYS_PER_MONTH / n), DAYS_PER_MONTH - 1) for i in range(n))


def is_skipped_day(day: int, days_per_month: int) -> bool:
    return (day - 1) % DAYS_PER_MONTH in skipped_days(days_per_month)
