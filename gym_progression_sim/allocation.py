"""Split a day's energy across the four stats."""

from gym_progression_sim.params import STATS, PerkPercentages, StatBlock, StatWeights


def proportional_split(energy: float, weights: StatWeights) -> StatBlock:
    """Energy strictly proportional to the weights. Zero total weight trains nothing."""
    total = weights.total()
    if energy <= 0 or total <= 0:
        return StatBlock()
    return StatBlock(*(energy * w / total for w in weights.values()))


def best_stat(
    weights: StatWeights,
    perks: PerkPercentages,
    efficiency: StatBlock | None = None,
) -> str | None:
    """Weighted stat with the best perk-adjusted gain per energy.

    Ties go to the larger weight, then to the earlier stat in STATS order.
    """
    best = None
    best_key = None
    for index, stat in enumerate(STATS):
        weight = weights.get(stat)
        if weight <= 0:
            continue
        dots = efficiency.get(stat) if efficiency is not None else 1.0
        if dots <= 0:
            continue
        key = (dots * perks.multiplier(stat), weight, -index)
        if best_key is None or key > best_key:
            best, best_key = stat, key
    return best


def allocate(
    energy: float,
    weights: StatWeights,
    perks: PerkPercentages,
    drift_percent: float,
    ignore_perks_for_selection: bool,
    gym_index: int,
    balance_after_gym_index: int,
    efficiency: StatBlock | None = None,
) -> StatBlock:
    """Per-stat energy for the day.

    Strict ratio when perks are ignored, drift is zero, or the player has
    reached the milestone gym (a negative milestone never triggers).
    Otherwise blend the ratio split with "all on the best stat" by drift/100.
    """
    ratio = proportional_split(energy, weights)
    drift = min(max(drift_percent, 0.0), 100.0) / 100
    balanced = 0 <= balance_after_gym_index <= gym_index
    if ignore_perks_for_selection or drift == 0 or balanced:
        return ratio
    best = best_stat(weights, perks, efficiency)
    if best is None:
        return ratio
    return StatBlock(*(
        (1 - drift) * r + (drift * energy if stat == best else 0.0)
        for stat, r in zip(STATS, ratio.values())
    ))
