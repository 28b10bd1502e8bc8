"""Community stat weight presets."""

from gym_progression_sim.params import STATS, StatWeights

# Hank's ratio: one stat trained at a 50e specialty gym, two at a 25e gym, one dumped
HANKS_PRIMARY = 3.57
HANKS_SECONDARY = 2.86
HANKS_DUMP = 1.0
# Baldr's ratio: more balanced, one primary and one secondary
BALDRS_PRIMARY = 1.39
BALDRS_SECONDARY = 1.11
# Defensive build: one defensive stat high, the other untrained
DEFENSIVE_PRIMARY = 1.25

# Stat paired with each primary: Hank's dumps it, Baldr's makes it secondary
_PARTNER = {"strength": "speed", "speed": "strength", "defense": "dexterity", "dexterity": "defense"}

PRESETS = ("balanced", "hanks", "baldrs", "defensive")


def _weights(values: dict[str, float]) -> StatWeights:
    return StatWeights(*(values[s] for s in STATS))


def hanks_ratio(primary: str) -> StatWeights:
    values = {s: HANKS_SECONDARY for s in STATS}
    values[primary] = HANKS_PRIMARY
    values[_PARTNER[primary]] = HANKS_DUMP
    return _weights(values)


def baldrs_ratio(primary: str) -> StatWeights:
    values = {s: 1.0 for s in STATS}
    values[primary] = BALDRS_PRIMARY
    values[_PARTNER[primary]] = BALDRS_SECONDARY
    return _weights(values)


def defensive_build(primary: str) -> StatWeights:
    if primary not in ("defense", "dexterity"):
        raise ValueError(f"Defensive builds focus defense or dexterity, got {primary!r}")
    other = "dexterity" if primary == "defense" else "defense"
    values = {"strength": 1.0, "speed": 1.0, primary: DEFENSIVE_PRIMARY, other: 0.0}
    return _weights(values)


def preset_weights(name: str, primary: str = "strength") -> StatWeights:
    """Weights for a named preset. Raises ValueError for unknown names or stats."""
    if primary not in STATS:
        raise ValueError(f"Unknown stat: {primary!r} (choose from {', '.join(STATS)})")
    if name == "balanced":
        return StatWeights.uniform(1.0)
    if name == "hanks":
        return hanks_ratio(primary)
    if name == "baldrs":
        return baldrs_ratio(primary)
    if name == "defensive":
        return defensive_build(primary)
    raise ValueError(f"Unknown preset: {name!r} (choose from {', '.join(PRESETS)})")
