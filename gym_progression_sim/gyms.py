"""Static gym catalog: dots per stat, energy per train and unlock requirements."""

from dataclasses import dataclass
from typing import Callable

from gym_progression_sim.params import STATS, PlayerStats, StatBlock

SPECIALTY_RATIO = 1.25  # specialty gyms need a 25% lead


def _def_dex_lead(stats: PlayerStats) -> bool:
    return stats.defense + stats.dexterity >= (stats.strength + stats.speed) * SPECIALTY_RATIO


def _str_spd_lead(stats: PlayerStats) -> bool:
    return stats.strength + stats.speed >= (stats.defense + stats.dexterity) * SPECIALTY_RATIO


def _single_stat_lead(stat: str) -> Callable[[PlayerStats], bool]:
    def predicate(stats: PlayerStats) -> bool:
        second = max(stats.get(s) for s in STATS if s != stat)
        return stats.get(stat) >= second * SPECIALTY_RATIO

    predicate.__name__ = f"_{stat}_lead"
    return predicate


@dataclass(frozen=True)
class Gym:
    """One gym. A stat with 0 dots is not offered there."""

    name: str
    display_name: str
    dots: StatBlock
    energy_per_train: int
    energy_to_unlock: float  # cumulative gym energy spent
    cost_to_unlock: float
    specialty: Callable[[PlayerStats], bool] | None = None

    def offers(self, stat: str) -> bool:
        return self.dots.get(stat) > 0

    @property
    def is_specialty(self) -> bool:
        return self.specialty is not None

    def energy_threshold(self, unlock_speed_multiplier: float = 1.0) -> float:
        """Energy needed to unlock, lowered by a faster unlock speed."""
        return self.energy_to_unlock / unlock_speed_multiplier

    def is_unlocked(self, energy_spent: float, stats: PlayerStats,
                    unlock_speed_multiplier: float = 1.0) -> bool:
        if energy_spent < self.energy_threshold(unlock_speed_multiplier):
            return False
        return self.specialty is None or self.specialty(stats)


def _gym(name, display_name, strength, speed, defense, dexterity,
         energy_per_train, cost_to_unlock, energy_to_unlock, specialty=None) -> Gym:
    dots = StatBlock(*(v or 0.0 for v in (strength, speed, defense, dexterity)))
    return Gym(name, display_name, dots, energy_per_train, energy_to_unlock, cost_to_unlock, specialty)


GYMS: tuple[Gym, ...] = (
    # Lightweight
    _gym("premierfitness", "Premier Fitness", 2, 2, 2, 2, 5, 10, 0),
    _gym("averagejoes", "Average Joes", 2.4, 2.4, 2.7, 2.4, 5, 100, 200),
    _gym("woodysworkout", "Woody's Workout", 2.7, 3.2, 3, 2.7, 5, 250, 700),
    _gym("beachbods", "Beach Bods", 3.2, 3.2, 3.2, None, 5, 500, 1700),
    _gym("silvergym", "Silver Gym", 3.4, 3.6, 3.4, 3.2, 5, 1000, 3700),
    _gym("pourfemme", "Pour Femme", 3.4, 3.6, 3.6, 3.8, 5, 2500, 6450),
    _gym("daviesden", "Davies Den", 3.7, None, 3.7, 3.7, 5, 5000, 9450),
    _gym("globalgym", "Global Gym", 4, 4, 4, 4, 5, 10000, 12950),
    # Middleweight
    _gym("knuckleheads", "Knuckle Heads", 4.8, 4.4, 4, 4.2, 10, 50000, 16950),
    _gym("pioneerfitness", "Pioneer Fitness", 4.4, 4.6, 4.8, 4.4, 10, 100000, 22950),
    _gym("anabolicanomalies", "Anabolic Anomalies", 5, 4.6, 5.2, 4.6, 10, 250000, 29950),
    _gym("core", "Core", 5, 5.2, 5, 5, 10, 500000, 37950),
    _gym("racingfitness", "Racing Fitness", 5, 5.4, 4.8, 5.2, 10, 1000000, 48950),
    _gym("completecardio", "Complete Cardio", 5.5, 5.7, 5.5, 5.2, 10, 2000000, 61370),
    _gym("legsbumsandtums", "Legs, Bums and Tums", None, 5.5, 5.5, 5.7, 10, 3000000, 79370),
    _gym("deepburn", "Deep Burn", 6, 6, 6, 6, 10, 5000000, 97470),
    # Heavyweight
    _gym("apollogym", "Apollo Gym", 6, 6.2, 6.4, 6.2, 10, 7500000, 121610),
    _gym("gunshop", "Gun Shop", 6.5, 6.4, 6.2, 6.2, 10, 10000000, 152870),
    _gym("forcetraining", "Force Training", 6.4, 6.5, 6.4, 6.8, 10, 15000000, 189480),
    _gym("chachas", "Cha Cha's", 6.4, 6.4, 6.8, 7, 10, 20000000, 236120),
    _gym("atlas", "Atlas", 7, 6.4, 6.4, 6.5, 10, 30000000, 292640),
    _gym("lastround", "Last Round", 6.8, 6.5, 7, 6.5, 10, 50000000, 360415),
    _gym("theedge", "The Edge", 6.8, 7, 7, 6.8, 10, 75000000, 444950),
    _gym("georges", "George's", 7.3, 7.3, 7.3, 7.3, 10, 100000000, 551255),
    # Specialty, available with Cha Cha's
    _gym("balboasgym", "Balboa's Gym", None, None, 7.5, 7.5, 25, 50000000, 236120, _def_dex_lead),
    _gym("frontlinefitness", "Frontline Fitness", 7.5, 7.5, None, None, 25, 50000000, 236120, _str_spd_lead),
    # Specialty, available with George's
    _gym("gym3000", "Gym 3000", 8, None, None, None, 50, 100000000, 551255, _single_stat_lead("strength")),
    _gym("mrisoyamas", "Mr. Isoyama's", None, None, 8, None, 50, 100000000, 551255, _single_stat_lead("defense")),
    _gym("totalrebound", "Total Rebound", None, 8, None, None, 50, 100000000, 551255, _single_stat_lead("speed")),
    _gym("elites", "Elites", None, None, None, 8, 50, 100000000, 551255, _single_stat_lead("dexterity")),
)


def gym_at(index: int, catalog: tuple[Gym, ...] = GYMS) -> Gym:
    """Look up a gym by ordinal. Callers clamp the index to the catalog."""
    return catalog[index]


def total_gyms(catalog: tuple[Gym, ...] = GYMS) -> int:
    return len(catalog)


def main_line_indices(catalog: tuple[Gym, ...] = GYMS) -> list[int]:
    """Indices of the gyms that form the unlock ladder (specialty gyms excluded)."""
    return [i for i, g in enumerate(catalog) if not g.is_specialty]


def _normalize(name: str) -> str:
    return "".join(ch for ch in name.lower() if ch.isalnum())


def find_gym(name: str, catalog: tuple[Gym, ...] = GYMS) -> int:
    """Return the index of a gym by key or display name. Raises ValueError if unknown."""
    key = _normalize(name)
    for i, g in enumerate(catalog):
        if key in (_normalize(g.name), _normalize(g.display_name)):
            return i
    raise ValueError(f"Unknown gym: {name!r}")
