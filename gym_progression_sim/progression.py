"""Gym progression: auto-upgrade along the main line, or hold a locked gym."""

from dataclasses import dataclass

from gym_progression_sim.gyms import GYMS, Gym, main_line_indices
from gym_progression_sim.params import PlayerStats


@dataclass
class GymProgress:
    """Current main-line gym and cumulative gym energy.

    `energy_spent` starts at the starting gym's threshold and carries across
    sections. The index only moves forward, and never in locked mode.
    """

    index: int
    energy_spent: float
    locked: bool = False

    @classmethod
    def start(cls, index: int, locked: bool = False,
              catalog: tuple[Gym, ...] = GYMS) -> "GymProgress":
        return cls(index=index, energy_spent=catalog[index].energy_to_unlock, locked=locked)

    def current(self, catalog: tuple[Gym, ...] = GYMS) -> Gym:
        return catalog[self.index]

    def record(self, energy: float) -> None:
        self.energy_spent += max(energy, 0.0)

    def advance(self, catalog: tuple[Gym, ...] = GYMS,
                unlock_speed_multiplier: float = 1.0) -> bool:
        """Move to every next main-line gym whose threshold is met. Returns True if moved."""
        if self.locked:
            return False
        moved = False
        for i in main_line_indices(catalog):
            if i <= self.index:
                continue
            if self.energy_spent < catalog[i].energy_threshold(unlock_speed_multiplier):
                break
            self.index = i
            moved = True
        return moved

    def gym_for(self, stat: str, stats: PlayerStats,
                catalog: tuple[Gym, ...] = GYMS,
                unlock_speed_multiplier: float = 1.0) -> Gym | None:
        """Gym used to train `stat` today, or None if no reachable gym offers it.

        Auto mode picks the highest-dot gym among main-line gyms up to the
        current one and specialty gyms unlocked alongside it whose stat
        requirement holds. Locked mode always uses the held gym.
        """
        held = catalog[self.index]
        if self.locked:
            return held if held.offers(stat) else None
        best = None
        for i, gym in enumerate(catalog):
            if not gym.offers(stat):
                continue
            if gym.is_specialty:
                if gym.energy_to_unlock > held.energy_to_unlock:
                    continue
                if not gym.is_unlocked(self.energy_spent, stats, unlock_speed_multiplier):
                    continue
            elif i > self.index:
                continue
            if best is None or gym.dots.get(stat) > best.dots.get(stat):
                best = gym
        return best
