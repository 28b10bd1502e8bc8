"""Stat gain per unit of energy: gym dots, happiness, perks and company bonus."""

import math
from dataclasses import dataclass

from gym_progression_sim.gyms import Gym
from gym_progression_sim.params import (
    HAPPY_CAP,
    CompanyBenefit,
    PerkPercentages,
)

# Stat gain per energy per gym dot at a given happiness.
# Fitted to the happiness terms of the community gain spreadsheet
# (8·h^1.05 plus the happy-scaled stat lookups, averaged over the four stats).
# Piecewise linear interpolation; flat beyond the happy cap.
_HAPPINESS_GAIN_CURVE: tuple[tuple[float, float], ...] = (
    (0, 0.0146),
    (250, 0.0278),
    (1000, 0.0711),
    (2500, 0.1625),
    (5000, 0.3208),
    (10000, 0.6485),
    (25000, 1.6733),
    (50000, 3.4478),
    (99999, 7.1185),
)


class HappinessCurve:
    """Maps happiness to a gain factor. Non-decreasing and saturating."""

    def __call__(self, happiness: float) -> float:
        raise NotImplementedError


@dataclass(frozen=True)
class PiecewiseHappinessCurve(HappinessCurve):
    points: tuple[tuple[float, float], ...] = _HAPPINESS_GAIN_CURVE

    def __post_init__(self):
        if len(self.points) < 2:
            raise ValueError("A happiness curve needs at least two points")
        for (h0, f0), (h1, f1) in zip(self.points, self.points[1:]):
            if h1 <= h0:
                raise ValueError(f"Happiness points must be strictly increasing: {h0} -> {h1}")
            if f1 < f0:
                raise ValueError(f"Gain factor must not decrease: {f0} at {h0} -> {f1} at {h1}")

    def __call__(self, happiness: float) -> float:
        points = self.points
        if happiness <= points[0][0]:
            return points[0][1]
        if happiness >= points[-1][0]:
            return points[-1][1]
        for (h0, f0), (h1, f1) in zip(points, points[1:]):
            if h0 <= happiness <= h1:
                t = (happiness - h0) / (h1 - h0)
                return f0 + t * (f1 - f0)
        return points[-1][1]  # pragma: no cover


@dataclass(frozen=True)
class LogHappinessCurve(HappinessCurve):
    """1 + k·ln(1 + h/250), the in-game happy multiplier shape."""

    k: float = 0.07
    scale: float = 1.0
    cap: float = HAPPY_CAP

    def __call__(self, happiness: float) -> float:
        h = min(max(happiness, 0.0), self.cap)
        return self.scale * (1 + self.k * math.log(1 + h / 250))


DEFAULT_HAPPINESS_CURVE = PiecewiseHappinessCurve()


def gain_for_energy(
    energy: float,
    gym: Gym,
    stat: str,
    happiness: float,
    perks: PerkPercentages,
    company: CompanyBenefit,
    temporary_multiplier: float = 1.0,
    curve: HappinessCurve = DEFAULT_HAPPINESS_CURVE,
) -> float:
    """Stat gain for `energy` spent training `stat` at `gym`."""
    if energy <= 0:
        return 0.0
    return (
        energy
        * gym.dots.get(stat)
        * curve(happiness)
        * perks.multiplier(stat)
        * company.gym_gain_multiplier
        * temporary_multiplier
    )
