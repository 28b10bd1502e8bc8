"""Validation errors returned (not raised) by the simulator."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SimulationError:
    message: str
    start_day: int | None = None
    end_day: int | None = None

    def __str__(self) -> str:
        if self.start_day is None:
            return self.message
        return f"{self.message} (days {self.start_day}-{self.end_day})"


class ConfigurationError(SimulationError):
    """Malformed or out-of-range parameters."""


class SectionCoverageError(SimulationError):
    """Sections do not tile [1, total_days]. Carries the offending day range."""
