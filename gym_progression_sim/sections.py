"""Sectioned timeline: validate day coverage and look up the section for a day."""

import bisect
import dataclasses

from gym_progression_sim.errors import SectionCoverageError
from gym_progression_sim.params import TrainingSection


def validate_sections(sections: list[TrainingSection], total_days: int) -> list[SectionCoverageError]:
    """Check that sections tile [1, total_days] exactly. Returns list of errors."""
    if not sections:
        return [SectionCoverageError("No sections cover the simulation", 1, total_days)]
    errors = []
    ordered = sorted(sections, key=lambda s: s.start_day)
    for s in ordered:
        if s.start_day > s.end_day:
            errors.append(SectionCoverageError(
                f"Section {s.name or s.start_day} ends before it starts", s.start_day, s.end_day,
            ))
    if errors:
        return errors

    first = ordered[0]
    if first.start_day > 1:
        errors.append(SectionCoverageError("Gap before the first section", 1, first.start_day - 1))
    elif first.start_day < 1:
        errors.append(SectionCoverageError("Section starts before day 1", first.start_day, 0))
    for prev, cur in zip(ordered, ordered[1:]):
        if cur.start_day <= prev.end_day:
            errors.append(SectionCoverageError(
                "Sections overlap", cur.start_day, min(prev.end_day, cur.end_day),
            ))
        elif cur.start_day > prev.end_day + 1:
            errors.append(SectionCoverageError(
                "Gap between sections", prev.end_day + 1, cur.start_day - 1,
            ))
    last_end = max(s.end_day for s in ordered)
    if last_end < total_days:
        errors.append(SectionCoverageError("Gap after the last section", last_end + 1, total_days))
    elif last_end > total_days:
        errors.append(SectionCoverageError(
            "Section runs past the last simulated day", total_days + 1, last_end,
        ))
    return errors


def config_for_day(sections: list[TrainingSection], day: int) -> TrainingSection:
    """Section covering `day`. Sections must be sorted by start day and validated."""
    starts = [s.start_day for s in sections]
    i = bisect.bisect_right(starts, day) - 1
    return sections[max(i, 0)]


def segments_to_sections(
    base: TrainingSection,
    segments: list[tuple[int, dict]],
    total_days: int,
) -> list[TrainingSection]:
    """Build contiguous sections from (start_day, overrides) segments.

    Each segment runs until the next one starts; the last one until
    `total_days`. Overrides are TrainingSection fields applied to `base`.
    A base section always covers day 1 unless a segment starts there.
    """
    ordered = sorted(segments, key=lambda seg: seg[0])
    if not ordered or ordered[0][0] > 1:
        ordered.insert(0, (1, {}))
    sections = []
    for i, (start, overrides) in enumerate(ordered):
        end = ordered[i + 1][0] - 1 if i + 1 < len(ordered) else total_days
        sections.append(dataclasses.replace(base, start_day=start, end_day=end, **overrides))
    return sections
