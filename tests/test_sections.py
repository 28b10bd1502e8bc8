"""Tests for section coverage and lookup."""

from gym_progression_sim import (
    SectionCoverageError,
    TrainingSection,
    config_for_day,
    segments_to_sections,
    validate_sections,
)


def _section(start, end, **kwargs):
    return TrainingSection(start_day=start, end_day=end, **kwargs)


class TestValidateSections:
    """Section coverage errors with their day ranges."""

    def test_exact_tiling(self):
        assert validate_sections([_section(1, 180), _section(181, 360)], 360) == []

    def test_order_does_not_matter(self):
        assert validate_sections([_section(181, 360), _section(1, 180)], 360) == []

    def test_gap_reported_with_days(self):
        errors = validate_sections([_section(1, 49), _section(51, 360)], 360)
        assert len(errors) == 1
        assert isinstance(errors[0], SectionCoverageError)
        assert (errors[0].start_day, errors[0].end_day) == (50, 50)

    def test_empty(self):
        errors = validate_sections([], 360)
        assert "No sections" in errors[0].message

    def test_late_start(self):
        errors = validate_sections([_section(5, 360)], 360)
        assert (errors[0].start_day, errors[0].end_day) == (1, 4)

    def test_overlap(self):
        errors = validate_sections([_section(1, 200), _section(150, 360)], 360)
        assert errors[0].message == "Sections overlap"
        assert (errors[0].start_day, errors[0].end_day) == (150, 200)

    def test_short(self):
        errors = validate_sections([_section(1, 300)], 360)
        assert (errors[0].start_day, errors[0].end_day) == (301, 360)

    def test_past_end(self):
        errors = validate_sections([_section(1, 400)], 360)
        assert "past the last simulated day" in errors[0].message

    def test_inverted(self):
        errors = validate_sections([_section(10, 5)], 360)
        assert "ends before it starts" in errors[0].message

    def test_error_text_includes_days(self):
        errors = validate_sections([_section(1, 49), _section(51, 360)], 360)
        assert str(errors[0]) == "Gap between sections (days 50-50)"


class TestConfigForDay:
    """Section lookup by absolute day."""

    def setup_method(self):
        self.sections = [_section(1, 30, name="a"), _section(31, 60, name="b"), _section(61, 90, name="c")]

    def test_first_day(self):
        assert config_for_day(self.sections, 1).name == "a"

    def test_boundaries(self):
        assert config_for_day(self.sections, 30).name == "a"
        assert config_for_day(self.sections, 31).name == "b"
        assert config_for_day(self.sections, 90).name == "c"


class TestSegmentsToSections:
    """Segments become contiguous sections."""

    def test_base_covers_start(self):
        sections = segments_to_sections(TrainingSection(), [(181, {"happy": 7000})], 360)
        assert [(s.start_day, s.end_day) for s in sections] == [(1, 180), (181, 360)]
        assert sections[0].happy == 5025
        assert sections[1].happy == 7000

    def test_no_segments(self):
        sections = segments_to_sections(TrainingSection(), [], 90)
        assert [(s.start_day, s.end_day) for s in sections] == [(1, 90)]

    def test_segment_on_day_one_replaces_base(self):
        sections = segments_to_sections(TrainingSection(), [(1, {"name": "x"}), (31, {})], 60)
        assert [s.name for s in sections] == ["x", ""]
        assert validate_sections(sections, 60) == []
