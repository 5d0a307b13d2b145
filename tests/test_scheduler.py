"""Tests for the milestone scheduler."""

import pytest

from generator import phase_groups, schedule, weeks_per_phase
from intake import SAMPLE_A, SAMPLE_B


def _assert_contiguous(milestones, timeline_weeks):
    assert milestones[0].start_week == 1
    for prev, cur in zip(milestones, milestones[1:]):
        assert cur.start_week == prev.end_week + 1
        assert cur.dependencies == [prev.id]
    for m in milestones:
        assert 1 <= m.start_week <= m.end_week <= timeline_weeks


class TestSchedule:
    """Test schedule() allocation."""

    def test_sample_a_fills_twelve_weeks(self):
        """Twelve weeks split into six two-week phases."""
        milestones = schedule(SAMPLE_A.scope.modules, 12)
        assert len(milestones) == 6
        assert [(m.start_week, m.end_week) for m in milestones] == [
            (1, 2), (3, 4), (5, 6), (7, 8), (9, 10), (11, 12),
        ]
        assert milestones[-1].end_week == 12
        _assert_contiguous(milestones, 12)

    def test_phase_titles_in_order(self):
        """Phases keep their fixed titles and ids."""
        milestones = schedule(SAMPLE_A.scope.modules, 12)
        assert [m.title for m in milestones] == [
            "Discovery & Planning",
            "Design & Architecture",
            "Development Phase 1",
            "Development Phase 2",
            "Testing & QA",
            "Launch & Handoff",
        ]
        assert [m.id for m in milestones] == ["m1", "m2", "m3", "m4", "m5", "m6"]
        assert milestones[0].dependencies == []

    def test_short_timeline_leaves_trailing_weeks(self):
        """Eight weeks over seven modules gives one-week phases after the first."""
        milestones = schedule(SAMPLE_B.scope.modules, 8)
        assert len(milestones) == 6
        assert milestones[0].end_week == 2
        assert milestones[-1].end_week == 7
        _assert_contiguous(milestones, 8)

    def test_phases_past_the_timeline_are_dropped(self):
        """Phases beyond the last week are dropped."""
        milestones = schedule(["Only module"], 3)
        assert [(m.start_week, m.end_week) for m in milestones] == [(1, 2), (3, 3)]

    def test_one_week_engagement_clips_first_phase(self):
        """A one-week engagement clips the first phase."""
        milestones = schedule(["A", "B"], 1)
        assert len(milestones) == 1
        assert (milestones[0].start_week, milestones[0].end_week) == (1, 1)

    def test_no_modules_still_schedules(self):
        """Zero modules does not divide by zero."""
        milestones = schedule([], 12)
        assert [(m.start_week, m.end_week) for m in milestones] == [(1, 2), (3, 12)]

    def test_long_timeline_with_few_modules(self):
        """The last phase ends on the last week."""
        milestones = schedule(["A", "B"], 20)
        _assert_contiguous(milestones, 20)
        assert milestones[-1].end_week == 20

    def test_non_positive_timeline_rejected(self):
        """Zero weeks is rejected."""
        with pytest.raises(ValueError):
            schedule(["A"], 0)

    @pytest.mark.parametrize("weeks", [1, 2, 5, 7, 12, 26])
    @pytest.mark.parametrize("module_count", [0, 1, 3, 6, 10])
    def test_invariants_hold(self, weeks, module_count):
        """Contiguity and bounds hold across sizes."""
        modules = [f"Module {i}" for i in range(module_count)]
        milestones = schedule(modules, weeks)
        assert 1 <= len(milestones) <= 6
        _assert_contiguous(milestones, weeks)


class TestHelpers:
    """Test phase grouping and duration helpers."""

    def test_weeks_per_phase_caps_divisor_at_six(self):
        """The divisor is capped at six."""
        assert weeks_per_phase(10, 12) == 2
        assert weeks_per_phase(3, 12) == 4

    def test_weeks_per_phase_never_zero(self):
        """Phase length is at least one week."""
        assert weeks_per_phase(7, 4) == 1
        assert weeks_per_phase(0, 5) == 5

    def test_phase_groups_slice_modules(self):
        """Modules are sliced into phase groups."""
        groups = phase_groups(["a", "b", "c", "d", "e", "f", "g", "h"])
        assert groups[0] == ("Discovery & Planning", ["a"])
        assert groups[1] == ("Design & Architecture", ["b", "c"])
        assert groups[3] == ("Development Phase 2", ["f", "g"])
        assert groups[4][1] == ["Quality Assurance", "User Acceptance Testing"]
