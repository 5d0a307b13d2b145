"""Tests for the one-line look-ahead diff."""

from workspace import format_diff, simple_diff


class TestSimpleDiff:
    """Test simple_diff()."""

    def test_identical(self):
        """Identical texts have no changes."""
        diff = simple_diff("a\nb", "a\nb")
        assert diff.unchanged == ["a", "b"]
        assert not diff.has_changes

    def test_insertion_detected_by_lookahead(self):
        """An inserted line is seen via look-ahead."""
        diff = simple_diff("a\nc", "a\nb\nc")
        assert diff.added == ["b"]
        assert diff.removed == []
        assert diff.unchanged == ["a", "c"]

    def test_deletion_detected_by_lookahead(self):
        """A deleted line is seen via look-ahead."""
        diff = simple_diff("a\nb\nc", "a\nc")
        assert diff.removed == ["b"]
        assert diff.added == []

    def test_replacement(self):
        """A changed line is both removed and added."""
        diff = simple_diff("x", "y")
        assert diff.removed == ["x"]
        assert diff.added == ["y"]

    def test_trailing_lines(self):
        """Extra lines at either end are reported."""
        assert simple_diff("a", "a\nb\nc").added == ["b", "c"]
        assert simple_diff("a\nb\nc", "a").removed == ["b", "c"]


class TestFormatDiff:
    """Test format_diff() grouping."""

    def test_grouped_output(self):
        """Removed, added and unchanged lines are grouped."""
        diff = simple_diff("keep\nold", "keep\nnew")
        assert format_diff(diff) == "- old\n+ new\n  keep"
