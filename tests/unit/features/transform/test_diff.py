"""Tests for index-aligned line diffs."""

from codeshift_mcp.features.transform.diff import compute_line_diff, split_lines, summarize_diff
from codeshift_mcp.models.transformation import LineClassification


class TestComputeLineDiff:
    """Tests for compute_line_diff."""

    def test_identical_texts(self):
        """Test identical texts are all unchanged."""
        entries = compute_line_diff("a\nb", "a\nb")
        assert [e.classification for e in entries] == [LineClassification.UNCHANGED] * 2

    def test_changed_line(self):
        """Test a differing line at the same index."""
        entries = compute_line_diff("a\nb", "a\nc")
        assert entries[1].classification == LineClassification.CHANGED
        assert entries[1].before_line == "b"
        assert entries[1].after_line == "c"
        assert entries[1].line_number == 2

    def test_added_lines(self):
        """Test lines past the end of the original are added."""
        entries = compute_line_diff("a", "a\nb\nc")
        assert [e.classification for e in entries] == [
            LineClassification.UNCHANGED, LineClassification.ADDED, LineClassification.ADDED,
        ]
        assert entries[2].before_line is None

    def test_removed_lines(self):
        """Test lines past the end of the result are removed."""
        entries = compute_line_diff("a\nb", "a")
        assert entries[1].classification == LineClassification.REMOVED
        assert entries[1].after_line is None

    def test_insertion_shifts_everything(self):
        """Test this is not an LCS diff: an insertion changes later lines."""
        entries = compute_line_diff("a\nb", "x\na\nb")
        assert [e.classification for e in entries] == [
            LineClassification.CHANGED, LineClassification.CHANGED, LineClassification.ADDED,
        ]

    def test_mixed_line_endings(self):
        """Test any line ending splits lines."""
        assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]
        entries = compute_line_diff("a\r\nb", "a\nb")
        assert all(e.classification == LineClassification.UNCHANGED for e in entries)

    def test_empty_texts(self):
        """Test two empty texts compare as one unchanged empty line."""
        entries = compute_line_diff("", "")
        assert len(entries) == 1
        assert entries[0].classification == LineClassification.UNCHANGED


class TestSummarizeDiff:
    """Tests for summarize_diff."""

    def test_counts(self):
        """Test counts per classification."""
        summary = summarize_diff(compute_line_diff("a\nb\nc", "a\nx"))
        assert summary == {"unchanged": 1, "changed": 1, "added": 0, "removed": 1}
