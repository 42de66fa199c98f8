"""Tests for filesystem domain models."""

from dirclean.filesystem.models import (
    FailureSeverity,
    RemovalFailure,
    RemovalReport,
    ScanResult,
)


class TestScanResult:
    """Tests for ScanResult."""

    def test_len_and_iter(self) -> None:
        """ScanResult behaves like a sequence of matches."""
        result = ScanResult(root="/r", matches=("/r/a", "/r/b"))

        assert len(result) == 2
        assert list(result) == ["/r/a", "/r/b"]
        assert not result.cancelled


class TestFailureSeverity:
    """Tests for FailureSeverity enum."""

    def test_values(self) -> None:
        """FailureSeverity values are usable as strings."""
        assert FailureSeverity.WARNING == "warning"
        assert FailureSeverity.FATAL == "fatal"
        assert len(FailureSeverity) == 2


class TestRemovalReport:
    """Tests for RemovalReport."""

    def test_empty_report_is_falsy(self) -> None:
        """A report without matches is falsy."""
        report = RemovalReport(root="/r")

        assert not report
        assert not report.performed
        assert report.completed == 0

    def test_report_with_matches_is_truthy(self) -> None:
        """A report with matches is truthy even if nothing was deleted."""
        report = RemovalReport(
            root="/r",
            matched=("/r/a",),
            failures=(RemovalFailure(path="/r/a", error="denied"),),
        )

        assert report
        assert report.partial
        assert report.completed == 0

    def test_failures_split_by_severity(self) -> None:
        """warnings and fatal partition the failures."""
        warning = RemovalFailure(path="/r/a", error="denied")
        fatal = RemovalFailure(path="/r/b", error="boom", severity=FailureSeverity.FATAL)
        report = RemovalReport(
            root="/r",
            matched=("/r/a", "/r/b", "/r/c"),
            removed=("/r/c",),
            failures=(warning, fatal),
        )

        assert report.warnings == (warning,)
        assert report.fatal == (fatal,)
        assert report.completed == 1
