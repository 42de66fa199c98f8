"""Unit tests for DirectoryRemover."""

import shutil
import threading
from pathlib import Path
from unittest.mock import patch

import pytest
from dirclean.core.errors import RemovalError
from dirclean.filesystem.models import FailureSeverity, RemovalReport
from dirclean.filesystem.remover import DirectoryRemover, directory_size


@pytest.fixture
def cache_tree(tmp_path: Path) -> Path:
    """Create a root with three projects carrying a Cache directory."""
    root = tmp_path / "root"
    for project in ("a", "b", "c"):
        (root / project / "Cache" / "blobs").mkdir(parents=True)
        (root / project / "Cache" / "blobs" / "data").write_bytes(b"x" * 10)
        (root / project / "src").mkdir()
    return root


def _cache(root: Path, project: str) -> str:
    return str(root / project / "Cache")


class TestRemoveMatching:
    """Tests for DirectoryRemover.remove_matching."""

    def test_removes_all_matches(self, cache_tree: Path) -> None:
        """Every match is deleted and nothing else."""
        report = DirectoryRemover().remove_matching(["cache"], cache_tree)

        assert report
        assert report.removed == tuple(_cache(cache_tree, p) for p in ("a", "b", "c"))
        assert report.completed == 3
        assert not report.partial
        for project in ("a", "b", "c"):
            assert not (cache_tree / project / "Cache").exists()
            assert (cache_tree / project / "src").is_dir()

    def test_nothing_matched_is_falsy(self, cache_tree: Path) -> None:
        """A report with no matches is falsy."""
        report = DirectoryRemover().remove_matching(["node_modules"], cache_tree)

        assert not report
        assert report.matched == ()

    def test_dry_run_deletes_nothing(self, cache_tree: Path) -> None:
        """A dry-run reports matches as removed without touching them."""
        report = DirectoryRemover(dry_run=True).remove_matching(["Cache"], cache_tree)

        assert report.dry_run
        assert len(report.removed) == 3
        assert (cache_tree / "a" / "Cache").is_dir()

    def test_permission_failure_is_warning(self, cache_tree: Path) -> None:
        """A permission failure is reported and the other matches are deleted."""
        locked = _cache(cache_tree, "b")
        real_rmtree = shutil.rmtree

        def fake_rmtree(path: str) -> None:
            if path == locked:
                raise PermissionError("denied")
            real_rmtree(path)

        with patch("dirclean.filesystem.remover.shutil.rmtree", side_effect=fake_rmtree):
            report = DirectoryRemover().remove_matching(["cache"], cache_tree)

        assert report.partial
        assert [f.path for f in report.warnings] == [locked]
        assert report.fatal == ()
        assert report.removed == (_cache(cache_tree, "a"), _cache(cache_tree, "c"))
        assert Path(locked).exists()

    def test_vanished_directory_is_missing(self, cache_tree: Path) -> None:
        """A directory gone before deletion is recorded as missing, not failed."""
        gone = _cache(cache_tree, "a")
        real_rmtree = shutil.rmtree

        def fake_rmtree(path: str) -> None:
            if path == gone:
                raise FileNotFoundError(path)
            real_rmtree(path)

        with patch("dirclean.filesystem.remover.shutil.rmtree", side_effect=fake_rmtree):
            report = DirectoryRemover().remove_matching(["cache"], cache_tree)

        assert report.missing == (gone,)
        assert report.failures == ()
        assert len(report.removed) == 2

    def test_unexpected_failure_raises_after_all_attempts(self, cache_tree: Path) -> None:
        """An unexpected failure is raised only after every match was attempted."""
        broken = _cache(cache_tree, "a")
        real_rmtree = shutil.rmtree

        def fake_rmtree(path: str) -> None:
            if path == broken:
                raise RuntimeError("boom")
            real_rmtree(path)

        with (
            patch("dirclean.filesystem.remover.shutil.rmtree", side_effect=fake_rmtree),
            pytest.raises(RemovalError) as exc_info,
        ):
            DirectoryRemover().remove_matching(["cache"], cache_tree)

        report = exc_info.value.report
        assert isinstance(report, RemovalReport)
        assert [f.path for f in report.fatal] == [broken]
        assert report.fatal[0].severity == FailureSeverity.FATAL
        assert report.removed == (_cache(cache_tree, "b"), _cache(cache_tree, "c"))
        assert isinstance(exc_info.value.cause, RuntimeError)

    def test_cancel_stops_further_deletions(self, cache_tree: Path) -> None:
        """Setting the event stops deletions; completed ones are counted."""
        cancel = threading.Event()
        real_rmtree = shutil.rmtree

        def cancelling_rmtree(path: str) -> None:
            real_rmtree(path)
            cancel.set()

        with patch("dirclean.filesystem.remover.shutil.rmtree", side_effect=cancelling_rmtree):
            report = DirectoryRemover().remove_matching(["cache"], cache_tree, cancel)

        assert report.cancelled
        assert report.completed == 1
        assert (cache_tree / "b" / "Cache").exists()
        assert (cache_tree / "c" / "Cache").exists()


class TestRemovePaths:
    """Tests for DirectoryRemover.remove_paths."""

    def test_outside_root_refused(self, cache_tree: Path, tmp_path: Path) -> None:
        """A path outside the root is never deleted."""
        outside = tmp_path / "elsewhere" / "Cache"
        outside.mkdir(parents=True)

        with pytest.raises(RemovalError) as exc_info:
            DirectoryRemover().remove_paths(
                [str(outside), _cache(cache_tree, "a")], cache_tree
            )

        assert outside.is_dir()
        assert not (cache_tree / "a" / "Cache").exists()
        assert exc_info.value.target == str(outside)

    def test_root_itself_refused(self, cache_tree: Path) -> None:
        """The root itself is not strictly inside the root."""
        with pytest.raises(RemovalError):
            DirectoryRemover().remove_paths([str(cache_tree)], cache_tree)

        assert cache_tree.is_dir()

    def test_removes_given_paths_only(self, cache_tree: Path) -> None:
        """Only the given matches are deleted."""
        report = DirectoryRemover().remove_paths([_cache(cache_tree, "c")], cache_tree)

        assert report.removed == (_cache(cache_tree, "c"),)
        assert (cache_tree / "a" / "Cache").exists()


class TestDirectorySize:
    """Tests for directory_size."""

    def test_sums_file_sizes(self, cache_tree: Path) -> None:
        """The size is the sum of all files beneath the directory."""
        assert directory_size(cache_tree / "a" / "Cache") == 10

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A missing directory has no size."""
        assert directory_size(tmp_path / "missing") is None
