"""Directory remover.

Deletes matched directories beneath a root with dry-run support and
per-directory failure isolation. A directory that fails to delete never
prevents the remaining matches from being attempted.
"""

import logging
import shutil
import threading
from collections.abc import Iterable
from pathlib import Path

from dirclean.core.errors import RemovalError
from dirclean.filesystem.matcher import DirectoryMatcher
from dirclean.filesystem.models import FailureSeverity, RemovalFailure, RemovalReport

logger = logging.getLogger(__name__)


class DirectoryRemover:
    """Removes every directory matching a set of names beneath a root.

    Failure handling per matched directory:
    - Already gone: recorded as missing, not an error.
    - Permission or I/O failure: recorded as a warning, processing continues.
    - Anything else: recorded as fatal; a RemovalError carrying the full
      report is raised once every match has been attempted.

    Attributes:
        _matcher: Matcher used to locate directories.
        _dry_run: If True, report what would be deleted without deleting.
    """

    def __init__(
        self,
        matcher: DirectoryMatcher | None = None,
        *,
        dry_run: bool = False,
    ) -> None:
        """Initialize the DirectoryRemover.

        Args:
            matcher: Matcher used by remove_matching(). Default: sequential matcher.
            dry_run: If True, report what would be deleted without deleting.
        """
        self._matcher = matcher if matcher is not None else DirectoryMatcher()
        self._dry_run = dry_run

    def remove_matching(
        self,
        names: Iterable[str],
        root: str | Path,
        cancel: threading.Event | None = None,
    ) -> RemovalReport:
        """Find and delete every directory named like one of ``names``.

        Args:
            names: Target directory names (not paths).
            root: Directory to search beneath.
            cancel: Optional event; once set, no further deletions start.

        Returns:
            RemovalReport. Falsy when nothing matched.

        Raises:
            RemovalError: If any deletion failed unexpectedly.
        """
        scan = self._matcher.find(names, root, cancel)
        if not scan.matches:
            logger.info("No matching directories under %s", root)
            return RemovalReport(root=str(root), cancelled=scan.cancelled)

        return self.remove_paths(scan.matches, root, cancel)

    def remove_paths(
        self,
        paths: Iterable[str],
        root: str | Path,
        cancel: threading.Event | None = None,
    ) -> RemovalReport:
        """Delete already-matched directories beneath ``root``.

        Paths that are not strictly inside ``root`` are refused.

        Args:
            paths: Matched directory paths.
            root: Root directory the paths were found under.
            cancel: Optional event; once set, no further deletions start.

        Returns:
            RemovalReport describing every attempted path.

        Raises:
            RemovalError: If any deletion failed unexpectedly.
        """
        matched = tuple(paths)
        root_path = Path(root).absolute()

        removed: list[str] = []
        missing: list[str] = []
        failures: list[RemovalFailure] = []
        causes: list[BaseException] = []
        cancelled = False

        for path in matched:
            if cancel is not None and cancel.is_set():
                cancelled = True
                logger.info("Removal cancelled after %d deletion(s)", len(removed))
                break

            if not _is_inside(Path(path), root_path):
                logger.error("Refusing to delete %s: outside of %s", path, root_path)
                failures.append(
                    RemovalFailure(
                        path=path,
                        error=f"Path is outside of {root_path}",
                        severity=FailureSeverity.FATAL,
                    )
                )
                continue

            if self._dry_run:
                logger.info("Dry-run: would delete %s", path)
                removed.append(path)
                continue

            try:
                shutil.rmtree(path)
            except FileNotFoundError:
                logger.debug("Already removed: %s", path)
                missing.append(path)
            except OSError as e:
                logger.warning("Could not delete %s: %s", path, e)
                failures.append(RemovalFailure(path=path, error=str(e)))
            except Exception as e:
                logger.error("Unexpected failure deleting %s: %s", path, e)
                failures.append(
                    RemovalFailure(path=path, error=str(e), severity=FailureSeverity.FATAL)
                )
                causes.append(e)
            else:
                logger.debug("Deleted %s", path)
                removed.append(path)

        report = RemovalReport(
            root=str(root),
            matched=matched,
            removed=tuple(removed),
            missing=tuple(missing),
            failures=tuple(failures),
            dry_run=self._dry_run,
            cancelled=cancelled,
        )

        if report.fatal:
            first = report.fatal[0]
            raise RemovalError(
                f"Failed to delete {len(report.fatal)} directory(ies)",
                report=report,
                operation="remove",
                target=first.path,
                cause=causes[0] if causes else None,
            )

        return report


def directory_size(path: str | Path) -> int | None:
    """Return the total size in bytes of the files beneath ``path``.

    Symbolic links are not followed. Returns None if the directory
    cannot be read at all.
    """
    target = Path(path)
    try:
        if not target.is_dir():
            return None
        total = 0
        for child in target.rglob("*"):
            try:
                if child.is_file() and not child.is_symlink():
                    total += child.stat().st_size
            except OSError:
                continue
        return total
    except OSError:
        return None


def _is_inside(path: Path, root: Path) -> bool:
    """Check that ``path`` lies strictly beneath ``root``."""
    return root in path.absolute().parents
