"""Directory matcher.

Finds directories whose name is one of a set of target names beneath a
root directory. A matched directory is reported as a whole and never
descended into, so nested matches inside it are not reported separately.
"""

import logging
import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from dirclean.filesystem.models import ScanResult

logger = logging.getLogger(__name__)


def normalize_names(names: Iterable[str]) -> frozenset[str]:
    """Return the case-folded set of non-blank target names."""
    return frozenset(name.strip().casefold() for name in names if name.strip())


class DirectoryMatcher:
    """Finds directories by name beneath a root.

    Name comparison is case-insensitive. Directories that cannot be
    enumerated (permission denied, vanished, I/O error) are treated as
    empty. Symbolic links are neither matched nor followed, so the scan
    never leaves the root subtree.

    Args:
        workers: Number of threads used to scan the root's immediate
            subtrees in parallel. 1 scans sequentially.
    """

    def __init__(self, *, workers: int = 1) -> None:
        if workers < 1:
            msg = f"workers must be at least 1, got {workers}"
            raise ValueError(msg)
        self._workers = workers

    def find(
        self,
        names: Iterable[str],
        root: str | Path,
        cancel: threading.Event | None = None,
    ) -> ScanResult:
        """Find all directories named like one of ``names`` beneath ``root``.

        Args:
            names: Target directory names (not paths).
            root: Directory to start the search from. Not itself a candidate.
            cancel: Optional event; once set, enumeration stops and the
                matches found so far are returned.

        Returns:
            ScanResult with the sorted, deduplicated matched paths.
        """
        targets = normalize_names(names)
        root_path = Path(root)

        if not targets:
            logger.debug("No target names given, nothing to scan under %s", root_path)
            return ScanResult(root=str(root_path), matches=())

        found: set[str] = set()
        if self._workers == 1:
            self._scan(root_path, targets, found, cancel)
        else:
            self._scan_parallel(root_path, targets, found, cancel)

        cancelled = cancel is not None and cancel.is_set()
        if cancelled:
            logger.info("Scan of %s cancelled after %d match(es)", root_path, len(found))
        else:
            logger.debug("Scan of %s found %d match(es)", root_path, len(found))

        return ScanResult(root=str(root_path), matches=tuple(sorted(found)), cancelled=cancelled)

    def _scan(
        self,
        directory: Path,
        targets: frozenset[str],
        found: set[str],
        cancel: threading.Event | None,
    ) -> None:
        """Scan beneath ``directory``, adding matches to ``found``.

        Uses an explicit stack so tree depth is not bounded by the
        interpreter recursion limit.
        """
        pending = [directory]
        while pending:
            if cancel is not None and cancel.is_set():
                return

            current = pending.pop()
            for child in self._subdirectories(current):
                if child.name.casefold() in targets:
                    found.add(str(child))
                else:
                    pending.append(child)

    def _scan_parallel(
        self,
        root: Path,
        targets: frozenset[str],
        found: set[str],
        cancel: threading.Event | None,
    ) -> None:
        """Scan each immediate subtree of ``root`` in its own task.

        Each task fills a private set; the sets are merged afterwards, so
        no shared state is mutated concurrently.
        """
        pending: list[Path] = []
        for child in self._subdirectories(root):
            if child.name.casefold() in targets:
                found.add(str(child))
            else:
                pending.append(child)

        def scan_subtree(subtree: Path) -> set[str]:
            local: set[str] = set()
            self._scan(subtree, targets, local, cancel)
            return local

        with ThreadPoolExecutor(max_workers=self._workers) as executor:
            for partial in executor.map(scan_subtree, pending):
                found.update(partial)

    @staticmethod
    def _subdirectories(directory: Path) -> list[Path]:
        """List immediate, non-symlink subdirectories of ``directory``.

        Any enumeration failure yields an empty list.
        """
        try:
            entries = list(directory.iterdir())
        except OSError as e:
            logger.debug("Cannot enumerate %s: %s", directory, e)
            return []

        subdirectories: list[Path] = []
        for entry in entries:
            try:
                if entry.is_dir() and not entry.is_symlink():
                    subdirectories.append(entry)
            except OSError as e:
                logger.debug("Cannot determine type of %s: %s", entry, e)
        return subdirectories
