"""Recursive discovery of node_modules directories.

The walk is sequential and prunes at every match: a matched directory is
reported but never entered, so nested node_modules inside it are not
reported separately.
"""

import logging
import os
import time
from pathlib import Path
from typing import Generator, Iterable

from nodesweep.models import ScanReport, SkippedEntry

logger = logging.getLogger(__name__)

TARGET_NAME = "node_modules"


def normalize_path(path: str | os.PathLike) -> str:
    """Absolute, normalized form of a path used for exclusion matching."""
    return os.path.normpath(os.path.abspath(os.fspath(path)))


def should_descend(depth: int, max_depth: int | None, inside_match: bool) -> bool:
    """
    Decide whether the walk enters a directory at the given depth.

    Args:
        depth: Depth of the directory below the root (root is 0)
        max_depth: Deepest level whose directories may be visited, None for no limit
        inside_match: Whether the directory is, or is inside, a matched directory

    Returns:
        True if the directory's children should be visited
    """
    if inside_match:
        return False
    if max_depth is not None and depth >= max_depth:
        return False
    return True


def find_node_modules(
    root: Path,
    max_depth: int | None = None,
    exclude: Iterable[str | os.PathLike] = (),
    skipped: list[SkippedEntry] | None = None,
    excluded_hits: list[Path] | None = None,
    target: str = TARGET_NAME,
) -> Generator[Path, None, None]:
    """
    Find directories named ``target`` under root.

    Uses os.scandir, visits entries in name order and never follows symlinks.

    Args:
        root: Directory to start searching from
        max_depth: Maximum depth to visit (None for unlimited)
        exclude: Paths that are neither reported nor descended into
        skipped: Optional list collecting entries that could not be read
        excluded_hits: Optional list collecting excluded paths that were encountered
        target: Directory name to match

    Yields:
        Paths to matching directories
    """
    excluded = {normalize_path(p) for p in exclude}
    root = Path(root)

    def _skip(path: str, error: OSError) -> None:
        logger.debug("Skipping unreadable entry %s: %s", path, error)
        if skipped is not None:
            skipped.append(SkippedEntry(path=Path(path), reason=str(error)))

    def _is_excluded(path: Path) -> bool:
        if not excluded or normalize_path(path) not in excluded:
            return False
        logger.info("Excluding: %s", path)
        if excluded_hits is not None:
            excluded_hits.append(path)
        return True

    if _is_excluded(root):
        return

    if os.path.basename(normalize_path(root)) == target:
        yield root
        return

    # Children are pushed in reverse so they pop in name order.
    stack: list[tuple[Path, int, bool]] = [(root, 0, False)]
    while stack:
        directory, depth, inside_match = stack.pop()

        if depth > 0:
            if _is_excluded(directory):
                continue
            if directory.name == target:
                yield directory
                inside_match = True

        if not should_descend(depth, max_depth, inside_match):
            continue

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda e: e.name)
        except OSError as e:
            _skip(str(directory), e)
            continue

        children = []
        for entry in entries:
            try:
                if not entry.is_dir(follow_symlinks=False):
                    continue
            except OSError as e:
                _skip(entry.path, e)
                continue
            children.append((Path(entry.path), depth + 1, inside_match))

        stack.extend(reversed(children))


def scan_node_modules(
    root: Path,
    max_depth: int | None = None,
    exclude: Iterable[str | os.PathLike] = (),
    target: str = TARGET_NAME,
) -> ScanReport:
    """
    Walk a tree and collect every node_modules directory with diagnostics.

    Args:
        root: Directory to start searching from
        max_depth: Maximum depth to visit (None for unlimited)
        exclude: Paths to leave out of the result
        target: Directory name to match

    Returns:
        ScanReport with discovered, excluded and skipped paths
    """
    skipped: list[SkippedEntry] = []
    excluded_hits: list[Path] = []

    start = time.perf_counter()
    directories = list(
        find_node_modules(
            root,
            max_depth=max_depth,
            exclude=exclude,
            skipped=skipped,
            excluded_hits=excluded_hits,
            target=target,
        )
    )
    elapsed = time.perf_counter() - start

    if skipped:
        logger.info("Skipped %d unreadable entries under %s", len(skipped), root)

    return ScanReport(
        root=Path(root),
        directories=tuple(directories),
        excluded=tuple(excluded_hits),
        skipped=tuple(skipped),
        elapsed_seconds=elapsed,
    )
